"""Tests for the blocking adapter and the redacting middleware."""

import logging

import pytest

from elrond_ledger import DerivationIndex, ElrondApp, TransportFailure
from elrond_ledger.transport import BlockingTransport, RedactingTransport, Transport


def test_transports_satisfy_protocol(fake_transport):
    assert isinstance(fake_transport(), Transport)
    assert isinstance(BlockingTransport(lambda *a: b""), Transport)
    assert isinstance(RedactingTransport(fake_transport()), Transport)


@pytest.mark.asyncio
async def test_blocking_transport_calls_exchange():
    calls = []

    def exchange(cla, ins, p1, p2, data):
        calls.append((cla, ins, p1, p2, data))
        return bytearray([5]) + b"hello"

    app = ElrondApp(BlockingTransport(exchange))
    result = await app.get_address(DerivationIndex(0, 1))
    assert result.address == "hello"
    assert calls == [(0xED, 0x03, 0x00, 0x00, bytes.fromhex("0000000000000001"))]


@pytest.mark.asyncio
async def test_blocking_transport_errors_surface_as_transport_failure():
    def exchange(cla, ins, p1, p2, data):
        raise OSError("read timeout")

    app = ElrondApp(BlockingTransport(exchange))
    with pytest.raises(TransportFailure):
        await app.get_app_configuration()


def test_blocking_transport_scramble_key():
    transport = BlockingTransport(lambda *a: b"")
    ElrondApp(transport, scramble_key="eGLD")
    assert transport.scramble_key == "eGLD"


def test_redacting_transport_forwards_scramble_key(fake_transport):
    inner = fake_transport()
    RedactingTransport(inner).set_scramble_key("abc")
    assert inner.scramble_key == "abc"


@pytest.mark.asyncio
async def test_redacting_transport_hides_payload(caplog, fake_transport):
    inner = fake_transport([b"\x90\x00"])
    transport = RedactingTransport(inner)
    secret = b"super-secret-transaction"

    with caplog.at_level(logging.DEBUG, logger="elrond_ledger.transport.redaction"):
        reply = await transport.send(0xED, 0x04, 0x00, 0x00, secret)

    assert reply == b"\x90\x00"
    assert inner.calls == [(0xED, 0x04, 0x00, 0x00, secret)]
    assert secret.hex(" ") not in caplog.text
    assert "super-secret" not in caplog.text
    assert f"{len(secret)} bytes #" in caplog.text


def test_redaction_tag_depends_on_key(fake_transport):
    a = RedactingTransport(fake_transport(), scramble_key="eGLD")
    b = RedactingTransport(fake_transport(), scramble_key="other")
    assert a.describe(b"payload") == a.describe(b"payload")
    assert a.describe(b"payload") != b.describe(b"payload")
    assert a.describe(b"") == "(empty)"


def test_redaction_verbose_elides_long_payloads(fake_transport):
    transport = RedactingTransport(fake_transport(), verbose=True)
    text = transport.describe(bytes(100))
    assert text.startswith("100 bytes: 00 00")
    assert text.endswith(" ...")


@pytest.mark.asyncio
async def test_redacting_transport_reraises(fake_transport):
    transport = RedactingTransport(fake_transport([OSError("gone")]))
    with pytest.raises(OSError):
        await transport.send(0xED, 0x02, 0x00, 0x00)


def test_client_keeps_transport_scramble_key(fake_transport):
    """Without an explicit key the app leaves the transport's key alone."""
    transport = RedactingTransport(fake_transport(), scramble_key="custom")
    ElrondApp(transport)
    assert transport.scramble_key == "custom"


def test_client_explicit_scramble_key_overrides(fake_transport):
    inner = fake_transport()
    transport = RedactingTransport(inner, scramble_key="custom")
    ElrondApp(transport, scramble_key="eGLD")
    assert transport.scramble_key == "eGLD"
    assert inner.scramble_key == "eGLD"
