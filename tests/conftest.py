import pytest


class FakeTransport:
    """Records every APDU and answers from a queue of replies.

    A queued exception is raised instead of returned.
    """

    def __init__(self, replies=None, default=b"\x90\x00", scramble_key=None):
        self.calls = []
        self.replies = list(replies or [])
        self.default = default
        self.scramble_key = scramble_key

    def set_scramble_key(self, key):
        self.scramble_key = key

    async def send(self, cla, ins, p1, p2, data=b""):
        self.calls.append((cla, ins, p1, p2, bytes(data)))
        reply = self.replies.pop(0) if self.replies else self.default
        if isinstance(reply, BaseException):
            raise reply
        return reply


@pytest.fixture
def fake_transport():
    # the class itself, so tests can queue replies or subclass it
    return FakeTransport


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def signature_reply():
    def build(signature: bytes, trailer: bytes = b"\x90\x00") -> bytes:
        return bytes([64]) + signature + trailer

    return build


@pytest.fixture
def auth_token_reply():
    def build(address: str, signature: bytes, trailer: bytes = b"\x90\x00") -> bytes:
        field = address.encode("ascii").ljust(62, b"\x00")
        return bytes([126]) + field + signature + trailer

    return build
