"""Decoding of device replies into typed results.

Signing replies carry a marker byte giving the length of what follows and
end with two trailer bytes that are not part of the decoded value::

    signature     [64] [signature: 64 B] [trailer: 2 B]                  = 67 B
    auth token    [126] [address: 62 B] [signature: 64 B] [trailer: 2 B] = 129 B

App configuration comes in two shapes, told apart by length::

    legacy (6 B)     [contract data] [account] [address] [major] [minor] [patch]
    extended (14 B)  same 6 bytes, then account(u32be) address(u32be)
"""

from __future__ import annotations

import struct

from ..errors import MalformedResponse, MalformedSignatureResponse
from ..models import AddressResult, AppConfig, AuthTokenResult, SignatureResult
from .commands import COMMAND_TABLE, Operation

SIGNATURE_SIZE = 64
TRAILER_SIZE = 2

SIGNATURE_MARKER = SIGNATURE_SIZE

AUTH_ADDRESS_SIZE = 62
AUTH_TOKEN_MARKER = AUTH_ADDRESS_SIZE + SIGNATURE_SIZE

LEGACY_CONFIG_SIZE = 6
EXTENDED_CONFIG_SIZE = 14


def _ascii(data: bytes, reply: bytes) -> str:
    try:
        return data.decode("ascii")
    except UnicodeDecodeError as e:
        raise MalformedResponse(f"Address is not ASCII: {e}", reply) from e


def parse_address(reply: bytes) -> AddressResult:
    """Parse a GetAddress reply: a length byte followed by the ASCII address."""
    if len(reply) < 1:
        raise MalformedResponse("Empty address reply", reply)

    length = reply[0]
    if 1 + length > len(reply):
        raise MalformedResponse(
            f"Address length {length} overruns {len(reply)}-byte reply", reply
        )
    return AddressResult(address=_ascii(bytes(reply[1 : 1 + length]), reply))


def parse_signature(
    reply: bytes, operation: Operation = Operation.SIGN_RAW_TRANSACTION
) -> SignatureResult:
    """Parse a transaction or message signing reply."""
    expected = COMMAND_TABLE[operation].response_size
    if len(reply) != expected or reply[0] != SIGNATURE_MARKER:
        raise MalformedSignatureResponse(
            "Invalid signature received from ledger device", reply
        )
    signature = bytes(reply[1 : 1 + SIGNATURE_SIZE])
    return SignatureResult(signature_hex=signature.hex())


def parse_auth_token(reply: bytes) -> AuthTokenResult:
    """Parse a DeriveAddressAndSignAuthToken reply.

    Both the length and the marker byte must match.
    """
    expected = COMMAND_TABLE[Operation.DERIVE_ADDRESS_AND_SIGN_AUTH_TOKEN].response_size
    if len(reply) != expected or reply[0] != AUTH_TOKEN_MARKER:
        raise MalformedSignatureResponse(
            "Invalid address and token signature received from ledger device",
            reply,
        )
    sig_start = 1 + AUTH_ADDRESS_SIZE
    address = _ascii(bytes(reply[1:sig_start]).rstrip(b"\x00"), reply)
    signature = bytes(reply[sig_start : sig_start + SIGNATURE_SIZE])
    return AuthTokenResult(address=address, signature_hex=signature.hex())


def parse_app_configuration(reply: bytes) -> AppConfig:
    """Parse a GetAppConfiguration reply in either the legacy or extended shape.

    Replies of any other length of at least 6 bytes keep the fixed-offset
    fields and report both indices as 0.
    """
    if len(reply) < LEGACY_CONFIG_SIZE:
        raise MalformedResponse(
            f"App configuration reply too short: {len(reply)} bytes", reply
        )

    if len(reply) == LEGACY_CONFIG_SIZE:
        account_index, address_index = reply[1], reply[2]
    elif len(reply) == EXTENDED_CONFIG_SIZE:
        account_index, address_index = struct.unpack(">II", bytes(reply[6:14]))
    else:
        account_index = address_index = 0

    return AppConfig(
        contract_data_enabled=bool(reply[0]),
        account_index=account_index,
        address_index=address_index,
        version=f"{reply[3]}.{reply[4]}.{reply[5]}",
    )


def parse_signing_response(
    operation: Operation, reply: bytes
) -> SignatureResult | AuthTokenResult:
    """Dispatch the last reply of a signing sequence to its decoder."""
    if operation == Operation.DERIVE_ADDRESS_AND_SIGN_AUTH_TOKEN:
        return parse_auth_token(reply)
    return parse_signature(reply, operation)
