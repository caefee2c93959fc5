"""Instruction codes and command payload builders for the Elrond app.

Every command uses class byte ``CLA`` (0xED). Each operation is identified
by its instruction byte; ``COMMAND_TABLE`` records which operations go
through the chunked signing protocol and the reply size they expect.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass
from enum import IntEnum

from ..errors import EmptyPayload, InvalidOperation, PayloadTooLarge
from ..models import DerivationIndex, TokenInfo
from .framing import MAX_FRAME_SIZE, CommandFrame, split

CLA = 0xED

P1_CONFIRM = 0x01
P1_NON_CONFIRM = 0x00
P2_DEFAULT = 0x00
P2_CURVE_MASK = 0x80

DERIVATION_PAYLOAD_SIZE = 8
SIGNATURE_REPLY_SIZE = 67
AUTH_TOKEN_REPLY_SIZE = 129


class Operation(IntEnum):
    """Instruction byte of each supported operation."""

    GET_APP_CONFIGURATION = 0x02
    GET_ADDRESS = 0x03
    SIGN_RAW_TRANSACTION = 0x04
    SET_ACTIVE_ADDRESS = 0x05
    SIGN_MESSAGE = 0x06
    SIGN_TRANSACTION_HASH = 0x07
    PROVIDE_TOKEN_INFO = 0x08
    DERIVE_ADDRESS_AND_SIGN_AUTH_TOKEN = 0x09


@dataclass(frozen=True)
class CommandSpec:
    """Static metadata for one operation.

    ``request_size`` and ``response_size`` are ``None`` when the size varies.
    """

    operation: Operation
    chunked: bool
    request_size: int | None
    response_size: int | None


COMMAND_TABLE: dict[Operation, CommandSpec] = {
    spec.operation: spec
    for spec in [
        CommandSpec(Operation.GET_APP_CONFIGURATION, False, 0, None),
        CommandSpec(Operation.GET_ADDRESS, False, DERIVATION_PAYLOAD_SIZE, None),
        CommandSpec(Operation.SET_ACTIVE_ADDRESS, False, DERIVATION_PAYLOAD_SIZE, None),
        CommandSpec(Operation.SIGN_RAW_TRANSACTION, True, None, SIGNATURE_REPLY_SIZE),
        CommandSpec(Operation.SIGN_TRANSACTION_HASH, True, None, SIGNATURE_REPLY_SIZE),
        CommandSpec(Operation.SIGN_MESSAGE, True, None, SIGNATURE_REPLY_SIZE),
        CommandSpec(
            Operation.DERIVE_ADDRESS_AND_SIGN_AUTH_TOKEN, True, None, AUTH_TOKEN_REPLY_SIZE
        ),
        CommandSpec(Operation.PROVIDE_TOKEN_INFO, False, None, None),
    ]
}

SIGNING_OPERATIONS: frozenset[Operation] = frozenset(
    op for op, spec in COMMAND_TABLE.items() if spec.chunked
)


def resolve_signing_operation(operation: Operation | int) -> Operation:
    """Map an instruction byte to a signing-capable operation.

    Raises:
        InvalidOperation: If the byte is unknown or not a signing instruction.
    """
    try:
        op = Operation(operation)
    except ValueError:
        raise InvalidOperation(
            f"Invalid sign instruction called: 0x{int(operation):02X}"
        ) from None
    if op not in SIGNING_OPERATIONS:
        raise InvalidOperation(
            f"Invalid sign instruction called: {op.name} (0x{op.value:02X})"
        )
    return op


def check_request_size(operation: Operation, data: bytes) -> None:
    """Reject a payload whose size differs from the catalogued request size."""
    expected = COMMAND_TABLE[operation].request_size
    if expected is not None and len(data) != expected:
        raise ValueError(
            f"{operation.name} takes {expected} bytes, got {len(data)}"
        )


def display_p1(display: bool) -> int:
    return P1_CONFIRM if display else P1_NON_CONFIRM


def build_derivation_payload(derivation: DerivationIndex) -> bytes:
    """Build the 8-byte payload shared by GetAddress and SetActiveAddress."""
    payload = derivation.to_bytes()
    check_request_size(Operation.GET_ADDRESS, payload)
    return payload


def build_auth_token_payload(derivation: DerivationIndex, token: bytes) -> bytes:
    """Build the auth-token signing payload.

    Layout: ``account(i32be) index(u32be) token_length(u32be) token``.
    """
    token = bytes(token)
    header = derivation.to_bytes() + struct.pack(">I", len(token))
    return header + token


def build_token_info_payload(info: TokenInfo, limit: int = MAX_FRAME_SIZE) -> bytes:
    """Serialize token metadata, refusing anything that needs more than one frame.

    Raises:
        PayloadTooLarge: If the record is longer than ``limit`` bytes.
    """
    payload = info.to_bytes()
    if len(payload) > limit:
        raise PayloadTooLarge(len(payload), limit)
    return payload


def build_signing_frames(
    operation: Operation | int,
    payload: bytes,
    max_frame_size: int = MAX_FRAME_SIZE,
    curve_mask: bool = False,
) -> list[CommandFrame]:
    """Validate a signing request and split its payload into frames.

    The operation is checked before anything is chunked.

    Raises:
        InvalidOperation: If ``operation`` is not a signing instruction.
        EmptyPayload: If ``payload`` is empty.
    """
    op = resolve_signing_operation(operation)
    if not payload:
        raise EmptyPayload(f"Nothing to sign for {op.name}")
    p2 = P2_CURVE_MASK if curve_mask else P2_DEFAULT
    return split(payload, op.value, p2=p2, max_frame_size=max_frame_size)
