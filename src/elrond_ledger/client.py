"""High-level client for the Elrond app on a Ledger device.

``ElrondApp`` turns each operation into one or more APDUs, sends them through
a :class:`~elrond_ledger.transport.Transport`, and decodes the final reply.

Usage::

    app = ElrondApp(transport)
    config = await app.get_app_configuration()
    result = await app.get_address(DerivationIndex(account=0, index=0))
    signed = await app.sign_transaction(tx_bytes)
"""

from __future__ import annotations

import asyncio
import logging

from .errors import TransportFailure
from .models import (
    AddressResult,
    AppConfig,
    AuthTokenResult,
    DerivationIndex,
    SignatureResult,
    TokenInfo,
)
from .protocol.commands import (
    CLA,
    P2_DEFAULT,
    Operation,
    build_auth_token_payload,
    build_derivation_payload,
    build_signing_frames,
    build_token_info_payload,
    check_request_size,
    display_p1,
    resolve_signing_operation,
)
from .protocol.framing import MAX_FRAME_SIZE, CommandFrame
from .protocol.parser import (
    parse_address,
    parse_app_configuration,
    parse_signing_response,
)
from .transport.base import Transport

logger = logging.getLogger(__name__)


class ElrondApp:
    """Drives the Elrond device app over a transport.

    The device handles one command at a time and keeps state across the
    frames of a signing operation, so every public method holds an
    ``asyncio.Lock`` for its whole frame sequence.

    Args:
        transport: Delivers single APDUs to the device.
        scramble_key: Passed to ``transport.set_scramble_key`` when given and
            the transport has one. Left unset, the transport keeps its own key.
        max_frame_size: Payload bound for chunked operations, 1-150.
        curve_mask: Send ``p2=0x80`` on signing frames, as older apps expect.
    """

    def __init__(
        self,
        transport: Transport,
        scramble_key: str | None = None,
        max_frame_size: int = MAX_FRAME_SIZE,
        curve_mask: bool = False,
    ) -> None:
        if not 1 <= max_frame_size <= MAX_FRAME_SIZE:
            raise ValueError(
                f"Frame size must be 1-{MAX_FRAME_SIZE}, got {max_frame_size}"
            )
        self.transport = transport
        self.scramble_key = scramble_key
        self.max_frame_size = max_frame_size
        self.curve_mask = curve_mask
        self._lock = asyncio.Lock()

        setter = getattr(transport, "set_scramble_key", None)
        if scramble_key is not None and setter is not None:
            setter(scramble_key)

    async def _send(
        self, ins: int, p1: int = 0x00, p2: int = P2_DEFAULT, data: bytes = b""
    ) -> bytes:
        check_request_size(Operation(ins), data)
        try:
            reply = await self.transport.send(CLA, ins, p1, p2, data)
        except TransportFailure:
            raise
        except Exception as e:
            raise TransportFailure(f"Transport failed on ins 0x{ins:02X}: {e}") from e
        return bytes(reply)

    async def _send_frames(self, frames: list[CommandFrame]) -> bytes:
        """Send frames strictly in order and return the reply to the last one."""
        reply = b""
        for i, frame in enumerate(frames):
            logger.debug(
                "Sending frame %d/%d ins=0x%02X p1=0x%02X len=%d",
                i + 1, len(frames), frame.ins, frame.p1, len(frame.payload),
            )
            try:
                reply = await self._send(frame.ins, frame.p1, frame.p2, frame.payload)
            except TransportFailure as e:
                logger.warning(
                    "Frame %d/%d of ins 0x%02X failed: %s",
                    i + 1, len(frames), frame.ins, e,
                )
                raise
        return reply

    # ─── ADDRESSES ────────────────────────────────────────────────────

    async def get_address(
        self, derivation: DerivationIndex, display: bool = False
    ) -> AddressResult:
        """Derive the address for ``derivation``.

        Args:
            derivation: Account and address index of the key.
            display: Ask the device to show the address for confirmation.

        Raises:
            MalformedResponse: If the reply's length prefix is inconsistent.
            TransportFailure: If the device or link reports an error.
        """
        async with self._lock:
            reply = await self._send(
                Operation.GET_ADDRESS,
                p1=display_p1(display),
                data=build_derivation_payload(derivation),
            )
        return parse_address(reply)

    async def set_active_address(
        self, derivation: DerivationIndex, display: bool = False
    ) -> bytes:
        """Make ``derivation`` the app's active key. Returns the raw reply."""
        async with self._lock:
            return await self._send(
                Operation.SET_ACTIVE_ADDRESS,
                p1=display_p1(display),
                data=build_derivation_payload(derivation),
            )

    # ─── SIGNING ──────────────────────────────────────────────────────

    async def sign(
        self, payload: bytes, operation: Operation | int
    ) -> SignatureResult | AuthTokenResult:
        """Run the chunked signing protocol for ``operation``.

        The operation is validated before any frame is built, so an
        unsupported instruction never reaches the transport.

        Raises:
            InvalidOperation: If ``operation`` is not a signing instruction.
            EmptyPayload: If ``payload`` is empty.
            MalformedSignatureResponse: If the final reply has the wrong shape.
            TransportFailure: If any frame fails. The device's partial state
                is undefined; retry with a fresh call.
        """
        op = resolve_signing_operation(operation)
        frames = build_signing_frames(
            op,
            payload,
            max_frame_size=self.max_frame_size,
            curve_mask=self.curve_mask,
        )
        async with self._lock:
            reply = await self._send_frames(frames)
        logger.debug("%s completed in %d frame(s)", op.name, len(frames))
        return parse_signing_response(op, reply)

    async def sign_transaction(
        self, tx: bytes, using_hash: bool = False
    ) -> SignatureResult:
        """Sign a serialized transaction, or its hash when ``using_hash`` is set."""
        if using_hash:
            return await self.sign(tx, Operation.SIGN_TRANSACTION_HASH)
        return await self.sign(tx, Operation.SIGN_RAW_TRANSACTION)

    async def sign_transaction_hash(self, tx: bytes) -> SignatureResult:
        return await self.sign(tx, Operation.SIGN_TRANSACTION_HASH)

    async def sign_message(self, message: bytes) -> SignatureResult:
        return await self.sign(message, Operation.SIGN_MESSAGE)

    async def get_address_and_sign_auth_token(
        self, derivation: DerivationIndex, token: bytes
    ) -> AuthTokenResult:
        """Derive the address for ``derivation`` and sign ``token`` with its key."""
        payload = build_auth_token_payload(derivation, token)
        return await self.sign(payload, Operation.DERIVE_ADDRESS_AND_SIGN_AUTH_TOKEN)

    # ─── CONFIGURATION ────────────────────────────────────────────────

    async def get_app_configuration(self) -> AppConfig:
        """Read the app's settings, active indices, and version."""
        async with self._lock:
            reply = await self._send(Operation.GET_APP_CONFIGURATION)
        config = parse_app_configuration(reply)
        logger.debug("App configuration: %s", config)
        return config

    async def provide_token_info(self, info: TokenInfo) -> bytes:
        """Send signed ESDT metadata so the device can display token amounts.

        The record is sent as a single command. Returns the raw reply.

        Raises:
            PayloadTooLarge: If the serialized record exceeds one frame.
        """
        data = build_token_info_payload(info)
        async with self._lock:
            return await self._send(Operation.PROVIDE_TOKEN_INFO, data=data)
