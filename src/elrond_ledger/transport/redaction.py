"""Logging middleware that keeps payloads out of the logs.

The device app is registered with a scramble key (``"eGLD"`` for Elrond).
``RedactingTransport`` wraps another transport and logs every command and
reply, replacing payload bytes with a short HMAC tag keyed by the scramble
key. Identical payloads get identical tags, so traffic can be correlated
across a session without exposing transaction contents.
"""

from __future__ import annotations

import hashlib
import hmac
import logging

from .base import Transport

logger = logging.getLogger(__name__)

DEFAULT_SCRAMBLE_KEY = "eGLD"
TAG_LENGTH = 8
MAX_VERBOSE_BYTES = 32


class RedactingTransport:
    """Wrap ``inner`` and log its traffic with payloads redacted.

    Args:
        inner: The transport that actually talks to the device.
        scramble_key: Key for the payload tags.
        verbose: Log payloads in clear (elided past 32 bytes). Debug only.
    """

    def __init__(
        self,
        inner: Transport,
        scramble_key: str = DEFAULT_SCRAMBLE_KEY,
        verbose: bool = False,
    ) -> None:
        self._inner = inner
        self._scramble_key = scramble_key
        self._verbose = verbose

    @property
    def scramble_key(self) -> str:
        return self._scramble_key

    def set_scramble_key(self, key: str) -> None:
        self._scramble_key = key
        setter = getattr(self._inner, "set_scramble_key", None)
        if setter is not None:
            setter(key)

    def describe(self, data: bytes) -> str:
        """Return the loggable form of a payload."""
        if not data:
            return "(empty)"
        if self._verbose:
            shown = data[:MAX_VERBOSE_BYTES].hex(" ")
            if len(data) > MAX_VERBOSE_BYTES:
                shown += " ..."
            return f"{len(data)} bytes: {shown}"
        tag = hmac.new(
            self._scramble_key.encode("utf-8"), data, hashlib.sha256
        ).hexdigest()[: TAG_LENGTH * 2]
        return f"{len(data)} bytes #{tag}"

    async def send(
        self, cla: int, ins: int, p1: int, p2: int, data: bytes = b""
    ) -> bytes:
        logger.debug(
            ">> cla=0x%02X ins=0x%02X p1=0x%02X p2=0x%02X %s",
            cla, ins, p1, p2, self.describe(data),
        )
        try:
            reply = await self._inner.send(cla, ins, p1, p2, data)
        except Exception as e:
            logger.debug("<< ins=0x%02X failed: %s", ins, e)
            raise
        logger.debug("<< ins=0x%02X %s", ins, self.describe(reply))
        return reply
