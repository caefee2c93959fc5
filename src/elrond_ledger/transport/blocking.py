"""Adapter for synchronous exchange functions.

Most device libraries expose a blocking ``exchange`` call. ``BlockingTransport``
runs it in a worker thread so the event loop stays free while the device
waits for the user.

Usage::

    transport = BlockingTransport(dongle.exchange_apdu)
    app = ElrondApp(transport)
    result = await app.get_address(DerivationIndex(0, 0))
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable

logger = logging.getLogger(__name__)

Exchange = Callable[[int, int, int, int, bytes], bytes]


class BlockingTransport:
    """Wraps ``exchange(cla, ins, p1, p2, data) -> bytes`` as an async transport."""

    def __init__(self, exchange: Exchange) -> None:
        self._exchange = exchange
        self._scramble_key: str | None = None

    @property
    def scramble_key(self) -> str | None:
        return self._scramble_key

    def set_scramble_key(self, key: str) -> None:
        self._scramble_key = key

    async def send(
        self, cla: int, ins: int, p1: int, p2: int, data: bytes = b""
    ) -> bytes:
        logger.debug(
            "Exchange cla=0x%02X ins=0x%02X p1=0x%02X p2=0x%02X len=%d",
            cla, ins, p1, p2, len(data),
        )
        reply = await asyncio.to_thread(self._exchange, cla, ins, p1, p2, bytes(data))
        return bytes(reply)
