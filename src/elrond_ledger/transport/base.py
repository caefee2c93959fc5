"""The transport interface the adapter drives.

Link-layer chunking, device discovery, wakeup, and status-word handling all
belong to the transport. The adapter only sees one command in, one reply
out.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Transport(Protocol):
    """Anything that can deliver one APDU and return the device's reply."""

    async def send(
        self, cla: int, ins: int, p1: int, p2: int, data: bytes = b""
    ) -> bytes:
        ...
