"""Frame codec for chunked commands.

A signing payload can be longer than the device accepts in one APDU, so it
is cut into frames of at most ``MAX_FRAME_SIZE`` bytes and sent in order::

    +-----+-----+------+------+---------------------------+
    | CLA | INS |  P1  |  P2  | data (<= 150 bytes)       |
    +-----+-----+------+------+---------------------------+

- P1: ``0x00`` on the first frame, ``0x80`` on every continuation frame
- P2: ``0x00``, or ``0x80`` when the legacy curve mask is requested

The device accumulates the frames and only answers meaningfully to the last.
"""

from __future__ import annotations

from dataclasses import dataclass

MAX_FRAME_SIZE = 150

P1_FIRST = 0x00
P1_MORE = 0x80


@dataclass(frozen=True)
class CommandFrame:
    """One bounded chunk of a command payload."""

    ins: int
    p1: int
    p2: int
    payload: bytes

    @property
    def is_first(self) -> bool:
        return self.p1 == P1_FIRST

    def __repr__(self) -> str:
        return (
            f"CommandFrame(ins=0x{self.ins:02X}, p1=0x{self.p1:02X}, "
            f"p2=0x{self.p2:02X}, payload={len(self.payload)} bytes)"
        )


def split(
    payload: bytes,
    ins: int,
    p2: int = 0x00,
    max_frame_size: int = MAX_FRAME_SIZE,
) -> list[CommandFrame]:
    """Split a payload into ordered frames for one instruction.

    Args:
        payload: The full byte sequence to send.
        ins: Instruction byte stamped on every frame.
        p2: P2 byte stamped on every frame.
        max_frame_size: Upper bound on each frame's payload, 1-150.

    Returns:
        ``ceil(len(payload) / max_frame_size)`` frames. Joining their payloads
        in order gives back ``payload``. An empty payload yields no frames,
        so callers that must send something have to check for it first.
    """
    if not 1 <= max_frame_size <= MAX_FRAME_SIZE:
        raise ValueError(
            f"Frame size must be 1-{MAX_FRAME_SIZE}, got {max_frame_size}"
        )

    data = bytes(payload)
    frames: list[CommandFrame] = []
    offset = 0
    while offset < len(data):
        chunk = data[offset : offset + max_frame_size]
        p1 = P1_FIRST if offset == 0 else P1_MORE
        frames.append(CommandFrame(ins=ins, p1=p1, p2=p2, payload=chunk))
        offset += len(chunk)

    return frames
