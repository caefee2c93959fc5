"""Derivation index selecting which on-device key to use."""

from __future__ import annotations

import struct
from dataclasses import dataclass

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1
UINT32_MAX = 2**32 - 1


@dataclass(frozen=True)
class DerivationIndex:
    """An (account, index) pair.

    ``account`` is a signed 32-bit value and ``index`` an unsigned 32-bit
    value, both sent big-endian.
    """

    account: int = 0
    index: int = 0

    def __post_init__(self) -> None:
        if not INT32_MIN <= self.account <= INT32_MAX:
            raise ValueError(
                f"Account must fit a signed 32-bit integer, got {self.account}"
            )
        if not 0 <= self.index <= UINT32_MAX:
            raise ValueError(
                f"Index must fit an unsigned 32-bit integer, got {self.index}"
            )

    def to_bytes(self) -> bytes:
        """Serialize to the 8-byte ``account(i32be) index(u32be)`` layout."""
        return struct.pack(">iI", self.account, self.index)
