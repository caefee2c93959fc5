"""Token metadata provisioned to the device for amount display.

Serialized layout::

    +-----+--------+-----+------------+----------+-----+----------+-----------+
    | len | ticker | len | identifier | decimals | len | chain id | signature |
    | 1 B |        | 1 B |            |   1 B    | 1 B |          |           |
    +-----+--------+-----+------------+----------+-----+----------+-----------+
"""

from __future__ import annotations

from dataclasses import dataclass


def _length_prefixed(name: str, value: str) -> bytes:
    raw = value.encode("utf-8")
    if len(raw) > 0xFF:
        raise ValueError(f"{name} must be at most 255 bytes, got {len(raw)}")
    return bytes([len(raw)]) + raw


@dataclass(frozen=True)
class TokenInfo:
    """ESDT token metadata signed by the token registry.

    ``signature`` is the registry's signature over the metadata, either as
    raw bytes or as a hex string.
    """

    ticker: str
    identifier: str
    decimals: int
    chain_id: str
    signature: bytes | str

    def __post_init__(self) -> None:
        if not 0 <= self.decimals <= 0xFF:
            raise ValueError(f"Decimals must be 0-255, got {self.decimals}")

    @property
    def signature_bytes(self) -> bytes:
        if isinstance(self.signature, str):
            try:
                return bytes.fromhex(self.signature)
            except ValueError as e:
                raise ValueError(f"Signature is not valid hex: {e}") from e
        return bytes(self.signature)

    def to_bytes(self) -> bytes:
        """Serialize to the length-prefixed record the device expects."""
        return b"".join(
            [
                _length_prefixed("Ticker", self.ticker),
                _length_prefixed("Token identifier", self.identifier),
                bytes([self.decimals]),
                _length_prefixed("Chain id", self.chain_id),
                self.signature_bytes,
            ]
        )

    def to_dict(self) -> dict:
        return {
            "ticker": self.ticker,
            "identifier": self.identifier,
            "decimals": self.decimals,
            "chain_id": self.chain_id,
            "signature": self.signature_bytes.hex(),
        }
