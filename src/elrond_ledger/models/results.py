"""Typed results decoded from device replies."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AddressResult:
    """Reply to GetAddress.

    This app version never returns a chain code; the field is kept so
    callers written against richer apps can test for it.
    """

    address: str
    chain_code: bytes | None = None


@dataclass(frozen=True)
class SignatureResult:
    """A 64-byte signature, hex encoded."""

    signature_hex: str

    @property
    def signature(self) -> bytes:
        return bytes.fromhex(self.signature_hex)


@dataclass(frozen=True)
class AuthTokenResult:
    """Reply to DeriveAddressAndSignAuthToken: the address and its signature."""

    address: str
    signature_hex: str

    @property
    def signature(self) -> bytes:
        return bytes.fromhex(self.signature_hex)
