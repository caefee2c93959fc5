"""App configuration as reported by the device."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AppConfig:
    """Settings and version of the running Elrond app."""

    contract_data_enabled: bool
    account_index: int
    address_index: int
    version: str

    @property
    def version_info(self) -> tuple[int, int, int]:
        major, minor, patch = (int(part) for part in self.version.split("."))
        return major, minor, patch

    def to_dict(self) -> dict:
        return {
            "contract_data_enabled": self.contract_data_enabled,
            "account_index": self.account_index,
            "address_index": self.address_index,
            "version": self.version,
        }
