"""Data models for derivation indices, decoded replies, and token metadata."""

from .derivation import DerivationIndex
from .results import AddressResult, SignatureResult, AuthTokenResult
from .config import AppConfig
from .token import TokenInfo
