"""Host-side adapter for the Elrond app on Ledger signing devices."""

from .client import ElrondApp
from .errors import (
    ElrondAppError,
    EmptyPayload,
    InvalidOperation,
    MalformedResponse,
    MalformedSignatureResponse,
    PayloadTooLarge,
    TransportFailure,
)
from .models import (
    AddressResult,
    AppConfig,
    AuthTokenResult,
    DerivationIndex,
    SignatureResult,
    TokenInfo,
)
from .protocol.commands import Operation

__version__ = "0.1.0"
