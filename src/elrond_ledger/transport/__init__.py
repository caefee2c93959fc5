"""Transport seam: the adapter only needs an async ``send`` primitive."""

from .base import Transport
from .blocking import BlockingTransport
from .redaction import RedactingTransport
