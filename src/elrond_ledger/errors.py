"""Exceptions raised by the adapter.

Every error is terminal for the operation that raised it: nothing is
retried and no partial result is returned.
"""

from __future__ import annotations


class ElrondAppError(Exception):
    """Base class for all adapter errors."""


class InvalidOperation(ElrondAppError, ValueError):
    """The signing path was asked to run an instruction it does not support."""


class EmptyPayload(ElrondAppError, ValueError):
    """A chunked operation was given nothing to send."""


class PayloadTooLarge(ElrondAppError, ValueError):
    """An unchunked payload does not fit in a single frame."""

    def __init__(self, size: int, limit: int) -> None:
        self.size = size
        self.limit = limit
        super().__init__(f"Payload is {size} bytes, frame limit is {limit}")


class MalformedResponse(ElrondAppError):
    """The device reply does not have the shape the operation expects."""

    def __init__(self, message: str, reply: bytes = b"") -> None:
        self.reply = bytes(reply)
        super().__init__(message)


class MalformedSignatureResponse(MalformedResponse):
    """A signing reply has the wrong length or leading marker byte."""


class TransportFailure(ElrondAppError):
    """The transport failed to deliver a command or return its reply.

    ``status_word`` is set when the failure came with a device status word
    (for example a user rejection on the device).
    """

    def __init__(self, message: str, status_word: int | None = None) -> None:
        self.status_word = status_word
        super().__init__(message)

    def __str__(self) -> str:
        message = super().__str__()
        if self.status_word is None:
            return message
        return f"{message} (status 0x{self.status_word:04X})"
