from __future__ import annotations


class CrptError(Exception):
    """Base class for errors raised while submitting a document."""


class SerializationError(CrptError):
    """The document could not be encoded to JSON."""

    def __init__(self, message: str, type_name: str | None = None) -> None:
        super().__init__(message)
        self.type_name = type_name


class TransportError(CrptError):
    """The HTTP call failed before a response was received."""

    def __init__(self, message: str, url: str | None = None) -> None:
        super().__init__(message)
        self.url = url
