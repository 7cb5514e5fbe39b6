"""
Exceptions raised by the page reader pipeline.

Every error is terminal for a single ``read()`` invocation. The content
fallback retry in :class:`page_reader.readable.Readable` is a quality retry,
not error recovery, and never raises any of these.
"""

from __future__ import annotations

from typing import Any


class ReaderError(Exception):
    """Base exception for all page reader errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class FetchError(ReaderError):
    """Transport retrieval failed or the server answered with an error status."""

    def __init__(
        self,
        message: str,
        url: str,
        cause: BaseException | None = None,
        status_code: int | None = None,
    ) -> None:
        details: dict[str, Any] = {"url": url}
        if status_code is not None:
            details["status_code"] = status_code
        if cause is not None:
            details["cause"] = f"{type(cause).__name__}: {cause}"
        super().__init__(message, details)
        self.url = url
        self.cause = cause
        self.status_code = status_code


class ConversionError(ReaderError):
    """Raw bytes could not be converted from the resolved charset."""

    def __init__(self, charset: str, cause: BaseException | None = None) -> None:
        super().__init__(f"Cannot convert content from charset '{charset}'", {"charset": charset})
        self.charset = charset
        self.cause = cause


class ParseError(ReaderError):
    """Markup could not be parsed into a document."""

    pass


class StructuralError(ReaderError):
    """Markup parsed, but the document has no usable body."""

    pass


class EmptyResultError(ReaderError):
    """Retrieved body is empty or not text."""

    pass


class ResourceReleasedError(ReaderError):
    """A released document was queried."""

    def __init__(self, what: str = "document") -> None:
        super().__init__(f"Cannot access {what}: resource already released")
