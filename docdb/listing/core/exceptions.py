"""Custom exception hierarchy."""

from __future__ import annotations


class DocDBError(Exception):
    """Base exception for all library errors."""

    pass


class TransportError(DocDBError):
    """Network or service failure reported by the transport.

    The transport decides whether the failure is transient; only errors
    flagged ``retryable`` are reattempted by the retry executor.
    """

    def __init__(
        self,
        message: str,
        *,
        retryable: bool = False,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.retryable = retryable
        self.status_code = status_code


class ConsistencySelectorError(DocDBError):
    """Session consistency selector cannot be converted for the transport."""

    pass


class DecodeError(DocDBError):
    """A single document failed conversion to the target type."""

    def __init__(self, message: str, *, document_name: str | None = None) -> None:
        super().__init__(message)
        self.document_name = document_name


class ExhaustedRetriesError(DocDBError):
    """Retryable transport error persisted past the retry bound."""

    def __init__(self, message: str, *, attempts: int, last_error: TransportError) -> None:
        super().__init__(message)
        self.attempts = attempts
        self.last_error = last_error


class ValidationError(DocDBError, ValueError):
    """Listing configuration or client arguments failed validation."""

    pass
