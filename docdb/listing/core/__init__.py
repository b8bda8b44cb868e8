"""Core components."""

from .config import (
    ConsistencySelector,
    ReadTime,
    RetryPolicy,
    SessionConfig,
    TransactionId,
)
from .constants import DEFAULT_MAX_RETRIES, DEFAULT_PAGE_SIZE, documents_path
from .enums import CacheMode, CacheResult, SortDirection
from .exceptions import (
    ConsistencySelectorError,
    DecodeError,
    DocDBError,
    ExhaustedRetriesError,
    TransportError,
    ValidationError,
)

__all__ = [
    # Configuration
    "SessionConfig",
    "RetryPolicy",
    "ConsistencySelector",
    "ReadTime",
    "TransactionId",
    "DEFAULT_PAGE_SIZE",
    "DEFAULT_MAX_RETRIES",
    "documents_path",
    # Enums
    "CacheMode",
    "CacheResult",
    "SortDirection",
    # Exceptions
    "DocDBError",
    "TransportError",
    "ConsistencySelectorError",
    "DecodeError",
    "ExhaustedRetriesError",
    "ValidationError",
]
