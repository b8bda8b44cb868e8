"""docdb listing - paged, retried and cached listings for a document database."""

from .api.listing_client import ListingClient
from .core import (
    CacheMode,
    CacheResult,
    ConsistencySelectorError,
    DecodeError,
    DocDBError,
    ExhaustedRetriesError,
    ReadTime,
    RetryPolicy,
    SessionConfig,
    SortDirection,
    TransactionId,
    TransportError,
    ValidationError,
)
from .io import ListingTransport, RESTListingTransport
from .models import (
    Document,
    ListCollectionIdsParams,
    ListCollectionIdsResult,
    ListDocParams,
    ListDocResult,
    OrderBy,
)
from .runtime import (
    DocumentCache,
    InMemoryDocumentCache,
    ListingObserver,
    LoggingObserver,
    model_decoder,
)

__version__ = "0.1.0"

__all__ = [
    # Client
    "ListingClient",
    # Configuration
    "SessionConfig",
    "RetryPolicy",
    "ReadTime",
    "TransactionId",
    # Enums
    "CacheMode",
    "CacheResult",
    "SortDirection",
    # Models
    "Document",
    "OrderBy",
    "ListDocParams",
    "ListDocResult",
    "ListCollectionIdsParams",
    "ListCollectionIdsResult",
    # Collaborators
    "ListingTransport",
    "RESTListingTransport",
    "DocumentCache",
    "InMemoryDocumentCache",
    "ListingObserver",
    "LoggingObserver",
    "model_decoder",
    # Exceptions
    "DocDBError",
    "TransportError",
    "ConsistencySelectorError",
    "DecodeError",
    "ExhaustedRetriesError",
    "ValidationError",
]
