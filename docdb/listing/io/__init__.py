"""I/O layer abstractions (transport protocol and REST binding)."""

from .http import HTTPClient
from .rest import RESTListingTransport
from .transport import (
    ListCollectionIdsRequest,
    ListCollectionIdsResponse,
    ListDocumentsRequest,
    ListDocumentsResponse,
    ListingTransport,
)

__all__ = [
    "HTTPClient",
    "ListingTransport",
    "RESTListingTransport",
    "ListDocumentsRequest",
    "ListDocumentsResponse",
    "ListCollectionIdsRequest",
    "ListCollectionIdsResponse",
]
