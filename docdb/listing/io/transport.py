"""Transport request/response values and the transport protocol.

Architecture:
    The listing layer never talks to the network directly. It builds plain
    request values, hands them to a ListingTransport, and receives plain
    response values back. Any binding (REST, gRPC, in-memory fake) that
    implements the protocol can be plugged in.

Design Decision:
    Protocol chosen over a base class so test doubles and alternative
    bindings need no inheritance. Transports signal transient failures by
    raising TransportError(retryable=True).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol

from ..models import Document


@dataclass(frozen=True)
class ListDocumentsRequest:
    parent: str
    collection_id: str
    page_size: int
    page_token: str = ""
    order_by: str = ""
    mask: tuple[str, ...] | None = None
    consistency_selector: dict[str, Any] | None = None
    show_missing: bool = False


@dataclass(frozen=True)
class ListDocumentsResponse:
    documents: list[Document] = field(default_factory=list)
    next_page_token: str = ""


@dataclass(frozen=True)
class ListCollectionIdsRequest:
    parent: str
    page_size: int
    page_token: str = ""
    consistency_selector: dict[str, Any] | None = None


@dataclass(frozen=True)
class ListCollectionIdsResponse:
    collection_ids: list[str] = field(default_factory=list)
    next_page_token: str = ""


class ListingTransport(Protocol):
    """Protocol for the remote listing calls.

    Implementations must be safe to share between concurrent listings.
    """

    async def list_documents(self, request: ListDocumentsRequest) -> ListDocumentsResponse:
        """List one page of documents.

        Raises:
            TransportError: On network or service failure
        """
        ...

    async def list_collection_ids(
        self, request: ListCollectionIdsRequest
    ) -> ListCollectionIdsResponse:
        """List one page of collection ids.

        Raises:
            TransportError: On network or service failure
        """
        ...

    async def close(self) -> None:
        """Release connections held by the transport."""
        ...
