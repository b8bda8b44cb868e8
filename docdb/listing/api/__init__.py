"""Public API: request builder and ListingClient facade."""

from typing import Any

from .request_builder import (
    build_list_collection_ids_request,
    build_list_documents_request,
    consistency_selector_to_transport,
    serialize_order_by,
)

__all__ = [
    "ListingClient",
    "build_list_documents_request",
    "build_list_collection_ids_request",
    "consistency_selector_to_transport",
    "serialize_order_by",
]


def __getattr__(name: str) -> Any:
    # ListingClient depends on runtime, which depends on the request builder
    if name == "ListingClient":
        from .listing_client import ListingClient

        globals()[name] = ListingClient
        return ListingClient
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
