"""Translation of listing params and session defaults into transport requests.

Architecture:
    The request builder is a pure layer between the public params models and
    the transport request values. It resolves session defaults:
    - Missing parent resolves to the session's document-root path
    - Ordering clauses serialise to the transport's ordering grammar
    - The session consistency selector converts to the transport field

Design Decisions:
    - Pure functions: no I/O, identical inputs give identical requests
    - Selector conversion failures raise ConsistencySelectorError, which the
      retry executor never retries
"""

from __future__ import annotations

import base64
from datetime import UTC
from typing import Any

from ..core.config import ReadTime, SessionConfig, TransactionId
from ..core.exceptions import ConsistencySelectorError
from ..io.transport import ListCollectionIdsRequest, ListDocumentsRequest
from ..models import ListCollectionIdsParams, ListDocParams, OrderBy

__all__ = [
    "build_list_documents_request",
    "build_list_collection_ids_request",
    "serialize_order_by",
    "consistency_selector_to_transport",
]


def build_list_documents_request(
    params: ListDocParams, session: SessionConfig
) -> ListDocumentsRequest:
    """Build the transport request for one page of documents.

    Raises:
        ConsistencySelectorError: If the session selector cannot be converted
    """
    return ListDocumentsRequest(
        parent=params.parent or session.documents_path,
        collection_id=params.collection_id,
        page_size=params.page_size,
        page_token=params.page_token or "",
        order_by=serialize_order_by(params.order_by),
        mask=params.return_only_fields,
        consistency_selector=consistency_selector_to_transport(session.consistency_selector),
        show_missing=False,
    )


def build_list_collection_ids_request(
    params: ListCollectionIdsParams, session: SessionConfig
) -> ListCollectionIdsRequest:
    """Build the transport request for one page of collection ids.

    Raises:
        ConsistencySelectorError: If the session selector cannot be converted
    """
    return ListCollectionIdsRequest(
        parent=params.parent or session.documents_path,
        page_size=params.page_size,
        page_token=params.page_token or "",
        consistency_selector=consistency_selector_to_transport(session.consistency_selector),
    )


def serialize_order_by(order_by: tuple[OrderBy, ...] | None) -> str:
    """Join ordering clauses as ``"a asc, b desc"``; empty when unordered."""
    if not order_by:
        return ""
    return ", ".join(clause.to_string_format() for clause in order_by)


def consistency_selector_to_transport(selector: Any) -> dict[str, str] | None:
    """Convert a session consistency selector to the transport's field.

    Examples:
        >>> consistency_selector_to_transport(TransactionId(b"tx"))
        {'transaction': 'dHg='}
    """
    if selector is None:
        return None
    if isinstance(selector, ReadTime):
        read_time = selector.read_time
        if read_time.tzinfo is None:
            raise ConsistencySelectorError(
                "Read time must be timezone-aware to be used as a consistency selector"
            )
        rendered = read_time.astimezone(UTC).isoformat(timespec="microseconds")
        return {"readTime": rendered.replace("+00:00", "Z")}
    if isinstance(selector, TransactionId):
        if not selector.value:
            raise ConsistencySelectorError("Transaction id must not be empty")
        return {"transaction": base64.b64encode(selector.value).decode("ascii")}
    raise ConsistencySelectorError(
        f"Unsupported consistency selector: {type(selector).__name__}"
    )
