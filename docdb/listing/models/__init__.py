"""Data models."""

from .document import Document
from .listing import (
    ListCollectionIdsParams,
    ListCollectionIdsResult,
    ListDocParams,
    ListDocResult,
    OrderBy,
)

__all__ = [
    "Document",
    "OrderBy",
    "ListDocParams",
    "ListDocResult",
    "ListCollectionIdsParams",
    "ListCollectionIdsResult",
]
