"""Listing parameter and result models.

Params are immutable per request. Each subsequent page is requested with a
new params value derived through ``with_page_token``; the original value is
never mutated.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from ..core.constants import DEFAULT_PAGE_SIZE
from ..core.enums import SortDirection
from .document import Document


class OrderBy(BaseModel):
    """One ordering clause of a document listing."""

    field_path: str = Field(..., min_length=1)
    direction: SortDirection = SortDirection.ASCENDING

    model_config = ConfigDict(frozen=True)

    def to_string_format(self) -> str:
        """Render as ``"field direction"`` for the transport's ordering grammar."""
        return f"{self.field_path} {self.direction.value}"


class ListDocParams(BaseModel):
    """Parameters for listing documents in one collection."""

    collection_id: str = Field(..., min_length=1)
    parent: str | None = None
    page_size: int = Field(default=DEFAULT_PAGE_SIZE, gt=0)
    page_token: str | None = None
    order_by: tuple[OrderBy, ...] | None = None
    return_only_fields: tuple[str, ...] | None = None

    model_config = ConfigDict(frozen=True)

    def with_page_token(self, page_token: str) -> ListDocParams:
        return self.model_copy(update={"page_token": page_token})


class ListDocResult(BaseModel):
    """One page of documents.

    ``page_token`` is None on the last page; it is the only signal that
    pagination is complete.
    """

    documents: list[Document] = Field(default_factory=list)
    page_token: str | None = None

    model_config = ConfigDict(frozen=True)


class ListCollectionIdsParams(BaseModel):
    """Parameters for listing the collection ids under a parent."""

    parent: str | None = None
    page_size: int = Field(default=DEFAULT_PAGE_SIZE, gt=0)
    page_token: str | None = None

    model_config = ConfigDict(frozen=True)

    def with_page_token(self, page_token: str) -> ListCollectionIdsParams:
        return self.model_copy(update={"page_token": page_token})


class ListCollectionIdsResult(BaseModel):
    """One page of collection ids."""

    collection_ids: list[str] = Field(default_factory=list)
    page_token: str | None = None

    model_config = ConfigDict(frozen=True)
