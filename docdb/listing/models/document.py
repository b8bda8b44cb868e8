"""Document data model."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Document(BaseModel):
    """A stored document as returned by a listing.

    ``name`` is the full resource path, e.g.
    ``projects/p/databases/(default)/documents/users/alice``.
    """

    name: str = Field(..., min_length=1)
    fields: dict[str, Any] = Field(default_factory=dict)
    create_time: datetime | None = None
    update_time: datetime | None = None

    model_config = ConfigDict(frozen=True)

    @property
    def id(self) -> str:
        """Last path segment of the document name."""
        return self.name.rsplit("/", 1)[-1]

    @property
    def parent_path(self) -> str:
        """Collection path that contains this document."""
        return self.name.rsplit("/", 1)[0]
