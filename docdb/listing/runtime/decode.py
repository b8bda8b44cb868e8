"""Typed decoding of listed documents.

Two composition modes:
    - lossy: failed decodes are logged and dropped
    - strict: failed decodes are yielded in place as DecodeError elements
Both keep the relative order of successfully decoded items, and neither
ends the sequence on a decode failure.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Callable
from typing import Any, Generic, TypeVar

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from ..core.exceptions import DecodeError, DocDBError
from ..models import Document

logger = logging.getLogger(__name__)

T = TypeVar("T")

Decoder = Callable[[Document], T]


def model_decoder(target: Any) -> Decoder[Any]:
    """Build a decoder validating document fields into ``target``.

    ``target`` is anything pydantic can validate into (BaseModel subclasses,
    dataclasses, TypedDicts, ...). The document id and timestamps are
    available to models under the ``_id``, ``_create_time`` and
    ``_update_time`` keys (bind them with field aliases).
    """
    adapter = TypeAdapter(target)

    def decode(document: Document) -> Any:
        payload = {
            "_id": document.id,
            "_create_time": document.create_time,
            "_update_time": document.update_time,
            **document.fields,
        }
        try:
            return adapter.validate_python(payload)
        except PydanticValidationError as e:
            raise DecodeError(
                f"Failed to decode document {document.name}: {e}",
                document_name=document.name,
            ) from e

    return decode


class DecodeAdapter(Generic[T]):
    """Maps a document sequence to typed objects."""

    def __init__(self, decode: Decoder[T], *, strict: bool = False) -> None:
        self._decode = decode
        self._strict = strict

    @property
    def strict(self) -> bool:
        return self._strict

    def decode(self, document: Document) -> T:
        """Decode one document.

        Raises:
            DecodeError: If the decoder rejects the document
        """
        try:
            return self._decode(document)
        except DecodeError:
            raise
        except (ValueError, TypeError, KeyError) as e:
            raise DecodeError(
                f"Failed to decode document {document.name}: {e}",
                document_name=document.name,
            ) from e

    async def decode_stream(
        self, items: AsyncIterator[Document | DocDBError]
    ) -> AsyncIterator[T | DocDBError]:
        """Decode a document sequence; upstream error elements pass through."""
        async for item in items:
            if isinstance(item, DocDBError):
                yield item
                continue
            try:
                obj = self.decode(item)
            except DecodeError as e:
                if self._strict:
                    yield e
                else:
                    logger.error(
                        "Error occurred while consuming list document as a stream: %s",
                        e,
                        extra={"document_name": e.document_name},
                    )
                continue
            yield obj
