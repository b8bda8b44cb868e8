"""ListingClient facade for paged, retried and cached listings.

The ListingClient provides a high-level interface over a ListingTransport,
offering single-page list_* methods and lazily paged stream_* methods.

Architecture:
    This module implements the Facade pattern over the runtime components:
    - CacheGate decides whether a document listing is served locally
    - PageStream drives PageFetcher page by page (each fetch retried by
      RetryExecutor) and flatten_items expands pages into items
    - DecodeAdapter converts documents to typed objects

Design Decisions:
    - Single-page methods raise on failure
    - *_with_errors streams surface a failure as a final exception element;
      the plain streams log it and end early, so a short plain stream is a
      lossy event, not necessarily success
    - Transport, cache and observer injection allows testing with fakes
    - Context manager pattern ensures the transport is closed

Example:
    >>> session = SessionConfig.for_database("my-project")
    >>> async with ListingClient(RESTListingTransport(), session) as client:
    ...     async for doc in client.stream_list_doc(ListDocParams(collection_id="users")):
    ...         print(doc.id)
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from typing import Any

from ..core.config import SessionConfig
from ..core.exceptions import DocDBError, ValidationError
from ..io.transport import ListingTransport
from ..models import (
    Document,
    ListCollectionIdsParams,
    ListCollectionIdsResult,
    ListDocParams,
    ListDocResult,
)
from ..runtime.cache import CacheGate, DocumentCache, UseCached
from ..runtime.decode import DecodeAdapter, Decoder, model_decoder
from ..runtime.pagination import PageFetcher, PageStream, drop_errors, flatten_items
from ..runtime.retry import RetryExecutor
from ..runtime.telemetry import ListingObserver, LoggingObserver

logger = logging.getLogger(__name__)


class ListingClient:
    """High-level facade for listing documents and collection ids."""

    def __init__(
        self,
        transport: ListingTransport,
        session: SessionConfig,
        *,
        cache: DocumentCache | None = None,
        observer: ListingObserver | None = None,
    ) -> None:
        """Initialize the ListingClient.

        Args:
            transport: Transport performing the remote listing calls
            session: Session defaults (document root, consistency, retries, cache mode)
            cache: Optional pre-populated document cache
            observer: Observability hooks (defaults to LoggingObserver)
        """
        self._transport = transport
        self._session = session
        self._observer = observer or LoggingObserver()
        self._fetcher = PageFetcher(
            transport,
            session,
            executor=RetryExecutor(session.retry_policy, self._observer),
            observer=self._observer,
        )
        self._cache_gate = CacheGate(
            cache, session.cache_mode, session.documents_path, self._observer
        )
        self._closed = False

    @property
    def session(self) -> SessionConfig:
        return self._session

    async def list_doc(self, params: ListDocParams) -> ListDocResult:
        """Fetch one page of documents.

        Raises:
            ConsistencySelectorError: If the session selector cannot be converted
            ExhaustedRetriesError: If retryable failures exceed the retry bound
            TransportError: On a non-retryable transport failure
        """
        return await self._fetcher.fetch_documents(params)

    async def stream_list_doc_with_errors(
        self, params: ListDocParams
    ) -> AsyncIterator[Document | DocDBError]:
        """Stream all documents of a collection, surfacing a failure inline.

        Yields:
            Documents in cursor order; on failure, one final DocDBError
        """
        logger.debug("Streaming documents", extra={"collection_name": params.collection_id})
        outcome = await self._cache_gate.evaluate(params)
        if isinstance(outcome, UseCached):
            for document in outcome.documents:
                yield document
            return

        pages = PageStream(params, self._fetcher.fetch_documents)
        async for item in flatten_items(pages, lambda page: page.documents):
            yield item

    async def stream_list_doc(self, params: ListDocParams) -> AsyncIterator[Document]:
        """Stream all documents of a collection; a failure is logged and ends the stream."""
        async for document in drop_errors(
            self.stream_list_doc_with_errors(params), what="documents"
        ):
            yield document

    async def stream_list_obj(
        self,
        params: ListDocParams,
        model: Any = None,
        *,
        decoder: Decoder[Any] | None = None,
    ) -> AsyncIterator[Any]:
        """Stream documents decoded to ``model``; undecodable documents are dropped.

        Args:
            params: Listing params
            model: Target type validated with pydantic
            decoder: Custom decoder used instead of ``model``
        """
        adapter = DecodeAdapter(self._resolve_decoder(model, decoder), strict=False)
        async for obj in adapter.decode_stream(self.stream_list_doc(params)):
            yield obj

    async def stream_list_obj_with_errors(
        self,
        params: ListDocParams,
        model: Any = None,
        *,
        decoder: Decoder[Any] | None = None,
    ) -> AsyncIterator[Any]:
        """Stream decoded documents; decode failures appear in place as DecodeError."""
        adapter = DecodeAdapter(self._resolve_decoder(model, decoder), strict=True)
        async for obj in adapter.decode_stream(self.stream_list_doc_with_errors(params)):
            yield obj

    async def list_collection_ids(
        self, params: ListCollectionIdsParams | None = None
    ) -> ListCollectionIdsResult:
        """Fetch one page of collection ids (root collections by default)."""
        return await self._fetcher.fetch_collection_ids(params or ListCollectionIdsParams())

    async def stream_list_collection_ids_with_errors(
        self, params: ListCollectionIdsParams | None = None
    ) -> AsyncIterator[str | DocDBError]:
        """Stream all collection ids, surfacing a failure inline."""
        pages = PageStream(params or ListCollectionIdsParams(), self._fetcher.fetch_collection_ids)
        async for item in flatten_items(pages, lambda page: page.collection_ids):
            yield item

    async def stream_list_collection_ids(
        self, params: ListCollectionIdsParams | None = None
    ) -> AsyncIterator[str]:
        """Stream all collection ids; a failure is logged and ends the stream."""
        async for collection_id in drop_errors(
            self.stream_list_collection_ids_with_errors(params), what="collection ids"
        ):
            yield collection_id

    @staticmethod
    def _resolve_decoder(model: Any, decoder: Decoder[Any] | None) -> Decoder[Any]:
        if decoder is not None:
            return decoder
        if model is None:
            raise ValidationError("Either model or decoder must be provided")
        return model_decoder(model)

    async def close(self) -> None:
        """Close the underlying transport."""
        if self._closed:
            return
        logger.debug("Closing ListingClient")
        await self._transport.close()
        self._closed = True

    async def __aenter__(self) -> ListingClient:
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()
