"""Cache gate consulted before a document listing reaches the network.

Architecture:
    The gate is a runtime-selected strategy: a CacheMode value plus an
    injected DocumentCache collaborator. It answers one question per
    listing: serve the result locally (UseCached) or let pagination proceed
    against the transport (SkipCache).

    - DISABLED or no cache: SkipCache, without touching the cache
    - READ_CACHED_ONLY: hit -> UseCached(documents); miss -> UseCached([]),
      so the network path is never reached in this mode
    - READ_THROUGH: hit -> UseCached(documents); miss -> SkipCache

    The cache's storage engine and eviction policy are out of scope; the
    gate only needs ``lookup_all_documents(path)``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from time import perf_counter
from typing import Protocol

from ..core.enums import CacheMode, CacheResult
from ..core.exceptions import ValidationError
from ..models import Document, ListDocParams
from .telemetry import ListingObserver, LoggingObserver

logger = logging.getLogger(__name__)


class DocumentCache(Protocol):
    """Protocol for a pre-populated local document cache."""

    async def lookup_all_documents(self, collection_path: str) -> list[Document] | None:
        """Return the full materialised document list at a path, or None on miss."""
        ...


@dataclass(frozen=True)
class UseCached:
    """Serve the listing from these documents; do not call the transport."""

    documents: list[Document] = field(default_factory=list)


@dataclass(frozen=True)
class SkipCache:
    """Defer to the network listing path."""


CacheLookupOutcome = UseCached | SkipCache


class InMemoryDocumentCache:
    """DocumentCache backed by a dict of collection path -> documents.

    Collections are loaded whole; a path that was never loaded is a miss,
    while a loaded empty collection is a hit with no documents.
    """

    def __init__(self) -> None:
        self._collections: dict[str, list[Document]] = {}

    def load_collection(self, collection_path: str, documents: Iterable[Document]) -> None:
        self._collections[collection_path] = list(documents)

    def invalidate(self, collection_path: str) -> None:
        self._collections.pop(collection_path, None)

    async def lookup_all_documents(self, collection_path: str) -> list[Document] | None:
        documents = self._collections.get(collection_path)
        return list(documents) if documents is not None else None


class CacheGate:
    """Decides whether a document listing is served from the cache."""

    def __init__(
        self,
        cache: DocumentCache | None,
        mode: CacheMode,
        documents_path: str,
        observer: ListingObserver | None = None,
    ) -> None:
        """Initialize cache gate.

        Args:
            cache: Cache collaborator (required unless mode is DISABLED)
            mode: Session cache mode
            documents_path: Session document root used when params have no parent
            observer: Observability hooks (defaults to LoggingObserver)

        Raises:
            ValidationError: If mode enables the cache but no cache is given
        """
        if cache is None and mode is not CacheMode.DISABLED:
            raise ValidationError(f"cache_mode {mode.name} requires a document cache")
        self._cache = cache
        self._mode = mode
        self._documents_path = documents_path
        self._observer = observer or LoggingObserver()

    @property
    def active(self) -> bool:
        return self._mode is not CacheMode.DISABLED

    def collection_path(self, params: ListDocParams) -> str:
        parent = params.parent or self._documents_path
        return f"{parent}/{params.collection_id}"

    async def evaluate(self, params: ListDocParams) -> CacheLookupOutcome:
        if not self.active:
            return SkipCache()

        lookup_start = perf_counter()
        cached = await self._cache.lookup_all_documents(self.collection_path(params))
        response_time_ms = (perf_counter() - lookup_start) * 1000.0

        self._observer.on_cache_evaluated(
            collection_name=params.collection_id,
            cache_result=CacheResult.HIT if cached is not None else CacheResult.MISS,
            response_time_ms=response_time_ms,
        )

        if cached is not None:
            logger.debug("Reading all %s documents from cache", params.collection_id)
            return UseCached(list(cached))

        if self._mode is CacheMode.READ_CACHED_ONLY:
            logger.debug(
                "Cache doesn't have documents for %s and mode is read-cached-only, "
                "returning empty result",
                params.collection_id,
            )
            return UseCached([])

        logger.debug(
            "Cache doesn't have documents for %s, reading from the database",
            params.collection_id,
        )
        return SkipCache()
