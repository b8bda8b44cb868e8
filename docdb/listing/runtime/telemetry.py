"""Structured logging hooks for listing operations.

This module defines the observer interface the listing layer reports to at
four well-defined points (fetch start, fetch end, retry, cache evaluated)
and the default observer that emits structured log records.
"""

from __future__ import annotations

import logging
from typing import Protocol

from ..core.enums import CacheResult

logger = logging.getLogger(__name__)


class ListingObserver(Protocol):
    """Protocol for observability collaborators.

    Observers are invoked inline from the listing call and must not raise.
    """

    def on_fetch_start(self, *, collection_name: str | None) -> None: ...

    def on_fetch_complete(
        self,
        *,
        collection_name: str | None,
        response_time_ms: float,
        result_size: int,
    ) -> None: ...

    def on_retry(
        self,
        *,
        collection_name: str | None,
        attempt: int,
        max_retries: int,
        error: Exception,
    ) -> None: ...

    def on_cache_evaluated(
        self,
        *,
        collection_name: str,
        cache_result: CacheResult,
        response_time_ms: float,
    ) -> None: ...


class LoggingObserver:
    """Default observer writing structured records to the module logger."""

    def on_fetch_start(self, *, collection_name: str | None) -> None:
        logger.debug("listing_fetch_started", extra={"collection_name": collection_name})

    def on_fetch_complete(
        self,
        *,
        collection_name: str | None,
        response_time_ms: float,
        result_size: int,
    ) -> None:
        logger.debug(
            "listing_fetch_completed",
            extra={
                "collection_name": collection_name,
                "response_time_ms": response_time_ms,
                "result_size": result_size,
            },
        )

    def on_retry(
        self,
        *,
        collection_name: str | None,
        attempt: int,
        max_retries: int,
        error: Exception,
    ) -> None:
        logger.warning(
            "Listing failed with %s. Retrying: %d/%d",
            error,
            attempt,
            max_retries,
            extra={
                "collection_name": collection_name,
                "attempt": attempt,
                "max_retries": max_retries,
                "error_type": type(error).__name__,
                "error_message": str(error),
            },
        )

    def on_cache_evaluated(
        self,
        *,
        collection_name: str,
        cache_result: CacheResult,
        response_time_ms: float,
    ) -> None:
        logger.debug(
            "listing_cache_evaluated",
            extra={
                "collection_name": collection_name,
                "cache_result": cache_result.value,
                "response_time_ms": response_time_ms,
            },
        )
