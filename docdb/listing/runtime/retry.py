"""Bounded retry execution for a single page fetch.

The executor runs one network attempt at a time inside an explicit loop
bounded by ``max_retries + 1`` attempts. Only TransportError flagged
``retryable`` is reattempted, and each retry re-issues the identical
operation (same request, same cursor). Retry state lives for one page
fetch only.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from time import perf_counter
from typing import TypeVar

from ..core.config import RetryPolicy
from ..core.exceptions import ExhaustedRetriesError, TransportError
from .telemetry import ListingObserver, LoggingObserver

T = TypeVar("T")


@dataclass
class RetryState:
    """Attempt counter scoped to one logical page fetch."""

    max_retries: int
    attempt: int = 0

    @property
    def can_retry(self) -> bool:
        return self.attempt < self.max_retries


class RetryExecutor:
    """Runs an async operation under a bounded retry policy."""

    def __init__(
        self,
        policy: RetryPolicy | None = None,
        observer: ListingObserver | None = None,
    ) -> None:
        """Initialize retry executor.

        Args:
            policy: Retry bound and inter-attempt delay (defaults to RetryPolicy())
            observer: Observability hooks (defaults to LoggingObserver)
        """
        self._policy = policy or RetryPolicy()
        self._observer = observer or LoggingObserver()

    @property
    def policy(self) -> RetryPolicy:
        return self._policy

    async def run(
        self,
        operation: Callable[[], Awaitable[T]],
        *,
        collection_name: str | None = None,
        result_size: Callable[[T], int] | None = None,
    ) -> T:
        """Execute ``operation`` with retries.

        Args:
            operation: Zero-argument coroutine factory performing one attempt
            collection_name: Collection reported to the observer
            result_size: Optional function measuring a successful result

        Returns:
            Result of the first successful attempt

        Raises:
            ExhaustedRetriesError: If a retryable error persists past the bound
            TransportError: If the transport reports a non-retryable failure
            Exception: Any other error raised by ``operation``, unchanged
        """
        state = RetryState(max_retries=self._policy.max_retries)
        last_error: TransportError | None = None
        fetch_start = perf_counter()

        for attempt in range(self._policy.max_retries + 1):
            state.attempt = attempt
            try:
                result = await operation()
            except TransportError as e:
                if not e.retryable:
                    raise
                last_error = e
                if not state.can_retry:
                    break
                self._observer.on_retry(
                    collection_name=collection_name,
                    attempt=attempt + 1,
                    max_retries=state.max_retries,
                    error=e,
                )
                delay = self._policy.delay_for(attempt)
                if delay > 0:
                    await asyncio.sleep(delay)
                continue

            self._observer.on_fetch_complete(
                collection_name=collection_name,
                response_time_ms=(perf_counter() - fetch_start) * 1000.0,
                result_size=result_size(result) if result_size else 0,
            )
            return result

        attempts = state.attempt + 1
        raise ExhaustedRetriesError(
            f"Listing failed after {attempts} attempts: {last_error}",
            attempts=attempts,
            last_error=last_error,
        ) from last_error
