"""Page fetching and pull-driven pagination streaming.

Architecture:
    PageFetcher turns listing params into exactly one retried page and
    reports its continuation token. PageStream walks all pages with an
    explicit two-state machine:

        Continue(params) --page with token--> Continue(params.with_page_token(token))
        Continue(params) --last page-------> Done
        Continue(params) --error-----------> Done   (error emitted as final element)
        Done             --(nothing)-------> iteration ends

    flatten_items() expands pages into their members in order and a page
    error into a single error element. drop_errors() logs error elements and
    removes them from the sequence.

Design Decisions:
    - Pull-driven: a page is requested only when the consumer asks for the
      next element, so a slow consumer delays the next fetch and no
      unconsumed pages are buffered
    - Error elements are exception instances placed in the sequence (the
      asyncio.gather(return_exceptions=True) convention) so strict decoding
      can surface failures without ending iteration
    - The state moves to Done before every fetch and is only re-armed by a
      successful page carrying a token, so no path can resume after an error
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Awaitable, Callable, Iterable
from dataclasses import dataclass
from typing import Generic, Protocol, TypeVar

from ..api.request_builder import (
    build_list_collection_ids_request,
    build_list_documents_request,
)
from ..core.config import SessionConfig
from ..core.exceptions import DocDBError
from ..io.transport import ListingTransport
from ..models import (
    ListCollectionIdsParams,
    ListCollectionIdsResult,
    ListDocParams,
    ListDocResult,
)
from .retry import RetryExecutor
from .telemetry import ListingObserver, LoggingObserver

logger = logging.getLogger(__name__)


class _PagedParams(Protocol):
    def with_page_token(self, page_token: str): ...


class _Page(Protocol):
    page_token: str | None


P = TypeVar("P", bound=_PagedParams)
R = TypeVar("R", bound=_Page)
I = TypeVar("I")  # noqa: E741


class PageFetcher:
    """Fetches exactly one page per call, with retries."""

    def __init__(
        self,
        transport: ListingTransport,
        session: SessionConfig,
        *,
        executor: RetryExecutor | None = None,
        observer: ListingObserver | None = None,
    ) -> None:
        self._transport = transport
        self._session = session
        self._observer = observer or LoggingObserver()
        self._executor = executor or RetryExecutor(session.retry_policy, self._observer)

    async def fetch_documents(self, params: ListDocParams) -> ListDocResult:
        """Fetch one page of documents.

        Raises:
            ConsistencySelectorError: Before any network call, if the session
                selector cannot be converted
            ExhaustedRetriesError: If retryable failures persist
            TransportError: On a non-retryable failure
        """
        request = build_list_documents_request(params, self._session)
        self._observer.on_fetch_start(collection_name=params.collection_id)
        response = await self._executor.run(
            lambda: self._transport.list_documents(request),
            collection_name=params.collection_id,
            result_size=lambda r: len(r.documents),
        )
        return ListDocResult(
            documents=list(response.documents),
            page_token=response.next_page_token or None,
        )

    async def fetch_collection_ids(self, params: ListCollectionIdsParams) -> ListCollectionIdsResult:
        """Fetch one page of collection ids."""
        request = build_list_collection_ids_request(params, self._session)
        self._observer.on_fetch_start(collection_name=None)
        response = await self._executor.run(
            lambda: self._transport.list_collection_ids(request),
            result_size=lambda r: len(r.collection_ids),
        )
        return ListCollectionIdsResult(
            collection_ids=list(response.collection_ids),
            page_token=response.next_page_token or None,
        )


@dataclass(frozen=True)
class Continue(Generic[P]):
    """More pages may follow; fetch the next one with ``params``."""

    params: P


@dataclass(frozen=True)
class Done:
    """Terminal state; no further output."""


DONE = Done()


class PageStream(Generic[P, R]):
    """Finite, single-pass async sequence of pages.

    Yields each fetched page, or one error element followed by the end of
    iteration. Not restartable: walk again with a fresh instance.
    """

    def __init__(self, initial_params: P, fetch_page: Callable[[P], Awaitable[R]]) -> None:
        self._state: Continue[P] | Done = Continue(initial_params)
        self._fetch_page = fetch_page

    @property
    def state(self) -> Continue[P] | Done:
        return self._state

    def __aiter__(self) -> PageStream[P, R]:
        return self

    async def __anext__(self) -> R | DocDBError:
        state = self._state
        if isinstance(state, Done):
            raise StopAsyncIteration

        self._state = DONE
        try:
            page = await self._fetch_page(state.params)
        except DocDBError as e:
            logger.debug(
                "Page fetch failed, ending stream: %s",
                e,
                extra={"error_type": type(e).__name__},
            )
            return e

        if page.page_token:
            self._state = Continue(state.params.with_page_token(page.page_token))
        return page


async def flatten_items(
    pages: AsyncIterator[R | DocDBError],
    extract: Callable[[R], Iterable[I]],
) -> AsyncIterator[I | DocDBError]:
    """Expand each page into its members; a page error becomes one element."""
    async for page in pages:
        if isinstance(page, DocDBError):
            yield page
            continue
        for item in extract(page):
            yield item


async def drop_errors(
    items: AsyncIterator[I | DocDBError],
    *,
    what: str = "items",
) -> AsyncIterator[I]:
    """Log and remove error elements from an item sequence."""
    async for item in items:
        if isinstance(item, DocDBError):
            logger.error(
                "Error occurred while consuming %s: %s",
                what,
                item,
                extra={"error_type": type(item).__name__},
            )
            continue
        yield item
