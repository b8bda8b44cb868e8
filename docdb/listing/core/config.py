"""Session configuration for listing operations.

Architecture:
    A session is described by an immutable SessionConfig injected into the
    ListingClient. It carries the defaults every listing call falls back to:
    - Document-root path used when a request has no explicit parent
    - Consistency selector (read time or transaction) applied to every read
    - Retry bound and inter-attempt delay
    - Cache mode consulted by the cache gate

Design Decisions:
    - Frozen dataclasses: configuration is shared read-only across calls
    - with_* helpers return copies, matching the immutable request params
    - Inter-attempt delay defaults to zero and is an explicit knob
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime

from .constants import DEFAULT_DATABASE_ID, DEFAULT_MAX_RETRIES, documents_path
from .enums import CacheMode
from .exceptions import ValidationError


@dataclass(frozen=True)
class ReadTime:
    """Read documents as they were at a point in time."""

    read_time: datetime


@dataclass(frozen=True)
class TransactionId:
    """Read documents inside an already-open transaction."""

    value: bytes


ConsistencySelector = ReadTime | TransactionId


@dataclass(frozen=True)
class RetryPolicy:
    """Bounded retry policy for a single page fetch.

    Attributes:
        max_retries: Number of retries after the first attempt
        retry_delay: Delay in seconds before the first retry
        backoff_multiplier: Factor applied to the delay after each retry
            (1.0 keeps the delay constant)
    """

    max_retries: int = DEFAULT_MAX_RETRIES
    retry_delay: float = 0.0
    backoff_multiplier: float = 1.0

    def __post_init__(self) -> None:
        if self.max_retries < 0:
            raise ValidationError("max_retries must be >= 0")
        if self.retry_delay < 0:
            raise ValidationError("retry_delay must be >= 0")
        if self.backoff_multiplier < 1.0:
            raise ValidationError("backoff_multiplier must be >= 1.0")

    def delay_for(self, attempt: int) -> float:
        """Delay before retry number ``attempt`` (zero-based)."""
        return self.retry_delay * (self.backoff_multiplier**attempt)


@dataclass(frozen=True)
class SessionConfig:
    """Session defaults consumed by the listing layer.

    Attributes:
        documents_path: Default document-root path
            (``projects/{project}/databases/{database}/documents``)
        consistency_selector: Optional read time or transaction for reads
        max_retries: Retry bound for each page fetch
        retry_delay: Seconds to wait before the first retry
        backoff_multiplier: Growth factor for the retry delay
        cache_mode: How listings consult the document cache
    """

    documents_path: str
    consistency_selector: ConsistencySelector | None = None
    max_retries: int = DEFAULT_MAX_RETRIES
    retry_delay: float = 0.0
    backoff_multiplier: float = 1.0
    cache_mode: CacheMode = CacheMode.DISABLED

    def __post_init__(self) -> None:
        if not self.documents_path:
            raise ValidationError("documents_path must be a non-empty string")

    @classmethod
    def for_database(
        cls,
        project_id: str,
        database_id: str = DEFAULT_DATABASE_ID,
        **kwargs,
    ) -> SessionConfig:
        """Create a session rooted at a database's document path.

        Example:
            >>> SessionConfig.for_database("my-project").documents_path
            'projects/my-project/databases/(default)/documents'
        """
        if not project_id:
            raise ValidationError("project_id must be a non-empty string")
        return cls(documents_path=documents_path(project_id, database_id), **kwargs)

    @property
    def retry_policy(self) -> RetryPolicy:
        return RetryPolicy(
            max_retries=self.max_retries,
            retry_delay=self.retry_delay,
            backoff_multiplier=self.backoff_multiplier,
        )

    def with_consistency_selector(self, selector: ConsistencySelector | None) -> SessionConfig:
        return replace(self, consistency_selector=selector)

    def with_cache_mode(self, cache_mode: CacheMode) -> SessionConfig:
        return replace(self, cache_mode=cache_mode)
