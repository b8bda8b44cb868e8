"""Runtime orchestration components (retry, pagination, cache gate, decoding)."""

from .cache import (
    CacheGate,
    CacheLookupOutcome,
    DocumentCache,
    InMemoryDocumentCache,
    SkipCache,
    UseCached,
)
from .decode import DecodeAdapter, Decoder, model_decoder
from .pagination import (
    DONE,
    Continue,
    Done,
    PageFetcher,
    PageStream,
    drop_errors,
    flatten_items,
)
from .retry import RetryExecutor, RetryState
from .telemetry import ListingObserver, LoggingObserver

__all__ = [
    "RetryExecutor",
    "RetryState",
    "PageFetcher",
    "PageStream",
    "Continue",
    "Done",
    "DONE",
    "flatten_items",
    "drop_errors",
    "CacheGate",
    "CacheLookupOutcome",
    "DocumentCache",
    "InMemoryDocumentCache",
    "UseCached",
    "SkipCache",
    "DecodeAdapter",
    "Decoder",
    "model_decoder",
    "ListingObserver",
    "LoggingObserver",
]
