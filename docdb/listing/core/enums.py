"""Core enumerations shared across the listing layer.

Key Types:
    - SortDirection: Ordering direction for listed documents
    - CacheMode: How a session consults its local document cache
    - CacheResult: Outcome recorded for a cache evaluation
"""

from enum import Enum


class SortDirection(str, Enum):
    """Ordering direction, serialised in the transport's ordering grammar."""

    ASCENDING = "asc"
    DESCENDING = "desc"


class CacheMode(str, Enum):
    """Cache behaviour for document listings.

    DISABLED never consults the cache. READ_CACHED_ONLY serves listings
    exclusively from the cache and never reaches the network. READ_THROUGH
    serves cache hits locally and falls back to the network on a miss.
    """

    DISABLED = "disabled"
    READ_CACHED_ONLY = "read_cached_only"
    READ_THROUGH = "read_through"


class CacheResult(str, Enum):
    HIT = "hit"
    MISS = "miss"
