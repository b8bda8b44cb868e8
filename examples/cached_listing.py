#!/usr/bin/env python3
"""Serve a listing from a pre-populated cache without touching the network."""

from __future__ import annotations

import asyncio

from docdb.listing import (
    CacheMode,
    Document,
    InMemoryDocumentCache,
    ListDocParams,
    ListingClient,
    RESTListingTransport,
    SessionConfig,
)


async def main() -> None:
    session = SessionConfig.for_database("demo-project", cache_mode=CacheMode.READ_CACHED_ONLY)
    cache = InMemoryDocumentCache()
    cache.load_collection(
        f"{session.documents_path}/cities",
        [
            Document(name=f"{session.documents_path}/cities/{city}", fields={"name": city})
            for city in ("LON", "PAR", "TYO")
        ],
    )

    async with ListingClient(RESTListingTransport(), session, cache=cache) as client:
        cities = [doc.id async for doc in client.stream_list_doc(ListDocParams(collection_id="cities"))]
        missing = [doc async for doc in client.stream_list_doc(ListDocParams(collection_id="towns"))]

    print(f"Cached cities : {cities}")
    print(f"Uncached towns: {missing} (empty, no network call in read-cached-only mode)")


if __name__ == "__main__":
    asyncio.run(main())
