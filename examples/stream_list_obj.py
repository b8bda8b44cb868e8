#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio
import logging
import os
from datetime import datetime

from pydantic import BaseModel, Field

from docdb.listing import (
    ListDocParams,
    ListingClient,
    OrderBy,
    RESTListingTransport,
    SessionConfig,
    SortDirection,
)


class MyTestStructure(BaseModel):
    some_id: str = Field(alias="_id")
    some_string: str = ""
    one_more_string: str = ""
    some_num: int = 0
    created_at: datetime | None = None


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Stream a collection as typed objects via REST")
    p.add_argument("collection", nargs="?", default="test")
    p.add_argument("--project", default=os.environ.get("PROJECT_ID"))
    p.add_argument("--page-size", type=int, default=3)
    p.add_argument("--max-retries", type=int, default=3)
    p.add_argument("--debug", action="store_true")
    return p.parse_args()


async def main() -> None:
    args = parse_args()
    logging.basicConfig(level=logging.DEBUG if args.debug else logging.INFO)
    if not args.project:
        raise SystemExit("Set PROJECT_ID or pass --project")

    token = os.environ.get("ACCESS_TOKEN")
    headers = {"Authorization": f"Bearer {token}"} if token else None
    session = SessionConfig.for_database(args.project, max_retries=args.max_retries)

    async with ListingClient(RESTListingTransport(headers=headers), session) as client:
        params = ListDocParams(
            collection_id=args.collection,
            page_size=args.page_size,
            order_by=[OrderBy(field_path="some_num", direction=SortDirection.DESCENDING)],
        )
        print("=" * 65)
        print(f"Collection : {args.collection}")
        print(f"Page size  : {args.page_size}")
        print("=" * 65)
        count = 0
        async for obj in client.stream_list_obj(params, MyTestStructure):
            count += 1
            print(f"{obj.some_id:20} | {obj.some_string:12} | {obj.some_num:>6}")
        print("-" * 65)
        print(f"Objects    : {count}")


if __name__ == "__main__":
    asyncio.run(main())
