"""Shared fixtures for unit tests."""

from __future__ import annotations

import pytest

from docdb.listing.core import SessionConfig
from docdb.listing.io.transport import (
    ListCollectionIdsResponse,
    ListDocumentsResponse,
)
from docdb.listing.models import Document

ROOT = "projects/test-project/databases/(default)/documents"


class FakeListingTransport:
    """In-memory transport paging over fixed data.

    Page tokens are the string offset of the next page. ``errors`` maps a
    zero-based call index to the exception raised on that call.
    """

    def __init__(self, documents=(), collection_ids=(), *, errors=None):
        self.documents = list(documents)
        self.collection_ids = list(collection_ids)
        self.errors = dict(errors or {})
        self.document_requests = []
        self.collection_id_requests = []
        self.closed = False

    @property
    def calls(self) -> int:
        return len(self.document_requests) + len(self.collection_id_requests)

    def _page(self, items, request):
        call_index = self.calls - 1
        if call_index in self.errors:
            raise self.errors[call_index]
        start = int(request.page_token) if request.page_token else 0
        end = start + request.page_size
        next_token = str(end) if end < len(items) else ""
        return items[start:end], next_token

    async def list_documents(self, request):
        self.document_requests.append(request)
        page, next_token = self._page(self.documents, request)
        return ListDocumentsResponse(documents=page, next_page_token=next_token)

    async def list_collection_ids(self, request):
        self.collection_id_requests.append(request)
        page, next_token = self._page(self.collection_ids, request)
        return ListCollectionIdsResponse(collection_ids=page, next_page_token=next_token)

    async def close(self):
        self.closed = True


def make_documents(count: int, collection: str = "users") -> list[Document]:
    return [
        Document(name=f"{ROOT}/{collection}/doc-{i:03d}", fields={"index": i, "name": f"user {i}"})
        for i in range(count)
    ]


@pytest.fixture
def session():
    """Session rooted at the test database with no retry delay."""
    return SessionConfig(documents_path=ROOT, max_retries=3)


@pytest.fixture
def documents():
    return make_documents(10)


@pytest.fixture
def transport_factory():
    return FakeListingTransport


@pytest.fixture
def document_factory():
    return make_documents
