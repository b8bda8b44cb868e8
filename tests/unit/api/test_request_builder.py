"""Unit tests for transport request building."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta, timezone

import pytest

from docdb.listing.api.request_builder import (
    build_list_collection_ids_request,
    build_list_documents_request,
    consistency_selector_to_transport,
    serialize_order_by,
)
from docdb.listing.core import (
    ConsistencySelectorError,
    ReadTime,
    SessionConfig,
    SortDirection,
    TransactionId,
)
from docdb.listing.models import ListCollectionIdsParams, ListDocParams, OrderBy

ROOT = "projects/p/databases/(default)/documents"


@pytest.fixture
def session():
    return SessionConfig(documents_path=ROOT)


class TestBuildListDocumentsRequest:
    """Test ListDocumentsRequest construction."""

    def test_minimal_params_use_session_defaults(self, session):
        request = build_list_documents_request(ListDocParams(collection_id="users"), session)

        assert request.parent == ROOT
        assert request.collection_id == "users"
        assert request.page_size == 100
        assert request.page_token == ""
        assert request.order_by == ""
        assert request.mask is None
        assert request.consistency_selector is None
        assert request.show_missing is False

    def test_explicit_parent_and_token(self, session):
        params = ListDocParams(
            collection_id="orders",
            parent=f"{ROOT}/users/alice",
            page_size=20,
            page_token="next",
        )
        request = build_list_documents_request(params, session)

        assert request.parent == f"{ROOT}/users/alice"
        assert request.page_size == 20
        assert request.page_token == "next"

    def test_order_by_and_field_mask(self, session):
        params = ListDocParams(
            collection_id="users",
            order_by=(
                OrderBy(field_path="age", direction=SortDirection.DESCENDING),
                OrderBy(field_path="name"),
            ),
            return_only_fields=("name", "age"),
        )
        request = build_list_documents_request(params, session)

        assert request.order_by == "age desc, name asc"
        assert request.mask == ("name", "age")

    def test_read_time_selector_applied(self, session):
        pinned = session.with_consistency_selector(
            ReadTime(datetime(2024, 5, 1, 12, 30, tzinfo=UTC))
        )
        request = build_list_documents_request(ListDocParams(collection_id="users"), pinned)
        assert request.consistency_selector == {"readTime": "2024-05-01T12:30:00.000000Z"}

    def test_unconvertible_selector_raises(self, session):
        naive = session.with_consistency_selector(ReadTime(datetime(2024, 5, 1)))
        with pytest.raises(ConsistencySelectorError):
            build_list_documents_request(ListDocParams(collection_id="users"), naive)

    def test_pure_and_repeatable(self, session):
        params = ListDocParams(collection_id="users", page_token="t")
        assert build_list_documents_request(params, session) == build_list_documents_request(
            params, session
        )


class TestBuildListCollectionIdsRequest:
    def test_defaults(self, session):
        request = build_list_collection_ids_request(ListCollectionIdsParams(), session)
        assert request.parent == ROOT
        assert request.page_size == 100
        assert request.page_token == ""

    def test_transaction_selector(self, session):
        in_tx = session.with_consistency_selector(TransactionId(b"tx-1"))
        request = build_list_collection_ids_request(
            ListCollectionIdsParams(parent=f"{ROOT}/users/alice", page_token="p2"), in_tx
        )
        assert request.parent == f"{ROOT}/users/alice"
        assert request.page_token == "p2"
        assert request.consistency_selector == {"transaction": "dHgtMQ=="}


class TestConsistencySelectorConversion:
    def test_none(self):
        assert consistency_selector_to_transport(None) is None

    def test_read_time_normalised_to_utc(self):
        tz = timezone(timedelta(hours=2))
        selector = ReadTime(datetime(2024, 1, 1, 2, 0, tzinfo=tz))
        assert consistency_selector_to_transport(selector) == {
            "readTime": "2024-01-01T00:00:00.000000Z"
        }

    def test_empty_transaction_rejected(self):
        with pytest.raises(ConsistencySelectorError):
            consistency_selector_to_transport(TransactionId(b""))

    def test_unknown_selector_rejected(self):
        with pytest.raises(ConsistencySelectorError):
            consistency_selector_to_transport("yesterday")


def test_serialize_order_by_empty():
    assert serialize_order_by(None) == ""
    assert serialize_order_by(()) == ""
