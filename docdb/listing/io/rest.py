"""REST binding of the listing transport.

Maps ListDocumentsRequest/ListCollectionIdsRequest onto the database's
public REST surface and unwraps its typed JSON values into plain Python
values:

    GET  {base}/{parent}/{collectionId}?pageSize=..&pageToken=..&orderBy=..
    POST {base}/{parent}:listCollectionIds  {"pageSize": .., "pageToken": ..}

Authentication is left to the caller through static request headers.
"""

from __future__ import annotations

import base64
import re
from datetime import datetime
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from ..core.constants import DEFAULT_TIMEOUT_SECONDS, REST_BASE_URL
from ..core.exceptions import TransportError
from ..models import Document
from .http import HTTPClient
from .transport import (
    ListCollectionIdsRequest,
    ListCollectionIdsResponse,
    ListDocumentsRequest,
    ListDocumentsResponse,
)

# The service returns nanosecond precision; datetime holds microseconds
_FRACTION_RE = re.compile(r"\.(\d{6})\d+")


class RESTListingTransport:
    """ListingTransport implementation over HTTP/JSON."""

    def __init__(
        self,
        *,
        base_url: str = REST_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        headers: dict[str, str] | None = None,
    ) -> None:
        self._http = HTTPClient(base_url=base_url, timeout=timeout)
        self._headers = dict(headers) if headers else None

    async def list_documents(self, request: ListDocumentsRequest) -> ListDocumentsResponse:
        query: list[tuple[str, str]] = [("pageSize", str(request.page_size))]
        if request.page_token:
            query.append(("pageToken", request.page_token))
        if request.order_by:
            query.append(("orderBy", request.order_by))
        if request.mask is not None:
            query.extend(("mask.fieldPaths", path) for path in request.mask)
        if request.show_missing:
            query.append(("showMissing", "true"))
        if request.consistency_selector:
            query.extend((key, str(value)) for key, value in request.consistency_selector.items())

        data = _expect_object(
            await self._http.get(
                f"/{request.parent}/{request.collection_id}", params=query, headers=self._headers
            )
        )
        return ListDocumentsResponse(
            documents=[parse_document(raw) for raw in data.get("documents", [])],
            next_page_token=data.get("nextPageToken", ""),
        )

    async def list_collection_ids(
        self, request: ListCollectionIdsRequest
    ) -> ListCollectionIdsResponse:
        body: dict[str, Any] = {"pageSize": request.page_size}
        if request.page_token:
            body["pageToken"] = request.page_token
        if request.consistency_selector:
            body.update(request.consistency_selector)

        data = _expect_object(
            await self._http.post(
                f"/{request.parent}:listCollectionIds", json=body, headers=self._headers
            )
        )
        return ListCollectionIdsResponse(
            collection_ids=list(data.get("collectionIds", [])),
            next_page_token=data.get("nextPageToken", ""),
        )

    async def close(self) -> None:
        await self._http.close()

    async def __aenter__(self) -> RESTListingTransport:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()


def _expect_object(data: Any) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise TransportError(
            f"Listing response must be a JSON object, got {type(data).__name__}"
        )
    return data


def parse_document(raw: dict[str, Any]) -> Document:
    """Convert a REST document payload into a Document."""
    try:
        return Document(
            name=raw["name"],
            fields={key: decode_value(value) for key, value in raw.get("fields", {}).items()},
            create_time=_parse_timestamp(raw.get("createTime")),
            update_time=_parse_timestamp(raw.get("updateTime")),
        )
    except (KeyError, TypeError, AttributeError, ValueError, PydanticValidationError) as e:
        raise TransportError(f"Malformed document in listing response: {e}") from e


def decode_value(value: dict[str, Any]) -> Any:
    """Unwrap one typed REST value into a plain Python value."""
    if "nullValue" in value:
        return None
    if "booleanValue" in value:
        return bool(value["booleanValue"])
    if "integerValue" in value:
        return int(value["integerValue"])
    if "doubleValue" in value:
        return float(value["doubleValue"])
    if "stringValue" in value:
        return value["stringValue"]
    if "timestampValue" in value:
        return _parse_timestamp(value["timestampValue"])
    if "bytesValue" in value:
        return base64.b64decode(value["bytesValue"])
    if "referenceValue" in value:
        return value["referenceValue"]
    if "geoPointValue" in value:
        point = value["geoPointValue"]
        return {"latitude": point.get("latitude", 0.0), "longitude": point.get("longitude", 0.0)}
    if "arrayValue" in value:
        return [decode_value(item) for item in value["arrayValue"].get("values", [])]
    if "mapValue" in value:
        return {
            key: decode_value(item) for key, item in value["mapValue"].get("fields", {}).items()
        }
    raise ValueError(f"Unsupported value type: {sorted(value)}")


def _parse_timestamp(value: str | None) -> datetime | None:
    if not value:
        return None
    value = _FRACTION_RE.sub(r".\1", value)
    return datetime.fromisoformat(value.replace("Z", "+00:00"))
