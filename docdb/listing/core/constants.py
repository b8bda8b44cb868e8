"""Shared listing constants.

This module centralizes defaults and transport settings so the session,
request builder and REST transport agree on them.
"""

from __future__ import annotations

DEFAULT_PAGE_SIZE = 100
DEFAULT_MAX_RETRIES = 3
DEFAULT_DATABASE_ID = "(default)"

REST_BASE_URL = "https://firestore.googleapis.com/v1"
DEFAULT_TIMEOUT_SECONDS = 30.0

# Transient statuses: request timeout, throttling, and server-side failures
RETRYABLE_HTTP_STATUSES = frozenset({408, 429, 500, 502, 503, 504})


def documents_path(project_id: str, database_id: str = DEFAULT_DATABASE_ID) -> str:
    """Build the document-root resource path for a database.

    Examples:
        >>> documents_path("my-project")
        'projects/my-project/databases/(default)/documents'
    """
    return f"projects/{project_id}/databases/{database_id}/documents"
