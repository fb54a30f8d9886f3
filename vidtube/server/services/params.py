"""
Shared request parameter helpers.

Identifiers are 32 lowercase hex characters; anything else is rejected
with 400 before touching the database.
"""

import re
from typing import Optional

from fastapi import Query

from vidtube.core.errors import ApiError
from vidtube.server.core import constant

_ID_PATTERN = re.compile(r"^[0-9a-f]{32}$")


def is_valid_id(value: Optional[str]) -> bool:
    return bool(value) and _ID_PATTERN.match(value) is not None


def ensure_id(value: Optional[str], name: str = "id") -> str:
    """Return ``value`` if it is a well-formed identifier, else raise 400."""
    if not is_valid_id(value):
        raise ApiError(400, f"Invalid {name}")
    return value


def require_text(value: Optional[str], message: str) -> str:
    """Return ``value`` stripped, raising 400 with ``message`` when blank."""
    text = (value or "").strip()
    if not text:
        raise ApiError(400, message)
    return text


class PageParams:
    """``page``/``limit`` query parameters for paginated listings."""

    def __init__(
        self,
        page: int = Query(constant.DEFAULT_PAGE, ge=1, description="1-based page number"),
        limit: int = Query(
            constant.DEFAULT_PAGE_LIMIT, ge=1, le=constant.MAX_PAGE_LIMIT, description="Items per page"
        ),
    ) -> None:
        self.page = page
        self.limit = limit
