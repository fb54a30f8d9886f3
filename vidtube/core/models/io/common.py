"""
Shared I/O envelopes.

Every successful response is wrapped in ``ApiResponse`` and every list
endpoint that paginates returns a ``Page`` inside it.
"""

from __future__ import annotations

import math
from typing import Any, Generic, List, Optional, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Standard success envelope."""

    status_code: int = Field(default=200, description="HTTP status code of the response")
    data: Optional[T] = Field(default=None, description="Response payload")
    message: str = Field(default="Success", description="Human-readable outcome")
    success: bool = Field(default=True, description="True for status codes below 400")

    @classmethod
    def ok(cls, data: Any = None, message: str = "Success", status_code: int = 200) -> "ApiResponse":
        return cls(status_code=status_code, data=data, message=message, success=status_code < 400)


class ErrorResponse(BaseModel):
    """Standard error envelope."""

    status_code: int
    data: None = None
    message: str
    success: bool = False
    errors: List[Any] = Field(default_factory=list)


class Page(BaseModel, Generic[T]):
    """One page of a paginated listing."""

    docs: List[T] = Field(default_factory=list)
    total_docs: int = 0
    limit: int
    page: int
    total_pages: int
    has_prev_page: bool
    has_next_page: bool
    prev_page: Optional[int] = None
    next_page: Optional[int] = None

    @classmethod
    def build(cls, docs: List[Any], total_docs: int, page: int, limit: int) -> "Page":
        total_pages = max(1, math.ceil(total_docs / limit)) if limit else 1
        return cls(
            docs=docs,
            total_docs=total_docs,
            limit=limit,
            page=page,
            total_pages=total_pages,
            has_prev_page=page > 1,
            has_next_page=page < total_pages,
            prev_page=page - 1 if page > 1 else None,
            next_page=page + 1 if page < total_pages else None,
        )
