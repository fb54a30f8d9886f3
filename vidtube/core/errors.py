"""Error types shared by the API layer.

Purpose:
- Provide a single typed exception (`ApiError`) that routers, dependencies and
  services raise when a request cannot be fulfilled.
- Carry the HTTP status and an optional list of structured error items so the
  exception handler can render the standard error envelope.
"""

from __future__ import annotations

from typing import Any, List, Optional


class ApiError(Exception):
    """Request-level failure rendered as an error envelope.

    Args:
        status_code: HTTP status code returned to the client.
        message: Human-readable error description.
        errors: Optional structured error items (e.g., field validation errors).
    """

    def __init__(
        self,
        status_code: int,
        message: str = "Something went wrong",
        errors: Optional[List[Any]] = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.errors = errors or []

    def __repr__(self) -> str:
        return f"ApiError(status_code={self.status_code}, message={self.message!r})"
