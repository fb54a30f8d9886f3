"""Error types specific to the media storage layer.

Purpose:
- Provide a typed exception thrown by `CloudinaryClient` when the storage
  provider rejects or fails a request.
- Expose HTTP-oriented context (status code, response body) for diagnosis.

Usage:
- Catch `MediaStorageError` and inspect `status_code` or `details`.
"""

from __future__ import annotations

from typing import Any, Optional


class MediaStorageError(Exception):
    """Base error for media storage failures.

    Args:
        message: Human-readable error description.
        status_code: Optional HTTP status code returned by the provider.
        details: Optional structured payload from the provider (e.g., JSON body).
    """

    def __init__(self, message: str, *, status_code: Optional[int] = None, details: Optional[Any] = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.details = details


class MediaNotConfiguredError(MediaStorageError):
    """Raised when credentials for the storage provider are missing."""

    def __init__(self) -> None:
        super().__init__("Media storage is not configured")
