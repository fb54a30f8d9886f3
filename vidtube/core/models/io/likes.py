"""
Like I/O models for API responses.
"""

from __future__ import annotations

from pydantic import BaseModel


class LikeToggleRead(BaseModel):
    """Outcome of a like toggle: True when the target is now liked."""

    is_liked: bool
