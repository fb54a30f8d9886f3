"""
Comment I/O models for API requests and responses.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from .users import UserSummary


class CommentCreate(BaseModel):
    """Schema for adding a comment to a video or tweet."""

    content: str = Field(default="", description="Comment text")
    reply_to: Optional[str] = Field(default=None, description="Parent comment ID when replying")


class CommentUpdate(BaseModel):
    content: str = Field(default="", description="New comment text")


class CommentRead(BaseModel):
    """Schema for reading a comment from API."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    content: str
    video_id: Optional[str] = None
    tweet_id: Optional[str] = None
    reply_to_id: Optional[str] = None
    owner_id: str
    created_at: datetime
    updated_at: datetime


class CommentWithOwner(CommentRead):
    """Comment joined with its author's public profile."""

    owner: UserSummary

    @classmethod
    def from_row(cls, comment: Any, owner: Any) -> "CommentWithOwner":
        return cls(**CommentRead.model_validate(comment).model_dump(), owner=UserSummary.model_validate(owner))
