"""
Video I/O models for API requests and responses.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict

from .users import UserSummary


class VideoSortField(str, Enum):
    """Columns a video listing can be sorted by."""

    CREATED_AT = "created_at"
    UPDATED_AT = "updated_at"
    VIEWS = "views"
    DURATION = "duration"
    TITLE = "title"


class SortType(str, Enum):
    ASC = "asc"
    DESC = "desc"


class VideoRead(BaseModel):
    """Schema for reading a video from API."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    video_file_url: str
    thumbnail_url: str
    title: str
    description: str
    duration: float
    views: int
    is_published: bool
    owner_id: str
    created_at: datetime
    updated_at: datetime


class VideoWithOwner(VideoRead):
    """Video joined with its owner's public profile."""

    owner: UserSummary

    @classmethod
    def from_row(cls, video: Any, owner: Any) -> "VideoWithOwner":
        return cls(**VideoRead.model_validate(video).model_dump(), owner=UserSummary.model_validate(owner))


class PublishStatusRead(BaseModel):
    is_published: bool


class ViewCountRead(BaseModel):
    views: int
