"""
Playlist I/O models for API requests and responses.
"""

from __future__ import annotations

from datetime import datetime
from typing import List

from pydantic import BaseModel, ConfigDict, Field

from .videos import VideoRead


class PlaylistCreate(BaseModel):
    """Schema for creating a playlist."""

    name: str = Field(default="", description="Playlist name")
    description: str = Field(default="", description="Playlist description")
    video_ids: List[str] = Field(default_factory=list, description="Initial videos, in order")


class PlaylistUpdate(BaseModel):
    name: str = Field(default="", description="New playlist name")
    description: str = Field(default="", description="New playlist description")


class PlaylistRead(BaseModel):
    """Schema for reading a playlist from API."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: str
    owner_id: str
    video_ids: List[str] = Field(default_factory=list)
    total_videos: int = 0
    created_at: datetime
    updated_at: datetime


class PlaylistDetail(PlaylistRead):
    """Playlist together with its videos in playlist order."""

    videos: List[VideoRead] = Field(default_factory=list)
