"""
Video entity models.

This module contains the database entity for published videos. The media
itself lives with the storage provider; the row keeps the delivery URLs and
the provider public ids needed to destroy the assets.
"""

from __future__ import annotations

from datetime import datetime

from sqlmodel import Field, Text

from ..base import ID_LENGTH, Base, new_id, timestamp_field


class Video(Base, table=True):
    """Entity for an uploaded video.

    Table: videos
    """

    __tablename__ = "videos"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=ID_LENGTH)

    # Media assets
    video_file_url: str = Field(max_length=512)
    video_file_public_id: str = Field(max_length=255)
    thumbnail_url: str = Field(max_length=512)
    thumbnail_public_id: str = Field(max_length=255)

    # Metadata
    title: str = Field(max_length=255, index=True)
    description: str = Field(sa_type=Text)
    duration: float = Field(default=0.0, ge=0)
    views: int = Field(default=0, ge=0)
    is_published: bool = Field(default=True, index=True)

    owner_id: str = Field(foreign_key="users.id", max_length=ID_LENGTH, index=True)

    created_at: datetime = timestamp_field(index=True)
    updated_at: datetime = timestamp_field(onupdate=True)

    def __repr__(self) -> str:
        return f"Video(id={self.id}, title={self.title}, owner_id={self.owner_id})"
