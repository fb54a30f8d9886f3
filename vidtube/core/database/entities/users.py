"""
User entity models.

This module contains the database entities for platform accounts and
their per-video watch history. A user is also a "channel": videos, tweets
and subscriptions all point back to a user row.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import Field

from ..base import ID_LENGTH, Base, new_id, timestamp_field


class User(Base, table=True):
    """Entity for a registered account.

    Stores identity, profile images (URL plus the storage provider's
    public id, needed to destroy the asset later), the bcrypt password hash
    and the most recently issued refresh token.

    Table: users
    """

    __tablename__ = "users"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=ID_LENGTH)

    username: str = Field(max_length=64, unique=True, index=True)
    email: str = Field(max_length=255, unique=True, index=True)
    full_name: str = Field(max_length=128, index=True)

    avatar_url: str = Field(max_length=512)
    avatar_public_id: str = Field(max_length=255)
    cover_image_url: Optional[str] = Field(default=None, max_length=512)
    cover_image_public_id: Optional[str] = Field(default=None, max_length=255)

    password: str = Field(max_length=255)
    refresh_token: Optional[str] = Field(default=None, max_length=1024)

    created_at: datetime = timestamp_field(index=True)
    updated_at: datetime = timestamp_field(onupdate=True)

    def __repr__(self) -> str:
        return f"User(id={self.id}, username={self.username})"


class WatchHistory(Base, table=True):
    """One entry per (user, video); ``watched_at`` moves forward on every view.

    Table: watch_history
    """

    __tablename__ = "watch_history"
    __table_args__ = (UniqueConstraint("user_id", "video_id", name="uq_watch_history_user_video"),)

    id: str = Field(default_factory=new_id, primary_key=True, max_length=ID_LENGTH)
    user_id: str = Field(foreign_key="users.id", max_length=ID_LENGTH, index=True)
    video_id: str = Field(foreign_key="videos.id", max_length=ID_LENGTH, index=True)
    watched_at: datetime = timestamp_field(index=True)

    def __repr__(self) -> str:
        return f"WatchHistory(user_id={self.user_id}, video_id={self.video_id})"
