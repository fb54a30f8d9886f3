"""
Tweet entity models.

Short text posts published by a channel owner.
"""

from __future__ import annotations

from datetime import datetime

from sqlmodel import Field

from ..base import ID_LENGTH, Base, new_id, timestamp_field


class Tweet(Base, table=True):
    """Entity for a short text post.

    Table: tweets
    """

    __tablename__ = "tweets"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=ID_LENGTH)
    content: str = Field(max_length=300)
    owner_id: str = Field(foreign_key="users.id", max_length=ID_LENGTH, index=True)

    created_at: datetime = timestamp_field(index=True)
    updated_at: datetime = timestamp_field(onupdate=True)

    def __repr__(self) -> str:
        return f"Tweet(id={self.id}, owner_id={self.owner_id})"
