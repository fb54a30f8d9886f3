"""
Comment entity models.

A comment targets exactly one video or one tweet and may reply to another
comment on the same target.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import CheckConstraint
from sqlmodel import Field, Text

from ..base import ID_LENGTH, Base, new_id, timestamp_field


class Comment(Base, table=True):
    """Entity for a comment on a video or a tweet.

    Table: comments
    """

    __tablename__ = "comments"
    __table_args__ = (
        CheckConstraint(
            "(CASE WHEN video_id IS NULL THEN 0 ELSE 1 END) + (CASE WHEN tweet_id IS NULL THEN 0 ELSE 1 END) = 1",
            name="ck_comments_single_target",
        ),
    )

    id: str = Field(default_factory=new_id, primary_key=True, max_length=ID_LENGTH)
    content: str = Field(sa_type=Text)

    video_id: Optional[str] = Field(default=None, foreign_key="videos.id", max_length=ID_LENGTH, index=True)
    tweet_id: Optional[str] = Field(default=None, foreign_key="tweets.id", max_length=ID_LENGTH, index=True)
    reply_to_id: Optional[str] = Field(default=None, foreign_key="comments.id", max_length=ID_LENGTH, index=True)

    owner_id: str = Field(foreign_key="users.id", max_length=ID_LENGTH, index=True)

    created_at: datetime = timestamp_field(index=True)
    updated_at: datetime = timestamp_field(onupdate=True)

    def __repr__(self) -> str:
        return f"Comment(id={self.id}, video_id={self.video_id}, tweet_id={self.tweet_id})"
