"""
Like entity models.

A like references exactly one of a video, a comment or a tweet. Each user
can like a given target at most once.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import CheckConstraint, UniqueConstraint
from sqlmodel import Field

from ..base import ID_LENGTH, Base, new_id, timestamp_field


class Like(Base, table=True):
    """Entity for a like on a video, comment or tweet.

    Table: likes
    """

    __tablename__ = "likes"
    __table_args__ = (
        CheckConstraint(
            "(CASE WHEN video_id IS NULL THEN 0 ELSE 1 END)"
            " + (CASE WHEN comment_id IS NULL THEN 0 ELSE 1 END)"
            " + (CASE WHEN tweet_id IS NULL THEN 0 ELSE 1 END) = 1",
            name="ck_likes_single_target",
        ),
        UniqueConstraint("liked_by_id", "video_id", name="uq_likes_user_video"),
        UniqueConstraint("liked_by_id", "comment_id", name="uq_likes_user_comment"),
        UniqueConstraint("liked_by_id", "tweet_id", name="uq_likes_user_tweet"),
    )

    id: str = Field(default_factory=new_id, primary_key=True, max_length=ID_LENGTH)

    video_id: Optional[str] = Field(default=None, foreign_key="videos.id", max_length=ID_LENGTH, index=True)
    comment_id: Optional[str] = Field(default=None, foreign_key="comments.id", max_length=ID_LENGTH, index=True)
    tweet_id: Optional[str] = Field(default=None, foreign_key="tweets.id", max_length=ID_LENGTH, index=True)

    liked_by_id: str = Field(foreign_key="users.id", max_length=ID_LENGTH, index=True)

    created_at: datetime = timestamp_field(index=True)

    @property
    def target_count(self) -> int:
        return sum(1 for target in (self.video_id, self.comment_id, self.tweet_id) if target is not None)

    def __repr__(self) -> str:
        return (
            f"Like(id={self.id}, video_id={self.video_id}, comment_id={self.comment_id}, "
            f"tweet_id={self.tweet_id}, liked_by_id={self.liked_by_id})"
        )
