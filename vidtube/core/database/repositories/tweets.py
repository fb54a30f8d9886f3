"""
Tweet repository interface and implementation.
"""

from __future__ import annotations

from typing import Optional, Sequence, Tuple

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import col, select

from ..entities.comments import Comment
from ..entities.likes import Like
from ..entities.tweets import Tweet
from ..entities.users import User
from .base import AsyncBaseRepository, paginate

SORTABLE_COLUMNS = ("created_at", "updated_at")


class TweetRepository(AsyncBaseRepository[Tweet]):
    """Repository for tweet data access operations using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Tweet)

    async def list_tweets(
        self,
        *,
        page: int,
        limit: int,
        owner_id: Optional[str] = None,
        sort_by: str = "created_at",
        descending: bool = True,
    ) -> Tuple[Sequence[Tuple[Tweet, User]], int]:
        """Tweets with their authors, optionally restricted to one owner."""
        if sort_by not in SORTABLE_COLUMNS:
            raise ValueError(f"Unsupported sort column: {sort_by}")

        stmt = select(Tweet, User).join(User, User.id == Tweet.owner_id)
        if owner_id:
            stmt = stmt.where(Tweet.owner_id == owner_id)
        column = getattr(Tweet, sort_by)
        if descending:
            stmt = stmt.order_by(column.desc(), col(Tweet.id).desc())
        else:
            stmt = stmt.order_by(column.asc(), col(Tweet.id).asc())
        return await paginate(self.session, stmt, page, limit)

    async def delete_cascade(self, tweet: Tweet) -> None:
        """Delete a tweet with its comments and every like on either."""
        comment_ids = select(Comment.id).where(Comment.tweet_id == tweet.id)

        await self.session.execute(delete(Like).where(col(Like.comment_id).in_(comment_ids)))
        await self.session.execute(delete(Like).where(Like.tweet_id == tweet.id))
        await self.session.execute(delete(Comment).where(Comment.tweet_id == tweet.id))
        await self.session.delete(tweet)
        await self.session.commit()
