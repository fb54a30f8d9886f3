"""
Like repository interface and implementation.

A like points at exactly one target; toggling flips its existence.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import col, select

from ..entities.likes import Like
from ..entities.users import User
from ..entities.videos import Video
from .base import AsyncBaseRepository
from .videos import visible_to


class LikeRepository(AsyncBaseRepository[Like]):
    """Repository for like data access operations using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Like)

    async def find(
        self,
        user_id: str,
        *,
        video_id: Optional[str] = None,
        comment_id: Optional[str] = None,
        tweet_id: Optional[str] = None,
    ) -> Optional[Like]:
        stmt = select(Like).where(
            (Like.liked_by_id == user_id)
            & (Like.video_id == video_id if video_id else col(Like.video_id).is_(None))
            & (Like.comment_id == comment_id if comment_id else col(Like.comment_id).is_(None))
            & (Like.tweet_id == tweet_id if tweet_id else col(Like.tweet_id).is_(None))
        )
        return (await self.session.execute(stmt)).scalars().first()

    async def toggle(
        self,
        user_id: str,
        *,
        video_id: Optional[str] = None,
        comment_id: Optional[str] = None,
        tweet_id: Optional[str] = None,
    ) -> bool:
        """Like the target if not yet liked by the user, otherwise unlike it.

        Exactly one of ``video_id``, ``comment_id`` or ``tweet_id`` must be given.

        Returns:
            True if the target is liked after the call
        """
        like = Like(liked_by_id=user_id, video_id=video_id, comment_id=comment_id, tweet_id=tweet_id)
        if like.target_count != 1:
            raise ValueError("A like needs exactly one target")

        existing = await self.find(user_id, video_id=video_id, comment_id=comment_id, tweet_id=tweet_id)
        if existing is not None:
            await self.session.delete(existing)
            await self.session.commit()
            return False

        try:
            await self.create(like)
        except IntegrityError:
            # a concurrent request stored the same like first
            await self.session.rollback()
            return await self.find(user_id, video_id=video_id, comment_id=comment_id, tweet_id=tweet_id) is not None
        return True

    async def liked_videos(self, user_id: str) -> List[Tuple[Video, User]]:
        """Videos the user liked (and may still see), most recent like first."""
        stmt = (
            select(Video, User)
            .join(Like, Like.video_id == Video.id)
            .join(User, User.id == Video.owner_id)
            .where((Like.liked_by_id == user_id) & visible_to(user_id))
            .order_by(col(Like.created_at).desc())
        )
        result = await self.session.execute(stmt)
        return [tuple(row) for row in result.all()]
