"""
Comment repository interface and implementation.

Comments hang off either a video or a tweet and may form reply trees.
Deleting a comment removes its whole reply subtree and the likes on it.
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import col, select

from ..entities.comments import Comment
from ..entities.likes import Like
from ..entities.users import User
from .base import AsyncBaseRepository, paginate


class CommentRepository(AsyncBaseRepository[Comment]):
    """Repository for comment data access operations using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Comment)

    async def list_for_target(
        self,
        *,
        page: int,
        limit: int,
        video_id: Optional[str] = None,
        tweet_id: Optional[str] = None,
    ) -> Tuple[Sequence[Tuple[Comment, User]], int]:
        """Comments on one video or tweet with their authors, newest first."""
        stmt = select(Comment, User).join(User, User.id == Comment.owner_id)
        if video_id is not None:
            stmt = stmt.where(Comment.video_id == video_id)
        else:
            stmt = stmt.where(Comment.tweet_id == tweet_id)
        stmt = stmt.order_by(col(Comment.created_at).desc(), col(Comment.id).desc())
        return await paginate(self.session, stmt, page, limit)

    async def collect_subtree_ids(self, comment_id: str) -> List[str]:
        """IDs of a comment and all of its transitive replies."""
        collected = [comment_id]
        frontier = [comment_id]
        while frontier:
            result = await self.session.execute(select(Comment.id).where(col(Comment.reply_to_id).in_(frontier)))
            frontier = [child for child in result.scalars().all() if child not in collected]
            collected.extend(frontier)
        return collected

    async def delete_subtree(self, comment: Comment) -> int:
        """Delete a comment, its replies and the likes on all of them.

        Returns:
            Number of comments removed
        """
        ids = await self.collect_subtree_ids(comment.id)
        await self.session.execute(delete(Like).where(col(Like.comment_id).in_(ids)))
        await self.session.execute(delete(Comment).where(col(Comment.id).in_(ids)))
        await self.session.commit()
        return len(ids)
