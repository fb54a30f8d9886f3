"""
Video repository interface and implementation.

Listing supports free-text title search, owner filtering, sorting and
visibility rules (unpublished videos are visible to their owner only).
Deleting a video removes everything that references it.
"""

from __future__ import annotations

from typing import Optional, Sequence, Tuple

from sqlalchemy import delete, or_, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import col, select

from ..entities.comments import Comment
from ..entities.likes import Like
from ..entities.playlists import PlaylistVideo
from ..entities.users import User, WatchHistory
from ..entities.videos import Video
from .base import AsyncBaseRepository, paginate

SORTABLE_COLUMNS = ("created_at", "updated_at", "views", "duration", "title")


def visible_to(viewer_id: str):
    """Filter clause for videos a viewer may see."""
    return or_(col(Video.is_published).is_(True), Video.owner_id == viewer_id)


class VideoRepository(AsyncBaseRepository[Video]):
    """Repository for video data access operations using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Video)

    async def list_videos(
        self,
        *,
        viewer_id: str,
        page: int,
        limit: int,
        query: Optional[str] = None,
        owner_id: Optional[str] = None,
        sort_by: str = "created_at",
        descending: bool = True,
    ) -> Tuple[Sequence[Tuple[Video, User]], int]:
        """List videos visible to ``viewer_id`` with their owners.

        Args:
            viewer_id: Requesting user
            page: 1-based page number
            limit: Page size
            query: Case-insensitive substring matched against the title
            owner_id: Only videos of this owner
            sort_by: One of ``SORTABLE_COLUMNS``
            descending: Sort direction

        Returns:
            ``(rows, total)`` where rows are ``(Video, User)`` pairs
        """
        if sort_by not in SORTABLE_COLUMNS:
            raise ValueError(f"Unsupported sort column: {sort_by}")

        stmt = select(Video, User).join(User, User.id == Video.owner_id).where(visible_to(viewer_id))
        if query:
            stmt = stmt.where(col(Video.title).icontains(query, autoescape=True))
        if owner_id:
            stmt = stmt.where(Video.owner_id == owner_id)

        column = getattr(Video, sort_by)
        order = column.desc() if descending else column.asc()
        tiebreak = col(Video.id).desc() if descending else col(Video.id).asc()
        stmt = stmt.order_by(order, tiebreak)

        return await paginate(self.session, stmt, page, limit)

    async def list_for_owner(self, owner_id: str, page: int, limit: int) -> Tuple[Sequence[Video], int]:
        """All videos of an owner, published or not, newest first."""
        stmt = (
            select(Video)
            .where(Video.owner_id == owner_id)
            .order_by(col(Video.created_at).desc(), col(Video.id).desc())
        )
        return await paginate(self.session, stmt, page, limit)

    async def increment_views(self, video: Video) -> Video:
        """Atomically add one view and return the refreshed video."""
        await self.session.execute(update(Video).where(Video.id == video.id).values(views=Video.views + 1))
        await self.session.commit()
        await self.session.refresh(video)
        return video

    async def delete_cascade(self, video: Video) -> None:
        """Delete a video with its comments, likes, playlist entries and history."""
        comment_ids = select(Comment.id).where(Comment.video_id == video.id)

        await self.session.execute(delete(Like).where(col(Like.comment_id).in_(comment_ids)))
        await self.session.execute(delete(Like).where(Like.video_id == video.id))
        await self.session.execute(delete(Comment).where(Comment.video_id == video.id))
        await self.session.execute(delete(PlaylistVideo).where(PlaylistVideo.video_id == video.id))
        await self.session.execute(delete(WatchHistory).where(WatchHistory.video_id == video.id))
        await self.session.delete(video)
        await self.session.commit()
