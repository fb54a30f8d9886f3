"""
Channel dashboard aggregates.

Read-only queries over videos, subscriptions and likes for one channel.
"""

from __future__ import annotations

from typing import Dict

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.likes import Like
from ..entities.subscriptions import Subscription
from ..entities.videos import Video


class DashboardRepository:
    """Aggregate queries for a channel owner's dashboard."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_channel_stats(self, owner_id: str) -> Dict[str, int]:
        """Totals for a channel.

        Args:
            owner_id: Channel (user) ID

        Returns:
            Mapping with ``total_video_views``, ``total_subscribers``,
            ``total_videos`` and ``total_likes`` (likes on the owner's videos)
        """
        videos_stmt = select(func.count(Video.id), func.coalesce(func.sum(Video.views), 0)).where(
            Video.owner_id == owner_id
        )
        total_videos, total_views = (await self.session.execute(videos_stmt)).one()

        subscribers_stmt = select(func.count()).select_from(Subscription).where(Subscription.channel_id == owner_id)
        likes_stmt = (
            select(func.count(Like.id))
            .select_from(Like)
            .join(Video, Video.id == Like.video_id)
            .where(Video.owner_id == owner_id)
        )

        return {
            "total_video_views": int(total_views or 0),
            "total_subscribers": (await self.session.execute(subscribers_stmt)).scalar_one(),
            "total_videos": int(total_videos or 0),
            "total_likes": (await self.session.execute(likes_stmt)).scalar_one(),
        }
