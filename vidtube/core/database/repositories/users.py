"""
User repository interface and implementation.

This module provides data access operations for accounts, channel profile
aggregates and watch history.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from sqlalchemy import func, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..base import utc_now
from ..entities.subscriptions import Subscription
from ..entities.users import User, WatchHistory
from ..entities.videos import Video
from .base import AsyncBaseRepository


@dataclass(frozen=True)
class ChannelProfile:
    """A channel together with its subscription aggregates."""

    user: User
    subscribers_count: int
    channels_subscribed_to_count: int
    is_subscribed: bool


class UserRepository(AsyncBaseRepository[User]):
    """Repository for user data access operations using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, User)

    async def get_by_username(self, username: str) -> Optional[User]:
        stmt = select(User).where(User.username == username.strip().lower())
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def get_by_username_or_email(
        self, username: Optional[str] = None, email: Optional[str] = None
    ) -> Optional[User]:
        """Find the user matching either identifier.

        Args:
            username: Username (compared lowercased)
            email: Email address (compared lowercased)

        Returns:
            Matching User or None
        """
        clauses = []
        if username:
            clauses.append(User.username == username.strip().lower())
        if email:
            clauses.append(User.email == email.strip().lower())
        if not clauses:
            return None
        result = await self.session.execute(select(User).where(or_(*clauses)))
        return result.scalars().first()

    async def email_taken(self, email: str, exclude_user_id: Optional[str] = None) -> bool:
        stmt = select(User.id).where(User.email == email.strip().lower())
        if exclude_user_id:
            stmt = stmt.where(User.id != exclude_user_id)
        result = await self.session.execute(stmt)
        return result.first() is not None

    async def set_refresh_token(self, user: User, refresh_token: Optional[str]) -> User:
        """Store (or clear, with ``None``) the user's current refresh token."""
        user.refresh_token = refresh_token
        self.session.add(user)
        await self.session.commit()
        await self.session.refresh(user)
        return user

    async def get_channel_profile(self, username: str, viewer_id: str) -> Optional[ChannelProfile]:
        """Load a channel by username with its subscription aggregates.

        Args:
            username: Channel username
            viewer_id: ID of the requesting user, for ``is_subscribed``

        Returns:
            ChannelProfile or None when no such user exists
        """
        user = await self.get_by_username(username)
        if user is None:
            return None

        subscribers = select(func.count()).select_from(Subscription).where(Subscription.channel_id == user.id)
        subscribed_to = select(func.count()).select_from(Subscription).where(Subscription.subscriber_id == user.id)
        viewer = select(func.count()).select_from(Subscription).where(
            (Subscription.channel_id == user.id) & (Subscription.subscriber_id == viewer_id)
        )

        return ChannelProfile(
            user=user,
            subscribers_count=(await self.session.execute(subscribers)).scalar_one(),
            channels_subscribed_to_count=(await self.session.execute(subscribed_to)).scalar_one(),
            is_subscribed=(await self.session.execute(viewer)).scalar_one() > 0,
        )

    async def record_watch(self, user_id: str, video_id: str) -> WatchHistory:
        """Add a video to the user's history, or move it to the front if present."""
        stmt = select(WatchHistory).where((WatchHistory.user_id == user_id) & (WatchHistory.video_id == video_id))
        entry = (await self.session.execute(stmt)).scalars().first()
        if entry is None:
            entry = WatchHistory(user_id=user_id, video_id=video_id)
        else:
            entry.watched_at = utc_now()
        self.session.add(entry)
        await self.session.commit()
        await self.session.refresh(entry)
        return entry

    async def get_watch_history(self, user_id: str) -> List[Tuple[Video, User]]:
        """Watched videos with their owners, most recently watched first."""
        stmt = (
            select(Video, User)
            .join(WatchHistory, WatchHistory.video_id == Video.id)
            .join(User, User.id == Video.owner_id)
            .where(WatchHistory.user_id == user_id)
            .order_by(WatchHistory.watched_at.desc())  # type: ignore
        )
        result = await self.session.execute(stmt)
        return [tuple(row) for row in result.all()]
