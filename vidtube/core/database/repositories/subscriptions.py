"""
Subscription repository interface and implementation.
"""

from __future__ import annotations

from typing import Optional, Sequence, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import col, select

from ..entities.subscriptions import Subscription
from ..entities.users import User
from .base import AsyncBaseRepository, paginate


class SubscriptionRepository(AsyncBaseRepository[Subscription]):
    """Repository for subscriber -> channel relations using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Subscription)

    async def find(self, subscriber_id: str, channel_id: str) -> Optional[Subscription]:
        stmt = select(Subscription).where(
            (Subscription.subscriber_id == subscriber_id) & (Subscription.channel_id == channel_id)
        )
        return (await self.session.execute(stmt)).scalars().first()

    async def toggle(self, subscriber_id: str, channel_id: str) -> bool:
        """Subscribe if not subscribed yet, otherwise unsubscribe.

        Returns:
            True if subscribed after the call
        """
        existing = await self.find(subscriber_id, channel_id)
        if existing is not None:
            await self.session.delete(existing)
            await self.session.commit()
            return False
        try:
            await self.create(Subscription(subscriber_id=subscriber_id, channel_id=channel_id))
        except IntegrityError:
            # a concurrent request subscribed first
            await self.session.rollback()
            return await self.find(subscriber_id, channel_id) is not None
        return True

    async def list_subscribers(self, channel_id: str, page: int, limit: int) -> Tuple[Sequence[User], int]:
        """Users subscribed to a channel, most recent subscription first."""
        stmt = (
            select(User)
            .join(Subscription, Subscription.subscriber_id == User.id)
            .where(Subscription.channel_id == channel_id)
            .order_by(col(Subscription.created_at).desc(), col(Subscription.id).desc())
        )
        return await paginate(self.session, stmt, page, limit)

    async def list_channels(self, subscriber_id: str, page: int, limit: int) -> Tuple[Sequence[User], int]:
        """Channels a user subscribed to, most recent subscription first."""
        stmt = (
            select(User)
            .join(Subscription, Subscription.channel_id == User.id)
            .where(Subscription.subscriber_id == subscriber_id)
            .order_by(col(Subscription.created_at).desc(), col(Subscription.id).desc())
        )
        return await paginate(self.session, stmt, page, limit)
