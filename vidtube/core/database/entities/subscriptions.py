"""
Subscription entity models.

A subscription links a subscriber (user) to a channel (another user).
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import CheckConstraint, UniqueConstraint
from sqlmodel import Field

from ..base import ID_LENGTH, Base, new_id, timestamp_field


class Subscription(Base, table=True):
    """Entity for a subscriber -> channel relation.

    Table: subscriptions
    """

    __tablename__ = "subscriptions"
    __table_args__ = (
        UniqueConstraint("subscriber_id", "channel_id", name="uq_subscriptions_pair"),
        CheckConstraint("subscriber_id <> channel_id", name="ck_subscriptions_not_self"),
    )

    id: str = Field(default_factory=new_id, primary_key=True, max_length=ID_LENGTH)
    subscriber_id: str = Field(foreign_key="users.id", max_length=ID_LENGTH, index=True)
    channel_id: str = Field(foreign_key="users.id", max_length=ID_LENGTH, index=True)

    created_at: datetime = timestamp_field(index=True)

    def __repr__(self) -> str:
        return f"Subscription(subscriber_id={self.subscriber_id}, channel_id={self.channel_id})"
