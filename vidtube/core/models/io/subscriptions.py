"""
Subscription I/O models for API responses.
"""

from __future__ import annotations

from pydantic import BaseModel


class SubscriptionToggleRead(BaseModel):
    """Outcome of a subscription toggle: True when now subscribed."""

    subscribed: bool
