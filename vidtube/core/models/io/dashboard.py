"""
Dashboard I/O models for API responses.
"""

from __future__ import annotations

from pydantic import BaseModel


class ChannelStatsRead(BaseModel):
    """Aggregate numbers for the caller's channel."""

    total_video_views: int = 0
    total_subscribers: int = 0
    total_videos: int = 0
    total_likes: int = 0
