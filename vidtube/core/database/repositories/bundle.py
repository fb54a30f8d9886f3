"""
Repository bundle for dependency injection.

This module provides a convenience bundle of all repository instances
sharing one session, for injection into request handlers.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from .comments import CommentRepository
from .dashboard import DashboardRepository
from .likes import LikeRepository
from .playlists import PlaylistRepository
from .subscriptions import SubscriptionRepository
from .tweets import TweetRepository
from .users import UserRepository
from .videos import VideoRepository


@dataclass(frozen=True)
class SqlRepoBundle:
    """Convenience bundle of all SQL repositories for dependency injection."""

    users: UserRepository
    videos: VideoRepository
    comments: CommentRepository
    tweets: TweetRepository
    likes: LikeRepository
    playlists: PlaylistRepository
    subscriptions: SubscriptionRepository
    dashboard: DashboardRepository


def build_sql_repos_from_session(*, session: AsyncSession) -> SqlRepoBundle:
    """Build a SqlRepoBundle from an existing session.

    Args:
        session: Existing async session

    Returns:
        Bundle containing all repository instances
    """
    return SqlRepoBundle(
        users=UserRepository(session),
        videos=VideoRepository(session),
        comments=CommentRepository(session),
        tweets=TweetRepository(session),
        likes=LikeRepository(session),
        playlists=PlaylistRepository(session),
        subscriptions=SubscriptionRepository(session),
        dashboard=DashboardRepository(session),
    )
