"""
Database repository layer using SQLModel.

This package contains all repository classes organized by business domain.
Each module provides data access operations for its entities, including
the cascading deletes that keep references consistent.

Modules:
- base: AsyncBaseRepository, AsyncQueryBuilder and pagination helper
- users: Accounts, channel profiles and watch history
- videos: Video listing, view counting and cascading delete
- comments: Comments on videos/tweets and reply-subtree delete
- tweets: Tweet listing and cascading delete
- likes: Like toggling and liked videos
- playlists: Playlists and ordered membership
- subscriptions: Subscriber/channel relations
- dashboard: Channel aggregates
- bundle: SqlRepoBundle for dependency injection
"""

from . import (
    comments,
    dashboard,
    likes,
    playlists,
    subscriptions,
    tweets,
    users,
    videos,
)
from .bundle import SqlRepoBundle, build_sql_repos_from_session

__all__ = [
    "SqlRepoBundle",
    "build_sql_repos_from_session",
    "comments",
    "dashboard",
    "likes",
    "playlists",
    "subscriptions",
    "tweets",
    "users",
    "videos",
]
