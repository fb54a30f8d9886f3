"""
Database entity models.

This package contains all database entity models organized by business domain
and table relationships.

Modules:
- users: Accounts and watch history
- videos: Uploaded videos
- comments: Comments on videos and tweets (with replies)
- tweets: Short text posts
- likes: Likes on videos, comments and tweets
- playlists: Playlists and their ordered video membership
- subscriptions: Subscriber -> channel relations
"""

from . import (
    comments,
    likes,
    playlists,
    subscriptions,
    tweets,
    users,
    videos,
)
from .comments import Comment
from .likes import Like
from .playlists import Playlist, PlaylistVideo
from .subscriptions import Subscription
from .tweets import Tweet
from .users import User, WatchHistory
from .videos import Video

__all__ = [
    "Comment",
    "Like",
    "Playlist",
    "PlaylistVideo",
    "Subscription",
    "Tweet",
    "User",
    "Video",
    "WatchHistory",
    "comments",
    "likes",
    "playlists",
    "subscriptions",
    "tweets",
    "users",
    "videos",
]
