"""
I/O models for API requests and responses.

These Pydantic schemas define the contract between the API and clients.
Database entities are converted into them with ``model_validate`` so that
private columns (password hashes, refresh tokens, storage public ids)
never leave the server.
"""

from .comments import CommentCreate, CommentRead, CommentUpdate, CommentWithOwner
from .common import ApiResponse, ErrorResponse, Page
from .dashboard import ChannelStatsRead
from .likes import LikeToggleRead
from .playlists import PlaylistCreate, PlaylistDetail, PlaylistRead, PlaylistUpdate
from .subscriptions import SubscriptionToggleRead
from .tweets import TweetCreate, TweetRead, TweetSortField, TweetUpdate, TweetWithOwner
from .users import (
    AccountUpdate,
    ChannelProfileRead,
    LoginRead,
    PasswordChange,
    TokenPair,
    TokenRefresh,
    UserLogin,
    UserRead,
    UserRegister,
    UserSummary,
)
from .videos import (
    PublishStatusRead,
    SortType,
    VideoRead,
    VideoSortField,
    VideoWithOwner,
    ViewCountRead,
)

__all__ = [
    "AccountUpdate",
    "ApiResponse",
    "ChannelProfileRead",
    "ChannelStatsRead",
    "CommentCreate",
    "CommentRead",
    "CommentUpdate",
    "CommentWithOwner",
    "ErrorResponse",
    "LikeToggleRead",
    "LoginRead",
    "Page",
    "PasswordChange",
    "PlaylistCreate",
    "PlaylistDetail",
    "PlaylistRead",
    "PlaylistUpdate",
    "PublishStatusRead",
    "SortType",
    "SubscriptionToggleRead",
    "TokenPair",
    "TokenRefresh",
    "TweetCreate",
    "TweetRead",
    "TweetSortField",
    "TweetUpdate",
    "TweetWithOwner",
    "UserLogin",
    "UserRead",
    "UserRegister",
    "UserSummary",
    "VideoRead",
    "VideoSortField",
    "VideoWithOwner",
    "ViewCountRead",
]
