"""Initial schema for VidTube

Revision ID: 20261019_000000
Revises: None
Create Date: 2026-10-19 00:00:00.000000

This is the initial migration that creates every table of the VidTube service:
- Accounts and watch history
- Videos, tweets and comments
- Likes, playlists (with ordered membership) and subscriptions

Revision format: YYYYMMDD_HHMMSS_description

"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "20261019_000000"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

ID = sa.String(32)


def upgrade() -> None:
    """Create all tables."""

    # Create users table
    op.create_table(
        "users",
        sa.Column("id", ID, nullable=False),
        sa.Column("username", sa.String(64), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("full_name", sa.String(128), nullable=False),
        sa.Column("avatar_url", sa.String(512), nullable=False),
        sa.Column("avatar_public_id", sa.String(255), nullable=False),
        sa.Column("cover_image_url", sa.String(512), nullable=True),
        sa.Column("cover_image_public_id", sa.String(255), nullable=True),
        sa.Column("password", sa.String(255), nullable=False),
        sa.Column("refresh_token", sa.String(1024), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_users_username", "username", unique=True),
        sa.Index("ix_users_email", "email", unique=True),
        sa.Index("ix_users_full_name", "full_name"),
        sa.Index("ix_users_created_at", "created_at"),
    )

    # Create videos table
    op.create_table(
        "videos",
        sa.Column("id", ID, nullable=False),
        sa.Column("video_file_url", sa.String(512), nullable=False),
        sa.Column("video_file_public_id", sa.String(255), nullable=False),
        sa.Column("thumbnail_url", sa.String(512), nullable=False),
        sa.Column("thumbnail_public_id", sa.String(255), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("duration", sa.Float(), nullable=False),
        sa.Column("views", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_published", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("owner_id", ID, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["owner_id"], ["users.id"]),
        sa.Index("ix_videos_title", "title"),
        sa.Index("ix_videos_is_published", "is_published"),
        sa.Index("ix_videos_owner_id", "owner_id"),
        sa.Index("ix_videos_created_at", "created_at"),
    )

    # Create watch_history table
    op.create_table(
        "watch_history",
        sa.Column("id", ID, nullable=False),
        sa.Column("user_id", ID, nullable=False),
        sa.Column("video_id", ID, nullable=False),
        sa.Column("watched_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.ForeignKeyConstraint(["video_id"], ["videos.id"]),
        sa.UniqueConstraint("user_id", "video_id", name="uq_watch_history_user_video"),
        sa.Index("ix_watch_history_user_id", "user_id"),
        sa.Index("ix_watch_history_video_id", "video_id"),
        sa.Index("ix_watch_history_watched_at", "watched_at"),
    )

    # Create tweets table
    op.create_table(
        "tweets",
        sa.Column("id", ID, nullable=False),
        sa.Column("content", sa.String(300), nullable=False),
        sa.Column("owner_id", ID, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["owner_id"], ["users.id"]),
        sa.Index("ix_tweets_owner_id", "owner_id"),
        sa.Index("ix_tweets_created_at", "created_at"),
    )

    # Create comments table
    op.create_table(
        "comments",
        sa.Column("id", ID, nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("video_id", ID, nullable=True),
        sa.Column("tweet_id", ID, nullable=True),
        sa.Column("reply_to_id", ID, nullable=True),
        sa.Column("owner_id", ID, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["video_id"], ["videos.id"]),
        sa.ForeignKeyConstraint(["tweet_id"], ["tweets.id"]),
        sa.ForeignKeyConstraint(["reply_to_id"], ["comments.id"]),
        sa.ForeignKeyConstraint(["owner_id"], ["users.id"]),
        sa.CheckConstraint(
            "(CASE WHEN video_id IS NULL THEN 0 ELSE 1 END) + (CASE WHEN tweet_id IS NULL THEN 0 ELSE 1 END) = 1",
            name="ck_comments_single_target",
        ),
        sa.Index("ix_comments_video_id", "video_id"),
        sa.Index("ix_comments_tweet_id", "tweet_id"),
        sa.Index("ix_comments_reply_to_id", "reply_to_id"),
        sa.Index("ix_comments_owner_id", "owner_id"),
        sa.Index("ix_comments_created_at", "created_at"),
    )

    # Create likes table
    op.create_table(
        "likes",
        sa.Column("id", ID, nullable=False),
        sa.Column("video_id", ID, nullable=True),
        sa.Column("comment_id", ID, nullable=True),
        sa.Column("tweet_id", ID, nullable=True),
        sa.Column("liked_by_id", ID, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["video_id"], ["videos.id"]),
        sa.ForeignKeyConstraint(["comment_id"], ["comments.id"]),
        sa.ForeignKeyConstraint(["tweet_id"], ["tweets.id"]),
        sa.ForeignKeyConstraint(["liked_by_id"], ["users.id"]),
        sa.CheckConstraint(
            "(CASE WHEN video_id IS NULL THEN 0 ELSE 1 END)"
            " + (CASE WHEN comment_id IS NULL THEN 0 ELSE 1 END)"
            " + (CASE WHEN tweet_id IS NULL THEN 0 ELSE 1 END) = 1",
            name="ck_likes_single_target",
        ),
        sa.UniqueConstraint("liked_by_id", "video_id", name="uq_likes_user_video"),
        sa.UniqueConstraint("liked_by_id", "comment_id", name="uq_likes_user_comment"),
        sa.UniqueConstraint("liked_by_id", "tweet_id", name="uq_likes_user_tweet"),
        sa.Index("ix_likes_video_id", "video_id"),
        sa.Index("ix_likes_comment_id", "comment_id"),
        sa.Index("ix_likes_tweet_id", "tweet_id"),
        sa.Index("ix_likes_liked_by_id", "liked_by_id"),
        sa.Index("ix_likes_created_at", "created_at"),
    )

    # Create playlists table
    op.create_table(
        "playlists",
        sa.Column("id", ID, nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("owner_id", ID, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["owner_id"], ["users.id"]),
        sa.Index("ix_playlists_owner_id", "owner_id"),
        sa.Index("ix_playlists_created_at", "created_at"),
    )

    # Create playlist_videos table
    op.create_table(
        "playlist_videos",
        sa.Column("playlist_id", ID, nullable=False),
        sa.Column("video_id", ID, nullable=False),
        sa.Column("position", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("added_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("playlist_id", "video_id"),
        sa.ForeignKeyConstraint(["playlist_id"], ["playlists.id"]),
        sa.ForeignKeyConstraint(["video_id"], ["videos.id"]),
        sa.Index("ix_playlist_videos_video_id", "video_id"),
    )

    # Create subscriptions table
    op.create_table(
        "subscriptions",
        sa.Column("id", ID, nullable=False),
        sa.Column("subscriber_id", ID, nullable=False),
        sa.Column("channel_id", ID, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["subscriber_id"], ["users.id"]),
        sa.ForeignKeyConstraint(["channel_id"], ["users.id"]),
        sa.UniqueConstraint("subscriber_id", "channel_id", name="uq_subscriptions_pair"),
        sa.CheckConstraint("subscriber_id <> channel_id", name="ck_subscriptions_not_self"),
        sa.Index("ix_subscriptions_subscriber_id", "subscriber_id"),
        sa.Index("ix_subscriptions_channel_id", "channel_id"),
        sa.Index("ix_subscriptions_created_at", "created_at"),
    )


def downgrade() -> None:
    """Drop all tables created in upgrade."""
    op.drop_table("subscriptions")
    op.drop_table("playlist_videos")
    op.drop_table("playlists")
    op.drop_table("likes")
    op.drop_table("comments")
    op.drop_table("tweets")
    op.drop_table("watch_history")
    op.drop_table("videos")
    op.drop_table("users")
