"""Test configuration for database unit tests.

This module provides common fixtures for testing the database layer with
in-memory SQLite, plus small factories for seeding rows.
"""

from __future__ import annotations

from typing import AsyncGenerator

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlmodel.pool import StaticPool

from vidtube.core.database import Base
from vidtube.core.database import entities  # noqa: F401
from vidtube.core.database.entities import Tweet, User, Video
from vidtube.core.database.repositories import SqlRepoBundle, build_sql_repos_from_session


@pytest.fixture(scope="function")
async def in_memory_engine() -> AsyncGenerator:
    """Create in-memory SQLite engine for testing."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture(scope="function")
async def in_memory_session(in_memory_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create in-memory SQLite session for testing."""
    async_session = async_sessionmaker(in_memory_engine, expire_on_commit=False)
    async with async_session() as session:
        yield session


@pytest.fixture
def repos(in_memory_session: AsyncSession) -> SqlRepoBundle:
    return build_sql_repos_from_session(session=in_memory_session)


@pytest.fixture
def make_user(repos: SqlRepoBundle):
    async def _make(username: str) -> User:
        return await repos.users.create(
            User(
                username=username,
                email=f"{username}@example.com",
                full_name=username.title(),
                avatar_url=f"https://cdn.example.com/{username}.png",
                avatar_public_id=f"avatars/{username}",
                password="not-a-real-hash",
            )
        )

    return _make


@pytest.fixture
def make_video(repos: SqlRepoBundle):
    async def _make(owner: User, title: str = "Video", **fields) -> Video:
        return await repos.videos.create(
            Video(
                title=title,
                description=f"About {title}",
                video_file_url=f"https://cdn.example.com/{title}.mp4",
                video_file_public_id=f"videos/{title}",
                thumbnail_url=f"https://cdn.example.com/{title}.png",
                thumbnail_public_id=f"thumbnails/{title}",
                owner_id=owner.id,
                **fields,
            )
        )

    return _make


@pytest.fixture
def make_tweet(repos: SqlRepoBundle):
    async def _make(owner: User, content: str = "hello") -> Tweet:
        return await repos.tweets.create(Tweet(content=content, owner_id=owner.id))

    return _make
