from __future__ import annotations

import json
from itertools import count
from typing import AsyncGenerator, Dict, List, Optional
from unittest.mock import patch
from urllib.parse import parse_qs

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlmodel.pool import StaticPool

from vidtube.core.database import Base
from vidtube.core.database import entities  # noqa: F401
from vidtube.core.media import CloudinaryClient

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


class FakeCloudinary:
    """In-process stand-in for the Cloudinary upload API, served through ``httpx.MockTransport``."""

    def __init__(self, cloud_name: str) -> None:
        self.cloud_name = cloud_name
        self.uploads: List[Dict[str, str]] = []
        self.destroyed: List[str] = []
        self.fail_uploads = False
        # fail every upload once this many have succeeded
        self.fail_uploads_after: Optional[int] = None
        self._ids = count(1)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        parts = request.url.path.strip("/").split("/")
        # /v1_1/<cloud>/<resource_type>/<action>
        cloud, resource_type, action = parts[-3], parts[-2], parts[-1]
        if cloud != self.cloud_name:
            return httpx.Response(404, json={"error": {"message": "Unknown cloud"}})

        if action == "upload":
            if self.fail_uploads or (
                self.fail_uploads_after is not None and len(self.uploads) >= self.fail_uploads_after
            ):
                return httpx.Response(500, json={"error": {"message": "Upload failed"}})
            public_id = f"vidtube/{resource_type}-{next(self._ids)}"
            self.uploads.append({"public_id": public_id, "resource_type": resource_type})
            body = {
                "public_id": public_id,
                "resource_type": resource_type,
                "url": f"http://res.mock-cloudinary/{public_id}",
                "secure_url": f"https://res.mock-cloudinary/{public_id}",
                "bytes": 128,
                "format": "mp4" if resource_type == "video" else "png",
            }
            if resource_type == "video":
                body["duration"] = 12.5
            return httpx.Response(200, json=body)

        if action == "destroy":
            form = parse_qs(request.content.decode("utf-8"))
            self.destroyed.extend(form.get("public_id", []))
            return httpx.Response(200, content=json.dumps({"result": "ok"}).encode("utf-8"))

        return httpx.Response(404, json={"error": {"message": f"Unknown action {action}"}})


@pytest.fixture
def fake_cloudinary(test_config) -> FakeCloudinary:
    return FakeCloudinary(test_config.media.cloud_name)


@pytest_asyncio.fixture
async def media_storage(test_config, fake_cloudinary: FakeCloudinary) -> AsyncGenerator[CloudinaryClient, None]:
    storage = CloudinaryClient(
        cloud_name=test_config.media.cloud_name,
        api_key=test_config.media.api_key,
        api_secret=test_config.media.api_secret,
        base_url=test_config.media.base_url,
        client=httpx.AsyncClient(transport=httpx.MockTransport(fake_cloudinary)),
    )
    yield storage
    await storage.aclose()


@pytest_asyncio.fixture
async def test_engine():
    """Create a fresh in-memory database for each test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture(name="session")
async def session_fixture(test_engine) -> AsyncGenerator[AsyncSession, None]:
    async_session_maker = async_sessionmaker(test_engine, expire_on_commit=False)
    async with async_session_maker() as session:
        yield session


@pytest_asyncio.fixture(name="client")
async def client_fixture(session: AsyncSession, media_storage: CloudinaryClient) -> AsyncGenerator[AsyncClient, None]:
    """Create an async HTTP client with mocked lifespan and overridden dependencies."""
    from vidtube.core.database import get_session
    from vidtube.server.main import app
    from vidtube.server.services.media import get_media_storage

    async def get_session_override() -> AsyncGenerator[AsyncSession, None]:
        yield session

    app.dependency_overrides[get_session] = get_session_override
    app.dependency_overrides[get_media_storage] = lambda: media_storage

    # Mock the lifespan to prevent database initialization during tests
    async def mock_lifespan(app):
        yield

    with patch("vidtube.server.main.lifespan", mock_lifespan):
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://localhost") as client:
            yield client

    app.dependency_overrides.clear()


def image_file(name: str = "image.png") -> tuple:
    return (name, b"\x89PNG fake image bytes", "image/png")


def video_file(name: str = "clip.mp4") -> tuple:
    return (name, b"fake mp4 bytes", "video/mp4")


async def register(
    client: AsyncClient,
    username: str,
    *,
    password: str = "secret-pass",
    full_name: Optional[str] = None,
    with_cover: bool = False,
) -> httpx.Response:
    files = {"avatar": image_file("avatar.png")}
    if with_cover:
        files["cover_image"] = image_file("cover.png")
    return await client.post(
        "/api/v1/users/register",
        data={
            "full_name": full_name or username.title(),
            "email": f"{username}@example.com",
            "username": username,
            "password": password,
        },
        files=files,
    )


async def login(client: AsyncClient, username: str, password: str = "secret-pass") -> Dict[str, str]:
    """Log in and return Bearer headers; cookies are dropped so each call picks its user explicitly."""
    response = await client.post("/api/v1/users/login", json={"username": username, "password": password})
    assert response.status_code == 200, response.text
    client.cookies.clear()
    return {"Authorization": f"Bearer {response.json()['data']['access_token']}"}


@pytest.fixture
def signup(client: AsyncClient):
    """Register and log in a user, returning ``(user_json, auth_headers)``."""

    async def _signup(username: str, **kwargs):
        response = await register(client, username, **kwargs)
        assert response.status_code == 201, response.text
        headers = await login(client, username, kwargs.get("password", "secret-pass"))
        return response.json()["data"], headers

    return _signup


@pytest.fixture
def publish(client: AsyncClient):
    """Publish a video as the given user and return its JSON."""

    async def _publish(headers: Dict[str, str], title: str = "My video", description: str = "About it"):
        response = await client.post(
            "/api/v1/videos",
            data={"title": title, "description": description},
            files={"video_file": video_file(), "thumbnail": image_file("thumb.png")},
            headers=headers,
        )
        assert response.status_code == 201, response.text
        return response.json()["data"]

    return _publish
