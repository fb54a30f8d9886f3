"""
Main Application Entry Point.

This module initializes the FastAPI application, configures middleware
(CORS, request tracing), registers exception handlers and includes all API
routers. It serves as the root of the web server.
"""

from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from vidtube.core.database import init_db
from vidtube.core.logging_config import get_logger, setup_logging
from vidtube.core.monitoring import initialize_logfire

from .api.v1 import (
    comments,
    dashboard,
    health,
    likes,
    playlists,
    subscriptions,
    tweets,
    users,
    videos,
)
from .core import constant
from .core.config import settings
from .exception_handlers import setup_exception_handlers
from .middleware import LogfireMiddleware
from .services.media import close_media_storage

# Initialize logging
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifespan events.

    Creates missing tables on startup (when enabled) and closes the media
    storage HTTP client on shutdown.
    """
    try:
        logger.info("Starting up VidTube Server...")
        await init_db()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Database initialization failed: {e}", exc_info=True)

    yield

    logger.info("Shutting down VidTube Server...")
    await close_media_storage()


app = FastAPI(
    title=constant.PROJECT_NAME,
    description="""
    VidTube Server API

    Backend services for a video-sharing platform: accounts and sessions,
    videos, comments, tweets, likes, playlists, subscriptions and a channel dashboard.
    """,
    version=constant.VERSION,
    openapi_url=f"{constant.API_V1_STR}/openapi.json",
    docs_url=f"{constant.API_V1_STR}/docs",
    redoc_url=f"{constant.API_V1_STR}/redoc",
    lifespan=lifespan,
)

cors = settings.cors
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors.origins,
    allow_credentials=cors.allow_credentials,
    allow_methods=cors.allow_methods,
    allow_headers=cors.allow_headers,
)
app.add_middleware(LogfireMiddleware)

setup_exception_handlers(app)
initialize_logfire(app)

app.include_router(health.router, tags=["health"])
app.include_router(users.router, prefix=f"{constant.API_V1_STR}/users")
app.include_router(videos.router, prefix=f"{constant.API_V1_STR}/videos")
app.include_router(comments.router, prefix=f"{constant.API_V1_STR}/comments")
app.include_router(tweets.router, prefix=f"{constant.API_V1_STR}/tweets")
app.include_router(likes.router, prefix=f"{constant.API_V1_STR}/likes")
app.include_router(playlists.router, prefix=f"{constant.API_V1_STR}/playlist")
app.include_router(subscriptions.router, prefix=f"{constant.API_V1_STR}/subscriptions")
app.include_router(dashboard.router, prefix=f"{constant.API_V1_STR}/dashboard")


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    uvicorn.run(
        "vidtube.server.main:app",
        host=settings.server_host,
        port=settings.server_port,
        log_level=settings.log_level.lower(),
    )
