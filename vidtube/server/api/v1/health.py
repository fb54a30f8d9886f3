"""
Health Check Endpoints.

This module provides basic system status endpoints (health, version) used
for monitoring and deployment verification, plus a database-backed health
check under the versioned API prefix.
"""

from fastapi import APIRouter
from sqlalchemy import text

from vidtube.core.errors import ApiError
from vidtube.core.logging_config import get_logger
from vidtube.core.models.io import ApiResponse
from vidtube.server.core import constant
from vidtube.server.services.deps import SessionDep

logger = get_logger(__name__)

router = APIRouter()


@router.get(
    "/health",
    summary="Health Check",
    description="Check the operational status of the API server.",
    response_description="Status object.",
)
async def health_check():
    """
    Health check endpoint.

    Returns a simple status indicator to confirm the server is running and reachable.
    """
    return {"status": "ok"}


@router.get(
    "/version",
    summary="Get Version",
    description="Retrieve version information for the API server.",
    response_description="Version object.",
)
async def version():
    """
    Get API version.

    Returns the current semantic version of the API and supported schema version.
    """
    return {"version": constant.VERSION, "schema_version": constant.SCHEMA_VERSION}


@router.get(
    f"{constant.API_V1_STR}/healthcheck",
    response_model=ApiResponse[dict],
    summary="Database Health Check",
    description="Verify that the API server can reach its database.",
    response_description="Envelope with an OK status.",
    responses={
        200: {"description": "Database reachable"},
        503: {"description": "Database is not connected"},
    },
)
async def healthcheck(session: SessionDep) -> ApiResponse[dict]:
    """
    Database-backed health check.

    Runs ``SELECT 1`` against the configured database.
    """
    try:
        await session.execute(text("SELECT 1"))
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        raise ApiError(503, "Database is not connected") from e
    return ApiResponse.ok({"status": "OK"}, "Health check passed")
