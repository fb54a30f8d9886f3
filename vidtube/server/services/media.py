"""
Media Storage Dependency.

Provides a singleton ``CloudinaryClient`` for API endpoints and helpers
that turn uploaded form files into stored assets.
"""

from typing import Optional

from fastapi import UploadFile

from vidtube.core.errors import ApiError
from vidtube.core.logging_config import get_logger
from vidtube.core.media import CloudinaryClient, MediaStorageError, UploadedMedia
from vidtube.server.core.config import settings

logger = get_logger(__name__)

_media_storage: Optional[CloudinaryClient] = None


def get_media_storage() -> CloudinaryClient:
    """Get or create the process-wide media storage client."""
    global _media_storage
    if _media_storage is None:
        config = settings.cloudinary
        _media_storage = CloudinaryClient(
            cloud_name=config.cloud_name,
            api_key=config.api_key,
            api_secret=config.api_secret,
            base_url=config.base_url,
            folder=config.folder,
            timeout=config.timeout,
        )
    return _media_storage


async def close_media_storage() -> None:
    global _media_storage
    if _media_storage is not None:
        await _media_storage.aclose()
        _media_storage = None


def has_content(file: Optional[UploadFile]) -> bool:
    """Whether a form file was actually sent (browsers post empty parts for blank inputs)."""
    return file is not None and bool(file.filename or file.size)


async def upload_file(
    storage: CloudinaryClient,
    file: Optional[UploadFile],
    *,
    label: str,
    resource_type: str = "image",
) -> UploadedMedia:
    """Read an uploaded form file and store it with the media provider.

    Args:
        storage: Media storage client
        file: Form file, possibly missing
        label: Human-readable field name used in error messages
        resource_type: Provider resource type

    Raises:
        ApiError: 400 when the file is missing or empty
        MediaStorageError: When the provider rejects the upload
    """
    if file is None:
        raise ApiError(400, f"{label} file is required")
    data = await file.read()
    if not data:
        raise ApiError(400, f"{label} file is required")
    return await storage.upload(data, file.filename or label.lower(), file.content_type, resource_type=resource_type)


async def destroy_quietly(storage: CloudinaryClient, public_id: Optional[str], resource_type: str = "image") -> None:
    """Destroy a stored asset, logging instead of raising on failure."""
    if not public_id:
        return
    try:
        await storage.destroy(public_id, resource_type=resource_type)
    except MediaStorageError as e:
        logger.warning(f"Failed to destroy {resource_type} asset {public_id}: {e}")
