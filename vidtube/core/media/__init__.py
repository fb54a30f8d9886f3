"""
Media storage integration.

Uploads user media (avatars, cover images, thumbnails, video files) to
Cloudinary and deletes replaced or orphaned assets.
"""

from .client import CloudinaryClient, sign_params
from .errors import MediaNotConfiguredError, MediaStorageError
from .models import UploadedMedia

__all__ = [
    "CloudinaryClient",
    "MediaNotConfiguredError",
    "MediaStorageError",
    "UploadedMedia",
    "sign_params",
]
