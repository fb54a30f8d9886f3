from __future__ import annotations

import hashlib
import time
from typing import Any, Dict, Optional

import httpx

from vidtube.core.logging_config import get_logger
from vidtube.core.monitoring import log_media_upload

from .errors import MediaNotConfiguredError, MediaStorageError
from .models import UploadedMedia


def sign_params(params: Dict[str, Any], api_secret: str) -> str:
    """Compute the provider signature for a set of request parameters.

    Parameters are sorted by name, joined as ``k=v`` pairs with ``&`` and
    hashed with SHA-1 together with the API secret. Empty values are skipped.
    """
    to_sign = "&".join(f"{key}={params[key]}" for key in sorted(params) if params[key] not in (None, ""))
    return hashlib.sha1(f"{to_sign}{api_secret}".encode("utf-8")).hexdigest()


class CloudinaryClient:
    """
    Thin async HTTP client for the Cloudinary upload API.

    Responsibilities:
    - upload: store a file and return its delivery URL and public id
    - destroy: delete a stored asset by public id

    Requests are signed with the account's API secret; the SDK is not used.
    """

    def __init__(
        self,
        *,
        cloud_name: str,
        api_key: str,
        api_secret: str,
        base_url: str = "https://api.cloudinary.com/v1_1",
        folder: Optional[str] = None,
        timeout: float = 60.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.cloud_name = cloud_name
        self.api_key = api_key
        self.api_secret = api_secret
        self.base_url = base_url.rstrip("/")
        self.folder = folder
        self._client = client or httpx.AsyncClient(timeout=timeout)
        self._logger = get_logger(__name__)

    @property
    def configured(self) -> bool:
        return bool(self.cloud_name and self.api_key and self.api_secret)

    def _endpoint(self, resource_type: str, action: str) -> str:
        return f"{self.base_url}/{self.cloud_name}/{resource_type}/{action}"

    def _signed(self, params: Dict[str, Any]) -> Dict[str, str]:
        params = {k: v for k, v in params.items() if v not in (None, "")}
        params["timestamp"] = int(time.time())
        signature = sign_params(params, self.api_secret)
        return {**{k: str(v) for k, v in params.items()}, "api_key": self.api_key, "signature": signature}

    async def upload(
        self,
        data: bytes,
        filename: str,
        content_type: Optional[str] = None,
        resource_type: str = "auto",
    ) -> UploadedMedia:
        """Upload a file to the storage provider.

        Args:
            data: File contents
            filename: Original file name, forwarded to the provider
            content_type: MIME type of the file
            resource_type: ``image``, ``video``, ``raw`` or ``auto``

        Returns:
            UploadedMedia describing the stored asset

        Raises:
            MediaStorageError: If the provider is not configured, unreachable,
                or rejects the upload
        """
        if not self.configured:
            raise MediaNotConfiguredError()

        url = self._endpoint(resource_type, "upload")
        form = self._signed({"folder": self.folder})
        files = {"file": (filename or "upload", data, content_type or "application/octet-stream")}

        started = time.perf_counter()
        try:
            self._logger.debug("CloudinaryClient.upload: POST %s filename=%s size=%d", url, filename, len(data))
            r = await self._client.post(url, data=form, files=files)
            r.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise MediaStorageError(
                f"Media upload failed: {e.response.status_code}",
                status_code=e.response.status_code,
                details=e.response.text,
            ) from e
        except httpx.HTTPError as e:
            raise MediaStorageError(f"Media upload failed: {e}") from e

        try:
            media = UploadedMedia.model_validate(r.json())
        except ValueError as e:
            raise MediaStorageError(
                "Unexpected response shape from upload", status_code=r.status_code, details=r.text
            ) from e

        duration_ms = (time.perf_counter() - started) * 1000
        log_media_upload(media.resource_type, media.public_id, media.bytes or len(data), duration_ms)
        self._logger.debug("CloudinaryClient.upload: stored public_id=%s in %.1fms", media.public_id, duration_ms)
        return media

    async def destroy(self, public_id: str, resource_type: str = "image") -> bool:
        """Delete a stored asset.

        Args:
            public_id: Provider identifier of the asset
            resource_type: ``image``, ``video`` or ``raw`` (``auto`` is not accepted here)

        Returns:
            True if the provider reported the asset as deleted, False if it was not found

        Raises:
            MediaStorageError: If the provider is not configured, unreachable,
                or rejects the request
        """
        if not self.configured:
            raise MediaNotConfiguredError()

        url = self._endpoint(resource_type, "destroy")
        try:
            self._logger.debug("CloudinaryClient.destroy: POST %s public_id=%s", url, public_id)
            r = await self._client.post(url, data=self._signed({"public_id": public_id}))
            r.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise MediaStorageError(
                f"Media destroy failed: {e.response.status_code}",
                status_code=e.response.status_code,
                details=e.response.text,
            ) from e
        except httpx.HTTPError as e:
            raise MediaStorageError(f"Media destroy failed: {e}") from e

        result = r.json().get("result") if r.content else None
        self._logger.debug("CloudinaryClient.destroy: public_id=%s result=%s", public_id, result)
        return result == "ok"

    async def aclose(self) -> None:
        await self._client.aclose()
