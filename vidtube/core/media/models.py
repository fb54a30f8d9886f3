"""Pydantic models for media storage responses."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class UploadedMedia(BaseModel):
    """Subset of the provider's upload response the application keeps."""

    model_config = ConfigDict(extra="ignore")

    public_id: str
    url: str = ""
    secure_url: str = ""
    resource_type: str = "image"
    format: Optional[str] = None
    bytes: int = Field(default=0, ge=0)
    duration: float = Field(default=0.0, ge=0)

    @property
    def delivery_url(self) -> str:
        """HTTPS URL when available, plain URL otherwise."""
        return self.secure_url or self.url
