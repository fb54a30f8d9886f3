"""
User I/O models for API requests and responses.

Responses never expose the password hash, the stored refresh token or the
storage provider public ids.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


def _strip(value: Optional[str]) -> Optional[str]:
    return value.strip() if isinstance(value, str) else value


class UserSummary(BaseModel):
    """Owner/author projection embedded in other resources."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    username: str
    full_name: str
    avatar_url: str


class UserRead(BaseModel):
    """Schema for reading a user from API."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    username: str
    email: str
    full_name: str
    avatar_url: str
    cover_image_url: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class ChannelProfileRead(BaseModel):
    """Public channel profile with subscription aggregates."""

    id: str
    username: str
    email: str
    full_name: str
    avatar_url: str
    cover_image_url: Optional[str] = None
    subscribers_count: int = 0
    channels_subscribed_to_count: int = 0
    is_subscribed: bool = False


class UserRegister(BaseModel):
    """Text fields of the multipart registration form."""

    full_name: str = Field(min_length=1, max_length=128)
    email: EmailStr
    username: str = Field(min_length=1, max_length=64)
    password: str = Field(min_length=1, max_length=72)

    @field_validator("full_name", "username", "password", mode="before")
    @classmethod
    def _strip_text(cls, value):
        return _strip(value)

    @field_validator("username", "email", mode="after")
    @classmethod
    def _lowercase(cls, value: str) -> str:
        return value.lower()


class UserLogin(BaseModel):
    """Credentials for login; either ``username`` or ``email`` is required."""

    username: Optional[str] = None
    email: Optional[str] = None
    password: str = ""

    @field_validator("username", "email", mode="before")
    @classmethod
    def _normalize(cls, value):
        value = _strip(value)
        return value.lower() if value else None


class TokenRefresh(BaseModel):
    refresh_token: Optional[str] = None


class PasswordChange(BaseModel):
    old_password: str
    new_password: str = Field(min_length=1, max_length=72)
    confirm_password: str


class AccountUpdate(BaseModel):
    """Text account details; the router rejects a body with neither field."""

    full_name: Optional[str] = Field(default=None, max_length=128)
    email: Optional[EmailStr] = None

    @field_validator("full_name", mode="before")
    @classmethod
    def _strip_name(cls, value):
        value = _strip(value)
        return value or None

    @field_validator("email", mode="before")
    @classmethod
    def _normalize_email(cls, value):
        value = _strip(value)
        return value.lower() if value else None


class TokenPair(BaseModel):
    access_token: str
    refresh_token: str


class LoginRead(TokenPair):
    user: UserRead
