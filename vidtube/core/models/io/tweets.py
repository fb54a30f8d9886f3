"""
Tweet I/O models for API requests and responses.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .users import UserSummary


class TweetSortField(str, Enum):
    CREATED_AT = "created_at"
    UPDATED_AT = "updated_at"


class TweetCreate(BaseModel):
    content: str = Field(default="", description="Tweet text (at most 300 characters)")


class TweetUpdate(BaseModel):
    content: str = Field(default="", description="New tweet text")


class TweetRead(BaseModel):
    """Schema for reading a tweet from API."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    content: str
    owner_id: str
    created_at: datetime
    updated_at: datetime


class TweetWithOwner(TweetRead):
    owner: UserSummary

    @classmethod
    def from_row(cls, tweet: Any, owner: Any) -> "TweetWithOwner":
        return cls(**TweetRead.model_validate(tweet).model_dump(), owner=UserSummary.model_validate(owner))
