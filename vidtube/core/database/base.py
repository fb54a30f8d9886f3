"""
Base database models and utilities.

This module provides the foundational database components used across
all entities in the centralized database layer using SQLModel.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict
from uuid import uuid4

from pydantic import ConfigDict
from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel

ID_LENGTH = 32


class Base(SQLModel):
    """Base class for all SQLModel entities."""

    model_config = ConfigDict(arbitrary_types_allowed=True)


def new_id() -> str:
    """Generate a new entity identifier (32 lowercase hex characters)."""
    return uuid4().hex


def utc_now() -> datetime:
    """Get current UTC datetime.

    Returns:
        Timezone-aware current UTC datetime
    """
    return datetime.now(timezone.utc)


def timestamp_field(*, index: bool = False, onupdate: bool = False) -> Any:
    """Timezone-aware timestamp column defaulting to the current UTC time.

    Args:
        index: Whether to index the column
        onupdate: Refresh the value on every UPDATE of the row
    """
    column_kwargs: Dict[str, Any] = {"onupdate": utc_now} if onupdate else {}
    return Field(
        default_factory=utc_now,
        index=index,
        sa_type=DateTime(timezone=True),
        sa_column_kwargs=column_kwargs,
    )
