"""
Playlist entity models.

A playlist is an ordered, duplicate-free collection of videos owned by a user.
Membership is stored in the ``playlist_videos`` link table.
"""

from __future__ import annotations

from datetime import datetime

from sqlmodel import Field, Text

from ..base import ID_LENGTH, Base, new_id, timestamp_field


class Playlist(Base, table=True):
    """Entity for a user-curated playlist.

    Table: playlists
    """

    __tablename__ = "playlists"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=ID_LENGTH)
    name: str = Field(max_length=255)
    description: str = Field(sa_type=Text)
    owner_id: str = Field(foreign_key="users.id", max_length=ID_LENGTH, index=True)

    created_at: datetime = timestamp_field(index=True)
    updated_at: datetime = timestamp_field(onupdate=True)

    def __repr__(self) -> str:
        return f"Playlist(id={self.id}, name={self.name}, owner_id={self.owner_id})"


class PlaylistVideo(Base, table=True):
    """Membership of a video in a playlist; ``position`` keeps insertion order.

    Table: playlist_videos
    """

    __tablename__ = "playlist_videos"

    playlist_id: str = Field(foreign_key="playlists.id", primary_key=True, max_length=ID_LENGTH)
    video_id: str = Field(foreign_key="videos.id", primary_key=True, max_length=ID_LENGTH, index=True)
    position: int = Field(default=0)
    added_at: datetime = timestamp_field()

    def __repr__(self) -> str:
        return f"PlaylistVideo(playlist_id={self.playlist_id}, video_id={self.video_id}, position={self.position})"
