"""
Playlist repository interface and implementation.

Membership lives in ``playlist_videos``; ``position`` preserves the order in
which videos were added and the composite key prevents duplicates.
"""

from __future__ import annotations

from typing import Dict, List

from sqlalchemy import delete, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import col, select

from ..base import utc_now
from ..entities.playlists import Playlist, PlaylistVideo
from ..entities.videos import Video
from .base import AsyncBaseRepository


class PlaylistRepository(AsyncBaseRepository[Playlist]):
    """Repository for playlist data access operations using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Playlist)

    async def create_with_videos(self, playlist: Playlist, video_ids: List[str]) -> Playlist:
        """Create a playlist holding ``video_ids`` in order (duplicates dropped)."""
        self.session.add(playlist)
        await self.session.flush()
        for position, video_id in enumerate(dict.fromkeys(video_ids)):
            self.session.add(PlaylistVideo(playlist_id=playlist.id, video_id=video_id, position=position))
        await self.session.commit()
        await self.session.refresh(playlist)
        return playlist

    async def list_for_owner(self, owner_id: str) -> List[Playlist]:
        stmt = (
            select(Playlist)
            .where(Playlist.owner_id == owner_id)
            .order_by(col(Playlist.created_at).desc(), col(Playlist.id).desc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_video_ids(self, playlist_ids: List[str]) -> Dict[str, List[str]]:
        """Ordered video ids for each of the given playlists."""
        video_ids: Dict[str, List[str]] = {playlist_id: [] for playlist_id in playlist_ids}
        if not playlist_ids:
            return video_ids
        stmt = (
            select(PlaylistVideo)
            .where(col(PlaylistVideo.playlist_id).in_(playlist_ids))
            .order_by(col(PlaylistVideo.position).asc())
        )
        for entry in (await self.session.execute(stmt)).scalars().all():
            video_ids[entry.playlist_id].append(entry.video_id)
        return video_ids

    async def get_videos(self, playlist_id: str) -> List[Video]:
        stmt = (
            select(Video)
            .join(PlaylistVideo, PlaylistVideo.video_id == Video.id)
            .where(PlaylistVideo.playlist_id == playlist_id)
            .order_by(col(PlaylistVideo.position).asc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def contains(self, playlist_id: str, video_id: str) -> bool:
        return await self.session.get(PlaylistVideo, (playlist_id, video_id)) is not None

    async def add_video(self, playlist: Playlist, video_id: str) -> bool:
        """Append a video to the playlist.

        Returns:
            False if the video was already in the playlist
        """
        if await self.contains(playlist.id, video_id):
            return False
        stmt = select(func.max(PlaylistVideo.position)).where(PlaylistVideo.playlist_id == playlist.id)
        last = (await self.session.execute(stmt)).scalar_one_or_none()
        self.session.add(
            PlaylistVideo(playlist_id=playlist.id, video_id=video_id, position=0 if last is None else last + 1)
        )
        await self.update(playlist)
        return True

    async def remove_video(self, playlist: Playlist, video_id: str) -> bool:
        """Remove a video from the playlist.

        Returns:
            False if the video was not in the playlist
        """
        entry = await self.session.get(PlaylistVideo, (playlist.id, video_id))
        if entry is None:
            return False
        await self.session.delete(entry)
        playlist.updated_at = utc_now()
        self.session.add(playlist)
        await self.session.commit()
        await self.session.refresh(playlist)
        return True

    async def delete_cascade(self, playlist: Playlist) -> None:
        await self.session.execute(delete(PlaylistVideo).where(PlaylistVideo.playlist_id == playlist.id))
        await self.session.delete(playlist)
        await self.session.commit()
