"""
Playlist endpoints.

Owner-curated, ordered lists of videos.
"""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, status

from vidtube.core.database.entities.playlists import Playlist
from vidtube.core.database.entities.users import User
from vidtube.core.errors import ApiError
from vidtube.core.logging_config import get_logger
from vidtube.core.models.io import (
    ApiResponse,
    PlaylistCreate,
    PlaylistDetail,
    PlaylistRead,
    PlaylistUpdate,
    VideoRead,
)
from vidtube.server.services.deps import CurrentUserDep, ReposDep
from vidtube.server.services.params import ensure_id, require_text

logger = get_logger(__name__)

router = APIRouter(tags=["playlists"])


def _to_read(playlist: Playlist, video_ids: List[str]) -> PlaylistRead:
    return PlaylistRead.model_validate(
        {**playlist.model_dump(), "video_ids": video_ids, "total_videos": len(video_ids)}
    )


async def _read_one(repos, playlist: Playlist) -> PlaylistRead:
    video_ids = await repos.playlists.get_video_ids([playlist.id])
    return _to_read(playlist, video_ids[playlist.id])


async def _get_playlist(repos, playlist_id: str) -> Playlist:
    playlist = await repos.playlists.get_by_id(ensure_id(playlist_id, "playlist id"))
    if playlist is None:
        raise ApiError(404, "Playlist not found")
    return playlist


async def _get_owned_playlist(repos, playlist_id: str, owner: User) -> Playlist:
    playlist = await _get_playlist(repos, playlist_id)
    if playlist.owner_id != owner.id:
        raise ApiError(403, "You are not allowed to modify this playlist")
    return playlist


async def _get_video_id(repos, video_id: str) -> str:
    video = await repos.videos.get_by_id(ensure_id(video_id, "video id"))
    if video is None:
        raise ApiError(404, "Video not found")
    return video.id


@router.post(
    "",
    response_model=ApiResponse[PlaylistRead],
    status_code=status.HTTP_201_CREATED,
    summary="Create Playlist",
    description="Create a playlist, optionally seeded with videos.",
    response_description="The created playlist.",
    responses={400: {"description": "Blank name or description"}, 404: {"description": "Unknown video id"}},
)
async def create_playlist(
    payload: PlaylistCreate, user: CurrentUserDep, repos: ReposDep
) -> ApiResponse[PlaylistRead]:
    """
    Create a playlist.

    - **name**: Playlist name.
    - **description**: Playlist description.
    - **video_ids**: Initial videos, kept in the given order.
    """
    name = require_text(payload.name, "Name and description are required")
    description = require_text(payload.description, "Name and description are required")

    video_ids = [await _get_video_id(repos, video_id) for video_id in payload.video_ids]
    playlist = await repos.playlists.create_with_videos(
        Playlist(name=name, description=description, owner_id=user.id), video_ids
    )
    return ApiResponse.ok(await _read_one(repos, playlist), "Playlist created successfully", status.HTTP_201_CREATED)


@router.get(
    "/user/{user_id}",
    response_model=ApiResponse[List[PlaylistRead]],
    summary="List User Playlists",
    description="All playlists owned by a user, newest first.",
    response_description="List of playlists.",
    responses={404: {"description": "User not found"}},
)
async def list_user_playlists(user_id: str, user: CurrentUserDep, repos: ReposDep) -> ApiResponse[List[PlaylistRead]]:
    owner = await repos.users.get_by_id(ensure_id(user_id, "user id"))
    if owner is None:
        raise ApiError(404, "User not found")

    playlists = await repos.playlists.list_for_owner(owner.id)
    video_ids = await repos.playlists.get_video_ids([playlist.id for playlist in playlists])
    data = [_to_read(playlist, video_ids[playlist.id]) for playlist in playlists]
    return ApiResponse.ok(data, "User playlists fetched successfully")


@router.get(
    "/{playlist_id}",
    response_model=ApiResponse[PlaylistDetail],
    summary="Get Playlist",
    description="A playlist with its videos in playlist order.",
    response_description="The playlist.",
    responses={404: {"description": "Playlist not found"}},
)
async def get_playlist(playlist_id: str, user: CurrentUserDep, repos: ReposDep) -> ApiResponse[PlaylistDetail]:
    playlist = await _get_playlist(repos, playlist_id)
    videos = [
        video
        for video in await repos.playlists.get_videos(playlist.id)
        if video.is_published or video.owner_id == user.id
    ]
    summary = _to_read(playlist, [video.id for video in videos])
    detail = PlaylistDetail(**summary.model_dump(), videos=[VideoRead.model_validate(video) for video in videos])
    return ApiResponse.ok(detail, "Playlist fetched successfully")


@router.patch(
    "/{playlist_id}",
    response_model=ApiResponse[PlaylistRead],
    summary="Update Playlist",
    description="Rename a playlist owned by the caller and replace its description.",
    response_description="The updated playlist.",
    responses={
        400: {"description": "Blank name or description"},
        403: {"description": "Caller does not own the playlist"},
        404: {"description": "Playlist not found"},
    },
)
async def update_playlist(
    playlist_id: str, payload: PlaylistUpdate, user: CurrentUserDep, repos: ReposDep
) -> ApiResponse[PlaylistRead]:
    name = require_text(payload.name, "Name and description are required")
    description = require_text(payload.description, "Name and description are required")
    playlist = await _get_owned_playlist(repos, playlist_id, user)

    playlist.name = name
    playlist.description = description
    playlist = await repos.playlists.update(playlist)
    return ApiResponse.ok(await _read_one(repos, playlist), "Playlist updated successfully")


@router.delete(
    "/{playlist_id}",
    response_model=ApiResponse[dict],
    summary="Delete Playlist",
    description="Delete a playlist owned by the caller. Videos are not affected.",
    response_description="Empty payload.",
    responses={403: {"description": "Caller does not own the playlist"}, 404: {"description": "Playlist not found"}},
)
async def delete_playlist(playlist_id: str, user: CurrentUserDep, repos: ReposDep) -> ApiResponse[dict]:
    playlist = await _get_owned_playlist(repos, playlist_id, user)
    await repos.playlists.delete_cascade(playlist)
    return ApiResponse.ok({}, "Playlist deleted successfully")


@router.patch(
    "/add/{video_id}/{playlist_id}",
    response_model=ApiResponse[PlaylistRead],
    summary="Add Video to Playlist",
    description="Append a video to a playlist owned by the caller.",
    response_description="The updated playlist.",
    responses={
        400: {"description": "Video already in playlist"},
        403: {"description": "Caller does not own the playlist"},
        404: {"description": "Playlist or video not found"},
    },
)
async def add_video_to_playlist(
    video_id: str, playlist_id: str, user: CurrentUserDep, repos: ReposDep
) -> ApiResponse[PlaylistRead]:
    playlist = await _get_owned_playlist(repos, playlist_id, user)
    video_id = await _get_video_id(repos, video_id)
    if not await repos.playlists.add_video(playlist, video_id):
        raise ApiError(400, "Video already in playlist")
    return ApiResponse.ok(await _read_one(repos, playlist), "Video added to playlist")


@router.patch(
    "/remove/{video_id}/{playlist_id}",
    response_model=ApiResponse[PlaylistRead],
    summary="Remove Video from Playlist",
    description="Remove a video from a playlist owned by the caller.",
    response_description="The updated playlist.",
    responses={
        400: {"description": "Video not in playlist"},
        403: {"description": "Caller does not own the playlist"},
        404: {"description": "Playlist or video not found"},
    },
)
async def remove_video_from_playlist(
    video_id: str, playlist_id: str, user: CurrentUserDep, repos: ReposDep
) -> ApiResponse[PlaylistRead]:
    playlist = await _get_owned_playlist(repos, playlist_id, user)
    video_id = await _get_video_id(repos, video_id)
    if not await repos.playlists.remove_video(playlist, video_id):
        raise ApiError(400, "Video not in playlist")
    return ApiResponse.ok(await _read_one(repos, playlist), "Video removed from playlist")
