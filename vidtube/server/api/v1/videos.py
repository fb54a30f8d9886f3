"""
Video endpoints.

Listing with search/sort/owner filters, publishing (video file plus
thumbnail upload), view counting, owner-only edits, publish toggling and
cascading delete.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, File, Form, Query, UploadFile, status

from vidtube.core.database.entities.users import User
from vidtube.core.database.entities.videos import Video
from vidtube.core.errors import ApiError
from vidtube.core.logging_config import get_logger
from vidtube.core.media import MediaStorageError
from vidtube.core.models.io import (
    ApiResponse,
    Page,
    PublishStatusRead,
    SortType,
    VideoRead,
    VideoSortField,
    VideoWithOwner,
    ViewCountRead,
)
from vidtube.server.services.deps import CurrentUserDep, MediaStorageDep, PageDep, ReposDep
from vidtube.server.services.media import destroy_quietly, has_content, upload_file
from vidtube.server.services.params import ensure_id, is_valid_id, require_text

logger = get_logger(__name__)

router = APIRouter(tags=["videos"])


async def _get_visible_video(repos, video_id: str, viewer: User) -> Video:
    """Load a video the viewer may see; unpublished videos of others are 404."""
    video = await repos.videos.get_by_id(ensure_id(video_id, "video id"))
    if video is None or (not video.is_published and video.owner_id != viewer.id):
        raise ApiError(404, "Video not found")
    return video


async def _get_owned_video(repos, video_id: str, owner: User) -> Video:
    video = await repos.videos.get_by_id(ensure_id(video_id, "video id"))
    if video is None:
        raise ApiError(404, "Video not found")
    if video.owner_id != owner.id:
        raise ApiError(403, "You are not allowed to modify this video")
    return video


@router.get(
    "",
    response_model=ApiResponse[Page[VideoWithOwner]],
    summary="List Videos",
    description="Paginated list of videos visible to the caller, with search, owner filter and sorting.",
    response_description="One page of videos with their owners.",
    responses={400: {"description": "Unsupported sort_by or sort_type"}},
)
async def list_videos(
    user: CurrentUserDep,
    repos: ReposDep,
    paging: PageDep,
    query: Optional[str] = Query(None, description="Case-insensitive title search"),
    sort_by: Optional[str] = Query(None, description="created_at, updated_at, views, duration or title"),
    sort_type: Optional[str] = Query(None, description="asc or desc"),
    user_id: Optional[str] = Query(None, description="Only videos of this owner"),
) -> ApiResponse[Page[VideoWithOwner]]:
    """
    List videos.

    - **query**: Substring matched against titles.
    - **sort_by**: Sort column; newest first when omitted.
    - **sort_type**: Sort direction; ascending when only sort_by is given.
    - **user_id**: Owner filter; malformed values are ignored.

    Unpublished videos are only listed for their owner.
    """
    try:
        sort_field = VideoSortField(sort_by) if sort_by else VideoSortField.CREATED_AT
        direction = SortType(sort_type.lower()) if sort_type else None
    except ValueError as e:
        raise ApiError(400, "Invalid sort parameters") from e

    if direction is None:
        descending = sort_by is None
    else:
        descending = direction is SortType.DESC

    rows, total = await repos.videos.list_videos(
        viewer_id=user.id,
        page=paging.page,
        limit=paging.limit,
        query=query.strip() if query else None,
        owner_id=user_id if is_valid_id(user_id) else None,
        sort_by=sort_field.value,
        descending=descending,
    )
    docs = [VideoWithOwner.from_row(video, owner) for video, owner in rows]
    return ApiResponse.ok(Page.build(docs, total, paging.page, paging.limit), "Videos fetched successfully")


@router.post(
    "",
    response_model=ApiResponse[VideoRead],
    status_code=status.HTTP_201_CREATED,
    summary="Publish Video",
    description="Upload a video file and thumbnail and create the video record.",
    response_description="The created video.",
    responses={
        201: {"description": "Video published successfully"},
        400: {"description": "Missing title, description, video file or thumbnail"},
        502: {"description": "Upload failed"},
    },
)
async def publish_video(
    user: CurrentUserDep,
    repos: ReposDep,
    storage: MediaStorageDep,
    title: str = Form(""),
    description: str = Form(""),
    video_file: Optional[UploadFile] = File(None),
    thumbnail: Optional[UploadFile] = File(None),
) -> ApiResponse[VideoRead]:
    """
    Publish a new video.

    - **title**: Video title.
    - **description**: Video description.
    - **video_file**: The video (required).
    - **thumbnail**: Thumbnail image (required).
    """
    title = require_text(title, "Title and description are required")
    description = require_text(description, "Title and description are required")
    if not has_content(video_file) or not has_content(thumbnail):
        raise ApiError(400, "Video file and thumbnail are required")

    video_media = await upload_file(storage, video_file, label="Video", resource_type="video")
    try:
        thumbnail_media = await upload_file(storage, thumbnail, label="Thumbnail")
    except (ApiError, MediaStorageError):
        await destroy_quietly(storage, video_media.public_id, resource_type="video")
        raise

    video = await repos.videos.create(
        Video(
            title=title,
            description=description,
            video_file_url=video_media.delivery_url,
            video_file_public_id=video_media.public_id,
            thumbnail_url=thumbnail_media.delivery_url,
            thumbnail_public_id=thumbnail_media.public_id,
            duration=video_media.duration,
            owner_id=user.id,
        )
    )
    logger.info(f"User {user.id} published video {video.id}")
    return ApiResponse.ok(VideoRead.model_validate(video), "Video published successfully", status.HTTP_201_CREATED)


@router.get(
    "/{video_id}",
    response_model=ApiResponse[VideoWithOwner],
    summary="Get Video",
    description="Retrieve a video with its owner.",
    response_description="The video.",
    responses={400: {"description": "Invalid video id"}, 404: {"description": "Video not found"}},
)
async def get_video(video_id: str, user: CurrentUserDep, repos: ReposDep) -> ApiResponse[VideoWithOwner]:
    video = await _get_visible_video(repos, video_id, user)
    owner = await repos.users.get_by_id(video.owner_id)
    return ApiResponse.ok(VideoWithOwner.from_row(video, owner), "Video fetched successfully")


@router.post(
    "/{video_id}/views",
    response_model=ApiResponse[ViewCountRead],
    summary="Record Video View",
    description="Increment the view counter and add the video to the caller's watch history.",
    response_description="The new view count.",
    responses={404: {"description": "Video not found"}},
)
async def record_view(video_id: str, user: CurrentUserDep, repos: ReposDep) -> ApiResponse[ViewCountRead]:
    video = await _get_visible_video(repos, video_id, user)
    video = await repos.videos.increment_views(video)
    await repos.users.record_watch(user.id, video.id)
    return ApiResponse.ok(ViewCountRead(views=video.views), "View recorded")


@router.patch(
    "/{video_id}",
    response_model=ApiResponse[VideoRead],
    summary="Update Video",
    description="Change title, description and/or thumbnail of a video owned by the caller.",
    response_description="The updated video.",
    responses={
        400: {"description": "Nothing to update or blank field"},
        403: {"description": "Caller does not own the video"},
        404: {"description": "Video not found"},
    },
)
async def update_video(
    video_id: str,
    user: CurrentUserDep,
    repos: ReposDep,
    storage: MediaStorageDep,
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    thumbnail: Optional[UploadFile] = File(None),
) -> ApiResponse[VideoRead]:
    """
    Update video details.

    - **title**: New title (optional, non-blank).
    - **description**: New description (optional, non-blank).
    - **thumbnail**: New thumbnail image (optional); replaces the old one.
    """
    video = await _get_owned_video(repos, video_id, user)

    new_thumbnail = has_content(thumbnail)
    if title is None and description is None and not new_thumbnail:
        raise ApiError(400, "Nothing to update")
    if title is not None:
        video.title = require_text(title, "Title cannot be empty")
    if description is not None:
        video.description = require_text(description, "Description cannot be empty")

    previous_thumbnail = None
    if new_thumbnail:
        media = await upload_file(storage, thumbnail, label="Thumbnail")
        previous_thumbnail = video.thumbnail_public_id
        video.thumbnail_url = media.delivery_url
        video.thumbnail_public_id = media.public_id

    video = await repos.videos.update(video)
    await destroy_quietly(storage, previous_thumbnail)
    return ApiResponse.ok(VideoRead.model_validate(video), "Video updated successfully")


@router.delete(
    "/{video_id}",
    response_model=ApiResponse[dict],
    summary="Delete Video",
    description="Delete a video owned by the caller, its stored media, comments, likes and playlist entries.",
    response_description="Empty payload.",
    responses={403: {"description": "Caller does not own the video"}, 404: {"description": "Video not found"}},
)
async def delete_video(
    video_id: str, user: CurrentUserDep, repos: ReposDep, storage: MediaStorageDep
) -> ApiResponse[dict]:
    video = await _get_owned_video(repos, video_id, user)
    thumbnail_public_id, video_public_id = video.thumbnail_public_id, video.video_file_public_id

    await repos.videos.delete_cascade(video)
    await destroy_quietly(storage, thumbnail_public_id, resource_type="image")
    await destroy_quietly(storage, video_public_id, resource_type="video")

    logger.info(f"User {user.id} deleted video {video_id}")
    return ApiResponse.ok({}, "Video deleted successfully")


@router.patch(
    "/toggle/publish/{video_id}",
    response_model=ApiResponse[PublishStatusRead],
    summary="Toggle Publish Status",
    description="Publish or unpublish a video owned by the caller.",
    response_description="The new publish status.",
    responses={403: {"description": "Caller does not own the video"}, 404: {"description": "Video not found"}},
)
async def toggle_publish_status(
    video_id: str, user: CurrentUserDep, repos: ReposDep
) -> ApiResponse[PublishStatusRead]:
    video = await _get_owned_video(repos, video_id, user)
    video.is_published = not video.is_published
    video = await repos.videos.update(video)
    return ApiResponse.ok(PublishStatusRead(is_published=video.is_published), "Publish status toggled")
