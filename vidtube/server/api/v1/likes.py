"""
Like endpoints.

Toggle likes on videos, comments and tweets, and list the caller's liked videos.
"""

from __future__ import annotations

from typing import List

from fastapi import APIRouter

from vidtube.core.errors import ApiError
from vidtube.core.models.io import ApiResponse, LikeToggleRead, VideoWithOwner
from vidtube.server.services.deps import CurrentUserDep, ReposDep
from vidtube.server.services.params import ensure_id

router = APIRouter(tags=["likes"])


def _toggle_message(is_liked: bool) -> str:
    return "Liked successfully" if is_liked else "Unliked successfully"


@router.post(
    "/toggle/v/{video_id}",
    response_model=ApiResponse[LikeToggleRead],
    summary="Toggle Video Like",
    description="Like the video, or remove the caller's like if present.",
    response_description="Whether the video is now liked.",
    responses={404: {"description": "Video not found"}},
)
async def toggle_video_like(video_id: str, user: CurrentUserDep, repos: ReposDep) -> ApiResponse[LikeToggleRead]:
    video = await repos.videos.get_by_id(ensure_id(video_id, "video id"))
    if video is None or (not video.is_published and video.owner_id != user.id):
        raise ApiError(404, "Video not found")
    is_liked = await repos.likes.toggle(user.id, video_id=video.id)
    return ApiResponse.ok(LikeToggleRead(is_liked=is_liked), _toggle_message(is_liked))


@router.post(
    "/toggle/c/{comment_id}",
    response_model=ApiResponse[LikeToggleRead],
    summary="Toggle Comment Like",
    description="Like the comment, or remove the caller's like if present.",
    response_description="Whether the comment is now liked.",
    responses={404: {"description": "Comment not found"}},
)
async def toggle_comment_like(
    comment_id: str, user: CurrentUserDep, repos: ReposDep
) -> ApiResponse[LikeToggleRead]:
    comment = await repos.comments.get_by_id(ensure_id(comment_id, "comment id"))
    if comment is None:
        raise ApiError(404, "Comment not found")
    is_liked = await repos.likes.toggle(user.id, comment_id=comment.id)
    return ApiResponse.ok(LikeToggleRead(is_liked=is_liked), _toggle_message(is_liked))


@router.post(
    "/toggle/t/{tweet_id}",
    response_model=ApiResponse[LikeToggleRead],
    summary="Toggle Tweet Like",
    description="Like the tweet, or remove the caller's like if present.",
    response_description="Whether the tweet is now liked.",
    responses={404: {"description": "Tweet not found"}},
)
async def toggle_tweet_like(tweet_id: str, user: CurrentUserDep, repos: ReposDep) -> ApiResponse[LikeToggleRead]:
    tweet = await repos.tweets.get_by_id(ensure_id(tweet_id, "tweet id"))
    if tweet is None:
        raise ApiError(404, "Tweet not found")
    is_liked = await repos.likes.toggle(user.id, tweet_id=tweet.id)
    return ApiResponse.ok(LikeToggleRead(is_liked=is_liked), _toggle_message(is_liked))


@router.get(
    "/videos",
    response_model=ApiResponse[List[VideoWithOwner]],
    summary="List Liked Videos",
    description="Videos liked by the caller, most recent like first. Empty when none.",
    response_description="List of videos with their owners.",
)
async def list_liked_videos(user: CurrentUserDep, repos: ReposDep) -> ApiResponse[List[VideoWithOwner]]:
    rows = await repos.likes.liked_videos(user.id)
    videos = [VideoWithOwner.from_row(video, owner) for video, owner in rows]
    return ApiResponse.ok(videos, "Liked videos fetched successfully")
