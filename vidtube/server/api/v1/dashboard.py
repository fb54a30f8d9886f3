"""
Channel dashboard endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter

from vidtube.core.models.io import ApiResponse, ChannelStatsRead, Page, VideoRead
from vidtube.server.services.deps import CurrentUserDep, PageDep, ReposDep

router = APIRouter(tags=["dashboard"])


@router.get(
    "/stats",
    response_model=ApiResponse[ChannelStatsRead],
    summary="Get Channel Stats",
    description="Total views, subscribers, videos and likes for the caller's channel.",
    response_description="Channel statistics.",
)
async def get_channel_stats(user: CurrentUserDep, repos: ReposDep) -> ApiResponse[ChannelStatsRead]:
    stats = await repos.dashboard.get_channel_stats(user.id)
    return ApiResponse.ok(ChannelStatsRead(**stats), "Channel stats fetched successfully")


@router.get(
    "/videos",
    response_model=ApiResponse[Page[VideoRead]],
    summary="List Channel Videos",
    description="All of the caller's videos, published or not, newest first.",
    response_description="One page of videos.",
)
async def get_channel_videos(user: CurrentUserDep, repos: ReposDep, paging: PageDep) -> ApiResponse[Page[VideoRead]]:
    videos, total = await repos.videos.list_for_owner(user.id, paging.page, paging.limit)
    docs = [VideoRead.model_validate(video) for video in videos]
    return ApiResponse.ok(Page.build(docs, total, paging.page, paging.limit), "Channel videos fetched successfully")
