"""
Subscription endpoints.

Toggle subscriptions between users and list subscribers or subscribed channels.
"""

from __future__ import annotations

from fastapi import APIRouter, Response, status

from vidtube.core.database.entities.users import User
from vidtube.core.errors import ApiError
from vidtube.core.models.io import ApiResponse, Page, SubscriptionToggleRead, UserSummary
from vidtube.server.services.deps import CurrentUserDep, PageDep, ReposDep
from vidtube.server.services.params import ensure_id

router = APIRouter(tags=["subscriptions"])


async def _get_user(repos, user_id: str, name: str) -> User:
    user = await repos.users.get_by_id(ensure_id(user_id, f"{name} id"))
    if user is None:
        raise ApiError(404, f"{name.capitalize()} not found")
    return user


@router.post(
    "/c/{channel_id}",
    response_model=ApiResponse[SubscriptionToggleRead],
    summary="Toggle Subscription",
    description="Subscribe to a channel, or unsubscribe if already subscribed.",
    response_description="Whether the caller is now subscribed.",
    responses={
        200: {"description": "Unsubscribed"},
        201: {"description": "Subscribed"},
        400: {"description": "Cannot subscribe to own channel"},
        404: {"description": "Channel not found"},
    },
)
async def toggle_subscription(
    channel_id: str, response: Response, user: CurrentUserDep, repos: ReposDep
) -> ApiResponse[SubscriptionToggleRead]:
    channel_id = ensure_id(channel_id, "channel id")
    if channel_id == user.id:
        raise ApiError(400, "You cannot subscribe to your own channel")
    channel = await _get_user(repos, channel_id, "channel")

    subscribed = await repos.subscriptions.toggle(user.id, channel.id)
    if subscribed:
        response.status_code = status.HTTP_201_CREATED
        return ApiResponse.ok(SubscriptionToggleRead(subscribed=True), "Subscribed successfully", 201)
    return ApiResponse.ok(SubscriptionToggleRead(subscribed=False), "Unsubscribed successfully")


@router.get(
    "/c/{channel_id}",
    response_model=ApiResponse[Page[UserSummary]],
    summary="List Channel Subscribers",
    description="Paginated subscribers of a channel, most recent first.",
    response_description="One page of subscribers.",
    responses={404: {"description": "Channel not found"}},
)
async def list_channel_subscribers(
    channel_id: str, user: CurrentUserDep, repos: ReposDep, paging: PageDep
) -> ApiResponse[Page[UserSummary]]:
    channel = await _get_user(repos, channel_id, "channel")
    users, total = await repos.subscriptions.list_subscribers(channel.id, paging.page, paging.limit)
    docs = [UserSummary.model_validate(subscriber) for subscriber in users]
    return ApiResponse.ok(Page.build(docs, total, paging.page, paging.limit), "Subscribers fetched successfully")


@router.get(
    "/u/{subscriber_id}",
    response_model=ApiResponse[Page[UserSummary]],
    summary="List Subscribed Channels",
    description="Paginated channels a user subscribed to, most recent first.",
    response_description="One page of channels.",
    responses={404: {"description": "Subscriber not found"}},
)
async def list_subscribed_channels(
    subscriber_id: str, user: CurrentUserDep, repos: ReposDep, paging: PageDep
) -> ApiResponse[Page[UserSummary]]:
    subscriber = await _get_user(repos, subscriber_id, "subscriber")
    channels, total = await repos.subscriptions.list_channels(subscriber.id, paging.page, paging.limit)
    docs = [UserSummary.model_validate(channel) for channel in channels]
    return ApiResponse.ok(Page.build(docs, total, paging.page, paging.limit), "Subscribed channels fetched successfully")
