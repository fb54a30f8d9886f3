"""
Tweet endpoints.

Short text posts (at most 300 characters) with owner-only edits and deletes.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Query, status

from vidtube.core.database.entities.tweets import Tweet
from vidtube.core.database.entities.users import User
from vidtube.core.errors import ApiError
from vidtube.core.logging_config import get_logger
from vidtube.core.models.io import (
    ApiResponse,
    Page,
    SortType,
    TweetCreate,
    TweetRead,
    TweetSortField,
    TweetUpdate,
    TweetWithOwner,
)
from vidtube.server.core import constant
from vidtube.server.services.deps import CurrentUserDep, PageDep, ReposDep
from vidtube.server.services.params import ensure_id, require_text

logger = get_logger(__name__)

router = APIRouter(tags=["tweets"])


def _validate_content(content: Optional[str]) -> str:
    text = require_text(content, "Content is required")
    if len(text) > constant.TWEET_MAX_LENGTH:
        raise ApiError(400, f"Tweet cannot exceed {constant.TWEET_MAX_LENGTH} characters")
    return text


def _sort_options(sort_by: Optional[str], sort_type: Optional[str]) -> tuple:
    try:
        field = TweetSortField(sort_by) if sort_by else TweetSortField.CREATED_AT
        direction = SortType(sort_type.lower()) if sort_type else SortType.DESC
    except ValueError as e:
        raise ApiError(400, "Invalid sort parameters") from e
    return field.value, direction is SortType.DESC


async def _get_owned_tweet(repos, tweet_id: str, owner: User) -> Tweet:
    tweet = await repos.tweets.get_by_id(ensure_id(tweet_id, "tweet id"))
    if tweet is None:
        raise ApiError(404, "Tweet not found")
    if tweet.owner_id != owner.id:
        raise ApiError(403, "You are not allowed to modify this tweet")
    return tweet


@router.post(
    "",
    response_model=ApiResponse[TweetRead],
    status_code=status.HTTP_201_CREATED,
    summary="Create Tweet",
    description="Post a short text update to the caller's channel.",
    response_description="The created tweet.",
    responses={400: {"description": "Blank or too long content"}},
)
async def create_tweet(payload: TweetCreate, user: CurrentUserDep, repos: ReposDep) -> ApiResponse[TweetRead]:
    """
    Create a tweet.

    - **content**: Text of at most 300 characters.
    """
    tweet = await repos.tweets.create(Tweet(content=_validate_content(payload.content), owner_id=user.id))
    return ApiResponse.ok(TweetRead.model_validate(tweet), "Tweet created successfully", status.HTTP_201_CREATED)


@router.get(
    "",
    response_model=ApiResponse[Page[TweetWithOwner]],
    summary="List Tweets",
    description="Paginated list of all tweets with their authors.",
    response_description="One page of tweets.",
    responses={400: {"description": "Unsupported sort_by or sort_type"}},
)
async def list_tweets(
    user: CurrentUserDep,
    repos: ReposDep,
    paging: PageDep,
    sort_by: Optional[str] = Query(None, description="created_at or updated_at"),
    sort_type: Optional[str] = Query(None, description="asc or desc (default desc)"),
) -> ApiResponse[Page[TweetWithOwner]]:
    column, descending = _sort_options(sort_by, sort_type)
    rows, total = await repos.tweets.list_tweets(
        page=paging.page, limit=paging.limit, sort_by=column, descending=descending
    )
    docs = [TweetWithOwner.from_row(tweet, owner) for tweet, owner in rows]
    return ApiResponse.ok(Page.build(docs, total, paging.page, paging.limit), "Tweets fetched successfully")


@router.get(
    "/user/{user_id}",
    response_model=ApiResponse[Page[TweetWithOwner]],
    summary="List User Tweets",
    description="Paginated tweets of one user.",
    response_description="One page of tweets.",
    responses={404: {"description": "User not found"}},
)
async def list_user_tweets(
    user_id: str,
    user: CurrentUserDep,
    repos: ReposDep,
    paging: PageDep,
    sort_by: Optional[str] = Query(None, description="created_at or updated_at"),
    sort_type: Optional[str] = Query(None, description="asc or desc (default desc)"),
) -> ApiResponse[Page[TweetWithOwner]]:
    column, descending = _sort_options(sort_by, sort_type)
    author = await repos.users.get_by_id(ensure_id(user_id, "user id"))
    if author is None:
        raise ApiError(404, "User not found")

    rows, total = await repos.tweets.list_tweets(
        page=paging.page, limit=paging.limit, owner_id=author.id, sort_by=column, descending=descending
    )
    docs = [TweetWithOwner.from_row(tweet, owner) for tweet, owner in rows]
    return ApiResponse.ok(Page.build(docs, total, paging.page, paging.limit), "User tweets fetched successfully")


@router.patch(
    "/{tweet_id}",
    response_model=ApiResponse[TweetRead],
    summary="Update Tweet",
    description="Change the text of a tweet owned by the caller.",
    response_description="The updated tweet.",
    responses={
        400: {"description": "Blank or too long content"},
        403: {"description": "Caller does not own the tweet"},
        404: {"description": "Tweet not found"},
    },
)
async def update_tweet(
    tweet_id: str, payload: TweetUpdate, user: CurrentUserDep, repos: ReposDep
) -> ApiResponse[TweetRead]:
    content = _validate_content(payload.content)
    tweet = await _get_owned_tweet(repos, tweet_id, user)
    tweet.content = content
    tweet = await repos.tweets.update(tweet)
    return ApiResponse.ok(TweetRead.model_validate(tweet), "Tweet updated successfully")


@router.delete(
    "/{tweet_id}",
    response_model=ApiResponse[dict],
    summary="Delete Tweet",
    description="Delete a tweet owned by the caller together with its comments and likes.",
    response_description="Empty payload.",
    responses={403: {"description": "Caller does not own the tweet"}, 404: {"description": "Tweet not found"}},
)
async def delete_tweet(tweet_id: str, user: CurrentUserDep, repos: ReposDep) -> ApiResponse[dict]:
    tweet = await _get_owned_tweet(repos, tweet_id, user)
    await repos.tweets.delete_cascade(tweet)
    return ApiResponse.ok({}, "Tweet deleted successfully")
