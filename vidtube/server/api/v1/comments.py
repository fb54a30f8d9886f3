"""
Comment endpoints.

Comments attach to a video or a tweet; ``reply_to`` nests a comment under
another comment on the same target.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, status

from vidtube.core.database.entities.comments import Comment
from vidtube.core.database.entities.users import User
from vidtube.core.errors import ApiError
from vidtube.core.logging_config import get_logger
from vidtube.core.models.io import ApiResponse, CommentCreate, CommentUpdate, CommentWithOwner, Page
from vidtube.server.services.deps import CurrentUserDep, PageDep, ReposDep
from vidtube.server.services.params import ensure_id, require_text

logger = get_logger(__name__)

router = APIRouter(tags=["comments"])


async def _get_commentable_video(repos, video_id: str, viewer: User):
    video = await repos.videos.get_by_id(ensure_id(video_id, "video id"))
    if video is None or (not video.is_published and video.owner_id != viewer.id):
        raise ApiError(404, "Video not found")
    return video


async def _get_commentable_tweet(repos, tweet_id: str):
    tweet = await repos.tweets.get_by_id(ensure_id(tweet_id, "tweet id"))
    if tweet is None:
        raise ApiError(404, "Tweet not found")
    return tweet


async def _resolve_parent(
    repos, reply_to: Optional[str], *, video_id: Optional[str] = None, tweet_id: Optional[str] = None
) -> Optional[str]:
    """Validate ``reply_to`` against the target being commented on."""
    if not reply_to:
        return None
    parent = await repos.comments.get_by_id(ensure_id(reply_to, "parent comment id"))
    if parent is None or parent.video_id != video_id or parent.tweet_id != tweet_id:
        raise ApiError(400, "Parent comment does not belong to this target")
    return parent.id


async def _get_owned_comment(repos, comment_id: str, owner: User) -> Comment:
    comment = await repos.comments.get_by_id(ensure_id(comment_id, "comment id"))
    if comment is None:
        raise ApiError(404, "Comment not found")
    if comment.owner_id != owner.id:
        raise ApiError(403, "You are not allowed to modify this comment")
    return comment


@router.get(
    "/videos/{video_id}",
    response_model=ApiResponse[Page[CommentWithOwner]],
    summary="List Video Comments",
    description="Paginated comments on a video with their authors, newest first.",
    response_description="One page of comments.",
    responses={404: {"description": "Video not found"}},
)
async def list_video_comments(
    video_id: str, user: CurrentUserDep, repos: ReposDep, paging: PageDep
) -> ApiResponse[Page[CommentWithOwner]]:
    video = await _get_commentable_video(repos, video_id, user)
    rows, total = await repos.comments.list_for_target(page=paging.page, limit=paging.limit, video_id=video.id)
    docs = [CommentWithOwner.from_row(comment, owner) for comment, owner in rows]
    return ApiResponse.ok(Page.build(docs, total, paging.page, paging.limit), "Comments fetched successfully")


@router.get(
    "/tweets/{tweet_id}",
    response_model=ApiResponse[Page[CommentWithOwner]],
    summary="List Tweet Comments",
    description="Paginated comments on a tweet with their authors, newest first.",
    response_description="One page of comments.",
    responses={404: {"description": "Tweet not found"}},
)
async def list_tweet_comments(
    tweet_id: str, user: CurrentUserDep, repos: ReposDep, paging: PageDep
) -> ApiResponse[Page[CommentWithOwner]]:
    tweet = await _get_commentable_tweet(repos, tweet_id)
    rows, total = await repos.comments.list_for_target(page=paging.page, limit=paging.limit, tweet_id=tweet.id)
    docs = [CommentWithOwner.from_row(comment, owner) for comment, owner in rows]
    return ApiResponse.ok(Page.build(docs, total, paging.page, paging.limit), "Comments fetched successfully")


@router.post(
    "/videos/{video_id}",
    response_model=ApiResponse[CommentWithOwner],
    status_code=status.HTTP_201_CREATED,
    summary="Comment on Video",
    description="Add a comment (or a reply) to a video.",
    response_description="The created comment.",
    responses={
        400: {"description": "Blank content or invalid parent comment"},
        404: {"description": "Video not found"},
    },
)
async def add_video_comment(
    video_id: str, payload: CommentCreate, user: CurrentUserDep, repos: ReposDep
) -> ApiResponse[CommentWithOwner]:
    """
    Add a comment to a video.

    - **content**: Comment text.
    - **reply_to**: Optional ID of the comment being replied to.
    """
    content = require_text(payload.content, "Content is required")
    video = await _get_commentable_video(repos, video_id, user)
    parent_id = await _resolve_parent(repos, payload.reply_to, video_id=video.id)

    comment = await repos.comments.create(
        Comment(content=content, video_id=video.id, reply_to_id=parent_id, owner_id=user.id)
    )
    return ApiResponse.ok(CommentWithOwner.from_row(comment, user), "Comment added successfully", 201)


@router.post(
    "/tweets/{tweet_id}",
    response_model=ApiResponse[CommentWithOwner],
    status_code=status.HTTP_201_CREATED,
    summary="Comment on Tweet",
    description="Add a comment (or a reply) to a tweet.",
    response_description="The created comment.",
    responses={
        400: {"description": "Blank content or invalid parent comment"},
        404: {"description": "Tweet not found"},
    },
)
async def add_tweet_comment(
    tweet_id: str, payload: CommentCreate, user: CurrentUserDep, repos: ReposDep
) -> ApiResponse[CommentWithOwner]:
    content = require_text(payload.content, "Content is required")
    tweet = await _get_commentable_tweet(repos, tweet_id)
    parent_id = await _resolve_parent(repos, payload.reply_to, tweet_id=tweet.id)

    comment = await repos.comments.create(
        Comment(content=content, tweet_id=tweet.id, reply_to_id=parent_id, owner_id=user.id)
    )
    return ApiResponse.ok(CommentWithOwner.from_row(comment, user), "Comment added successfully", 201)


@router.patch(
    "/c/{comment_id}",
    response_model=ApiResponse[CommentWithOwner],
    summary="Update Comment",
    description="Change the text of a comment owned by the caller.",
    response_description="The updated comment.",
    responses={
        400: {"description": "Blank content"},
        403: {"description": "Caller does not own the comment"},
        404: {"description": "Comment not found"},
    },
)
async def update_comment(
    comment_id: str, payload: CommentUpdate, user: CurrentUserDep, repos: ReposDep
) -> ApiResponse[CommentWithOwner]:
    content = require_text(payload.content, "Content is required")
    comment = await _get_owned_comment(repos, comment_id, user)
    comment.content = content
    comment = await repos.comments.update(comment)
    return ApiResponse.ok(CommentWithOwner.from_row(comment, user), "Comment updated successfully")


@router.delete(
    "/c/{comment_id}",
    response_model=ApiResponse[dict],
    summary="Delete Comment",
    description="Delete a comment owned by the caller together with its replies and likes.",
    response_description="Number of comments removed.",
    responses={403: {"description": "Caller does not own the comment"}, 404: {"description": "Comment not found"}},
)
async def delete_comment(comment_id: str, user: CurrentUserDep, repos: ReposDep) -> ApiResponse[dict]:
    comment = await _get_owned_comment(repos, comment_id, user)
    removed = await repos.comments.delete_subtree(comment)
    logger.debug(f"Deleted comment {comment_id} with {removed - 1} replies")
    return ApiResponse.ok({"deleted_count": removed}, "Comment deleted successfully")
