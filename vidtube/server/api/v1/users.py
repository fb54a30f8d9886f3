"""
User and session endpoints.

Registration (with avatar/cover image upload), login/logout, token
rotation, password and profile changes, channel profiles and watch history.
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Body, File, Form, Request, Response, UploadFile, status
from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError

from vidtube.core.database.entities.users import User
from vidtube.core.errors import ApiError
from vidtube.core.logging_config import get_logger
from vidtube.core.media import MediaStorageError
from vidtube.core.models.io import (
    AccountUpdate,
    ApiResponse,
    ChannelProfileRead,
    LoginRead,
    PasswordChange,
    TokenPair,
    TokenRefresh,
    UserLogin,
    UserRead,
    UserRegister,
    VideoWithOwner,
)
from vidtube.core.monitoring import log_auth_event
from vidtube.core.security import (
    REFRESH_TOKEN_TYPE,
    TokenError,
    create_access_token,
    create_refresh_token,
    decode_token,
    hash_password,
    verify_password,
)
from vidtube.server.core import constant
from vidtube.server.services.auth import clear_auth_cookies, set_auth_cookies
from vidtube.server.services.deps import CurrentUserDep, MediaStorageDep, ReposDep
from vidtube.server.services.media import destroy_quietly, has_content, upload_file

logger = get_logger(__name__)

router = APIRouter(tags=["users"])


async def _issue_tokens(repos, user: User) -> TokenPair:
    """Create a fresh token pair and remember the refresh token on the user."""
    tokens = TokenPair(access_token=create_access_token(user), refresh_token=create_refresh_token(user))
    await repos.users.set_refresh_token(user, tokens.refresh_token)
    return tokens


@router.post(
    "/register",
    response_model=ApiResponse[UserRead],
    status_code=status.HTTP_201_CREATED,
    summary="Register User",
    description="Create an account from a multipart form. An avatar image is required; a cover image is optional.",
    response_description="The created user.",
    responses={
        201: {"description": "User registered successfully"},
        400: {"description": "Missing or invalid fields, or missing avatar"},
        409: {"description": "Username or email already taken"},
        502: {"description": "Avatar or cover image upload failed"},
    },
)
async def register_user(
    repos: ReposDep,
    storage: MediaStorageDep,
    full_name: str = Form(""),
    email: str = Form(""),
    username: str = Form(""),
    password: str = Form(""),
    avatar: Optional[UploadFile] = File(None),
    cover_image: Optional[UploadFile] = File(None),
) -> ApiResponse[UserRead]:
    """
    Register a new user.

    - **full_name**: Display name.
    - **email**: Unique email address (stored lowercased).
    - **username**: Unique handle (stored lowercased).
    - **password**: Plain password, stored as a bcrypt hash.
    - **avatar**: Profile image file (required).
    - **cover_image**: Channel banner image file (optional).
    """
    if any(not (field or "").strip() for field in (full_name, email, username, password)):
        raise ApiError(400, "All fields are required")

    try:
        payload = UserRegister(full_name=full_name, email=email, username=username, password=password)
    except ValidationError as e:
        raise ApiError(
            400, "Invalid registration details", errors=e.errors(include_url=False, include_context=False)
        ) from e

    if await repos.users.get_by_username_or_email(username=payload.username, email=payload.email):
        raise ApiError(409, "User with email or username already exists")

    if not has_content(avatar):
        raise ApiError(400, "Avatar file is required")
    avatar_media = await upload_file(storage, avatar, label="Avatar")
    cover_media = None
    if has_content(cover_image):
        try:
            cover_media = await upload_file(storage, cover_image, label="Cover image")
        except (ApiError, MediaStorageError):
            await destroy_quietly(storage, avatar_media.public_id)
            raise

    user = User(
        full_name=payload.full_name,
        email=payload.email,
        username=payload.username,
        password=hash_password(payload.password),
        avatar_url=avatar_media.delivery_url,
        avatar_public_id=avatar_media.public_id,
        cover_image_url=cover_media.delivery_url if cover_media else None,
        cover_image_public_id=cover_media.public_id if cover_media else None,
    )
    try:
        user = await repos.users.create(user)
    except IntegrityError as e:
        await repos.users.session.rollback()
        await destroy_quietly(storage, avatar_media.public_id)
        if cover_media:
            await destroy_quietly(storage, cover_media.public_id)
        raise ApiError(409, "User with email or username already exists") from e

    logger.info(f"Registered user {user.id} ({user.username})")
    return ApiResponse.ok(UserRead.model_validate(user), "User registered successfully", status.HTTP_201_CREATED)


@router.post(
    "/login",
    response_model=ApiResponse[LoginRead],
    summary="Log In",
    description="Authenticate with username or email plus password. Sets access and refresh token cookies.",
    response_description="The user and a fresh token pair.",
    responses={
        200: {"description": "User logged in successfully"},
        400: {"description": "Neither username nor email given"},
        401: {"description": "Invalid credentials"},
        404: {"description": "User does not exist"},
    },
)
async def login_user(credentials: UserLogin, response: Response, repos: ReposDep) -> ApiResponse[LoginRead]:
    """
    Log a user in.

    - **username**: Username (either this or email is required).
    - **email**: Email address.
    - **password**: Account password.
    """
    if not credentials.username and not credentials.email:
        raise ApiError(400, "Username or email is required")

    user = await repos.users.get_by_username_or_email(username=credentials.username, email=credentials.email)
    if user is None:
        raise ApiError(404, "User does not exist")

    if not verify_password(credentials.password, user.password):
        log_auth_event("login", user.id, success=False)
        raise ApiError(401, "Invalid user credentials")

    tokens = await _issue_tokens(repos, user)
    set_auth_cookies(response, tokens.access_token, tokens.refresh_token)
    log_auth_event("login", user.id)

    data = LoginRead(user=UserRead.model_validate(user), **tokens.model_dump())
    return ApiResponse.ok(data, "User logged in successfully")


@router.post(
    "/logout",
    response_model=ApiResponse[dict],
    summary="Log Out",
    description="Revoke the stored refresh token and clear both session cookies.",
    response_description="Empty payload.",
)
async def logout_user(user: CurrentUserDep, response: Response, repos: ReposDep) -> ApiResponse[dict]:
    """Log the current user out."""
    await repos.users.set_refresh_token(user, None)
    clear_auth_cookies(response)
    log_auth_event("logout", user.id)
    return ApiResponse.ok({}, "User logged out")


@router.post(
    "/refresh-token",
    response_model=ApiResponse[TokenPair],
    summary="Refresh Access Token",
    description="Exchange a valid refresh token (cookie or body) for a new access/refresh token pair.",
    response_description="The rotated token pair.",
    responses={
        200: {"description": "Access token refreshed"},
        401: {"description": "Missing, invalid, expired or already used refresh token"},
    },
)
async def refresh_access_token(
    request: Request,
    response: Response,
    repos: ReposDep,
    payload: Optional[TokenRefresh] = Body(None),
) -> ApiResponse[TokenPair]:
    """
    Rotate the session tokens.

    The incoming refresh token must match the one stored for the user, so
    each refresh token can be used once.
    """
    incoming = request.cookies.get(constant.REFRESH_TOKEN_COOKIE) or (payload.refresh_token if payload else None)
    if not incoming:
        raise ApiError(401, "Unauthorized request")

    try:
        claims = decode_token(incoming, REFRESH_TOKEN_TYPE)
    except TokenError as e:
        raise ApiError(401, str(e)) from e

    user = await repos.users.get_by_id(claims["sub"])
    if user is None:
        raise ApiError(401, "Invalid refresh token")
    if user.refresh_token != incoming:
        log_auth_event("refresh", user.id, success=False)
        raise ApiError(401, "Refresh token is expired or used")

    tokens = await _issue_tokens(repos, user)
    set_auth_cookies(response, tokens.access_token, tokens.refresh_token)
    log_auth_event("refresh", user.id)
    return ApiResponse.ok(tokens, "Access token refreshed")


@router.post(
    "/change-password",
    response_model=ApiResponse[dict],
    summary="Change Password",
    description="Replace the current user's password after verifying the old one.",
    response_description="Empty payload.",
    responses={
        200: {"description": "Password changed successfully"},
        400: {"description": "Wrong old password or confirmation mismatch"},
    },
)
async def change_password(payload: PasswordChange, user: CurrentUserDep, repos: ReposDep) -> ApiResponse[dict]:
    """
    Change the current user's password.

    - **old_password**: Current password.
    - **new_password**: Replacement password.
    - **confirm_password**: Must equal new_password.
    """
    if payload.new_password != payload.confirm_password:
        raise ApiError(400, "New password and confirm password do not match")
    if not verify_password(payload.old_password, user.password):
        log_auth_event("change_password", user.id, success=False)
        raise ApiError(400, "Invalid old password")

    user.password = hash_password(payload.new_password)
    await repos.users.update(user)
    log_auth_event("change_password", user.id)
    return ApiResponse.ok({}, "Password changed successfully")


@router.get(
    "/current-user",
    response_model=ApiResponse[UserRead],
    summary="Get Current User",
    description="Return the authenticated user's account.",
    response_description="The current user.",
)
async def get_current_user_profile(user: CurrentUserDep) -> ApiResponse[UserRead]:
    return ApiResponse.ok(UserRead.model_validate(user), "Current user fetched successfully")


@router.patch(
    "/update-account",
    response_model=ApiResponse[UserRead],
    summary="Update Account Details",
    description="Change the current user's full name and/or email.",
    response_description="The updated user.",
    responses={
        200: {"description": "Account details updated"},
        400: {"description": "Neither full_name nor email given"},
        409: {"description": "Email already in use"},
    },
)
async def update_account(payload: AccountUpdate, user: CurrentUserDep, repos: ReposDep) -> ApiResponse[UserRead]:
    """
    Update account details.

    - **full_name**: New display name (optional).
    - **email**: New email address (optional).
    """
    if payload.full_name is None and payload.email is None:
        raise ApiError(400, "Full name or email is required")

    if payload.email is not None and payload.email != user.email:
        if await repos.users.email_taken(payload.email, exclude_user_id=user.id):
            raise ApiError(409, "Email is already in use")
        user.email = payload.email
    if payload.full_name is not None:
        user.full_name = payload.full_name

    user = await repos.users.update(user)
    return ApiResponse.ok(UserRead.model_validate(user), "Account details updated successfully")


@router.patch(
    "/avatar",
    response_model=ApiResponse[UserRead],
    summary="Update Avatar",
    description="Upload a new avatar image; the previous one is removed from storage.",
    response_description="The updated user.",
    responses={400: {"description": "Avatar file is missing"}, 502: {"description": "Upload failed"}},
)
async def update_avatar(
    user: CurrentUserDep,
    repos: ReposDep,
    storage: MediaStorageDep,
    avatar: Optional[UploadFile] = File(None),
) -> ApiResponse[UserRead]:
    if not has_content(avatar):
        raise ApiError(400, "Avatar file is missing")
    media = await upload_file(storage, avatar, label="Avatar")

    previous = user.avatar_public_id
    user.avatar_url = media.delivery_url
    user.avatar_public_id = media.public_id
    user = await repos.users.update(user)

    await destroy_quietly(storage, previous)
    return ApiResponse.ok(UserRead.model_validate(user), "Avatar updated successfully")


@router.patch(
    "/cover-image",
    response_model=ApiResponse[UserRead],
    summary="Update Cover Image",
    description="Upload a new cover image; the previous one is removed from storage.",
    response_description="The updated user.",
    responses={400: {"description": "Cover image file is missing"}, 502: {"description": "Upload failed"}},
)
async def update_cover_image(
    user: CurrentUserDep,
    repos: ReposDep,
    storage: MediaStorageDep,
    cover_image: Optional[UploadFile] = File(None),
) -> ApiResponse[UserRead]:
    if not has_content(cover_image):
        raise ApiError(400, "Cover image file is missing")
    media = await upload_file(storage, cover_image, label="Cover image")

    previous = user.cover_image_public_id
    user.cover_image_url = media.delivery_url
    user.cover_image_public_id = media.public_id
    user = await repos.users.update(user)

    await destroy_quietly(storage, previous)
    return ApiResponse.ok(UserRead.model_validate(user), "Cover image updated successfully")


@router.get(
    "/c/{username}",
    response_model=ApiResponse[ChannelProfileRead],
    summary="Get Channel Profile",
    description="Public channel profile with subscriber counts and whether the caller is subscribed.",
    response_description="The channel profile.",
    responses={404: {"description": "Channel does not exist"}},
)
async def get_channel_profile(username: str, user: CurrentUserDep, repos: ReposDep) -> ApiResponse[ChannelProfileRead]:
    """
    Get a channel's public profile.

    - **username**: Channel handle (case-insensitive).
    """
    if not username.strip():
        raise ApiError(400, "Username is missing")

    profile = await repos.users.get_channel_profile(username, viewer_id=user.id)
    if profile is None:
        raise ApiError(404, "Channel does not exist")

    channel = profile.user
    data = ChannelProfileRead(
        id=channel.id,
        username=channel.username,
        email=channel.email,
        full_name=channel.full_name,
        avatar_url=channel.avatar_url,
        cover_image_url=channel.cover_image_url,
        subscribers_count=profile.subscribers_count,
        channels_subscribed_to_count=profile.channels_subscribed_to_count,
        is_subscribed=profile.is_subscribed,
    )
    return ApiResponse.ok(data, "User channel fetched successfully")


@router.get(
    "/history",
    response_model=ApiResponse[List[VideoWithOwner]],
    summary="Get Watch History",
    description="Videos the current user has watched, most recent first.",
    response_description="List of videos with their owners.",
)
async def get_watch_history(user: CurrentUserDep, repos: ReposDep) -> ApiResponse[List[VideoWithOwner]]:
    rows = await repos.users.get_watch_history(user.id)
    videos = [VideoWithOwner.from_row(video, owner) for video, owner in rows]
    return ApiResponse.ok(videos, "Watch history fetched successfully")
