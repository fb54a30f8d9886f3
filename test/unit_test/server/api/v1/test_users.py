import pytest
from httpx import AsyncClient

from test.unit_test.server.conftest import image_file, login, register

pytestmark = pytest.mark.asyncio

USERS = "/api/v1/users"


class TestRegister:
    async def test_register_success(self, client: AsyncClient, fake_cloudinary):
        response = await register(client, "Alice", with_cover=True)

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "User registered successfully"
        user = body["data"]
        assert user["username"] == "alice"
        assert user["email"] == "alice@example.com"
        assert user["avatar_url"].startswith("https://res.mock-cloudinary/")
        assert user["cover_image_url"].startswith("https://res.mock-cloudinary/")
        assert "password" not in user
        assert "refresh_token" not in user
        assert len(fake_cloudinary.uploads) == 2

    async def test_missing_fields(self, client: AsyncClient):
        response = await client.post(
            f"{USERS}/register",
            data={"full_name": "Alice", "email": "alice@example.com", "username": "  ", "password": "x"},
            files={"avatar": image_file()},
        )
        assert response.status_code == 400
        assert response.json()["message"] == "All fields are required"

    async def test_invalid_email(self, client: AsyncClient):
        response = await client.post(
            f"{USERS}/register",
            data={"full_name": "Alice", "email": "not-an-email", "username": "alice", "password": "x"},
            files={"avatar": image_file()},
        )
        assert response.status_code == 400
        body = response.json()
        assert body["message"] == "Invalid registration details"
        assert body["errors"]

    async def test_avatar_required(self, client: AsyncClient, fake_cloudinary):
        response = await client.post(
            f"{USERS}/register",
            data={"full_name": "Alice", "email": "alice@example.com", "username": "alice", "password": "x"},
        )
        assert response.status_code == 400
        assert response.json()["message"] == "Avatar file is required"
        assert fake_cloudinary.uploads == []

    async def test_duplicate_username_or_email(self, client: AsyncClient, fake_cloudinary):
        assert (await register(client, "alice")).status_code == 201

        response = await register(client, "ALICE")

        assert response.status_code == 409
        assert response.json()["message"] == "User with email or username already exists"
        assert len(fake_cloudinary.uploads) == 1

    async def test_upload_failure_is_bad_gateway(self, client: AsyncClient, fake_cloudinary):
        fake_cloudinary.fail_uploads = True

        response = await register(client, "alice")

        assert response.status_code == 502
        assert response.json()["message"] == "Media storage request failed"

    async def test_cover_failure_destroys_uploaded_avatar(self, client: AsyncClient, fake_cloudinary):
        fake_cloudinary.fail_uploads_after = 1

        response = await register(client, "alice", with_cover=True)

        assert response.status_code == 502
        avatar_id = fake_cloudinary.uploads[0]["public_id"]
        assert len(fake_cloudinary.uploads) == 1
        assert fake_cloudinary.destroyed == [avatar_id]


class TestLogin:
    async def test_login_by_username_or_email(self, client: AsyncClient):
        await register(client, "alice")

        by_username = await client.post(f"{USERS}/login", json={"username": "alice", "password": "secret-pass"})
        by_email = await client.post(f"{USERS}/login", json={"email": "ALICE@example.com", "password": "secret-pass"})

        assert by_username.status_code == 200
        assert by_email.status_code == 200
        data = by_username.json()["data"]
        assert data["user"]["username"] == "alice"
        assert data["access_token"] and data["refresh_token"]
        cookies = by_username.headers.get_list("set-cookie")
        assert any(cookie.startswith("access_token=") and "HttpOnly" in cookie for cookie in cookies)
        assert any(cookie.startswith("refresh_token=") for cookie in cookies)

    async def test_identifier_required(self, client: AsyncClient):
        response = await client.post(f"{USERS}/login", json={"password": "secret-pass"})
        assert response.status_code == 400
        assert response.json()["message"] == "Username or email is required"

    async def test_unknown_user(self, client: AsyncClient):
        response = await client.post(f"{USERS}/login", json={"username": "ghost", "password": "secret-pass"})
        assert response.status_code == 404
        assert response.json()["message"] == "User does not exist"

    async def test_wrong_password(self, client: AsyncClient):
        await register(client, "alice")
        response = await client.post(f"{USERS}/login", json={"username": "alice", "password": "wrong"})
        assert response.status_code == 401
        assert response.json()["message"] == "Invalid user credentials"


class TestAuthenticatedEndpoints:
    async def test_requires_token(self, client: AsyncClient):
        response = await client.get(f"{USERS}/current-user")
        assert response.status_code == 401
        assert response.json()["message"] == "Unauthorized request"

    async def test_rejects_garbage_token(self, client: AsyncClient):
        response = await client.get(f"{USERS}/current-user", headers={"Authorization": "Bearer nonsense"})
        assert response.status_code == 401
        assert response.json()["message"] == "Invalid access token"

    async def test_current_user(self, client: AsyncClient, signup):
        user, headers = await signup("alice")
        response = await client.get(f"{USERS}/current-user", headers=headers)
        assert response.status_code == 200
        assert response.json()["data"]["id"] == user["id"]

    async def test_logout_revokes_refresh_token(self, client: AsyncClient):
        await register(client, "alice")
        login_response = await client.post(f"{USERS}/login", json={"username": "alice", "password": "secret-pass"})
        client.cookies.clear()
        tokens = login_response.json()["data"]
        headers = {"Authorization": f"Bearer {tokens['access_token']}"}

        logout = await client.post(f"{USERS}/logout", headers=headers)
        assert logout.status_code == 200
        assert logout.json()["message"] == "User logged out"

        refresh = await client.post(f"{USERS}/refresh-token", json={"refresh_token": tokens["refresh_token"]})
        assert refresh.status_code == 401
        assert refresh.json()["message"] == "Refresh token is expired or used"


class TestRefreshToken:
    async def test_rotates_tokens_once(self, client: AsyncClient):
        await register(client, "alice")
        login_response = await client.post(f"{USERS}/login", json={"username": "alice", "password": "secret-pass"})
        client.cookies.clear()
        old_refresh = login_response.json()["data"]["refresh_token"]

        first = await client.post(f"{USERS}/refresh-token", json={"refresh_token": old_refresh})
        client.cookies.clear()
        assert first.status_code == 200
        new_tokens = first.json()["data"]
        assert new_tokens["refresh_token"] != old_refresh

        replay = await client.post(f"{USERS}/refresh-token", json={"refresh_token": old_refresh})
        assert replay.status_code == 401
        assert replay.json()["message"] == "Refresh token is expired or used"

        headers = {"Authorization": f"Bearer {new_tokens['access_token']}"}
        assert (await client.get(f"{USERS}/current-user", headers=headers)).status_code == 200

    async def test_missing_token(self, client: AsyncClient):
        response = await client.post(f"{USERS}/refresh-token")
        assert response.status_code == 401
        assert response.json()["message"] == "Unauthorized request"

    async def test_access_token_is_not_a_refresh_token(self, client: AsyncClient):
        await register(client, "alice")
        login_response = await client.post(f"{USERS}/login", json={"username": "alice", "password": "secret-pass"})
        client.cookies.clear()
        access = login_response.json()["data"]["access_token"]

        response = await client.post(f"{USERS}/refresh-token", json={"refresh_token": access})

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid refresh token"


class TestChangePassword:
    async def test_change_password(self, client: AsyncClient, signup):
        _, headers = await signup("alice")
        response = await client.post(
            f"{USERS}/change-password",
            json={"old_password": "secret-pass", "new_password": "new-pass", "confirm_password": "new-pass"},
            headers=headers,
        )
        assert response.status_code == 200

        await login(client, "alice", "new-pass")
        stale = await client.post(f"{USERS}/login", json={"username": "alice", "password": "secret-pass"})
        assert stale.status_code == 401

    async def test_confirmation_mismatch(self, client: AsyncClient, signup):
        _, headers = await signup("alice")
        response = await client.post(
            f"{USERS}/change-password",
            json={"old_password": "secret-pass", "new_password": "a", "confirm_password": "b"},
            headers=headers,
        )
        assert response.status_code == 400
        assert response.json()["message"] == "New password and confirm password do not match"

    async def test_wrong_old_password(self, client: AsyncClient, signup):
        _, headers = await signup("alice")
        response = await client.post(
            f"{USERS}/change-password",
            json={"old_password": "nope", "new_password": "a", "confirm_password": "a"},
            headers=headers,
        )
        assert response.status_code == 400
        assert response.json()["message"] == "Invalid old password"


class TestUpdateAccount:
    async def test_update_name_and_email(self, client: AsyncClient, signup):
        _, headers = await signup("alice")
        response = await client.patch(
            f"{USERS}/update-account",
            json={"full_name": "Alice Liddell", "email": "Liddell@Example.com"},
            headers=headers,
        )
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["full_name"] == "Alice Liddell"
        assert data["email"] == "liddell@example.com"

    async def test_requires_a_field(self, client: AsyncClient, signup):
        _, headers = await signup("alice")
        response = await client.patch(f"{USERS}/update-account", json={}, headers=headers)
        assert response.status_code == 400
        assert response.json()["message"] == "Full name or email is required"

    async def test_email_taken(self, client: AsyncClient, signup):
        await signup("bob")
        _, headers = await signup("alice")
        response = await client.patch(f"{USERS}/update-account", json={"email": "bob@example.com"}, headers=headers)
        assert response.status_code == 409
        assert response.json()["message"] == "Email is already in use"


class TestImages:
    async def test_replace_avatar_destroys_previous(self, client: AsyncClient, signup, fake_cloudinary):
        user, headers = await signup("alice")
        previous_public_id = fake_cloudinary.uploads[0]["public_id"]

        response = await client.patch(f"{USERS}/avatar", files={"avatar": image_file("new.png")}, headers=headers)

        assert response.status_code == 200
        assert response.json()["data"]["avatar_url"] != user["avatar_url"]
        assert fake_cloudinary.destroyed == [previous_public_id]

    async def test_avatar_missing(self, client: AsyncClient, signup):
        _, headers = await signup("alice")
        response = await client.patch(f"{USERS}/avatar", headers=headers)
        assert response.status_code == 400
        assert response.json()["message"] == "Avatar file is missing"

    async def test_set_cover_image(self, client: AsyncClient, signup, fake_cloudinary):
        user, headers = await signup("alice")
        assert user["cover_image_url"] is None

        response = await client.patch(
            f"{USERS}/cover-image", files={"cover_image": image_file("cover.png")}, headers=headers
        )

        assert response.status_code == 200
        assert response.json()["data"]["cover_image_url"].startswith("https://res.mock-cloudinary/")
        assert fake_cloudinary.destroyed == []

    async def test_cover_image_missing(self, client: AsyncClient, signup):
        _, headers = await signup("alice")
        response = await client.patch(f"{USERS}/cover-image", headers=headers)
        assert response.status_code == 400
        assert response.json()["message"] == "Cover image file is missing"


class TestChannelProfile:
    async def test_profile_counts_and_subscription_flag(self, client: AsyncClient, signup):
        alice, alice_headers = await signup("alice")
        _, bob_headers = await signup("bob")
        await client.post(f"/api/v1/subscriptions/c/{alice['id']}", headers=bob_headers)

        as_bob = await client.get(f"{USERS}/c/ALICE", headers=bob_headers)
        as_alice = await client.get(f"{USERS}/c/alice", headers=alice_headers)

        assert as_bob.status_code == 200
        profile = as_bob.json()["data"]
        assert profile["username"] == "alice"
        assert profile["subscribers_count"] == 1
        assert profile["channels_subscribed_to_count"] == 0
        assert profile["is_subscribed"] is True
        assert as_alice.json()["data"]["is_subscribed"] is False

    async def test_unknown_channel(self, client: AsyncClient, signup):
        _, headers = await signup("alice")
        response = await client.get(f"{USERS}/c/ghost", headers=headers)
        assert response.status_code == 404
        assert response.json()["message"] == "Channel does not exist"


class TestWatchHistory:
    async def test_history_lists_viewed_videos(self, client: AsyncClient, signup, publish):
        _, alice_headers = await signup("alice")
        _, bob_headers = await signup("bob")
        first = await publish(alice_headers, "first")
        second = await publish(alice_headers, "second")

        await client.post(f"/api/v1/videos/{first['id']}/views", headers=bob_headers)
        await client.post(f"/api/v1/videos/{second['id']}/views", headers=bob_headers)

        response = await client.get(f"{USERS}/history", headers=bob_headers)
        assert response.status_code == 200
        history = response.json()["data"]
        assert {video["id"] for video in history} == {first["id"], second["id"]}
        assert all(video["owner"]["username"] == "alice" for video in history)

        empty = await client.get(f"{USERS}/history", headers=alice_headers)
        assert empty.json()["data"] == []
