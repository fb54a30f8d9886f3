import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio

PLAYLISTS = "/api/v1/playlist"


async def test_create_with_videos_and_fetch(client: AsyncClient, signup, publish):
    alice, headers = await signup("alice")
    first = await publish(headers, "first")
    second = await publish(headers, "second")

    created = await client.post(
        PLAYLISTS,
        json={"name": "Mix", "description": "Best of", "video_ids": [second["id"], first["id"]]},
        headers=headers,
    )
    assert created.status_code == 201
    playlist = created.json()["data"]
    assert playlist["owner_id"] == alice["id"]
    assert playlist["video_ids"] == [second["id"], first["id"]]
    assert playlist["total_videos"] == 2

    fetched = await client.get(f"{PLAYLISTS}/{playlist['id']}", headers=headers)
    assert [video["title"] for video in fetched.json()["data"]["videos"]] == ["second", "first"]

    listed = await client.get(f"{PLAYLISTS}/user/{alice['id']}", headers=headers)
    assert [p["id"] for p in listed.json()["data"]] == [playlist["id"]]


async def test_create_validation(client: AsyncClient, signup):
    _, headers = await signup("alice")

    blank = await client.post(PLAYLISTS, json={"name": "Mix", "description": ""}, headers=headers)
    unknown_video = await client.post(
        PLAYLISTS, json={"name": "Mix", "description": "d", "video_ids": ["d" * 32]}, headers=headers
    )

    assert blank.status_code == 400
    assert blank.json()["message"] == "Name and description are required"
    assert unknown_video.status_code == 404
    assert unknown_video.json()["message"] == "Video not found"


async def test_add_and_remove_video(client: AsyncClient, signup, publish):
    _, headers = await signup("alice")
    video = await publish(headers)
    created = await client.post(PLAYLISTS, json={"name": "Mix", "description": "d"}, headers=headers)
    playlist_id = created.json()["data"]["id"]

    added = await client.patch(f"{PLAYLISTS}/add/{video['id']}/{playlist_id}", headers=headers)
    again = await client.patch(f"{PLAYLISTS}/add/{video['id']}/{playlist_id}", headers=headers)
    assert added.json()["data"]["video_ids"] == [video["id"]]
    assert again.status_code == 400
    assert again.json()["message"] == "Video already in playlist"

    removed = await client.patch(f"{PLAYLISTS}/remove/{video['id']}/{playlist_id}", headers=headers)
    missing = await client.patch(f"{PLAYLISTS}/remove/{video['id']}/{playlist_id}", headers=headers)
    assert removed.json()["data"]["video_ids"] == []
    assert missing.status_code == 400
    assert missing.json()["message"] == "Video not in playlist"


async def test_hidden_videos_are_filtered_for_other_viewers(client: AsyncClient, signup, publish):
    _, alice_headers = await signup("alice")
    _, bob_headers = await signup("bob")
    shown = await publish(alice_headers, "shown")
    hidden = await publish(alice_headers, "hidden")
    await client.patch(f"/api/v1/videos/toggle/publish/{hidden['id']}", headers=alice_headers)
    created = await client.post(
        PLAYLISTS,
        json={"name": "Mix", "description": "d", "video_ids": [shown["id"], hidden["id"]]},
        headers=alice_headers,
    )
    playlist_id = created.json()["data"]["id"]

    as_bob = await client.get(f"{PLAYLISTS}/{playlist_id}", headers=bob_headers)
    as_alice = await client.get(f"{PLAYLISTS}/{playlist_id}", headers=alice_headers)

    assert [video["title"] for video in as_bob.json()["data"]["videos"]] == ["shown"]
    assert [video["title"] for video in as_alice.json()["data"]["videos"]] == ["shown", "hidden"]
    assert as_bob.json()["data"]["video_ids"] == [shown["id"]]
    assert as_bob.json()["data"]["total_videos"] == 1
    assert as_alice.json()["data"]["video_ids"] == [shown["id"], hidden["id"]]
    assert as_alice.json()["data"]["total_videos"] == 2


async def test_update_and_delete_owner_only(client: AsyncClient, signup, publish):
    _, alice_headers = await signup("alice")
    _, bob_headers = await signup("bob")
    video = await publish(alice_headers)
    created = await client.post(
        PLAYLISTS, json={"name": "Mix", "description": "d", "video_ids": [video["id"]]}, headers=alice_headers
    )
    playlist_id = created.json()["data"]["id"]

    forbidden = await client.patch(
        f"{PLAYLISTS}/{playlist_id}", json={"name": "Mine", "description": "d"}, headers=bob_headers
    )
    assert forbidden.status_code == 403
    assert forbidden.json()["message"] == "You are not allowed to modify this playlist"
    assert (await client.patch(f"{PLAYLISTS}/add/{video['id']}/{playlist_id}", headers=bob_headers)).status_code == 403

    updated = await client.patch(
        f"{PLAYLISTS}/{playlist_id}", json={"name": "Renamed", "description": "new"}, headers=alice_headers
    )
    assert updated.json()["data"]["name"] == "Renamed"

    deleted = await client.delete(f"{PLAYLISTS}/{playlist_id}", headers=alice_headers)
    assert deleted.status_code == 200
    assert (await client.get(f"{PLAYLISTS}/{playlist_id}", headers=alice_headers)).status_code == 404
    assert (await client.get(f"/api/v1/videos/{video['id']}", headers=alice_headers)).status_code == 200


async def test_unknown_owner(client: AsyncClient, signup):
    _, headers = await signup("alice")
    response = await client.get(f"{PLAYLISTS}/user/{'e' * 32}", headers=headers)
    assert response.status_code == 404
    assert response.json()["message"] == "User not found"
