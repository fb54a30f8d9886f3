import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio

COMMENTS = "/api/v1/comments"


@pytest.fixture
async def channel(signup, publish):
    """Alice with one published video; Bob as a second user."""
    alice, alice_headers = await signup("alice")
    bob, bob_headers = await signup("bob")
    video = await publish(alice_headers)
    return {"video": video, "alice": alice_headers, "bob": bob_headers, "bob_id": bob["id"]}


async def test_add_and_list_video_comments(client: AsyncClient, channel):
    video_id = channel["video"]["id"]
    created = await client.post(f"{COMMENTS}/videos/{video_id}", json={"content": " Nice! "}, headers=channel["bob"])

    assert created.status_code == 201
    comment = created.json()["data"]
    assert comment["content"] == "Nice!"
    assert comment["video_id"] == video_id
    assert comment["owner"]["username"] == "bob"

    listed = await client.get(f"{COMMENTS}/videos/{video_id}", headers=channel["alice"])
    page = listed.json()["data"]
    assert page["total_docs"] == 1
    assert page["docs"][0]["id"] == comment["id"]


async def test_content_required(client: AsyncClient, channel):
    response = await client.post(
        f"{COMMENTS}/videos/{channel['video']['id']}", json={"content": "   "}, headers=channel["bob"]
    )
    assert response.status_code == 400
    assert response.json()["message"] == "Content is required"


async def test_comment_on_unknown_video(client: AsyncClient, channel):
    response = await client.post(f"{COMMENTS}/videos/{'f' * 32}", json={"content": "hi"}, headers=channel["bob"])
    assert response.status_code == 404
    assert response.json()["message"] == "Video not found"


async def test_replies_must_share_target(client: AsyncClient, channel):
    video_id = channel["video"]["id"]
    tweet = await client.post("/api/v1/tweets", json={"content": "tweet"}, headers=channel["alice"])
    tweet_id = tweet.json()["data"]["id"]
    parent = await client.post(f"{COMMENTS}/videos/{video_id}", json={"content": "root"}, headers=channel["bob"])
    parent_id = parent.json()["data"]["id"]

    reply = await client.post(
        f"{COMMENTS}/videos/{video_id}", json={"content": "reply", "reply_to": parent_id}, headers=channel["alice"]
    )
    misplaced = await client.post(
        f"{COMMENTS}/tweets/{tweet_id}", json={"content": "reply", "reply_to": parent_id}, headers=channel["alice"]
    )

    assert reply.status_code == 201
    assert reply.json()["data"]["reply_to_id"] == parent_id
    assert misplaced.status_code == 400
    assert misplaced.json()["message"] == "Parent comment does not belong to this target"


async def test_tweet_comments(client: AsyncClient, channel):
    tweet = await client.post("/api/v1/tweets", json={"content": "tweet"}, headers=channel["alice"])
    tweet_id = tweet.json()["data"]["id"]

    created = await client.post(f"{COMMENTS}/tweets/{tweet_id}", json={"content": "hey"}, headers=channel["bob"])
    listed = await client.get(f"{COMMENTS}/tweets/{tweet_id}", headers=channel["bob"])

    assert created.status_code == 201
    assert created.json()["data"]["tweet_id"] == tweet_id
    assert [c["content"] for c in listed.json()["data"]["docs"]] == ["hey"]


async def test_update_comment_owner_only(client: AsyncClient, channel):
    created = await client.post(
        f"{COMMENTS}/videos/{channel['video']['id']}", json={"content": "first"}, headers=channel["bob"]
    )
    comment_id = created.json()["data"]["id"]

    forbidden = await client.patch(f"{COMMENTS}/c/{comment_id}", json={"content": "x"}, headers=channel["alice"])
    updated = await client.patch(f"{COMMENTS}/c/{comment_id}", json={"content": "edited"}, headers=channel["bob"])

    assert forbidden.status_code == 403
    assert forbidden.json()["message"] == "You are not allowed to modify this comment"
    assert updated.status_code == 200
    assert updated.json()["data"]["content"] == "edited"


async def test_delete_comment_removes_replies(client: AsyncClient, channel):
    video_id = channel["video"]["id"]
    root = await client.post(f"{COMMENTS}/videos/{video_id}", json={"content": "root"}, headers=channel["bob"])
    root_id = root.json()["data"]["id"]
    await client.post(
        f"{COMMENTS}/videos/{video_id}", json={"content": "reply", "reply_to": root_id}, headers=channel["alice"]
    )

    response = await client.delete(f"{COMMENTS}/c/{root_id}", headers=channel["bob"])

    assert response.status_code == 200
    assert response.json()["data"] == {"deleted_count": 2}
    listed = await client.get(f"{COMMENTS}/videos/{video_id}", headers=channel["bob"])
    assert listed.json()["data"]["total_docs"] == 0


async def test_delete_unknown_comment(client: AsyncClient, channel):
    response = await client.delete(f"{COMMENTS}/c/{'a' * 32}", headers=channel["bob"])
    assert response.status_code == 404
    assert response.json()["message"] == "Comment not found"
