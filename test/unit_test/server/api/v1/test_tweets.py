import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio

TWEETS = "/api/v1/tweets"


async def test_create_tweet(client: AsyncClient, signup):
    user, headers = await signup("alice")
    response = await client.post(TWEETS, json={"content": " hello world "}, headers=headers)

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["content"] == "hello world"
    assert data["owner_id"] == user["id"]


async def test_content_rules(client: AsyncClient, signup):
    _, headers = await signup("alice")

    empty = await client.post(TWEETS, json={"content": "  "}, headers=headers)
    too_long = await client.post(TWEETS, json={"content": "x" * 301}, headers=headers)
    at_limit = await client.post(TWEETS, json={"content": "x" * 300}, headers=headers)

    assert empty.status_code == 400
    assert empty.json()["message"] == "Content is required"
    assert too_long.status_code == 400
    assert too_long.json()["message"] == "Tweet cannot exceed 300 characters"
    assert at_limit.status_code == 201


async def test_list_all_and_by_user(client: AsyncClient, signup):
    alice, alice_headers = await signup("alice")
    _, bob_headers = await signup("bob")
    await client.post(TWEETS, json={"content": "a1"}, headers=alice_headers)
    await client.post(TWEETS, json={"content": "b1"}, headers=bob_headers)

    everything = await client.get(TWEETS, headers=bob_headers)
    alices = await client.get(f"{TWEETS}/user/{alice['id']}", headers=bob_headers)

    assert everything.json()["data"]["total_docs"] == 2
    docs = alices.json()["data"]["docs"]
    assert [tweet["content"] for tweet in docs] == ["a1"]
    assert docs[0]["owner"]["username"] == "alice"


async def test_list_errors(client: AsyncClient, signup):
    _, headers = await signup("alice")

    bad_sort = await client.get(TWEETS, params={"sort_by": "content"}, headers=headers)
    unknown_user = await client.get(f"{TWEETS}/user/{'b' * 32}", headers=headers)
    invalid_user = await client.get(f"{TWEETS}/user/alice", headers=headers)

    assert bad_sort.status_code == 400
    assert bad_sort.json()["message"] == "Invalid sort parameters"
    assert unknown_user.status_code == 404
    assert unknown_user.json()["message"] == "User not found"
    assert invalid_user.status_code == 400



async def test_page_far_past_the_end(client: AsyncClient, signup):
    _, headers = await signup("alice")
    await client.post(TWEETS, json={"content": "only one"}, headers=headers)

    response = await client.get(TWEETS, params={"page": 10**19, "limit": 10}, headers=headers)

    assert response.status_code == 200
    page = response.json()["data"]
    assert page["docs"] == []
    assert page["total_docs"] == 1
    assert page["total_pages"] == 1
    assert page["has_next_page"] is False
    assert page["has_prev_page"] is True

async def test_update_and_delete_owner_only(client: AsyncClient, signup):
    _, alice_headers = await signup("alice")
    _, bob_headers = await signup("bob")
    created = await client.post(TWEETS, json={"content": "original"}, headers=alice_headers)
    tweet_id = created.json()["data"]["id"]

    forbidden = await client.patch(f"{TWEETS}/{tweet_id}", json={"content": "hijack"}, headers=bob_headers)
    assert forbidden.status_code == 403
    assert forbidden.json()["message"] == "You are not allowed to modify this tweet"
    assert (await client.delete(f"{TWEETS}/{tweet_id}", headers=bob_headers)).status_code == 403

    updated = await client.patch(f"{TWEETS}/{tweet_id}", json={"content": "edited"}, headers=alice_headers)
    assert updated.json()["data"]["content"] == "edited"

    deleted = await client.delete(f"{TWEETS}/{tweet_id}", headers=alice_headers)
    assert deleted.status_code == 200
    assert (await client.get(TWEETS, headers=alice_headers)).json()["data"]["total_docs"] == 0
