import uuid

import pytest

from app.models.friendship import FriendshipStatus

pytestmark = pytest.mark.anyio


async def get_friend(client, friend_id):
    return await client.get(f"/my-friends/{friend_id}")


async def test_get_friend_profile(client, user_factory, login_as, befriend):
    a = await user_factory(full_name="Ada")
    b = await user_factory(full_name="Bo", phone_number="+15550199")
    await befriend(a, b)

    login_as(client, a)
    r = await get_friend(client, b.id)
    assert r.status_code == 200, r.text
    assert r.json() == {
        "id": str(b.id),
        "fullName": "Bo",
        "phoneNumber": "+15550199",
        "totalFriendCount": 1,
        "mutualFriendCount": 0,
    }


async def test_mutual_friend_count(client, user_factory, login_as, befriend):
    a = await user_factory()
    b = await user_factory()
    x, y, z, w = [await user_factory() for _ in range(4)]

    for friend in (x, y, z):
        await befriend(a, friend)
    for friend in (y, z, w):
        await befriend(b, friend)
    await befriend(a, b)

    login_as(client, a)
    r = await get_friend(client, b.id)
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["mutualFriendCount"] == 2
    # b's own friends: y, z, w and a
    assert body["totalFriendCount"] == 4


async def test_mutual_friend_count_is_zero_not_null(client, user_factory, login_as, befriend):
    a = await user_factory()
    b = await user_factory()
    x = await user_factory()
    y = await user_factory()
    await befriend(a, x)
    await befriend(b, y)
    await befriend(a, b)

    login_as(client, a)
    r = await get_friend(client, b.id)
    assert r.status_code == 200
    assert r.json()["mutualFriendCount"] == 0


async def test_mutual_count_ignores_pending_and_declined_edges(
    client, user_factory, login_as, befriend, edge_factory
):
    a = await user_factory()
    b = await user_factory()
    x = await user_factory()
    y = await user_factory()
    await befriend(a, b)
    await befriend(a, x)
    await befriend(a, y)
    await edge_factory(b, x, FriendshipStatus.requested)
    await edge_factory(b, y, FriendshipStatus.declined)

    login_as(client, a)
    r = await get_friend(client, b.id)
    assert r.status_code == 200
    body = r.json()
    assert body["mutualFriendCount"] == 0
    assert body["totalFriendCount"] == 1


@pytest.mark.parametrize("status", [FriendshipStatus.requested, FriendshipStatus.declined])
async def test_get_friend_without_accepted_edge(client, user_factory, login_as, edge_factory, status):
    a = await user_factory()
    b = await user_factory()
    await edge_factory(a, b, status)

    login_as(client, a)
    r = await get_friend(client, b.id)
    assert r.status_code == 404
    assert r.json()["detail"] == "Friend not found"


async def test_get_unknown_friend(client, user_factory, login_as):
    a = await user_factory()

    login_as(client, a)
    r = await get_friend(client, uuid.uuid4())
    assert r.status_code == 404


async def test_friend_flow_end_to_end(client, user_factory, login_as):
    a = await user_factory()
    b = await user_factory()

    login_as(client, a)
    r = await client.post("/friendship-requests/send", json={"friendUserId": str(b.id)})
    assert r.status_code == 200
    assert (await get_friend(client, b.id)).status_code == 404

    login_as(client, b)
    r = await client.post("/friendship-requests/accept", json={"friendUserId": str(a.id)})
    assert r.status_code == 200

    r = await get_friend(client, a.id)
    assert r.status_code == 200
    assert r.json()["id"] == str(a.id)

    login_as(client, a)
    r = await get_friend(client, b.id)
    assert r.status_code == 200
    assert r.json()["totalFriendCount"] == 1
