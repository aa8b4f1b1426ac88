"""Message Routes - posting, listing and deleting over HTTP.

Tests cover:
    - Posting requires a live login via the X-Chat-User header
    - Posted messages show up in the list with their author
    - Only the author can delete; deleted messages answer 404
"""

from app.api.dependencies import USER_HEADER


def as_user(name: str) -> dict:
    return {USER_HEADER: name}


async def test_post_requires_login(client):
    res = await client.post("/api/msg", json={"msg": "hello"})
    assert res.status_code == 401
    assert res.json()["error"]["code"] == "AUTHENTICATION_REQUIRED"


async def test_post_with_unknown_user_is_401(client):
    res = await client.post(
        "/api/msg", json={"msg": "hello"}, headers=as_user("ghost"),
    )
    assert res.status_code == 401


async def test_post_with_malformed_user_header_is_401(client):
    res = await client.post(
        "/api/msg", json={"msg": "hello"}, headers=as_user("not valid!"),
    )
    assert res.status_code == 401


async def test_post_and_list(client, alice):
    res = await client.post(
        "/api/msg", json={"msg": "  hello  "}, headers=as_user("alice"),
    )
    assert res.status_code == 201
    created = res.json()["success"]
    assert created["msg"] == "hello"
    assert created["author"]["id"] == alice["id"]

    listing = await client.get("/api/msg")
    assert [m["id"] for m in listing.json()["success"]] == [created["id"]]


async def test_post_blank_message_is_400(client, alice):
    res = await client.post(
        "/api/msg", json={"msg": "   "}, headers=as_user("alice"),
    )
    assert res.status_code == 400


async def test_get_msg(client, alice):
    created = (await client.post(
        "/api/msg", json={"msg": "hi"}, headers=as_user("alice"),
    )).json()["success"]
    res = await client.get(f"/api/msg/{created['id']}")
    assert res.status_code == 200
    assert res.json()["success"]["author"]["username"] == "alice"


async def test_author_can_delete(client, alice):
    created = (await client.post(
        "/api/msg", json={"msg": "bye"}, headers=as_user("alice"),
    )).json()["success"]

    res = await client.delete(
        f"/api/msg/{created['id']}", headers=as_user("alice"),
    )
    assert res.status_code == 204
    assert (await client.get(f"/api/msg/{created['id']}")).status_code == 404
    assert (await client.get("/api/msg")).json()["success"] == []


async def test_other_user_cannot_delete(client, alice):
    created = (await client.post(
        "/api/msg", json={"msg": "mine"}, headers=as_user("alice"),
    )).json()["success"]
    await client.post("/api/user/login", json={"username": "bob"})

    res = await client.delete(
        f"/api/msg/{created['id']}", headers=as_user("bob"),
    )
    assert res.status_code == 403
    assert (await client.get(f"/api/msg/{created['id']}")).status_code == 200


async def test_delete_unknown_msg_is_404(client, alice):
    res = await client.delete("/api/msg/4242", headers=as_user("alice"))
    assert res.status_code == 404
