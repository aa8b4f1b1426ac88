"""User Routes - login and lookup over HTTP."""

from datetime import datetime, timedelta, timezone


async def test_login_returns_user_envelope(client):
    res = await client.post("/api/user/login", json={"username": "alice"})
    assert res.status_code == 200
    user = res.json()["success"]
    assert user["username"] == "alice"
    until = datetime.fromisoformat(user["loggedInUntil"])
    expected = datetime.now(timezone.utc) + timedelta(hours=24)
    assert abs(until - expected) < timedelta(seconds=5)


async def test_login_twice_keeps_id(client, alice):
    res = await client.post("/api/user/login", json={"username": "alice"})
    assert res.json()["success"]["id"] == alice["id"]


async def test_login_rejects_non_alphanumeric_username(client):
    res = await client.post("/api/user/login", json={"username": "bad name"})
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_get_user(client, alice):
    res = await client.get(f"/api/user/{alice['id']}")
    assert res.status_code == 200
    assert res.json()["success"]["username"] == "alice"


async def test_get_unknown_user_is_404(client):
    res = await client.get("/api/user/999")
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "RESOURCE_NOT_FOUND"


async def test_get_user_with_non_positive_id_is_400(client):
    res = await client.get("/api/user/0")
    assert res.status_code == 400
