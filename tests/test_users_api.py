import pytest
from jose import jwt

from app.core.config import settings
from app.users.models import User


def _token(sub: str) -> str:
    return jwt.encode({"sub": sub}, settings.CLERK_JWT_KEY, algorithm=settings.CLERK_JWT_ALGORITHM)


@pytest.mark.asyncio
async def test_internal_id_lookup(async_client, factory):
    user = await factory.user("user_clerk")

    resp = await async_client.get("/api/users/me", params={"clerkUserId": "user_clerk"})
    assert resp.status_code == 200
    assert resp.json() == {"internalUserId": user.id}
    assert user.id != "user_clerk"

    resp = await async_client.get("/api/users/me", params={"clerkUserId": "ghost"})
    assert resp.status_code == 404

    resp = await async_client.get("/api/users/me")
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_sync_creates_then_updates(async_client, factory):
    headers = {"Authorization": f"Bearer {_token('user_new')}"}

    resp = await async_client.post(
        "/api/users/sync",
        json={"email": "a@b.com", "firstName": "Ana", "lastName": "R"},
        headers=headers,
    )
    assert resp.status_code == 200
    created = resp.json()
    assert created["clerk_user_id"] == "user_new"
    assert created["first_name"] == "Ana"

    resp = await async_client.post(
        "/api/users/sync",
        json={"email": "new@b.com", "firstName": "Ana", "lastName": "R"},
        headers=headers,
    )
    assert resp.json()["id"] == created["id"]
    stored = await factory.get(User, created["id"])
    assert stored.email == "new@b.com"


@pytest.mark.asyncio
async def test_sync_requires_valid_token(async_client):
    resp = await async_client.post("/api/users/sync", json={})
    assert resp.status_code == 401

    resp = await async_client.post(
        "/api/users/sync", json={}, headers={"Authorization": "Bearer not-a-jwt"}
    )
    assert resp.status_code == 401
    assert resp.json() == {"error": "invalid token"}


@pytest.mark.asyncio
async def test_bio(async_client, factory):
    await factory.user("user_a", first_name="Ana")

    resp = await async_client.put("/api/bio", json={"userId": "user_a", "bio": "thrift queen"})
    assert resp.status_code == 200
    assert resp.json()["user"]["bio"] == "thrift queen"

    assert (await async_client.put("/api/bio", json={"bio": "x"})).status_code == 400
    assert (await async_client.put("/api/bio", json={"userId": "user_a"})).status_code == 400
    assert (await async_client.put("/api/bio", json={"userId": "ghost", "bio": "x"})).status_code == 404


@pytest.mark.asyncio
async def test_userendpoint(async_client, factory):
    user = await factory.user("user_a", first_name="Ana", email="ana@x.com")
    post = await factory.post(user)

    resp = await async_client.get("/api/userendpoint", params={"userId": "user_a"})
    assert resp.status_code == 200
    data = resp.json()
    assert data["user"]["email"] == "ana@x.com"
    assert [p["id"] for p in data["posts"]] == [post.id]

    resp = await async_client.get("/api/userendpoint", params={"userId": "ghost"})
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_profile_photo(async_client, factory):
    user = await factory.user("user_a")

    resp = await async_client.post(
        "/api/profilephoto",
        data={"user_id": "user_a"},
        files={"file": ("me.png", b"\x89PNG fake", "image/png")},
    )
    assert resp.status_code == 200
    url = resp.json()["image_url"]
    assert url.startswith("/media/profile/")

    stored = await factory.get(User, user.id)
    assert stored.fk_image_id == resp.json()["id"]

    resp = await async_client.get("/api/profilephoto", params={"user_id": "user_a"})
    assert resp.json() == {"image_url": url}
