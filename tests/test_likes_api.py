import pytest

from app.posts.models import Post


@pytest.mark.asyncio
async def test_like_and_unlike(async_client, factory):
    author = await factory.user("author")
    post = await factory.post(author, likes=["a", "b"])

    resp = await async_client.post("/api/testendpoint", json={"post_id": post.id, "userId": "c"})
    assert resp.status_code == 200
    assert resp.json() == {"success": True, "likes": ["a", "b", "c"]}

    resp = await async_client.request(
        "DELETE", "/api/testendpoint", json={"post_id": post.id, "userId": "c"}
    )
    assert resp.status_code == 200
    assert resp.json()["likes"] == ["a", "b"]
    assert (await factory.get(Post, post.id)).likes == ["a", "b"]


@pytest.mark.asyncio
async def test_like_twice_does_not_double_count(async_client, factory):
    author = await factory.user("author")
    post = await factory.post(author)
    body = {"post_id": post.id, "userId": "c"}

    await async_client.post("/api/testendpoint", json=body)
    await async_client.post("/api/testendpoint", json=body)

    assert (await factory.get(Post, post.id)).likes == ["c"]


@pytest.mark.asyncio
async def test_unlike_when_absent_is_noop(async_client, factory):
    author = await factory.user("author")
    post = await factory.post(author, likes=["a"])

    resp = await async_client.request(
        "DELETE", "/api/testendpoint", json={"post_id": post.id, "userId": "zzz"}
    )
    assert resp.status_code == 200
    assert resp.json()["likes"] == ["a"]


@pytest.mark.asyncio
@pytest.mark.parametrize("body", [{}, {"post_id": "x"}, {"userId": "c"}, {"post_id": "", "userId": "c"}])
async def test_missing_fields_are_400(async_client, body):
    resp = await async_client.post("/api/testendpoint", json=body)
    assert resp.status_code == 400
    assert resp.json() == {"error": "Missing post_id or userId"}


@pytest.mark.asyncio
async def test_unknown_post_is_404(async_client):
    resp = await async_client.post("/api/testendpoint", json={"post_id": "nope", "userId": "c"})
    assert resp.status_code == 404
    assert resp.json() == {"error": "Post not found"}


@pytest.mark.asyncio
async def test_responses_carry_cors_headers(async_client):
    resp = await async_client.post("/api/testendpoint", json={})
    assert resp.headers["access-control-allow-origin"] == "*"
    assert "DELETE" in resp.headers["access-control-allow-methods"]


@pytest.mark.asyncio
async def test_get_serves_feed(async_client, factory):
    author = await factory.user("author")
    first = await factory.post(author)
    second = await factory.post(author)

    resp = await async_client.get("/api/testendpoint", params={"limit": 1, "offset": 0})
    assert resp.status_code == 200
    assert [p["id"] for p in resp.json()["posts"]] == [second.id]

    resp = await async_client.get("/api/testendpoint", params={"limit": 1, "offset": 1})
    assert [p["id"] for p in resp.json()["posts"]] == [first.id]
