import pytest

from app.comments.models import Comment


@pytest.mark.asyncio
async def test_create_and_list(async_client, factory):
    author = await factory.user("author")
    await factory.user("commenter", first_name="Leo", last_name="M")
    post = await factory.post(author)

    resp = await async_client.post(
        "/api/comments",
        json={"postId": post.id, "clerkUserId": "commenter", "commentText": "love the boots"},
    )
    assert resp.status_code == 200
    created = resp.json()
    assert created["comment_text"] == "love the boots"
    assert created["first_name"] == "Leo"

    await async_client.post(
        "/api/comments",
        json={"postId": post.id, "clerkUserId": "author", "commentText": "thanks!"},
    )

    resp = await async_client.get("/api/comments", params={"postId": post.id})
    assert resp.status_code == 200
    listed = resp.json()
    assert [c["comment_text"] for c in listed] == ["love the boots", "thanks!"]
    assert listed[0]["clerk_user_id"] == "commenter"


@pytest.mark.asyncio
async def test_orphaned_comment_is_anonymous(async_client, factory):
    author = await factory.user("author")
    post = await factory.post(author)
    await factory.comment(post, None, text="who am i")

    resp = await async_client.get("/api/comments", params={"postId": post.id})
    [comment] = resp.json()
    assert comment["user_id"] is None
    assert comment["first_name"] == "Anonymous"
    assert comment["last_name"] == ""
    assert comment["profile_image_url"] is None


@pytest.mark.asyncio
async def test_validation_and_lookup_errors(async_client, factory):
    author = await factory.user("author")
    post = await factory.post(author)

    resp = await async_client.get("/api/comments")
    assert resp.status_code == 400
    assert resp.json() == {"error": "Missing postId"}

    resp = await async_client.post(
        "/api/comments", json={"postId": post.id, "clerkUserId": "author", "commentText": "   "}
    )
    assert resp.status_code == 400
    assert resp.json() == {"error": "Missing fields"}

    resp = await async_client.post(
        "/api/comments", json={"postId": post.id, "clerkUserId": "ghost", "commentText": "hi"}
    )
    assert resp.status_code == 404
    assert resp.json() == {"error": "User not found"}

    resp = await async_client.post(
        "/api/comments", json={"postId": "missing", "clerkUserId": "author", "commentText": "hi"}
    )
    assert resp.status_code == 404
    assert resp.json() == {"error": "Post not found"}


@pytest.mark.asyncio
async def test_only_owner_can_delete(async_client, factory):
    author = await factory.user("author")
    intruder = await factory.user("intruder")
    post = await factory.post(author)
    comment = await factory.comment(post, author)

    resp = await async_client.delete(
        "/api/comments", params={"id": comment.id, "clerkUserId": intruder.clerk_user_id}
    )
    assert resp.status_code == 403
    assert await factory.get(Comment, comment.id) is not None

    resp = await async_client.delete(
        "/api/comments", params={"id": comment.id, "clerkUserId": "author"}
    )
    assert resp.status_code == 200
    assert resp.json() == {"success": True}
    assert await factory.get(Comment, comment.id) is None


@pytest.mark.asyncio
async def test_delete_errors(async_client, factory):
    await factory.user("author")

    resp = await async_client.delete("/api/comments", params={"id": "x"})
    assert resp.status_code == 400

    resp = await async_client.delete("/api/comments", params={"id": "x", "clerkUserId": "ghost"})
    assert resp.status_code == 404

    resp = await async_client.delete("/api/comments", params={"id": "x", "clerkUserId": "author"})
    assert resp.status_code == 404
    assert resp.json() == {"error": "Comment not found"}
