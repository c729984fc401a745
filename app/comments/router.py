# app/comments/router.py
from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.json import UTF8JSONResponse
from app.db.session import get_session
from app.comments import repository as repo
from app.comments.schemas import CommentCreate, CommentOut
from app.posts.repository import get_post
from app.users.repository import get_by_clerk_id

log = logging.getLogger("uvicorn")

router = APIRouter(
    prefix="/api/comments",
    tags=["comments"],
    default_response_class=UTF8JSONResponse,
)


@router.get("", response_model=List[CommentOut])
async def comments_for_post(
    post_id: str | None = Query(None, alias="postId"),
    db: AsyncSession = Depends(get_session),
):
    if not post_id:
        raise HTTPException(status_code=400, detail="Missing postId")
    try:
        return await repo.list_post_comments(db, post_id)
    except Exception as e:
        log.error(f"❌ listar comentarios de {post_id} falló: {e!r}")
        raise HTTPException(status_code=500, detail="DB error")


@router.post("", response_model=CommentOut)
async def create_comment_endpoint(
    payload: CommentCreate,
    db: AsyncSession = Depends(get_session),
):
    text = (payload.comment_text or "").strip()
    if not payload.post_id or not payload.clerk_user_id or not text:
        raise HTTPException(status_code=400, detail="Missing fields")

    # id de Clerk → usuario interno antes de escribir la FK
    user = await get_by_clerk_id(db, payload.clerk_user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")

    post = await get_post(db, payload.post_id)
    if not post:
        raise HTTPException(status_code=404, detail="Post not found")

    try:
        c = await repo.create_comment(db, post_id=post.id, user_id=user.id, text=text)
        await db.commit()
    except Exception as e:
        await db.rollback()
        log.error(f"❌ crear comentario falló: {e!r}")
        raise HTTPException(status_code=500, detail="DB error")

    return repo.serialize(c, user)


@router.delete("")
async def delete_comment_endpoint(
    comment_id: str | None = Query(None, alias="id"),
    clerk_user_id: str | None = Query(None, alias="clerkUserId"),
    db: AsyncSession = Depends(get_session),
):
    if not comment_id or not clerk_user_id:
        raise HTTPException(status_code=400, detail="Missing id or clerkUserId")

    user = await get_by_clerk_id(db, clerk_user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")

    c = await repo.get_comment(db, comment_id)
    if not c:
        raise HTTPException(status_code=404, detail="Comment not found")

    if c.user_id != user.id:
        raise HTTPException(status_code=403, detail="forbidden")

    try:
        await repo.delete_comment(db, c)
        await db.commit()
    except Exception as e:
        await db.rollback()
        log.error(f"❌ borrar comentario {comment_id} falló: {e!r}")
        raise HTTPException(status_code=500, detail="Failed to delete comment")

    return {"success": True}
