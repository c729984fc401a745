import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.json import UTF8JSONResponse
from app.db.session import get_session
from app.media.storage import delete_key
from app.posts import repository as repo
from app.posts.schemas import PostOut, PostsRequest, PostDelete, ByAuthorRequest
from app.posts.service import (
    hydrate_posts,
    feed_page,
    create_post_for,
    delete_post_for,
)
from app.users.repository import internal_id_for

log = logging.getLogger("uvicorn")

router = APIRouter(
    prefix="/api/posts",
    tags=["posts"],
    default_response_class=UTF8JSONResponse,
)


@router.get("")
async def feed_list(
    limit: int = Query(settings.FEED_DEFAULT_LIMIT, ge=1, le=50),
    offset: int = Query(0, ge=0),
    db: AsyncSession = Depends(get_session),
):
    """Feed en orden cronológico inverso, paginado por offset."""
    posts = await feed_page(db, limit=limit, offset=offset)
    return {"posts": posts}


@router.get("/count")
async def posts_count(db: AsyncSession = Depends(get_session)):
    """Total de posts; el paginador del front lo pide una sola vez."""
    return {"total": await repo.count_posts(db)}


@router.get("/{post_id}")
async def post_detail(post_id: str, db: AsyncSession = Depends(get_session)):
    post = await repo.get_post(db, post_id)
    if not post:
        raise HTTPException(status_code=404, detail="Post not found")
    [out] = await hydrate_posts(db, [post])
    return {"post": PostOut(**out)}


@router.post("")
async def batch_or_create(
    payload: PostsRequest,
    db: AsyncSession = Depends(get_session),
):
    # 1) batch: {"ids": [...]}
    if payload.ids is not None:
        if not payload.ids:
            # nada que buscar → ni tocamos la DB
            return {"posts": []}
        try:
            posts = await repo.list_image_urls(db, payload.ids)
        except Exception as e:
            log.error(f"❌ batch de posts falló: {e!r}")
            raise HTTPException(status_code=500, detail="Failed to fetch posts")
        return {"posts": posts}

    # 2) crear: {"fk_image_id", "clerk_user_id", "tags"?}
    if not payload.fk_image_id or not payload.clerk_user_id:
        raise HTTPException(status_code=400, detail="Missing fk_image_id or clerk_user_id")

    tags = [t.model_dump() for t in payload.tags] if payload.tags else None

    try:
        post = await create_post_for(
            db,
            clerk_user_id=payload.clerk_user_id,
            image_id=payload.fk_image_id,
            tags=tags,
        )
        if not post.id:
            raise RuntimeError("insert sin id")
        await db.commit()
    except LookupError as e:
        await db.rollback()
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        await db.rollback()
        log.error(f"❌ crear post falló: {e!r}")
        raise HTTPException(status_code=500, detail="Failed to create post")

    [out] = await hydrate_posts(db, [post])
    return {"post": PostOut(**out)}


@router.delete("")
async def delete_post_endpoint(
    payload: PostDelete,
    db: AsyncSession = Depends(get_session),
):
    """
    Elimina el post con sus comentarios y su imagen.
    El archivo físico se borra después del commit (best-effort).
    """
    if not payload.post_id:
        raise HTTPException(status_code=400, detail="Missing postId")

    try:
        image_key = await delete_post_for(
            db, payload.post_id, clerk_user_id=payload.clerk_user_id
        )
        await db.commit()
    except LookupError as e:
        await db.rollback()
        raise HTTPException(status_code=404, detail=str(e))
    except PermissionError as e:
        await db.rollback()
        raise HTTPException(status_code=403, detail=str(e))
    except Exception as e:
        await db.rollback()
        log.error(f"❌ borrar post {payload.post_id} falló: {e!r}")
        raise HTTPException(status_code=500, detail="Failed to delete post")

    try:
        delete_key(image_key)
    except OSError as e:
        log.warning(f"⚠️ no se pudo borrar {image_key}: {e!r}")

    return {"success": True}


@router.post("/by-author")
async def posts_by_author(
    payload: ByAuthorRequest,
    db: AsyncSession = Depends(get_session),
):
    if not payload.author_id:
        raise HTTPException(status_code=400, detail="Missing authorId")

    internal_id = await internal_id_for(db, payload.author_id)
    if not internal_id:
        raise HTTPException(status_code=404, detail="User not found")

    posts = await repo.list_posts_by_author(db, internal_id)
    return {"posts": await repo.list_image_urls(db, [p.id for p in posts])}
