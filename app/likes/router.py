import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.json import UTF8JSONResponse
from app.db.session import get_session
from app.likes.schemas import MembershipRequest
from app.likes.service import like_post, unlike_post
from app.posts.service import feed_page

log = logging.getLogger("uvicorn")

# el front histórico usa /api/testendpoint para likes y feed
router = APIRouter(
    prefix="/api/testendpoint",
    tags=["likes"],
    default_response_class=UTF8JSONResponse,
)


def _require(payload: MembershipRequest) -> tuple[str, str]:
    if not payload.post_id or not payload.user_id:
        raise HTTPException(status_code=400, detail="Missing post_id or userId")
    return payload.post_id, payload.user_id


@router.get("")
async def feed_list(
    limit: int = Query(settings.FEED_DEFAULT_LIMIT, ge=1, le=50),
    offset: int = Query(0, ge=0),
    db: AsyncSession = Depends(get_session),
):
    posts = await feed_page(db, limit=limit, offset=offset)
    return {"posts": posts}


@router.post("")
async def add_like(payload: MembershipRequest, db: AsyncSession = Depends(get_session)):
    post_id, user_id = _require(payload)
    try:
        likes = await like_post(db, post_id, user_id)
        await db.commit()
    except LookupError as e:
        await db.rollback()
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        await db.rollback()
        log.error(f"❌ Error liking post {post_id}: {e!r}")
        raise HTTPException(status_code=500, detail="Failed to like post")
    return {"success": True, "likes": likes}


@router.delete("")
async def remove_like(payload: MembershipRequest, db: AsyncSession = Depends(get_session)):
    post_id, user_id = _require(payload)
    try:
        likes = await unlike_post(db, post_id, user_id)
        await db.commit()
    except LookupError as e:
        await db.rollback()
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        await db.rollback()
        log.error(f"❌ Error unliking post {post_id}: {e!r}")
        raise HTTPException(status_code=500, detail="Failed to unlike post")
    return {"success": True, "likes": likes}
