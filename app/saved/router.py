import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.json import UTF8JSONResponse
from app.db.session import get_session
from app.likes.schemas import MembershipRequest
from app.saved.service import get_collection, save_post, unsave_post

log = logging.getLogger("uvicorn")

router = APIRouter(
    prefix="/api/profile",
    tags=["saved"],
    default_response_class=UTF8JSONResponse,
)


@router.post("")
async def save_or_read(payload: MembershipRequest, db: AsyncSession = Depends(get_session)):
    """
    Con post_id → guarda el post. Sin post_id → devuelve la colección actual.
    """
    if not payload.user_id:
        raise HTTPException(status_code=400, detail="Missing userId")

    try:
        if not payload.post_id:
            return {"saved_galleries": await get_collection(db, payload.user_id)}
        collection = await save_post(db, payload.user_id, payload.post_id)
        await db.commit()
    except LookupError as e:
        await db.rollback()
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        await db.rollback()
        log.error(f"❌ Error saving post {payload.post_id}: {e!r}")
        raise HTTPException(status_code=500, detail="Failed to save post")

    return {"success": True, "saved_galleries": collection}


@router.delete("")
async def unsave(payload: MembershipRequest, db: AsyncSession = Depends(get_session)):
    if not payload.post_id or not payload.user_id:
        raise HTTPException(status_code=400, detail="Missing post_id or userId")

    try:
        collection = await unsave_post(db, payload.user_id, payload.post_id)
        await db.commit()
    except LookupError as e:
        await db.rollback()
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        await db.rollback()
        log.error(f"❌ Error unsaving post {payload.post_id}: {e!r}")
        raise HTTPException(status_code=500, detail="Failed to unsave post")

    return {"success": True, "saved_galleries": collection}
