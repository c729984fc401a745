import logging

from fastapi import APIRouter, Depends, HTTPException, Header, Query, UploadFile, File, Form
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.json import UTF8JSONResponse
from app.core.security import decode_session_token, extract_bearer
from app.db.session import get_session
from app.images.repository import read_image_upload, store_image, InvalidUpload
from app.media.storage import PROFILE_SUBDIR
from app.posts.repository import list_posts_by_author
from app.posts.service import hydrate_posts
from app.users.repository import get_by_clerk_id, internal_id_for
from app.users.schemas import UserSync, UserOut, BioUpdate
from app.users import service as svc

log = logging.getLogger("uvicorn")

router = APIRouter(prefix="/api", tags=["users"], default_response_class=UTF8JSONResponse)


def _public_user(user) -> dict:
    return {
        "first_name": user.first_name,
        "last_name": user.last_name,
        "email": user.email,
        "image_url": user.image_url,
        "bio": user.bio,
    }


@router.get("/users/me")
async def internal_id(
    clerk_user_id: str | None = Query(None, alias="clerkUserId"),
    db: AsyncSession = Depends(get_session),
):
    """id de Clerk → id interno."""
    if not clerk_user_id:
        raise HTTPException(status_code=400, detail="Missing clerkUserId")
    uid = await internal_id_for(db, clerk_user_id)
    if not uid:
        raise HTTPException(status_code=404, detail="User not found")
    return {"internalUserId": uid}


@router.post("/users/sync", response_model=UserOut)
async def sync(
    payload: UserSync,
    db: AsyncSession = Depends(get_session),
    authorization: str | None = Header(None),
):
    """
    Se llama después del login: crea/actualiza el usuario del session token.
    """
    token = extract_bearer(authorization)
    if not token:
        raise HTTPException(status_code=401, detail="missing token")
    try:
        clerk_user_id = decode_session_token(token)
    except Exception:
        raise HTTPException(status_code=401, detail="invalid token")

    try:
        user = await svc.sync_user(db, clerk_user_id, payload)
        await db.commit()
    except Exception as e:
        await db.rollback()
        log.error(f"❌ Error syncing user {clerk_user_id}: {e!r}")
        raise HTTPException(status_code=500, detail="internal error")
    return user


@router.get("/userendpoint")
async def user_and_posts(
    user_id: str | None = Query(None, alias="userId"),
    db: AsyncSession = Depends(get_session),
):
    if not user_id:
        raise HTTPException(status_code=400, detail="User ID is required")

    user = await get_by_clerk_id(db, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User or posts not found")

    posts = await list_posts_by_author(db, user.id)
    return {"user": _public_user(user), "posts": await hydrate_posts(db, posts)}


@router.put("/bio")
async def update_bio(payload: BioUpdate, db: AsyncSession = Depends(get_session)):
    if not payload.user_id:
        raise HTTPException(status_code=400, detail="User ID is required")
    if not payload.bio:
        raise HTTPException(status_code=400, detail="Bio is required")

    try:
        user = await svc.update_bio(db, payload.user_id, payload.bio)
        await db.commit()
    except LookupError as e:
        await db.rollback()
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        await db.rollback()
        log.error(f"❌ Error updating user bio: {e!r}")
        raise HTTPException(status_code=500, detail="Internal server error")

    return {"user": _public_user(user)}


@router.get("/profilephoto")
async def profile_photo(
    user_id: str | None = Query(None),
    db: AsyncSession = Depends(get_session),
):
    if not user_id:
        raise HTTPException(status_code=400, detail="Missing user_id")
    user = await get_by_clerk_id(db, user_id)
    return {"image_url": user.image_url if user else None}


@router.post("/profilephoto")
async def upload_profile_photo(
    file: UploadFile | None = File(None),
    user_id: str | None = Form(None),
    db: AsyncSession = Depends(get_session),
):
    try:
        data = await read_image_upload(file)
    except InvalidUpload as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not user_id:
        raise HTTPException(status_code=400, detail="Missing user_id")

    user = await get_by_clerk_id(db, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")

    try:
        img = await store_image(
            db,
            data,
            filename=file.filename,
            content_type=file.content_type,
            subdir=PROFILE_SUBDIR,
        )
        user.fk_image_id = img.id
        user.image_url = img.s3_url
        await db.flush()
        await db.commit()
    except Exception as e:
        await db.rollback()
        log.error(f"❌ Upload error: {e!r}")
        raise HTTPException(status_code=500, detail="Failed to upload or update user")

    return {"id": img.id, "image_url": img.s3_url}
