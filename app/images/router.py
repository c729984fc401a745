import logging

from fastapi import APIRouter, Depends, HTTPException, UploadFile, File, Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.json import UTF8JSONResponse
from app.db.session import get_session
from app.images.repository import read_image_upload, store_image, get_image, InvalidUpload
from app.media.storage import read_bytes, delete_key

log = logging.getLogger("uvicorn")

router = APIRouter(
    prefix="/api/images",
    tags=["images"],
    default_response_class=UTF8JSONResponse,
)


@router.post("")
async def upload_image(
    file: UploadFile | None = File(None),
    db: AsyncSession = Depends(get_session),
):
    """
    Sube la foto del outfit. Devuelve el id de imagen que luego se manda
    a POST /api/posts como fk_image_id.
    """
    try:
        data = await read_image_upload(file)
    except InvalidUpload as e:
        raise HTTPException(status_code=400, detail=str(e))

    img = None
    try:
        img = await store_image(db, data, filename=file.filename, content_type=file.content_type)
        await db.commit()
    except Exception as e:
        await db.rollback()
        # si el archivo quedó escrito pero la fila no, lo limpiamos
        if img is not None:
            delete_key(img.key)
        log.error(f"❌ Upload error: {e!r}")
        raise HTTPException(status_code=500, detail="Error uploading file")

    return {"imageId": img.id, "url": img.s3_url}


@router.get("/{image_id}")
async def image_detail(image_id: str, db: AsyncSession = Depends(get_session)):
    img = await get_image(db, image_id)
    if not img:
        raise HTTPException(status_code=404, detail="Image not found")
    return {
        "id": img.id,
        "url": img.s3_url,
        "content_type": img.content_type,
        "size": img.size,
    }


@router.get("/{image_id}/data")
async def image_data(image_id: str, db: AsyncSession = Depends(get_session)):
    img = await get_image(db, image_id)
    if not img:
        raise HTTPException(status_code=404, detail="Image not found")
    try:
        content = read_bytes(img.key)
    except FileNotFoundError:
        raise HTTPException(status_code=404, detail="Image data not found")
    return Response(content=content, media_type=img.content_type or "application/octet-stream")
