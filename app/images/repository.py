from fastapi import UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.images.models import Image
from app.media.storage import store_bytes, IMAGES_SUBDIR


class InvalidUpload(ValueError):
    pass


async def read_image_upload(file: UploadFile | None) -> bytes:
    """
    Valida y lee el archivo subido. InvalidUpload con el mensaje para el 400.
    """
    if file is None:
        raise InvalidUpload("No file provided")
    if not (file.content_type or "").lower().startswith("image/"):
        raise InvalidUpload("Only image files are allowed")
    data = await file.read()
    if not data:
        raise InvalidUpload("No file provided")
    if len(data) > settings.MAX_IMAGE_BYTES:
        mb = settings.MAX_IMAGE_BYTES // (1024 * 1024)
        raise InvalidUpload(f"File size too large. Maximum size is {mb}MB")
    return data


async def store_image(
    db: AsyncSession,
    data: bytes,
    *,
    filename: str | None,
    content_type: str | None,
    subdir: str = IMAGES_SUBDIR,
) -> Image:
    key, url = store_bytes(data, filename=filename, content_type=content_type, subdir=subdir)
    img = Image(key=key, s3_url=url, content_type=content_type, size=len(data))
    db.add(img)
    await db.flush()
    await db.refresh(img)
    return img


async def get_image(db: AsyncSession, image_id: str) -> Image | None:
    return await db.get(Image, image_id)
