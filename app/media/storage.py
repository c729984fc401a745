import os
import uuid
import mimetypes
from typing import Tuple

from app.core.config import settings

# 📁 Rutas base
IMAGES_SUBDIR = "images"
PROFILE_SUBDIR = "profile"

IMAGE_EXTS = {".jpg", ".jpeg", ".png", ".gif", ".webp"}


class StorageError(RuntimeError):
    pass


def _media_dir() -> str:
    return settings.MEDIA_DIR


def _guess_ext(filename: str | None, content_type: str | None) -> str:
    ext = os.path.splitext(filename or "")[1].lower()
    if ext in IMAGE_EXTS:
        return ext
    guessed = mimetypes.guess_extension(content_type or "") or ""
    if guessed == ".jpe":
        guessed = ".jpg"
    return guessed if guessed in IMAGE_EXTS else ".jpg"


def _new_key(subdir: str, ext: str) -> Tuple[str, str]:
    """
    Devuelve (key, ruta absoluta) para un archivo nuevo con extensión ext.
    """
    key = f"{subdir}/{uuid.uuid4().hex}{ext}"
    abs_path = os.path.join(_media_dir(), key)
    return key, abs_path


def public_url(key: str) -> str:
    """La URL es opaca para el resto del código: solo se guarda y se devuelve."""
    return f"{settings.MEDIA_URL_PREFIX.rstrip('/')}/{key}"


def store_bytes(
    data: bytes,
    *,
    filename: str | None = None,
    content_type: str | None = None,
    subdir: str = IMAGES_SUBDIR,
) -> Tuple[str, str]:
    """
    Guarda los bytes y devuelve (key, url).
    """
    os.makedirs(os.path.join(_media_dir(), subdir), exist_ok=True)
    key, abs_path = _new_key(subdir, _guess_ext(filename, content_type))
    try:
        with open(abs_path, "wb") as out:
            out.write(data)
    except OSError as e:
        raise StorageError(f"no se pudo guardar {key}: {e}") from e
    return key, public_url(key)


def read_bytes(key: str) -> bytes:
    abs_path = os.path.join(_media_dir(), key)
    if not os.path.isfile(abs_path):
        raise FileNotFoundError(key)
    with open(abs_path, "rb") as fh:
        return fh.read()


def delete_key(key: str | None) -> None:
    """
    Elimina el archivo (si existe). No lanza error si ya no está.
    """
    if not key:
        return
    abs_path = os.path.join(_media_dir(), key)
    try:
        os.remove(abs_path)
    except FileNotFoundError:
        pass
