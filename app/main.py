# app/main.py
import os
import logging
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.json import UTF8JSONResponse, CORS_HEADERS, error_response
from app.core.config import settings
from app.db.init_db import init_models

# routers
from app.users.router import router as users_router
from app.posts.router import router as posts_router
from app.likes.router import router as likes_router
from app.saved.router import router as saved_router
from app.comments.router import router as comments_router
from app.images.router import router as images_router

log = logging.getLogger("uvicorn")

app = FastAPI(
    title="Fisco API",
    default_response_class=UTF8JSONResponse,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allow_origins_list,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

# directorio de imágenes servido en /media
os.makedirs(settings.MEDIA_DIR, exist_ok=True)
app.mount(
    settings.MEDIA_URL_PREFIX,
    StaticFiles(directory=settings.MEDIA_DIR, html=False),
    name="media",
)


@app.middleware("http")
async def api_headers(request: Request, call_next):
    """
    Todas las respuestas de /api llevan los headers CORS permisivos,
    aunque el request no traiga Origin (el front viejo los esperaba así).
    """
    response = await call_next(request)
    if request.url.path.startswith("/api/"):
        for key, value in CORS_HEADERS.items():
            response.headers.setdefault(key, value)
    return response


# ---------- errores → {"error": "..."} ----------
@app.exception_handler(StarletteHTTPException)
async def http_error(request: Request, exc: StarletteHTTPException):
    return error_response(exc.status_code, str(exc.detail))


@app.exception_handler(RequestValidationError)
async def validation_error(request: Request, exc: RequestValidationError):
    # body malformado = error de validación → 400 (no 422)
    return error_response(400, "Invalid request body", detail=str(exc.errors()))


@app.exception_handler(Exception)
async def unhandled_error(request: Request, exc: Exception):
    log.error(f"💥 {request.method} {request.url.path} falló: {exc!r}")
    return error_response(500, "internal error")


@app.on_event("startup")
async def on_startup():
    log.info("🚀 Iniciando servicio…")
    await init_models()
    log.info("✅ Startup listo.")


@app.get("/api/health/")
async def health():
    return {"ok": True, "service": "fisco", "msg": "healthy ✨"}


# routers
app.include_router(users_router)     # /api/users/..., /api/userendpoint, /api/bio, /api/profilephoto
app.include_router(posts_router)     # /api/posts/...
app.include_router(likes_router)     # /api/testendpoint
app.include_router(saved_router)     # /api/profile
app.include_router(comments_router)  # /api/comments
app.include_router(images_router)    # /api/images/...
