import os
import tempfile

# antes de importar app: DB en memoria y media en un tmp
MEDIA_TMP = tempfile.mkdtemp(prefix="fisco-media-")
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["MEDIA_DIR"] = MEDIA_TMP

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.pool import StaticPool

from app.main import app
from app.db.base import Base
from app.db.session import get_session
from app.users.models import User
from app.images.models import Image
from app.posts.models import Post
from app.comments.models import Comment


class Factory:
    """Crea filas de prueba, cada una en su propia sesión ya commiteada."""

    def __init__(self, maker: async_sessionmaker):
        self.maker = maker
        self._n = 0

    async def _add(self, obj):
        async with self.maker() as s:
            s.add(obj)
            await s.commit()
            await s.refresh(obj)
        return obj

    async def user(self, clerk_user_id: str = "user_a", **fields) -> User:
        return await self._add(User(clerk_user_id=clerk_user_id, **fields))

    async def image(self, key: str | None = None) -> Image:
        self._n += 1
        key = key or f"images/test{self._n}.jpg"
        return await self._add(Image(key=key, s3_url=f"/media/{key}", content_type="image/jpeg", size=3))

    async def post(self, author: User, *, likes=None, saves=None, tags=None, image: Image | None = None) -> Post:
        image = image or await self.image()
        return await self._add(
            Post(
                fk_author_id=author.id,
                fk_image_id=image.id,
                likes=list(likes or []),
                saves=list(saves or []),
                tags=tags,
            )
        )

    async def comment(self, post: Post, user: User | None, text: str = "nice fit") -> Comment:
        return await self._add(
            Comment(post_id=post.id, user_id=user.id if user else None, comment_text=text)
        )

    async def get(self, model, pk):
        async with self.maker() as s:
            return await s.get(model, pk)


@pytest_asyncio.fixture
async def session_maker():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    yield maker

    await engine.dispose()


@pytest.fixture
def factory(session_maker) -> Factory:
    return Factory(session_maker)


@pytest_asyncio.fixture
async def async_client(session_maker):
    async def _get_session():
        async with session_maker() as session:
            yield session

    app.dependency_overrides[get_session] = _get_session
    transport = httpx.ASGITransport(app=app, raise_app_exceptions=False)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
