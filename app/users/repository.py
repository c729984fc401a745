from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from app.users.models import User


async def get_by_id(db: AsyncSession, user_id: str) -> User | None:
    res = await db.execute(select(User).where(User.id == user_id))
    return res.scalar_one_or_none()


async def get_by_clerk_id(db: AsyncSession, clerk_user_id: str) -> User | None:
    res = await db.execute(select(User).where(User.clerk_user_id == clerk_user_id))
    return res.scalar_one_or_none()


async def internal_id_for(db: AsyncSession, clerk_user_id: str) -> str | None:
    """Traduce id de Clerk → id interno. None si no existe."""
    res = await db.execute(select(User.id).where(User.clerk_user_id == clerk_user_id))
    return res.scalar_one_or_none()


async def get_many(db: AsyncSession, user_ids: list[str]) -> dict[str, User]:
    if not user_ids:
        return {}
    res = await db.execute(select(User).where(User.id.in_(user_ids)))
    return {u.id: u for u in res.scalars()}


async def create_user(db: AsyncSession, clerk_user_id: str, **fields) -> User:
    user = User(clerk_user_id=clerk_user_id, **fields)
    db.add(user)
    await db.flush()
    await db.refresh(user)
    return user
