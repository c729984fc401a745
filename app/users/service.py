from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from app.users.models import User
from app.users.repository import get_by_clerk_id, create_user
from app.users.schemas import UserSync

log = logging.getLogger("uvicorn")


async def sync_user(db: AsyncSession, clerk_user_id: str, data: UserSync) -> User:
    """
    Crea el usuario la primera vez que aparece en Clerk; si ya existe,
    refresca email/nombre/imagen. No hace commit (lo hace el router).
    """
    fields = {
        "email": data.email,
        "first_name": data.first_name,
        "last_name": data.last_name,
        "image_url": data.image_url,
    }

    user = await get_by_clerk_id(db, clerk_user_id)
    if not user:
        user = await create_user(db, clerk_user_id, **fields)
        log.info(f"👤 usuario nuevo sincronizado: {clerk_user_id}")
        return user

    for key, value in fields.items():
        # no pisamos la foto propia con la de Clerk
        if key == "image_url" and user.fk_image_id:
            continue
        setattr(user, key, value)
    await db.flush()
    return user


async def update_bio(db: AsyncSession, clerk_user_id: str, bio: str) -> User:
    user = await get_by_clerk_id(db, clerk_user_id)
    if not user:
        raise LookupError("User not found")
    user.bio = bio
    await db.flush()
    return user
