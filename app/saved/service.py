from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from app.posts.repository import get_post_for_update, add_member, remove_member
from app.saved.collections import (
    SAVED_POSTS,
    add_to_collection,
    remove_from_collection,
    normalized,
)
from app.users.repository import get_by_clerk_id


async def _user_or_404(db: AsyncSession, clerk_user_id: str):
    user = await get_by_clerk_id(db, clerk_user_id)
    if not user:
        raise LookupError("User not found")
    return user


async def get_collection(db: AsyncSession, clerk_user_id: str) -> dict:
    user = await _user_or_404(db, clerk_user_id)
    return normalized(user.saved_galleries)


async def save_post(db: AsyncSession, clerk_user_id: str, post_id: str) -> dict:
    """
    1) marca el save en el post (solo si no estaba)
    2) agrega el post a "Saved Posts" del usuario
    Las dos escrituras van en la misma transacción; commit lo hace el router.
    """
    user = await _user_or_404(db, clerk_user_id)

    post = await get_post_for_update(db, post_id)
    if not post:
        raise LookupError("Post not found")
    await add_member(db, post, "saves", clerk_user_id)

    collection = add_to_collection(user, SAVED_POSTS, post_id)
    await db.flush()
    return collection


async def unsave_post(db: AsyncSession, clerk_user_id: str, post_id: str) -> dict:
    """
    Quita el save del post (si el post todavía existe) y siempre limpia
    el id de la colección, aunque el post ya se haya borrado.
    """
    user = await _user_or_404(db, clerk_user_id)

    post = await get_post_for_update(db, post_id)
    if post:
        await remove_member(db, post, "saves", clerk_user_id)

    collection = remove_from_collection(user, SAVED_POSTS, post_id)
    await db.flush()
    return collection
