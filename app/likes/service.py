from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from app.posts.repository import get_post_for_update, add_member, remove_member


async def like_post(db: AsyncSession, post_id: str, user_id: str) -> list[str]:
    """
    Agrega el like solo si no estaba (dos likes iguales a la vez no
    cuentan doble). Devuelve el array resultante.
    """
    post = await get_post_for_update(db, post_id)
    if not post:
        raise LookupError("Post not found")
    await add_member(db, post, "likes", user_id)
    return list(post.likes)


async def unlike_post(db: AsyncSession, post_id: str, user_id: str) -> list[str]:
    post = await get_post_for_update(db, post_id)
    if not post:
        raise LookupError("Post not found")
    await remove_member(db, post, "likes", user_id)
    return list(post.likes)
