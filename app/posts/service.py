from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.posts.models import Post
from app.posts import repository as repo
from app.images.models import Image
from app.users.repository import get_many, get_by_clerk_id


async def hydrate_posts(db: AsyncSession, posts: list[Post]) -> list[dict]:
    """
    Devuelve los dicts que espera el front (ver PostOut):
    - image_url de la imagen
    - autor (clerk id, nombre, foto)
    - likes / saves tal cual, comment_count calculado
    Todo en 3 queries, sin importar cuántos posts haya.
    """
    if not posts:
        return []

    ids = [p.id for p in posts]
    authors = await get_many(db, list({p.fk_author_id for p in posts}))

    ires = await db.execute(
        select(Image.id, Image.s3_url).where(Image.id.in_([p.fk_image_id for p in posts]))
    )
    images = {row.id: row.s3_url for row in ires.all()}

    counts = await repo.comment_counts(db, ids)

    out: list[dict] = []
    for p in posts:
        author = authors.get(p.fk_author_id)
        out.append(
            {
                "id": p.id,
                "image_url": images.get(p.fk_image_id),
                "fk_author_id": p.fk_author_id,
                "clerk_user_id": author.clerk_user_id if author else None,
                "first_name": author.first_name if author else None,
                "last_name": author.last_name if author else None,
                "profile_image_url": author.image_url if author else None,
                "created_at": p.created_at,
                "likes": list(p.likes or []),
                "saves": list(p.saves or []),
                "comment_count": counts.get(p.id, 0),
                "tags": p.tags,
            }
        )
    return out


async def feed_page(db: AsyncSession, *, limit: int, offset: int) -> list[dict]:
    posts = await repo.list_posts(db, limit=limit, offset=offset)
    return await hydrate_posts(db, posts)


async def create_post_for(
    db: AsyncSession,
    *,
    clerk_user_id: str,
    image_id: str,
    tags: list[dict] | None,
) -> Post:
    """
    Crea el post traduciendo primero el id de Clerk al id interno.
    LookupError si falta el usuario o la imagen.
    """
    author = await get_by_clerk_id(db, clerk_user_id)
    if not author:
        raise LookupError("User not found")

    image = await db.get(Image, image_id)
    if not image:
        raise LookupError("Image not found")

    return await repo.create_post(db, author_id=author.id, image_id=image.id, tags=tags)


async def delete_post_for(
    db: AsyncSession,
    post_id: str,
    *,
    clerk_user_id: str | None = None,
) -> str | None:
    """
    Borrado en cascada. Si llega clerk_user_id, solo el autor puede borrar.
    Devuelve la key de storage de la imagen borrada.
    """
    post = await repo.get_post(db, post_id)
    if not post:
        raise LookupError("Post not found")

    if clerk_user_id:
        author = await get_by_clerk_id(db, clerk_user_id)
        if not author or author.id != post.fk_author_id:
            raise PermissionError("Not your post")

    return await repo.delete_post_cascade(db, post)
