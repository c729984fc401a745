from sqlalchemy import select, desc, func, delete
from sqlalchemy.ext.asyncio import AsyncSession

from app.posts.models import Post
from app.comments.models import Comment
from app.images.models import Image


MEMBER_FIELDS = ("likes", "saves")


# -------------------------
# POSTS
# -------------------------
async def create_post(
    db: AsyncSession,
    *,
    author_id: str,
    image_id: str,
    tags: list[dict] | None = None,
) -> Post:
    post = Post(
        fk_author_id=author_id,
        fk_image_id=image_id,
        likes=[],
        saves=[],
        tags=tags,
    )
    db.add(post)
    await db.flush()
    await db.refresh(post)
    return post


async def get_post(db: AsyncSession, post_id: str) -> Post | None:
    res = await db.execute(select(Post).where(Post.id == post_id))
    return res.scalar_one_or_none()


async def get_post_for_update(db: AsyncSession, post_id: str) -> Post | None:
    """
    Bloquea la fila (Postgres) para que el check "ya está en el array"
    y la escritura sean atómicos frente a otra petición.
    """
    res = await db.execute(
        select(Post).where(Post.id == post_id).with_for_update()
    )
    return res.scalar_one_or_none()


async def list_posts(db: AsyncSession, limit: int = 10, offset: int = 0) -> list[Post]:
    q = (
        select(Post)
        .order_by(desc(Post.created_at), desc(Post.id))
        .limit(limit)
        .offset(offset)
    )
    res = await db.execute(q)
    return list(res.scalars())


async def count_posts(db: AsyncSession) -> int:
    res = await db.execute(select(func.count()).select_from(Post))
    return int(res.scalar_one() or 0)


async def list_posts_by_author(db: AsyncSession, author_id: str) -> list[Post]:
    q = (
        select(Post)
        .where(Post.fk_author_id == author_id)
        .order_by(desc(Post.created_at), desc(Post.id))
    )
    res = await db.execute(q)
    return list(res.scalars())


async def list_image_urls(db: AsyncSession, post_ids: list[str]) -> list[dict]:
    """
    [{id, image_url}] para los ids pedidos, en el mismo orden en que llegan.
    Ids que no existen se omiten.
    """
    res = await db.execute(
        select(Post.id, Image.s3_url)
        .join(Image, Post.fk_image_id == Image.id)
        .where(Post.id.in_(post_ids))
    )
    by_id = {row.id: row.s3_url for row in res.all()}
    return [{"id": pid, "image_url": by_id[pid]} for pid in post_ids if pid in by_id]


async def comment_counts(db: AsyncSession, post_ids: list[str]) -> dict[str, int]:
    if not post_ids:
        return {}
    res = await db.execute(
        select(Comment.post_id, func.count(Comment.id))
        .where(Comment.post_id.in_(post_ids))
        .group_by(Comment.post_id)
    )
    return {post_id: int(total) for post_id, total in res.all()}


async def delete_post_cascade(db: AsyncSession, post: Post) -> str | None:
    """
    Borra comentarios → post → imagen, en ese orden.
    Devuelve la key del storage de la imagen (para borrarla después del commit).
    """
    await db.execute(delete(Comment).where(Comment.post_id == post.id))

    image = await db.get(Image, post.fk_image_id)
    await db.delete(post)
    await db.flush()

    key = None
    if image:
        key = image.key
        await db.delete(image)
        await db.flush()
    return key


# -------------------------
# ❤️ / 🔖 arrays de miembros (likes, saves)
# -------------------------
async def add_member(db: AsyncSession, post: Post, field: str, member: str) -> bool:
    """
    Agrega `member` al array solo si no está. Devuelve True si escribió.
    """
    if field not in MEMBER_FIELDS:
        raise ValueError(f"campo inválido: {field}")
    current = list(getattr(post, field) or [])
    if member in current:
        return False
    # lista nueva para que SQLAlchemy detecte el cambio en la columna JSON
    setattr(post, field, current + [member])
    await db.flush()
    return True


async def remove_member(db: AsyncSession, post: Post, field: str, member: str) -> bool:
    if field not in MEMBER_FIELDS:
        raise ValueError(f"campo inválido: {field}")
    current = list(getattr(post, field) or [])
    kept = [m for m in current if m != member]
    if len(kept) == len(current):
        return False
    setattr(post, field, kept)
    await db.flush()
    return True
