from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.comments.models import Comment
from app.users.models import User

ANONYMOUS_NAME = "Anonymous"


async def create_comment(
    db: AsyncSession,
    *,
    post_id: str,
    user_id: str,
    text: str,
) -> Comment:
    c = Comment(post_id=post_id, user_id=user_id, comment_text=text)
    db.add(c)
    await db.flush()
    await db.refresh(c)
    return c


async def get_comment(db: AsyncSession, comment_id: str) -> Comment | None:
    res = await db.execute(select(Comment).where(Comment.id == comment_id))
    return res.scalar_one_or_none()


async def list_post_comments(db: AsyncSession, post_id: str) -> list[dict]:
    """
    Comentarios del post (más viejos primero) con los datos de display
    del autor. Si el autor ya no existe → "Anonymous".
    """
    res = await db.execute(
        select(Comment, User)
        .outerjoin(User, Comment.user_id == User.id)
        .where(Comment.post_id == post_id)
        .order_by(Comment.created_at.asc(), Comment.id.asc())
    )
    return [serialize(c, user) for c, user in res.all()]


def serialize(c: Comment, user: User | None) -> dict:
    return {
        "id": c.id,
        "post_id": c.post_id,
        "comment_text": c.comment_text,
        "created_at": c.created_at.isoformat() if c.created_at else "",
        "user_id": c.user_id,
        "clerk_user_id": user.clerk_user_id if user else None,
        "first_name": (user.first_name if user else None) or ANONYMOUS_NAME,
        "last_name": (user.last_name if user else None) or "",
        "profile_image_url": user.image_url if user else None,
    }


async def delete_comment(db: AsyncSession, comment: Comment) -> None:
    await db.delete(comment)
    await db.flush()
