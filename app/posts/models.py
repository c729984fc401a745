import uuid
from datetime import datetime, timezone
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String, DateTime, func, ForeignKey
from app.db.base import Base, JSONType


class Post(Base):
    __tablename__ = "posts"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    fk_author_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), index=True
    )
    fk_image_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("images.id", ondelete="CASCADE"), nullable=False
    )

    # arrays JSON con ids externos (Clerk). Se tratan como conjuntos:
    # nunca se reasignan con duplicados (ver repository.add_member)
    likes: Mapped[list] = mapped_column(JSONType, nullable=False, default=list)
    saves: Mapped[list] = mapped_column(JSONType, nullable=False, default=list)

    # [{"x": 0.4, "y": 0.7, "label": "jacket"}]
    tags: Mapped[list | None] = mapped_column(JSONType, nullable=True)

    created_at: Mapped["DateTime"] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        server_default=func.now(),
        index=True,
    )
