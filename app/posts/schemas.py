from pydantic import BaseModel, Field, AliasChoices
from datetime import datetime


class Tag(BaseModel):
    """Posición normalizada dentro de la imagen (0..1) + etiqueta opcional."""
    x: float = Field(..., ge=0, le=1)
    y: float = Field(..., ge=0, le=1)
    label: str | None = None


class PostOut(BaseModel):
    id: str
    image_url: str | None = None
    fk_author_id: str | None = None
    clerk_user_id: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    profile_image_url: str | None = None
    created_at: datetime | None = None
    likes: list[str] = []
    saves: list[str] = []
    comment_count: int = 0
    tags: list[Tag] | None = None


class PostsRequest(BaseModel):
    """
    POST /api/posts tiene dos formas:
      - {"ids": [...]}                                  → batch de imágenes
      - {"fk_image_id", "clerk_user_id", "tags"?}       → crear post
    """
    ids: list[str] | None = None
    fk_image_id: str | None = None
    clerk_user_id: str | None = None
    tags: list[Tag] | None = None


class PostDelete(BaseModel):
    post_id: str | None = Field(
        default=None,
        validation_alias=AliasChoices("postId", "post_id"),
    )
    clerk_user_id: str | None = Field(
        default=None,
        validation_alias=AliasChoices("clerkUserId", "clerk_user_id"),
    )


class ByAuthorRequest(BaseModel):
    author_id: str | None = Field(
        default=None,
        validation_alias=AliasChoices("authorId", "author_id"),
    )
