from pydantic import BaseModel, Field, AliasChoices


class MembershipRequest(BaseModel):
    """Body de like/save: {post_id, userId}. userId es el id de Clerk."""
    post_id: str | None = Field(
        default=None,
        validation_alias=AliasChoices("post_id", "postId"),
    )
    user_id: str | None = Field(
        default=None,
        validation_alias=AliasChoices("userId", "user_id"),
    )
