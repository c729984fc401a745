from pydantic import BaseModel, Field, AliasChoices


class CommentCreate(BaseModel):
    post_id: str | None = Field(
        default=None,
        validation_alias=AliasChoices("postId", "post_id"),
    )
    clerk_user_id: str | None = Field(
        default=None,
        validation_alias=AliasChoices("clerkUserId", "clerk_user_id"),
    )
    comment_text: str | None = Field(
        default=None,
        validation_alias=AliasChoices("commentText", "comment_text"),
    )


class CommentOut(BaseModel):
    id: str
    post_id: str
    comment_text: str
    created_at: str
    user_id: str | None = None
    clerk_user_id: str | None = None
    first_name: str
    last_name: str = ""
    profile_image_url: str | None = None
