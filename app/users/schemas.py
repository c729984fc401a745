from pydantic import BaseModel, Field, AliasChoices


class UserSync(BaseModel):
    """Datos de perfil que llegan de Clerk al sincronizar."""
    email: str | None = None
    first_name: str | None = Field(
        default=None,
        validation_alias=AliasChoices("first_name", "firstName"),
    )
    last_name: str | None = Field(
        default=None,
        validation_alias=AliasChoices("last_name", "lastName"),
    )
    image_url: str | None = Field(
        default=None,
        validation_alias=AliasChoices("image_url", "imageUrl"),
    )


class UserOut(BaseModel):
    id: str
    clerk_user_id: str
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    image_url: str | None = None
    bio: str | None = None

    class Config:
        from_attributes = True


class BioUpdate(BaseModel):
    user_id: str | None = Field(
        default=None,
        validation_alias=AliasChoices("userId", "user_id"),
    )
    bio: str | None = None
