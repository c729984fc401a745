from jose import jwt, JWTError
from app.core.config import settings


def decode_session_token(token: str) -> str:
    """
    Valida un session token de Clerk y devuelve el `sub`
    (el id externo del usuario, p. ej. "user_2abc...").
    """
    options = {"verify_aud": False}
    payload = jwt.decode(
        token,
        settings.CLERK_JWT_KEY,
        algorithms=[settings.CLERK_JWT_ALGORITHM],
        issuer=settings.CLERK_ISSUER,
        options=options,
    )
    sub = payload.get("sub")
    if not sub:
        raise JWTError("missing sub")
    return sub


def extract_bearer(authorization: str | None) -> str | None:
    if authorization and authorization.lower().startswith("bearer "):
        return authorization.split(" ", 1)[1]
    return None
