from __future__ import annotations


class AuthContext:
    """
    Lo único que los controles necesitan del proveedor de auth:
    el id externo del usuario actual (o None) y cerrar sesión.
    Se pasa explícito a cada control; para Clerk real basta con
    sobreescribir estos dos métodos.
    """

    def __init__(self, user_id: str | None = None):
        self._user_id = user_id

    def current_user_id(self) -> str | None:
        return self._user_id

    def sign_out(self) -> None:
        self._user_id = None
