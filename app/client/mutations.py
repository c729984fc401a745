"""
Like / Save optimistas.

Cada intento pasa por: IDLE → OPTIMISTIC → (CONFIRMED | REVERTED).
El estado optimista se publica antes de que la request termine; si la
request falla, se publica el post revertido, calculado a partir de la
foto tomada antes del cambio (no de lo que haya en pantalla después).
"""
from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Any, Callable

from app.client.api import ApiClient
from app.client.auth import AuthContext
from app.client.gate import ConcurrencyGate
from app.posts.schemas import PostOut

log = logging.getLogger(__name__)

LOGIN_PATH = "/login"


class MutationState(str, enum.Enum):
    IDLE = "idle"
    OPTIMISTIC = "optimistic"
    CONFIRMED = "confirmed"
    REVERTED = "reverted"


def toggled(members: list, user_id: Any) -> list:
    """Saca user_id si está, lo agrega al final si no. Nunca lanza."""
    if user_id in members:
        return [m for m in members if m != user_id]
    return [*members, user_id]


@dataclass(frozen=True)
class MembershipChange:
    field: str
    user_id: Any
    snapshot: PostOut

    @property
    def was_member(self) -> bool:
        return self.user_id in self.before

    @property
    def before(self) -> list:
        return list(getattr(self.snapshot, self.field) or [])

    def optimistic(self) -> PostOut:
        return self.snapshot.model_copy(update={self.field: toggled(self.before, self.user_id)})

    def reverted(self) -> PostOut:
        return self.snapshot.model_copy(update={self.field: self.before})


class OptimisticToggle:
    """
    Base de LikeButton / SaveButton.

    on_change recibe cada nuevo valor del post (optimista y, si hace falta,
    el revertido). notify / redirect se usan cuando no hay sesión.
    """

    field: str = ""
    verb: str = ""
    sign_in_notice: str = ""

    def __init__(
        self,
        api: ApiClient,
        auth: AuthContext,
        on_change: Callable[[PostOut], None],
        *,
        notify: Callable[[str], None],
        redirect: Callable[[str], None],
        login_path: str = LOGIN_PATH,
    ):
        self.api = api
        self.auth = auth
        self.on_change = on_change
        self.notify = notify
        self.redirect = redirect
        self.login_path = login_path
        self.gate = ConcurrencyGate()
        self.state = MutationState.IDLE

    async def _send(self, post_id: str, user_id: Any, add: bool) -> None:
        raise NotImplementedError

    async def trigger(self, post: PostOut) -> MutationState | None:
        """
        Devuelve el estado final del intento, o None si no hubo intento
        (sin sesión, o ya había uno en curso).
        """
        user_id = self.auth.current_user_id()
        if not user_id:
            self.notify(self.sign_in_notice)
            self.redirect(self.login_path)
            return None

        if not self.gate.try_enter():
            return None

        try:
            change = MembershipChange(self.field, user_id, post)
            self.state = MutationState.OPTIMISTIC
            self.on_change(change.optimistic())

            try:
                await self._send(post.id, user_id, add=not change.was_member)
            except Exception as e:
                log.error("Error %s post %s: %r", self.verb, post.id, e)
                self.state = MutationState.REVERTED
                self.on_change(change.reverted())
            else:
                self.state = MutationState.CONFIRMED
        finally:
            self.gate.leave()

        return self.state


class LikeToggle(OptimisticToggle):
    field = "likes"
    verb = "liking"
    sign_in_notice = "Please sign in to like posts!"

    async def _send(self, post_id: str, user_id: Any, add: bool) -> None:
        if add:
            await self.api.like(post_id, user_id)
        else:
            await self.api.unlike(post_id, user_id)


class SaveToggle(OptimisticToggle):
    field = "saves"
    verb = "saving"
    sign_in_notice = "Please sign in to save posts!"

    async def _send(self, post_id: str, user_id: Any, add: bool) -> None:
        if add:
            await self.api.save(post_id, user_id)
        else:
            await self.api.unsave(post_id, user_id)
