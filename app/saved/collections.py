"""
Colecciones guardadas del usuario.

Se guardan como un objeto JSON en `users.saved_galleries`:

    {"Saved Posts": ["<post_id>", "<post_id>", ...]}

Toda la lógica de merge vive aquí detrás de `add_to_collection` /
`remove_from_collection`, para poder cambiar a una tabla intermedia
sin tocar a quien las llama.
"""
from __future__ import annotations

from typing import Any

SAVED_POSTS = "Saved Posts"


def ids_in(collection: dict | None, name: str) -> list[str]:
    """Null, {} o la key ausente → lista vacía."""
    if not collection:
        return []
    return list(collection.get(name) or [])


def merge_ids(existing: list[str], post_id: str) -> list[str]:
    # orden: los existentes primero, el nuevo al final; sin duplicados
    return list(dict.fromkeys([*existing, post_id]))


def without_id(existing: list[str], post_id: str) -> list[str]:
    return [pid for pid in existing if pid != post_id]


def normalized(collection: dict | None, name: str = SAVED_POSTS) -> dict[str, Any]:
    out = dict(collection or {})
    out[name] = ids_in(collection, name)
    return out


def add_to_collection(user, name: str, post_id: str) -> dict[str, Any]:
    """
    Agrega post_id a la colección `name` del usuario (idempotente).
    Reasigna el objeto entero para que el ORM lo persista.
    """
    current = normalized(user.saved_galleries, name)
    current[name] = merge_ids(current[name], post_id)
    user.saved_galleries = current
    return current


def remove_from_collection(user, name: str, post_id: str) -> dict[str, Any]:
    """Quita post_id; si no estaba no pasa nada y se devuelve igual."""
    current = normalized(user.saved_galleries, name)
    current[name] = without_id(current[name], post_id)
    user.saved_galleries = current
    return current
