from __future__ import annotations

from typing import Any

import httpx

from app.posts.schemas import PostOut


class ApiClient:
    """
    Cliente async de la API (httpx). Cualquier status >= 400 se levanta
    como httpx.HTTPStatusError, igual que un error de red.
    """

    def __init__(
        self,
        base_url: str,
        *,
        client: httpx.AsyncClient | None = None,
        timeout: float | None = None,
    ):
        self._client = client or httpx.AsyncClient(base_url=base_url, timeout=timeout)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _send(self, method: str, path: str, **kwargs) -> Any:
        resp = await self._client.request(method, path, **kwargs)
        resp.raise_for_status()
        return resp.json()

    # ---------- ❤️ likes ----------
    async def like(self, post_id: str, user_id: str) -> Any:
        return await self._send("POST", "/api/testendpoint", json={"post_id": post_id, "userId": user_id})

    async def unlike(self, post_id: str, user_id: str) -> Any:
        return await self._send("DELETE", "/api/testendpoint", json={"post_id": post_id, "userId": user_id})

    # ---------- 🔖 saves ----------
    async def save(self, post_id: str, user_id: str) -> Any:
        return await self._send("POST", "/api/profile", json={"post_id": post_id, "userId": user_id})

    async def unsave(self, post_id: str, user_id: str) -> Any:
        return await self._send("DELETE", "/api/profile", json={"post_id": post_id, "userId": user_id})

    async def saved_collection(self, user_id: str) -> dict:
        data = await self._send("POST", "/api/profile", json={"userId": user_id})
        return data.get("saved_galleries") or {}

    # ---------- feed ----------
    async def feed(self, *, limit: int, offset: int) -> list[PostOut]:
        data = await self._send("GET", "/api/posts", params={"limit": limit, "offset": offset})
        return [PostOut(**p) for p in data.get("posts") or []]

    async def count_posts(self) -> int:
        data = await self._send("GET", "/api/posts/count")
        return int(data.get("total") or 0)
