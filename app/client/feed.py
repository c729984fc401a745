from __future__ import annotations

from typing import Callable
from urllib.parse import urlencode

from app.client.api import ApiClient
from app.posts.schemas import PostOut

POSTS_PER_PAGE = 5
# px antes del final del scroll que ya cuentan como "abajo"
SCROLL_THRESHOLD = 10


class FeedPaginator:
    """
    Scroll infinito por offset.

    El total de posts se pide una sola vez y queda cacheado. En cada scroll
    cerca del final se avanza `page_size` y se navega a `?offset=N`; quien
    reciba la navegación vuelve a pedir el feed para ese offset.
    """

    def __init__(
        self,
        api: ApiClient,
        navigate: Callable[[str], None],
        *,
        start_offset: int = 0,
        page_size: int = POSTS_PER_PAGE,
        threshold: int = SCROLL_THRESHOLD,
        base_path: str = "/",
    ):
        if start_offset < 0:
            raise ValueError("start_offset must be >= 0")
        self.api = api
        self.navigate = navigate
        self.current_offset = start_offset
        self.page_size = page_size
        self.threshold = threshold
        self.base_path = base_path
        self.total_posts: int | None = None

    async def load_total(self) -> int:
        if self.total_posts is None:
            self.total_posts = await self.api.count_posts()
        return self.total_posts

    def near_bottom(self, scroll_top: float, scroll_height: float, client_height: float) -> bool:
        return scroll_height - (scroll_top + client_height) <= self.threshold

    def has_more(self) -> bool:
        # sin total todavía no sabemos si hay más → no avanzamos
        if self.total_posts is None:
            return False
        return self.total_posts >= self.current_offset + self.page_size

    def url_for(self, offset: int) -> str:
        return f"{self.base_path}?{urlencode({'offset': offset})}"

    def on_scroll(self, scroll_top: float, scroll_height: float, client_height: float) -> int | None:
        """Devuelve el offset nuevo si avanzó, None si no."""
        if not self.near_bottom(scroll_top, scroll_height, client_height):
            return None
        if not self.has_more():
            return None
        self.current_offset += self.page_size
        self.navigate(self.url_for(self.current_offset))
        return self.current_offset

    async def fetch_current_page(self) -> list[PostOut]:
        return await self.api.feed(limit=self.page_size, offset=self.current_offset)
