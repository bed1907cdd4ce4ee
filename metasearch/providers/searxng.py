"""SearXNG (self-hosted metasearch) adapter."""

import httpx

from metasearch.models import SearchHit
from metasearch.providers.base import SearchProvider, require_list


class SearxngProvider(SearchProvider):
    """Search a SearXNG instance through its JSON output format."""

    name = "searxng"
    requires_api_key = False

    def __init__(self, *, base_url: str, category: str = "general", timeout: float = 10.0):
        super().__init__(base_url=base_url.rstrip("/"), timeout=timeout)
        self.category = category or "general"

    async def _fetch(self, *, query: str, count: int, category: str | None) -> list[SearchHit]:
        async with httpx.AsyncClient() as client:
            response = await client.get(
                f"{self.base_url}/search",
                params={
                    "q": query,
                    "format": "json",
                    "categories": category or self.category,
                },
                headers={"Accept": "application/json"},
                timeout=self.timeout,
            )
            response.raise_for_status()

        results = require_list(response.json(), "results")
        return [
            SearchHit(
                title=item.get("title", ""),
                url=item.get("url", ""),
                snippet=item.get("content", ""),
            )
            for item in results[:count]
        ]
