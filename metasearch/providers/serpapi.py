"""SerpAPI adapter."""

import httpx

from metasearch.models import SearchHit
from metasearch.providers.base import SearchProvider, require_list


class SerpApiProvider(SearchProvider):
    """Search with SerpAPI and normalize results."""

    name = "serpapi"

    async def _fetch(self, *, query: str, count: int, category: str | None) -> list[SearchHit]:
        async with httpx.AsyncClient() as client:
            response = await client.get(
                self.base_url,
                params={"q": query, "api_key": self.api_key, "num": count},
                headers={"Accept": "application/json"},
                timeout=self.timeout,
            )
            response.raise_for_status()

        results = require_list(response.json(), "organic_results")
        return [
            SearchHit(
                title=item.get("title", ""),
                url=item.get("link", ""),
                snippet=item.get("snippet", ""),
            )
            for item in results[:count]
        ]
