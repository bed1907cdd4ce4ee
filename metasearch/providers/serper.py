"""Serper (Google results) Search API adapter."""

import httpx

from metasearch.models import SearchHit
from metasearch.providers.base import SearchProvider, require_list


class SerperProvider(SearchProvider):
    """Search with Serper API and normalize results."""

    name = "serper"

    async def _fetch(self, *, query: str, count: int, category: str | None) -> list[SearchHit]:
        async with httpx.AsyncClient() as client:
            response = await client.post(
                self.base_url,
                json={"q": query, "num": count},
                headers={
                    "Content-Type": "application/json",
                    "X-API-KEY": self.api_key,
                },
                timeout=self.timeout,
            )
            response.raise_for_status()

        results = require_list(response.json(), "organic")
        return [
            SearchHit(
                title=item.get("title", ""),
                url=item.get("link", ""),
                snippet=item.get("snippet", ""),
            )
            for item in results[:count]
        ]
