"""Tavily Search API adapter."""

import httpx

from metasearch.models import SearchHit
from metasearch.providers.base import SearchProvider, require_list


class TavilyProvider(SearchProvider):
    """Search with Tavily API and normalize results."""

    name = "tavily"

    async def _fetch(self, *, query: str, count: int, category: str | None) -> list[SearchHit]:
        async with httpx.AsyncClient() as client:
            response = await client.post(
                self.base_url,
                json={
                    "api_key": self.api_key,
                    "query": query,
                    "max_results": count,
                },
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
            )
            response.raise_for_status()

        results = require_list(response.json(), "results")
        hits: list[SearchHit] = []
        for item in results[:count]:
            hits.append(
                SearchHit(
                    title=item.get("title", ""),
                    url=item.get("url", ""),
                    snippet=item.get("content", "") or item.get("snippet", ""),
                )
            )
        return hits
