"""Brave Search API adapter."""

import httpx

from metasearch.models import SearchHit
from metasearch.providers.base import SearchProvider, require_list


class BraveProvider(SearchProvider):
    """Search with Brave API and normalize results."""

    name = "brave"

    async def _fetch(self, *, query: str, count: int, category: str | None) -> list[SearchHit]:
        async with httpx.AsyncClient() as client:
            response = await client.get(
                self.base_url,
                params={"q": query, "count": count},
                headers={
                    "Accept": "application/json",
                    "X-Subscription-Token": self.api_key,
                },
                timeout=self.timeout,
            )
            response.raise_for_status()

        results = require_list(response.json(), "web", "results")
        return [
            SearchHit(
                title=item.get("title", ""),
                url=item.get("url", ""),
                snippet=item.get("description", ""),
            )
            for item in results[:count]
        ]
