"""DuckDuckGo Instant Answer adapter. Needs no API key; used as the default provider."""

from __future__ import annotations

from typing import Any

import httpx

from metasearch.models import SearchHit
from metasearch.providers.base import SearchProvider, require_list


class DuckDuckGoProvider(SearchProvider):
    """Abstract plus related topics from the DuckDuckGo Instant Answer API."""

    name = "duckduckgo"
    requires_api_key = False

    async def _fetch(self, *, query: str, count: int, category: str | None) -> list[SearchHit]:
        async with httpx.AsyncClient() as client:
            response = await client.get(
                self.base_url,
                params={
                    "q": query,
                    "format": "json",
                    "no_html": "1",
                    "skip_disambig": "1",
                },
                timeout=self.timeout,
            )
            response.raise_for_status()

        data = response.json()
        if not isinstance(data, dict):
            raise ValueError("malformed response: expected a JSON object")

        hits: list[SearchHit] = []
        if data.get("AbstractText") and data.get("AbstractURL"):
            hits.append(
                SearchHit(
                    title=data.get("Heading") or query,
                    url=data["AbstractURL"],
                    snippet=data["AbstractText"],
                )
            )

        for topic in _flatten_topics(require_list(data, "RelatedTopics")):
            if len(hits) >= count:
                break
            text = topic.get("Text") or ""
            url = topic.get("FirstURL") or ""
            if not (text and url):
                continue
            hits.append(SearchHit(title=text.split(" - ")[0] or text, url=url, snippet=text))
        return hits[:count]


def _flatten_topics(topics: list[Any]) -> list[dict[str, Any]]:
    # Disambiguation groups nest their entries under "Topics".
    flat: list[dict[str, Any]] = []
    for topic in topics:
        if not isinstance(topic, dict):
            continue
        if isinstance(topic.get("Topics"), list):
            flat.extend(t for t in topic["Topics"] if isinstance(t, dict))
        else:
            flat.append(topic)
    return flat
