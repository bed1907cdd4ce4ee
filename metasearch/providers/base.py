"""Provider client contract shared by every search backend."""

from __future__ import annotations

import time
from abc import ABC, abstractmethod
from datetime import datetime, timezone

import httpx
from loguru import logger

from metasearch.errors import ProviderError
from metasearch.models import ProviderResponse, ResponseMetadata, SearchHit


def now_iso() -> str:
    """Current UTC time in ISO format with millisecond precision."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds")


class SearchProvider(ABC):
    """One web search backend.

    Subclasses only build the request and map the response body; timing,
    position numbering and error wrapping happen here.
    """

    name: str = ""
    requires_api_key: bool = True

    def __init__(self, *, base_url: str, api_key: str = "", timeout: float = 10.0):
        self.base_url = base_url
        self.api_key = api_key
        self.timeout = timeout

    @property
    def is_configured(self) -> bool:
        return bool(self.base_url) and (bool(self.api_key) or not self.requires_api_key)

    async def search(
        self,
        query: str,
        max_results: int,
        *,
        category: str | None = None,
        used_fallback: bool = False,
    ) -> ProviderResponse:
        """Run one query and return the provider's results in its own order.

        Raises:
            ProviderError: on transport failure, non-2xx status or a malformed body.
        """
        started = time.perf_counter()
        try:
            hits = await self._fetch(query=query, count=max_results, category=category)
        except ProviderError:
            raise
        except httpx.HTTPStatusError as e:
            # The request URL may carry the api key in its query string.
            raise ProviderError(self.name, f"HTTP {e.response.status_code}") from e
        except httpx.RequestError as e:
            raise ProviderError(self.name, type(e).__name__) from e
        except Exception as e:
            raise ProviderError(self.name, e) from e

        elapsed_ms = int((time.perf_counter() - started) * 1000)
        results = tuple(
            SearchHit(title=hit.title, url=hit.url, snippet=hit.snippet, position=index + 1)
            for index, hit in enumerate(hits[:max_results])
        )
        logger.debug("{} returned {} result(s) in {}ms", self.name, len(results), elapsed_ms)
        return ProviderResponse(
            provider=self.name,
            results=results,
            metadata=ResponseMetadata(
                query=query,
                timestamp=now_iso(),
                response_time_ms=elapsed_ms,
                used_fallback=used_fallback,
            ),
        )

    @abstractmethod
    async def _fetch(self, *, query: str, count: int, category: str | None) -> list[SearchHit]:
        """Call the backend and normalize its results."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, base_url={self.base_url!r})"


def require_list(payload: object, *path: str) -> list:
    """Walk ``path`` through nested JSON objects and return the list found there.

    Missing keys yield an empty list; anything that is not an object or a
    list where one is expected is a malformed body.
    """
    node = payload
    for key in path:
        if not isinstance(node, dict):
            raise ValueError(f"malformed response: expected object at {key!r}")
        node = node.get(key)
        if node is None:
            return []
    if not isinstance(node, list):
        raise ValueError(f"malformed response: expected list at {'.'.join(path)!r}")
    return node
