"""Single-provider and fan-out search orchestration."""

from __future__ import annotations

import asyncio
import time
from typing import Any

from loguru import logger

from metasearch.config.schema import WebSearchConfig
from metasearch.errors import (
    AllProvidersFailedError,
    ProviderError,
    ProviderTimeoutError,
    RateLimitedError,
    ValidationError,
)
from metasearch.models import (
    AggregateMetadata,
    AggregateResponse,
    FanOutResult,
    ProviderOutcome,
    ProviderResponse,
)
from metasearch.providers.base import SearchProvider, now_iso
from metasearch.providers.registry import ProviderSet, build_provider_set
from metasearch.ranking import group_by_canonical_url, rank
from metasearch.rate_limit import RateLimiter


class WebSearchService:
    """Query one provider with fallback, or all providers at once and merge."""

    def __init__(
        self,
        provider_set: ProviderSet,
        config: WebSearchConfig | None = None,
        rate_limiter: RateLimiter | None = None,
    ):
        self.providers = provider_set
        self.config = config or WebSearchConfig()
        self.rate_limiter = rate_limiter or RateLimiter(
            max_requests=self.config.rate_limit.max_requests,
            window_ms=self.config.rate_limit.window_ms,
        )

    @classmethod
    def from_config(cls, config: WebSearchConfig | None = None) -> "WebSearchService":
        config = config or WebSearchConfig()
        return cls(build_provider_set(config), config)

    async def search(
        self,
        query: str,
        max_results: int | None = None,
        provider: str | None = None,
        category: str | None = None,
    ) -> ProviderResponse:
        """Answer from the first usable provider in priority order.

        An explicitly requested provider is called alone and its error is
        raised as is. Otherwise rate-limited or failing providers are skipped
        and the default provider answers last, tagged ``used_fallback``.
        """
        text = self.validate_query(query)
        count = self.resolve_max_results(max_results)

        if provider:
            selected = self.providers.get(provider)
            return await self._call(selected, text, count, category=category)

        for candidate in self.providers.configured:
            if not self.rate_limiter.try_acquire(candidate.name):
                logger.debug("Skipping {}: rate limit reached", candidate.name)
                continue
            try:
                return await self._call(candidate, text, count, category=category)
            except Exception as e:
                logger.warning("Provider {} failed: {}", candidate.name, e)

        default = self.providers.default
        logger.info("Falling back to default search provider {}", default.name)
        return await self._call(default, text, count, category=category, used_fallback=True)

    async def fan_out(
        self,
        query: str,
        max_results: int | None = None,
        category: str | None = None,
    ) -> FanOutResult:
        """Query every provider concurrently and wait for all of them to settle.

        Raises:
            AllProvidersFailedError: if not a single provider answered.
        """
        text = self.validate_query(query)
        count = self.resolve_max_results(max_results)

        outcomes = await asyncio.gather(
            *(self._settle(p, text, count, category) for p in self.providers.all())
        )
        result = FanOutResult(query=text, outcomes=list(outcomes))
        if not result.succeeded:
            raise AllProvidersFailedError(result.failures)
        return result

    async def aggregate(
        self,
        query: str,
        max_results: int | None = None,
        category: str | None = None,
    ) -> AggregateResponse:
        """Fan out, then merge and rank results by cross-provider agreement."""
        started = time.perf_counter()
        count = self.resolve_max_results(max_results)
        fanned = await self.fan_out(query, count, category=category)

        provider_results = fanned.provider_results()
        merged = group_by_canonical_url(provider_results)
        ranked = rank(
            list(merged.values()),
            max_results=count,
            providers_succeeded=len(fanned.succeeded),
            weights=self.config.ranking,
        )
        total_ms = int((time.perf_counter() - started) * 1000)

        logger.info(
            "Aggregated {} result(s) for {!r} from {}/{} provider(s) in {}ms",
            len(ranked),
            fanned.query,
            len(fanned.succeeded),
            len(fanned.queried),
            total_ms,
        )
        return AggregateResponse(
            results=ranked,
            metadata=AggregateMetadata(
                query=fanned.query,
                timestamp=now_iso(),
                total_response_time_ms=total_ms,
                providers_queried=fanned.queried,
                providers_succeeded=fanned.succeeded,
                providers_failed=fanned.failed,
                total_raw_results=sum(len(hits) for _, hits in provider_results),
                deduplicated_count=len(merged),
            ),
        )

    def validate_query(self, query: Any) -> str:
        if not isinstance(query, str) or not query.strip():
            raise ValidationError("query must be a non-empty string")
        return query.strip()

    def resolve_max_results(self, max_results: Any) -> int:
        """Apply the configured default and cap to a caller-supplied result count."""
        if max_results is None:
            max_results = self.config.max_results
        if isinstance(max_results, bool) or not isinstance(max_results, int) or max_results < 1:
            raise ValidationError("max_results must be a positive integer")
        return min(max_results, self.config.max_results_cap)

    async def _call(
        self,
        provider: SearchProvider,
        query: str,
        count: int,
        *,
        category: str | None = None,
        used_fallback: bool = False,
    ) -> ProviderResponse:
        try:
            return await asyncio.wait_for(
                provider.search(query, count, category=category, used_fallback=used_fallback),
                timeout=self.config.timeout,
            )
        except asyncio.TimeoutError as e:
            raise ProviderTimeoutError(provider.name, self.config.timeout) from e

    async def _settle(
        self,
        provider: SearchProvider,
        query: str,
        count: int,
        category: str | None,
    ) -> ProviderOutcome:
        is_default = provider.name == self.providers.default.name
        try:
            if not is_default and not self.rate_limiter.try_acquire(provider.name):
                raise RateLimitedError(provider.name)
            response = await self._call(provider, query, count, category=category)
        except ProviderError as e:
            logger.warning("Provider {} failed during fan-out: {}", provider.name, e.cause)
            return ProviderOutcome(provider=provider.name, error=str(e), reason=e.reason)
        except Exception as e:
            logger.warning("Provider {} failed during fan-out: {}", provider.name, e)
            return ProviderOutcome(provider=provider.name, error=str(e), reason="error")
        return ProviderOutcome(provider=provider.name, response=response)
