"""Shared web search models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(slots=True)
class SearchHit:
    """Normalized search result item."""

    title: str
    url: str
    snippet: str = ""
    position: int | None = None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "title": self.title,
            "url": self.url,
            "snippet": self.snippet,
        }
        if self.position is not None:
            payload["position"] = self.position
        return payload


@dataclass(slots=True, frozen=True)
class ResponseMetadata:
    query: str
    timestamp: str
    response_time_ms: int
    used_fallback: bool = False


@dataclass(slots=True, frozen=True)
class ProviderResponse:
    """One provider's answer to one query."""

    provider: str
    results: tuple[SearchHit, ...]
    metadata: ResponseMetadata

    def to_dict(self) -> dict[str, Any]:
        return {
            "provider": self.provider,
            "results": [hit.to_dict() for hit in self.results],
            "metadata": {
                "query": self.metadata.query,
                "timestamp": self.metadata.timestamp,
                "responseTimeMs": self.metadata.response_time_ms,
                "usedFallback": self.metadata.used_fallback,
            },
        }


@dataclass(slots=True)
class ProviderOutcome:
    """Settled state of one provider call during a fan-out."""

    provider: str
    response: ProviderResponse | None = None
    error: str | None = None
    reason: str | None = None

    @property
    def ok(self) -> bool:
        return self.response is not None


@dataclass(slots=True)
class FanOutResult:
    """All provider outcomes of a fan-out, in dispatch order."""

    query: str
    outcomes: list[ProviderOutcome] = field(default_factory=list)

    @property
    def queried(self) -> list[str]:
        return [o.provider for o in self.outcomes]

    @property
    def succeeded(self) -> list[str]:
        return [o.provider for o in self.outcomes if o.ok]

    @property
    def failed(self) -> list[str]:
        return [o.provider for o in self.outcomes if not o.ok]

    @property
    def failures(self) -> dict[str, str]:
        return {o.provider: o.reason or "error" for o in self.outcomes if not o.ok}

    def provider_results(self) -> list[tuple[str, tuple[SearchHit, ...]]]:
        return [(o.provider, o.response.results) for o in self.outcomes if o.response is not None]


@dataclass(slots=True)
class MergedResult(SearchHit):
    """A result deduplicated across providers by canonical URL."""

    providers: list[str] = field(default_factory=list)
    provider_positions: dict[str, int] = field(default_factory=dict)
    confidence_score: int = 0

    @property
    def agreement_count(self) -> int:
        return len(self.providers)

    @property
    def best_position(self) -> int:
        return min(self.provider_positions.values())

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "url": self.url,
            "snippet": self.snippet,
            "position": self.position,
            "providers": list(self.providers),
            "agreementCount": self.agreement_count,
            "confidenceScore": self.confidence_score,
            "providerPositions": dict(self.provider_positions),
        }


@dataclass(slots=True)
class AggregateMetadata:
    query: str
    timestamp: str
    total_response_time_ms: int
    providers_queried: list[str] = field(default_factory=list)
    providers_succeeded: list[str] = field(default_factory=list)
    providers_failed: list[str] = field(default_factory=list)
    total_raw_results: int = 0
    deduplicated_count: int = 0


@dataclass(slots=True)
class AggregateResponse:
    """Merged, ranked view over every provider that answered."""

    results: list[MergedResult]
    metadata: AggregateMetadata

    def to_dict(self) -> dict[str, Any]:
        meta = self.metadata
        return {
            "results": [r.to_dict() for r in self.results],
            "metadata": {
                "query": meta.query,
                "timestamp": meta.timestamp,
                "totalResponseTimeMs": meta.total_response_time_ms,
                "providersQueried": list(meta.providers_queried),
                "providersSucceeded": list(meta.providers_succeeded),
                "providersFailed": list(meta.providers_failed),
                "totalRawResults": meta.total_raw_results,
                "deduplicatedCount": meta.deduplicated_count,
            },
        }
