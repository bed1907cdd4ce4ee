"""Cross-provider deduplication and agreement-weighted ranking.

Results returned by several providers are merged under their canonical URL
(see :func:`metasearch.canonical.canonicalize`) and scored by how many of the
providers that answered agree on them and how high each provider ranked them.

Example:
    >>> merged = merge_results(
    ...     [("serper", serper_hits), ("brave", brave_hits)],
    ...     max_results=10,
    ...     providers_succeeded=2,
    ... )
    >>> merged[0].agreement_count
    2
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from metasearch.canonical import canonicalize
from metasearch.config.schema import RankingConfig
from metasearch.models import MergedResult, SearchHit

ProviderHits = tuple[str, Sequence[SearchHit]]


def group_by_canonical_url(provider_results: Iterable[ProviderHits]) -> dict[str, MergedResult]:
    """Deduplicate hits by canonical URL, keeping first-seen order.

    A provider listing the same page twice counts once towards agreement and
    keeps the position of its last listing. The longest snippet wins; ties keep the earlier one.
    """
    merged: dict[str, MergedResult] = {}
    for provider, hits in provider_results:
        for index, hit in enumerate(hits):
            position = hit.position if hit.position is not None else index + 1
            key = canonicalize(hit.url)
            existing = merged.get(key)
            if existing is None:
                merged[key] = MergedResult(
                    title=hit.title,
                    url=hit.url,
                    snippet=hit.snippet,
                    position=position,
                    providers=[provider],
                    provider_positions={provider: position},
                )
                continue

            if provider not in existing.providers:
                existing.providers.append(provider)
            existing.provider_positions[provider] = position
            existing.position = existing.best_position
            if len(hit.snippet or "") > len(existing.snippet or ""):
                existing.snippet = hit.snippet
    return merged


def confidence_score(
    result: MergedResult,
    *,
    providers_succeeded: int,
    max_results: int,
    weights: RankingConfig | None = None,
) -> int:
    """Score a merged result in [0, 100]."""
    weights = weights or RankingConfig()
    total = max(providers_succeeded, 1)
    agreement = (result.agreement_count / total) * weights.agreement_weight

    positions = list(result.provider_positions.values())
    normalized = sum(1 - (p - 1) / max_results for p in positions) / len(positions)
    position_score = min(max(normalized * weights.position_weight, 0.0), weights.position_weight)

    return round(min(max(agreement + position_score + weights.base_score, 0.0), 100.0))


def merge_results(
    provider_results: Iterable[ProviderHits],
    *,
    max_results: int,
    providers_succeeded: int,
    weights: RankingConfig | None = None,
) -> list[MergedResult]:
    """Merge, score, rank and truncate provider results."""
    if max_results < 1:
        raise ValueError("max_results must be >= 1")

    merged = group_by_canonical_url(provider_results)
    return rank(
        list(merged.values()),
        max_results=max_results,
        providers_succeeded=providers_succeeded,
        weights=weights,
    )


def rank(
    results: list[MergedResult],
    *,
    max_results: int,
    providers_succeeded: int,
    weights: RankingConfig | None = None,
) -> list[MergedResult]:
    """Score results in place and return the top ``max_results``.

    Ties on score go to the best single-provider position, then to the
    order in which results were first seen.
    """
    for result in results:
        result.confidence_score = confidence_score(
            result,
            providers_succeeded=providers_succeeded,
            max_results=max_results,
            weights=weights,
        )

    ordered = sorted(
        enumerate(results),
        key=lambda item: (-item[1].confidence_score, item[1].best_position, item[0]),
    )
    return [result for _, result in ordered[:max_results]]
