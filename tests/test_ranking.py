import pytest

from metasearch.config.schema import RankingConfig
from metasearch.models import MergedResult, SearchHit
from metasearch.ranking import confidence_score, group_by_canonical_url, merge_results


def _hits(*urls: str, snippet: str = "") -> list[SearchHit]:
    return [SearchHit(title=url, url=url, snippet=snippet, position=i + 1) for i, url in enumerate(urls)]


def test_dedup_merges_tracking_variants() -> None:
    merged = merge_results(
        [
            ("a", [SearchHit(title="X", url="https://x.com/?ref=1", snippet="")]),
            ("b", [SearchHit(title="X", url="https://x.com", snippet="")]),
        ],
        max_results=10,
        providers_succeeded=2,
    )

    assert len(merged) == 1
    assert merged[0].agreement_count == 2
    assert merged[0].providers == ["a", "b"]
    assert merged[0].provider_positions == {"a": 1, "b": 1}
    assert isinstance(merged[0], SearchHit)
    assert isinstance(merged[0], MergedResult)


def test_provider_listing_url_twice_counts_once() -> None:
    merged = group_by_canonical_url(
        [("a", _hits("https://ex.com/1", "https://ex.com/2", "https://www.ex.com/1/"))]
    )

    result = merged["https://ex.com/1"]
    assert result.agreement_count == 1
    assert result.provider_positions == {"a": 3}
    assert result.position == 3
    assert len(merged) == 2


def test_keeps_longest_snippet_first_seen_on_tie() -> None:
    merged = group_by_canonical_url(
        [
            ("a", [SearchHit(title="A", url="https://ex.com", snippet="short")]),
            ("b", [SearchHit(title="B", url="https://ex.com/", snippet="a longer snippet")]),
            ("c", [SearchHit(title="C", url="https://www.ex.com", snippet="same len snippet")]),
        ]
    )

    result = merged["https://ex.com/"]
    assert result.snippet == "a longer snippet"
    assert result.title == "A"
    assert result.agreement_count == 3
    assert len(result.provider_positions) == result.agreement_count


def test_missing_positions_use_list_order() -> None:
    merged = group_by_canonical_url(
        [("ddg", [SearchHit(title="1", url="https://one.com"), SearchHit(title="2", url="https://two.com")])]
    )
    assert merged["https://two.com/"].provider_positions == {"ddg": 2}


def test_confidence_score_formula() -> None:
    result = MergedResult(
        title="t",
        url="https://ex.com",
        providers=["a", "b"],
        provider_positions={"a": 1, "b": 3},
    )

    # agreement 2/4*50 = 25; positions (1 + 0.8) / 2 * 30 = 27; base 20
    assert confidence_score(result, providers_succeeded=4, max_results=10) == 72


def test_confidence_score_clamps_position_and_total() -> None:
    far = MergedResult(title="t", url="u", providers=["a"], provider_positions={"a": 50})
    assert confidence_score(far, providers_succeeded=1, max_results=5) == 70

    top = MergedResult(title="t", url="u", providers=["a"], provider_positions={"a": 1})
    heavy = RankingConfig(agreement_weight=80, position_weight=30, base_score=20)
    assert confidence_score(top, providers_succeeded=1, max_results=5, weights=heavy) == 100


def test_agreement_is_monotonic() -> None:
    def result(providers: list[str]) -> MergedResult:
        return MergedResult(
            title="t",
            url="u",
            providers=providers,
            provider_positions={p: 2 for p in providers},
        )

    one = confidence_score(result(["a"]), providers_succeeded=3, max_results=10)
    three = confidence_score(result(["a", "b", "c"]), providers_succeeded=3, max_results=10)
    assert three >= one
    assert three > one


def test_more_agreement_ranks_higher() -> None:
    merged = merge_results(
        [
            ("a", _hits("https://only-a.com", "https://shared.com")),
            ("b", _hits("https://only-b.com", "https://shared.com")),
            ("c", _hits("https://shared.com")),
        ],
        max_results=10,
        providers_succeeded=3,
    )

    assert merged[0].url == "https://shared.com"
    assert merged[0].agreement_count == 3
    assert merged[0].confidence_score > merged[1].confidence_score


def test_ties_break_by_best_position_then_first_seen() -> None:
    merged = merge_results(
        [
            ("a", _hits("https://a1.com", "https://a2.com")),
            ("b", _hits("https://b1.com", "https://b2.com")),
        ],
        max_results=10,
        providers_succeeded=2,
    )

    assert [r.url for r in merged] == ["https://a1.com", "https://b1.com", "https://a2.com", "https://b2.com"]


def test_truncates_to_max_results() -> None:
    provider_results = [(name, _hits(*(f"https://{name}.com/{i}" for i in range(10)))) for name in "ab"]
    merged = merge_results(provider_results, max_results=5, providers_succeeded=2)
    assert len(merged) == 5


def test_rejects_non_positive_max_results() -> None:
    with pytest.raises(ValueError):
        merge_results([], max_results=0, providers_succeeded=1)
