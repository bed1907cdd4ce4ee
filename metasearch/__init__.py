"""
metasearch - query several web search backends at once and rank what they agree on.
"""

__version__ = "0.1.0"

from metasearch.canonical import canonicalize
from metasearch.errors import (
    AllProvidersFailedError,
    ConfigurationError,
    ProviderError,
    ProviderTimeoutError,
    RateLimitedError,
    ValidationError,
    WebSearchError,
)
from metasearch.models import (
    AggregateResponse,
    FanOutResult,
    MergedResult,
    ProviderOutcome,
    ProviderResponse,
    SearchHit,
)
from metasearch.providers import ProviderSet, build_provider_set, recommended_providers
from metasearch.ranking import merge_results
from metasearch.rate_limit import RateLimiter
from metasearch.service import WebSearchService

__all__ = [
    "AggregateResponse",
    "AllProvidersFailedError",
    "ConfigurationError",
    "FanOutResult",
    "MergedResult",
    "ProviderError",
    "ProviderOutcome",
    "ProviderResponse",
    "ProviderSet",
    "ProviderTimeoutError",
    "RateLimitedError",
    "RateLimiter",
    "SearchHit",
    "ValidationError",
    "WebSearchError",
    "WebSearchService",
    "build_provider_set",
    "canonicalize",
    "merge_results",
    "recommended_providers",
]
