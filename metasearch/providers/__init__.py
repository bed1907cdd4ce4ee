"""Search backends and provider set construction."""

from metasearch.providers.base import SearchProvider
from metasearch.providers.brave import BraveProvider
from metasearch.providers.duckduckgo import DuckDuckGoProvider
from metasearch.providers.registry import (
    KNOWN_PROVIDERS,
    ProviderInfo,
    ProviderSet,
    build_provider,
    build_provider_set,
    recommended_providers,
)
from metasearch.providers.searxng import SearxngProvider
from metasearch.providers.serpapi import SerpApiProvider
from metasearch.providers.serper import SerperProvider
from metasearch.providers.tavily import TavilyProvider

__all__ = [
    "KNOWN_PROVIDERS",
    "BraveProvider",
    "DuckDuckGoProvider",
    "ProviderInfo",
    "ProviderSet",
    "SearchProvider",
    "SearxngProvider",
    "SerpApiProvider",
    "SerperProvider",
    "TavilyProvider",
    "build_provider",
    "build_provider_set",
    "recommended_providers",
]
