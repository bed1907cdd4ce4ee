"""Provider construction from configuration."""

from __future__ import annotations

from dataclasses import dataclass

from metasearch.config.schema import DEFAULT_BASE_URLS, WebSearchConfig
from metasearch.errors import ConfigurationError
from metasearch.providers.base import SearchProvider
from metasearch.providers.brave import BraveProvider
from metasearch.providers.duckduckgo import DuckDuckGoProvider
from metasearch.providers.searxng import SearxngProvider
from metasearch.providers.serpapi import SerpApiProvider
from metasearch.providers.serper import SerperProvider
from metasearch.providers.tavily import TavilyProvider

KEYED_PROVIDERS: dict[str, type[SearchProvider]] = {
    "serper": SerperProvider,
    "serpapi": SerpApiProvider,
    "brave": BraveProvider,
    "tavily": TavilyProvider,
}
KNOWN_PROVIDERS = (*KEYED_PROVIDERS, "searxng", "duckduckgo")


@dataclass(frozen=True, slots=True)
class ProviderSet:
    """Providers usable by the orchestrators: configured ones plus the default."""

    configured: tuple[SearchProvider, ...]
    default: SearchProvider

    @property
    def has_configured(self) -> bool:
        return bool(self.configured)

    def all(self) -> list[SearchProvider]:
        """Configured providers in priority order, then the default, without repeats."""
        seen: set[str] = set()
        providers: list[SearchProvider] = []
        for provider in (*self.configured, self.default):
            if provider.name in seen:
                continue
            seen.add(provider.name)
            providers.append(provider)
        return providers

    def names(self) -> list[str]:
        return [provider.name for provider in self.all()]

    def get(self, name: str) -> SearchProvider:
        key = (name or "").strip().lower()
        for provider in self.all():
            if provider.name == key:
                return provider
        if key in KNOWN_PROVIDERS:
            raise ConfigurationError(f"{key} search provider is not configured")
        raise ConfigurationError(f"unknown search provider: {name}")


def build_provider(name: str, config: WebSearchConfig) -> SearchProvider | None:
    """Build one provider, or return None when it lacks credentials or an endpoint."""
    providers_cfg = config.providers
    provider: SearchProvider
    if name in KEYED_PROVIDERS:
        provider_cfg = getattr(providers_cfg, name)
        provider = KEYED_PROVIDERS[name](
            base_url=provider_cfg.base_url or DEFAULT_BASE_URLS[name],
            api_key=provider_cfg.api_key,
            timeout=config.timeout,
        )
    elif name == "searxng":
        provider = SearxngProvider(
            base_url=providers_cfg.searxng.base_url,
            category=providers_cfg.searxng.category,
            timeout=config.timeout,
        )
    elif name == "duckduckgo":
        provider = DuckDuckGoProvider(
            base_url=providers_cfg.duckduckgo.base_url or DEFAULT_BASE_URLS["duckduckgo"],
            timeout=config.timeout,
        )
    else:
        raise ConfigurationError(f"unknown search provider: {name}")
    return provider if provider.is_configured else None


def build_provider_set(config: WebSearchConfig | None = None) -> ProviderSet:
    """Build the provider set once from configuration."""
    config = config or WebSearchConfig()

    default_name = (config.default_provider or "duckduckgo").strip().lower()
    default = build_provider(default_name, config)
    if default is None or default.requires_api_key:
        raise ConfigurationError(
            f"default search provider {default_name!r} must be usable without an api key"
        )

    configured: list[SearchProvider] = []
    for raw_name in config.priority:
        name = raw_name.strip().lower()
        if name == default_name or any(p.name == name for p in configured):
            continue
        provider = build_provider(name, config)
        if provider is not None:
            configured.append(provider)
    return ProviderSet(configured=tuple(configured), default=default)


@dataclass(frozen=True, slots=True)
class ProviderInfo:
    name: str
    signup_url: str
    free_quota: str
    description: str


def recommended_providers() -> list[ProviderInfo]:
    """Signup information for each supported backend."""
    return [
        ProviderInfo("Serper", "https://serper.dev", "2,500 queries/month", "Google search results API"),
        ProviderInfo("SerpAPI", "https://serpapi.com", "100 searches/month", "Multiple search engines API"),
        ProviderInfo(
            "Brave Search", "https://brave.com/search-api", "2,000 queries/month", "Privacy-focused search API"
        ),
        ProviderInfo("Tavily", "https://tavily.com", "1,000 credits/month", "Search API built for LLM agents"),
        ProviderInfo(
            "SearXNG",
            "No signup required (self-hosted)",
            "Unlimited (self-hosted)",
            "Open-source metasearch engine you run yourself",
        ),
        ProviderInfo(
            "DuckDuckGo", "No signup required", "Unlimited (rate limited)", "Privacy-focused, no API key needed"
        ),
    ]
