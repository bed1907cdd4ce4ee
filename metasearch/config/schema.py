"""Configuration schema using Pydantic."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

DEFAULT_BASE_URLS: dict[str, str] = {
    "serper": "https://google.serper.dev/search",
    "serpapi": "https://serpapi.com/search",
    "brave": "https://api.search.brave.com/res/v1/web/search",
    "tavily": "https://api.tavily.com/search",
    "duckduckgo": "https://api.duckduckgo.com/",
}


class Base(BaseModel):
    """Base model accepting both camelCase and snake_case keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SearchProviderConfig(Base):
    """Credentials and endpoint for a keyed search backend."""

    api_key: str = ""
    base_url: str = ""


class SearxngConfig(Base):
    """Self-hosted SearXNG instance. Enabled when base_url is set."""

    base_url: str = ""
    category: str = "general"


class SearchProvidersConfig(Base):
    serper: SearchProviderConfig = Field(default_factory=SearchProviderConfig)
    serpapi: SearchProviderConfig = Field(default_factory=SearchProviderConfig)
    brave: SearchProviderConfig = Field(default_factory=SearchProviderConfig)
    tavily: SearchProviderConfig = Field(default_factory=SearchProviderConfig)
    searxng: SearxngConfig = Field(default_factory=SearxngConfig)
    duckduckgo: SearchProviderConfig = Field(default_factory=SearchProviderConfig)


class RateLimitConfig(Base):
    """Fixed-window request budget applied to each provider separately."""

    max_requests: int = Field(default=10, ge=1)
    window_ms: int = Field(default=60_000, ge=1)


class RankingConfig(Base):
    """Weights of the confidence score.

    confidence = agreement_weight * agreement_ratio
               + position_weight * average_normalized_position
               + base_score
    """

    agreement_weight: float = Field(default=50.0, ge=0)
    position_weight: float = Field(default=30.0, ge=0)
    base_score: float = Field(default=20.0, ge=0)


class WebSearchConfig(Base):
    """Web search configuration."""

    providers: SearchProvidersConfig = Field(default_factory=SearchProvidersConfig)
    priority: list[str] = Field(
        default_factory=lambda: ["serper", "serpapi", "brave", "tavily", "searxng"]
    )
    default_provider: str = "duckduckgo"
    max_results: int = Field(default=10, ge=1)
    max_results_cap: int = Field(default=100, ge=1)
    timeout: float = Field(default=10.0, gt=0)
    rate_limit: RateLimitConfig = Field(default_factory=RateLimitConfig)
    ranking: RankingConfig = Field(default_factory=RankingConfig)


class Config(Base):
    """Root configuration."""

    search: WebSearchConfig = Field(default_factory=WebSearchConfig)
