"""Exceptions raised by the search engine."""

from __future__ import annotations


class WebSearchError(Exception):
    """Base class for provider selection and execution failures."""


class ConfigurationError(WebSearchError):
    """Raised when no usable provider can be built from configuration."""


class ValidationError(WebSearchError):
    """Raised for bad caller input, before any network call is made."""


class ProviderError(WebSearchError):
    """One backend failed: transport error, non-2xx status or malformed body."""

    reason = "error"

    def __init__(self, provider: str, cause: BaseException | str):
        self.provider = provider
        self.cause = cause
        super().__init__(f"{provider} search failed: {cause}")


class RateLimitedError(ProviderError):
    """Synthetic failure for a provider skipped by the rate limiter."""

    reason = "rate_limited"

    def __init__(self, provider: str):
        super().__init__(provider, "rate limit exceeded")


class AllProvidersFailedError(WebSearchError):
    """No provider, including the default one, returned an answer."""

    def __init__(self, failures: dict[str, str]):
        self.failures = dict(failures)
        detail = ", ".join(f"{name}: {reason}" for name, reason in self.failures.items())
        super().__init__(f"no search provider could be reached ({detail or 'none queried'})")


class ProviderTimeoutError(ProviderError):
    """A provider did not answer within its per-call timeout."""

    reason = "timeout"

    def __init__(self, provider: str, timeout: float):
        super().__init__(provider, f"timed out after {timeout}s")
