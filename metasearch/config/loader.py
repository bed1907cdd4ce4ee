"""Configuration loading utilities."""

import json
from pathlib import Path

from loguru import logger
from pydantic import ValidationError as PydanticValidationError

from metasearch.config.schema import DEFAULT_BASE_URLS, Config


def get_config_path() -> Path:
    """Get the default configuration file path."""
    return Path.home() / ".metasearch" / "config.json"


def load_config(config_path: Path | None = None) -> Config:
    """
    Load configuration from file or create default.

    Args:
        config_path: Optional path to config file. Uses default if not provided.

    Returns:
        Loaded configuration object.
    """
    path = config_path or get_config_path()

    if path.exists():
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
            data = _migrate_config(data)
            return Config.model_validate(data)
        except (json.JSONDecodeError, PydanticValidationError, ValueError) as e:
            logger.warning("Failed to load config from {}: {}", path, e)
            logger.warning("Using default configuration.")

    return Config()


def save_config(config: Config, config_path: Path | None = None) -> None:
    """
    Save configuration to file.

    Args:
        config: Configuration to save.
        config_path: Optional path to save to. Uses default if not provided.
    """
    path = config_path or get_config_path()
    path.parent.mkdir(parents=True, exist_ok=True)

    data = config.model_dump(by_alias=True)

    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)


_LEGACY_KEYS = {
    "serperApiKey": ("serper", "apiKey"),
    "serpApiKey": ("serpapi", "apiKey"),
    "braveApiKey": ("brave", "apiKey"),
    "tavilyApiKey": ("tavily", "apiKey"),
    "searxngUrl": ("searxng", "baseUrl"),
}


def _migrate_config(data: dict) -> dict:
    """Migrate old config formats to current."""
    search_cfg = data.setdefault("search", {})
    providers_cfg = search_cfg.setdefault("providers", {})

    # Move legacy search.<name>ApiKey -> search.providers.<name>.apiKey
    for legacy_key, (name, field) in _LEGACY_KEYS.items():
        value = search_cfg.pop(legacy_key, None)
        if not value:
            continue
        provider_cfg = providers_cfg.setdefault(name, {})
        if not provider_cfg.get(field):
            provider_cfg[field] = value

    # Move legacy rateLimit -> search.rateLimit
    legacy_rate_limit = data.pop("rateLimit", None)
    if legacy_rate_limit and "rateLimit" not in search_cfg:
        search_cfg["rateLimit"] = legacy_rate_limit

    # Fill default provider base URLs when missing/empty
    for name, base_url in DEFAULT_BASE_URLS.items():
        provider_cfg = providers_cfg.setdefault(name, {})
        if not provider_cfg.get("baseUrl"):
            provider_cfg["baseUrl"] = base_url

    return data
