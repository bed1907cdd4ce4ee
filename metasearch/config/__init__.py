"""Configuration module for metasearch."""

from metasearch.config.loader import get_config_path, load_config, save_config
from metasearch.config.schema import Config, WebSearchConfig

__all__ = ["Config", "WebSearchConfig", "load_config", "save_config", "get_config_path"]
