"""Configuration management."""

from path_search.config.loader import get_config, load_config, reset_config
from path_search.config.schema import PathSearchConfig

__all__ = ["PathSearchConfig", "get_config", "load_config", "reset_config"]
