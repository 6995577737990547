"""Configuration loading from TOML files and environment variables."""

import os
import tomllib
from pathlib import Path

from pydantic import ValidationError

from path_search.config.defaults import (
    DEFAULT_CONFIG_TOML,
    ENV_DB_PATH,
    ENV_LOG_LEVEL,
    ENV_PATHS_FILE,
    ensure_directories,
    get_config_path,
)
from path_search.config.schema import PathSearchConfig
from path_search.exceptions import ConfigError, ConfigValidationError

# Global config instance (singleton)
_config: PathSearchConfig | None = None


def load_config(
    config_path: Path | None = None,
    *,
    create_if_missing: bool = False,
) -> PathSearchConfig:
    """Load configuration from TOML file and environment variables.

    Args:
        config_path: Path to config file. If None, uses default.
        create_if_missing: Write the default config if the file doesn't exist.

    Returns:
        Loaded and validated configuration.

    Raises:
        ConfigError: If configuration cannot be loaded.
        ConfigValidationError: If configuration is invalid.
    """
    path = config_path or get_config_path()

    if not path.exists():
        if not create_if_missing:
            return _apply_env_overrides(PathSearchConfig())
        if config_path is None:
            ensure_directories()
        else:
            path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(DEFAULT_CONFIG_TOML)

    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigError(f"Failed to load config from {path}: {e}") from e

    try:
        config = PathSearchConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigValidationError(f"Invalid configuration: {e}") from e

    return _apply_env_overrides(config)


def _apply_env_overrides(config: PathSearchConfig) -> PathSearchConfig:
    """Apply environment variable overrides to configuration."""
    log_level = os.environ.get(ENV_LOG_LEVEL)
    if log_level:
        config.logging.level = log_level.upper()

    paths_file = os.environ.get(ENV_PATHS_FILE)
    if paths_file:
        config.index.paths_file = Path(paths_file)

    db_path = os.environ.get(ENV_DB_PATH)
    if db_path:
        config.search.db_path = Path(db_path)

    return config


def get_config() -> PathSearchConfig:
    """Get the current configuration (singleton).

    Loads config on first access, caches for subsequent calls.
    """
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """Reset the configuration singleton (mainly for testing)."""
    global _config
    _config = None
