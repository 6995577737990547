"""Default configuration values and paths."""

import os
from pathlib import Path
from typing import Final

# Default directories
DEFAULT_CONFIG_DIR: Final[Path] = Path.home() / ".config" / "path-search"

# Default file paths
DEFAULT_CONFIG_FILE: Final[Path] = DEFAULT_CONFIG_DIR / "config.toml"

# Environment variable names
ENV_CONFIG_PATH: Final[str] = "PATHSEARCH_CONFIG"
ENV_LOG_LEVEL: Final[str] = "PATHSEARCH_LOG_LEVEL"
ENV_PATHS_FILE: Final[str] = "PATHSEARCH_PATHS_FILE"
ENV_DB_PATH: Final[str] = "PATHSEARCH_DB_PATH"

# Default config content (TOML)
DEFAULT_CONFIG_TOML: Final[str] = """\
# path-search configuration

[analysis]
min_gram = 2
max_gram = 10
delimiter = " "

[search]
top_k = 10
max_edits = 2
max_expansions = 50

[index]
paths = [
    "lucene/queryparser/docs/xml/img/plus.gif",
    "lucene/queryparser/docs/xml/img/join.gif",
    "lucene/queryparser/docs/xml/img/minusbottom.gif",
]
# paths_file = "paths.txt"  # one path per line

[logging]
level = "INFO"
json_format = false
"""


def ensure_directories() -> None:
    """Ensure all default directories exist."""
    DEFAULT_CONFIG_DIR.mkdir(parents=True, exist_ok=True)


def get_config_path() -> Path:
    """Get the configuration file path."""
    env_path = os.environ.get(ENV_CONFIG_PATH)
    if env_path:
        return Path(env_path)
    return DEFAULT_CONFIG_FILE
