"""Pytest fixtures for path-search tests."""

import logging
import tempfile
from collections.abc import Generator
from pathlib import Path

import pytest

from path_search.config import reset_config
from path_search.config.defaults import ENV_CONFIG_PATH, ENV_DB_PATH, ENV_LOG_LEVEL, ENV_PATHS_FILE
from path_search.config.schema import PathSearchConfig

PLUS_GIF = "lucene/queryparser/docs/xml/img/plus.gif"
JOIN_GIF = "lucene/queryparser/docs/xml/img/join.gif"
MINUSBOTTOM_GIF = "lucene/queryparser/docs/xml/img/minusbottom.gif"


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sample_paths() -> list[str]:
    """The three image paths indexed by default."""
    return [PLUS_GIF, JOIN_GIF, MINUSBOTTOM_GIF]


@pytest.fixture
def paths_file(temp_dir: Path) -> Path:
    """Create a paths file with a comment and blank lines."""
    path = temp_dir / "paths.txt"
    path.write_text(
        "# project files\n"
        "src/app/main.py\n"
        "\n"
        "src/app/config.py\n"
        "docs/README.md\n"
    )
    return path


@pytest.fixture
def default_config() -> PathSearchConfig:
    """Get default configuration."""
    return PathSearchConfig()


@pytest.fixture(autouse=True)
def isolated_environment(
    temp_dir: Path, monkeypatch: pytest.MonkeyPatch
) -> Generator[None, None, None]:
    """Keep tests away from the user's config and environment."""
    monkeypatch.setenv(ENV_CONFIG_PATH, str(temp_dir / "missing-config.toml"))
    for name in (ENV_LOG_LEVEL, ENV_PATHS_FILE, ENV_DB_PATH):
        monkeypatch.delenv(name, raising=False)
    reset_config()
    yield
    reset_config()
    package_logger = logging.getLogger("path_search")
    package_logger.handlers.clear()
    package_logger.propagate = True


@pytest.fixture
def config_file(temp_dir: Path) -> Path:
    """Create a test config file."""
    config_path = temp_dir / "config.toml"
    config_path.write_text("""
[analysis]
min_gram = 3
max_gram = 8

[search]
top_k = 5

[index]
paths = ["a/b/c.txt", "a/d.txt"]

[logging]
level = "DEBUG"
""")
    return config_path

