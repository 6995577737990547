"""Tests for configuration system."""

from pathlib import Path

import pytest

from path_search.config import get_config, load_config, reset_config
from path_search.config.defaults import ENV_DB_PATH, ENV_LOG_LEVEL, ENV_PATHS_FILE
from path_search.config.schema import DEFAULT_PATHS, PathSearchConfig
from path_search.exceptions import ConfigError, ConfigValidationError


class TestPathSearchConfig:
    """Tests for PathSearchConfig schema."""

    def test_default_config(self) -> None:
        """Test default configuration values."""
        config = PathSearchConfig()

        assert config.analysis.min_gram == 2
        assert config.analysis.max_gram == 10
        assert config.analysis.delimiter == " "
        assert config.analysis.stop_words is None
        assert config.search.top_k == 10
        assert config.search.max_edits == 2
        assert config.search.db_path is None
        assert config.index.paths == DEFAULT_PATHS
        assert config.index.paths_file is None
        assert config.logging.level == "INFO"

    def test_default_paths_not_shared(self) -> None:
        """Test each config gets its own paths list."""
        first = PathSearchConfig()
        first.index.paths.append("extra")
        assert "extra" not in PathSearchConfig().index.paths

    def test_config_from_dict(self) -> None:
        """Test creating config from dictionary."""
        config = PathSearchConfig.model_validate(
            {
                "analysis": {"min_gram": 3, "stop_words": ["foo"]},
                "search": {"top_k": 20, "max_edits": 1},
            }
        )
        assert config.analysis.min_gram == 3
        assert config.analysis.stop_words == ["foo"]
        assert config.search.top_k == 20
        assert config.search.max_edits == 1

    def test_inverted_gram_range_rejected(self) -> None:
        """Test max_gram below min_gram is invalid."""
        with pytest.raises(ValueError):
            PathSearchConfig.model_validate({"analysis": {"min_gram": 5, "max_gram": 3}})

    def test_max_edits_bounded(self) -> None:
        """Test edit distance above two is invalid."""
        with pytest.raises(ValueError):
            PathSearchConfig.model_validate({"search": {"max_edits": 3}})


class TestConfigLoader:
    """Tests for configuration loader."""

    def test_load_config_without_file(self, temp_dir: Path) -> None:
        """Test loading defaults when the file is missing."""
        config_path = temp_dir / "nonexistent.toml"
        config = load_config(config_path)

        assert not config_path.exists()
        assert config.index.paths == DEFAULT_PATHS

    def test_load_config_creates_default(self, temp_dir: Path) -> None:
        """Test that load_config can write the default config file."""
        config_path = temp_dir / "nested" / "config.toml"
        config = load_config(config_path, create_if_missing=True)

        assert config_path.exists()
        assert config == PathSearchConfig()

    def test_load_config_from_file(self, config_file: Path) -> None:
        """Test loading config from an existing file."""
        config = load_config(config_file)

        assert config.analysis.min_gram == 3
        assert config.analysis.max_gram == 8
        assert config.search.top_k == 5
        assert config.index.paths == ["a/b/c.txt", "a/d.txt"]
        assert config.logging.level == "DEBUG"

    def test_invalid_toml(self, temp_dir: Path) -> None:
        """Test unparsable TOML is a config error."""
        path = temp_dir / "bad.toml"
        path.write_text("[analysis\nmin_gram = ")
        with pytest.raises(ConfigError):
            load_config(path)

    def test_invalid_values(self, temp_dir: Path) -> None:
        """Test schema violations are validation errors."""
        path = temp_dir / "invalid.toml"
        path.write_text("[search]\ntop_k = 0\n")
        with pytest.raises(ConfigValidationError):
            load_config(path)

    def test_env_overrides(
        self, temp_dir: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test environment variables override file values."""
        monkeypatch.setenv(ENV_LOG_LEVEL, "warning")
        monkeypatch.setenv(ENV_PATHS_FILE, str(temp_dir / "paths.txt"))
        monkeypatch.setenv(ENV_DB_PATH, str(temp_dir / "index.duckdb"))

        config = load_config(temp_dir / "missing.toml")

        assert config.logging.level == "WARNING"
        assert config.index.paths_file == temp_dir / "paths.txt"
        assert config.search.db_path == temp_dir / "index.duckdb"

    def test_get_config_singleton(self) -> None:
        """Test get_config caches until reset."""
        first = get_config()
        assert get_config() is first
        reset_config()
        assert get_config() is not first
