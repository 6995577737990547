"""Tests for exception hierarchy."""

import pytest

from path_search.exceptions import (
    ConfigError,
    ConfigValidationError,
    EngineUnavailableError,
    IndexingError,
    PathSearchError,
    QuerySyntaxError,
    SearchError,
)


class TestPathSearchError:
    """Tests for base PathSearchError."""

    def test_default_message(self) -> None:
        """Test default error message."""
        error = PathSearchError()
        assert str(error) == "An error occurred"
        assert error.user_message == "An error occurred"
        assert error.exit_code == 1

    def test_custom_message(self) -> None:
        """Test custom error message."""
        assert str(PathSearchError("Custom error")) == "Custom error"

    def test_custom_user_message(self) -> None:
        """Test custom user message."""
        error = PathSearchError("Internal", user_message="User-friendly message")
        assert error.user_message == "User-friendly message"
        assert str(error) == "Internal"


class TestSearchErrors:
    """Tests for search-related errors."""

    @pytest.mark.parametrize(
        "error_class",
        [QuerySyntaxError, EngineUnavailableError, IndexingError],
    )
    def test_are_search_errors(self, error_class: type[SearchError]) -> None:
        """Test search failures share a base class."""
        error = error_class()
        assert isinstance(error, SearchError)
        assert isinstance(error, PathSearchError)

    def test_exit_codes_distinct(self) -> None:
        """Test each search failure has its own exit code."""
        codes = {
            SearchError.exit_code,
            QuerySyntaxError.exit_code,
            EngineUnavailableError.exit_code,
            IndexingError.exit_code,
        }
        assert len(codes) == 4

    def test_query_syntax_message(self) -> None:
        """Test the user message for malformed queries."""
        assert "query" in QuerySyntaxError().user_message.lower()

    def test_engine_unavailable_message(self) -> None:
        """Test the user message for an unavailable index."""
        assert "not available" in EngineUnavailableError().user_message.lower()


class TestConfigErrors:
    """Tests for configuration errors."""

    def test_validation_is_config_error(self) -> None:
        """Test validation errors are config errors."""
        error = ConfigValidationError()
        assert isinstance(error, ConfigError)
        assert error.exit_code == 22
