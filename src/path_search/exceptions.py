"""Exception hierarchy for path-search."""


class PathSearchError(Exception):
    """Base exception for all path-search errors."""

    exit_code: int = 1
    user_message: str = "An error occurred"

    def __init__(
        self,
        message: str | None = None,
        *,
        user_message: str | None = None,
    ) -> None:
        super().__init__(message or self.user_message)
        if user_message:
            self.user_message = user_message


# Config Errors
class ConfigError(PathSearchError):
    """Configuration errors."""

    exit_code = 20
    user_message = "Configuration error"


class ConfigValidationError(ConfigError):
    """Configuration validation failed."""

    exit_code = 22
    user_message = "Invalid configuration"


# Search Errors
class SearchError(PathSearchError):
    """Search-related errors."""

    exit_code = 30
    user_message = "Search error"


class QuerySyntaxError(SearchError):
    """Query text could not be turned into a retrieval request."""

    exit_code = 31
    user_message = "Malformed search query"


class EngineUnavailableError(SearchError):
    """Index engine cannot serve the request."""

    exit_code = 32
    user_message = "Search index is not available"


class IndexingError(SearchError):
    """Error while building the index."""

    exit_code = 33
    user_message = "Error indexing paths"
