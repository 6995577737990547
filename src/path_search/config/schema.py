"""Pydantic models for path-search configuration."""

from pathlib import Path

from pydantic import BaseModel, Field, model_validator

DEFAULT_PATHS: list[str] = [
    "lucene/queryparser/docs/xml/img/plus.gif",
    "lucene/queryparser/docs/xml/img/join.gif",
    "lucene/queryparser/docs/xml/img/minusbottom.gif",
]


class AnalysisConfig(BaseModel):
    """Text analysis configuration."""

    min_gram: int = Field(default=2, ge=1)
    max_gram: int = Field(default=10, ge=1)
    delimiter: str = " "
    stop_words: list[str] | None = None  # None: standard English list

    @model_validator(mode="after")
    def _check_gram_range(self) -> "AnalysisConfig":
        if self.max_gram < self.min_gram:
            raise ValueError(
                f"max_gram ({self.max_gram}) must be >= min_gram ({self.min_gram})"
            )
        return self


class SearchConfig(BaseModel):
    """Search configuration."""

    top_k: int = Field(default=10, ge=1)
    max_edits: int = Field(default=2, ge=0, le=2)
    max_expansions: int = Field(default=50, ge=1)
    db_path: Path | None = None  # Default: in-memory DuckDB


class IndexConfig(BaseModel):
    """Which paths get indexed at startup."""

    paths: list[str] = Field(default_factory=lambda: list(DEFAULT_PATHS))
    paths_file: Path | None = None  # One path per line, replaces `paths`


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    file: Path | None = None  # Default: no file logging
    json_format: bool = False


class PathSearchConfig(BaseModel):
    """Root configuration for path-search."""

    analysis: AnalysisConfig = Field(default_factory=AnalysisConfig)
    search: SearchConfig = Field(default_factory=SearchConfig)
    index: IndexConfig = Field(default_factory=IndexConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
