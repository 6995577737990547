"""path-search: substring, abbreviation and fuzzy search over file paths."""

__version__ = "0.1.0"
