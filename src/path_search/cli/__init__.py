"""CLI layer for path-search.

Usage:
    path-search search lqdocspg
    path-search search --fuzzy pluss.gif
    path-search concat "Introduction to Lucene Lucene is a powerful search library for Java applications."
    path-search analyze "this is a simple test of the filter"
"""

from path_search.cli.app import app, main

__all__ = ["app", "main"]
