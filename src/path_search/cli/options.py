"""Shared CLI options for path-search commands."""

from enum import Enum
from pathlib import Path
from typing import Annotated

import typer


class AnalyzerChoice(str, Enum):
    """Analyzers available to the ``analyze`` command."""

    CONCAT = "concat"
    NGRAM = "ngram"


FuzzyOption = Annotated[
    bool,
    typer.Option(
        "--fuzzy",
        "-z",
        help="Typo-tolerant search instead of substring/abbreviation search.",
    ),
]

PathsFileOption = Annotated[
    Path | None,
    typer.Option(
        "--paths-file",
        "-f",
        help="File with one path per line. Defaults to config setting.",
        exists=True,
        dir_okay=False,
        readable=True,
    ),
]

TopOption = Annotated[
    int | None,
    typer.Option(
        "--top",
        "-n",
        min=1,
        help="Maximum number of results. Defaults to config setting.",
    ),
]

JsonOption = Annotated[
    bool,
    typer.Option(
        "--json",
        help="Print results as a JSON array of paths.",
    ),
]

VerboseOption = Annotated[
    bool,
    typer.Option(
        "--verbose",
        "-v",
        help="Enable debug logging.",
    ),
]


class DocumentFieldChoice(str, Enum):
    """Document fields the ``concat`` command can search."""

    CONCATENATED = "concatenated"
    TITLE = "title"
    CONTENT = "content"
