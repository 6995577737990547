"""Main CLI application for path-search."""

import json

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from path_search import __version__
from path_search.analysis import Analyzer, ConcatenationAnalyzer, NGramAnalyzer
from path_search.cli.options import (
    AnalyzerChoice,
    DocumentFieldChoice,
    FuzzyOption,
    JsonOption,
    PathsFileOption,
    TopOption,
    VerboseOption,
)
from path_search.config import PathSearchConfig, get_config
from path_search.config.defaults import get_config_path
from path_search.exceptions import PathSearchError
from path_search.search import ConcatenatedSearchService, PathSearchService, SearchMode
from path_search.utils.logging import setup_logging

app = typer.Typer(
    name="path-search",
    help="Substring, abbreviation and typo-tolerant search over file paths",
    add_completion=False,
    no_args_is_help=True,
)

console = Console()
err_console = Console(stderr=True)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"path-search version {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Substring, abbreviation and typo-tolerant search over file paths."""


def _load_config() -> PathSearchConfig:
    try:
        return get_config().model_copy(deep=True)
    except PathSearchError as e:
        err_console.print(f"[red]Error:[/red] {e.user_message}: {escape(str(e))}")
        raise typer.Exit(e.exit_code) from None


@app.command()
def search(
    query: str = typer.Argument(..., help="Search query."),
    fuzzy: FuzzyOption = False,
    paths_file: PathsFileOption = None,
    top: TopOption = None,
    json_output: JsonOption = False,
    verbose: VerboseOption = False,
) -> None:
    """Search the indexed paths."""
    config = _load_config()
    if paths_file is not None:
        config.index.paths_file = paths_file
    if top is not None:
        config.search.top_k = top

    setup_logging(
        level="DEBUG" if verbose else config.logging.level,
        log_file=config.logging.file,
        json_format=config.logging.json_format,
    )

    try:
        with PathSearchService.from_config(config) as service:
            hits = service.search_hits(query, SearchMode.from_flag(fuzzy))
    except PathSearchError as e:
        err_console.print(f"[red]Error:[/red] {e.user_message}: {escape(str(e))}")
        raise typer.Exit(e.exit_code) from None

    if json_output:
        typer.echo(json.dumps([hit.path for hit in hits]))
        return

    if not hits:
        console.print("[dim]No matching paths[/dim]")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("#", justify="right")
    table.add_column("Path", no_wrap=True)
    table.add_column("Score", justify="right")
    for rank, hit in enumerate(hits, start=1):
        table.add_row(str(rank), escape(hit.path), f"{hit.score:.3f}")
    console.print(table)


@app.command()
def concat(
    query: str = typer.Argument(..., help="Search query."),
    field: DocumentFieldChoice = typer.Option(
        DocumentFieldChoice.CONCATENATED,
        "--field",
        "-F",
        case_sensitive=False,
        help="Document field to search.",
    ),
    json_output: JsonOption = False,
    verbose: VerboseOption = False,
) -> None:
    """Search the sample documents by concatenated text, title or content."""
    config = _load_config()
    setup_logging(
        level="DEBUG" if verbose else config.logging.level,
        log_file=config.logging.file,
        json_format=config.logging.json_format,
    )

    try:
        with ConcatenatedSearchService(
            analysis=config.analysis, search=config.search
        ) as service:
            results = service.search(query, field.value)
    except PathSearchError as e:
        err_console.print(f"[red]Error:[/red] {e.user_message}: {escape(str(e))}")
        raise typer.Exit(e.exit_code) from None

    if json_output:
        typer.echo(json.dumps([result.doc_id for result in results]))
        return

    if not results:
        console.print("[dim]No matching documents[/dim]")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("ID", justify="right")
    table.add_column("Title")
    table.add_column("Score", justify="right")
    for result in results:
        table.add_row(escape(result.doc_id), escape(result.title), f"{result.score:.3f}")
    console.print(table)


@app.command()
def analyze(
    text: str = typer.Argument(..., help="Text to analyze."),
    analyzer: AnalyzerChoice = typer.Option(
        AnalyzerChoice.CONCAT,
        "--analyzer",
        "-a",
        case_sensitive=False,
        help="Analyzer to run.",
    ),
    delimiter: str | None = typer.Option(
        None, "--delimiter", "-d", help="Concatenation delimiter."
    ),
) -> None:
    """Show the tokens an analyzer produces for TEXT."""
    config = _load_config()
    selected: Analyzer
    if analyzer == AnalyzerChoice.NGRAM:
        selected = NGramAnalyzer(config.analysis.min_gram, config.analysis.max_gram)
    else:
        selected = ConcatenationAnalyzer(
            stop_words=config.analysis.stop_words,
            delimiter=config.analysis.delimiter if delimiter is None else delimiter,
        )

    tokens = selected.analyze(text)

    console.print("Input: " + escape(f'"{text}"'))
    console.print(f"Number of tokens: {len(tokens)}")
    if not tokens:
        console.print(escape("Output: [no tokens]"))
        return
    for index, token in enumerate(tokens, start=1):
        console.print(f"Token {index}: " + escape(f'"{token}"'))


@app.command("config")
def config_cmd(
    show_path: bool = typer.Option(
        False,
        "--path",
        "-p",
        help="Show config file path.",
    ),
) -> None:
    """Show current configuration."""
    if show_path:
        console.print(str(get_config_path()))
        return

    config = _load_config()
    console.print("[bold]path-search configuration[/bold]\n")
    console.print(f"Config file: {get_config_path()}")
    console.print_json(config.model_dump_json())


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
