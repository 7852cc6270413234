"""Command line interface for SiteSearch."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from sitesearch.config import AppConfig
from sitesearch.index.corpus import ContentIndex, load_corpus
from sitesearch.index.search import Searcher, group_by_kind
from sitesearch.models import CorpusError, RecordKind
from sitesearch.web.app import app as web_app


console = Console()
app = typer.Typer(help="SiteSearch - keyword search over the portfolio content")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def _load_index(corpus: Path | None) -> ContentIndex:
    config = AppConfig(corpus_path=corpus)
    try:
        return load_corpus(config.resolve_corpus_path(Path.cwd()))
    except CorpusError as exc:
        raise typer.BadParameter(str(exc), param_hint="--corpus") from exc


def _parse_kinds(kinds: Optional[List[str]]) -> set[RecordKind] | None:
    if not kinds:
        return None
    try:
        return {RecordKind.parse(kind) for kind in kinds}
    except CorpusError as exc:
        raise typer.BadParameter(str(exc), param_hint="--kind") from exc


@app.command()
def search(
    query: str = typer.Argument(..., help="Query text"),
    kind: Optional[List[str]] = typer.Option(None, "--kind", "-k", help="Restrict to a record kind"),
    limit: int = typer.Option(AppConfig().max_results, help="Maximum number of results"),
    corpus: Path = typer.Option(None, "--corpus", help="Corpus JSON file"),
    grouped: bool = typer.Option(False, "--grouped", help="Group results by kind"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Run a keyword search."""
    _setup_logging(verbose)
    searcher = Searcher(_load_index(corpus), config=AppConfig(max_results=limit))
    results = searcher.rank(query, kinds=_parse_kinds(kind))
    if not results:
        console.print("[yellow]No matches found.[/yellow]")
        return

    if grouped:
        scores = {item.record.id: item.score for item in results}
        for group_kind, records in group_by_kind(item.record for item in results).items():
            console.print(f"[bold]{group_kind.value}[/bold]")
            for record in records:
                console.print(f"  {scores[record.id]:>3}  {record.title}  [dim]-> {record.target}[/dim]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Score")
    table.add_column("Kind")
    table.add_column("Title")
    table.add_column("Target")

    for item in results:
        table.add_row(str(item.score), item.record.kind.value, item.record.title, item.record.target)

    console.print(table)


@app.command()
def suggest(
    prefix: str = typer.Argument(..., help="Partial query"),
    limit: int = typer.Option(AppConfig().max_suggestions, help="Maximum number of suggestions"),
    corpus: Path = typer.Option(None, "--corpus", help="Corpus JSON file"),
) -> None:
    """Print autocomplete suggestions for a partial query."""
    searcher = Searcher(_load_index(corpus), config=AppConfig(max_suggestions=limit))
    suggestions = searcher.suggest(prefix)
    if not suggestions:
        console.print("[yellow]No suggestions.[/yellow]")
        return
    for suggestion in suggestions:
        console.print(suggestion)


@app.command()
def show(
    record_id: str = typer.Argument(..., help="Record id"),
    corpus: Path = typer.Option(None, "--corpus", help="Corpus JSON file"),
) -> None:
    """Display a single record."""
    record = _load_index(corpus).get(record_id)
    if record is None:
        console.print(f"[red]Record not found: {record_id}[/red]")
        raise typer.Exit(code=1)

    console.print(f"[bold]{record.title}[/bold] ({record.kind.value}) -> {record.target}")
    if record.excerpt:
        console.print(record.excerpt)
    if record.tags:
        console.print("Tags: " + ", ".join(record.tags))
    if record.metadata is not None:
        for key, value in record.metadata.to_dict().items():
            console.print(f"{key.capitalize()}: {value}")


@app.command()
def validate(
    corpus: Path = typer.Option(None, "--corpus", help="Corpus JSON file"),
) -> None:
    """Check a corpus file against the record invariants."""
    config = AppConfig(corpus_path=corpus)
    try:
        index = load_corpus(config.resolve_corpus_path(Path.cwd()))
    except CorpusError as exc:
        console.print(f"[red]Invalid corpus: {exc}[/red]")
        raise typer.Exit(code=1)

    kinds = ", ".join(kind.value for kind in index.kinds())
    console.print(f"Corpus OK: {len(index)} records ({kinds})")


@app.command()
def web(
    host: str = typer.Option("127.0.0.1", help="Host interface"),
    port: int = typer.Option(8000, help="Server port"),
) -> None:
    """Start the web interface."""
    try:
        import uvicorn
    except ImportError as exc:  # pragma: no cover - defensive
        raise typer.BadParameter(
            "uvicorn is not installed. Install the web extras with \"python -m pip install '.[web]'\""
        ) from exc

    console.print(f"Starting web interface on http://{host}:{port}")
    uvicorn.run(
        web_app,
        host=host,
        port=port,
        reload=False,
        log_level="info",
    )
