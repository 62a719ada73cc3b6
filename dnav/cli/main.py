"""Main CLI entrypoint for D-NAV extraction.

Runs the decision-candidate pipeline over local files and prints the ranked
candidates for review.
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from dnav import __version__
from dnav.config import get_config

console = Console()
# Log records go to stderr, results to stdout
err_console = Console(stderr=True)


def setup_logging() -> None:
    """Configure logging with rich output."""
    config = get_config()

    handlers: list[logging.Handler] = [RichHandler(console=err_console, rich_tracebacks=True)]
    if config.logging.file:
        handlers.append(logging.FileHandler(config.logging.file))

    logging.basicConfig(
        level=getattr(logging, config.logging.level.upper(), logging.INFO),
        format=config.logging.format,
        handlers=handlers,
    )


@click.group()
@click.version_option(version=__version__, prog_name="dnav")
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """D-NAV – decision-candidate extraction.

    Finds forward-looking commitments in filings, letters and memos.
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose

    if verbose:
        get_config().logging.level = "DEBUG"

    setup_logging()


@cli.command()
@click.argument("paths", nargs=-1, type=str)
@click.option(
    "--limit",
    "-n",
    default=20,
    type=int,
    help="Maximum candidates to display (default: 20)",
)
@click.option(
    "--min-candidates",
    default=None,
    type=int,
    help="Candidate floor when too few pass the threshold (default: from config)",
)
@click.option(
    "--score-threshold",
    default=None,
    type=int,
    help="Minimum score for a confident candidate (default: from config)",
)
@click.option(
    "--json",
    "output_json",
    is_flag=True,
    help="Output results as JSON",
)
def extract(
    paths: tuple[str, ...],
    limit: int,
    min_candidates: int | None,
    score_threshold: int | None,
    output_json: bool,
) -> None:
    """Extract decision candidates from documents.

    PATHS: One or more PDF, text or Markdown files.
    """
    from dnav.extract import extract_candidates
    from dnav.ingest import load_pages

    if not paths:
        raise click.UsageError("Provide at least one file to extract from.")

    targets = [Path(raw).expanduser() for raw in paths]
    missing = [str(path) for path in targets if not path.exists()]
    if missing:
        raise click.UsageError(f"Paths not found: {', '.join(missing)}")

    overrides: dict[str, int] = {}
    if min_candidates is not None:
        overrides["min_candidates"] = min_candidates
    if score_threshold is not None:
        overrides["score_threshold"] = score_threshold
    settings = get_config().extraction.model_copy(update=overrides)

    try:
        pages = load_pages(targets)
    except Exception as e:
        if output_json:
            click.echo(json.dumps({"error": str(e)}, indent=2))
        else:
            console.print(f"[red]Error loading documents:[/] {e}")
            if get_config().logging.level == "DEBUG":
                console.print_exception()
        sys.exit(1)

    result = extract_candidates(pages, settings=settings)

    if output_json:
        click.echo(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
        return

    debug = result.debug
    if not result.candidates:
        console.print("[yellow]No decision candidates found.[/]")
    else:
        table = Table(title=f"Decision candidates ({len(result.candidates)})")
        table.add_column("Score", justify="right")
        table.add_column("Decision")
        table.add_column("Sources", style="dim")

        for candidate in result.candidates[:limit]:
            color = (
                "green"
                if candidate.score >= settings.score_threshold
                else "yellow"
            )
            sources = ", ".join(
                f"{source.file_name or 'unknown'} p.{source.page_number}"
                for source in candidate.sources
            )
            table.add_row(f"[{color}]{candidate.score}[/]", candidate.decision_title, sources)

        console.print(table)
        if len(result.candidates) > limit:
            console.print(f"[dim]... and {len(result.candidates) - limit} more[/]")

    console.print(
        f"\n[dim]Pages:[/] {debug.pages_parsed}  "
        f"[dim]Lines:[/] {debug.raw_lines_count}  "
        f"[dim]Segments:[/] {debug.sentences_count}  "
        f"[dim]Candidates:[/] {debug.candidates_before_dedupe} → {debug.candidates_after_dedupe}  "
        f"[dim]Confident:[/] {debug.candidates_after_filtering}"
    )
    if debug.fallback_used:
        console.print(
            f"[yellow]![/] Fewer than {settings.min_candidates} candidates reached score "
            f"{settings.score_threshold}; showing top-scoring candidates instead."
        )


@cli.command()
@click.argument("text")
@click.option("--memo", is_flag=True, help="Score as part of a personal memo")
@click.option("--repeated", is_flag=True, help="Score as a line repeated across pages")
def explain(text: str, memo: bool, repeated: bool) -> None:
    """Show the cues, filter verdict and score for one sentence."""
    from dnav.extract.scoring import assess_segment, passes_filters, score_signals
    from dnav.extract.titles import rewrite_title

    settings = get_config().extraction
    signals = assess_segment(text)
    passed = passes_filters(
        text,
        is_personal_memo=memo,
        min_length=settings.min_segment_length,
        max_length=settings.max_segment_length,
    )
    score = score_signals(signals, is_personal_memo=memo, is_repeated_line=repeated)

    table = Table(show_header=False, box=None)
    table.add_column("Cue", style="dim")
    table.add_column("Value")
    for name, value in signals.to_dict().items():
        if isinstance(value, bool):
            rendered = "[green]yes[/]" if value else "[dim]no[/]"
        elif isinstance(value, float):
            rendered = f"{value:.2f}"
        else:
            rendered = str(value)
        table.add_row(name.replace("_", " "), rendered)

    console.print(table)
    console.print(f"\n[bold]Filter:[/] {'[green]pass[/]' if passed else '[red]reject[/]'}")
    console.print(f"[bold]Score:[/] {score}")
    console.print(f"[bold]Title:[/] {rewrite_title(text)}")


if __name__ == "__main__":
    cli()
