"""Typer-based CLI: run a one-shot prompt over candidate files."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from prompter.config import PrompterConfig
from prompter.core import Prompter
from prompter.domain.errors import NoMatchError
from prompter.domain.types import PromptOutcome
from prompter.logger import get_logger, setup_logger
from prompter.sources import ListSource

logger = get_logger("cli")
console = Console()

app = typer.Typer(
    name="prompter",
    help="Match a query against candidate files and print the selected suggestion",
    epilog="""
    Examples:
    $ prompter ap fruits.txt vegetables.txt --select 2 --show
    """,
    add_completion=False,
)


def _read_candidates(path: Path) -> list[str]:
    with open(path, "r", encoding="utf-8") as f:
        return [line.strip() for line in f if line.strip()]


def _render(prompter: Prompter) -> None:
    table = Table(title=f"{prompter.prompt} {prompter.input!r}".strip())
    table.add_column("Source", style="cyan")
    table.add_column("#", justify="right")
    table.add_column("Suggestion")
    table.add_column("Score", justify="right")

    selected = prompter.selected_suggestion()
    for source in prompter.sources:
        for index, suggestion in enumerate(source.suggestions()):
            is_selected = selected is not None and selected[0] is suggestion
            table.add_row(
                getattr(source, "name", repr(source)),
                str(index),
                str(suggestion.value),
                f"{suggestion.score:.2f}",
                style="bold reverse" if is_selected else None,
            )
    console.print(table)


async def _run(
    query: str,
    files: list[Path],
    select: int,
    wrap: bool,
    must_match: bool,
    timeout: Optional[float],
    show: bool,
) -> PromptOutcome | None:
    sources = [ListSource(path.stem, _read_candidates(path)) for path in files]
    prompter = Prompter(
        sources,
        prompt="Query",
        must_match=must_match,
        config=PrompterConfig(ready_timeout=timeout, wrap_over=wrap),
    )
    try:
        prompter.set_input(query)
        if not await prompter.all_ready():
            typer.echo(f"Sources not ready within {timeout}s", err=True)
            return None

        prompter.select_next(select)
        if show:
            _render(prompter)

        try:
            prompter.return_selection()
        except NoMatchError as e:
            typer.echo(str(e), err=True)
            return None
        return await prompter.wait_for_result()
    finally:
        if not prompter.destroyed:
            await prompter.destroy()


@app.command()
def main(
    query: str = typer.Argument(..., help="Input text to match"),
    files: List[Path] = typer.Argument(..., exists=True, dir_okay=False, help="Candidate files, one source per file"),
    select: int = typer.Option(0, "--select", "-s", help="Move the selection by this many suggestions"),
    wrap: bool = typer.Option(False, "--wrap", help="Wrap around when moving the selection"),
    must_match: bool = typer.Option(False, "--must-match", help="Fail instead of returning the raw query"),
    timeout: Optional[float] = typer.Option(None, "--timeout", "-t", help="Seconds to wait for each source"),
    show: bool = typer.Option(False, "--show", help="Print every suggestion before returning"),
    debug: bool = typer.Option(False, "--debug", help="Log debug output to stderr"),
):
    """Match QUERY against FILES and print the returned selection."""
    config = PrompterConfig.from_env()
    if debug:
        setup_logger(log_file=config.log_file, log_level="DEBUG", console_level="DEBUG")
    elif config.log_file:
        setup_logger(log_file=config.log_file, log_level=config.log_level)
    if timeout is None:
        timeout = config.ready_timeout

    outcome = asyncio.run(_run(query, files, select, wrap or config.wrap_over, must_match, timeout, show))
    if outcome is None or outcome.cancelled:
        raise typer.Exit(code=1)

    values = outcome.value if isinstance(outcome.value, list) else [outcome.value]
    for value in values:
        typer.echo(value)
