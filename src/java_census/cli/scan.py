"""Scan command — counts constructs and writes the findings log."""

from pathlib import Path
from typing import Optional

import typer

from ..api import build_orchestrator
from ..exceptions import (
    ConfigurationError,
    FatalRootError,
    FindingsWriteError,
    PatternCompileError,
)
from ..logging_config import setup_logging
from ..sample import SAMPLE_FILE_ID, SAMPLE_SOURCE
from . import app
from ._common import console, resolve_config
from ._report import errors_table, summary_table


@app.command()
def scan(
    path: Optional[Path] = typer.Argument(
        None,
        help="Directory or file to scan (default: JAVA_SRC, else a built-in sample)",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration file (TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    log: Optional[Path] = typer.Option(
        None,
        "--log",
        "-o",
        help="Findings log path (default: statistics.txt)",
        dir_okay=False,
    ),
    append: bool = typer.Option(
        False,
        "--append",
        help="Append to the findings log instead of truncating it",
    ),
    policy: Optional[str] = typer.Option(
        None,
        "--policy",
        help="Findings log write failures: strict (abort) or warn (continue)",
    ),
    workers: Optional[int] = typer.Option(
        None,
        "--workers",
        "-w",
        help="Number of parallel workers (default: auto-detect)",
        min=1,
        max=64,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose (DEBUG) logging, including every finding",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Suppress all but ERROR logging",
    ),
    log_file: Optional[Path] = typer.Option(
        None,
        "--log-file",
        help="Also write diagnostic logging to this file",
        dir_okay=False,
    ),
):
    """
    Count method and variable declarations below PATH.

    [bold cyan]Examples:[/bold cyan]

      java-census scan src/main/java

      java-census scan . --log findings.txt --workers 4

      JAVA_SRC=src java-census scan
    """
    if verbose and quiet:
        console.print("[red]Error:[/red] --verbose and --quiet are mutually exclusive")
        raise typer.Exit(2)

    try:
        settings = resolve_config(
            path=path,
            config=config,
            log=log,
            workers=workers,
            policy=policy,
            append=append,
            verbose=verbose,
            quiet=quiet,
            log_file=log_file,
        )
    except ConfigurationError as e:
        console.print(f"[red]Configuration error:[/red] {e}")
        raise typer.Exit(2)

    try:
        logger = setup_logging(verbosity=settings.verbosity, log_file=settings.log_file)
    except OSError as e:
        console.print(f"[red]Configuration error:[/red] cannot open log file: {e}")
        raise typer.Exit(2)

    logger.debug(f"Loaded configuration: {settings}")

    try:
        orchestrator = build_orchestrator(settings)
        if settings.root is None:
            title = "Built-in sample"
            outcome = orchestrator.run_source(SAMPLE_SOURCE, file_id=SAMPLE_FILE_ID)
        else:
            title = settings.root
            outcome = orchestrator.run(settings.root)
    except (FatalRootError, PatternCompileError, FindingsWriteError) as e:
        logger.error(f"{e.__class__.__name__}: {e}")
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    console.print()
    console.print(summary_table(outcome, title=title))

    if outcome.errors:
        console.print()
        console.print(errors_table(outcome.errors))
        console.print(
            f"[yellow]Warning:[/yellow] {len(outcome.errors)} file(s) skipped; "
            "they are not included in the counts"
        )

    if outcome.entries_skipped:
        console.print(
            f"[yellow]Warning:[/yellow] {outcome.entries_skipped} directory "
            "entries passed over during the walk"
        )

    if outcome.write_failures:
        console.print(
            f"[yellow]Warning:[/yellow] {outcome.write_failures} write(s) to the "
            f"findings log failed; {settings.findings_log} is incomplete"
        )
        console.print(f"[dim]{outcome.files_scanned} file(s) scanned[/dim]")
    else:
        console.print(
            f"[dim]{outcome.files_scanned} file(s) scanned, findings written to "
            f"{settings.findings_log}[/dim]"
        )
