"""Rich rendering of scan outcomes."""

from typing import Optional

from rich.table import Table

from ..orchestrator import FileError, ScanOutcome


def summary_table(outcome: ScanOutcome, title: Optional[str] = None) -> Table:
    """Two-column Metric/Count table, one row per construct kind."""
    table = Table(title=title, show_lines=True, pad_edge=True)
    table.add_column("Metric", style="bold")
    table.add_column("Count", justify="right", style="green")

    for label, count in outcome.result.as_dict().items():
        table.add_row(label, str(count))

    return table


def errors_table(errors: tuple[FileError, ...]) -> Table:
    """Skipped files with their error code and reason."""
    table = Table(title="Skipped files", show_lines=False, pad_edge=True)
    table.add_column("Code", style="yellow")
    table.add_column("File", style="cyan")
    table.add_column("Reason", style="dim")

    for error in errors:
        table.add_row(error.code.value, error.path, error.reason)

    return table
