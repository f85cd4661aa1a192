"""Patterns command — shows the structural query behind each construct kind."""

from typing import Optional

import typer
from rich.syntax import Syntax

from ..exceptions import PatternCompileError
from ..patterns import ConstructKind, PatternCatalog
from . import app
from ._common import console


@app.command()
def patterns(
    kind: Optional[str] = typer.Option(
        None,
        "--kind",
        "-k",
        help="Only show this construct kind (method, variable)",
    ),
):
    """
    Show the tree-sitter query used for each construct kind.
    """
    try:
        catalog = PatternCatalog()
    except PatternCompileError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    if kind is None:
        kinds = catalog.kinds()
    else:
        try:
            kinds = [ConstructKind(kind.lower())]
        except ValueError:
            valid = ", ".join(k.value for k in ConstructKind)
            console.print(f"[red]Error:[/red] unknown kind '{kind}' (expected one of: {valid})")
            raise typer.Exit(2)

    for construct in kinds:
        _query, capture = catalog.pattern_for(construct)
        console.print(f"[bold cyan]{construct.label}[/bold cyan] [dim](@{capture})[/dim]")
        console.print(Syntax(catalog.query_source(construct).strip(), "scheme", theme="ansi_dark"))
        console.print()
