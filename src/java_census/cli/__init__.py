"""CLI entry point — registers all subcommands."""

import typer

app = typer.Typer(
    name="java-census",
    help="java-census - Count method and variable declarations in Java source trees",
    add_completion=False,
    rich_markup_mode="rich",
)


# Import subcommands to register them
from .scan import scan as _scan  # noqa: F401, E402
from .patterns import patterns as _patterns  # noqa: F401, E402


def main() -> None:
    app()
