"""Main Typer application — imports and registers all CLI commands.

Entry point: ``buildwatch`` (configured via pyproject.toml scripts).
"""

from __future__ import annotations

import typer

from buildwatch import __version__
from buildwatch.cli.commands.demo import demo_cmd

app = typer.Typer(
    name="buildwatch",
    help="buildwatch: console progress reporting for concurrent builds.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)

# Register subcommands
app.command(name="demo", help="Replay a synthetic concurrent build.")(demo_cmd)


@app.command(name="version", help="Show the buildwatch version.")
def version_cmd() -> None:
    typer.echo(f"buildwatch {__version__}")


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
