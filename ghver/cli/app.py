from __future__ import annotations

import logging
import os
from pathlib import Path

import typer

from ghver import __version__
from ghver.cli.commands.releases import releases
from ghver.cli.commands.stable import stable
from ghver.core.config import CONFIG_ENV
from ghver.core.errors import ErrorCode


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


app.command()(releases)
app.command()(stable)


def _setup_logging(verbose: bool) -> None:
    if not verbose:
        return
    from rich.console import Console
    from rich.logging import RichHandler

    logging.basicConfig(
        level=logging.DEBUG,
        format="%(name)s: %(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(False, "--version", help="Show version and exit."),
    config: Path | None = typer.Option(
        None,
        "--config",
        help="Config file (default: $GHVER_CONFIG or ~/.config/ghver/config.toml).",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log API pages and matches."),
) -> None:
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=0)

    if config is not None:
        path = config.expanduser()
        if not path.is_file():
            typer.echo(f"error: --config '{path}' does not exist", err=True)
            raise typer.Exit(code=int(ErrorCode.USER_ERROR))
        os.environ[CONFIG_ENV] = str(path)

    _setup_logging(verbose)


def main() -> None:
    app()
