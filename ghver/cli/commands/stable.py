"""Stable command - print the stable release tag of a repo."""

from __future__ import annotations

import typer

from ghver.cli.commands._helpers import cancel_token, fail, split_repo
from ghver.cli.context import build_context
from ghver.core.result import Err
from ghver.releases.service import get_stable_version


def stable(
    repo: str = typer.Argument(..., help="Repository as owner/repo."),
    timeout: float | None = typer.Option(
        None, "--timeout", min=0.0, help="Give up after this many seconds."
    ),
) -> None:
    """Print the stable release tag (nothing if the repo has none)."""
    ctx = build_context()
    owner, name = split_repo(ctx.err_console, repo)

    result = get_stable_version(
        ctx.http,
        owner,
        name,
        cancel=cancel_token(timeout),
        api_url=ctx.config.github.api_url,
    )
    if isinstance(result, Err):
        raise fail(ctx.err_console, result.error)

    if result.value:
        ctx.console.raw(result.value)
