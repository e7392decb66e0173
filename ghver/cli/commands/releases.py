"""Releases command - show the stable, latest and edge releases of a repo."""

from __future__ import annotations

import json

import typer

from ghver.cli.commands._helpers import cancel_token, fail, split_repo
from ghver.cli.context import build_context
from ghver.core.result import Err
from ghver.output.console import ConsoleProtocol
from ghver.releases.model import Channel, ReleaseSet
from ghver.releases.service import get_releases


def _print_releases(
    console: ConsoleProtocol,
    slug: str,
    releases: ReleaseSet,
    as_json: bool,
) -> None:
    if as_json:
        console.raw(json.dumps({"repo": slug, **releases.to_dict()}, indent=2))
        return

    console.header(slug)
    console.table(
        ("channel", "tag", "commit"),
        [
            (str(channel), releases[channel].tag or "-", releases[channel].commit or "-")
            for channel in Channel
        ],
    )


def releases(
    repo: str = typer.Argument(..., help="Repository as owner/repo."),
    as_json: bool = typer.Option(False, "--json", help="Print a JSON object."),
    timeout: float | None = typer.Option(
        None, "--timeout", min=0.0, help="Give up after this many seconds."
    ),
) -> None:
    """Show the stable, latest (rc/beta) and edge (alpha) releases."""
    ctx = build_context()
    owner, name = split_repo(ctx.err_console, repo)

    result = get_releases(
        ctx.http,
        owner,
        name,
        cancel=cancel_token(timeout),
        api_url=ctx.config.github.api_url,
    )
    if isinstance(result, Err):
        partial = result.error.releases
        if partial is not None:
            _print_releases(ctx.console, f"{owner}/{name}", partial, as_json)
        raise fail(ctx.err_console, result.error)

    _print_releases(ctx.console, f"{owner}/{name}", result.value, as_json)
