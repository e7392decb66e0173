from __future__ import annotations

from dataclasses import dataclass

import typer

from ghver.core.config import Config, default_config_path, load_config
from ghver.core.errors import ErrorCode
from ghver.core.result import Err
from ghver.github.http import HttpClient, RealHttpClient
from ghver.output.console import ConsoleProtocol, RichConsole


@dataclass(frozen=True, slots=True)
class CLIContext:
    config: Config
    http: HttpClient
    console: ConsoleProtocol
    err_console: ConsoleProtocol


def build_context() -> CLIContext:
    config = Config()
    path = default_config_path()
    if path.exists():
        config_result = load_config(path)
        if isinstance(config_result, Err):
            typer.echo(f"error: {config_result.error.message}", err=True)
            raise typer.Exit(code=int(ErrorCode.USER_ERROR))
        config = config_result.value

    gh = config.github
    return CLIContext(
        config=config,
        http=RealHttpClient(timeout=gh.timeout, user_agent=gh.user_agent, token=gh.token()),
        console=RichConsole(),
        err_console=RichConsole(stderr=True),
    )
