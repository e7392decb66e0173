from __future__ import annotations

import typer

from ghver.core.cancel import CancelToken
from ghver.core.errors import ErrorCode
from ghver.core.result import Err, Result
from ghver.output.console import ConsoleProtocol
from ghver.releases.errors import ReleaseError
from ghver.releases.service import parse_repo


def exit_code(error: ReleaseError) -> ErrorCode:
    match error.kind:
        case "invalid_input":
            return ErrorCode.USER_ERROR
        case "transport":
            return ErrorCode.NETWORK_ERROR
        case "cancelled":
            return ErrorCode.CANCELLED
        case "commit_not_found":
            return ErrorCode.NOT_FOUND


def fail(err_console: ConsoleProtocol, error: ReleaseError) -> typer.Exit:
    """Report error on the stderr console; the caller raises the returned Exit."""
    err_console.error(error.message)
    if error.hint:
        err_console.print(f"  {error.hint}")
    return typer.Exit(code=int(exit_code(error)))


def cancel_token(timeout: float | None) -> CancelToken | None:
    if timeout is None:
        return None
    return CancelToken.with_timeout(timeout)


def split_repo(err_console: ConsoleProtocol, slug: str) -> tuple[str, str]:
    result: Result[tuple[str, str], ReleaseError] = parse_repo(slug)
    if isinstance(result, Err):
        raise fail(err_console, result.error)
    return result.value
