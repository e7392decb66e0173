from __future__ import annotations

import json

import pytest
import typer
from typer.testing import CliRunner

from ghver.cli.app import app
from ghver.cli.context import CLIContext
from ghver.core.config import Config
from ghver.core.errors import ErrorCode
from ghver.github.http import HttpError, MockHttpClient
from ghver.output.console import MockConsole, RichConsole

BASE = "https://api.github.com/repos/kubernetes/minikube"


def _ctx(client: MockHttpClient) -> CLIContext:
    return CLIContext(config=Config(), http=client, console=MockConsole(), err_console=MockConsole())


def _serve(client: MockHttpClient, releases: list[str], tags: list[str]) -> None:
    client.set_page(f"{BASE}/releases?per_page=100&page=1", [{"tag_name": t} for t in releases])
    client.set_page(
        f"{BASE}/tags?per_page=100&page=1", [{"name": t, "commit": {"sha": f"sha-{t}"}} for t in tags]
    )


def _patch(monkeypatch: pytest.MonkeyPatch, ctx: CLIContext) -> None:
    import ghver.cli.commands.releases as releases_cmd

    monkeypatch.setattr(releases_cmd, "build_context", lambda: ctx)


def test_table_output(monkeypatch: pytest.MonkeyPatch) -> None:
    import ghver.cli.commands.releases as releases_cmd

    client = MockHttpClient()
    _serve(client, ["v1.19.1", "v1.20.0-rc.1"], ["v1.20.0-rc.1", "v1.19.1"])
    ctx = _ctx(client)
    _patch(monkeypatch, ctx)

    releases_cmd.releases(repo="kubernetes/minikube", as_json=False, timeout=None)

    console = ctx.console
    assert isinstance(console, MockConsole)
    assert console.messages[0] == "kubernetes/minikube"
    assert "stable  v1.19.1  sha-v1.19.1" in console.messages
    assert "edge  v1.20.0-rc.1  sha-v1.20.0-rc.1" in console.messages


def test_json_output(monkeypatch: pytest.MonkeyPatch) -> None:
    import ghver.cli.commands.releases as releases_cmd

    client = MockHttpClient()
    _serve(client, ["v2.0.0"], ["v2.0.0"])
    ctx = _ctx(client)
    _patch(monkeypatch, ctx)

    releases_cmd.releases(repo="kubernetes/minikube", as_json=True, timeout=None)

    assert isinstance(ctx.console, MockConsole)
    data = json.loads(ctx.console.text)
    assert data["repo"] == "kubernetes/minikube"
    assert data["stable"] == {"tag": "v2.0.0", "commit": "sha-v2.0.0"}
    assert data["edge"]["tag"] == "v2.0.0"


def test_commit_not_found_prints_partial(monkeypatch: pytest.MonkeyPatch) -> None:
    import ghver.cli.commands.releases as releases_cmd

    client = MockHttpClient()
    _serve(client, ["v1.0.0"], ["v0.9.0"])
    ctx = _ctx(client)
    _patch(monkeypatch, ctx)

    with pytest.raises(typer.Exit) as exc:
        releases_cmd.releases(repo="kubernetes/minikube", as_json=False, timeout=None)

    assert exc.value.exit_code == int(ErrorCode.NOT_FOUND)
    assert isinstance(ctx.console, MockConsole)
    assert "stable  v1.0.0  -" in ctx.console.messages
    assert isinstance(ctx.err_console, MockConsole)
    assert ctx.err_console.has_error()
    assert not ctx.console.has_error()


def test_network_error(monkeypatch: pytest.MonkeyPatch) -> None:
    import ghver.cli.commands.releases as releases_cmd

    client = MockHttpClient()
    url = f"{BASE}/releases?per_page=100&page=1"
    client.set_error(url, HttpError(url=url, status=0, message="Connection refused"))
    ctx = _ctx(client)
    _patch(monkeypatch, ctx)

    with pytest.raises(typer.Exit) as exc:
        releases_cmd.releases(repo="kubernetes/minikube", as_json=False, timeout=None)

    assert exc.value.exit_code == int(ErrorCode.NETWORK_ERROR)
    assert isinstance(ctx.console, MockConsole)
    assert isinstance(ctx.err_console, MockConsole)
    assert ctx.err_console.find("Connection refused")


def test_invalid_repo(monkeypatch: pytest.MonkeyPatch) -> None:
    import ghver.cli.commands.releases as releases_cmd

    client = MockHttpClient()
    ctx = _ctx(client)
    _patch(monkeypatch, ctx)

    with pytest.raises(typer.Exit) as exc:
        releases_cmd.releases(repo="minikube", as_json=False, timeout=None)

    assert exc.value.exit_code == int(ErrorCode.USER_ERROR)
    assert client.calls == []


def test_zero_timeout_cancels(monkeypatch: pytest.MonkeyPatch) -> None:
    import ghver.cli.commands.releases as releases_cmd

    client = MockHttpClient()
    ctx = _ctx(client)
    _patch(monkeypatch, ctx)

    with pytest.raises(typer.Exit) as exc:
        releases_cmd.releases(repo="kubernetes/minikube", as_json=False, timeout=0.0)

    assert exc.value.exit_code == int(ErrorCode.CANCELLED)
    assert client.calls == []


def test_commit_not_found_json_stays_parseable(monkeypatch: pytest.MonkeyPatch) -> None:
    import ghver.cli.commands.releases as releases_cmd

    client = MockHttpClient()
    _serve(client, ["v1.0.0"], ["v0.9.0"])
    ctx = _ctx(client)
    _patch(monkeypatch, ctx)

    with pytest.raises(typer.Exit) as exc:
        releases_cmd.releases(repo="kubernetes/minikube", as_json=True, timeout=None)

    assert exc.value.exit_code == int(ErrorCode.NOT_FOUND)
    assert isinstance(ctx.console, MockConsole)
    data = json.loads(ctx.console.text)
    assert data["stable"] == {"tag": "v1.0.0", "commit": ""}
    assert isinstance(ctx.err_console, MockConsole)
    assert ctx.err_console.messages == [
        "error: wasn't able to find commit for releases",
        "  v1.0.0",
    ]


def test_bracketed_repo_is_a_user_error(monkeypatch: pytest.MonkeyPatch) -> None:
    import ghver.cli.commands.releases as releases_cmd

    client = MockHttpClient()
    monkeypatch.setattr(
        releases_cmd,
        "build_context",
        lambda: CLIContext(
            config=Config(), http=client, console=RichConsole(), err_console=RichConsole(stderr=True)
        ),
    )

    result = CliRunner().invoke(app, ["releases", "[/bold]"])

    assert result.exit_code == int(ErrorCode.USER_ERROR)
    assert result.exception is None or isinstance(result.exception, SystemExit)
    assert "invalid repository: '[/bold]'" in result.output
    assert client.calls == []
