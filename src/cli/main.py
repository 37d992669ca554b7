"""Typer application: argument schema, error rendering and exit codes.

Usage:
    dashboard-admin clear-cache
    dashboard-admin delete reports/sales
    dashboard-admin --auth-token s3cret upload --overwrite sales.ipynb reports/sales
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional

import typer
from rich.console import Console

from adapters.http_client import build_client
from adapters.prompt import TerminalConfirmer
from cli.ui_components import print_cancelled, print_failure, print_success
from core.config import load_settings
from core.domain.models import CommandInvocation, CommandName
from core.errors import (
    ConfigLoadError,
    ConflictDeclined,
    DashboardAdminError,
    ValidationError,
)
from core.logging_setup import configure_logging
from core.services.commands import AdminSession, execute

app = typer.Typer(
    name="dashboard-admin",
    no_args_is_help=True,
    help="Administer a remote dashboard server: clear its cache, delete or upload dashboards.",
)

_console = Console()
_err_console = Console(stderr=True)

logger = logging.getLogger(__name__)


@app.callback()
def main(
    ctx: typer.Context,
    host: Optional[str] = typer.Option(
        None,
        "--host",
        help="Server base URL (default: built from IP, PORT and PUBLIC_LINK_PATTERN in the config).",
    ),
    auth_token: Optional[str] = typer.Option(
        None,
        "--auth-token",
        help="Token sent as 'Authorization: token <t>' (overrides AUTH_TOKEN).",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to the JSON5 config file.",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every request and decision."),
) -> None:
    configure_logging(verbose)

    try:
        settings = load_settings(config)
    except ConfigLoadError as exc:
        print_failure(_err_console, exc)
        raise typer.Exit(code=1) from exc

    state: dict[str, Any] = ctx.ensure_object(dict)
    state["settings"] = settings
    state["host"] = host
    state["auth_token"] = auth_token


def _run(ctx: typer.Context, invocation: CommandInvocation) -> None:
    state: dict[str, Any] = ctx.ensure_object(dict)
    settings = state["settings"]
    confirmer = state.get("confirmer") or TerminalConfirmer()

    try:
        with build_client(settings, transport=state.get("transport")) as client:
            session = AdminSession.from_settings(
                settings,
                client=client,
                confirmer=confirmer,
                host=invocation.host,
                auth_token=invocation.auth_token,
            )
            logger.debug("Running %s against %s", invocation.command.value, session.host)
            result = execute(invocation, session)
    except ConflictDeclined:
        print_cancelled(_console)
        raise typer.Exit(code=0)
    except ValidationError as exc:
        _err_console.print(ctx.get_usage(), markup=False, highlight=False)
        print_failure(_err_console, exc)
        raise typer.Exit(code=1) from exc
    except DashboardAdminError as exc:
        print_failure(_err_console, exc)
        raise typer.Exit(code=1) from exc

    print_success(_console, result.message)
    raise typer.Exit(code=result.exit_code)


def _invocation(ctx: typer.Context, command: CommandName, **arguments: Any) -> CommandInvocation:
    state: dict[str, Any] = ctx.ensure_object(dict)
    return CommandInvocation(
        command=command,
        host=state.get("host"),
        auth_token=state.get("auth_token"),
        **arguments,
    )


@app.command("clear-cache")
def clear_cache(ctx: typer.Context) -> None:
    """Invalidate the server-side cache."""

    _run(ctx, _invocation(ctx, CommandName.CLEAR_CACHE))


@app.command("delete")
def delete(
    ctx: typer.Context,
    path: str = typer.Argument(..., help="Dashboard path to remove."),
) -> None:
    """Remove a published dashboard."""

    _run(ctx, _invocation(ctx, CommandName.DELETE, path=path))


@app.command("upload")
def upload(
    ctx: typer.Context,
    file: Path = typer.Argument(..., help="Notebook file to publish."),
    pathname: str = typer.Argument(..., help="Destination path on the server, without .ipynb."),
    overwrite: bool = typer.Option(
        False,
        "--overwrite",
        help="Replace an existing dashboard without asking.",
    ),
) -> None:
    """Publish a notebook as a dashboard at PATHNAME."""

    _run(
        ctx,
        _invocation(ctx, CommandName.UPLOAD, file=file, pathname=pathname, overwrite=overwrite),
    )


def run() -> None:
    app(prog_name="dashboard-admin")
