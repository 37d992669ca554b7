"""Command handlers and the router that selects them.

Each handler turns a `CommandInvocation` into at most the HTTP calls its
operation allows and returns a `CommandResult`. Failures are raised as
`DashboardAdminError` subclasses; printing and exit codes belong to the CLI.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

import httpx

from adapters.http_client import build_request, dispatch
from core.auth import resolve_token
from core.config import AppSettings
from core.domain.models import CommandInvocation, CommandName, CommandResult, Outcome
from core.errors import ConflictDeclined, ValidationError
from core.interfaces.confirmer import Confirmer
from core.services.conflicts import check_destination
from core.targets import normalize_host, resolve_host, resolve_target

logger = logging.getLogger(__name__)

NOTEBOOK_SUFFIX = ".ipynb"

CACHE_ENDPOINT = "/_api/cache"
NOTEBOOKS_ENDPOINT = "/_api/notebooks"
DASHBOARDS_ENDPOINT = "/dashboards"


@dataclass
class AdminSession:
    """Per-invocation collaborators shared by the handlers."""

    host: str
    token: str | None
    client: httpx.Client
    confirmer: Confirmer

    @classmethod
    def from_settings(
        cls,
        settings: AppSettings,
        *,
        client: httpx.Client,
        confirmer: Confirmer,
        host: str | None = None,
        auth_token: str | None = None,
    ) -> "AdminSession":
        if host:
            base = normalize_host(host)
        else:
            base = resolve_host(settings.ip, settings.port, settings.public_link_pattern)
        return cls(
            host=base,
            token=resolve_token(auth_token, settings.auth_token),
            client=client,
            confirmer=confirmer,
        )


def validate_pathname(pathname: str | None) -> str:
    """Reject destinations that are empty or name the notebook file itself."""

    value = (pathname or "").strip()
    if not value.strip("/"):
        raise ValidationError("A destination pathname is required")
    if value.lower().endswith(NOTEBOOK_SUFFIX):
        raise ValidationError(
            f"Destination pathname must not end in {NOTEBOOK_SUFFIX}: {value}"
        )
    return value


def clear_cache(invocation: CommandInvocation, session: AdminSession) -> CommandResult:
    url = resolve_target(session.host, CACHE_ENDPOINT)
    result = dispatch(session.client, build_request("DELETE", url, token=session.token), 200)
    result.raise_for_outcome()
    return CommandResult(message="Cache cleared.")


def delete_dashboard(invocation: CommandInvocation, session: AdminSession) -> CommandResult:
    path = (invocation.path or "").strip()
    if not path.strip("/"):
        raise ValidationError("A dashboard path is required")

    url = resolve_target(session.host, NOTEBOOKS_ENDPOINT, path)
    result = dispatch(session.client, build_request("DELETE", url, token=session.token), 204)
    result.raise_for_outcome()
    return CommandResult(message=f"Dashboard deleted: {path}")


def upload_dashboard(invocation: CommandInvocation, session: AdminSession) -> CommandResult:
    pathname = validate_pathname(invocation.pathname)
    notebook = invocation.file
    if notebook is None or not notebook.is_file():
        raise ValidationError(f"Notebook file not found: {notebook}")

    dashboard_url = resolve_target(session.host, DASHBOARDS_ENDPOINT, pathname)
    decision = check_destination(
        session.client,
        dashboard_url,
        token=session.token,
        overwrite=invocation.overwrite,
        confirmer=session.confirmer,
    )
    logger.debug("Upload decision for %s: %s", dashboard_url, decision.outcome.value)

    if decision.outcome is Outcome.ABORT_CONFLICT:
        raise ConflictDeclined(dashboard_url)
    if decision.outcome is Outcome.ABORT_ERROR:
        assert decision.error is not None
        raise decision.error

    upload_url = resolve_target(session.host, NOTEBOOKS_ENDPOINT, pathname)
    request = build_request("POST", upload_url, token=session.token, multipart_file=notebook)
    result = dispatch(session.client, request, 201)
    result.raise_for_outcome()
    return CommandResult(message=f"Dashboard uploaded: {dashboard_url}")


Handler = Callable[[CommandInvocation, AdminSession], CommandResult]

COMMANDS: dict[CommandName, Handler] = {
    CommandName.CLEAR_CACHE: clear_cache,
    CommandName.DELETE: delete_dashboard,
    CommandName.UPLOAD: upload_dashboard,
}


def execute(invocation: CommandInvocation, session: AdminSession) -> CommandResult:
    handler = COMMANDS.get(invocation.command)
    if handler is None:
        raise ValidationError(f"Unknown command: {invocation.command}")
    return handler(invocation, session)
