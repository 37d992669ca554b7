"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- La invocación y las peticiones se validan una vez en el borde y luego son
  valores inmutables (`frozen=True`).
- El dominio no conoce httpx ni typer: describe *qué* es una operación
  administrativa, no *cómo* se ejecuta.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from core.errors import DashboardAdminError


class CommandName(str, Enum):
    """Administrative operations exposed by the CLI."""

    CLEAR_CACHE = "clear-cache"
    DELETE = "delete"
    UPLOAD = "upload"


class Outcome(str, Enum):
    """Result of the existence-check/confirm pipeline that gates an upload."""

    PROCEED = "proceed"
    ABORT_CONFLICT = "abort-conflict"
    ABORT_ERROR = "abort-error"


class CommandInvocation(BaseModel):
    """Parsed command line for a single run of the tool.

    Created once from process arguments and consumed by exactly one handler.
    """

    model_config = ConfigDict(frozen=True)

    command: CommandName = Field(
        ...,
        description="Operation selected on the command line.",
    )
    path: str | None = Field(
        default=None,
        description="Dashboard path for `delete`.",
    )
    file: Path | None = Field(
        default=None,
        description="Local notebook file for `upload`.",
    )
    pathname: str | None = Field(
        default=None,
        description="Destination dashboard path for `upload`.",
    )
    host: str | None = Field(
        default=None,
        description="Server base URL given with --host (overrides config).",
    )
    auth_token: str | None = Field(
        default=None,
        description="Token given with --auth-token (overrides config).",
    )
    overwrite: bool = Field(
        default=False,
        description="Pre-authorizes replacing an existing dashboard.",
    )


class RequestDescriptor(BaseModel):
    """Everything needed to issue one HTTP call."""

    model_config = ConfigDict(frozen=True)

    method: str = Field(..., min_length=1)
    url: str = Field(..., min_length=1)
    headers: dict[str, str] = Field(default_factory=dict)
    multipart_file: Path | None = Field(
        default=None,
        description="File streamed as multipart field `file`, if any.",
    )


class DispatchResult(BaseModel):
    """Normalized outcome of a dispatched request."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    ok: bool
    url: str
    status_code: int | None = None
    reason: str = ""
    error: DashboardAdminError | None = None

    def raise_for_outcome(self) -> None:
        if not self.ok and self.error is not None:
            raise self.error


class Decision(BaseModel):
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    outcome: Outcome
    error: DashboardAdminError | None = None


class CommandResult(BaseModel):
    """What the CLI should print and how the process should exit."""

    model_config = ConfigDict(frozen=True)

    message: str
    exit_code: int = 0
