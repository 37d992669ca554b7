"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con colores y layout.
- Cada resultado (éxito, cancelación, fallo) se presenta igual sea cual sea
  el comando que lo produjo.
"""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.text import Text

from core.errors import DashboardAdminError, UnexpectedStatusError


def print_success(console: Console, message: str) -> None:
    console.print(f"[green]{escape(message)}[/green]")


def print_cancelled(console: Console) -> None:
    console.print("[yellow]Upload cancelled.[/yellow]")


def build_failure_text(error: DashboardAdminError) -> Text:
    """Texto del fallo: status HTTP y mensaje del servidor si existen."""

    text = Text("Error: ", style="bold red")
    if isinstance(error, UnexpectedStatusError):
        text.append(f"{error.url} returned HTTP {error.status_code}", style="red")
        text.append(f" (expected {error.expected_status})", style="dim")
        if error.reason:
            text.append(f"\n{error.reason}", style="red")
        return text
    text.append(str(error), style="red")
    return text


def print_failure(console: Console, error: DashboardAdminError) -> None:
    console.print(build_failure_text(error))
