"""Confirmación en terminal (typer)."""

from __future__ import annotations

import typer

from core.interfaces.confirmer import Confirmer


class TerminalConfirmer(Confirmer):
    """Asks on the attended terminal; blocks until answered, no timeout.

    Accepts y/yes/n/no in any case and re-asks on anything else. An empty
    answer, end of input or Ctrl-C all mean "no".
    """

    def confirm(self, question: str) -> bool:
        try:
            return typer.confirm(question, default=False)
        except typer.Abort:
            return False
