"""Contrato de confirmación interactiva.

Por qué Protocol:
- El pipeline de conflictos solo necesita un sí/no; de dónde viene (terminal,
  doble de test, otra interfaz) no le importa al Core.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Confirmer(Protocol):
    """Answers a yes/no question; `False` means "no"."""

    def confirm(self, question: str) -> bool:
        ...
