"""Errores del cliente de administración.

Jerarquía plana: el Core y los adaptadores lanzan, solo la CLI captura y
convierte en código de salida.
"""

from __future__ import annotations


class DashboardAdminError(Exception):
    pass


class ConfigLoadError(DashboardAdminError):
    pass


class ValidationError(DashboardAdminError):
    pass


class TransportError(DashboardAdminError):
    """The server could not be reached (DNS, refused connection, timeout)."""

    def __init__(self, message: str, *, url: str | None = None) -> None:
        super().__init__(message)
        self.url = url


class UnexpectedStatusError(DashboardAdminError):
    """A response arrived but its status is not the one the operation requires."""

    def __init__(
        self,
        *,
        status_code: int,
        expected_status: int,
        url: str,
        reason: str | None = None,
    ) -> None:
        self.status_code = status_code
        self.expected_status = expected_status
        self.url = url
        self.reason = reason or ""
        detail = f"HTTP {status_code} (expected {expected_status})"
        if self.reason:
            detail = f"{detail}: {self.reason}"
        super().__init__(detail)


class ConflictDeclined(DashboardAdminError):
    """The operator refused to overwrite an existing dashboard."""

    def __init__(self, destination: str) -> None:
        super().__init__(f"Overwrite of {destination} declined")
        self.destination = destination
