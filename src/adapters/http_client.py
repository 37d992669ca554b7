"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeouts, headers y logging de cada petición de administración.
- Facilita testeo: el transporte se sustituye por `httpx.MockTransport`.
- Convierte "respuesta vs. status esperado" en un `DispatchResult`; los
  handlers nunca inspeccionan respuestas crudas.
"""

from __future__ import annotations

import logging
from contextlib import ExitStack
from pathlib import Path

import httpx

from core.auth import auth_headers
from core.config import AppSettings
from core.domain.models import DispatchResult, RequestDescriptor
from core.errors import TransportError, UnexpectedStatusError

logger = logging.getLogger(__name__)


def build_client(
    settings: AppSettings | None = None,
    *,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    """Crea un `httpx.Client` con los defaults del cliente de administración."""

    settings = settings or AppSettings()
    return httpx.Client(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=False,
        headers={"User-Agent": settings.user_agent},
        transport=transport,
    )


def build_request(
    method: str,
    url: str,
    *,
    token: str | None = None,
    multipart_file: Path | None = None,
) -> RequestDescriptor:
    return RequestDescriptor(
        method=method.upper(),
        url=url,
        headers=auth_headers(token),
        multipart_file=multipart_file,
    )


def extract_error_message(response: httpx.Response) -> str | None:
    """Best-effort `message` from a JSON error body. Never raises."""

    try:
        payload = response.json()
    except (ValueError, UnicodeDecodeError, httpx.ResponseNotRead):
        return None
    if not isinstance(payload, dict):
        return None
    message = payload.get("message")
    if isinstance(message, str) and message.strip():
        return message.strip()
    return None


def send(
    client: httpx.Client,
    descriptor: RequestDescriptor,
    *,
    follow_redirects: bool = False,
) -> httpx.Response:
    """Issue the request described by `descriptor`.

    Redirects are not followed unless asked for, so the status seen is the
    server's own reply. Transport failures are re-raised as `TransportError`.
    """

    logger.debug("%s %s", descriptor.method, descriptor.url)
    with ExitStack() as stack:
        files = None
        if descriptor.multipart_file is not None:
            fh = stack.enter_context(descriptor.multipart_file.open("rb"))
            files = {"file": (descriptor.multipart_file.name, fh, "application/octet-stream")}
        try:
            response = client.request(
                descriptor.method,
                descriptor.url,
                headers=descriptor.headers,
                files=files,
                follow_redirects=follow_redirects,
            )
        except httpx.HTTPError as exc:
            logger.debug("%s %s failed: %r", descriptor.method, descriptor.url, exc)
            raise TransportError(
                f"Could not reach {descriptor.url}: {exc}", url=descriptor.url
            ) from exc

    logger.debug("%s %s -> %s", descriptor.method, descriptor.url, response.status_code)
    return response


def dispatch(
    client: httpx.Client,
    descriptor: RequestDescriptor,
    expected_status: int,
) -> DispatchResult:
    """Send the request and compare the status with `expected_status` exactly."""

    try:
        response = send(client, descriptor)
    except TransportError as exc:
        return DispatchResult(ok=False, url=descriptor.url, reason=str(exc), error=exc)

    if response.status_code == expected_status:
        return DispatchResult(ok=True, url=descriptor.url, status_code=response.status_code)

    reason = extract_error_message(response) or ""
    return DispatchResult(
        ok=False,
        url=descriptor.url,
        status_code=response.status_code,
        reason=reason,
        error=UnexpectedStatusError(
            status_code=response.status_code,
            expected_status=expected_status,
            url=descriptor.url,
            reason=reason,
        ),
    )
