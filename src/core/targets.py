"""Construcción de URLs destino.

Funciones puras: mismas entradas, misma URL.
"""

from __future__ import annotations

from urllib.parse import quote

from core.config import DEFAULT_LINK_PATTERN

_WILDCARD_ADDRESSES = {"", "0.0.0.0", "::", "[::]"}


def resolve_host(ip: str, port: int | str, pattern: str | None = None) -> str:
    """Substitute host/port into the public link pattern to get the base URL.

    A server bound to a wildcard address is reached through `localhost`.
    """

    host = ip.strip()
    if host in _WILDCARD_ADDRESSES:
        host = "localhost"

    template = (pattern or "").strip() or DEFAULT_LINK_PATTERN
    url = (
        template.replace("{protocol}", "http")
        .replace("{host}", host)
        .replace("{ip}", host)
        .replace("{port}", str(port))
    )
    return url.rstrip("/")


def normalize_host(value: str) -> str:
    """Normalize a `--host` override (`myserver:3000` -> `http://myserver:3000`)."""

    host = value.strip()
    if "://" not in host:
        host = f"http://{host}"
    return host.rstrip("/")


def resolve_target(base: str, *subpaths: str) -> str:
    """Join `base` and `subpaths` with exactly one slash between segments.

    Subpath segments are percent-quoted, so `#`, `?` or spaces stay part of
    the path.
    """

    scheme, sep, rest = base.partition("://")
    if not sep:
        scheme, rest = "", base

    segments = [s for s in rest.split("/") if s]
    for subpath in subpaths:
        segments.extend(quote(s, safe="") for s in subpath.split("/") if s)

    joined = "/".join(segments)
    return f"{scheme}://{joined}" if sep else joined
