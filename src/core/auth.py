"""Resolución del token de autorización."""

from __future__ import annotations


def resolve_token(cli_value: str | None, config_value: str | None) -> str | None:
    """Pick the bearer token: an explicit command-line value always wins.

    Empty strings count as "not given".
    """

    if cli_value:
        return cli_value
    if config_value:
        return config_value
    return None


def auth_headers(token: str | None) -> dict[str, str]:
    if not token:
        return {}
    return {"Authorization": f"token {token}"}
