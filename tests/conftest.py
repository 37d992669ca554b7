"""Shared fixtures: isolated config, scripted dashboard server, CLI runner."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Callable

import httpx
import pytest
from typer.testing import CliRunner

BASE_URL = "http://dash.test:3000"


class RecordingServer:
    """Scripted dashboard server backed by `httpx.MockTransport`.

    `routes` maps `(method, path)` to a status code or an `httpx.Response`;
    unrouted requests get 500. Every request is kept in `requests`.
    """

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], int | httpx.Response | Exception] = {}
        self.requests: list[httpx.Request] = []
        self.bodies: list[bytes] = []

    def route(self, method: str, path: str, reply: int | httpx.Response | Exception) -> None:
        self.routes[(method.upper(), path)] = reply

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        self.bodies.append(request.read())
        reply = self.routes.get((request.method, request.url.path), 500)
        if isinstance(reply, Exception):
            raise reply
        if isinstance(reply, httpx.Response):
            return reply
        return httpx.Response(reply)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def calls(self, method: str | None = None) -> list[httpx.Request]:
        if method is None:
            return list(self.requests)
        return [r for r in self.requests if r.method == method.upper()]


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "DASHBOARD_ADMIN_CONFIG",
        "DASHBOARD_ADMIN_IP",
        "DASHBOARD_ADMIN_PORT",
        "DASHBOARD_ADMIN_PUBLIC_LINK_PATTERN",
        "DASHBOARD_ADMIN_AUTH_TOKEN",
        "DASHBOARD_ADMIN_HTTP_TIMEOUT_SECONDS",
        "DASHBOARD_ADMIN_USER_AGENT",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def server() -> RecordingServer:
    return RecordingServer()


@pytest.fixture
def write_config(tmp_path: Path) -> Callable[..., Path]:
    def _write(text: str | None = None, **values: object) -> Path:
        path = tmp_path / "config.json"
        if text is None:
            defaults: dict[str, object] = {"IP": "dash.test", "PORT": 3000}
            defaults.update(values)
            text = json.dumps(defaults)
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def config_path(write_config: Callable[..., Path]) -> Path:
    return write_config()


@pytest.fixture
def notebook(tmp_path: Path) -> Path:
    path = tmp_path / "sales.ipynb"
    path.write_text('{"cells": [], "nbformat": 4, "nbformat_minor": 5}', encoding="utf-8")
    return path


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()
