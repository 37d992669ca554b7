"""Configuración del Core.

Por qué aquí:
- Centraliza los defaults del servidor (host, puerto, patrón de enlace, token)
  leídos del `config.json` (JSON relajado) y de las variables
  `DASHBOARD_ADMIN_*`, sin ensuciar la CLI con el parseo del fichero.
- La configuración se carga una vez por proceso y se pasa explícitamente a
  resolvers y handlers; nadie la busca de forma global.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import json5
from pydantic import Field
from pydantic import ValidationError as PydanticValidationError
from pydantic.fields import FieldInfo
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from core.errors import ConfigLoadError

CONFIG_ENV_VAR = "DASHBOARD_ADMIN_CONFIG"
DEFAULT_LINK_PATTERN = "{protocol}://{host}:{port}"


def _project_root() -> Path:
    # core/config.py -> core -> src -> <project_root>
    return Path(__file__).resolve().parents[2]


def default_config_path() -> Path:
    override = (os.environ.get(CONFIG_ENV_VAR) or "").strip()
    if override:
        return Path(override)
    return _project_root() / "config.json"


def read_config_file(path: Path) -> dict[str, Any]:
    """Parse a JSON5 config document and return its keys lower-cased.

    Comments, trailing commas and unquoted keys are accepted. Anything that is
    not an object is rejected.
    """

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigLoadError(f"Cannot read config file {path}: {exc}") from exc

    try:
        data = json5.loads(raw)
    except ValueError as exc:
        raise ConfigLoadError(f"Malformed config file {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigLoadError(f"Config file {path} must contain an object")
    return {str(key).lower(): value for key, value in data.items()}


class ConfigFileSettingsSource(PydanticBaseSettingsSource):
    """Settings source backed by the file named in `model_config["config_file"]`."""

    def __init__(self, settings_cls: type[BaseSettings]) -> None:
        super().__init__(settings_cls)
        path = self.config.get("config_file")
        self._data: dict[str, Any] = {}
        if path is not None:
            self._data = read_config_file(Path(path))

    def get_field_value(self, field: FieldInfo, field_name: str) -> tuple[Any, str, bool]:
        return self._data.get(field_name), field_name, False

    def __call__(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        for field_name, field in self.settings_cls.model_fields.items():
            value, key, _ = self.get_field_value(field, field_name)
            if value is not None:
                out[key] = value
        return out


class AppSettings(BaseSettings):
    """Configuración central del cliente.

    Precedencia: kwargs > variables `DASHBOARD_ADMIN_*` > fichero de config >
    defaults. Los overrides de la línea de comandos los aplican los resolvers.
    """

    model_config = SettingsConfigDict(
        env_prefix="DASHBOARD_ADMIN_",
        extra="ignore",
        case_sensitive=False,
        frozen=True,
    )

    ip: str = Field(
        default="127.0.0.1",
        description="Address of the dashboard server.",
    )
    port: int = Field(
        default=3000,
        ge=1,
        le=65535,
        description="Port of the dashboard server.",
    )
    public_link_pattern: str = Field(
        default=DEFAULT_LINK_PATTERN,
        description="Template for the server base URL ({protocol}, {host}, {port}).",
    )
    auth_token: str | None = Field(
        default=None,
        description="Token sent as `Authorization: token <t>`.",
    )

    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout per request (seconds).",
    )
    user_agent: str = Field(
        default="dashboard-admin/0.1",
        min_length=1,
        description="User-Agent for admin requests.",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (init_settings, env_settings, ConfigFileSettingsSource(settings_cls))

    def get(self, key: str) -> Any:
        """Look up a config-file key (`"PORT"`, `"AUTH_TOKEN"`...); None if unknown."""

        name = key.lower()
        if name not in type(self).model_fields:
            return None
        return getattr(self, name)


def load_settings(config_path: Path | str | None = None) -> AppSettings:
    """Build the process settings from the config file.

    A missing file at the default location means "defaults only"; a missing
    file that was asked for explicitly is an error.
    """

    explicit = config_path is not None or bool(os.environ.get(CONFIG_ENV_VAR))
    path = Path(config_path) if config_path is not None else default_config_path()

    config_file: Path | None = path
    if not path.is_file():
        if explicit:
            raise ConfigLoadError(f"Config file not found: {path}")
        config_file = None

    bound = type(
        AppSettings.__name__,
        (AppSettings,),
        {
            "__module__": __name__,
            "model_config": {**AppSettings.model_config, "config_file": config_file},
        },
    )
    try:
        return bound()
    except PydanticValidationError as exc:
        raise ConfigLoadError(f"Invalid configuration in {path}: {exc}") from exc
