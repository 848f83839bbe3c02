"""Connection settings for the mapper.

A :class:`~rowmap.facade.Mapper` is constructed from a plain mapping with the
keys ``host``, ``dbname``, ``user`` and ``password``, or from the
environment (``ROWMAP_DB_HOST``, ``ROWMAP_DB_DBNAME``, ...). Both paths end
in a validated :class:`ConnectionSettings`.

Features:
    - **Required keys enforced:** ``from_mapping()`` names the first missing key
    - **Environment-driven:** ``from_env()`` reads env vars and ``.env``
    - **Explicit wins alone:** ``from_mapping()`` ignores env vars and ``.env``,
      so a mapping without ``driver`` always means MySQL
    - **Extra ignore:** Unknown keys in a mapping or env don't fail startup

Examples:
    >>> settings = ConnectionSettings.from_mapping(
    ...     {"host": "localhost", "dbname": "app", "user": "app", "password": "pw"}
    ... )
    >>> settings.driver
    'mysql'

Tags:
    settings, configuration, pydantic, environment, rowmap
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from rowmap.errors import InvalidConfigError, MissingConfigError

REQUIRED_KEYS = ("host", "dbname", "user", "password")


class ConnectionSettings(BaseSettings):
    """Driver connection parameters.

    Fields
    ──────
    driver    : Registered driver name (``mysql`` or ``sqlite``)
    host      : Database host (ignored by sqlite)
    dbname    : Database name, or the file path for sqlite
    user      : Login user (ignored by sqlite)
    password  : Login password (ignored by sqlite)
    port      : Optional port, driver default when unset
    charset   : Connection character set
    """

    model_config = SettingsConfigDict(
        env_prefix="ROWMAP_DB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    driver: str = "mysql"
    host: str
    dbname: str
    user: str
    password: str
    port: int | None = Field(default=None, ge=1, le=65535)
    charset: str = "utf8mb4"

    @field_validator("driver")
    @classmethod
    def _normalize_driver(cls, value: str) -> str:
        return value.strip().lower()

    @classmethod
    def from_mapping(cls, config: Mapping[str, Any]) -> ConnectionSettings:
        """Build settings from a mapping, requiring ``host, dbname, user, password``."""
        for key in REQUIRED_KEYS:
            if key not in config:
                raise MissingConfigError(key)
        try:
            return _MappingSettings(**dict(config))
        except ValidationError as e:
            raise _invalid(e, config) from e

    @classmethod
    def from_env(cls) -> ConnectionSettings:
        """Build settings from ``ROWMAP_DB_*`` environment variables."""
        try:
            return cls()
        except ValidationError as e:
            for err in e.errors():
                if err["type"] == "missing":
                    raise MissingConfigError(str(err["loc"][0])) from e
            raise _invalid(e, {}) from e


class _MappingSettings(ConnectionSettings):
    """Settings taken from an explicit mapping only."""

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (init_settings,)


def _invalid(e: ValidationError, config: Mapping[str, Any]) -> InvalidConfigError:
    first = e.errors()[0]
    key = str(first["loc"][0]) if first["loc"] else "config"
    return InvalidConfigError(key, config.get(key), f"Invalid connection setting {key}: {first['msg']}")


__all__ = [
    "REQUIRED_KEYS",
    "ConnectionSettings",
]
