"""Driver registry and factory.

Features:
    - ``DriverRegistry`` with pre-registered ``sqlite`` and ``mysql`` drivers
    - ``register()`` for custom / third-party drivers
    - ``get_driver()`` factory: settings → unconnected driver

Tags:
    rowmap, database, registry, factory
"""

from __future__ import annotations

from typing import Any

from rowmap.errors import InvalidConfigError
from rowmap.settings import ConnectionSettings

from .base import Driver
from .mysql import MySQLDriver
from .sqlite import SQLiteDriver


class DriverRegistry:
    """
    Registry for database driver classes.

    Pre-registered drivers:
    - ``sqlite``: :class:`SQLiteDriver`
    - ``mysql`` / ``mariadb``: :class:`MySQLDriver`
    """

    def __init__(self):
        self._factories: dict[str, type[Driver]] = {}
        self._register_defaults()

    def _register_defaults(self) -> None:
        self._factories["sqlite"] = SQLiteDriver
        self._factories["mysql"] = MySQLDriver
        self._factories["mariadb"] = MySQLDriver  # Alias

    def register(self, name: str, driver_class: type[Driver]) -> None:
        """Register a driver class."""
        self._factories[name.lower()] = driver_class

    def create(self, settings: ConnectionSettings, **kwargs: Any) -> Driver:
        """Create a driver for ``settings.driver``."""
        name = settings.driver.lower()
        if name not in self._factories:
            raise InvalidConfigError("driver", settings.driver, f"Unknown database driver: {name}")
        return self._factories[name](settings, **kwargs)

    def list_drivers(self) -> list[str]:
        """List registered driver names."""
        return sorted(self._factories.keys())


# Global registry
driver_registry = DriverRegistry()


def get_driver(settings: ConnectionSettings, **kwargs: Any) -> Driver:
    """
    Get an unconnected driver for the given settings.

    Usage:
        driver = get_driver(ConnectionSettings.from_mapping(config))
        driver.connect()
    """
    return driver_registry.create(settings, **kwargs)


__all__ = [
    "DriverRegistry",
    "driver_registry",
    "get_driver",
]
