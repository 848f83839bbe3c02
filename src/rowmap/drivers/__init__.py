"""Database drivers -- the connection transport behind the mapper.

Architecture::

    Driver (base.py)                 Abstract base: connect/cursor/prepare
        |-- SQLiteDriver             stdlib sqlite3 (always available)
        |-- MySQLDriver              mysql.connector (optional)

    PreparedStatement (statement.py) bind_value / execute / fetch handle
    DriverRegistry (registry.py)     name -> driver class, get_driver()

Guardrails:
    ❌ ``db.prepare("SELECT * FROM t WHERE id=" + user_input)``
    ✅ ``db.find_one(db.prepare("SELECT * FROM t WHERE id = ?"), [user_input])``
    ❌ Importing optional drivers at module scope
    ✅ Import-guarded at ``connect()`` time with clear ``ConfigError``

Tags:
    rowmap, database, drivers, sqlite, mysql
"""

from .base import Driver
from .mysql import MySQLDriver
from .registry import DriverRegistry, driver_registry, get_driver
from .sqlite import SQLiteDriver
from .statement import PreparedStatement

__all__ = [
    "Driver",
    "PreparedStatement",
    "SQLiteDriver",
    "MySQLDriver",
    "DriverRegistry",
    "driver_registry",
    "get_driver",
]
