"""
rowmap - minimal convention-based object-relational mapping.

Binds plain entities to table rows by name: the table is the entity type
name lowercased, the columns are its fields, and ``id == 0`` marks an entity
that has not been stored yet.

Modules
-------
facade          Mapper: get / find_one / find_all / persist / delete
entity          Entity base class and field descriptor tables
mapper          RowMapper: hydrate rows, extract fields
binder          ParameterBinder: positional vs. named binding, execution
statements      StatementBuilder: CRUD SQL text
sanitize        Identifier normalization
drivers         SQLite and MySQL drivers, prepared statements
dialect         Placeholder translation per backend
settings        ConnectionSettings (pydantic-settings)
errors          Typed error hierarchy
result          Ok / Err result envelope
diagnostics     Fatal-failure reporting for top-level applications
logging         structlog configuration
"""

from rowmap.binder import ParameterBinder, is_positional
from rowmap.entity import TRANSIENT_ID, Entity, FieldDescriptor
from rowmap.errors import (
    BindError,
    ConfigError,
    DatabaseConnectionError,
    DatabaseError,
    ExecutionError,
    MappingError,
    MissingConfigError,
    RowmapError,
)
from rowmap.facade import Mapper
from rowmap.mapper import RowMapper
from rowmap.result import Err, Ok, Result
from rowmap.sanitize import sanitize
from rowmap.settings import ConnectionSettings
from rowmap.statements import StatementBuilder

__version__ = "0.1.0"

__all__ = [
    "Mapper",
    "Entity",
    "FieldDescriptor",
    "TRANSIENT_ID",
    "RowMapper",
    "ParameterBinder",
    "is_positional",
    "StatementBuilder",
    "sanitize",
    "ConnectionSettings",
    "Ok",
    "Err",
    "Result",
    "RowmapError",
    "ConfigError",
    "MissingConfigError",
    "DatabaseConnectionError",
    "DatabaseError",
    "ExecutionError",
    "BindError",
    "MappingError",
]
