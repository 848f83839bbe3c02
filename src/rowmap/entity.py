"""
Entity contract and per-type field descriptor tables.

An entity is any object with an integer ``id`` (``0`` while transient) and a
getter/setter for every other persisted field. The simplest entity is a
dataclass deriving from :class:`Entity`::

    @dataclass
    class User(Entity):
        name: str | None = None

Each entity type gets a **field descriptor table** built once, on first use:
an ordered tuple of ``(column, getter, setter, convert)`` in field
declaration order. Nothing is looked up by name at call time after that.

Manifesto:
    - **Registered once:** Descriptor tables are cached per type
    - **Explicit storage name:** ``table_name()`` defaults to the lowercased
      type name, ``__table__`` overrides it
    - **Typed conversion:** ``int`` fields coerce numeric text, ``str`` fields
      keep text, unannotated fields fall back to numeric sniffing
    - **Duck-typed accessors:** A ``get_<name>`` / ``set_<name>`` method wins
      over plain attribute access

Architecture:
    ::

        User ──describe()──► (FieldDescriptor("id",   getter, setter, to_int),
                              FieldDescriptor("name", getter, setter, to_str))
                 │
                 ├── from_row({"id": "7", "NAME": "Bob"}) → User(id=7, name="Bob")
                 └── to_row()                              → {"id": 7, "name": "Bob"}

Tags:
    entity, descriptor-table, hydration, rowmap

Doc-Types:
    - API Reference
"""

from __future__ import annotations

import dataclasses
import operator
import re
import types
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, ClassVar, TypeVar, Union, get_args, get_origin, get_type_hints

from rowmap.errors import MappingError

E = TypeVar("E")

TRANSIENT_ID = 0

_NUMERIC = re.compile(r"^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?\s*$")


# =============================================================================
# CONVERSIONS
# =============================================================================


def is_numeric(value: Any) -> bool:
    """True for numbers and for text that looks like a number."""
    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float, Decimal)):
        return True
    return isinstance(value, str) and _NUMERIC.match(value) is not None


def sniff(value: Any) -> Any:
    """Coerce numeric-looking values to ``int``, pass everything else through."""
    if not is_numeric(value):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            pass
    try:
        return int(float(value))
    except OverflowError:
        return value


def to_int(value: Any) -> Any:
    """Converter for ``int`` fields."""
    if value is None or isinstance(value, bool):
        return value
    return sniff(value)


def to_str(value: Any) -> Any:
    """Converter for ``str`` fields."""
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, (bytes, bytearray)):
        return value.decode("utf-8")
    return str(value)


def _converter_for(annotation: Any) -> Callable[[Any], Any]:
    if isinstance(annotation, str):
        text = annotation.replace(" ", "")
        if text.startswith("Optional[") and text.endswith("]"):
            text = text[len("Optional["):-1]
        members = set(text.split("|")) - {"None"}
        base = members.pop() if len(members) == 1 else None
        return {"int": to_int, "str": to_str}.get(base, sniff)

    if get_origin(annotation) in (Union, types.UnionType):
        members = [arg for arg in get_args(annotation) if arg is not type(None)]
        annotation = members[0] if len(members) == 1 else None
    if annotation is int:
        return to_int
    if annotation is str:
        return to_str
    return sniff


# =============================================================================
# DESCRIPTORS
# =============================================================================


@dataclass(frozen=True, slots=True)
class FieldDescriptor:
    """One persisted field: its column name and how to read, write and convert it."""

    column: str
    getter: Callable[[Any], Any]
    setter: Callable[[Any, Any], None]
    convert: Callable[[Any], Any] = sniff


def _attr_setter(name: str) -> Callable[[Any, Any], None]:
    def _set(entity: Any, value: Any) -> None:
        setattr(entity, name, value)

    return _set


def _field_names(entity_type: type) -> tuple[str, ...]:
    declared = getattr(entity_type, "__fields__", None)
    if declared:
        return tuple(declared)
    if dataclasses.is_dataclass(entity_type):
        return tuple(f.name for f in dataclasses.fields(entity_type))
    raise MappingError(
        f"{entity_type.__name__} declares no persisted fields; "
        "make it a dataclass or set __fields__"
    )


def _hints(entity_type: type) -> dict[str, Any]:
    try:
        return get_type_hints(entity_type)
    except (NameError, TypeError):
        # Unresolvable forward references: fall back to the raw annotations
        hints: dict[str, Any] = {}
        for klass in reversed(entity_type.__mro__):
            hints.update(getattr(klass, "__annotations__", {}))
        return hints


_DESCRIPTORS: dict[type, tuple[FieldDescriptor, ...]] = {}


def describe(entity_type: type) -> tuple[FieldDescriptor, ...]:
    """Field descriptor table for ``entity_type``, built once and cached."""
    cached = _DESCRIPTORS.get(entity_type)
    if cached is not None:
        return cached

    names = _field_names(entity_type)
    if "id" not in names:
        raise MappingError(f"{entity_type.__name__} must declare an 'id' field")

    hints = _hints(entity_type)
    table = []
    for name in names:
        getter = getattr(entity_type, f"get_{name}", None)
        setter = getattr(entity_type, f"set_{name}", None)
        table.append(
            FieldDescriptor(
                column=name,
                getter=getter if callable(getter) else operator.attrgetter(name),
                setter=setter if callable(setter) else _attr_setter(name),
                convert=_converter_for(hints[name]) if name in hints else sniff,
            )
        )

    descriptors = tuple(table)
    _DESCRIPTORS[entity_type] = descriptors
    return descriptors


def table_name(entity_type: type) -> str:
    """Storage table for an entity type."""
    method = getattr(entity_type, "table_name", None)
    if callable(method):
        return method()
    return getattr(entity_type, "__table__", None) or entity_type.__name__.lower()


def get_id(entity: Any) -> int:
    """Read an entity's id through its descriptor."""
    for descriptor in describe(type(entity)):
        if descriptor.column == "id":
            value = descriptor.getter(entity)
            return TRANSIENT_ID if value is None else int(value)
    raise MappingError(f"{type(entity).__name__} must declare an 'id' field")


def build(entity_type: type[E], row: Mapping[str, Any]) -> E:
    """Create an ``entity_type`` instance and set every column that has a field.

    Columns are matched case-insensitively; columns without a field are
    skipped.
    """
    try:
        entity = entity_type()
    except TypeError as e:
        raise MappingError(
            f"{entity_type.__name__} must be constructible without arguments",
            cause=e,
        ) from e

    by_column = {d.column.lower(): d for d in describe(entity_type)}
    for column, value in row.items():
        descriptor = by_column.get(str(column).lower())
        if descriptor is None:
            continue
        descriptor.setter(entity, descriptor.convert(value))
    return entity


def unbuild(entity: Any) -> dict[str, Any]:
    """Field values of ``entity`` keyed by column, in declaration order."""
    return {d.column: d.getter(entity) for d in describe(type(entity))}


# =============================================================================
# BASE CLASS
# =============================================================================


@dataclass
class Entity:
    """
    Base class for mapped entities.

    Declares the ``id`` field with the transient sentinel ``0`` as default,
    so subclasses list their own fields after it (all with defaults).
    Override ``table_name``, ``from_row`` or ``to_row`` for a custom mapping.
    """

    __table__: ClassVar[str | None] = None

    id: int = TRANSIENT_ID

    @classmethod
    def table_name(cls) -> str:
        return cls.__table__ or cls.__name__.lower()

    @classmethod
    def descriptors(cls) -> tuple[FieldDescriptor, ...]:
        return describe(cls)

    @classmethod
    def from_row(cls: type[E], row: Mapping[str, Any]) -> E:
        return build(cls, row)

    def to_row(self) -> dict[str, Any]:
        return unbuild(self)

    @property
    def is_transient(self) -> bool:
        return get_id(self) == TRANSIENT_ID


__all__ = [
    "TRANSIENT_ID",
    "Entity",
    "FieldDescriptor",
    "describe",
    "table_name",
    "get_id",
    "build",
    "unbuild",
    "is_numeric",
    "sniff",
    "to_int",
    "to_str",
]
