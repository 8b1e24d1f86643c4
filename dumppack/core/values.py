"""Generic value tree produced by the dump parser and consumed by the differ."""

from __future__ import annotations

from dataclasses import dataclass, field
import json
import math
from types import MappingProxyType
from typing import Any, Iterator, Mapping


@dataclass(frozen=True, slots=True)
class Null:
    """Explicit null (`null` or `<null>` in a dump)."""


@dataclass(frozen=True, slots=True)
class Bool:
    value: bool


@dataclass(frozen=True, slots=True)
class Number:
    value: float


@dataclass(frozen=True, slots=True)
class String:
    """Fallback for any token that is not null, bool, number or structure."""

    value: str


@dataclass(frozen=True, slots=True)
class List:
    items: tuple[Value, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "items", tuple(self.items))

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[Value]:
        return iter(self.items)


@dataclass(frozen=True, slots=True)
class Object:
    """Keyed record; entries are read-only and compare order-insensitively."""

    entries: Mapping[str, Value] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "entries", MappingProxyType(dict(self.entries)))

    def __hash__(self) -> int:
        return hash(frozenset(self.entries.items()))

    def __contains__(self, key: object) -> bool:
        return key in self.entries

    def __getitem__(self, key: str) -> Value:
        return self.entries[key]

    def __len__(self) -> int:
        return len(self.entries)

    def get(self, key: str, default: Value | None = None) -> Value | None:
        return self.entries.get(key, default)

    def keys(self) -> list[str]:
        return list(self.entries.keys())

    def items(self) -> list[tuple[str, Value]]:
        return list(self.entries.items())


Value = Null | Bool | Number | String | List | Object

NULL = Null()

VALUE_TYPES = (Null, Bool, Number, String, List, Object)


def from_python(obj: Any) -> Value:
    """Build a value tree from plain Python data."""
    if obj is None:
        return NULL
    if isinstance(obj, VALUE_TYPES):
        return obj
    if isinstance(obj, bool):
        return Bool(obj)
    if isinstance(obj, (int, float)):
        return Number(float(obj))
    if isinstance(obj, str):
        return String(obj)
    if isinstance(obj, (list, tuple)):
        return List(tuple(from_python(item) for item in obj))
    if isinstance(obj, dict):
        return Object({str(key): from_python(item) for key, item in obj.items()})
    raise TypeError(f"cannot convert {type(obj).__name__} to a value tree")


def to_python(value: Value) -> Any:
    """Convert a value tree to JSON-compatible Python data."""
    if isinstance(value, Null):
        return None
    if isinstance(value, Bool):
        return value.value
    if isinstance(value, Number):
        number = value.value
        if math.isfinite(number) and number.is_integer():
            return int(number)
        return number
    if isinstance(value, String):
        return value.value
    if isinstance(value, List):
        return [to_python(item) for item in value.items]
    if isinstance(value, Object):
        return {key: to_python(item) for key, item in value.entries.items()}
    raise TypeError(f"unsupported value: {value!r}")


def render_value(value: Value) -> str:
    return json.dumps(
        to_python(value),
        ensure_ascii=False,
        sort_keys=True,
        separators=(",", ":"),
    )
