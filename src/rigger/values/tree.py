"""
In-memory value tree model.

A value tree is the nested structure produced by decoding a YAML values
file: mappings with string keys, sequences, and scalars. Plain Python
containers are used directly (dict, list, str, int, float, bool, None)
so trees round-trip through PyYAML and Jinja2 without conversion.

ValuePath is the canonical address of a node: dot-joined mapping keys
with bracketed sequence indices, e.g. ``services.web.ports[0]``.
"""

from __future__ import annotations

import dataclasses as _dataclasses
import enum as _enum
import typing as _typing

# Recursive alias for documentation and type checking
if _typing.TYPE_CHECKING:
    Value: _typing.TypeAlias = (
        None | bool | int | float | str | list["Value"] | dict[str, "Value"]
    )
else:
    Value: _typing.TypeAlias = _typing.Any

Mapping: _typing.TypeAlias = dict[str, _typing.Any]


class ValueKind(_enum.Enum):
    """Closed set of node kinds in a value tree."""

    NULL = "null"
    BOOL = "bool"
    NUMBER = "number"
    STRING = "string"
    SEQUENCE = "sequence"
    MAPPING = "mapping"


def kind_of(value: Value) -> ValueKind:
    """
    Classify a tree node.

    Raises:
        TypeError: If the value is not a valid tree node type.
    """
    if value is None:
        return ValueKind.NULL
    # bool before number: bool is a subclass of int
    if isinstance(value, bool):
        return ValueKind.BOOL
    if isinstance(value, (int, float)):
        return ValueKind.NUMBER
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, list):
        return ValueKind.SEQUENCE
    if isinstance(value, dict):
        return ValueKind.MAPPING
    raise TypeError(f"Unsupported value type in tree: {type(value).__name__}")


def type_name(value: Value) -> str:
    """Human-readable kind name for error messages."""
    try:
        return kind_of(value).value
    except TypeError:
        return type(value).__name__


@_dataclasses.dataclass(frozen=True, slots=True)
class ValuePath:
    """
    Canonical address of a node in a value tree.

    Two paths are equal iff their canonical strings are equal.
    """

    value: str = ""

    ROOT: _typing.ClassVar[ValuePath]

    def child(self, key: str) -> ValuePath:
        """Path of a mapping field below this path."""
        if not self.value:
            return ValuePath(key)
        return ValuePath(f"{self.value}.{key}")

    def index(self, idx: int) -> ValuePath:
        """Path of a sequence element below this path."""
        return ValuePath(f"{self.value}[{idx}]")

    @property
    def is_root(self) -> bool:
        return not self.value

    def __str__(self) -> str:
        return self.value


ValuePath.ROOT = ValuePath("")
