"""Value tree model for dumpkit."""

from dumppack.core.values import (
    NULL,
    VALUE_TYPES,
    Bool,
    List,
    Null,
    Number,
    Object,
    String,
    Value,
    from_python,
    render_value,
    to_python,
)

__all__ = [
    "NULL",
    "VALUE_TYPES",
    "Value",
    "Null",
    "Bool",
    "Number",
    "String",
    "List",
    "Object",
    "from_python",
    "to_python",
    "render_value",
]
