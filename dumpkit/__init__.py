"""Stable public API surface for dumpkit.

This module is the supported import path for library users.
"""

from __future__ import annotations

from dumppack.core.values import (
    NULL,
    Bool,
    List,
    Null,
    Number,
    Object,
    String,
    Value,
    from_python,
    to_python,
)
from dumppack.diff import (
    Diff,
    DumpDiffResult,
    MissingInFirst,
    MissingInSecond,
    ValueMismatch,
    diff_values,
    render_diff,
)
from dumppack.parse import (
    MalformedInputError,
    NoOpeningBracketError,
    ParseError,
    ParseOptions,
    parse,
    parse_strict,
)

__version__ = "0.1.0"


def diff(first: Object, second: Object, path_prefix: str = "") -> list[Diff]:
    """Diff two record trees.

    Args:
        first: First record tree.
        second: Second record tree.
        path_prefix: Dotted path prepended to every reported key.

    Returns:
        Divergences in key visiting order, nested records flattened in place.
    """
    return diff_values(first, second, path_prefix)


def diff_dumps(
    first_text: str,
    second_text: str,
    *,
    options: ParseOptions | None = None,
) -> DumpDiffResult:
    """Parse two textual dumps and diff the resulting trees.

    Args:
        first_text: First dump, e.g. `Person[name=Alice, age=30]`.
        second_text: Second dump.
        options: Parser options applied to both inputs.

    Returns:
        Diff result model holding both parsed trees.

    Raises:
        ParseError: Either input could not be parsed.
    """
    first = parse(first_text, options=options)
    second = parse(second_text, options=options)
    return DumpDiffResult(first=first, second=second, diffs=diff_values(first, second))


__all__ = [
    "__version__",
    "Value",
    "Null",
    "Bool",
    "Number",
    "String",
    "List",
    "Object",
    "NULL",
    "Diff",
    "MissingInFirst",
    "MissingInSecond",
    "ValueMismatch",
    "DumpDiffResult",
    "ParseOptions",
    "ParseError",
    "NoOpeningBracketError",
    "MalformedInputError",
    "from_python",
    "to_python",
    "parse",
    "parse_strict",
    "diff",
    "diff_dumps",
    "render_diff",
]
