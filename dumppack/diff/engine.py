"""Recursive structural diff over `Object` value trees."""

from __future__ import annotations

from dumppack.core.values import Object
from dumppack.diff.models import Diff, MissingInFirst, MissingInSecond, ValueMismatch


def diff_values(first: Object, second: Object, path_prefix: str = "") -> list[Diff]:
    """Diff two record trees and return every divergence by dotted path.

    Keys are visited in first-tree order, then keys only the second tree
    has. Nested records are recursed into and their diffs are flattened in
    place; the parent key never produces an entry of its own. Lists are
    compared as whole values, never element by element.
    """
    diffs: list[Diff] = []
    _collect_diffs(first, second, path_prefix=path_prefix, out=diffs)
    return diffs


def _collect_diffs(first: Object, second: Object, *, path_prefix: str, out: list[Diff]) -> None:
    keys = list(first.keys())
    keys.extend(key for key in second.keys() if key not in first)

    for key in keys:
        path = f"{path_prefix}.{key}" if path_prefix else key

        if key not in first:
            out.append(MissingInFirst(path=path, value_in_second=second[key]))
            continue
        if key not in second:
            out.append(MissingInSecond(path=path, value_in_first=first[key]))
            continue

        left_value = first[key]
        right_value = second[key]
        if isinstance(left_value, Object) and isinstance(right_value, Object):
            _collect_diffs(left_value, right_value, path_prefix=path, out=out)
            continue

        if left_value != right_value:
            out.append(
                ValueMismatch(
                    path=path,
                    value_in_first=left_value,
                    value_in_second=right_value,
                )
            )
