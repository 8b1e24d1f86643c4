"""CLI-friendly rendering for diff results."""

from __future__ import annotations

from dumppack.core.values import render_value
from dumppack.diff.models import Diff, DumpDiffResult, MissingInFirst, MissingInSecond, ValueMismatch


def render_diff(entry: Diff) -> str:
    if isinstance(entry, MissingInFirst):
        return f"{entry.path}: missing in first (second has {render_value(entry.value_in_second)})"
    if isinstance(entry, MissingInSecond):
        return f"{entry.path}: missing in second (first has {render_value(entry.value_in_first)})"
    if isinstance(entry, ValueMismatch):
        return (
            f"{entry.path}: {render_value(entry.value_in_first)} -> "
            f"{render_value(entry.value_in_second)}"
        )
    raise TypeError(f"unsupported diff entry: {entry!r}")


def render_diff_summary(result: DumpDiffResult) -> str:
    summary = result.summary()
    return (
        f"identical={str(result.identical).lower()} "
        f"missing_in_first={summary['missing_in_first']} "
        f"missing_in_second={summary['missing_in_second']} "
        f"value_mismatch={summary['value_mismatch']}"
    )


def render_diff_report(result: DumpDiffResult, *, max_changes: int = 8) -> str:
    if result.identical:
        return "no divergence detected"

    limit = max(1, max_changes)
    lines = [f"differences: {len(result.diffs)}"]
    for entry in result.diffs[:limit]:
        lines.append(f"  {render_diff(entry)}")

    remaining = len(result.diffs) - limit
    if remaining > 0:
        lines.append(f"  ... {remaining} additional difference(s) omitted")
    return "\n".join(lines)
