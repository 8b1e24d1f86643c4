"""Diff subsystem for dumpkit."""

from dumppack.diff.engine import diff_values
from dumppack.diff.formatting import render_diff, render_diff_report, render_diff_summary
from dumppack.diff.models import (
    DIFF_KINDS,
    Diff,
    DiffKind,
    DumpDiffResult,
    MissingInFirst,
    MissingInSecond,
    ValueMismatch,
    summarize_diffs,
)

__all__ = [
    "DIFF_KINDS",
    "Diff",
    "DiffKind",
    "MissingInFirst",
    "MissingInSecond",
    "ValueMismatch",
    "DumpDiffResult",
    "diff_values",
    "summarize_diffs",
    "render_diff",
    "render_diff_summary",
    "render_diff_report",
]
