"""Data models for value tree diffs."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Literal

from dumppack.core.values import Object, Value, to_python

DiffKind = Literal["missing_in_first", "missing_in_second", "value_mismatch"]

DIFF_KINDS: tuple[str, ...] = ("missing_in_first", "missing_in_second", "value_mismatch")


@dataclass(frozen=True, slots=True)
class MissingInFirst:
    """Key present only in the second tree."""

    kind: ClassVar[DiffKind] = "missing_in_first"

    path: str
    value_in_second: Value

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "path": self.path,
            "value_in_second": to_python(self.value_in_second),
        }


@dataclass(frozen=True, slots=True)
class MissingInSecond:
    """Key present only in the first tree."""

    kind: ClassVar[DiffKind] = "missing_in_second"

    path: str
    value_in_first: Value

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "path": self.path,
            "value_in_first": to_python(self.value_in_first),
        }


@dataclass(frozen=True, slots=True)
class ValueMismatch:
    """Key present in both trees with unequal, non-record values."""

    kind: ClassVar[DiffKind] = "value_mismatch"

    path: str
    value_in_first: Value
    value_in_second: Value

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "path": self.path,
            "value_in_first": to_python(self.value_in_first),
            "value_in_second": to_python(self.value_in_second),
        }


Diff = MissingInFirst | MissingInSecond | ValueMismatch


def summarize_diffs(diffs: list[Diff]) -> dict[str, int]:
    counts = {kind: 0 for kind in DIFF_KINDS}
    for entry in diffs:
        counts[entry.kind] += 1
    return counts


@dataclass(slots=True)
class DumpDiffResult:
    """Structured diff of two parsed dumps."""

    first: Object
    second: Object
    diffs: list[Diff]

    @property
    def identical(self) -> bool:
        return not self.diffs

    def summary(self) -> dict[str, int]:
        return summarize_diffs(self.diffs)

    def to_dict(self) -> dict[str, Any]:
        return {
            "identical": self.identical,
            "summary": self.summary(),
            "diffs": [entry.to_dict() for entry in self.diffs],
        }
