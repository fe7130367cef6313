# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Result view: read access to failures recorded earlier in a validation pass.

RuleContext only needs the ResultView protocol. ValidationResult is the
concrete accumulator an orchestrator merges each context's failures into.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, Protocol, runtime_checkable

from ruleval.core.failures import FailureRecord
from ruleval.core.path import Path, PathSpec
from ruleval.core.values import Values

__all__ = ("ResultView", "ValidationResult")


@runtime_checkable
class ResultView(Protocol):
    """Answers whether a path already carries a failure."""

    def has_failure_at(self, path: PathSpec) -> bool: ...


class ValidationResult:
    """Ordered failures of one validation pass.

    A failure counts for a queried path when it was recorded at that path
    or beneath it. Base failures count for the root path only. A "*"
    segment in the queried path matches any single segment.
    """

    def __init__(
        self,
        values: Mapping[Any, Any] | Values | None = None,
        failures: Iterable[FailureRecord] = (),
    ) -> None:
        self.values = values if isinstance(values, Values) else Values(values)
        self._failures: list[FailureRecord] = list(failures)

    @property
    def failures(self) -> tuple[FailureRecord, ...]:
        return tuple(self._failures)

    @property
    def base_failures(self) -> tuple[FailureRecord, ...]:
        return tuple(f for f in self._failures if f.path is None)

    def add_failures(self, records: Iterable[FailureRecord]) -> ValidationResult:
        """Merge records (typically a context's failures()) and return self."""
        self._failures.extend(records)
        return self

    def failures_at(self, path: PathSpec) -> list[FailureRecord]:
        target = Path.of(path)
        return [f for f in self._failures if _covers(f, target)]

    def has_failure_at(self, path: PathSpec) -> bool:
        target = Path.of(path)
        return any(_covers(f, target) for f in self._failures)

    def is_success(self) -> bool:
        return not self._failures

    def to_dict(self) -> dict[str | None, list[dict[str, Any]]]:
        """Group records by dotted path; base failures under the None key."""
        grouped: dict[str | None, list[dict[str, Any]]] = {}
        for record in self._failures:
            key = None if record.path is None else str(record.path)
            grouped.setdefault(key, []).append(record.to_dict())
        return grouped

    def __len__(self) -> int:
        return len(self._failures)

    def __repr__(self) -> str:
        return f"ValidationResult(failures={len(self._failures)})"


def _covers(record: FailureRecord, target: Path) -> bool:
    if record.path is None:
        return target.is_root
    return record.path.startswith(target)
