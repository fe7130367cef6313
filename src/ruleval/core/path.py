# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Path - structural location inside validated data.

A Path is an immutable sequence of key segments (names or indices). The
empty sequence is the root path, used for whole-object rules.

Path-compatible specs accepted by Path.of():
    "age"                      -> ("age",)
    "address.city"             -> ("address", "city")
    ("items", 0, "sku")        -> ("items", 0, "sku")
    {"address": "city"}        -> ("address", "city")
    "items.*.sku"              -> ("items", "*", "sku")
    None                       -> root

A "*" segment is a wildcard: it matches any single segment in prefix
queries (startswith), while equality stays exact.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

__all__ = ("WILDCARD", "Path", "PathSpec", "Segment")

Segment = str | int
PathSpec = Any
"""Anything Path.of() understands: Path, str, int, sequence, mapping, None."""

SEPARATOR = "."
WILDCARD = "*"


class Path(BaseModel):
    """Immutable, hashable key path.

    Attributes:
        segments: Ordered key segments; empty for the root path.
    """

    model_config = ConfigDict(frozen=True)

    segments: tuple[Segment, ...] = Field(default_factory=tuple)

    @classmethod
    def root(cls) -> Path:
        """The root path (no segments)."""
        return _ROOT

    @classmethod
    def of(cls, spec: PathSpec) -> Path:
        """Normalize a path-compatible spec into a Path.

        Raises:
            TypeError: If spec cannot be interpreted as a path.
        """
        if isinstance(spec, Path):
            return spec
        if spec is None:
            return _ROOT
        return cls(segments=tuple(_flatten(spec)))

    @property
    def is_root(self) -> bool:
        return not self.segments

    @property
    def last(self) -> Segment | None:
        """Final segment, or None for the root path."""
        return self.segments[-1] if self.segments else None

    @property
    def parent(self) -> Path:
        """Path without its final segment. The root is its own parent."""
        if not self.segments:
            return self
        return Path(segments=self.segments[:-1])

    def child(self, *segments: PathSpec) -> Path:
        """Extend this path with further segments."""
        extra: list[Segment] = []
        for seg in segments:
            extra.extend(_flatten(seg))
        return Path(segments=self.segments + tuple(extra))

    @property
    def has_wildcard(self) -> bool:
        return WILDCARD in self.segments

    def startswith(self, other: PathSpec) -> bool:
        """True if ``other`` is a prefix of this path (root prefixes everything).

        A ``"*"`` segment on either side matches any single segment, so
        ``items.0.sku`` starts with ``items.*`` and vice versa.
        """
        prefix = Path.of(other).segments
        if len(prefix) > len(self.segments):
            return False
        return all(
            a == b or a == WILDCARD or b == WILDCARD
            for a, b in zip(self.segments, prefix)
        )

    def to_list(self) -> list[Segment]:
        return list(self.segments)

    def __iter__(self) -> Iterator[Segment]:  # type: ignore[override]
        return iter(self.segments)

    def __len__(self) -> int:
        return len(self.segments)

    def __str__(self) -> str:
        return SEPARATOR.join(str(s) for s in self.segments)

    def __repr__(self) -> str:
        if not self.segments:
            return "Path(<root>)"
        return f"Path({str(self)!r})"


def _flatten(spec: PathSpec) -> list[Segment]:
    """Expand a path spec into a flat list of segments."""
    if isinstance(spec, Path):
        return list(spec.segments)
    if spec is None:
        return []
    if isinstance(spec, bool):
        raise TypeError(f"Invalid path segment: {spec!r}")
    if isinstance(spec, int):
        return [spec]
    if isinstance(spec, str):
        return [s for s in spec.split(SEPARATOR) if s] if spec else []
    if isinstance(spec, Mapping):
        if len(spec) != 1:
            raise TypeError(
                f"Nested path mapping must have exactly one entry, got {dict(spec)!r}"
            )
        ((head, tail),) = spec.items()
        return _flatten(head) + _flatten(tail)
    if isinstance(spec, (list, tuple)):
        out: list[Segment] = []
        for item in spec:
            out.extend(_flatten(item))
        return out
    raise TypeError(f"Cannot build a Path from {type(spec).__name__}: {spec!r}")


_ROOT = Path()
