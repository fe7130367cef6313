# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Values - read-only, path-aware view over the data under validation."""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from types import MappingProxyType
from typing import Any

from .path import Path, PathSpec
from .types import Unset

__all__ = ("Values",)


class Values(Mapping[Any, Any]):
    """Read-only accessor over a value snapshot.

    Lookups accept any path-compatible spec and dig through nested mappings
    and sequences. A missing entry yields ``Unset``; an entry explicitly set
    to ``None`` yields ``None``.

    Example:
        values = Values({"address": {"city": "Oslo"}, "age": None})
        values["address.city"]           # "Oslo"
        values[{"address": "zip"}]       # Unset
        values.has("age")                # True
    """

    __slots__ = ("_data",)

    def __init__(self, data: Mapping[Any, Any] | Values | None = None) -> None:
        if isinstance(data, Values):
            data = data._data
        self._data: Mapping[Any, Any] = MappingProxyType(dict(data or {}))

    @property
    def data(self) -> Mapping[Any, Any]:
        """Top-level snapshot (read-only proxy)."""
        return self._data

    def __getitem__(self, spec: PathSpec) -> Any:
        found, value = self._dig(spec)
        return value if found else Unset

    def get(self, spec: PathSpec, default: Any = None) -> Any:
        found, value = self._dig(spec)
        return value if found else default

    def has(self, spec: PathSpec) -> bool:
        """Presence test, independent of the stored value's truthiness."""
        return self._dig(spec)[0]

    def __contains__(self, spec: object) -> bool:
        try:
            return self.has(spec)
        except TypeError:
            return False

    def __iter__(self) -> Iterator[Any]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"Values({dict(self._data)!r})"

    def _dig(self, spec: PathSpec) -> tuple[bool, Any]:
        # Plain top-level keys win over dotted interpretation.
        if isinstance(spec, str) and spec in self._data:
            return True, self._data[spec]

        path = Path.of(spec)
        if path.is_root:
            return True, self

        current: Any = self._data
        for segment in path.segments:
            if isinstance(current, Mapping):
                if segment not in current:
                    return False, None
                current = current[segment]
            elif (
                isinstance(segment, int)
                and isinstance(current, Sequence)
                and not isinstance(current, (str, bytes))
            ):
                if not -len(current) <= segment < len(current):
                    return False, None
                current = current[segment]
            else:
                return False, None
        return True, current
