# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Sentinel values distinguishing "absent" from an explicit ``None``."""

from __future__ import annotations

from typing import Any, ClassVar, Final

from typing_extensions import Self

__all__ = ("Unset", "UnsetType", "is_sentinel", "not_sentinel")


class UnsetType:
    """Singleton marker for a key with no entry in the value snapshot."""

    __slots__ = ()
    _instance: ClassVar[UnsetType | None] = None

    def __new__(cls) -> Self:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "Unset"

    def __copy__(self) -> Self:
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> Self:
        return self

    def __reduce__(self) -> str:
        return "Unset"


Unset: Final = UnsetType()


def is_sentinel(value: Any) -> bool:
    """True if value is the Unset marker."""
    return value is Unset


def not_sentinel(value: Any) -> bool:
    """True if value carries data (``None`` included)."""
    return value is not Unset
