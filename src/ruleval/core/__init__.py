# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Core primitives: paths, failures, values, shared store, sentinels."""

from __future__ import annotations

from typing import TYPE_CHECKING

# Lazy import mapping - all modules are in ruleval.core.*
_LAZY_IMPORTS: dict[str, tuple[str, str]] = {
    # failures
    "FailureBucket": ("ruleval.core.failures", "FailureBucket"),
    "FailureRecord": ("ruleval.core.failures", "FailureRecord"),
    # path
    "Path": ("ruleval.core.path", "Path"),
    # store
    "SharedStore": ("ruleval.core.store", "SharedStore"),
    # types
    "Unset": ("ruleval.core.types", "Unset"),
    "UnsetType": ("ruleval.core.types", "UnsetType"),
    "is_sentinel": ("ruleval.core.types", "is_sentinel"),
    "not_sentinel": ("ruleval.core.types", "not_sentinel"),
    # values
    "Values": ("ruleval.core.values", "Values"),
}

_LOADED: dict[str, object] = {}


def __getattr__(name: str) -> object:
    """Lazy import attributes on first access."""
    if name in _LOADED:
        return _LOADED[name]

    if name in _LAZY_IMPORTS:
        from importlib import import_module

        module_name, attr_name = _LAZY_IMPORTS[name]
        module = import_module(module_name)
        value = getattr(module, attr_name)
        _LOADED[name] = value
        return value

    raise AttributeError(f"module 'ruleval.core' has no attribute {name!r}")


def __dir__() -> list[str]:
    """Return all available attributes for autocomplete."""
    return list(__all__)


if TYPE_CHECKING:
    from .failures import FailureBucket, FailureRecord
    from .path import Path
    from .store import SharedStore
    from .types import Unset, UnsetType, is_sentinel, not_sentinel
    from .values import Values

__all__ = [
    "FailureBucket",
    "FailureRecord",
    "Path",
    "SharedStore",
    "Unset",
    "UnsetType",
    "Values",
    "is_sentinel",
    "not_sentinel",
]
