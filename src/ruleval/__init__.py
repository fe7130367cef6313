# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""ruleval - rule evaluation context with path-grouped failure accumulation.

Top-level re-exports for convenient imports:
- ruleval.core  -> paths, failures, values, shared store, sentinels
- ruleval.rules -> RuleContext, Contract, macros, results
"""

from __future__ import annotations

from typing import TYPE_CHECKING

__version__ = "0.1.0"

_LAZY_IMPORTS: dict[str, tuple[str, str]] = {
    "ConfigurationError": ("ruleval.errors", "ConfigurationError"),
    "Contract": ("ruleval.rules.contract", "Contract"),
    "ContractConfig": ("ruleval.rules.contract", "ContractConfig"),
    "FailureBucket": ("ruleval.core.failures", "FailureBucket"),
    "FailureRecord": ("ruleval.core.failures", "FailureRecord"),
    "MacroRegistry": ("ruleval.rules.macros", "MacroRegistry"),
    "Path": ("ruleval.core.path", "Path"),
    "RuleContext": ("ruleval.rules.context", "RuleContext"),
    "RulevalError": ("ruleval.errors", "RulevalError"),
    "SharedStore": ("ruleval.core.store", "SharedStore"),
    "UnknownOperationError": ("ruleval.errors", "UnknownOperationError"),
    "Unset": ("ruleval.core.types", "Unset"),
    "ValidationResult": ("ruleval.rules.result", "ValidationResult"),
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
        value = getattr(import_module(module_name), attr_name)
        _LOADED[name] = value
        return value

    raise AttributeError(f"module 'ruleval' has no attribute {name!r}")


def __dir__() -> list[str]:
    """List available attributes."""
    return list(__all__)


if TYPE_CHECKING:
    from ruleval.core.failures import FailureBucket, FailureRecord
    from ruleval.core.path import Path
    from ruleval.core.store import SharedStore
    from ruleval.core.types import Unset
    from ruleval.core.values import Values
    from ruleval.errors import ConfigurationError, RulevalError, UnknownOperationError
    from ruleval.rules.context import RuleContext
    from ruleval.rules.contract import Contract, ContractConfig
    from ruleval.rules.macros import MacroRegistry
    from ruleval.rules.result import ValidationResult

__all__ = [
    "ConfigurationError",
    "Contract",
    "ContractConfig",
    "FailureBucket",
    "FailureRecord",
    "MacroRegistry",
    "Path",
    "RuleContext",
    "RulevalError",
    "SharedStore",
    "UnknownOperationError",
    "Unset",
    "ValidationResult",
    "Values",
]
