# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Error hierarchy for rule evaluation.

Validation failures are never raised: they are collected as FailureRecord
objects. The exceptions here signal programming or configuration mistakes
in rule and macro declarations and always propagate to the orchestrator.
"""

from __future__ import annotations

from typing import Any

__all__ = (
    "ConfigurationError",
    "RulevalError",
    "UnknownOperationError",
)


class RulevalError(Exception):
    """Base error with structured details.

    Attributes:
        message: Human-readable description.
        details: Extra context for debugging (names, available options, ...).
    """

    default_message: str = "Rule evaluation error"
    retryable: bool = False

    def __init__(
        self,
        message: str | None = None,
        *,
        details: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ):
        self.message = message or self.default_message
        self.details = details or {}
        super().__init__(self.message)
        if cause is not None:
            self.__cause__ = cause

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a plain dict for logs and error reports."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "retryable": self.retryable,
            **({"details": self.details} if self.details else {}),
        }

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r})"


class ConfigurationError(RulevalError):
    """Rule or macro declaration is inconsistent with the supplied options."""

    default_message = "Invalid rule configuration"


class UnknownOperationError(RulevalError, AttributeError):
    """Operation is exposed neither by the rule context nor by its contract.

    Subclasses AttributeError so ``hasattr`` and ``getattr(obj, name, default)``
    behave as they would for any missing attribute.
    """

    default_message = "Unknown operation"

    def __init__(
        self,
        message: str | None = None,
        *,
        name: str | None = None,
        details: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message, details=details, cause=cause)
        self.name = name
