# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Failure records and the per-path buckets that accumulate them."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .path import Path

__all__ = ("FailureBucket", "FailureRecord", "Message")

Message = str | dict[str, Any]
"""Message identifier (e.g. "too_young") or a mapping such as {"text": ..., "code": ...}."""


class FailureRecord(BaseModel):
    """One validation failure.

    The record is opaque to this package: message rendering belongs to a
    downstream collaborator.

    Attributes:
        message: Message identifier or structured message mapping.
        path: Location of the failure; None for base failures.
        tokens: Named arguments for message interpolation, read-only.
    """

    model_config = ConfigDict(frozen=True)

    message: Message
    path: Path | None = None
    tokens: Mapping[str, Any] = Field(default_factory=dict, validate_default=True)

    @field_validator("tokens", mode="after")
    @classmethod
    def _freeze_tokens(cls, v: Mapping[str, Any]) -> Mapping[str, Any]:
        return MappingProxyType(dict(v))

    @property
    def is_base(self) -> bool:
        return self.path is None

    def to_dict(self) -> dict[str, Any]:
        """Plain mapping with the path as a list (None for base failures)."""
        return {
            "message": self.message,
            "path": None if self.path is None else self.path.to_list(),
            "tokens": dict(self.tokens),
        }


class FailureBucket:
    """Append-only, ordered collection of failures for one path.

    A bucket with ``path=None`` holds base failures, i.e. failures about
    the rule's subject as a whole.

    Example:
        bucket = FailureBucket(Path.of("age"))
        bucket.failure("too_young", min=18).failure("invalid")
        len(bucket)  # 2
    """

    __slots__ = ("_path", "_records")

    def __init__(self, path: Path | None = None) -> None:
        self._path = path
        self._records: list[FailureRecord] = []

    @property
    def path(self) -> Path | None:
        return self._path

    @property
    def records(self) -> tuple[FailureRecord, ...]:
        """Snapshot of recorded failures in insertion order."""
        return tuple(self._records)

    def failure(
        self,
        message: Message,
        tokens: dict[str, Any] | None = None,
        **kw_tokens: Any,
    ) -> FailureBucket:
        """Record a failure and return self for chaining.

        Args:
            message: Message identifier or structured message mapping.
            tokens: Interpolation arguments as a mapping.
            **kw_tokens: Interpolation arguments as keywords (win over ``tokens``).
        """
        merged = {**(tokens or {}), **kw_tokens}
        self._records.append(
            FailureRecord(message=message, path=self._path, tokens=merged)
        )
        return self

    def is_empty(self) -> bool:
        return not self._records

    def __len__(self) -> int:
        return len(self._records)

    def __bool__(self) -> bool:
        return True

    def __iter__(self) -> Iterator[FailureRecord]:
        return iter(tuple(self._records))

    def __repr__(self) -> str:
        where = "base" if self._path is None else repr(self._path)
        return f"FailureBucket({where}, failures={len(self._records)})"
