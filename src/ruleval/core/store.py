# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""SharedStore - cross-rule memoization for one validation pass.

The orchestrator owns one store per pass and hands the same object to every
RuleContext it builds. Contexts may be built from several threads at once,
so all operations are thread-safe and get_or_insert() computes each key at
most once.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Hashable
from typing import Any, TypeVar

__all__ = ("SharedStore",)

logger = logging.getLogger(__name__)

T = TypeVar("T")

_MISSING = object()


class SharedStore:
    """Thread-safe key-value store with atomic get-or-compute.

    Example:
        store = SharedStore()
        rates = store.get_or_insert("fx_rates", load_fx_rates)  # computed once
        store.get("fx_rates") is rates  # True
    """

    def __init__(self, initial: dict[Hashable, Any] | None = None) -> None:
        self._data: dict[Hashable, Any] = dict(initial or {})
        self._lock = threading.Lock()
        self._key_locks: dict[Hashable, threading.Lock] = {}

    def get(self, key: Hashable, default: Any = None) -> Any:
        with self._lock:
            return self._data.get(key, default)

    def set(self, key: Hashable, value: Any) -> None:
        with self._lock:
            self._data[key] = value

    def delete(self, key: Hashable) -> bool:
        """Remove key. Returns True if it existed."""
        with self._lock:
            return self._data.pop(key, _MISSING) is not _MISSING

    def get_or_insert(self, key: Hashable, factory: Callable[[], T]) -> T:
        """Return the stored value for key, computing it once if absent.

        Concurrent callers for the same key block until the first caller's
        factory finishes, then all observe the same value. Factories for
        different keys run independently. If the factory raises, nothing is
        stored and the exception propagates.
        """
        with self._lock:
            value = self._data.get(key, _MISSING)
            if value is not _MISSING:
                return value
            key_lock = self._key_locks.setdefault(key, threading.Lock())

        with key_lock:
            with self._lock:
                value = self._data.get(key, _MISSING)
            if value is not _MISSING:
                return value

            logger.debug("Computing shared value for %r", key)
            value = factory()

            with self._lock:
                self._data[key] = value
                self._key_locks.pop(key, None)
            return value

    def keys(self) -> list[Hashable]:
        with self._lock:
            return list(self._data)

    def clear(self) -> None:
        with self._lock:
            self._data.clear()
            self._key_locks.clear()

    def __contains__(self, key: Hashable) -> bool:
        with self._lock:
            return key in self._data

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)

    def __repr__(self) -> str:
        return f"SharedStore(keys={self.keys()!r})"
