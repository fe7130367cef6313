# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Tests for ruleval.core.store - thread-safe shared memoization."""

from __future__ import annotations

import threading
import time
from concurrent.futures import ThreadPoolExecutor

import pytest

from ruleval.core.store import SharedStore


class TestSharedStoreBasics:
    """Tests for plain get/set operations."""

    def test_get_set(self):
        """Stored values are returned; absent keys give the default."""
        store = SharedStore()
        store.set("a", 1)
        assert store.get("a") == 1
        assert store.get("b") is None
        assert store.get("b", 0) == 0

    def test_initial_data(self):
        """Initial mapping is copied in."""
        store = SharedStore({"a": 1})
        assert "a" in store
        assert len(store) == 1
        assert store.keys() == ["a"]

    def test_delete_and_clear(self):
        """delete reports existence; clear empties the store."""
        store = SharedStore({"a": 1, "b": 2})
        assert store.delete("a") is True
        assert store.delete("a") is False
        store.clear()
        assert len(store) == 0

    def test_stores_none(self):
        """None is a legitimate stored value."""
        store = SharedStore()
        store.set("a", None)
        assert "a" in store
        assert store.get_or_insert("a", lambda: 1) is None


class TestGetOrInsert:
    """Tests for atomic get-or-compute."""

    def test_computes_once(self):
        """Factory runs only for the first call."""
        store = SharedStore()
        calls = []

        def factory():
            calls.append(1)
            return {"rate": 1.5}

        first = store.get_or_insert("fx", factory)
        second = store.get_or_insert("fx", factory)
        assert first is second
        assert len(calls) == 1

    def test_factory_error_leaves_key_absent(self):
        """A failing factory stores nothing and propagates."""
        store = SharedStore()

        def boom():
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError, match="boom"):
            store.get_or_insert("k", boom)
        assert "k" not in store
        assert store.get_or_insert("k", lambda: 7) == 7

    def test_concurrent_callers_share_one_value(self):
        """Racing callers see a single computed value."""
        store = SharedStore()
        calls = []
        lock = threading.Lock()
        barrier = threading.Barrier(8)

        def factory():
            with lock:
                calls.append(1)
            time.sleep(0.05)
            return object()

        def worker():
            barrier.wait()
            return store.get_or_insert("expensive", factory)

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(lambda _: worker(), range(8)))

        assert len(calls) == 1
        assert all(r is results[0] for r in results)
        assert store.keys() == ["expensive"]
