# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Tests for ruleval.core.path - structural key paths."""

from __future__ import annotations

import pytest

from ruleval.core.path import WILDCARD, Path

# =============================================================================
# Tests: Path.of normalization
# =============================================================================


class TestPathOf:
    """Tests for Path.of spec normalization."""

    def test_single_key(self):
        """A plain name becomes a one-segment path."""
        assert Path.of("age").segments == ("age",)

    def test_dotted_string(self):
        """Dotted strings split into nested segments."""
        assert Path.of("address.city").segments == ("address", "city")

    def test_tuple_with_index(self):
        """Sequences keep integer indices as ints."""
        assert Path.of(("items", 0, "sku")).segments == ("items", 0, "sku")

    def test_nested_mapping(self):
        """A one-entry mapping reads as head followed by tail."""
        assert Path.of({"address": "city"}).segments == ("address", "city")
        assert Path.of({"a": {"b": "c"}}).segments == ("a", "b", "c")

    def test_none_is_root(self):
        """None normalizes to the root path."""
        assert Path.of(None).is_root
        assert Path.of(None) == Path.root()

    def test_path_returned_unchanged(self):
        """An existing Path is returned as-is."""
        path = Path.of("age")
        assert Path.of(path) is path

    def test_invalid_spec_raises(self):
        """Unsupported types raise TypeError."""
        with pytest.raises(TypeError):
            Path.of(3.5)
        with pytest.raises(TypeError):
            Path.of({"a": 1, "b": 2})
        with pytest.raises(TypeError):
            Path.of(True)


# =============================================================================
# Tests: Path behaviour
# =============================================================================


class TestPathBehaviour:
    """Tests for Path equality, hashing and accessors."""

    def test_equality_by_segments(self):
        """Paths built from different specs are equal when segments match."""
        assert Path.of("a.b") == Path.of(["a", "b"]) == Path.of({"a": "b"})
        assert Path.of("a") != Path.of("a.b")

    def test_hashable(self):
        """Equal paths hash equally and work as dict keys."""
        buckets = {Path.of("a.b"): 1}
        assert buckets[Path.of(("a", "b"))] == 1

    def test_immutable(self):
        """Paths are frozen."""
        path = Path.of("a")
        with pytest.raises(Exception):
            path.segments = ("b",)

    def test_accessors(self):
        """last, parent, child and startswith."""
        path = Path.of("address.city")
        assert path.last == "city"
        assert path.parent == Path.of("address")
        assert Path.of("address").child("city") == path
        assert path.startswith("address")
        assert path.startswith(None)
        assert not Path.of("address").startswith(path)

    def test_root_accessors(self):
        """Root has no last segment and is its own parent."""
        root = Path.root()
        assert root.last is None
        assert root.parent == root
        assert len(root) == 0

    def test_str_and_list(self):
        """Dotted string form and list form."""
        path = Path.of(("items", 0))
        assert str(path) == "items.0"
        assert path.to_list() == ["items", 0]
        assert list(path) == ["items", 0]
        assert str(Path.root()) == ""

    def test_wildcard_segment_parsed(self):
        """A "*" segment is kept verbatim and flagged."""
        path = Path.of("items.*.sku")
        assert path.segments == ("items", WILDCARD, "sku")
        assert path.has_wildcard
        assert not Path.of("items.0.sku").has_wildcard

    def test_wildcard_prefix_matches_any_segment(self):
        """startswith treats "*" as any single segment, on either side."""
        concrete = Path.of(("items", 0, "sku"))
        assert concrete.startswith("items.*")
        assert concrete.startswith("items.*.sku")
        assert not concrete.startswith("items.*.qty")
        assert not concrete.startswith("items.*.sku.extra")
        assert Path.of("items.*.sku").startswith(("items", 3))

    def test_wildcard_equality_stays_exact(self):
        """A wildcard path only equals another wildcard path."""
        assert Path.of("items.*") != Path.of(("items", 0))
        assert Path.of("items.*") == Path.of(["items", "*"])
