# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Tests for ruleval.core.values - read-only value snapshot."""

from __future__ import annotations

import pytest

from ruleval.core.types import Unset, is_sentinel, not_sentinel
from ruleval.core.values import Values


@pytest.fixture
def values():
    return Values(
        {
            "age": 15,
            "nickname": None,
            "address": {"city": "Oslo"},
            "items": [{"sku": "A1"}, {"sku": "B2"}],
            "a.b": "literal",
        }
    )


class TestValuesLookup:
    """Tests for path-aware lookups."""

    def test_top_level(self, values):
        """Top-level keys resolve directly."""
        assert values["age"] == 15

    def test_nested_specs(self, values):
        """Dotted, mapping and tuple specs dig into nested data."""
        assert values["address.city"] == "Oslo"
        assert values[{"address": "city"}] == "Oslo"
        assert values[("items", 1, "sku")] == "B2"

    def test_missing_returns_unset(self, values):
        """Missing entries yield Unset rather than raising."""
        assert values["missing"] is Unset
        assert values["address.zip"] is Unset
        assert values[("items", 5)] is Unset
        assert values[("age", "x")] is Unset

    def test_explicit_none_is_present(self, values):
        """Explicit None is returned and counts as present."""
        assert values["nickname"] is None
        assert values.has("nickname")
        assert "nickname" in values

    def test_literal_dotted_key_wins(self, values):
        """A top-level key containing a dot is found before splitting."""
        assert values["a.b"] == "literal"

    def test_root_spec_returns_self(self, values):
        """The root path refers to the whole snapshot."""
        assert values[None] is values

    def test_get_default(self, values):
        """get() returns default when absent."""
        assert values.get("missing", 0) == 0
        assert values.get("age", 0) == 15

    def test_contains_rejects_invalid_spec(self, values):
        """Unsupported specs are simply not contained."""
        assert 3.5 not in values


class TestValuesReadOnly:
    """Tests that the snapshot cannot be modified."""

    def test_no_item_assignment(self, values):
        """Values does not support assignment."""
        with pytest.raises(TypeError):
            values["age"] = 30

    def test_data_proxy_is_read_only(self, values):
        """The underlying mapping is exposed read-only."""
        with pytest.raises(TypeError):
            values.data["age"] = 30

    def test_source_not_mutated(self):
        """Wrapping never modifies the source mapping."""
        source = {"age": 1}
        wrapped = Values(source)
        assert dict(wrapped) == {"age": 1}
        assert source == {"age": 1}

    def test_wrap_values(self, values):
        """Wrapping a Values reuses its snapshot."""
        assert Values(values)["age"] == 15
        assert len(Values(values)) == len(values)


class TestSentinels:
    """Tests for Unset helpers."""

    def test_unset_helpers(self):
        """Unset is falsy and distinguishable from None."""
        assert not Unset
        assert is_sentinel(Unset)
        assert not is_sentinel(None)
        assert not_sentinel(None)
        assert repr(Unset) == "Unset"
