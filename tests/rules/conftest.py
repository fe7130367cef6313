# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Shared fixtures for rule evaluation tests."""

from __future__ import annotations

from typing import Any

import pytest

from ruleval.core.store import SharedStore
from ruleval.rules import Contract, RuleContext, ValidationResult


class UserContract(Contract):
    """Contract with public and private helpers."""

    adult_age = 18

    def _is_adult(self, age: int) -> bool:
        return age >= self.adult_age

    def normalize(self, text: str) -> str:
        return text.strip().lower()


@UserContract.macros.macro("m1")
def _m1(ctx):
    ctx.base().failure("m1")


@UserContract.macros.macro("m2")
def _m2(ctx):
    ctx.base().failure("m2")


@UserContract.macros.macro("min_size")
def _min_size(ctx, *, macro):
    (limit,) = macro.args
    if len(ctx.value()) < limit:
        ctx.key().failure("min_size", num=limit)


@UserContract.macros.macro("cached_len")
def _cached_len(ctx, *, context):
    context.get_or_insert("len", lambda: len(ctx.value()))


@pytest.fixture
def contract():
    return UserContract()


@pytest.fixture
def store():
    return SharedStore()


@pytest.fixture
def result():
    return ValidationResult()


@pytest.fixture
def make_context(contract, store, result):
    """Build a RuleContext with defaults for unspecified options."""

    def _make(**options: Any) -> RuleContext:
        options.setdefault("result", result)
        options.setdefault("keys", ["age"])
        options.setdefault("values", {"age": 15})
        options.setdefault("store", store)
        return RuleContext(contract, **options)

    return _make
