# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""RuleContext - execution environment for a single rule.

The orchestrator builds one RuleContext per rule invocation. Construction
runs the rule body and then each attached macro, all against the same
context. Bodies report problems by appending to failure buckets:

    def check_age(ctx, *, values):
        if ctx.has_key() and ctx.value() < 18:
            ctx.key().failure("too_young", min=18)

    ctx = RuleContext(
        contract,
        result=result,
        keys=["age"],
        values={"age": 15},
        store=store,
        body=check_age,
        block_options={"values": "values"},
    )
    result.add_failures(ctx.failures())

Operations the context does not define are forwarded to the contract, so
bodies can call contract helpers (private ones included) as ``ctx.helper()``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from ruleval.core.failures import FailureBucket, FailureRecord
from ruleval.core.path import Path, PathSpec
from ruleval.core.store import SharedStore
from ruleval.core.types import Unset
from ruleval.core.values import Values
from ruleval.errors import UnknownOperationError

from .contract import Contract, call_operation, has_operation
from .macros import MacroRef, extract_block_options, project_options

if TYPE_CHECKING:
    from .result import ResultView

__all__ = ("RuleBody", "RuleContext")

logger = logging.getLogger(__name__)

RuleBody = Callable[..., Any]
"""Body signature: (ctx: RuleContext, *, <projected options>) -> None"""


class RuleContext:
    """Evaluation environment owning the failures of one rule invocation.

    Attributes:
        contract: Owning contract; target of operation forwarding.
        result: View over failures recorded by earlier rules in the pass.
        keys: Keys the rule is declared for; empty for whole-object rules.
        values: Read-only snapshot of the data under validation.
        store: Memoization store shared by every context of the pass.
        macros: Macro references run after the body, in order.
        path: Default path for key(); first key, or root when keys is empty.
    """

    def __init__(
        self,
        contract: Contract,
        *,
        result: ResultView,
        keys: Sequence[PathSpec],
        values: Mapping[Any, Any] | Values,
        store: SharedStore,
        macros: Sequence[Any] = (),
        path: PathSpec = Unset,
        block_options: Mapping[str, str] | None = None,
        body: RuleBody | None = None,
        **extra: Any,
    ) -> None:
        options: dict[str, Any] = {
            "result": result,
            "keys": keys,
            "values": values,
            "store": store,
            "macros": macros,
            **extra,
        }
        if path is not Unset:
            options["path"] = path
        if block_options is not None:
            options["block_options"] = block_options

        self._contract = contract
        self._options = options
        self._values = values if isinstance(values, Values) else Values(values)
        self._keys = tuple(keys)
        self._macro_refs = tuple(MacroRef.of(m) for m in macros)
        if path is not Unset:
            self._path = Path.of(path)
        else:
            self._path = Path.of(self._keys[0]) if self._keys else Path.root()
        self._base: FailureBucket | None = None
        self._buckets: dict[Path, FailureBucket] = {}
        self._key_name: Any = Unset

        if body is not None:
            declared = (
                block_options
                if block_options is not None
                else extract_block_options(body, contract.config.option_aliases)
            )
            body(self, **project_options(declared, self._options))

        for ref in self._macro_refs:
            macro = contract.macro(ref.name, *ref.args, **ref.kwargs)
            logger.debug("Running macro %r for keys %r", macro.name, self._keys)
            macro(self, self._options)

    # -------------------------------------------------------------------------
    # Options
    # -------------------------------------------------------------------------

    @property
    def contract(self) -> Contract:
        return self._contract

    @property
    def options(self) -> Mapping[str, Any]:
        """Construction options as given, read-only."""
        return MappingProxyType(self._options)

    @property
    def result(self) -> ResultView:
        return self._options["result"]

    @property
    def store(self) -> SharedStore:
        return self._options["store"]

    @property
    def keys(self) -> tuple[PathSpec, ...]:
        return self._keys

    @property
    def values(self) -> Values:
        return self._values

    @property
    def macros(self) -> tuple[MacroRef, ...]:
        return self._macro_refs

    @property
    def path(self) -> Path:
        return self._path

    # -------------------------------------------------------------------------
    # Failures
    # -------------------------------------------------------------------------

    def key(self, path: PathSpec = Unset) -> FailureBucket:
        """Get the failure bucket for path (default path when omitted).

        Repeated calls for the same path return the same bucket.
        """
        target = self._path if path is Unset else Path.of(path)
        bucket = self._buckets.get(target)
        if bucket is None:
            bucket = self._buckets[target] = FailureBucket(target)
        return bucket

    def base(self) -> FailureBucket:
        """Get the bucket for failures about the rule's subject as a whole."""
        if self._base is None:
            self._base = FailureBucket()
        return self._base

    def failures(self) -> list[FailureRecord]:
        """All failures: base bucket first, then path buckets in request order."""
        out: list[FailureRecord] = []
        if self._base is not None:
            out.extend(self._base)
        for bucket in self._buckets.values():
            out.extend(bucket)
        return out

    # -------------------------------------------------------------------------
    # Value accessors
    # -------------------------------------------------------------------------

    def key_name(self) -> PathSpec | None:
        """First declared key, or None for whole-object rules."""
        if self._key_name is Unset:
            self._key_name = self._keys[0] if self._keys else None
        return self._key_name

    def value(self) -> Any:
        """Value under the first key; the whole snapshot for whole-object rules.

        Returns Unset when the key has no entry.
        """
        name = self.key_name()
        if name is None:
            return self._values
        return self._values[name]

    def has_key(self) -> bool:
        """True if values has an entry for the first key (None counts)."""
        name = self.key_name()
        if name is None:
            return True
        return self._values.has(name)

    def has_error(self, path: PathSpec) -> bool:
        """True if an earlier rule in this pass recorded a failure at path."""
        return self.result.has_failure_at(path)

    def has_rule_error(self, path: PathSpec = Unset) -> bool:
        """Without path: whether this rule already failed at its default path.

        With path: same as has_error().
        """
        if path is Unset:
            bucket = self._buckets.get(self._path)
            return bucket is not None and not bucket.is_empty()
        return self.has_error(path)

    # -------------------------------------------------------------------------
    # Re-scoping
    # -------------------------------------------------------------------------

    def with_options(self, body: RuleBody | None = None, **new_opts: Any) -> RuleContext:
        """Run body in a new context with options merged over the current ones.

        The new context shares the contract and the store object but owns
        its own failure buckets.
        """
        merged = {**self._options, **new_opts}
        logger.debug("Derived context with overrides %s", sorted(new_opts))
        return type(self)(self._contract, body=body, **merged)

    # -------------------------------------------------------------------------
    # Contract delegation
    # -------------------------------------------------------------------------

    def supports(self, name: str) -> bool:
        """Capability check: context operations first, then the contract's.

        Nothing is evaluated; properties on either side stay untouched.
        """
        if name in _OWN_SLOTS:
            return False
        if has_operation(type(self), name):
            return True
        return self._contract.supports(name)

    def invoke(self, name: str, /, *args: Any, **kwargs: Any) -> Any:
        """Call an operation by name, context first then contract.

        Plain attributes (e.g. ``keys``) are returned as they are.

        Raises:
            UnknownOperationError: If neither exposes the operation, or
                arguments are passed to a non-callable attribute.
        """
        if not self.supports(name):
            raise self._unknown_operation(name)
        return call_operation(self, name, args, kwargs)

    def __getattr__(self, name: str) -> Any:
        # Only reached when normal lookup fails.
        if name.startswith("__") or name in _OWN_SLOTS:
            raise AttributeError(name)
        contract = self.__dict__.get("_contract")
        if contract is not None and contract.supports(name):
            return getattr(contract, name)
        raise self._unknown_operation(name)

    def _unknown_operation(self, name: str) -> UnknownOperationError:
        contract_name = type(self.__dict__.get("_contract")).__name__
        return UnknownOperationError(
            f"Neither RuleContext nor {contract_name} has operation '{name}'",
            name=name,
            details={"operation": name, "contract": contract_name},
        )

    def __repr__(self) -> str:
        return (
            f"RuleContext(keys={list(self._keys)!r}, path={self._path!r}, "
            f"failures={len(self.failures())})"
        )


# Instance attributes; never forwarded, even while __init__ is still running.
_OWN_SLOTS = frozenset(
    {
        "_base",
        "_buckets",
        "_contract",
        "_key_name",
        "_keys",
        "_macro_refs",
        "_options",
        "_path",
        "_values",
    }
)
