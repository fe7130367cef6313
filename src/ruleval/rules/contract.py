# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Contract - owner of rule helpers and macros.

Rule bodies run inside a RuleContext, which forwards unknown operations to
its contract. Any method or attribute of a Contract subclass, private helpers
included, is therefore reachable from rule and macro bodies:

    class UserContract(Contract):
        def _is_adult(self, age):
            return age >= 18

    @UserContract.macros.macro("adult")
    def adult(ctx):
        if not ctx._is_adult(ctx.value()):
            ctx.key().failure("too_young")
"""

from __future__ import annotations

import inspect
from collections.abc import Mapping
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field

from ruleval.errors import UnknownOperationError

from .macros import DEFAULT_OPTION_ALIASES, Macro, MacroRegistry, get_default_registry

__all__ = ("Contract", "ContractConfig", "call_operation", "has_operation")

_MISSING = object()


class ContractConfig(BaseModel):
    """Per-contract evaluation settings.

    Attributes:
        option_aliases: Body keyword -> option name for keywords that are not
            named after their option (``context`` receives the shared store).
    """

    model_config = ConfigDict(frozen=True)

    option_aliases: Mapping[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_OPTION_ALIASES)
    )


class Contract:
    """Capability object owning helper operations and a macro registry.

    Each subclass gets its own ``macros`` registry chained to its parent's,
    so macros are inherited and may be overridden per subclass. The root
    registry is the default one holding built-in macros.

    Attributes:
        config: Evaluation settings shared by all instances of the class.
        macros: Class-level macro registry.
    """

    config: ClassVar[ContractConfig] = ContractConfig()
    macros: ClassVar[MacroRegistry] = MacroRegistry(parent=get_default_registry())

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        parent = next(
            (b.__dict__["macros"] for b in cls.__mro__[1:] if "macros" in b.__dict__),
            get_default_registry(),
        )
        if "macros" not in cls.__dict__:
            cls.macros = MacroRegistry(parent=parent, aliases=cls.config.option_aliases)

    def supports(self, name: str) -> bool:
        """True if name is an operation of this contract.

        Resolved statically, so properties are not evaluated.
        """
        return has_operation(self, name)

    def invoke(self, name: str, /, *args: Any, **kwargs: Any) -> Any:
        """Call operation by name; plain attributes are returned as they are.

        Raises:
            UnknownOperationError: If the contract has no such operation, or
                arguments are passed to a non-callable attribute.
        """
        if not self.supports(name):
            raise UnknownOperationError(
                f"{type(self).__name__} has no operation '{name}'",
                name=name,
                details={"contract": type(self).__name__, "operation": name},
            )
        return call_operation(self, name, args, kwargs)

    def macro(self, name: str, /, *args: Any, **kwargs: Any) -> Macro:
        """Resolve a registered macro bound to invocation arguments.

        Option aliases come from this contract's config, including for
        macros inherited from parent registries.
        """
        macro = type(self).macros.resolve(name, *args, **kwargs)
        return macro.with_aliases(self.config.option_aliases)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(macros={type(self).macros.list_names()})"


def has_operation(obj: Any, name: str) -> bool:
    """True if obj exposes name (methods, attributes, properties), dunders excluded."""
    if name.startswith("__"):
        return False
    return inspect.getattr_static(obj, name, _MISSING) is not _MISSING


def call_operation(
    obj: Any,
    name: str,
    args: tuple[Any, ...],
    kwargs: dict[str, Any],
) -> Any:
    """Call obj.name with arguments, or return it when it is a plain attribute."""
    target = getattr(obj, name)
    if callable(target):
        return target(*args, **kwargs)
    if args or kwargs:
        raise UnknownOperationError(
            f"'{name}' on {type(obj).__name__} is not callable",
            name=name,
            details={"operation": name, "owner": type(obj).__name__},
        )
    return target
