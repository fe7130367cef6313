# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Macros: named, reusable rule fragments.

A macro body has the same shape as a rule body: it receives the RuleContext
as its first argument and any options it declares as required keyword-only
parameters.

    registry = MacroRegistry()

    @registry.macro("min_size")
    def min_size(ctx, *, macro):
        (limit,) = macro.args
        if len(ctx.value()) < limit:
            ctx.key().failure("min_size", num=limit)

Rules attach macros by reference, e.g. ``macros=["filled", ("min_size", 3)]``.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from ruleval.errors import ConfigurationError

if TYPE_CHECKING:
    from .context import RuleContext

__all__ = (
    "DEFAULT_OPTION_ALIASES",
    "Macro",
    "MacroBody",
    "MacroRef",
    "MacroRegistry",
    "extract_block_options",
    "get_default_registry",
    "project_options",
    "reset_default_registry",
)

logger = logging.getLogger(__name__)

MacroBody = Callable[..., Any]
"""Body signature: (ctx: RuleContext, *, <declared options>) -> None"""

DEFAULT_OPTION_ALIASES: Mapping[str, str] = MappingProxyType({"context": "store"})
"""Body keyword name -> option name, for keywords not named after their option."""


def extract_block_options(
    body: Callable[..., Any],
    aliases: Mapping[str, str] = DEFAULT_OPTION_ALIASES,
) -> dict[str, str]:
    """Derive ``{keyword: option_name}`` from a body's required keyword-only params."""
    try:
        params = inspect.signature(body).parameters.values()
    except (TypeError, ValueError):
        return {}
    return {
        p.name: aliases.get(p.name, p.name)
        for p in params
        if p.kind is inspect.Parameter.KEYWORD_ONLY and p.default is inspect.Parameter.empty
    }


def project_options(
    block_options: Mapping[str, str],
    options: Mapping[str, Any],
    *,
    owner: str = "rule",
) -> dict[str, Any]:
    """Rebind declared options under the keyword names a body expects.

    Raises:
        ConfigurationError: If a declared option is absent from options.
    """
    missing = [src for src in block_options.values() if src not in options]
    if missing:
        raise ConfigurationError(
            f"{owner} requests unknown option(s): {', '.join(missing)}",
            details={"missing": missing, "available": sorted(options)},
        )
    return {name: options[src] for name, src in block_options.items()}


@dataclass(frozen=True, slots=True)
class Macro:
    """Resolved macro: body plus the arguments it was invoked with.

    Attributes:
        name: Registry name.
        body: Callable executed with the RuleContext as first argument.
        args: Positional invocation arguments.
        kwargs: Keyword invocation arguments.
        block_options: Body keyword -> option name projection.
    """

    name: str
    body: MacroBody
    args: tuple[Any, ...] = ()
    kwargs: Mapping[str, Any] = field(default_factory=dict)
    block_options: Mapping[str, str] = field(default_factory=dict)

    def with_args(
        self,
        args: Sequence[Any] = (),
        kwargs: Mapping[str, Any] | None = None,
    ) -> Macro:
        return replace(self, args=tuple(args), kwargs=dict(kwargs or {}))

    def with_aliases(self, aliases: Mapping[str, str]) -> Macro:
        """Copy whose option projection follows aliases (e.g. the calling contract's)."""
        return replace(self, block_options=extract_block_options(self.body, aliases))

    def extract_block_options(self, options: Mapping[str, Any]) -> dict[str, Any]:
        """Project options for this macro's body (see project_options)."""
        return project_options(self.block_options, options, owner=f"Macro '{self.name}'")

    def __call__(self, ctx: RuleContext, options: Mapping[str, Any]) -> None:
        self.body(ctx, **self.extract_block_options({**options, "macro": self}))


@dataclass(frozen=True, slots=True)
class MacroRef:
    """A macro invocation attached to a rule: name plus arguments."""

    name: str
    args: tuple[Any, ...] = ()
    kwargs: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def of(cls, spec: MacroRef | str | Sequence[Any]) -> MacroRef:
        """Normalize ``"name"`` or ``("name", *args)``.

        Nested sequences among the arguments are flattened one level, so
        ``("between", [1, 10])`` and ``("between", 1, 10)`` are equivalent.
        """
        if isinstance(spec, MacroRef):
            return spec
        if isinstance(spec, str):
            return cls(name=spec)
        if isinstance(spec, Sequence) and spec and isinstance(spec[0], str):
            name, *rest = spec
            args: list[Any] = []
            for arg in rest:
                if isinstance(arg, (list, tuple)):
                    args.extend(arg)
                else:
                    args.append(arg)
            return cls(name=name, args=tuple(args))
        raise ConfigurationError(
            f"Invalid macro reference: {spec!r}",
            details={"reference": repr(spec)},
        )


class MacroRegistry:
    """Map macro names to bodies.

    A registry may chain to a parent; lookups fall back to the parent so
    contract subclasses inherit macros and may override them locally.

    Example:
        registry = MacroRegistry()
        registry.register("filled", filled_body)
        macro = registry.resolve("filled")
    """

    def __init__(
        self,
        parent: MacroRegistry | None = None,
        aliases: Mapping[str, str] = DEFAULT_OPTION_ALIASES,
    ):
        self._parent = parent
        self._aliases = aliases
        self._macros: dict[str, Macro] = {}

    @property
    def parent(self) -> MacroRegistry | None:
        return self._parent

    def register(
        self,
        name: str,
        body: MacroBody,
        *,
        override: bool = False,
    ) -> Macro:
        """Register body under name.

        Raises:
            ValueError: If name exists locally and override=False.
        """
        if name in self._macros and not override:
            raise ValueError(
                f"Macro '{name}' already registered. Use override=True to replace."
            )
        macro = Macro(
            name=name,
            body=body,
            block_options=extract_block_options(body, self._aliases),
        )
        self._macros[name] = macro
        logger.debug("Registered macro %r (options: %s)", name, dict(macro.block_options))
        return macro

    def macro(self, name: str, *, override: bool = False) -> Callable[[MacroBody], MacroBody]:
        """Decorator form of register()."""

        def decorator(body: MacroBody) -> MacroBody:
            self.register(name, body, override=override)
            return body

        return decorator

    def get(self, name: str) -> Macro:
        """Get unbound macro by name. Raises KeyError listing available names."""
        if name in self._macros:
            return self._macros[name]
        if self._parent is not None and self._parent.has(name):
            return self._parent.get(name)
        raise KeyError(f"Macro '{name}' not registered. Available: {self.list_names()}")

    def resolve(self, name: str, /, *args: Any, **kwargs: Any) -> Macro:
        """Get macro by name bound to invocation arguments.

        Raises:
            ConfigurationError: If no macro is registered under name.
        """
        if not self.has(name):
            raise ConfigurationError(
                f"Macro '{name}' not registered",
                details={"macro": name, "available": self.list_names()},
            )
        return self.get(name).with_args(args, kwargs)

    def has(self, name: str) -> bool:
        if name in self._macros:
            return True
        return self._parent is not None and self._parent.has(name)

    def unregister(self, name: str) -> bool:
        """Remove a local registration. Returns True if existed."""
        return self._macros.pop(name, None) is not None

    def list_names(self) -> list[str]:
        names = self._parent.list_names() if self._parent is not None else []
        return names + [n for n in self._macros if n not in names]

    def copy(self) -> MacroRegistry:
        clone = MacroRegistry(parent=self._parent, aliases=self._aliases)
        clone._macros = dict(self._macros)
        return clone

    def __contains__(self, name: str) -> bool:
        return self.has(name)

    def __len__(self) -> int:
        return len(self.list_names())

    def __repr__(self) -> str:
        return f"MacroRegistry(macros={self.list_names()})"


# =============================================================================
# Built-in macros
# =============================================================================


def acceptance(ctx: RuleContext) -> None:
    """Fail unless the value under the rule's first key is exactly True."""
    if ctx.value() is not True:
        ctx.key().failure("acceptance", key=ctx.key_name())


_default_registry: MacroRegistry | None = None


def get_default_registry() -> MacroRegistry:
    """Registry holding built-in macros; root parent of every contract registry."""
    global _default_registry
    if _default_registry is None:
        _default_registry = MacroRegistry()
        _default_registry.register("acceptance", acceptance)
    return _default_registry


def reset_default_registry() -> None:
    """Drop custom registrations from the default registry (for tests).

    Resets in place: contract registries keep chaining to the same object.
    """
    registry = get_default_registry()
    registry._macros.clear()
    registry.register("acceptance", acceptance)
