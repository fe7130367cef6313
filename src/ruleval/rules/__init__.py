# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Rules module: rule evaluation context, contracts, macros and results.

Core exports:
- RuleContext: Execution environment for one rule invocation
- Contract, ContractConfig: Owner of helper operations and macros
- Macro, MacroRef, MacroRegistry: Reusable rule fragments
- ResultView, ValidationResult: Access to failures of earlier rules
- ConfigurationError, UnknownOperationError: Declaration errors
"""

from ruleval.errors import ConfigurationError, UnknownOperationError

from .context import RuleBody, RuleContext
from .contract import Contract, ContractConfig
from .macros import (
    Macro,
    MacroRef,
    MacroRegistry,
    get_default_registry,
    reset_default_registry,
)
from .result import ResultView, ValidationResult

__all__ = (
    # Context
    "RuleBody",
    "RuleContext",
    # Contract
    "Contract",
    "ContractConfig",
    # Macros
    "Macro",
    "MacroRef",
    "MacroRegistry",
    "get_default_registry",
    "reset_default_registry",
    # Results
    "ResultView",
    "ValidationResult",
    # Errors
    "ConfigurationError",
    "UnknownOperationError",
)
