"""Builtin commands and the registry the executor dispatches through."""

from minish.builtins.context import ShellContext
from minish.builtins.registry import (
    Builtin,
    BuiltinRegistry,
    FunctionBuiltin,
    builtin,
    default_registry,
)

__all__ = [
    "Builtin",
    "BuiltinRegistry",
    "FunctionBuiltin",
    "ShellContext",
    "builtin",
    "default_registry",
]
