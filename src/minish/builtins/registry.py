"""Builtin registry: interface dispatch from command name to callable.

INVARIANT: Builtins return the exact text they would print (or ``""``) and
never write to the terminal themselves, so redirection and piping can
intercept every byte of output.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Sequence
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from minish.domain.errors import CommandNotFound

if TYPE_CHECKING:
    from minish.builtins.context import ShellContext

logger = logging.getLogger(__name__)

BuiltinFunc = Callable[["ShellContext", Sequence[str]], str]


@runtime_checkable
class Builtin(Protocol):
    """Anything executable given a context and arguments."""

    name: str
    summary: str
    usage: str

    def __call__(self, ctx: ShellContext, args: Sequence[str]) -> str: ...


class FunctionBuiltin:
    """Adapts a plain function to the :class:`Builtin` protocol."""

    def __init__(self, name: str, func: BuiltinFunc, *, usage: str = "", summary: str = "") -> None:
        self.name = name
        self.usage = usage or name
        self.summary = summary
        self._func = func

    def __call__(self, ctx: ShellContext, args: Sequence[str]) -> str:
        return self._func(ctx, args)

    def __repr__(self) -> str:
        return f"FunctionBuiltin({self.name!r})"


def builtin(
    name: str, *, usage: str = "", summary: str = ""
) -> Callable[[BuiltinFunc], FunctionBuiltin]:
    """Decorator turning a function into a :class:`FunctionBuiltin`."""

    def decorate(func: BuiltinFunc) -> FunctionBuiltin:
        return FunctionBuiltin(name, func, usage=usage, summary=summary)

    return decorate


class BuiltinRegistry:
    """Name to :class:`Builtin` table consulted by the executor."""

    def __init__(self, builtins: Sequence[Builtin] = ()) -> None:
        self._builtins: dict[str, Builtin] = {}
        for item in builtins:
            self.register(item)

    def register(self, item: Builtin, *, replace: bool = False) -> None:
        """Add *item* under its name.

        Raises:
            ValueError: If the name is taken and *replace* is False.
        """
        if item.name in self._builtins and not replace:
            msg = f"Builtin already registered: {item.name!r}"
            raise ValueError(msg)
        self._builtins[item.name] = item
        logger.debug("Registered builtin: %s", item.name)

    def get(self, name: str) -> Builtin | None:
        return self._builtins.get(name)

    def names(self) -> list[str]:
        """Registered names in registration order."""
        return list(self._builtins)

    def __contains__(self, name: object) -> bool:
        return name in self._builtins

    def __iter__(self) -> Iterator[Builtin]:
        return iter(self._builtins.values())

    def __len__(self) -> int:
        return len(self._builtins)

    def dispatch(self, ctx: ShellContext, name: str, args: Sequence[str]) -> str:
        """Run builtin *name* with *args* and return its output text.

        Raises:
            CommandNotFound: If *name* is not registered.
        """
        item = self._builtins.get(name)
        if item is None:
            raise CommandNotFound(name)
        logger.debug("Dispatching %s args=%s", name, list(args))
        return item(ctx, args)


def default_registry() -> BuiltinRegistry:
    """Registry holding the fixed set of file, directory, and text builtins."""
    from minish.builtins.filesystem import FILESYSTEM_BUILTINS
    from minish.builtins.text import TEXT_BUILTINS, HelpBuiltin

    registry = BuiltinRegistry([*FILESYSTEM_BUILTINS, *TEXT_BUILTINS])
    registry.register(HelpBuiltin(registry))
    return registry
