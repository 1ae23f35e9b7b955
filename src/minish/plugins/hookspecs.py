"""Pluggy hook specifications for minish."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from minish.builtins.registry import Builtin

PROJECT_NAME = "minish"

hookspec = pluggy.HookspecMarker(PROJECT_NAME)
hookimpl = pluggy.HookimplMarker(PROJECT_NAME)


class MinishHookSpec:
    """Hook specifications for the minish plugin system."""

    @hookspec
    def register_builtins(self) -> list[Builtin] | None:
        """Return extra builtins to add to the shell's registry.

        Names already taken by core builtins are skipped with a warning.
        """
