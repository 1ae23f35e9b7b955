"""Plugin discovery and builtin installation."""

from __future__ import annotations

import inspect
import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

import pluggy

from minish.plugins.hookspecs import PROJECT_NAME, MinishHookSpec

if TYPE_CHECKING:
    from minish.builtins.registry import BuiltinRegistry

ENTRY_POINT_GROUP = "minish.plugins"

logger = logging.getLogger(__name__)


class PluginManager:
    """Manages plugin discovery, loading, and builtin registration."""

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(MinishHookSpec)
        self._loaded: bool = False

    def discover_and_load(self, *, disabled: Iterable[str] = ()) -> list[str]:
        """Load plugins from the ``minish.plugins`` entry-point group.

        Entry points whose name is in *disabled* are blocked before loading.
        Returns a list of loaded plugin names.
        """
        for name in disabled:
            self._pm.set_blocked(name)
        try:
            self._pm.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
        except Exception:
            logger.warning("Failed to load entry-point plugins", exc_info=True)
        self._normalize_plugin_instances()
        self._loaded = True
        return self.list_plugin_names()

    def register_plugin(self, plugin: object, name: str | None = None) -> None:
        """Register a plugin instance directly."""
        resolved_name = name or plugin.__class__.__name__
        self._pm.register(plugin, name=resolved_name)
        logger.debug("Registered plugin: %s", resolved_name)

    def unregister(self, plugin: object) -> None:
        self._pm.unregister(plugin)

    @property
    def is_loaded(self) -> bool:
        """Whether discover_and_load() has been called."""
        return self._loaded

    @property
    def hook(self) -> pluggy.HookRelay:
        return self._pm.hook

    def list_plugin_names(self) -> list[str]:
        return [self._pm.get_name(p) or p.__class__.__name__ for p in self._pm.get_plugins()]

    def install_builtins(self, registry: BuiltinRegistry) -> list[str]:
        """Add every plugin-provided builtin to *registry*.

        Returns warnings for plugins that failed or collided with an
        existing name. Nothing here ever raises.
        """
        warnings: list[str] = []
        for plugin in self._pm.get_plugins():
            plugin_name = self._pm.get_name(plugin) or plugin.__class__.__name__
            hook = getattr(plugin, "register_builtins", None)
            if hook is None:
                continue
            try:
                provided = hook()
            except Exception:
                logger.warning("Plugin %s failed to provide builtins", plugin_name, exc_info=True)
                warnings.append(f"Plugin {plugin_name} failed to provide builtins")
                continue

            for item in provided or ():
                name = getattr(item, "name", None)
                if not name or not callable(item):
                    warnings.append(f"Plugin {plugin_name} returned an invalid builtin: {item!r}")
                    continue
                if name in registry:
                    warnings.append(f"Plugin {plugin_name} cannot replace builtin {name!r}")
                    continue
                registry.register(item)
                logger.debug("Installed builtin %s from plugin %s", name, plugin_name)

        for warning in warnings:
            logger.warning(warning)
        return warnings

    def _normalize_plugin_instances(self) -> None:
        """Replace registered plugin classes with instantiated objects.

        Entry-point loading may register a plugin class directly, which
        leaves ``self`` unbound when hooks are called.
        """
        for plugin in list(self._pm.get_plugins()):
            if not inspect.isclass(plugin):
                continue
            plugin_name = self._pm.get_name(plugin) or plugin.__name__
            self._pm.unregister(plugin)
            try:
                instance = plugin()
            except Exception:
                logger.warning(
                    "Failed to instantiate entry-point plugin %s",
                    plugin_name,
                    exc_info=True,
                )
                continue
            self._pm.register(instance, name=plugin_name)
            logger.debug("Instantiated entry-point plugin: %s", plugin_name)
