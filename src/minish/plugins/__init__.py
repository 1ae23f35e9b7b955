"""Extension layer: extra builtins via pluggy.

Discovery: entry_points in the ``minish.plugins`` group.
INVARIANT: Plugin failures are warnings, never errors.
"""

from minish.plugins.hookspecs import hookimpl
from minish.plugins.manager import PluginManager

__all__ = ["PluginManager", "hookimpl"]
