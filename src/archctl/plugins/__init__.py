"""Extension layer — plugin system via pluggy.

Discovery: ``archctl.plugins`` entry points plus ``.archctl/plugins/*.py``.
INVARIANT: Plugin failures are warnings, never errors.
"""

from archctl.plugins.hookspecs import hookimpl
from archctl.plugins.manager import PluginManager

__all__ = ["PluginManager", "hookimpl"]
