"""Plugin loading and routing-rule collection.

Plugins come from two places: the ``archctl.plugins`` entry-point group
of installed distributions, and ``*.py`` files dropped into a project's
``.archctl/plugins/`` directory.  Either kind may contribute routing
rules and listen for finished plans.
"""

from __future__ import annotations

import importlib.util
import inspect
import logging
import sys
from pathlib import Path
from types import ModuleType
from typing import Any

import pluggy
from pydantic import ValidationError

from archctl.domain.catalog import RoutingRule
from archctl.plugins.hookspecs import PROJECT_NAME, ArchctlHookSpec

ENTRY_POINT_GROUP = "archctl.plugins"
LOCAL_MODULE_PREFIX = "archctl_local_plugin_"

logger = logging.getLogger(__name__)


def _has_hook_impls(cls: type) -> bool:
    marker = f"{PROJECT_NAME}_impl"
    return any(
        callable(attr) and getattr(attr, marker, None) is not None
        for name, attr in inspect.getmembers(cls)
        if not name.startswith("_")
    )


def _import_plugin_file(path: Path) -> ModuleType | None:
    module_name = LOCAL_MODULE_PREFIX + path.stem
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        logger.warning("Could not create module spec for %s", path)
        return None
    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except Exception:
        logger.warning("Failed to load local plugin %s", path, exc_info=True)
        del sys.modules[module_name]
        return None
    return module


def _hook_classes(module: ModuleType) -> list[type]:
    """Classes defined in *module* itself that carry hook implementations."""
    return [
        obj
        for _, obj in inspect.getmembers(module, inspect.isclass)
        if obj.__module__ == module.__name__ and _has_hook_impls(obj)
    ]


class PluginManager:
    """Thin wrapper over :class:`pluggy.PluginManager` for archctl hooks."""

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(ArchctlHookSpec)
        self._loaded = False

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    @property
    def hook(self) -> pluggy.HookRelay:
        return self._pm.hook

    def discover_and_load(self, *, local_dir: Path | None = None) -> list[str]:
        """Load entry-point plugins, then any local plugin files.

        Returns the names of all registered plugins.
        """
        self._pm.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
        self._instantiate_class_plugins()
        if local_dir is not None and local_dir.is_dir():
            self._load_local(local_dir)
        self._loaded = True
        return self.list_plugin_names()

    def register_plugin(self, plugin: object, name: str | None = None) -> None:
        name = name or type(plugin).__name__
        self._pm.register(plugin, name=name)
        logger.debug("Registered plugin: %s", name)

    def list_plugin_names(self) -> list[str]:
        return [name for name, plugin in self._pm.list_name_plugin() if plugin is not None]

    def collect_routing_rules(self) -> tuple[list[RoutingRule], list[str]]:
        """Return ``(rules, warnings)`` from every ``register_routing_rules`` hook.

        A plugin that raises, returns a non-list, or returns an entry that
        fails validation contributes a warning instead of rules.
        """
        rules: list[RoutingRule] = []
        warnings: list[str] = []
        for name, plugin in self._pm.list_name_plugin():
            hook = getattr(plugin, "register_routing_rules", None)
            if hook is None:
                continue
            try:
                raw = hook()
            except Exception:
                logger.warning("Plugin %s failed to register routing rules", name, exc_info=True)
                warnings.append(f"Plugin {name} failed to register routing rules")
                continue
            if raw is None:
                continue
            if not isinstance(raw, list):
                warnings.append(f"Plugin {name} returned non-list routing rules")
                continue
            for entry in raw:
                try:
                    rules.append(RoutingRule.model_validate(entry))
                except ValidationError:
                    logger.warning("Skipping invalid routing rule from %s", name, exc_info=True)
                    warnings.append(f"Plugin {name} returned an invalid routing rule")
        return rules, warnings

    def _load_local(self, local_dir: Path) -> None:
        # _-prefixed files are helpers shared between plugins, not plugins.
        for path in sorted(local_dir.glob("*.py")):
            if path.name.startswith("_"):
                continue
            module = _import_plugin_file(path)
            if module is None:
                continue
            for cls in _hook_classes(module):
                try:
                    self.register_plugin(cls(), name=f"{module.__name__}.{cls.__name__}")
                except Exception:
                    logger.warning(
                        "Failed to instantiate plugin class %s from %s",
                        cls.__name__,
                        path,
                        exc_info=True,
                    )

    def _instantiate_class_plugins(self) -> None:
        # An entry point may name a class; its hooks need a bound instance.
        for name, plugin in list(self._pm.list_name_plugin()):
            if not inspect.isclass(plugin) or not _has_hook_impls(plugin):
                continue
            self._pm.unregister(plugin)
            try:
                instance: Any = plugin()
            except Exception:
                logger.warning("Failed to instantiate entry-point plugin %s", name, exc_info=True)
                continue
            self._pm.register(instance, name=name)
