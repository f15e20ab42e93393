"""Workspace — the project directory archctl routes requests for.

The Workspace is the single dependency injected into every service.  It
owns the resolved settings, the lazily loaded catalog, and the plugin
manager.  Plugin-contributed routing rules are merged into the catalog
the first time it is accessed.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pydantic import ValidationError

from archctl.infrastructure.catalog_store import PROJECT_DIR, load_catalog

if TYPE_CHECKING:
    from pathlib import Path

    from archctl.config.settings import ArchSettings
    from archctl.domain.catalog import Catalog
    from archctl.plugins.manager import PluginManager

logger = logging.getLogger(__name__)


class Workspace:
    """Project context shared by the CLI, MCP adapter, and services."""

    def __init__(self, settings: ArchSettings) -> None:
        self._settings = settings
        self._catalog: Catalog | None = None
        self._plugins: PluginManager | None = None
        self._plugin_warnings: list[str] = []

    @property
    def root(self) -> Path:
        """The workspace root directory."""
        return self._settings.project_root

    @property
    def settings(self) -> ArchSettings:
        """The resolved settings for this workspace."""
        return self._settings

    @property
    def plugins(self) -> PluginManager | None:
        """The plugin manager (None until :meth:`init_plugins` runs)."""
        return self._plugins

    @property
    def plugin_warnings(self) -> list[str]:
        """Non-fatal plugin problems collected while building the catalog."""
        return list(self._plugin_warnings)

    def init_plugins(self) -> None:
        """Discover entry-point and local plugins.

        Called by AppContext and the MCP server unless plugins are disabled.
        """
        from archctl.plugins.manager import PluginManager

        pm = PluginManager()
        pm.discover_and_load(local_dir=self.root / PROJECT_DIR / "plugins")
        self._plugins = pm
        self._catalog = None

    @property
    def catalog(self) -> Catalog:
        """The catalog (loaded on first access, then cached).

        Raises:
            CatalogError: if the catalog file is unreadable or invalid.
        """
        if self._catalog is None:
            catalog = load_catalog(self.root, override=self._settings.catalog.path)
            if self._plugins is not None:
                extra, warnings = self._plugins.collect_routing_rules()
                self._plugin_warnings.extend(warnings)
                try:
                    catalog = catalog.with_rules(extra)
                except ValidationError as exc:
                    logger.warning("Ignoring plugin routing rules", exc_info=True)
                    self._plugin_warnings.append(f"Ignored plugin routing rules: {exc}")
            self._catalog = catalog
        return self._catalog
