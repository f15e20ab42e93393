"""BaseService — shared foundation for archctl services.

Every service receives a :class:`Workspace` at construction time and reads
the catalog through it.  Catalog problems become ``INVALID_CATALOG``
results instead of exceptions.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from archctl.infrastructure.catalog_store import CatalogError
from archctl.services.result import ServiceResult

if TYPE_CHECKING:
    from archctl.domain.catalog import Catalog
    from archctl.infrastructure.workspace import Workspace

logger = logging.getLogger(__name__)


class BaseService:
    """Base for service-layer classes.

    Usage::

        class CatalogService(BaseService):
            def list_skills(self) -> ServiceResult:
                catalog, failure = self._load_catalog("list_skills")
                if failure is not None:
                    return failure
                ...
    """

    def __init__(self, workspace: Workspace) -> None:
        self._workspace = workspace

    def _load_catalog(self, op: str) -> tuple[Catalog, None] | tuple[None, ServiceResult]:
        """Return the workspace catalog, or an ``INVALID_CATALOG`` failure."""
        try:
            return self._workspace.catalog, None
        except CatalogError as exc:
            logger.debug("Catalog load failed", exc_info=True)
            return None, ServiceResult.failure(
                op, "INVALID_CATALOG", str(exc), source=exc.source or ""
            )

    def _notify(self, hook_name: str, payload: dict[str, Any], warnings: list[str]) -> None:
        """Call a plugin notification hook. No-op when plugins are not loaded.

        INVARIANT: Plugin failures are warnings, never errors.
        """
        pm = self._workspace.plugins
        if pm is None:
            return
        try:
            getattr(pm.hook, hook_name)(**payload)
        except Exception:
            logger.debug("Plugin hook %s failed", hook_name, exc_info=True)
            warnings.append(f"Plugin hook {hook_name} failed")
