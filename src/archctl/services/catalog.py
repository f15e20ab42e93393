"""CatalogService — read access to responsibilities and knowledge documents."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from archctl.domain.types import Layer
from archctl.services.base import BaseService
from archctl.services.contracts import (
    ResponsibilityListData,
    SkillListData,
    dump_validated,
)
from archctl.services.result import ServiceResult
from archctl.services.telemetry import traced

if TYPE_CHECKING:
    from archctl.domain.catalog import Catalog, Responsibility


def _responsibility_row(resp: Responsibility) -> dict[str, Any]:
    return {
        "name": resp.name,
        "layer": str(resp.layer),
        "description": resp.description,
        "skills": list(resp.skills),
    }


def _rules_for(catalog: Catalog, layer: Layer) -> list[dict[str, Any]]:
    return [
        {"name": rule.name, "triggers": list(rule.triggers)}
        for rule in catalog.rules
        if layer in rule.layers
    ]


class CatalogService(BaseService):
    """List and inspect the routing catalog."""

    @traced
    def list_responsibilities(self, *, layer: str | None = None) -> ServiceResult:
        """List responsibilities, optionally restricted to one layer."""
        op = "list_responsibilities"
        catalog, failure = self._load_catalog(op)
        if failure is not None:
            return failure

        if layer is not None:
            try:
                wanted = Layer(layer.lower())
            except ValueError:
                return ServiceResult.failure(
                    op,
                    "NOT_FOUND",
                    f"Unknown layer '{layer}'",
                    layers=[str(x) for x in Layer],
                )
            items = [_responsibility_row(r) for r in catalog.for_layer(wanted)]
        else:
            items = [_responsibility_row(r) for r in catalog.responsibilities]

        return ServiceResult(
            ok=True,
            op=op,
            data=dump_validated(ResponsibilityListData, {"count": len(items), "items": items}),
        )

    @traced
    def get_responsibility(self, name: str) -> ServiceResult:
        """Show one responsibility with its resolved skills and routing rules."""
        op = "get_responsibility"
        catalog, failure = self._load_catalog(op)
        if failure is not None:
            return failure

        resp = catalog.responsibility(name)
        if resp is None:
            return ServiceResult.failure(
                op,
                "NOT_FOUND",
                f"No responsibility named '{name}'",
                known=[r.name for r in catalog.responsibilities],
            )

        warnings: list[str] = []
        skills: list[dict[str, Any]] = []
        for skill_name in resp.skills:
            doc = catalog.skill(skill_name)
            if doc is None:
                warnings.append(f"Unknown skill '{skill_name}'")
                continue
            skills.append({"name": doc.name, "title": doc.title, "summary": doc.summary})

        data = _responsibility_row(resp)
        data["skills"] = skills
        data["rules"] = _rules_for(catalog, resp.layer)
        return ServiceResult(ok=True, op=op, data=data, warnings=warnings)

    @traced
    def list_skills(self) -> ServiceResult:
        """List knowledge documents with the responsibilities bound to each."""
        op = "list_skills"
        catalog, failure = self._load_catalog(op)
        if failure is not None:
            return failure

        items = [
            {
                "name": doc.name,
                "title": doc.title,
                "summary": doc.summary,
                "responsibilities": catalog.bound_to(doc.name),
            }
            for doc in catalog.skills
        ]
        return ServiceResult(
            ok=True,
            op=op,
            data=dump_validated(SkillListData, {"count": len(items), "items": items}),
        )

    @traced
    def get_skill(self, name: str, *, include_body: bool = True) -> ServiceResult:
        """Show one knowledge document."""
        op = "get_skill"
        catalog, failure = self._load_catalog(op)
        if failure is not None:
            return failure

        doc = catalog.skill(name)
        if doc is None:
            return ServiceResult.failure(
                op,
                "NOT_FOUND",
                f"No skill named '{name}'",
                known=[s.name for s in catalog.skills],
            )

        data: dict[str, Any] = {
            "name": doc.name,
            "title": doc.title,
            "summary": doc.summary,
            "responsibilities": catalog.bound_to(doc.name),
        }
        if include_body:
            data["body"] = doc.body
        warnings = [] if doc.body else [f"Skill '{doc.name}' has no body"]
        return ServiceResult(ok=True, op=op, data=data, warnings=warnings)
