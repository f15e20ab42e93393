"""CheckService — content checks over the loaded catalog.

Single command following the linter pattern.  Three categories:
responsibilities, skills, and routing rules.  Duplicate names never get
this far: the catalog refuses to load (``INVALID_CATALOG``).
"""

from __future__ import annotations

from collections import defaultdict
from typing import TYPE_CHECKING, Any

from archctl.domain.types import Layer
from archctl.services.base import BaseService
from archctl.services.contracts import CheckResultData, dump_validated
from archctl.services.result import ServiceResult
from archctl.services.telemetry import trace_span, traced

if TYPE_CHECKING:
    from archctl.domain.catalog import Catalog, RoutingRule

SEVERITY_ERROR = "error"
SEVERITY_WARNING = "warning"

CAT_RESPONSIBILITY = "responsibility"
CAT_SKILL = "skill"
CAT_RULE = "routing_rule"

_SEVERITY_RANK = {SEVERITY_WARNING: 0, SEVERITY_ERROR: 1}


def _issue(category: str, severity: str, subject: str, message: str) -> dict[str, Any]:
    return {"category": category, "severity": severity, "subject": subject, "message": message}


class CheckService(BaseService):
    """Validate catalog content."""

    @traced
    def check(self, *, min_severity: str = SEVERITY_WARNING) -> ServiceResult:
        """Report catalog issues at or above *min_severity*."""
        op = "check"
        catalog, failure = self._load_catalog(op)
        if failure is not None:
            return failure

        issues: list[dict[str, Any]] = []
        with trace_span("responsibilities"):
            issues.extend(self._check_responsibilities(catalog))
        with trace_span("skills"):
            issues.extend(self._check_skills(catalog))
        with trace_span("rules"):
            issues.extend(self._check_rules(catalog))

        threshold = _SEVERITY_RANK.get(min_severity, 0)
        issues = [i for i in issues if _SEVERITY_RANK[i["severity"]] >= threshold]
        error_count = sum(1 for i in issues if i["severity"] == SEVERITY_ERROR)
        data = {
            "issues": issues,
            "count": len(issues),
            "error_count": error_count,
            "warning_count": len(issues) - error_count,
            "healthy": error_count == 0,
        }
        return ServiceResult(
            ok=True,
            op=op,
            data=dump_validated(CheckResultData, data),
            warnings=self._workspace.plugin_warnings,
        )

    # ------------------------------------------------------------------
    # Categories
    # ------------------------------------------------------------------

    @staticmethod
    def _check_responsibilities(catalog: Catalog) -> list[dict[str, Any]]:
        issues: list[dict[str, Any]] = []
        for resp in catalog.responsibilities:
            if not resp.description.strip():
                issues.append(
                    _issue(CAT_RESPONSIBILITY, SEVERITY_ERROR, resp.name, "Description is empty")
                )
            for skill in resp.skills:
                if catalog.skill(skill) is None:
                    issues.append(
                        _issue(
                            CAT_RESPONSIBILITY,
                            SEVERITY_ERROR,
                            resp.name,
                            f"References unknown skill '{skill}'",
                        )
                    )
        return issues

    @staticmethod
    def _check_skills(catalog: Catalog) -> list[dict[str, Any]]:
        issues: list[dict[str, Any]] = []
        for doc in catalog.skills:
            if not catalog.bound_to(doc.name):
                issues.append(
                    _issue(CAT_SKILL, SEVERITY_WARNING, doc.name, "Not bound to any responsibility")
                )
            if not doc.body.strip():
                issues.append(_issue(CAT_SKILL, SEVERITY_WARNING, doc.name, "Body is empty"))
        return issues

    @staticmethod
    def _check_rules(catalog: Catalog) -> list[dict[str, Any]]:
        issues: list[dict[str, Any]] = []
        covered = {r.layer for r in catalog.responsibilities}
        routed: set[Layer] = set()
        owners: dict[str, list[RoutingRule]] = defaultdict(list)

        for rule in catalog.rules:
            if not rule.triggers:
                issues.append(_issue(CAT_RULE, SEVERITY_ERROR, rule.name, "Has no triggers"))
            for layer in rule.layers:
                routed.add(layer)
                if layer not in covered:
                    issues.append(
                        _issue(
                            CAT_RULE,
                            SEVERITY_ERROR,
                            rule.name,
                            f"Routes to layer '{layer}' but no responsibility covers it",
                        )
                    )
            for trigger in rule.triggers:
                owners[trigger].append(rule)

        for layer in sorted(covered - routed, key=list(Layer).index):
            issues.append(
                _issue(
                    CAT_RULE,
                    SEVERITY_WARNING,
                    str(layer),
                    "Layer has responsibilities but no routing rule reaches it",
                )
            )

        for trigger, rules in sorted(owners.items()):
            if len({rule.layers for rule in rules}) < 2:
                continue
            names = ", ".join(rule.name for rule in rules)
            issues.append(
                _issue(
                    CAT_RULE,
                    SEVERITY_WARNING,
                    trigger,
                    f"Trigger shared by rules selecting different layers: {names}",
                )
            )
        return issues
