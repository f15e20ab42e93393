"""RoutingService — classify a request and build its execution plan.

Classification matches the request against the catalog's rule table.
Planning orders the selected layers through the precedence graph
(domain, application, infrastructure, api, web; MCP independent) and
expands each layer into the responsibilities that cover it.

Requests that match nothing never produce a silent empty plan: they fail
with ``NO_MATCH`` or, with ``[routing] on_no_match = "fallback"``, plan the
fallback layers with a warning.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from archctl.domain.matching import (
    CategoryMatch,
    match_rules,
    names_responsibility,
    normalize_request,
    parse_invocation,
)
from archctl.domain.types import LAYERED, Layer, is_independent
from archctl.infrastructure.graph import build_layer_graph, nearest_predecessors, plan_order
from archctl.infrastructure.templates import build_template_environment
from archctl.services.base import BaseService
from archctl.services.contracts import ClassifyResultData, PlanResultData, dump_validated
from archctl.services.result import ServiceResult
from archctl.services.telemetry import trace_span, traced

if TYPE_CHECKING:
    from jinja2 import Environment

    from archctl.domain.catalog import Catalog, Responsibility

logger = logging.getLogger(__name__)

_CLARIFY = "Ask the user to clarify which layers the change touches."


class RoutingService(BaseService):
    """Turn free-text requests into ordered execution plans."""

    # ------------------------------------------------------------------
    # classify
    # ------------------------------------------------------------------

    @traced
    def classify(self, request: str) -> ServiceResult:
        """Return the categories *request* falls into, in precedence order."""
        op = "classify"
        _target, text = parse_invocation(request)
        if not text:
            return ServiceResult.failure(op, "EMPTY_REQUEST", "Request is empty")

        catalog, failure = self._load_catalog(op)
        if failure is not None:
            return failure

        matches = self._match(text, catalog)
        if not matches:
            return self._no_match(op, text)

        data = {
            "request": text,
            "count": len(matches),
            "categories": [m.model_dump(mode="json") for m in matches],
        }
        return ServiceResult(
            ok=True,
            op=op,
            data=dump_validated(ClassifyResultData, data),
            warnings=self._workspace.plugin_warnings,
        )

    # ------------------------------------------------------------------
    # plan
    # ------------------------------------------------------------------

    @traced
    def plan(
        self,
        request: str,
        *,
        include_skills: bool | None = None,
        markdown: bool = False,
    ) -> ServiceResult:
        """Build the execution plan for *request*.

        ``Use the <name> to <text>`` produces a single-step plan for the
        named responsibility; ``/orchestrator <text>`` and plain text are
        classified.
        """
        op = "plan"
        target, text = parse_invocation(request)
        if not text:
            return ServiceResult.failure(op, "EMPTY_REQUEST", "Request is empty")

        catalog, failure = self._load_catalog(op)
        if failure is not None:
            return failure

        routing = self._workspace.settings.routing
        if include_skills is None:
            include_skills = routing.include_skills
        warnings = self._workspace.plugin_warnings
        env = build_template_environment("invocation", root=self._workspace.root)

        resp = catalog.responsibility(target) if target is not None else None
        if target is not None and resp is None and not names_responsibility(target):
            logger.debug("%r is not a responsibility; classifying the whole request", target)
            target, text = None, normalize_request(request)

        if target is not None:
            if resp is None:
                return ServiceResult.failure(
                    op,
                    "UNKNOWN_RESPONSIBILITY",
                    f"No responsibility named '{target}'",
                    name=target,
                    known=[r.name for r in catalog.responsibilities],
                )
            steps = [
                self._step(
                    env,
                    1,
                    resp,
                    text,
                    rationale="Requested directly",
                    include_skills=include_skills,
                )
            ]
            return self._finish(op, text, "direct", [resp.layer], steps, warnings, markdown)

        matches = self._match(text, catalog)
        if matches:
            mode = "classified"
            layers = [m.layer for m in matches]
            evidence = {m.layer: m for m in matches}
        elif routing.on_no_match == "fallback":
            mode = "fallback"
            layers = list(routing.fallback_layers) or list(LAYERED)
            evidence = {}
            warnings.append(f"No category matched; planned fallback layers. {_CLARIFY}")
        else:
            return self._no_match(op, text)

        with trace_span("order") as span:
            graph = build_layer_graph(layers)
            order = plan_order(graph)
            if span:
                span.annotate("layers", [str(layer) for layer in order])

        steps: list[dict[str, Any]] = []
        planned: dict[Layer, list[str]] = {}
        for layer in order:
            covering = catalog.for_layer(layer)
            if not covering:
                warnings.append(f"No responsibility covers layer '{layer}'")
                continue
            depends_on = [
                name
                for upstream in nearest_predecessors(graph, layer, planned)
                for name in planned[upstream]
            ]
            match = evidence.get(layer)
            for resp in covering:
                steps.append(
                    self._step(
                        env,
                        len(steps) + 1,
                        resp,
                        text,
                        rationale=self._rationale(match),
                        triggers=match.triggers if match else [],
                        depends_on=depends_on,
                        include_skills=include_skills,
                    )
                )
            planned[layer] = [r.name for r in covering]

        if not steps:
            return ServiceResult.failure(
                op,
                "NO_MATCH",
                "No responsibility covers the matched categories. " + _CLARIFY,
                categories=[str(layer) for layer in order],
            )
        return self._finish(op, text, mode, order, steps, warnings, markdown)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    @staticmethod
    def _match(text: str, catalog: Catalog) -> list[CategoryMatch]:
        with trace_span("match_rules") as span:
            matches = match_rules(text, catalog.rules)
            if span:
                span.annotate("rules", len(catalog.rules))
                span.annotate("categories", len(matches))
        logger.debug("Classified %r into %s", text, [str(m.layer) for m in matches])
        return matches

    @staticmethod
    def _no_match(op: str, text: str) -> ServiceResult:
        return ServiceResult.failure(
            op,
            "NO_MATCH",
            f"No category matched the request. {_CLARIFY}",
            request=text,
            layers=[str(layer) for layer in Layer],
        )

    @staticmethod
    def _rationale(match: CategoryMatch | None) -> str:
        if match is None:
            return "Fallback: no category matched"
        quoted = ", ".join(f"'{t}'" for t in match.triggers)
        return f"Matched {quoted} (rules: {', '.join(match.rules)})"

    @staticmethod
    def _step(
        env: Environment,
        position: int,
        resp: Responsibility,
        text: str,
        *,
        rationale: str,
        triggers: list[str] | None = None,
        depends_on: list[str] | None = None,
        include_skills: bool = True,
    ) -> dict[str, Any]:
        invocation = env.get_template("step.j2").render(
            responsibility=resp.name, layer=str(resp.layer), request=text
        )
        return {
            "position": position,
            "responsibility": resp.name,
            "layer": str(resp.layer),
            "description": resp.description,
            "skills": list(resp.skills) if include_skills else [],
            "rationale": rationale,
            "triggers": list(triggers or []),
            "depends_on": [] if is_independent(resp.layer) else list(depends_on or []),
            "independent": is_independent(resp.layer),
            "invocation": invocation.strip(),
        }

    def _finish(
        self,
        op: str,
        text: str,
        mode: str,
        layers: list[Layer],
        steps: list[dict[str, Any]],
        warnings: list[str],
        markdown: bool,
    ) -> ServiceResult:
        data: dict[str, Any] = {
            "request": text,
            "mode": mode,
            "count": len(steps),
            "categories": [str(layer) for layer in layers],
            "steps": steps,
        }
        if markdown:
            env = build_template_environment("prompts", root=self._workspace.root)
            data["markdown"] = env.get_template("plan.md.j2").render(**data)

        self._notify(
            "post_plan",
            {"request": text, "responsibilities": [s["responsibility"] for s in steps]},
            warnings,
        )
        return ServiceResult(
            ok=True,
            op=op,
            data=dump_validated(PlanResultData, data),
            warnings=warnings,
        )
