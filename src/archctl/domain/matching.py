"""Trigger phrase matching over free-text requests.

Matching is case-insensitive and anchored on word boundaries, so
"build" never matches the trigger "ui".  Inside multi-word triggers,
whitespace, hyphens and underscores are interchangeable, and a trailing
plural ``s``/``es`` on the request side is accepted.
"""

from __future__ import annotations

import functools
import re

from pydantic import BaseModel, Field

from archctl.domain.catalog import RoutingRule
from archctl.domain.types import Layer, sort_layers

_SEPARATORS = re.compile(r"[\s\-_]+")
_INVOCATION_PREFIX = re.compile(r"^\s*/orchestrator\b[:\s]*", re.IGNORECASE)
_USE_THE = re.compile(
    r"^\s*use\s+the\s+(?P<name>[a-z0-9][a-z0-9\-_]*)\s+to\s+(?P<request>.+)$",
    re.IGNORECASE | re.DOTALL,
)


@functools.lru_cache(maxsize=1024)
def trigger_pattern(trigger: str) -> re.Pattern[str]:
    """Compile the regex used to find *trigger* in a request."""
    words = [re.escape(w) for w in _SEPARATORS.split(trigger.strip().lower()) if w]
    body = r"[\s\-_]+".join(words)
    return re.compile(rf"(?<![a-z0-9]){body}(?:e?s)?(?![a-z0-9])", re.IGNORECASE)


def normalize_request(text: str) -> str:
    """Collapse whitespace; the request keeps its original casing."""
    return " ".join(text.split())


class CategoryMatch(BaseModel):
    """One layer selected for a request, with the evidence that selected it."""

    model_config = {"frozen": True}

    layer: Layer
    triggers: list[str] = Field(default_factory=list)
    rules: list[str] = Field(default_factory=list)


def match_rules(
    text: str,
    rules: tuple[RoutingRule, ...] | list[RoutingRule],
) -> list[CategoryMatch]:
    """Return category matches for *text*, ordered by layer precedence.

    Every rule with at least one matching trigger contributes all of its
    layers; nothing suppresses anything else.
    """
    triggers: dict[Layer, list[str]] = {}
    fired: dict[Layer, list[str]] = {}
    for rule in rules:
        hits = [t for t in rule.triggers if trigger_pattern(t).search(text)]
        if not hits:
            continue
        for layer in rule.layers:
            bucket = triggers.setdefault(layer, [])
            bucket.extend(t for t in hits if t not in bucket)
            fired.setdefault(layer, []).append(rule.name)

    return [
        CategoryMatch(layer=layer, triggers=triggers[layer], rules=fired[layer])
        for layer in sort_layers(list(triggers))
    ]


def parse_invocation(text: str) -> tuple[str | None, str]:
    """Split an invocation phrase into ``(target, request)``.

    ``/orchestrator <text>`` yields ``(None, text)``; ``Use the <name> to
    <text>`` yields ``(name, text)``; anything else is returned unchanged
    with no target.
    """
    if _INVOCATION_PREFIX.match(text):
        return None, normalize_request(_INVOCATION_PREFIX.sub("", text, count=1))

    match = _USE_THE.match(text)
    if match:
        return match.group("name").lower(), normalize_request(match.group("request"))
    return None, normalize_request(text)


def names_responsibility(name: str) -> bool:
    """Whether *name* from ``Use the <name> to ...`` reads as a responsibility.

    Only ``*agent`` names count; "Use the api to ..." is an ordinary request.
    """
    return name.strip().lower().endswith("agent")
