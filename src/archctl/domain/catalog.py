"""Catalog models — responsibilities, knowledge documents, routing rules.

All three are immutable, defined at configuration time, and never
created or destroyed while routing.  ``Catalog`` bundles them and
enforces name uniqueness at construction.

INVARIANT: Responsibility, skill, and rule names are unique per catalog.
"""

from __future__ import annotations

from collections import Counter
from typing import Self

from pydantic import BaseModel, Field, field_validator, model_validator

from archctl.domain.types import Layer, sort_layers


def name_key(name: str) -> str:
    """Comparison key for catalog names, which are case-insensitive."""
    return name.strip().lower()


def _duplicates(names: list[str]) -> list[str]:
    counts = Counter(name_key(n) for n in names)
    return sorted({n for n in names if counts[name_key(n)] > 1})


class KnowledgeDocument(BaseModel):
    """A named unit of reference text ("skill")."""

    model_config = {"frozen": True}

    name: str
    title: str
    summary: str = ""
    body: str = ""


class Responsibility(BaseModel):
    """A named role covering one architectural layer ("agent")."""

    model_config = {"frozen": True}

    name: str
    layer: Layer
    description: str
    skills: tuple[str, ...] = ()

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("responsibility name must not be blank")
        return value.strip()


class RoutingRule(BaseModel):
    """Declarative mapping from trigger phrases to one or more layers."""

    model_config = {"frozen": True}

    name: str
    layers: tuple[Layer, ...]
    triggers: tuple[str, ...] = ()

    @field_validator("layers")
    @classmethod
    def _layers_present(cls, value: tuple[Layer, ...]) -> tuple[Layer, ...]:
        if not value:
            raise ValueError("routing rule must select at least one layer")
        return tuple(sort_layers(list(value)))

    @field_validator("triggers")
    @classmethod
    def _normalize_triggers(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        return tuple(t.strip().lower() for t in value if t.strip())


class Catalog(BaseModel):
    """Everything the router needs: responsibilities, skills, and rules."""

    model_config = {"frozen": True}

    responsibilities: tuple[Responsibility, ...] = ()
    skills: tuple[KnowledgeDocument, ...] = ()
    rules: tuple[RoutingRule, ...] = ()

    @model_validator(mode="after")
    def _unique_names(self) -> Self:
        for label, names in (
            ("responsibility", [r.name for r in self.responsibilities]),
            ("skill", [s.name for s in self.skills]),
            ("rule", [r.name for r in self.rules]),
        ):
            dupes = _duplicates(names)
            if dupes:
                raise ValueError(f"duplicate {label} names: {', '.join(dupes)}")
        return self

    def responsibility(self, name: str) -> Responsibility | None:
        """Look up a responsibility by name (case-insensitive)."""
        wanted = name_key(name)
        for resp in self.responsibilities:
            if name_key(resp.name) == wanted:
                return resp
        return None

    def skill(self, name: str) -> KnowledgeDocument | None:
        """Look up a knowledge document by name (case-insensitive)."""
        wanted = name_key(name)
        for doc in self.skills:
            if name_key(doc.name) == wanted:
                return doc
        return None

    def for_layer(self, layer: Layer | str) -> list[Responsibility]:
        """Responsibilities covering *layer*, in catalog order."""
        target = Layer(layer)
        return [r for r in self.responsibilities if r.layer == target]

    def bound_to(self, skill_name: str) -> list[str]:
        """Names of responsibilities that reference *skill_name*."""
        wanted = name_key(skill_name)
        return [
            r.name for r in self.responsibilities if any(name_key(s) == wanted for s in r.skills)
        ]

    def with_rules(self, extra: list[RoutingRule]) -> Catalog:
        """Return a copy with *extra* rules appended (re-validated)."""
        if not extra:
            return self
        return Catalog(
            responsibilities=self.responsibilities,
            skills=self.skills,
            rules=(*self.rules, *extra),
        )
