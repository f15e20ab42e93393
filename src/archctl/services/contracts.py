"""Typed payload contracts for service and adapter boundaries.

These models validate payload shapes before they leave the service layer,
so a renamed key (``steps`` vs ``items``) fails in tests rather than in a
renderer or an MCP client.
"""

from __future__ import annotations

from typing import Any, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T", bound=BaseModel)


def dump_validated(model_cls: type[T], data: dict[str, Any]) -> dict[str, Any]:
    """Validate *data* against *model_cls* and return a normalized payload dict."""
    model = model_cls.model_validate(data)
    return model.model_dump(mode="json")


class CategoryItem(BaseModel):
    """One matched category."""

    layer: str
    triggers: list[str]
    rules: list[str]


class ClassifyResultData(BaseModel):
    """Payload contract for ``RoutingService.classify``."""

    request: str
    count: int
    categories: list[CategoryItem]


class PlanStep(BaseModel):
    """One entry of an execution plan."""

    position: int
    responsibility: str
    layer: str
    description: str
    skills: list[str] = Field(default_factory=list)
    rationale: str
    triggers: list[str] = Field(default_factory=list)
    depends_on: list[str] = Field(default_factory=list)
    independent: bool = False
    invocation: str


class PlanResultData(BaseModel):
    """Payload contract for ``RoutingService.plan``."""

    request: str
    mode: Literal["classified", "direct", "fallback"]
    count: int
    categories: list[str]
    steps: list[PlanStep]
    markdown: str | None = None


class ResponsibilityItem(BaseModel):
    """One responsibility row."""

    model_config = ConfigDict(extra="allow")

    name: str
    layer: str
    description: str
    skills: list[str]


class ResponsibilityListData(BaseModel):
    """Payload contract for ``CatalogService.list_responsibilities``."""

    count: int
    items: list[ResponsibilityItem]


class SkillItem(BaseModel):
    """One knowledge document row."""

    model_config = ConfigDict(extra="allow")

    name: str
    title: str
    summary: str
    responsibilities: list[str]


class SkillListData(BaseModel):
    """Payload contract for ``CatalogService.list_skills``."""

    count: int
    items: list[SkillItem]


class CheckIssue(BaseModel):
    """One catalog finding returned by ``CheckService.check``."""

    category: str
    severity: Literal["warning", "error"]
    subject: str
    message: str


class CheckResultData(BaseModel):
    """Payload contract for ``CheckService.check``."""

    issues: list[CheckIssue]
    count: int
    error_count: int
    warning_count: int
    healthy: bool
