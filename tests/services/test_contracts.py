"""Tests for payload contracts at the service boundary."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from archctl.infrastructure.workspace import Workspace
from archctl.services.catalog import CatalogService
from archctl.services.contracts import (
    CheckResultData,
    PlanResultData,
    ResponsibilityListData,
    dump_validated,
)
from archctl.services.routing import RoutingService


class TestDumpValidated:
    def test_rejects_missing_keys(self) -> None:
        with pytest.raises(ValidationError):
            dump_validated(CheckResultData, {"issues": []})

    def test_rejects_bad_mode(self) -> None:
        with pytest.raises(ValidationError):
            dump_validated(
                PlanResultData,
                {"request": "r", "mode": "guess", "count": 0, "categories": [], "steps": []},
            )

    def test_fills_defaults(self) -> None:
        out = dump_validated(
            PlanResultData,
            {"request": "r", "mode": "direct", "count": 0, "categories": [], "steps": []},
        )
        assert out["markdown"] is None


class TestServicePayloads:
    def test_plan_matches_contract(self, workspace: Workspace) -> None:
        result = RoutingService(workspace).plan("Add a page")
        PlanResultData.model_validate(result.data)

    def test_responsibility_list_matches_contract(self, workspace: Workspace) -> None:
        result = CatalogService(workspace).list_responsibilities()
        ResponsibilityListData.model_validate(result.data)
