"""Tests for ServiceResult and ServiceError."""

import pydantic
import pytest

from slnctl.domain.errors import MisplacedSolutionArgumentError, PathNotFoundError
from slnctl.services.result import ServiceError, ServiceResult


class TestServiceResult:
    def test_success_defaults(self) -> None:
        result = ServiceResult(ok=True, op="list_projects")
        assert result.data == {}
        assert result.warnings == []
        assert result.error is None

    def test_frozen(self) -> None:
        result = ServiceResult(ok=True, op="list_projects")
        with pytest.raises(pydantic.ValidationError):
            result.ok = False  # type: ignore[misc]

    def test_failure_from_exception(self) -> None:
        exc = PathNotFoundError("Could not find project or directory `x`", path="x")
        result = ServiceResult.failure("add_projects", exc)
        assert result.ok is False
        assert result.error == ServiceError(
            code="PATH_NOT_FOUND",
            message="Could not find project or directory `x`",
            detail={"path": "x"},
        )

    def test_failure_carries_suggestion(self) -> None:
        exc = MisplacedSolutionArgumentError("All.sln", "slnctl add --solution All.sln a")
        result = ServiceResult.failure("add_projects", exc)
        assert result.error is not None
        assert result.error.detail["suggestion"] == "slnctl add --solution All.sln a"

    def test_json_round_trip(self) -> None:
        result = ServiceResult(ok=True, op="add_projects", data={"added": []})
        assert ServiceResult.model_validate_json(result.model_dump_json()) == result
