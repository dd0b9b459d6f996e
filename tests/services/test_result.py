"""Tests for ServiceResult and ServiceError."""

import json

import pytest
from pydantic import ValidationError

from linkconv.services.result import ErrorCode, ServiceError, ServiceResult


class TestServiceResult:
    def test_success_construction(self) -> None:
        result = ServiceResult(ok=True, op="convert", data={"changed": 2})
        assert result.ok is True
        assert result.op == "convert"
        assert result.data == {"changed": 2}
        assert result.warnings == []
        assert result.error is None

    def test_failure_helper(self) -> None:
        result = ServiceResult.failure(
            "convert", ErrorCode.NOT_FOUND, "No such file", path="x.md"
        )
        assert result.ok is False
        assert result.error is not None
        assert result.error.code == ErrorCode.NOT_FOUND
        assert result.error.detail == {"path": "x.md"}

    def test_json_serialization(self) -> None:
        result = ServiceResult.failure("reformat", ErrorCode.INVALID_FORMAT, "Choose")
        parsed = json.loads(result.model_dump_json())
        assert parsed["ok"] is False
        assert parsed["error"]["code"] == "INVALID_FORMAT"
        assert parsed["data"] == {}

    def test_frozen(self) -> None:
        result = ServiceResult(ok=True, op="test")
        with pytest.raises(ValidationError):
            result.ok = False  # type: ignore[misc]


class TestServiceError:
    def test_unknown_code_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ServiceError(code="E001", message="nope")  # type: ignore[arg-type]

    def test_code_from_string(self) -> None:
        assert ServiceError(code="NO_DOCUMENTS", message="x").code is ErrorCode.NO_DOCUMENTS
