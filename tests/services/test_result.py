"""Tests for ServiceResult and ServiceError."""

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from infracascade.services.result import ErrorCode, ServiceError, ServiceResult


class TestServiceResult:
    def test_success_construction(self) -> None:
        result = ServiceResult(ok=True, op="cascade", data={"count": 3})
        assert result.ok is True
        assert result.data == {"count": 3}
        assert result.warnings == []
        assert result.error is None
        assert result.meta is None

    def test_json_serialization(self) -> None:
        result = ServiceResult(ok=True, op="graph_stats", data={"nodes": 4}, meta={"x": 1})
        parsed = json.loads(result.model_dump_json())
        assert parsed["ok"] is True
        assert parsed["data"]["nodes"] == 4
        assert parsed["meta"] == {"x": 1}

    def test_frozen(self) -> None:
        result = ServiceResult(ok=True, op="cascade")
        with pytest.raises(ValidationError):
            result.ok = False  # type: ignore[misc]


class TestFailure:
    def test_shorthand(self) -> None:
        result = ServiceResult.failure(
            "cascade", ErrorCode.NOT_FOUND, "Node 'x' not found in graph", source_id="x"
        )
        assert result.ok is False
        assert result.op == "cascade"
        assert result.error == ServiceError(
            code="NOT_FOUND", message="Node 'x' not found in graph", detail={"source_id": "x"}
        )

    def test_warnings_carried(self) -> None:
        result = ServiceResult.failure("node", "CATALOG_ERROR", "bad", warnings=["w"])
        assert result.warnings == ["w"]

    def test_error_codes_are_strings(self) -> None:
        assert [str(c) for c in ErrorCode] == ["NOT_FOUND", "INVALID_ARGUMENT", "CATALOG_ERROR"]
