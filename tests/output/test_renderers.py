"""Tests for operation-specific Rich renderers."""

from __future__ import annotations

from infracascade.cascade.engine import CascadeEngine
from infracascade.output.renderers import render_quiet, render_result
from infracascade.services.cascade import CascadeService
from infracascade.services.graph import GraphService
from infracascade.services.result import ServiceError, ServiceResult
from infracascade.services.telemetry import enable_telemetry

# ── Helpers ───────────────────────────────────────────────────────────


def _err(op: str, code: str, message: str, **detail: object) -> ServiceResult:
    return ServiceResult(
        ok=False, op=op, error=ServiceError(code=code, message=message, detail=dict(detail))
    )


# ── Error rendering ──────────────────────────────────────────────────


class TestErrorRenderer:
    def test_basic_error(self) -> None:
        output = render_result(_err("cascade", "NOT_FOUND", "Node 'x' not found in graph"))
        assert "ERROR" in output
        assert "cascade" in output
        assert "Node 'x' not found in graph" in output
        assert "NOT_FOUND" in output

    def test_verbose_shows_detail(self) -> None:
        output = render_result(
            _err("cascade", "INVALID_ARGUMENT", "bad", disruption_level=2.0), verbose=True
        )
        assert "detail" in output
        assert "disruption_level: 2.0" in output

    def test_no_error_object(self) -> None:
        assert "Unknown error" in render_result(ServiceResult(ok=False, op="x"))


# ── Cascade renderers ────────────────────────────────────────────────


class TestCascadeRenderer:
    def test_country_table(self, engine: CascadeEngine) -> None:
        output = render_result(CascadeService(engine).run("chokepoint:hormuz_strait"))
        assert "Strait of Hormuz" in output
        assert "Countries affected (5 of 5)" in output
        assert "Japan" in output
        assert "64.0%" in output
        assert "affected_nodes: 6" in output

    def test_top_in_title(self, engine: CascadeEngine) -> None:
        output = render_result(CascadeService(engine).run("chokepoint:hormuz_strait", top=2))
        assert "Countries affected (2 of 5)" in output
        assert "India" not in output

    def test_verbose_lists_chains(self, engine: CascadeEngine) -> None:
        output = render_result(
            CascadeService(engine).run("chokepoint:hormuz_strait"), verbose=True
        )
        assert "Affected nodes" in output
        assert "port:bandar_abbas → country:IR" in output

    def test_redundancies(self, engine: CascadeEngine) -> None:
        output = render_result(CascadeService(engine).run("cable:atlantic_1"))
        assert "Alternative routes" in output
        assert "atlantic_2" in output

    def test_no_countries(self, engine: CascadeEngine) -> None:
        output = render_result(CascadeService(engine).run("country:US"))
        assert "No countries affected." in output

    def test_verbose_telemetry_tree(self, engine: CascadeEngine) -> None:
        enable_telemetry()
        output = render_result(CascadeService(engine).run("cable:atlantic_1"), verbose=True)
        assert "meta:" in output
        assert "CascadeService.run" in output
        assert "propagate" in output


class TestAlertRenderer:
    def test_panel(self, engine: CascadeEngine) -> None:
        output = render_result(CascadeService(engine).alert("chokepoint:hormuz_strait"))
        assert "priority: critical" in output
        assert "JP, KR, IN, CN, IR" in output
        assert "location: 26.57, 56.25" in output

    def test_no_alert(self, engine: CascadeEngine) -> None:
        output = render_result(CascadeService(engine).alert("country:US"))
        assert "No alert" in output


# ── Graph renderers ──────────────────────────────────────────────────


class TestGraphRenderers:
    def test_stats(self, engine: CascadeEngine) -> None:
        output = render_result(GraphService(engine).stats())
        assert "graph_stats" in output
        assert "chokepoints" in output
        assert "23" in output

    def test_node(self, engine: CascadeEngine) -> None:
        output = render_result(GraphService(engine).node("port:bandar_abbas"))
        assert "port:bandar_abbas: Bandar Abbas" in output
        assert "Dependents (5):" in output
        assert "Depends on (1):" in output
        assert "trade_route" in output

    def test_generic_fallback(self) -> None:
        output = render_result(ServiceResult(ok=True, op="other", data={"source_id": "x"}))
        assert "OK" in output
        assert "source_id: x" in output


# ── Quiet mode ───────────────────────────────────────────────────────


class TestRenderQuiet:
    def test_cascade_lists_codes(self, engine: CascadeEngine) -> None:
        result = CascadeService(engine).run("chokepoint:hormuz_strait")
        assert render_quiet(result) == "JP\nKR\nIN\nCN\nIR"

    def test_alert_priority(self, engine: CascadeEngine) -> None:
        assert render_quiet(CascadeService(engine).alert("pipeline:north_line")) == "low"
        assert render_quiet(CascadeService(engine).alert("country:US")) == "none"

    def test_error(self) -> None:
        assert render_quiet(_err("node", "NOT_FOUND", "gone")) == "ERROR: node: gone"

    def test_other_ops(self) -> None:
        assert render_quiet(ServiceResult(ok=True, op="graph_stats")) == "OK: graph_stats"
