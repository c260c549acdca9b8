"""Tests for cascade alert summaries."""

from __future__ import annotations

import pytest

from infracascade.cascade.alerts import alert_priority, summarize_cascade
from infracascade.cascade.engine import CascadeEngine
from infracascade.domain.models import CascadeResult, InfrastructureNode
from infracascade.domain.types import AlertPriority, ImpactLevel, NodeType


class TestAlertPriority:
    @pytest.mark.parametrize(
        ("highest", "countries", "expected"),
        [
            (ImpactLevel.CRITICAL, 1, AlertPriority.CRITICAL),
            (ImpactLevel.HIGH, 3, AlertPriority.CRITICAL),
            (ImpactLevel.HIGH, 2, AlertPriority.HIGH),
            (ImpactLevel.MEDIUM, 5, AlertPriority.HIGH),
            (ImpactLevel.LOW, 5, AlertPriority.HIGH),
            (ImpactLevel.MEDIUM, 1, AlertPriority.MEDIUM),
            (ImpactLevel.LOW, 3, AlertPriority.MEDIUM),
            (ImpactLevel.LOW, 2, AlertPriority.LOW),
        ],
    )
    def test_rules(self, highest: ImpactLevel, countries: int, expected: AlertPriority) -> None:
        assert alert_priority(highest, countries) is expected


class TestSummarize:
    def test_chokepoint_alert(self, engine: CascadeEngine) -> None:
        result = engine.calculate_cascade("chokepoint:hormuz_strait")
        assert result is not None
        alert = summarize_cascade(result)
        assert alert is not None
        assert alert.source_id == "chokepoint:hormuz_strait"
        assert alert.source_type is NodeType.CHOKEPOINT
        assert alert.highest_impact is ImpactLevel.HIGH
        assert alert.countries_affected == 5
        assert alert.priority is AlertPriority.CRITICAL
        assert alert.countries == ["JP", "KR", "IN", "CN", "IR"]
        assert alert.location == {"lat": 26.57, "lon": 56.25}

    def test_pipeline_alert_is_low(self, engine: CascadeEngine) -> None:
        result = engine.calculate_cascade("pipeline:north_line")
        assert result is not None
        alert = summarize_cascade(result)
        assert alert is not None
        assert alert.priority is AlertPriority.LOW
        assert alert.location == {"lat": 60.5, "lon": 28.0}

    def test_no_countries_no_alert(self) -> None:
        source = InfrastructureNode(id="port:x", type=NodeType.PORT, name="X")
        assert summarize_cascade(CascadeResult(source=source, disruption_level=1.0)) is None

    def test_missing_coordinates(self, engine: CascadeEngine) -> None:
        result = engine.calculate_cascade("cable:atlantic_1")
        assert result is not None
        stripped = result.model_copy(
            update={"source": result.source.model_copy(update={"coordinates": None})}
        )
        alert = summarize_cascade(stripped)
        assert alert is not None
        assert alert.location is None
        assert alert.priority is AlertPriority.MEDIUM
