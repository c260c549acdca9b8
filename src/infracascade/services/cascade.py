"""CascadeService: disruption queries as ServiceResults."""

from __future__ import annotations

from typing import Any

from infracascade.cascade.alerts import summarize_cascade
from infracascade.domain.models import CascadeResult
from infracascade.services.base import BaseService
from infracascade.services.result import ErrorCode, ServiceResult
from infracascade.services.telemetry import trace_span, traced


class CascadeService(BaseService):
    """Runs cascade calculations and alert summaries."""

    def _calculate(
        self, op: str, source_id: str, disruption_level: float
    ) -> tuple[CascadeResult | None, ServiceResult | None]:
        graph, failed = self._graph_or_error(op)
        if failed is not None:
            return None, failed

        with trace_span("propagate") as span:
            try:
                result = self._engine.calculate_cascade(source_id, disruption_level)
            except ValueError as exc:
                return None, ServiceResult.failure(
                    op, ErrorCode.INVALID_ARGUMENT, str(exc), disruption_level=disruption_level
                )
            if span and result is not None:
                span.annotate("affected", len(result.affected_nodes))

        if result is None:
            return None, ServiceResult.failure(
                op,
                ErrorCode.NOT_FOUND,
                f"Node '{source_id}' not found in graph",
                warnings=self._build_warnings(),
                source_id=source_id,
            )
        return result, None

    @traced
    def run(self, source_id: str, *, disruption_level: float = 1.0, top: int = 0) -> ServiceResult:
        """Compute the cascade for *source_id*.

        Args:
            source_id: Prefixed node id (``cable:marea``, ``chokepoint:suez``).
            disruption_level: Fraction of the asset lost, in (0, 1].
            top: Keep only the first *top* countries (0 keeps all).
        """
        result, failed = self._calculate("cascade", source_id, disruption_level)
        if failed is not None:
            return failed
        assert result is not None

        payload = result.model_dump(mode="json")
        countries: list[dict[str, Any]] = payload["countries_affected"]
        data: dict[str, Any] = {
            "source": payload["source"],
            "disruption_level": result.disruption_level,
            "count": len(result.affected_nodes),
            "country_count": len(countries),
            "countries_affected": countries[:top] if top > 0 else countries,
            "affected_nodes": payload["affected_nodes"],
            "redundancies": payload["redundancies"],
        }
        return ServiceResult(ok=True, op="cascade", data=data, warnings=self._build_warnings())

    @traced
    def alert(self, source_id: str, *, disruption_level: float = 1.0) -> ServiceResult:
        """Summarize the cascade for *source_id* as a prioritised alert."""
        result, failed = self._calculate("cascade_alert", source_id, disruption_level)
        if failed is not None:
            return failed
        assert result is not None

        alert = summarize_cascade(result)
        return ServiceResult(
            ok=True,
            op="cascade_alert",
            data={
                "source_id": source_id,
                "alert": alert.model_dump(mode="json") if alert else None,
            },
            warnings=self._build_warnings(),
        )
