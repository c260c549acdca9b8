"""Cascade queries against the process-wide default engine.

The default engine builds from the bundled reference data on first use.
Applications that load their own catalogs construct a
:class:`~infracascade.cascade.engine.CascadeEngine` instead, or install one
with :func:`set_default_engine`.
"""

from __future__ import annotations

import threading

from infracascade.cascade.alerts import summarize_cascade
from infracascade.cascade.engine import CascadeEngine
from infracascade.domain.catalogs import Cable, Chokepoint, Pipeline, Port
from infracascade.domain.models import CascadeResult, GraphStats

__all__ = [
    "CascadeEngine",
    "calculate_cascade",
    "clear_graph_cache",
    "get_cable_by_id",
    "get_chokepoint_by_id",
    "get_default_engine",
    "get_graph_stats",
    "get_pipeline_by_id",
    "get_port_by_id",
    "set_default_engine",
    "summarize_cascade",
]

_default: CascadeEngine | None = None
_default_lock = threading.Lock()


def get_default_engine() -> CascadeEngine:
    global _default
    if _default is None:
        with _default_lock:
            if _default is None:
                _default = CascadeEngine()
    return _default


def set_default_engine(engine: CascadeEngine | None) -> None:
    """Replace the default engine (None restores a fresh bundled-data engine)."""
    global _default
    with _default_lock:
        _default = engine


def calculate_cascade(source_id: str, disruption_level: float = 1.0) -> CascadeResult | None:
    return get_default_engine().calculate_cascade(source_id, disruption_level)


def get_graph_stats() -> GraphStats:
    return get_default_engine().graph_stats()


def clear_graph_cache() -> None:
    get_default_engine().clear_graph_cache()


def get_cable_by_id(cable_id: str) -> Cable | None:
    return get_default_engine().get_cable(cable_id)


def get_pipeline_by_id(pipeline_id: str) -> Pipeline | None:
    return get_default_engine().get_pipeline(pipeline_id)


def get_port_by_id(port_id: str) -> Port | None:
    return get_default_engine().get_port(port_id)


def get_chokepoint_by_id(chokepoint_id: str) -> Chokepoint | None:
    return get_default_engine().get_chokepoint(chokepoint_id)
