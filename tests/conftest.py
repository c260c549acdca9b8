"""Shared pytest fixtures and test helpers for infracascade tests."""

from __future__ import annotations

import json
from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from infracascade.cascade.engine import CascadeEngine
from infracascade.domain.catalogs import (
    Cable,
    Chokepoint,
    CountryCapacity,
    LandingPoint,
    Pipeline,
    Port,
    ReferenceCatalog,
)
from infracascade.infrastructure.graph.builder import GraphBuilder
from infracascade.infrastructure.graph.engine import GraphEngine
from infracascade.infrastructure.graph.model import DependencyGraph

# ---------------------------------------------------------------------------
# Reference data
#
# atlantic_1   cable      US 0.40, ES 0.35 (no redundancy), lands in US and ES
# atlantic_2   cable      US 0.30 (redundant), FR 0.20
# pacific_1    cable      JP 0.10 (redundant)
# north_line   pipeline   RU, DE
# bandar_abbas port       IR, mixed, ~70 km from hormuz_strait
# rotterdam    port       NL, container rank 10, far from every chokepoint
# hormuz_strait chokepoint
# ---------------------------------------------------------------------------

RAW_CATALOG: dict[str, list[dict[str, Any]]] = {
    "cables": [
        {
            "id": "atlantic_1",
            "name": "Atlantic One",
            "points": [[-76.0, 36.9], [-2.9, 43.4]],
            "capacityTbps": 200,
            "landingPoints": [{"country": "US"}, {"country": "ES"}],
            "countriesServed": [
                {"country": "US", "capacityShare": 0.4},
                {"country": "ES", "capacityShare": 0.35},
            ],
        },
        {
            "id": "atlantic_2",
            "name": "Atlantic Two",
            "points": [[-74.0, 40.2], [-1.8, 46.5]],
            "landingPoints": [{"country": "US"}, {"country": "FR"}],
            "countriesServed": [
                {"country": "US", "capacityShare": 0.3, "isRedundant": True},
                {"country": "FR", "capacityShare": 0.2},
            ],
        },
        {
            "id": "pacific_1",
            "name": "Pacific One",
            "points": [[139.9, 34.9]],
            "landingPoints": [{"country": "JP"}],
            "countriesServed": [{"country": "JP", "capacityShare": 0.1, "isRedundant": True}],
        },
    ],
    "pipelines": [
        {
            "id": "north_line",
            "name": "North Line",
            "type": "gas",
            "points": [[28.0, 60.5], [13.6, 54.1]],
            "countries": ["RU", "DE"],
        },
    ],
    "ports": [
        {
            "id": "bandar_abbas",
            "name": "Bandar Abbas",
            "lat": 27.18,
            "lon": 56.27,
            "country": "Iran",
            "type": "mixed",
        },
        {
            "id": "rotterdam",
            "name": "Rotterdam",
            "lat": 51.95,
            "lon": 4.14,
            "country": "Netherlands",
            "type": "container",
            "rank": 10,
        },
    ],
    "chokepoints": [
        {"id": "hormuz_strait", "name": "Strait of Hormuz", "lat": 26.57, "lon": 56.25},
    ],
}


def make_catalog(raw: dict[str, list[dict[str, Any]]] | None = None) -> ReferenceCatalog:
    """Validate *raw* (default: :data:`RAW_CATALOG`) into a ReferenceCatalog."""
    raw = raw if raw is not None else RAW_CATALOG
    return ReferenceCatalog(
        cables=tuple(Cable.model_validate(r) for r in raw.get("cables", [])),
        pipelines=tuple(Pipeline.model_validate(r) for r in raw.get("pipelines", [])),
        ports=tuple(Port.model_validate(r) for r in raw.get("ports", [])),
        chokepoints=tuple(Chokepoint.model_validate(r) for r in raw.get("chokepoints", [])),
    )


def write_catalog(directory: Path, raw: dict[str, Any] | None = None) -> Path:
    """Write *raw* as ``<name>.json`` files into *directory*."""
    directory.mkdir(parents=True, exist_ok=True)
    for name, records in (raw if raw is not None else RAW_CATALOG).items():
        (directory / f"{name}.json").write_text(json.dumps(records), encoding="utf-8")
    return directory


def cable(cable_id: str, served: dict[str, float], **kwargs: Any) -> Cable:
    """Shorthand cable with countries served and no landing points."""
    return Cable(
        id=cable_id,
        name=kwargs.pop("name", cable_id.title()),
        countries_served=[CountryCapacity(country=c, capacity_share=s) for c, s in served.items()],
        landing_points=[LandingPoint(country=c) for c in kwargs.pop("landings", [])],
        **kwargs,
    )


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def catalog() -> ReferenceCatalog:
    return make_catalog()


@pytest.fixture
def graph(catalog: ReferenceCatalog) -> DependencyGraph:
    return GraphBuilder(catalog, chokepoint_radius_km=500).build()


@pytest.fixture
def graph_engine(catalog: ReferenceCatalog) -> GraphEngine:
    return GraphEngine(catalog)


@pytest.fixture
def engine(graph_engine: GraphEngine) -> CascadeEngine:
    """Cascade engine over the small in-memory catalog."""
    return CascadeEngine(graph_engine)


@pytest.fixture
def catalog_dir(tmp_path: Path) -> Path:
    """The small catalog written as JSON files."""
    return write_catalog(tmp_path / "catalogs")


@pytest.fixture
def _isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[None]:
    """Run from an empty directory with no config file or env override in reach."""
    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.chdir(work)
    monkeypatch.delenv("INFRACASCADE_CONFIG", raising=False)
    yield


@pytest.fixture(autouse=True)
def _reset_process_state() -> Generator[None]:
    """Undo what a CLI invocation leaves behind: root handlers, telemetry, default engine."""
    import logging

    from infracascade import cascade
    from infracascade.services.telemetry import disable_telemetry

    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers = handlers
    root.setLevel(level)
    disable_telemetry()
    cascade.set_default_engine(None)
