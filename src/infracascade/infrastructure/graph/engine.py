"""GraphEngine: lazily built, explicitly invalidated dependency graph.

One engine owns one cached graph.  The first access builds it from the
reference catalogs; later accesses reuse it until :meth:`invalidate` is
called.  There is no TTL: callers invalidate after reference data changes.

The build-or-reuse check is guarded by a lock so that concurrent first
access builds exactly once.  Queries against a built graph are read-only.
"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING

import structlog

from infracascade.domain import policy
from infracascade.infrastructure.catalogs import load_catalog
from infracascade.infrastructure.graph.builder import GraphBuilder, SkippedRecord

if TYPE_CHECKING:
    from pathlib import Path

    from infracascade.domain.catalogs import ReferenceCatalog
    from infracascade.infrastructure.graph.model import DependencyGraph

logger = structlog.get_logger(__name__)


class GraphEngine:
    """Get-or-build cache around :class:`GraphBuilder`.

    Args:
        catalog: Catalog to build from.  When given, it is kept across
            invalidations.
        catalog_dir: Directory of JSON catalogs, used when *catalog* is
            None (``None`` means the bundled data).  A catalog loaded from
            disk is re-read after every invalidation.
        chokepoint_radius_km: Port proximity radius for chokepoint edges.
    """

    def __init__(
        self,
        catalog: ReferenceCatalog | None = None,
        *,
        catalog_dir: Path | None = None,
        chokepoint_radius_km: float = policy.CHOKEPOINT_RADIUS_KM,
    ) -> None:
        self._injected = catalog
        self._catalog: ReferenceCatalog | None = catalog
        self._catalog_dir = catalog_dir
        self._radius_km = chokepoint_radius_km
        self._graph: DependencyGraph | None = None
        self._lock = threading.Lock()
        self._builds = 0
        self.load_warnings: list[str] = []
        self.skipped: list[SkippedRecord] = []

    @property
    def catalog(self) -> ReferenceCatalog:
        """The reference catalog (loaded from disk on first access)."""
        if self._catalog is None:
            with self._lock:
                if self._catalog is None:
                    self._catalog = self._load_catalog()
        return self._catalog

    @property
    def graph(self) -> DependencyGraph:
        """Return the graph, building it on first access."""
        graph = self._graph
        if graph is None:
            with self._lock:
                if self._graph is None:
                    if self._catalog is None:
                        self._catalog = self._load_catalog()
                    self._graph = self._build(self._catalog)
                graph = self._graph
        return graph

    @property
    def is_built(self) -> bool:
        return self._graph is not None

    @property
    def build_count(self) -> int:
        """Number of builds performed by this engine."""
        return self._builds

    def invalidate(self) -> None:
        """Clear the cached graph, forcing rebuild on next access."""
        with self._lock:
            self._graph = None
            if self._injected is None:
                self._catalog = None
        logger.debug("graph.invalidated")

    def _load_catalog(self) -> ReferenceCatalog:
        catalog, warnings = load_catalog(self._catalog_dir)
        self.load_warnings = warnings
        return catalog

    def _build(self, catalog: ReferenceCatalog) -> DependencyGraph:
        builder = GraphBuilder(catalog, chokepoint_radius_km=self._radius_km)
        graph = builder.build()
        self.skipped = builder.skipped
        self._builds += 1
        return graph
