"""BaseService: shared foundation for infracascade services.

Every service receives a :class:`CascadeEngine` at construction time.  The
engine owns the graph cache; services translate its answers (and its
``None``/``ValueError``/``CatalogError`` outcomes) into ServiceResults.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from infracascade.infrastructure.catalogs import CatalogError
from infracascade.services.result import ErrorCode, ServiceResult

if TYPE_CHECKING:
    from infracascade.cascade.engine import CascadeEngine
    from infracascade.infrastructure.graph.model import DependencyGraph


class BaseService:
    """Base for service-layer classes.

    Usage::

        class CascadeService(BaseService):
            def run(self, source_id: str) -> ServiceResult:
                graph, failed = self._graph_or_error("cascade")
                if failed:
                    return failed
                ...
    """

    def __init__(self, engine: CascadeEngine) -> None:
        self._engine = engine

    def _graph_or_error(self, op: str) -> tuple[DependencyGraph | None, ServiceResult | None]:
        """Build (or reuse) the graph; a catalog failure becomes an error result."""
        try:
            return self._engine.graph, None
        except CatalogError as exc:
            return None, ServiceResult.failure(op, ErrorCode.CATALOG_ERROR, str(exc))

    def _build_warnings(self) -> list[str]:
        """Catalog load warnings plus records the builder skipped."""
        graphs = self._engine.graphs
        return [*graphs.load_warnings, *(str(s) for s in graphs.skipped)]
