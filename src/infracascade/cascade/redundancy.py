"""Alternative routes for a disrupted cable.

Only cables have a notion of substitutable capacity in the catalogs, so
non-cable sources always yield no alternatives.
"""

from __future__ import annotations

from infracascade.domain.catalogs import ReferenceCatalog
from infracascade.domain.countries import normalize_country_code
from infracascade.domain.models import RedundantRoute
from infracascade.domain.types import NodeType, split_node_id

DEFAULT_MAX_ALTERNATIVES = 5


def find_redundancies(
    catalog: ReferenceCatalog,
    source_id: str,
    *,
    limit: int = DEFAULT_MAX_ALTERNATIVES,
) -> list[RedundantRoute]:
    """Other cables serving at least one country the source cable serves.

    Each alternative carries its average capacity share across the shared
    countries, a proxy for how much traffic it could absorb.  Catalog order
    is kept; at most *limit* alternatives are returned.
    """
    source_type, cable_id = split_node_id(source_id)
    if source_type != NodeType.CABLE:
        return []
    source = catalog.cable(cable_id)
    if source is None:
        return []

    served = {normalize_country_code(c.country) for c in source.countries_served}
    alternatives: list[RedundantRoute] = []
    for cable in catalog.cables:
        if cable.id == cable_id:
            continue
        shared = [
            c.capacity_share
            for c in cable.countries_served
            if normalize_country_code(c.country) in served
        ]
        if not shared:
            continue
        alternatives.append(
            RedundantRoute(id=cable.id, name=cable.name, capacity_share=sum(shared) / len(shared))
        )
        if len(alternatives) >= limit:
            break
    return alternatives
