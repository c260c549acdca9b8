"""Node, edge and severity classification enums.

Node types double as id prefixes: every node id is ``<type>:<key>``
(``cable:marea``, ``country:US``).
"""

from __future__ import annotations

from enum import StrEnum


class NodeType(StrEnum):
    """Kinds of node in the dependency graph."""

    CABLE = "cable"
    PIPELINE = "pipeline"
    PORT = "port"
    CHOKEPOINT = "chokepoint"
    COUNTRY = "country"


class EdgeType(StrEnum):
    """Kinds of dependency between an asset and what relies on it."""

    SERVES = "serves"
    LANDS_AT = "lands_at"
    TRADE_ROUTE = "trade_route"
    CONTROLS_ACCESS = "controls_access"
    TRADE_DEPENDENCY = "trade_dependency"


class ImpactLevel(StrEnum):
    """Severity tiers, most severe first."""

    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        """Sort key: 0 for critical through 3 for low."""
        return _IMPACT_ORDER[self]


_IMPACT_ORDER: dict[ImpactLevel, int] = {
    ImpactLevel.CRITICAL: 0,
    ImpactLevel.HIGH: 1,
    ImpactLevel.MEDIUM: 2,
    ImpactLevel.LOW: 3,
}


class AlertPriority(StrEnum):
    """Priority assigned to a cascade alert."""

    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


def node_id(node_type: NodeType | str, key: str) -> str:
    """Build a prefixed node id, e.g. ``node_id(NodeType.CABLE, "marea")``."""
    return f"{node_type}:{key}"


def split_node_id(value: str) -> tuple[str, str]:
    """Split ``"cable:marea"`` into ``("cable", "marea")``.

    Ids without a prefix yield an empty type.
    """
    prefix, sep, key = value.partition(":")
    if not sep:
        return "", value
    return prefix, key
