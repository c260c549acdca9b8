"""Edge-synthesis policy: fixed weights and spillover tables.

Every strength and redundancy the graph builder assigns comes from this
module.  The spillover tables are plain keyed data (asset id -> records)
so they can be reviewed, tested and extended without touching traversal.
"""

from __future__ import annotations

from dataclasses import dataclass

# --- Cable edges ---------------------------------------------------------

CABLE_REDUNDANT_SERVES_REDUNDANCY = 0.5
CABLE_LANDING_STRENGTH = 0.3
CABLE_LANDING_REDUNDANCY = 0.5

# --- Pipeline edges ------------------------------------------------------

PIPELINE_SERVES_STRENGTH = 0.2
PIPELINE_SERVES_REDUNDANCY = 0.3

# --- Port edges ----------------------------------------------------------

PORT_TYPE_WEIGHTS: dict[str, float] = {
    "oil": 0.9,
    "lng": 0.85,
    "container": 0.7,
    "mixed": 0.6,
    "bulk": 0.5,
    "naval": 0.4,
}
DEFAULT_PORT_TYPE_WEIGHT = 0.5
RANK_BOOST_HORIZON = 20
RANK_BOOST_SCALE = 0.3
TOP_PORT_RANK = 5
TOP_PORT_REDUNDANCY = 0.2
PORT_REDUNDANCY = 0.4
CRITICAL_PORT_THRESHOLD = 0.7
TRADE_ROUTE_REDUNDANCY = 0.5

# --- Chokepoint edges ----------------------------------------------------

CHOKEPOINT_RADIUS_KM = 500.0
CONTROLS_ACCESS_STRENGTH = 0.7
CONTROLS_ACCESS_REDUNDANCY = 0.2


def port_importance(port_type: str, rank: int | None) -> float:
    """Strength of a port's tie to its own country, capped at 1.

    Examples:
        >>> port_importance("oil", 1)
        1.0
        >>> port_importance("naval", None)
        0.4
    """
    base = PORT_TYPE_WEIGHTS.get(port_type, DEFAULT_PORT_TYPE_WEIGHT)
    boost = 0.0
    if rank:
        boost = max(0.0, (RANK_BOOST_HORIZON - rank) / RANK_BOOST_HORIZON) * RANK_BOOST_SCALE
    return min(1.0, base + boost)


def port_redundancy(rank: int | None) -> float:
    """Top-ranked ports are harder to replace, so they get lower redundancy."""
    if rank and rank <= TOP_PORT_RANK:
        return TOP_PORT_REDUNDANCY
    return PORT_REDUNDANCY


# --- Spillover tables ----------------------------------------------------


@dataclass(frozen=True)
class Spillover:
    """A country affected by an asset located elsewhere."""

    country: str
    strength: float
    reason: str
    redundancy: float = TRADE_ROUTE_REDUNDANCY


_SUEZ_PORTS = (
    Spillover("DE", 0.6, "Major EU importer via Suez"),
    Spillover("GB", 0.5, "UK-Asia trade"),
    Spillover("NL", 0.5, "Rotterdam connection"),
    Spillover("CN", 0.4, "China-EU trade route"),
    Spillover("IT", 0.4, "Mediterranean trade"),
)
_HORMUZ_PORTS = (
    Spillover("JP", 0.7, "Oil import dependency"),
    Spillover("KR", 0.6, "Oil import dependency"),
    Spillover("IN", 0.5, "Oil imports"),
    Spillover("CN", 0.5, "Oil imports"),
)
_MALACCA_PORTS = (
    Spillover("CN", 0.6, "Trade route dependency"),
    Spillover("JP", 0.5, "Trade route"),
    Spillover("KR", 0.5, "Trade route"),
)
_PANAMA_PORTS = (
    Spillover("US", 0.5, "East-West coast shipping"),
    Spillover("CN", 0.4, "Trade route to US East Coast"),
)
_RED_SEA_PORTS = (
    Spillover("DE", 0.5, "Europe-Asia shipping route"),
    Spillover("GB", 0.5, "Shipping route"),
    Spillover("IT", 0.4, "Mediterranean access"),
    Spillover("SA", 0.4, "Regional trade"),
)

PORT_TRADE_ROUTES: dict[str, tuple[Spillover, ...]] = {
    "port_said": _SUEZ_PORTS,
    "suez_port": _SUEZ_PORTS,
    "bandar_abbas": _HORMUZ_PORTS,
    "fujairah": _HORMUZ_PORTS,
    "ras_tanura": _HORMUZ_PORTS,
    "singapore": _MALACCA_PORTS,
    "klang": _MALACCA_PORTS,
    "tanjung_pelepas": _MALACCA_PORTS,
    "colon": _PANAMA_PORTS,
    "balboa": _PANAMA_PORTS,
    "aden": _RED_SEA_PORTS,
    "djibouti": _RED_SEA_PORTS,
    "hodeidah": _RED_SEA_PORTS,
}

CHOKEPOINT_DEPENDENCIES: dict[str, tuple[Spillover, ...]] = {
    "suez": (
        Spillover("DE", 0.6, "EU-Asia trade", 0.3),
        Spillover("IT", 0.5, "Mediterranean", 0.3),
        Spillover("GB", 0.5, "UK-Asia trade", 0.4),
        Spillover("CN", 0.4, "China-EU exports", 0.5),
    ),
    "hormuz_strait": (
        Spillover("JP", 0.8, "80% oil imports", 0.2),
        Spillover("KR", 0.7, "70% oil imports", 0.2),
        Spillover("IN", 0.6, "60% oil imports", 0.3),
        Spillover("CN", 0.5, "40% oil imports", 0.4),
    ),
    "malacca_strait": (
        Spillover("CN", 0.7, "80% oil imports transit", 0.3),
        Spillover("JP", 0.6, "Trade route", 0.3),
        Spillover("KR", 0.6, "Trade route", 0.3),
    ),
    "bab_el_mandeb": (
        Spillover("DE", 0.5, "EU shipping", 0.4),
        Spillover("GB", 0.5, "UK shipping", 0.4),
        Spillover("SA", 0.4, "Red Sea access", 0.5),
    ),
    "panama": (
        Spillover("US", 0.5, "Inter-coast shipping", 0.4),
        Spillover("CN", 0.4, "US East trade", 0.5),
    ),
    "gibraltar": (
        Spillover("ES", 0.4, "Med access", 0.5),
        Spillover("IT", 0.3, "Atlantic trade", 0.5),
    ),
    "bosphorus": (
        Spillover("RU", 0.6, "Black Sea access", 0.3),
        Spillover("UA", 0.6, "Grain exports", 0.3),
        Spillover("RO", 0.4, "Black Sea trade", 0.4),
    ),
    "dardanelles": (
        Spillover("RU", 0.5, "Black Sea access", 0.3),
        Spillover("UA", 0.5, "Grain exports", 0.3),
    ),
    "taiwan_strait": (
        Spillover("TW", 0.9, "Taiwan trade lifeline", 0.1),
        Spillover("JP", 0.5, "Trade route", 0.4),
        Spillover("KR", 0.4, "Trade route", 0.4),
    ),
}


def trade_routes_for_port(port_id: str) -> tuple[Spillover, ...]:
    return PORT_TRADE_ROUTES.get(port_id, ())


def dependencies_for_chokepoint(chokepoint_id: str) -> tuple[Spillover, ...]:
    return CHOKEPOINT_DEPENDENCIES.get(chokepoint_id, ())
