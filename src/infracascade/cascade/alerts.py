"""Condense a cascade into a prioritised alert."""

from __future__ import annotations

from infracascade.domain.models import CascadeAlert, CascadeResult
from infracascade.domain.types import AlertPriority, ImpactLevel


def alert_priority(highest: ImpactLevel, countries: int) -> AlertPriority:
    """Priority from the worst country impact and how many countries are hit."""
    if highest == ImpactLevel.CRITICAL or (highest == ImpactLevel.HIGH and countries >= 3):
        return AlertPriority.CRITICAL
    if highest == ImpactLevel.HIGH or countries >= 5:
        return AlertPriority.HIGH
    if highest == ImpactLevel.MEDIUM or countries >= 3:
        return AlertPriority.MEDIUM
    return AlertPriority.LOW


def summarize_cascade(result: CascadeResult) -> CascadeAlert | None:
    """Build an alert for *result*, or None when no country is affected.

    Relies on ``countries_affected`` being sorted most severe first.
    """
    if not result.countries_affected:
        return None

    highest = result.countries_affected[0].impact_level
    count = len(result.countries_affected)
    location = None
    if result.source.coordinates is not None:
        lon, lat = result.source.coordinates
        location = {"lat": lat, "lon": lon}

    return CascadeAlert(
        source_id=result.source.id,
        source_name=result.source.name,
        source_type=result.source.type,
        countries_affected=count,
        highest_impact=highest,
        priority=alert_priority(highest, count),
        countries=[c.country for c in result.countries_affected],
        location=location,
    )
