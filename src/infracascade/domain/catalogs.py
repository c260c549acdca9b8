"""Reference catalog records: cables, pipelines, ports and chokepoints.

Records are validated one at a time by the catalog loader, so a malformed
entry never poisons the rest of its file.  Keys may be given in
snake_case or in the camelCase used by upstream feeds
(``capacityShare``, ``isRedundant``, ``landingPoints``).
"""

from __future__ import annotations

from dataclasses import dataclass, field

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from infracascade.domain.countries import normalize_country_code

_RECORD_CONFIG = ConfigDict(
    frozen=True,
    alias_generator=to_camel,
    populate_by_name=True,
)

Point = tuple[float, float]


class LandingPoint(BaseModel):
    """A physical cable landing."""

    model_config = _RECORD_CONFIG

    country: str
    name: str | None = None


class CountryCapacity(BaseModel):
    """Share of a country's capacity carried by one cable."""

    model_config = _RECORD_CONFIG

    country: str
    capacity_share: float = Field(ge=0.0, le=1.0)
    is_redundant: bool = False


class Cable(BaseModel):
    """Submarine cable system."""

    model_config = _RECORD_CONFIG

    id: str
    name: str
    points: list[Point] = Field(default_factory=list)
    capacity_tbps: float | None = None
    rfs_year: int | None = None
    owners: list[str] = Field(default_factory=list)
    landing_points: list[LandingPoint] = Field(default_factory=list)
    countries_served: list[CountryCapacity] = Field(default_factory=list)

    def capacity_share_for(self, country: str) -> float:
        """Declared capacity share for *country*, or 0 if the cable does not serve it.

        Both sides are normalized, so ``"USA"`` in the catalog matches ``"US"``.
        """
        code = normalize_country_code(country)
        for served in self.countries_served:
            if normalize_country_code(served.country) == code:
                return served.capacity_share
        return 0.0


class Pipeline(BaseModel):
    """Oil or gas pipeline."""

    model_config = _RECORD_CONFIG

    id: str
    name: str
    points: list[Point] = Field(default_factory=list)
    type: str = "oil"
    status: str = "operating"
    capacity: str | None = None
    operator: str | None = None
    countries: list[str] = Field(default_factory=list)


class Port(BaseModel):
    """Maritime port."""

    model_config = _RECORD_CONFIG

    id: str
    name: str
    lat: float | None = None
    lon: float | None = None
    country: str
    type: str = "mixed"
    rank: int | None = None

    @property
    def has_coordinates(self) -> bool:
        return self.lat is not None and self.lon is not None


class Chokepoint(BaseModel):
    """Strategic maritime passage."""

    model_config = _RECORD_CONFIG

    id: str
    name: str
    lat: float | None = None
    lon: float | None = None
    description: str = ""

    @property
    def has_coordinates(self) -> bool:
        return self.lat is not None and self.lon is not None


@dataclass(frozen=True)
class ReferenceCatalog:
    """Immutable bundle of every catalog the graph is built from."""

    cables: tuple[Cable, ...] = ()
    pipelines: tuple[Pipeline, ...] = ()
    ports: tuple[Port, ...] = ()
    chokepoints: tuple[Chokepoint, ...] = ()
    country_names: dict[str, str] = field(default_factory=dict)

    def cable(self, cable_id: str) -> Cable | None:
        return next((c for c in self.cables if c.id == cable_id), None)

    def pipeline(self, pipeline_id: str) -> Pipeline | None:
        return next((p for p in self.pipelines if p.id == pipeline_id), None)

    def port(self, port_id: str) -> Port | None:
        return next((p for p in self.ports if p.id == port_id), None)

    def chokepoint(self, chokepoint_id: str) -> Chokepoint | None:
        return next((c for c in self.chokepoints if c.id == chokepoint_id), None)
