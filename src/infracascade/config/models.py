"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, infracascade.toml only contains
overrides.  An empty file is a valid configuration.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field

# --- infracascade.toml sections ---


class CatalogConfig(BaseModel):
    """[catalog] section."""

    model_config = {"frozen": True}

    path: Path | None = None
    chokepoint_radius_km: float = Field(default=500.0, gt=0)


class CascadeConfig(BaseModel):
    """[cascade] section."""

    model_config = {"frozen": True}

    max_depth: int = Field(default=3, ge=1)
    min_impact: float = Field(default=0.05, ge=0.0, le=1.0)
    default_disruption: float = Field(default=1.0, gt=0.0, le=1.0)
    max_redundancies: int = Field(default=5, ge=0)


class OutputConfig(BaseModel):
    """[output] section."""

    model_config = {"frozen": True}

    top: int = Field(default=0, ge=0)

