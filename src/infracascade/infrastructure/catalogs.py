"""Reference catalog loading from JSON files.

Catalogs come either from the bundled ``infracascade/data`` package data or
from a user directory holding the same file names.  Each file is a JSON
array; each element is validated on its own so a malformed record is
logged and skipped instead of failing the whole catalog.

An optional ``countries.json`` object (``{"XK": "Kosovo"}``) overrides
country display names.
"""

from __future__ import annotations

import json
from importlib import resources
from importlib.resources.abc import Traversable
from pathlib import Path
from typing import Any

import structlog
from pydantic import BaseModel, ValidationError

from infracascade.domain.catalogs import Cable, Chokepoint, Pipeline, Port, ReferenceCatalog

logger = structlog.get_logger(__name__)

CATALOG_FILES: dict[str, tuple[str, type[BaseModel]]] = {
    "cables": ("cables.json", Cable),
    "pipelines": ("pipelines.json", Pipeline),
    "ports": ("ports.json", Port),
    "chokepoints": ("chokepoints.json", Chokepoint),
}
COUNTRY_NAMES_FILE = "countries.json"


class CatalogError(Exception):
    """A catalog file exists but cannot be read as JSON of the expected shape."""


def bundled_catalog_dir() -> Traversable:
    """Location of the reference data shipped with the package."""
    return resources.files("infracascade") / "data"


def _read_json(source: Traversable | Path) -> Any:
    try:
        return json.loads(source.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        msg = f"Invalid JSON in {source}: {exc}"
        raise CatalogError(msg) from exc


def _parse_records(
    name: str,
    raw: Any,
    model: type[BaseModel],
    warnings: list[str],
) -> tuple[Any, ...]:
    if not isinstance(raw, list):
        msg = f"Catalog '{name}' must be a JSON array, got {type(raw).__name__}"
        raise CatalogError(msg)

    records: list[BaseModel] = []
    for index, item in enumerate(raw):
        try:
            records.append(model.model_validate(item))
        except ValidationError as exc:
            record_id = item.get("id", f"#{index}") if isinstance(item, dict) else f"#{index}"
            reason = "; ".join(
                f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
            )
            logger.warning("catalog.record_invalid", catalog=name, record=record_id, reason=reason)
            warnings.append(f"{name}:{record_id}: {reason}")
    return tuple(records)


def load_catalog(directory: Path | None = None) -> tuple[ReferenceCatalog, list[str]]:
    """Load every catalog from *directory* (or the bundled data).

    Returns:
        The catalog and a list of warnings (missing files, invalid records).

    Raises:
        CatalogError: If a file is not valid JSON or is not an array.
    """
    root: Traversable | Path = directory if directory is not None else bundled_catalog_dir()
    warnings: list[str] = []
    parsed: dict[str, tuple[Any, ...]] = {}

    for name, (filename, model) in CATALOG_FILES.items():
        source = root / filename
        if not source.is_file():
            logger.warning("catalog.missing", catalog=name, path=str(source))
            warnings.append(f"{name}: {filename} not found in {root}")
            parsed[name] = ()
            continue
        parsed[name] = _parse_records(name, _read_json(source), model, warnings)

    country_names: dict[str, str] = {}
    names_source = root / COUNTRY_NAMES_FILE
    if names_source.is_file():
        raw_names = _read_json(names_source)
        if not isinstance(raw_names, dict):
            msg = f"{COUNTRY_NAMES_FILE} must be a JSON object"
            raise CatalogError(msg)
        country_names = {str(k): str(v) for k, v in raw_names.items()}

    catalog = ReferenceCatalog(
        cables=parsed["cables"],
        pipelines=parsed["pipelines"],
        ports=parsed["ports"],
        chokepoints=parsed["chokepoints"],
        country_names=country_names,
    )
    logger.debug(
        "catalog.loaded",
        source=str(root),
        cables=len(catalog.cables),
        pipelines=len(catalog.pipelines),
        ports=len(catalog.ports),
        chokepoints=len(catalog.chokepoints),
    )
    return catalog, warnings
