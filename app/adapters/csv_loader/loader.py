"""CSV loader — reads site, crew and ticket exports into plain dicts."""

from __future__ import annotations

import csv
import logging
from pathlib import Path

from app.adapters.csv_loader.normalizer import (
    clean_string,
    normalize_column_name,
    normalize_region,
    parse_skills,
)

logger = logging.getLogger(__name__)


def _sniff_dialect(sample: str) -> type[csv.Dialect]:
    """Pick the delimiter (semicolon/comma/tab) used by the header row."""
    if not sample:
        return csv.excel

    first_line = sample.splitlines()[0]
    counts = {d: first_line.count(d) for d in (";", ",", "\t")}
    best_delim = max(counts, key=counts.get)
    if counts[best_delim] == 0:
        return csv.excel

    class DynamicDialect(csv.excel):
        delimiter = best_delim

    return DynamicDialect


def _read_csv(file_path: Path, encoding: str = "utf-8-sig") -> list[dict[str, str | None]]:
    """Read a CSV file with BOM handling and column normalization.

    Returns:
        List of dicts keyed by normalized column names.
    """
    with open(file_path, encoding=encoding, newline="") as f:
        sample = f.read(4096)
        f.seek(0)
        reader = csv.DictReader(f, dialect=_sniff_dialect(sample))
        if reader.fieldnames is None:
            raise ValueError(f"CSV file {file_path} has no header row")

        col_map = {col: normalize_column_name(col) for col in reader.fieldnames}
        rows = [
            {col_map[k]: clean_string(v) for k, v in raw_row.items() if k is not None}
            for raw_row in reader
        ]

    logger.info("Loaded %d rows from %s (columns: %s)", len(rows), file_path.name, list(col_map.values()))
    return rows


def _first(row: dict, *keys: str) -> str | None:
    for key in keys:
        value = row.get(key)
        if value:
            return value
    return None


def load_sites(file_path: Path) -> list[dict]:
    """Load the sites CSV.

    Expected columns (after normalization):
        codigo/code, nombre/name, region, direccion/address,
        latitud/lat, longitud/lng, detalle/detail
    """
    sites = []
    for row in _read_csv(file_path):
        code = _first(row, "codigo", "code", "site_id", "cod_site")
        if not code:
            logger.warning("Site row without code skipped: %s", row)
            continue
        sites.append({
            "code": code.strip().upper(),
            "name": _first(row, "nombre", "name", "site_name") or code,
            "region": normalize_region(_first(row, "region", "departamento")),
            "address": _first(row, "direccion", "address"),
            "latitude": parse_float(_first(row, "latitud", "latitude", "lat")),
            "longitude": parse_float(_first(row, "longitud", "longitude", "lng", "lon")),
            "detail": _first(row, "detalle", "detail"),
        })
    logger.info("Parsed %d sites", len(sites))
    return sites


def load_crews(file_path: Path) -> list[dict]:
    """Load the crews (cuadrillas) CSV.

    Skills come either from skill_1..skill_3 columns or a single
    separated ``skills``/``habilidades`` column; at most three are kept.
    """
    crews = []
    for row in _read_csv(file_path):
        code = _first(row, "codigo", "code", "cuadrilla")
        if not code:
            logger.warning("Crew row without code skipped: %s", row)
            continue

        skills = [s for s in (row.get("skill_1"), row.get("skill_2"), row.get("skill_3")) if s]
        if not skills:
            skills = parse_skills(_first(row, "skills", "habilidades"))

        category = (_first(row, "categoria", "category") or "").strip().upper() or None
        crews.append({
            "code": code.strip(),
            "name": _first(row, "nombre", "name") or "",
            "latitude": parse_float(_first(row, "latitud", "latitude", "lat")),
            "longitude": parse_float(_first(row, "longitud", "longitude", "lng", "lon")),
            "active": parse_bool(_first(row, "activo", "active"), default=True),
            "category": category,
            "state": (_first(row, "estado", "state") or "").strip().upper() or None,
            "skills": skills[:3],
        })
    logger.info("Parsed %d crews", len(crews))
    return crews


def load_tickets(file_path: Path) -> list[dict]:
    """Load the tickets CSV. Column names match the tickets table."""
    tickets = []
    for row in _read_csv(file_path):
        tickets.append({
            "ticket_source": _first(row, "ticket_source", "origen", "source"),
            "site_id": (_first(row, "site_id", "codigo_site", "site") or "").strip().upper() or None,
            "site_name": _first(row, "site_name", "nombre_site"),
            "state": (_first(row, "state", "estado") or "").strip().upper() or None,
            "task_category": _first(row, "task_category", "categoria_tarea"),
            "task_subcategory": _first(row, "task_subcategory", "subcategoria_tarea"),
            "fault_level": _first(row, "fault_level", "nivel_falla"),
            "platform_affected": _first(row, "platform_affected", "plataforma_afectada"),
            "attention_type": _first(row, "attention_type", "tipo_atencion"),
            "service_affected": _first(row, "service_affected", "servicio_afectado"),
            "crew_category": (_first(row, "crew_category", "categoria_cuadrilla") or "").strip().upper() or None,
            "created_by": _first(row, "created_by", "creado_por"),
            "fault_occur_time": _first(row, "fault_occur_time", "fecha_falla"),
        })
    logger.info("Parsed %d tickets", len(tickets))
    return tickets


def parse_float(value: str | None) -> float | None:
    """Parse '-12,0464' or '-12.0464'; None when empty or not a number."""
    if not value:
        return None
    try:
        return float(value.replace(",", ".").strip())
    except ValueError:
        return None


def parse_bool(value: str | None, default: bool = False) -> bool:
    if not value:
        return default
    return value.strip().lower() in {"1", "true", "t", "si", "sí", "s", "yes", "y"}
