"""CSV value and column-name normalization."""

from __future__ import annotations

import re
import unicodedata


def strip_accents(text: str) -> str:
    """'Región' -> 'Region'. Spreadsheet exports mix accented and plain headers."""
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def normalize_column_name(name: str) -> str:
    """Normalize a CSV column name.

    - Removes BOM characters (\\ufeff) and accents
    - Replaces runs of spaces / non-breaking spaces with one underscore
    - Lowercases and drops anything that is not alphanumeric or underscore
    """
    name = strip_accents(name.replace("\ufeff", "").strip())
    name = re.sub(r"[\s\u00a0]+", "_", name)
    name = name.lower()
    return re.sub(r"[^\w]", "", name)


def clean_string(value: str | None) -> str | None:
    """Strip whitespace and return None for empty strings."""
    if value is None:
        return None
    value = value.strip()
    return value if value else None


def parse_skills(raw: str | None) -> list[str]:
    """Split 'FIBRA; ENERGIA, RF' into ['FIBRA', 'ENERGIA', 'RF'], keeping order."""
    if not raw:
        return []
    skills = []
    for part in re.split(r"[,;|]+", raw):
        part = part.strip().upper()
        if part and part not in skills:
            skills.append(part)
    return skills


def normalize_region(raw: str | None) -> str | None:
    """Upper-case, accent-free region name ('Junín' -> 'JUNIN')."""
    value = clean_string(raw)
    if value is None:
        return None
    return re.sub(r"\s+", " ", strip_accents(value)).upper()
