"""Tests for CSV normalization helpers."""

from app.adapters.csv_loader.normalizer import (
    clean_string,
    normalize_column_name,
    normalize_region,
    parse_skills,
)


def test_normalize_column_strips_bom_and_accents():
    assert normalize_column_name("\ufeffCódigo") == "codigo"


def test_normalize_column_spaces_and_punctuation():
    assert normalize_column_name("  Tipo de Atención (NOC) ") == "tipo_de_atencion_noc"


def test_clean_string():
    assert clean_string("  x ") == "x"
    assert clean_string("   ") is None
    assert clean_string(None) is None


def test_parse_skills_dedupes_and_keeps_order():
    assert parse_skills("rf, Fibra;RF | energia") == ["RF", "FIBRA", "ENERGIA"]
    assert parse_skills(None) == []


def test_normalize_region():
    assert normalize_region(" Junín ") == "JUNIN"
    assert normalize_region("madre  de dios") == "MADRE DE DIOS"
    assert normalize_region("") is None
