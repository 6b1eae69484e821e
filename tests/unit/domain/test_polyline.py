"""Tests for the encoded polyline codec."""

import pytest

from app.domain.policies.polyline import PolylineDecodeError, decode, encode
from app.domain.value_objects.geo_point import GeoPoint

REFERENCE = "_p~iF~ps|U_ulLnnqC_mqNvxq`@"
REFERENCE_POINTS = [(38.5, -120.2), (40.7, -120.95), (43.252, -126.453)]


def test_decode_reference_vector():
    points = decode(REFERENCE)
    assert len(points) == 3
    for point, (lat, lng) in zip(points, REFERENCE_POINTS):
        assert point.latitude == pytest.approx(lat, abs=1e-5)
        assert point.longitude == pytest.approx(lng, abs=1e-5)


def test_encode_reference_vector():
    assert encode(GeoPoint(lat, lng) for lat, lng in REFERENCE_POINTS) == REFERENCE


def test_decode_empty_string():
    assert decode("") == []


def test_encode_then_decode_keeps_five_decimals():
    path = [GeoPoint(-12.04641, -77.04282), GeoPoint(-12.05, -77.03), GeoPoint(-12.1, -77.0)]
    decoded = decode(encode(path))
    assert [(p.latitude, p.longitude) for p in decoded] == [
        (p.latitude, p.longitude) for p in path
    ]


def test_truncated_input_raises():
    # Drop the final character: the last longitude never terminates
    with pytest.raises(PolylineDecodeError):
        decode(REFERENCE[:-1])


def test_odd_value_count_raises():
    # "?" encodes 0: one latitude with no longitude
    with pytest.raises(PolylineDecodeError):
        decode("?")


def test_invalid_character_raises():
    with pytest.raises(PolylineDecodeError):
        decode("_p~iF ps|U")


def test_decode_error_is_value_error():
    with pytest.raises(ValueError):
        decode("\x01")
