"""Tests for GeoPoint value object and haversine distance."""

import math

import pytest

from app.domain.value_objects.geo_point import GeoPoint, distance_km


def test_haversine_same_point():
    """Distance from a point to itself should be 0."""
    p = GeoPoint(latitude=-12.0464, longitude=-77.0428)
    assert p.haversine_km(p) == 0.0


def test_haversine_is_symmetric():
    lima = GeoPoint(latitude=-12.0464, longitude=-77.0428)
    arequipa = GeoPoint(latitude=-16.409, longitude=-71.5375)
    assert distance_km(lima, arequipa) == pytest.approx(distance_km(arequipa, lima))


def test_one_degree_of_longitude_at_equator():
    d = distance_km(GeoPoint(0.0, 0.0), GeoPoint(0.0, 1.0))
    assert d == pytest.approx(111.19, rel=0.005)


def test_haversine_lima_to_arequipa():
    """Lima to Arequipa is roughly 765 km in a straight line."""
    lima = GeoPoint(latitude=-12.0464, longitude=-77.0428)
    arequipa = GeoPoint(latitude=-16.409, longitude=-71.5375)
    assert 740 < lima.haversine_km(arequipa) < 790


def test_geo_point_is_frozen():
    p = GeoPoint(latitude=-12.0, longitude=-77.0)
    with pytest.raises(AttributeError):
        p.latitude = 50.0


@pytest.mark.parametrize(
    "lat, lon",
    [
        (None, -77.0),
        (-12.0, None),
        ("abc", -77.0),
        (math.nan, -77.0),
        (-12.0, math.inf),
        (True, -77.0),
    ],
)
def test_from_nullable_rejects_bad_coordinates(lat, lon):
    assert GeoPoint.from_nullable(lat, lon) is None


def test_from_nullable_accepts_numeric_strings():
    assert GeoPoint.from_nullable("-12.5", -77) == GeoPoint(latitude=-12.5, longitude=-77.0)


def test_as_dict():
    assert GeoPoint(1.5, 2.5).as_dict() == {"lat": 1.5, "lng": 2.5}
