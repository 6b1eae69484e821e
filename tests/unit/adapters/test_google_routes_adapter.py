"""Tests for GoogleRoutesAdapter using httpx.MockTransport."""

from __future__ import annotations

import json

import httpx
import pytest

from app.adapters.routing.google_routes_adapter import (
    FIELD_MASK,
    GoogleRoutesAdapter,
    parse_duration_minutes,
)
from app.domain.value_objects.geo_point import GeoPoint

ORIGIN = GeoPoint(-12.0464, -77.0428)
DESTINATION = GeoPoint(-12.1211, -77.0297)
URL = "https://routes.test/directions/v2:computeRoutes"


def _adapter(handler, api_key="test-key"):
    return GoogleRoutesAdapter(
        api_key=api_key, url=URL, language="es", timeout=5,
        transport=httpx.MockTransport(handler),
    )


@pytest.mark.parametrize(
    "raw, minutes",
    [("754s", 754 / 60), ("60s", 1.0), ("90.5s", 90.5 / 60), ("", 0.0), (None, 0.0), ("abc", 0.0)],
)
def test_parse_duration(raw, minutes):
    assert parse_duration_minutes(raw) == pytest.approx(minutes)


@pytest.mark.asyncio
async def test_successful_route():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["headers"] = request.headers
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={
            "routes": [{
                "duration": "900s",
                "distanceMeters": 12500,
                "polyline": {"encodedPolyline": "_p~iF~ps|U"},
                "legs": [{"distanceMeters": 12500}],
            }]
        })

    route = await _adapter(handler).compute_route(ORIGIN, DESTINATION)

    assert route.duration_minutes == pytest.approx(15.0)
    assert route.distance_km == pytest.approx(12.5)
    assert route.encoded_polyline == "_p~iF~ps|U"
    assert len(route.legs) == 1

    assert seen["headers"]["X-Goog-Api-Key"] == "test-key"
    assert seen["headers"]["X-Goog-FieldMask"] == FIELD_MASK
    body = seen["body"]
    assert body["travelMode"] == "DRIVE"
    assert body["routingPreference"] == "TRAFFIC_AWARE"
    assert body["languageCode"] == "es"
    assert body["units"] == "METRIC"
    assert body["routeModifiers"]["avoidFerries"] is True
    assert body["origin"]["location"]["latLng"] == {"latitude": -12.0464, "longitude": -77.0428}


@pytest.mark.asyncio
async def test_http_error_returns_none():
    adapter = _adapter(lambda request: httpx.Response(403, json={"error": "denied"}))
    assert await adapter.compute_route(ORIGIN, DESTINATION) is None


@pytest.mark.asyncio
async def test_empty_routes_returns_none():
    adapter = _adapter(lambda request: httpx.Response(200, json={}))
    assert await adapter.compute_route(ORIGIN, DESTINATION) is None


@pytest.mark.asyncio
async def test_network_failure_returns_none():
    def handler(request):
        raise httpx.ConnectError("unreachable", request=request)

    assert await _adapter(handler).compute_route(ORIGIN, DESTINATION) is None


@pytest.mark.asyncio
async def test_missing_api_key_skips_request():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200, json={})

    assert await _adapter(handler, api_key="").compute_route(ORIGIN, DESTINATION) is None
    assert calls == []
