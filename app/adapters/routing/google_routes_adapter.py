"""Google Routes API adapter — implements RoutingPort."""

from __future__ import annotations

import logging
import re

import httpx

from app.application.ports.routing_port import ComputedRoute, RoutingPort
from app.config import settings
from app.domain.value_objects.geo_point import GeoPoint

logger = logging.getLogger(__name__)

FIELD_MASK = "routes.duration,routes.distanceMeters,routes.polyline.encodedPolyline,routes.legs"

_DURATION_RE = re.compile(r"(\d+(?:\.\d+)?)s")


def parse_duration_minutes(raw: str | None) -> float:
    """Convert a protobuf duration string like "754s" to minutes."""
    if not raw:
        return 0.0
    match = _DURATION_RE.search(raw)
    if not match:
        return 0.0
    return float(match.group(1)) / 60


def _lat_lng(point: GeoPoint) -> dict:
    return {"location": {"latLng": {"latitude": point.latitude, "longitude": point.longitude}}}


class GoogleRoutesAdapter(RoutingPort):
    """Google Routes (computeRoutes v2) implementation of RoutingPort."""

    def __init__(
        self,
        api_key: str | None = None,
        url: str | None = None,
        language: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._api_key = api_key if api_key is not None else settings.google_maps_api_key
        self._url = url or settings.routes_api_url
        self._language = language or settings.routes_language
        self._timeout = timeout or settings.routes_timeout_s
        self._transport = transport

    def build_request(self, origin: GeoPoint, destination: GeoPoint) -> dict:
        return {
            "origin": _lat_lng(origin),
            "destination": _lat_lng(destination),
            "travelMode": "DRIVE",
            "routingPreference": "TRAFFIC_AWARE",
            "computeAlternativeRoutes": False,
            "routeModifiers": {
                "avoidTolls": False,
                "avoidHighways": False,
                "avoidFerries": True,
            },
            "languageCode": self._language,
            "units": "METRIC",
        }

    async def compute_route(
        self, origin: GeoPoint, destination: GeoPoint
    ) -> ComputedRoute | None:
        """Request a single driving route. Never raises."""
        if not self._api_key:
            logger.warning("Google Maps API key is not set. Skipping route computation.")
            return None

        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await client.post(
                    self._url,
                    json=self.build_request(origin, destination),
                    headers={
                        "Content-Type": "application/json",
                        "X-Goog-Api-Key": self._api_key,
                        "X-Goog-FieldMask": FIELD_MASK,
                    },
                    timeout=self._timeout,
                )

                if response.is_error:
                    logger.warning(
                        "Google Routes API error %d: %s", response.status_code, response.text
                    )
                    return None

                data = response.json()
                routes = data.get("routes") or []
                if not routes:
                    logger.warning(
                        "Google Routes returned no routes for (%f, %f) → (%f, %f)",
                        origin.latitude, origin.longitude,
                        destination.latitude, destination.longitude,
                    )
                    return None

                route = routes[0]
                route_result = ComputedRoute(
                    duration_minutes=parse_duration_minutes(route.get("duration")),
                    distance_km=(route.get("distanceMeters") or 0) / 1000,
                    encoded_polyline=(route.get("polyline") or {}).get("encodedPolyline"),
                    legs=route.get("legs") or [],
                )
                logger.info(
                    "Google Routes: %.1f min, %.2f km",
                    route_result.duration_minutes, route_result.distance_km,
                )
                return route_result

        except Exception:
            logger.exception("Google Routes API request failed")
            return None
