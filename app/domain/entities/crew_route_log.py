"""CrewRouteLog — a crew position sample recorded while tracking is on."""

from dataclasses import dataclass
from datetime import date, time

from app.domain.value_objects.geo_point import GeoPoint


@dataclass
class CrewRouteLog:
    id: int | None
    crew_id: int
    day: date
    at: time
    location: GeoPoint
