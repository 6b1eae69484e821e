"""GeoPoint value object — immutable (lat, lon) pair."""

import math
from dataclasses import dataclass

EARTH_RADIUS_KM = 6371.0


@dataclass(frozen=True)
class GeoPoint:
    latitude: float
    longitude: float

    @classmethod
    def from_nullable(cls, latitude, longitude) -> "GeoPoint | None":
        """Build a point only when both coordinates are finite numbers."""
        if latitude is None or longitude is None:
            return None
        if isinstance(latitude, bool) or isinstance(longitude, bool):
            return None
        try:
            lat = float(latitude)
            lon = float(longitude)
        except (TypeError, ValueError):
            return None
        if not (math.isfinite(lat) and math.isfinite(lon)):
            return None
        return cls(latitude=lat, longitude=lon)

    def haversine_km(self, other: "GeoPoint") -> float:
        """Calculate distance in km between two points using the Haversine formula."""
        lat1 = math.radians(self.latitude)
        lat2 = math.radians(other.latitude)
        dlat = math.radians(other.latitude - self.latitude)
        dlon = math.radians(other.longitude - self.longitude)

        a = (
            math.sin(dlat / 2) ** 2
            + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
        )
        c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

        return EARTH_RADIUS_KM * c

    def as_dict(self) -> dict[str, float]:
        return {"lat": self.latitude, "lng": self.longitude}


def distance_km(a: GeoPoint, b: GeoPoint) -> float:
    return a.haversine_km(b)
