"""Port interface for driving-route computation."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from app.domain.value_objects.geo_point import GeoPoint


@dataclass(frozen=True)
class ComputedRoute:
    duration_minutes: float
    distance_km: float
    encoded_polyline: str | None = None
    legs: list = field(default_factory=list)


class RoutingPort(ABC):
    @abstractmethod
    async def compute_route(
        self, origin: GeoPoint, destination: GeoPoint
    ) -> ComputedRoute | None:
        """Compute a driving route between two points.

        Returns None on any failure; callers fall back to an estimate.
        """
        ...
