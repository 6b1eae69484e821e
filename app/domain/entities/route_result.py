"""RouteResult — travel estimate from a ticket to one candidate crew."""

from dataclasses import dataclass, field

from app.domain.entities.crew import Crew


@dataclass(frozen=True)
class RouteResult:
    crew: Crew
    duration_minutes: float
    distance_km: float
    encoded_polyline: str | None = None
    legs: list = field(default_factory=list)
    estimated: bool = False  # True when derived from straight-line distance
