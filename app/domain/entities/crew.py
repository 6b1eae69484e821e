"""Crew entity — a mobile field team (cuadrilla)."""

from dataclasses import dataclass, field

from app.domain.entities.map_point import MapPoint
from app.domain.value_objects.enums import CrewCategory, CrewState, PointKind
from app.domain.value_objects.geo_point import GeoPoint


@dataclass
class Crew:
    id: int | None
    code: str
    name: str
    location: GeoPoint | None = None
    active: bool = True
    category: CrewCategory | None = None
    state: CrewState = CrewState.AVAILABLE
    skills: list[str] = field(default_factory=list)

    def has_location(self) -> bool:
        return self.location is not None

    def is_assigned(self) -> bool:
        return self.state == CrewState.ASSIGNED

    def to_map_point(self) -> MapPoint:
        return MapPoint(
            id=self.id,
            code=self.code,
            name=self.name,
            region=None,  # crews are not tied to a region
            kind=PointKind.CREW,
            location=self.location,
            crew_category=self.category.value if self.category else None,
            crew_active=self.active,
            crew_state=self.state.value,
        )
