"""MapPoint — flat read model of anything drawable on the dashboard map."""

from dataclasses import dataclass

from app.domain.value_objects.enums import PointKind
from app.domain.value_objects.geo_point import GeoPoint


@dataclass(frozen=True)
class MapPoint:
    id: int
    code: str
    name: str | None
    region: str | None
    kind: PointKind
    location: GeoPoint | None = None
    crew_category: str | None = None
    crew_active: bool | None = None
    crew_state: str | None = None
    ticket_state: str | None = None
    ticket_source: str | None = None

    def is_locatable(self) -> bool:
        return self.location is not None
