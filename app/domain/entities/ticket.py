"""Ticket entity — a fault report raised against a site."""

from dataclasses import dataclass
from datetime import datetime

from app.domain.entities.map_point import MapPoint
from app.domain.value_objects.enums import CrewCategory, PointKind, TicketState
from app.domain.value_objects.geo_point import GeoPoint


@dataclass
class Ticket:
    id: int | None
    source: str | None
    site_code: str | None
    site_name: str | None
    state: str = TicketState.NEW.value
    task_category: str | None = None
    task_subcategory: str | None = None
    fault_level: str | None = None
    platform_affected: str | None = None
    attention_type: str | None = None
    service_affected: str | None = None
    crew_category: CrewCategory | None = None
    created_by: str | None = None
    fault_occurred_at: datetime | None = None
    created_at: datetime | None = None
    # Resolved from the referenced site
    region: str | None = None
    location: GeoPoint | None = None

    def is_address_known(self) -> bool:
        return self.location is not None

    def is_resolved(self) -> bool:
        return self.state.strip().upper() == TicketState.RESOLVED.value

    def to_map_point(self) -> MapPoint:
        return MapPoint(
            id=self.id,
            code=self.site_code or "",
            name=self.site_name,
            region=self.region,
            kind=PointKind.TICKET,
            location=self.location,
            ticket_state=self.state,
            ticket_source=self.source,
        )
