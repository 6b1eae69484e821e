"""CrewAssignment — one row of a ticket's crew/state history."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class CrewAssignment:
    id: int | None
    ticket_id: int
    crew_id: int | None
    state: str
    assigned_at: datetime
    created_by: str
