"""AssignCrewUseCase — hand a ticket to a crew and record the change."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from app.application.ports.assignment_repo import AssignmentRepository
from app.application.ports.crew_repo import CrewRepository
from app.application.ports.ticket_repo import TicketRepository
from app.domain.entities.crew_assignment import CrewAssignment
from app.domain.exceptions import ConflictError, NotFoundError
from app.domain.value_objects.enums import CrewState, TicketState

logger = logging.getLogger(__name__)


class AssignCrewUseCase:
    def __init__(
        self,
        ticket_repo: TicketRepository,
        crew_repo: CrewRepository,
        assignment_repo: AssignmentRepository,
    ):
        self._tickets = ticket_repo
        self._crews = crew_repo
        self._assignments = assignment_repo

    async def execute(self, ticket_id: int, crew_id: int, user: str) -> CrewAssignment:
        """Assign *crew_id* to *ticket_id*.

        Writes an ASIGNADO history row, then marks both the ticket and the
        crew as ASIGNADO. All writes share the caller's transaction.

        Raises:
            NotFoundError: unknown ticket or crew.
            ConflictError: the crew is already assigned elsewhere.
        """
        ticket = await self._tickets.get_by_id(ticket_id)
        if ticket is None:
            raise NotFoundError("Ticket", ticket_id)

        crew = await self._crews.get_by_id(crew_id)
        if crew is None:
            raise NotFoundError("Crew", crew_id)
        if crew.is_assigned():
            raise ConflictError(f"Crew {crew.code} is already assigned")

        assignment = CrewAssignment(
            id=None,
            ticket_id=ticket_id,
            crew_id=crew_id,
            state=TicketState.ASSIGNED.value,
            assigned_at=datetime.now(timezone.utc),
            created_by=user,
        )
        await self._assignments.save(assignment)
        await self._tickets.update_state(ticket_id, TicketState.ASSIGNED.value)
        await self._crews.update_state(crew_id, CrewState.ASSIGNED)

        logger.info("Ticket %s → Crew %s (by %s)", ticket_id, crew.code, user)
        return assignment
