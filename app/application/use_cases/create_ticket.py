"""CreateTicketUseCase — register a new ticket in state NUEVO."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from app.application.ports.assignment_repo import AssignmentRepository
from app.application.ports.ticket_repo import TicketRepository
from app.domain.entities.crew_assignment import CrewAssignment
from app.domain.entities.ticket import Ticket
from app.domain.exceptions import ValidationError
from app.domain.value_objects.enums import TicketState

logger = logging.getLogger(__name__)


class CreateTicketUseCase:
    def __init__(self, ticket_repo: TicketRepository, assignment_repo: AssignmentRepository):
        self._tickets = ticket_repo
        self._assignments = assignment_repo

    async def execute(self, ticket: Ticket, user: str, crew_id: int | None = None) -> Ticket:
        """Persist *ticket* and open its state history.

        The incoming state is ignored: new tickets always start as NUEVO.
        """
        errors = []
        if not ticket.task_category:
            errors.append("task_category is required")
        if not ticket.task_subcategory:
            errors.append("task_subcategory is required")
        if errors:
            raise ValidationError(errors)

        now = datetime.now(timezone.utc)
        ticket.state = TicketState.NEW.value
        ticket.created_by = ticket.created_by or user
        ticket.fault_occurred_at = ticket.fault_occurred_at or now

        await self._tickets.save(ticket)
        await self._assignments.save(
            CrewAssignment(
                id=None,
                ticket_id=ticket.id,
                crew_id=crew_id,
                state=TicketState.NEW.value,
                assigned_at=now,
                created_by=ticket.created_by,
            )
        )
        logger.info("Ticket %s created for site %s", ticket.id, ticket.site_code)
        return ticket
