"""Tests for AssignCrewUseCase and CreateTicketUseCase with in-memory fakes."""

from __future__ import annotations

import pytest

from app.application.use_cases.assign_crew import AssignCrewUseCase
from app.application.use_cases.create_ticket import CreateTicketUseCase
from app.domain.entities.ticket import Ticket
from app.domain.exceptions import ConflictError, NotFoundError, ValidationError
from app.domain.value_objects.enums import CrewState
from tests.factories import make_crew
from tests.fakes import FakeAssignmentRepo, FakeCrewRepo, FakeTicketRepo

# ─── AssignCrewUseCase ──────────────────────────────────────────────


@pytest.fixture
def repos(ticket):
    return FakeTicketRepo([ticket]), FakeCrewRepo([make_crew(7, 2, "A")]), FakeAssignmentRepo()


@pytest.mark.asyncio
async def test_assign_updates_ticket_crew_and_history(repos):
    tickets, crews, history = repos
    uc = AssignCrewUseCase(tickets, crews, history)

    assignment = await uc.execute(ticket_id=1, crew_id=7, user="operador")

    assert assignment.id == 1
    assert (assignment.ticket_id, assignment.crew_id) == (1, 7)
    assert assignment.state == "ASIGNADO"
    assert assignment.created_by == "operador"
    assert tickets.tickets[1].state == "ASIGNADO"
    assert crews.crews[7].state == CrewState.ASSIGNED


@pytest.mark.asyncio
async def test_assign_unknown_ticket(repos):
    tickets, crews, history = repos
    with pytest.raises(NotFoundError):
        await AssignCrewUseCase(tickets, crews, history).execute(99, 7, "operador")
    assert history.rows == []


@pytest.mark.asyncio
async def test_assign_unknown_crew(repos):
    tickets, crews, history = repos
    with pytest.raises(NotFoundError):
        await AssignCrewUseCase(tickets, crews, history).execute(1, 99, "operador")


@pytest.mark.asyncio
async def test_assign_busy_crew_conflicts(repos):
    tickets, crews, history = repos
    crews.crews[7].state = CrewState.ASSIGNED
    with pytest.raises(ConflictError):
        await AssignCrewUseCase(tickets, crews, history).execute(1, 7, "operador")
    assert tickets.tickets[1].state == "NUEVO"


# ─── CreateTicketUseCase ────────────────────────────────────────────


def _new_ticket(**overrides):
    fields = dict(
        id=None, source="NOC", site_code="LIM001", site_name="Lima Centro",
        task_category="CORRECTIVO", task_subcategory="ENERGIA",
    )
    fields.update(overrides)
    return Ticket(**fields)


@pytest.mark.asyncio
async def test_create_ticket_forces_new_state_and_opens_history():
    tickets, history = FakeTicketRepo(), FakeAssignmentRepo()
    ticket = await CreateTicketUseCase(tickets, history).execute(
        _new_ticket(state="RESUELTO"), user="sistema", crew_id=3
    )

    assert ticket.id == 1
    assert ticket.state == "NUEVO"
    assert ticket.created_by == "sistema"
    assert ticket.fault_occurred_at is not None
    (row,) = history.rows
    assert (row.ticket_id, row.crew_id, row.state) == (1, 3, "NUEVO")


@pytest.mark.asyncio
async def test_create_ticket_keeps_explicit_author():
    history = FakeAssignmentRepo()
    ticket = await CreateTicketUseCase(FakeTicketRepo(), history).execute(
        _new_ticket(created_by="jperez"), user="sistema"
    )
    assert ticket.created_by == "jperez"
    assert history.rows[0].crew_id is None


@pytest.mark.asyncio
async def test_create_ticket_requires_task_fields():
    tickets = FakeTicketRepo()
    with pytest.raises(ValidationError) as exc:
        await CreateTicketUseCase(tickets, FakeAssignmentRepo()).execute(
            _new_ticket(task_category=None, task_subcategory=""), user="sistema"
        )
    assert len(exc.value.errors) == 2
    assert tickets.tickets == {}
