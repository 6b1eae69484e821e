"""Ticket endpoints — list, detail, create, crew ranking and assignment."""

from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from app.adapters.persistence.database import get_session
from app.application.ports.assignment_repo import AssignmentRepository
from app.application.ports.crew_repo import CrewRepository
from app.application.ports.ticket_repo import TicketRepository
from app.application.services.map_session import MapSession
from app.application.use_cases.assign_crew import AssignCrewUseCase
from app.application.use_cases.create_ticket import CreateTicketUseCase
from app.application.use_cases.rank_crews import RankCrewsUseCase
from app.config import settings
from app.domain.entities.ticket import Ticket
from app.domain.policies.crew_ranking import MAX_SEARCH_RADIUS_KM, MIN_SEARCH_RADIUS_KM
from app.domain.policies.route_overlays import build_route_overlays
from app.domain.value_objects.enums import CrewCategory, CrewState
from app.infrastructure.api.dependencies import (
    get_assign_crew_uc,
    get_assignment_repo,
    get_create_ticket_uc,
    get_crew_repo,
    get_map_session,
    get_rank_crews_uc,
    get_ticket_repo,
)
from app.infrastructure.api.routes_crews import load_session_crews
from app.infrastructure.api.serializers import (
    serialize_assignment,
    serialize_overlay,
    serialize_route_result,
    serialize_ticket,
)

router = APIRouter(prefix="/tickets", tags=["tickets"])

PAGE_SIZE = 10


class TicketCreate(BaseModel):
    ticket_source: str | None = None
    site_id: str | None = None
    site_name: str | None = None
    task_category: str
    task_subcategory: str
    fault_level: str | None = None
    platform_affected: str | None = None
    attention_type: str | None = None
    service_affected: str | None = None
    crew_category: CrewCategory | None = None
    fault_occur_time: datetime | None = None
    crew_id: int | None = None
    created_by: str | None = None


class AssignRequest(BaseModel):
    crew_id: int
    user: str | None = None


async def compute_ticket_routes(
    ticket: Ticket,
    radius_km: float,
    rank_uc: RankCrewsUseCase,
    crew_repo: CrewRepository,
    map_session: MapSession,
) -> dict:
    """Select *ticket*, rank crews around it and build the route overlays.

    Results are stored in the map session only if the ticket is still the
    selected one when ranking finishes.
    """
    generation = map_session.select_ticket(ticket.id)
    crews = await load_session_crews(map_session, crew_repo)

    results = await rank_uc.execute(ticket, crews, radius_km=radius_km)
    current = map_session.store_route_results(generation, results)
    overlays = build_route_overlays(ticket.location, results) if ticket.location else []

    return {
        "ticket": serialize_ticket(ticket),
        "radius_km": radius_km,
        "current": current,
        "routes": [serialize_route_result(i + 1, r) for i, r in enumerate(results)],
        "overlays": [serialize_overlay(o) for o in overlays],
    }


@router.get("")
async def list_tickets(
    page: int = Query(default=1, ge=1),
    state: str | None = None,
    q: str | None = None,
    ticket_repo: TicketRepository = Depends(get_ticket_repo),
):
    """Paginated ticket list, newest first."""
    tickets, total = await ticket_repo.get_page(page, PAGE_SIZE, state=state, text=q)
    return {
        "total": total,
        "page": page,
        "page_size": PAGE_SIZE,
        "pages": (total + PAGE_SIZE - 1) // PAGE_SIZE,
        "tickets": [serialize_ticket(t) for t in tickets],
    }


@router.get("/{ticket_id}")
async def get_ticket(
    ticket_id: int,
    ticket_repo: TicketRepository = Depends(get_ticket_repo),
    assignment_repo: AssignmentRepository = Depends(get_assignment_repo),
):
    """Get a single ticket with its state history."""
    ticket = await ticket_repo.get_by_id(ticket_id)
    if not ticket:
        raise HTTPException(status_code=404, detail="Ticket not found")

    history = await assignment_repo.get_by_ticket(ticket_id)
    data = serialize_ticket(ticket)
    data["history"] = [serialize_assignment(a) for a in history]
    data["assignment"] = serialize_assignment(history[-1]) if history else None
    return data


@router.post("", status_code=201)
async def create_ticket(
    body: TicketCreate,
    create_uc: CreateTicketUseCase = Depends(get_create_ticket_uc),
    session: AsyncSession = Depends(get_session),
):
    ticket = Ticket(
        id=None,
        source=body.ticket_source,
        site_code=body.site_id,
        site_name=body.site_name,
        task_category=body.task_category,
        task_subcategory=body.task_subcategory,
        fault_level=body.fault_level,
        platform_affected=body.platform_affected,
        attention_type=body.attention_type,
        service_affected=body.service_affected,
        crew_category=body.crew_category,
        created_by=body.created_by,
        fault_occurred_at=body.fault_occur_time,
    )
    await create_uc.execute(ticket, user=settings.default_user, crew_id=body.crew_id)
    await session.commit()
    return serialize_ticket(ticket)


@router.get("/{ticket_id}/routes")
async def ticket_routes(
    ticket_id: int,
    radius_km: float = Query(
        default=settings.default_search_radius_km,
        ge=MIN_SEARCH_RADIUS_KM,
        le=MAX_SEARCH_RADIUS_KM,
    ),
    ticket_repo: TicketRepository = Depends(get_ticket_repo),
    crew_repo: CrewRepository = Depends(get_crew_repo),
    rank_uc: RankCrewsUseCase = Depends(get_rank_crews_uc),
    map_session: MapSession = Depends(get_map_session),
):
    """Rank the nearest crews for a ticket by real driving time."""
    ticket = await ticket_repo.get_by_id(ticket_id)
    if not ticket:
        raise HTTPException(status_code=404, detail="Ticket not found")

    return await compute_ticket_routes(ticket, radius_km, rank_uc, crew_repo, map_session)


@router.post("/{ticket_id}/assign")
async def assign_crew(
    ticket_id: int,
    body: AssignRequest,
    assign_uc: AssignCrewUseCase = Depends(get_assign_crew_uc),
    map_session: MapSession = Depends(get_map_session),
    session: AsyncSession = Depends(get_session),
):
    assignment = await assign_uc.execute(
        ticket_id, body.crew_id, user=body.user or settings.default_user
    )
    await session.commit()
    map_session.set_crew_state(body.crew_id, CrewState.ASSIGNED)
    return serialize_assignment(assignment)
