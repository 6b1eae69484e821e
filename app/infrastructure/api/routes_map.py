"""Map endpoints — points of interest, ticket selection and crew auto-update."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from app.application.ports.crew_repo import CrewRepository
from app.application.ports.site_repo import SiteRepository
from app.application.ports.ticket_repo import TicketRepository
from app.application.services.map_session import MapSession
from app.application.use_cases.rank_crews import RankCrewsUseCase
from app.config import settings
from app.domain.entities.map_point import MapPoint
from app.domain.policies.crew_ranking import MAX_SEARCH_RADIUS_KM, MIN_SEARCH_RADIUS_KM
from app.domain.value_objects.enums import PointKind
from app.infrastructure.api.dependencies import (
    get_crew_repo,
    get_map_session,
    get_rank_crews_uc,
    get_site_repo,
    get_ticket_repo,
)
from app.infrastructure.api.errors import read_or_empty
from app.infrastructure.api.routes_crews import load_session_crews
from app.infrastructure.api.routes_tickets import compute_ticket_routes
from app.infrastructure.api.serializers import serialize_point

router = APIRouter(prefix="/map", tags=["map"])


class AutoUpdateRequest(BaseModel):
    show_crews: bool
    auto_update: bool


class SelectionRequest(BaseModel):
    ticket_id: int
    radius_km: float | None = Field(default=None, ge=MIN_SEARCH_RADIUS_KM, le=MAX_SEARCH_RADIUS_KM)


def _parse_kinds(raw: str | None) -> set[PointKind]:
    if not raw:
        return set(PointKind)
    kinds = set()
    for part in raw.split(","):
        part = part.strip().lower()
        if not part:
            continue
        try:
            kinds.add(PointKind(part))
        except ValueError:
            raise HTTPException(status_code=400, detail=f"Unknown point kind: {part}")
    return kinds


def _session_state(map_session: MapSession) -> dict:
    return {
        "show_crews": map_session.show_crews,
        "auto_update": map_session.auto_update,
        "poller_running": map_session.poller_running,
        "selected_ticket_id": map_session.selected_ticket_id,
        "last_update": map_session.last_update.isoformat() if map_session.last_update else None,
    }


@router.get("/points")
async def map_points(
    kinds: str | None = None,
    region: str | None = None,
    state: str | None = None,
    ticket: int | None = None,
    site_repo: SiteRepository = Depends(get_site_repo),
    crew_repo: CrewRepository = Depends(get_crew_repo),
    ticket_repo: TicketRepository = Depends(get_ticket_repo),
    map_session: MapSession = Depends(get_map_session),
):
    """Locatable points for the requested kinds.

    ``region`` filters sites and tickets, ``state`` filters tickets. Crews come
    from the map session so they reflect the latest poll.
    """
    wanted = _parse_kinds(kinds)
    points: list[MapPoint] = []

    if PointKind.SITE in wanted:
        points += [
            s.to_map_point() for s in await read_or_empty("sites", site_repo.get_located())
            if not region or s.region == region
        ]

    if PointKind.CREW in wanted:
        points += [c.to_map_point() for c in await load_session_crews(map_session, crew_repo)]

    if PointKind.TICKET in wanted:
        points += [
            t.to_map_point() for t in await read_or_empty("tickets", ticket_repo.get_located(state))
            if not region or t.region == region
        ]

    center = None
    if ticket is not None:
        selected = await ticket_repo.get_by_id(ticket)
        if selected is None:
            raise HTTPException(status_code=404, detail="Ticket not found")
        if map_session.selected_ticket_id != selected.id:
            map_session.select_ticket(selected.id)
        center = selected.location.as_dict() if selected.location else None

    located = [p for p in points if p.is_locatable()]
    return {
        "total": len(located),
        "center": center,
        "points": [serialize_point(p) for p in located],
        "session": _session_state(map_session),
    }


@router.get("/state")
async def map_state(map_session: MapSession = Depends(get_map_session)):
    return _session_state(map_session)


@router.put("/auto-update")
async def set_auto_update(
    body: AutoUpdateRequest,
    crew_repo: CrewRepository = Depends(get_crew_repo),
    map_session: MapSession = Depends(get_map_session),
):
    """Show/hide crews and start/stop the position poller."""
    if body.show_crews:
        await load_session_crews(map_session, crew_repo)
    await map_session.set_crew_visibility(body.show_crews, body.auto_update)
    return _session_state(map_session)


@router.post("/selection")
async def select_ticket(
    body: SelectionRequest,
    ticket_repo: TicketRepository = Depends(get_ticket_repo),
    crew_repo: CrewRepository = Depends(get_crew_repo),
    rank_uc: RankCrewsUseCase = Depends(get_rank_crews_uc),
    map_session: MapSession = Depends(get_map_session),
):
    radius_km = settings.default_search_radius_km if body.radius_km is None else body.radius_km

    ticket = await ticket_repo.get_by_id(body.ticket_id)
    if not ticket:
        raise HTTPException(status_code=404, detail="Ticket not found")
    return await compute_ticket_routes(ticket, radius_km, rank_uc, crew_repo, map_session)


@router.delete("/selection")
async def clear_selection(map_session: MapSession = Depends(get_map_session)):
    map_session.clear_selection()
    return _session_state(map_session)
