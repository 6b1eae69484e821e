"""Crew endpoints — listing, search and route tracking."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from app.application.ports.crew_repo import CrewRepository
from app.application.services.map_session import MapSession
from app.application.services.route_tracker import RouteTracker
from app.domain.entities.crew import Crew
from app.infrastructure.api.dependencies import (
    get_crew_repo,
    get_map_session,
    get_route_tracker,
)
from app.infrastructure.api.errors import read_or_empty
from app.infrastructure.api.serializers import serialize_crew

router = APIRouter(prefix="/crews", tags=["crews"])


async def load_session_crews(map_session: MapSession, crew_repo: CrewRepository) -> list[Crew]:
    """Crews held by the map session, loading them on first use."""
    if map_session.crews_loaded:
        return map_session.crews
    crews = await read_or_empty("crews", crew_repo.get_located())
    if crews:
        await map_session.load_crews(crews)
    return crews


def _tracking_state(tracker: RouteTracker) -> dict:
    crew = tracker.active_crew
    return {
        "active": tracker.is_active,
        "crew": serialize_crew(crew) if crew else None,
    }


@router.get("")
async def list_crews(
    crew_repo: CrewRepository = Depends(get_crew_repo),
    map_session: MapSession = Depends(get_map_session),
):
    """Crews with coordinates, as last seen by the position poller."""
    crews = await load_session_crews(map_session, crew_repo)
    return {
        "total": len(crews),
        "last_update": map_session.last_update.isoformat() if map_session.last_update else None,
        "crews": [serialize_crew(c) for c in crews],
    }


@router.get("/search")
async def search_crews(
    q: str = Query(min_length=1),
    crew_repo: CrewRepository = Depends(get_crew_repo),
):
    crews = await crew_repo.search(q)
    return {"total": len(crews), "crews": [serialize_crew(c) for c in crews]}


@router.get("/tracking")
async def tracking_status(tracker: RouteTracker = Depends(get_route_tracker)):
    return _tracking_state(tracker)


@router.post("/{crew_id}/tracking")
async def start_tracking(
    crew_id: int,
    crew_repo: CrewRepository = Depends(get_crew_repo),
    map_session: MapSession = Depends(get_map_session),
    tracker: RouteTracker = Depends(get_route_tracker),
):
    """Start logging this crew's position; replaces any active tracking."""
    crew = map_session.find_crew(crew_id) or await crew_repo.get_by_id(crew_id)
    if crew is None:
        raise HTTPException(status_code=404, detail="Crew not found")

    await tracker.start(crew)
    return _tracking_state(tracker)


@router.delete("/tracking")
async def stop_tracking(tracker: RouteTracker = Depends(get_route_tracker)):
    stopped = await tracker.stop()
    return {
        "stopped": serialize_crew(stopped) if stopped else None,
        **_tracking_state(tracker),
    }
