"""FastAPI dependency injection — wires adapters into use cases."""

from __future__ import annotations

import logging

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.adapters.persistence.database import async_session_factory, get_session
from app.adapters.persistence.repositories import (
    SqlAssignmentRepository,
    SqlCatalogRepository,
    SqlCrewRepository,
    SqlCrewRouteRepository,
    SqlSiteRepository,
    SqlTicketRepository,
)
from app.adapters.routing.google_routes_adapter import GoogleRoutesAdapter
from app.application.services.map_session import MapSession
from app.application.services.route_tracker import RouteTracker
from app.application.use_cases.assign_crew import AssignCrewUseCase
from app.application.use_cases.create_site import CreateSiteUseCase
from app.application.use_cases.create_ticket import CreateTicketUseCase
from app.application.use_cases.rank_crews import RankCrewsUseCase
from app.config import settings
from app.domain.entities.crew_route_log import CrewRouteLog
from app.domain.value_objects.geo_point import GeoPoint

logger = logging.getLogger(__name__)

# Re-export session dependency
get_db_session = get_session

# Singleton adapters (stateless)
_routing_adapter = GoogleRoutesAdapter()
if not settings.google_maps_api_key:
    logger.warning("GOOGLE_MAPS_API_KEY not set: crew routes will use straight-line estimates")


# Background jobs open their own short-lived sessions


async def _fetch_crew_positions() -> dict[int, GeoPoint]:
    async with async_session_factory() as session:
        return await SqlCrewRepository(session).get_positions()


async def _record_route_log(log: CrewRouteLog) -> None:
    async with async_session_factory() as session:
        await SqlCrewRouteRepository(session).save(log)
        await session.commit()


map_session = MapSession(_fetch_crew_positions, poll_interval_s=settings.crew_poll_interval_s)
route_tracker = RouteTracker(
    _record_route_log,
    crew_lookup=map_session.find_crew,
    interval_s=settings.tracking_interval_s,
)


def get_map_session() -> MapSession:
    return map_session


def get_route_tracker() -> RouteTracker:
    return route_tracker


def get_site_repo(session: AsyncSession = Depends(get_session)) -> SqlSiteRepository:
    return SqlSiteRepository(session)


def get_crew_repo(session: AsyncSession = Depends(get_session)) -> SqlCrewRepository:
    return SqlCrewRepository(session)


def get_ticket_repo(session: AsyncSession = Depends(get_session)) -> SqlTicketRepository:
    return SqlTicketRepository(session)


def get_assignment_repo(session: AsyncSession = Depends(get_session)) -> SqlAssignmentRepository:
    return SqlAssignmentRepository(session)


def get_catalog_repo(session: AsyncSession = Depends(get_session)) -> SqlCatalogRepository:
    return SqlCatalogRepository(session)


def get_rank_crews_uc() -> RankCrewsUseCase:
    return RankCrewsUseCase(routing=_routing_adapter, assumed_speed_kmh=settings.assumed_speed_kmh)


def get_assign_crew_uc(
    ticket_repo=Depends(get_ticket_repo),
    crew_repo=Depends(get_crew_repo),
    assignment_repo=Depends(get_assignment_repo),
) -> AssignCrewUseCase:
    return AssignCrewUseCase(
        ticket_repo=ticket_repo,
        crew_repo=crew_repo,
        assignment_repo=assignment_repo,
    )


def get_create_ticket_uc(
    ticket_repo=Depends(get_ticket_repo),
    assignment_repo=Depends(get_assignment_repo),
) -> CreateTicketUseCase:
    return CreateTicketUseCase(ticket_repo=ticket_repo, assignment_repo=assignment_repo)


def get_create_site_uc(site_repo=Depends(get_site_repo)) -> CreateSiteUseCase:
    return CreateSiteUseCase(site_repo=site_repo)
