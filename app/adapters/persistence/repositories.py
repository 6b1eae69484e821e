"""SQLAlchemy repository implementations."""

from __future__ import annotations

from sqlalchemy import func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.adapters.persistence.models import (
    CrewModel,
    CrewRouteModel,
    CrewTicketStateModel,
    SiteModel,
    TicketModel,
    TicketStateCatalogModel,
)
from app.application.ports.assignment_repo import AssignmentRepository
from app.application.ports.catalog_repo import CatalogRepository
from app.application.ports.crew_repo import CrewRepository
from app.application.ports.crew_route_repo import CrewRouteRepository
from app.application.ports.site_repo import SiteRepository
from app.application.ports.ticket_repo import TicketRepository
from app.domain.entities.crew import Crew
from app.domain.entities.crew_assignment import CrewAssignment
from app.domain.entities.crew_route_log import CrewRouteLog
from app.domain.entities.site import Site
from app.domain.entities.ticket import Ticket
from app.domain.value_objects.enums import CrewCategory, CrewState
from app.domain.value_objects.geo_point import GeoPoint

# Columns matched by the free-text ticket search
TICKET_SEARCH_COLUMNS = (
    TicketModel.ticket_source,
    TicketModel.site_id,
    TicketModel.site_name,
    TicketModel.fault_level,
    TicketModel.task_category,
    TicketModel.task_subcategory,
    TicketModel.platform_affected,
    TicketModel.attention_type,
    TicketModel.service_affected,
    TicketModel.state,
)

# ─── Mappers ─────────────────────────────────────────────────────────


def _category(raw: str | None) -> CrewCategory | None:
    if not raw:
        return None
    try:
        return CrewCategory(raw.strip().upper())
    except ValueError:
        return None


def _crew_state(raw: str | None) -> CrewState:
    if raw and raw.strip().upper() == CrewState.ASSIGNED.value:
        return CrewState.ASSIGNED
    return CrewState.AVAILABLE


def _site_to_domain(m: SiteModel) -> Site:
    return Site(
        id=m.id,
        code=m.code,
        name=m.name,
        region=m.region,
        address=m.address,
        location=GeoPoint.from_nullable(m.latitude, m.longitude),
        detail=m.detail,
    )


def _crew_to_domain(m: CrewModel) -> Crew:
    return Crew(
        id=m.id,
        code=m.code or "",
        name=m.name or "",
        location=GeoPoint.from_nullable(m.latitude, m.longitude),
        active=m.active,
        category=_category(m.category),
        state=_crew_state(m.state),
        skills=[s for s in (m.skill_1, m.skill_2, m.skill_3) if s],
    )


def _ticket_to_domain(m: TicketModel, site: SiteModel | None = None) -> Ticket:
    return Ticket(
        id=m.id,
        source=m.ticket_source,
        site_code=m.site_id,
        site_name=m.site_name,
        state=m.state,
        task_category=m.task_category,
        task_subcategory=m.task_subcategory,
        fault_level=m.fault_level,
        platform_affected=m.platform_affected,
        attention_type=m.attention_type,
        service_affected=m.service_affected,
        crew_category=_category(m.crew_category),
        created_by=m.created_by,
        fault_occurred_at=m.fault_occur_time,
        created_at=m.created_at,
        region=site.region if site else None,
        location=GeoPoint.from_nullable(site.latitude, site.longitude) if site else None,
    )


def _assignment_to_domain(m: CrewTicketStateModel) -> CrewAssignment:
    return CrewAssignment(
        id=m.id,
        ticket_id=m.ticket_id,
        crew_id=m.crew_id,
        state=m.state,
        assigned_at=m.assigned_at,
        created_by=m.created_by,
    )


def _ilike_any(columns, text: str):
    pattern = f"%{text}%"
    return or_(*(col.ilike(pattern) for col in columns))


# ─── Repositories ────────────────────────────────────────────────────


class SqlSiteRepository(SiteRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def save(self, site: Site) -> Site:
        m = SiteModel(
            code=site.code,
            name=site.name,
            address=site.address,
            region=site.region,
            latitude=site.location.latitude if site.location else None,
            longitude=site.location.longitude if site.location else None,
            detail=site.detail,
        )
        self._s.add(m)
        await self._s.flush()
        site.id = m.id
        return site

    async def get_by_code(self, code: str) -> Site | None:
        result = await self._s.execute(select(SiteModel).where(SiteModel.code == code))
        m = result.scalar_one_or_none()
        return _site_to_domain(m) if m else None

    async def search(
        self,
        region: str | None = None,
        text: str | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> tuple[list[Site], int]:
        conditions = []
        if region:
            conditions.append(SiteModel.region == region)
        if text:
            conditions.append(_ilike_any((SiteModel.code, SiteModel.name), text))

        total = (
            await self._s.execute(select(func.count(SiteModel.id)).where(*conditions))
        ).scalar() or 0
        result = await self._s.execute(
            select(SiteModel)
            .where(*conditions)
            .order_by(SiteModel.code)
            .limit(limit)
            .offset(offset)
        )
        return [_site_to_domain(m) for m in result.scalars()], total

    async def get_located(self) -> list[Site]:
        result = await self._s.execute(
            select(SiteModel)
            .where(SiteModel.latitude.is_not(None), SiteModel.longitude.is_not(None))
            .order_by(SiteModel.id)
        )
        return [_site_to_domain(m) for m in result.scalars()]


class SqlCrewRepository(CrewRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def get_by_id(self, crew_id: int) -> Crew | None:
        m = await self._s.get(CrewModel, crew_id)
        return _crew_to_domain(m) if m else None

    async def get_located(self) -> list[Crew]:
        result = await self._s.execute(
            select(CrewModel)
            .where(CrewModel.latitude.is_not(None), CrewModel.longitude.is_not(None))
            .order_by(CrewModel.id)
        )
        crews = [_crew_to_domain(m) for m in result.scalars()]
        return [c for c in crews if c.has_location()]

    async def search(self, text: str, limit: int = 20) -> list[Crew]:
        result = await self._s.execute(
            select(CrewModel)
            .where(_ilike_any((CrewModel.code, CrewModel.name), text))
            .order_by(CrewModel.code)
            .limit(limit)
        )
        return [_crew_to_domain(m) for m in result.scalars()]

    async def get_positions(self) -> dict[int, GeoPoint]:
        result = await self._s.execute(
            select(CrewModel.id, CrewModel.latitude, CrewModel.longitude).where(
                CrewModel.latitude.is_not(None), CrewModel.longitude.is_not(None)
            )
        )
        positions = {}
        for crew_id, lat, lon in result.all():
            point = GeoPoint.from_nullable(lat, lon)
            if point is not None:
                positions[crew_id] = point
        return positions

    async def update_state(self, crew_id: int, state: CrewState) -> None:
        await self._s.execute(
            update(CrewModel).where(CrewModel.id == crew_id).values(state=state.value)
        )
        await self._s.flush()


class SqlTicketRepository(TicketRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    def _with_site(self):
        return select(TicketModel, SiteModel).outerjoin(
            SiteModel, SiteModel.code == TicketModel.site_id
        )

    async def save(self, ticket: Ticket) -> Ticket:
        m = TicketModel(
            ticket_source=ticket.source,
            site_id=ticket.site_code,
            site_name=ticket.site_name,
            state=ticket.state,
            task_category=ticket.task_category,
            task_subcategory=ticket.task_subcategory,
            fault_level=ticket.fault_level,
            platform_affected=ticket.platform_affected,
            attention_type=ticket.attention_type,
            service_affected=ticket.service_affected,
            crew_category=ticket.crew_category.value if ticket.crew_category else None,
            created_by=ticket.created_by,
            fault_occur_time=ticket.fault_occurred_at,
        )
        self._s.add(m)
        await self._s.flush()
        ticket.id = m.id
        return ticket

    async def get_by_id(self, ticket_id: int) -> Ticket | None:
        result = await self._s.execute(self._with_site().where(TicketModel.id == ticket_id))
        row = result.first()
        return _ticket_to_domain(row[0], row[1]) if row else None

    async def get_page(
        self,
        page: int,
        page_size: int,
        state: str | None = None,
        text: str | None = None,
    ) -> tuple[list[Ticket], int]:
        conditions = []
        if state:
            conditions.append(TicketModel.state == state)
        if text:
            conditions.append(_ilike_any(TICKET_SEARCH_COLUMNS, text))

        total = (
            await self._s.execute(select(func.count(TicketModel.id)).where(*conditions))
        ).scalar() or 0
        result = await self._s.execute(
            self._with_site()
            .where(*conditions)
            .order_by(TicketModel.created_at.desc(), TicketModel.id.desc())
            .limit(page_size)
            .offset((page - 1) * page_size)
        )
        return [_ticket_to_domain(t, s) for t, s in result.all()], total

    async def get_located(self, state: str | None = None) -> list[Ticket]:
        query = (
            select(TicketModel, SiteModel)
            .join(SiteModel, SiteModel.code == TicketModel.site_id)
            .where(SiteModel.latitude.is_not(None), SiteModel.longitude.is_not(None))
            .order_by(TicketModel.id)
        )
        if state:
            query = query.where(TicketModel.state == state)
        result = await self._s.execute(query)
        tickets = [_ticket_to_domain(t, s) for t, s in result.all()]
        return [t for t in tickets if t.is_address_known()]

    async def update_state(self, ticket_id: int, state: str) -> None:
        await self._s.execute(
            update(TicketModel).where(TicketModel.id == ticket_id).values(state=state)
        )
        await self._s.flush()


class SqlAssignmentRepository(AssignmentRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def save(self, assignment: CrewAssignment) -> CrewAssignment:
        m = CrewTicketStateModel(
            ticket_id=assignment.ticket_id,
            crew_id=assignment.crew_id,
            assigned_at=assignment.assigned_at,
            created_by=assignment.created_by,
            state=assignment.state,
        )
        self._s.add(m)
        await self._s.flush()
        assignment.id = m.id
        return assignment

    async def get_by_ticket(self, ticket_id: int) -> list[CrewAssignment]:
        result = await self._s.execute(
            select(CrewTicketStateModel)
            .where(CrewTicketStateModel.ticket_id == ticket_id)
            .order_by(CrewTicketStateModel.assigned_at, CrewTicketStateModel.id)
        )
        return [_assignment_to_domain(m) for m in result.scalars()]


class SqlCrewRouteRepository(CrewRouteRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def save(self, log: CrewRouteLog) -> CrewRouteLog:
        m = CrewRouteModel(
            crew_id=log.crew_id,
            day=log.day,
            at=log.at,
            latitude=log.location.latitude,
            longitude=log.location.longitude,
        )
        self._s.add(m)
        await self._s.flush()
        log.id = m.id
        return log


class SqlCatalogRepository(CatalogRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def get_ticket_states(self) -> list[dict]:
        result = await self._s.execute(
            select(TicketStateCatalogModel).order_by(TicketStateCatalogModel.code)
        )
        return [
            {"code": m.code, "name": m.name, "description": m.description}
            for m in result.scalars()
        ]
