"""In-memory port implementations shared by the test modules."""

from __future__ import annotations

from app.application.ports.assignment_repo import AssignmentRepository
from app.application.ports.catalog_repo import CatalogRepository
from app.application.ports.crew_repo import CrewRepository
from app.application.ports.routing_port import RoutingPort
from app.application.ports.site_repo import SiteRepository
from app.application.ports.ticket_repo import TicketRepository


class FakeTicketRepo(TicketRepository):
    def __init__(self, tickets=()):
        self.tickets = {t.id: t for t in tickets}

    async def save(self, ticket):
        ticket.id = len(self.tickets) + 1
        self.tickets[ticket.id] = ticket
        return ticket

    async def get_by_id(self, ticket_id):
        return self.tickets.get(ticket_id)

    async def get_page(self, page, page_size, state=None, text=None):
        items = [t for t in self.tickets.values() if not state or t.state == state]
        if text:
            items = [t for t in items if text.lower() in (t.site_name or "").lower()]
        return items[(page - 1) * page_size: page * page_size], len(items)

    async def get_located(self, state=None):
        return [
            t for t in self.tickets.values()
            if t.is_address_known() and (not state or t.state == state)
        ]

    async def update_state(self, ticket_id, state):
        self.tickets[ticket_id].state = state


class FakeCrewRepo(CrewRepository):
    def __init__(self, crews=()):
        self.crews = {c.id: c for c in crews}

    async def get_by_id(self, crew_id):
        return self.crews.get(crew_id)

    async def get_located(self):
        return [c for c in self.crews.values() if c.has_location()]

    async def search(self, text, limit=20):
        return [c for c in self.crews.values() if text.lower() in c.code.lower()][:limit]

    async def get_positions(self):
        return {c.id: c.location for c in self.crews.values() if c.location}

    async def update_state(self, crew_id, state):
        self.crews[crew_id].state = state


class FakeAssignmentRepo(AssignmentRepository):
    def __init__(self):
        self.rows = []

    async def save(self, assignment):
        assignment.id = len(self.rows) + 1
        self.rows.append(assignment)
        return assignment

    async def get_by_ticket(self, ticket_id):
        return [a for a in self.rows if a.ticket_id == ticket_id]


class FakeSiteRepo(SiteRepository):
    def __init__(self, sites=()):
        self.sites = {s.code: s for s in sites}

    async def save(self, site):
        site.id = len(self.sites) + 1
        self.sites[site.code] = site
        return site

    async def get_by_code(self, code):
        return self.sites.get(code)

    async def search(self, region=None, text=None, limit=100, offset=0):
        items = [s for s in self.sites.values() if not region or s.region == region]
        return items[offset: offset + limit], len(items)

    async def get_located(self):
        return [s for s in self.sites.values() if s.location]


class FakeCatalogRepo(CatalogRepository):
    def __init__(self, states=None, error: Exception | None = None):
        self._states = states or []
        self._error = error

    async def get_ticket_states(self):
        if self._error:
            raise self._error
        return list(self._states)


class NoRoutes(RoutingPort):
    """Routing provider that never finds a route."""

    def __init__(self):
        self.calls = 0

    async def compute_route(self, origin, destination):
        self.calls += 1
        return None
