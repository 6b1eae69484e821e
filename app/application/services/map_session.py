"""MapSession — in-memory dashboard state shared by the map endpoints.

Holds the loaded crews (refreshed by a position poller while crews are
visible and auto-update is on) and the routes computed for the selected
ticket. Every list is replaced as a whole, never edited in place.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Awaitable, Callable
from datetime import datetime, timezone

from app.application.services.periodic import PeriodicJob
from app.domain.entities.crew import Crew
from app.domain.entities.route_result import RouteResult
from app.domain.value_objects.enums import CrewState
from app.domain.value_objects.geo_point import GeoPoint

logger = logging.getLogger(__name__)

PositionFetcher = Callable[[], Awaitable[dict[int, GeoPoint]]]


class MapSession:
    def __init__(self, fetch_positions: PositionFetcher, poll_interval_s: float = 5.0):
        self._fetch_positions = fetch_positions
        self._poller = PeriodicJob("crew-position-poller", poll_interval_s, self.refresh_positions)

        self._crews: list[Crew] = []
        self.crews_loaded = False
        self.show_crews = False
        self.auto_update = False
        self.last_update: datetime | None = None

        self._generation = 0
        self._selected_ticket_id: int | None = None
        self._route_results: list[RouteResult] = []

    # ─── Crews ───────────────────────────────────────────────────────

    @property
    def crews(self) -> list[Crew]:
        return self._crews

    @property
    def poller_running(self) -> bool:
        return self._poller.is_running

    def find_crew(self, crew_id: int) -> Crew | None:
        return next((c for c in self._crews if c.id == crew_id), None)

    async def load_crews(self, crews: list[Crew]) -> None:
        self._crews = list(crews)
        self.crews_loaded = True
        await self._sync_poller()

    async def set_crew_visibility(self, show_crews: bool, auto_update: bool) -> None:
        self.show_crews = show_crews
        self.auto_update = auto_update
        await self._sync_poller()

    async def _sync_poller(self) -> None:
        if self.auto_update and self.crews_loaded and self.show_crews:
            self._poller.start()
        else:
            await self._poller.stop()

    async def refresh_positions(self) -> None:
        if not self.crews_loaded or not self.show_crews:
            return
        positions = await self._fetch_positions()
        if not positions:
            logger.info("No crew coordinates returned")
            return
        changed = self.apply_positions(positions)
        logger.info("Crew positions refreshed: %d checked, %d moved", len(positions), changed)

    def apply_positions(self, positions: dict[int, GeoPoint]) -> int:
        """Swap in a new crew list with updated locations. Returns the number moved."""
        changed = 0
        updated = []
        for crew in self._crews:
            new_location = positions.get(crew.id)
            if new_location is not None and new_location != crew.location:
                logger.debug("Crew %s moved %s → %s", crew.code, crew.location, new_location)
                crew = dataclasses.replace(crew, location=new_location)
                changed += 1
            updated.append(crew)
        self._crews = updated
        self.last_update = datetime.now(timezone.utc)
        return changed

    def set_crew_state(self, crew_id: int, state: CrewState) -> None:
        self._crews = [
            dataclasses.replace(c, state=state) if c.id == crew_id else c
            for c in self._crews
        ]

    # ─── Ticket selection / routes ───────────────────────────────────

    @property
    def selected_ticket_id(self) -> int | None:
        return self._selected_ticket_id

    @property
    def route_results(self) -> list[RouteResult]:
        return self._route_results

    def select_ticket(self, ticket_id: int) -> int:
        """Select a ticket and return the generation token for its routes."""
        self._generation += 1
        self._selected_ticket_id = ticket_id
        self._route_results = []
        return self._generation

    def clear_selection(self) -> None:
        self._generation += 1
        self._selected_ticket_id = None
        self._route_results = []

    def store_route_results(self, generation: int, results: list[RouteResult]) -> bool:
        """Keep *results* only if the selection they were computed for is current."""
        if generation != self._generation:
            logger.info(
                "Discarding %d stale route result(s) (generation %d, current %d)",
                len(results), generation, self._generation,
            )
            return False
        self._route_results = list(results)
        return True

    async def close(self) -> None:
        await self._poller.stop()
