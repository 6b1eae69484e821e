"""RankCrewsUseCase — nearest crews to a ticket, ranked by real travel time."""

from __future__ import annotations

import logging

from app.application.ports.routing_port import RoutingPort
from app.domain.entities.crew import Crew
from app.domain.entities.route_result import RouteResult
from app.domain.entities.ticket import Ticket
from app.domain.exceptions import ValidationError
from app.domain.policies.crew_ranking import (
    ASSUMED_SPEED_KMH,
    DEFAULT_SEARCH_RADIUS_KM,
    MAX_ROUTE_CANDIDATES,
    MAX_SEARCH_RADIUS_KM,
    MIN_SEARCH_RADIUS_KM,
    CrewCandidate,
    fallback_result,
    preselect_candidates,
    rank_by_duration,
)

logger = logging.getLogger(__name__)


class RankCrewsUseCase:
    """Orchestrates preselection, real-route enrichment and final ranking."""

    def __init__(
        self,
        routing: RoutingPort,
        max_candidates: int = MAX_ROUTE_CANDIDATES,
        assumed_speed_kmh: float = ASSUMED_SPEED_KMH,
    ):
        self._routing = routing
        self._max_candidates = max_candidates
        self._speed = assumed_speed_kmh

    async def execute(
        self,
        ticket: Ticket,
        crews: list[Crew],
        radius_km: float = DEFAULT_SEARCH_RADIUS_KM,
    ) -> list[RouteResult]:
        """Rank crews for a ticket, best (fastest) first.

        Pipeline:
        1. Category filter (falls back to all crews)
        2. Radius filter on straight-line distance
        3. Nearest first, capped at max_candidates
        4. Real route per candidate, one at a time
        5. Sort by travel duration
        """
        if not MIN_SEARCH_RADIUS_KM <= radius_km <= MAX_SEARCH_RADIUS_KM:
            raise ValidationError([
                f"Search radius must be between {MIN_SEARCH_RADIUS_KM:g} "
                f"and {MAX_SEARCH_RADIUS_KM:g} km"
            ])

        if not ticket.is_address_known():
            logger.info("Ticket %s has no coordinates, skipping ranking", ticket.id)
            return []

        origin = ticket.location
        candidates = preselect_candidates(
            origin, crews, ticket.crew_category, radius_km, limit=self._max_candidates
        )
        logger.info(
            "Ticket %s (category %s): %d crew(s) within %.0f km",
            ticket.id,
            ticket.crew_category.value if ticket.crew_category else "-",
            len(candidates), radius_km,
        )

        results = []
        for candidate in candidates:
            results.append(await self._enrich(origin, candidate))

        return rank_by_duration(results)

    async def _enrich(self, origin, candidate: CrewCandidate) -> RouteResult:
        crew = candidate.crew
        try:
            route = await self._routing.compute_route(origin, crew.location)
        except Exception:
            logger.exception("Routing adapter raised for crew %s", crew.code)
            route = None

        if route is None:
            result = fallback_result(candidate, self._speed)
            logger.info(
                "Fallback for crew %s: %.1f min, %.2f km",
                crew.code, result.duration_minutes, result.distance_km,
            )
            return result

        logger.info(
            "Route to crew %s: %.1f min, %.2f km",
            crew.code, route.duration_minutes, route.distance_km,
        )
        return RouteResult(
            crew=crew,
            duration_minutes=route.duration_minutes,
            distance_km=route.distance_km,
            encoded_polyline=route.encoded_polyline,
            legs=list(route.legs),
        )
