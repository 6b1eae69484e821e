"""CrewRankingPolicy — straight-line preselection of crews for a ticket.

The async orchestration (real routes) lives in RankCrewsUseCase; everything
here is pure and works on haversine distances only.
"""

from __future__ import annotations

from dataclasses import dataclass

from app.domain.entities.crew import Crew
from app.domain.entities.route_result import RouteResult
from app.domain.value_objects.enums import CrewCategory
from app.domain.value_objects.geo_point import GeoPoint

DEFAULT_SEARCH_RADIUS_KM = 20.0
MIN_SEARCH_RADIUS_KM = 1.0
MAX_SEARCH_RADIUS_KM = 100.0

# Candidates sent to the routing provider
MAX_ROUTE_CANDIDATES = 5

# Average urban speed used when no real route is available
ASSUMED_SPEED_KMH = 30.0


@dataclass(frozen=True)
class CrewCandidate:
    """A crew that passed the filters, with its straight-line distance."""

    crew: Crew
    straight_km: float


def filter_by_category(crews: list[Crew], category: CrewCategory | None) -> list[Crew]:
    """Keep locatable crews of *category*.

    Falls back to every locatable crew when the ticket has no category or
    nobody matches it.
    """
    located = [c for c in crews if c.has_location()]
    if category is None:
        return located

    matching = [c for c in located if c.category == category]
    return matching or located


def filter_by_radius(
    origin: GeoPoint,
    crews: list[Crew],
    radius_km: float,
) -> list[CrewCandidate]:
    """Keep crews within *radius_km* (inclusive) of *origin*."""
    candidates = []
    for crew in crews:
        if crew.location is None:
            continue
        straight_km = origin.haversine_km(crew.location)
        if straight_km <= radius_km:
            candidates.append(CrewCandidate(crew=crew, straight_km=straight_km))
    return candidates


def preselect_candidates(
    origin: GeoPoint,
    crews: list[Crew],
    category: CrewCategory | None,
    radius_km: float,
    limit: int = MAX_ROUTE_CANDIDATES,
) -> list[CrewCandidate]:
    """Category filter → radius filter → nearest first → top *limit*."""
    eligible = filter_by_category(crews, category)
    in_range = filter_by_radius(origin, eligible, radius_km)
    # sorted() is stable: equal distances keep the input order
    return sorted(in_range, key=lambda c: c.straight_km)[:limit]


def estimate_duration_minutes(distance_km: float, speed_kmh: float = ASSUMED_SPEED_KMH) -> float:
    return distance_km / speed_kmh * 60


def fallback_result(candidate: CrewCandidate, speed_kmh: float = ASSUMED_SPEED_KMH) -> RouteResult:
    """Straight-line estimate used when the routing provider gives nothing."""
    return RouteResult(
        crew=candidate.crew,
        duration_minutes=estimate_duration_minutes(candidate.straight_km, speed_kmh),
        distance_km=candidate.straight_km,
        estimated=True,
    )


def rank_by_duration(results: list[RouteResult]) -> list[RouteResult]:
    """Fastest first; ties keep pre-rank order."""
    return sorted(results, key=lambda r: r.duration_minutes)
