"""Tests for RankCrewsUseCase with an in-memory routing provider."""

from __future__ import annotations

import pytest

from app.application.ports.routing_port import ComputedRoute, RoutingPort
from app.application.use_cases.rank_crews import RankCrewsUseCase
from app.domain.exceptions import ValidationError
from tests.factories import make_crew


class FakeRouting(RoutingPort):
    """Returns a fixed route per destination latitude, or None."""

    def __init__(self, routes: dict | None = None, fail_for: set | None = None):
        self._routes = routes or {}
        self._fail_for = fail_for or set()
        self.calls = []

    async def compute_route(self, origin, destination):
        self.calls.append(destination)
        if destination in self._fail_for:
            raise RuntimeError("network down")
        return self._routes.get(destination)


@pytest.mark.asyncio
async def test_no_crews_no_provider_calls(ticket):
    routing = FakeRouting()
    results = await RankCrewsUseCase(routing).execute(ticket, [])
    assert results == []
    assert routing.calls == []


@pytest.mark.asyncio
async def test_crews_without_coordinates_are_ignored(ticket):
    routing = FakeRouting()
    results = await RankCrewsUseCase(routing).execute(ticket, [make_crew(1), make_crew(2)])
    assert results == []
    assert routing.calls == []


@pytest.mark.asyncio
async def test_ticket_without_location(ticket):
    ticket.location = None
    routing = FakeRouting()
    assert await RankCrewsUseCase(routing).execute(ticket, [make_crew(1, 1, "A")]) == []
    assert routing.calls == []


@pytest.mark.asyncio
async def test_at_most_five_results_sorted_by_duration(ticket):
    crews = [make_crew(i, i, "A") for i in range(1, 9)]
    # Real routes invert the straight-line order
    routes = {
        c.location: ComputedRoute(duration_minutes=100 - c.id, distance_km=c.id * 1.5)
        for c in crews
    }
    routing = FakeRouting(routes)

    results = await RankCrewsUseCase(routing).execute(ticket, crews)

    assert len(routing.calls) == 5
    assert len(results) == 5
    assert [r.crew.id for r in results] == [5, 4, 3, 2, 1]
    durations = [r.duration_minutes for r in results]
    assert durations == sorted(durations)


@pytest.mark.asyncio
async def test_fallback_duration_uses_thirty_kmh(ticket):
    crew = make_crew(1, 10, "A")
    results = await RankCrewsUseCase(FakeRouting()).execute(ticket, [crew])

    (result,) = results
    assert result.estimated
    assert result.distance_km == pytest.approx(10.0, rel=1e-6)
    assert result.duration_minutes == pytest.approx(result.distance_km / 30 * 60)


@pytest.mark.asyncio
async def test_provider_exception_falls_back(ticket):
    crew = make_crew(1, 6, "A")
    routing = FakeRouting(fail_for={crew.location})
    (result,) = await RankCrewsUseCase(routing).execute(ticket, [crew])
    assert result.estimated
    assert result.duration_minutes == pytest.approx(12.0, rel=1e-6)


@pytest.mark.asyncio
async def test_real_route_keeps_polyline(ticket):
    crew = make_crew(1, 3, "A")
    routing = FakeRouting({crew.location: ComputedRoute(9.5, 4.2, "_p~iF~ps|U")})
    (result,) = await RankCrewsUseCase(routing).execute(ticket, [crew])
    assert not result.estimated
    assert result.encoded_polyline == "_p~iF~ps|U"
    assert (result.duration_minutes, result.distance_km) == (9.5, 4.2)


@pytest.mark.asyncio
async def test_category_preferred_over_distance(ticket):
    crews = [make_crew(1, 1, "B"), make_crew(2, 15, "A")]
    results = await RankCrewsUseCase(FakeRouting()).execute(ticket, crews)
    assert [r.crew.id for r in results] == [2]


@pytest.mark.asyncio
async def test_out_of_radius_crews_dropped(ticket):
    crews = [make_crew(1, 5, "A"), make_crew(2, 40, "A")]
    results = await RankCrewsUseCase(FakeRouting()).execute(ticket, crews, radius_km=20)
    assert [r.crew.id for r in results] == [1]


@pytest.mark.asyncio
@pytest.mark.parametrize("radius", [0.5, 101])
async def test_radius_out_of_range_rejected(ticket, radius):
    with pytest.raises(ValidationError):
        await RankCrewsUseCase(FakeRouting()).execute(ticket, [], radius_km=radius)
