"""Tests for MapSession: crew polling and stale route results."""

from __future__ import annotations

import asyncio

import pytest

from app.application.services.map_session import MapSession
from app.domain.entities.route_result import RouteResult
from app.domain.value_objects.enums import CrewState
from app.domain.value_objects.geo_point import GeoPoint
from tests.factories import make_crew


class FakePositions:
    def __init__(self, positions=None):
        self.positions = positions or {}
        self.calls = 0

    async def __call__(self):
        self.calls += 1
        return dict(self.positions)


def test_apply_positions_replaces_the_list():
    session = MapSession(FakePositions())
    session._crews = [make_crew(1, 1), make_crew(2, 2)]
    before = session.crews
    moved = GeoPoint(-12.0, -77.0)

    changed = session.apply_positions({1: moved, 3: GeoPoint(0, 0)})

    assert changed == 1
    assert session.crews is not before
    assert session.crews[0].location == moved
    assert before[0].location != moved
    assert session.crews[1] is before[1]
    assert session.last_update is not None


def test_set_crew_state():
    session = MapSession(FakePositions())
    session._crews = [make_crew(1, 1), make_crew(2, 2)]
    session.set_crew_state(2, CrewState.ASSIGNED)
    assert [c.state for c in session.crews] == [CrewState.AVAILABLE, CrewState.ASSIGNED]


def test_stale_route_results_are_discarded():
    session = MapSession(FakePositions())
    first = session.select_ticket(1)
    second = session.select_ticket(2)
    stale = [RouteResult(crew=make_crew(1, 1), duration_minutes=3, distance_km=1)]

    assert not session.store_route_results(first, stale)
    assert session.route_results == []
    assert session.selected_ticket_id == 2

    assert session.store_route_results(second, stale)
    assert len(session.route_results) == 1


def test_clear_selection_invalidates_pending_results():
    session = MapSession(FakePositions())
    generation = session.select_ticket(1)
    session.clear_selection()
    assert not session.store_route_results(generation, [])
    assert session.selected_ticket_id is None


@pytest.mark.asyncio
async def test_poller_runs_only_with_crews_shown_and_auto_update():
    fetch = FakePositions({1: GeoPoint(-12.1, -77.1)})
    session = MapSession(fetch, poll_interval_s=0.01)

    await session.set_crew_visibility(show_crews=True, auto_update=True)
    assert not session.poller_running  # nothing loaded yet

    await session.load_crews([make_crew(1, 1)])
    assert session.poller_running
    await asyncio.sleep(0.05)
    assert fetch.calls >= 2
    assert session.crews[0].location == GeoPoint(-12.1, -77.1)

    await session.set_crew_visibility(show_crews=True, auto_update=False)
    assert not session.poller_running
    calls = fetch.calls
    await asyncio.sleep(0.03)
    assert fetch.calls == calls

    await session.close()


@pytest.mark.asyncio
async def test_hiding_crews_stops_the_poller():
    session = MapSession(FakePositions(), poll_interval_s=0.01)
    await session.load_crews([make_crew(1, 1)])
    await session.set_crew_visibility(show_crews=True, auto_update=True)
    assert session.poller_running

    await session.set_crew_visibility(show_crews=False, auto_update=True)
    assert not session.poller_running


@pytest.mark.asyncio
async def test_failing_fetch_keeps_polling():
    calls = []

    async def broken():
        calls.append(1)
        raise ConnectionError("db down")

    session = MapSession(broken, poll_interval_s=0.01)
    await session.load_crews([make_crew(1, 1)])
    await session.set_crew_visibility(show_crews=True, auto_update=True)
    await asyncio.sleep(0.05)

    assert len(calls) >= 2
    assert session.poller_running
    await session.close()


@pytest.mark.asyncio
async def test_empty_positions_leave_crews_untouched():
    session = MapSession(FakePositions({}))
    await session.load_crews([make_crew(1, 1)])
    session.show_crews = True
    before = session.crews
    await session.refresh_positions()
    assert session.crews is before
    assert session.last_update is None
