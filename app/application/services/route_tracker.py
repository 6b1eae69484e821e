"""RouteTracker — periodically log the position of one crew.

Only one crew is tracked at a time; starting a new session stops the
previous one first.
"""

from __future__ import annotations

import asyncio
import functools
import logging
from collections.abc import Awaitable, Callable
from datetime import datetime

from app.application.services.periodic import PeriodicJob
from app.domain.entities.crew import Crew
from app.domain.entities.crew_route_log import CrewRouteLog
from app.domain.exceptions import ValidationError

logger = logging.getLogger(__name__)


class RouteTracker:
    def __init__(
        self,
        record: Callable[[CrewRouteLog], Awaitable[None]],
        crew_lookup: Callable[[int], Crew | None] | None = None,
        interval_s: float = 5.0,
    ):
        self._record = record
        self._lookup = crew_lookup
        self._interval = interval_s
        self._job: PeriodicJob | None = None
        self._crew: Crew | None = None
        # Serializes start/stop so a restart never leaves two timers alive
        self._lock = asyncio.Lock()

    @property
    def active_crew(self) -> Crew | None:
        return self._crew if self.is_active else None

    @property
    def is_active(self) -> bool:
        return self._job is not None and self._job.is_running

    async def start(self, crew: Crew) -> None:
        if not crew.has_location():
            raise ValidationError([f"Crew {crew.code} has no coordinates"])

        async with self._lock:
            previous = self._crew
            if self._job is not None:
                logger.info(
                    "Tracking already active for %s, stopping it first",
                    previous.code if previous else "?",
                )
                await self._stop_current()

            self._crew = crew
            self._job = PeriodicJob(
                f"route-tracking-{crew.code}",
                self._interval,
                functools.partial(self._record_position, crew),
            )
            self._job.start()

    async def stop(self) -> Crew | None:
        async with self._lock:
            return await self._stop_current()

    async def _stop_current(self) -> Crew | None:
        job, crew = self._job, self._crew
        self._job = None
        self._crew = None
        if job is not None:
            await job.stop()
            logger.info("Route tracking stopped for %s", crew.code if crew else "?")
        return crew

    def _current_position(self, crew: Crew) -> Crew:
        # Prefer the freshest coordinates the poller has seen
        if self._lookup is not None:
            latest = self._lookup(crew.id)
            if latest is not None and latest.has_location():
                return latest
        return crew

    async def _record_position(self, tracked: Crew) -> None:
        crew = self._current_position(tracked)
        now = datetime.now()
        log = CrewRouteLog(
            id=None,
            crew_id=crew.id,
            day=now.date(),
            at=now.time().replace(microsecond=0),
            location=crew.location,
        )
        await self._record(log)
        logger.info(
            "Recorded position of crew %s (%f, %f)",
            crew.code, crew.location.latitude, crew.location.longitude,
        )
