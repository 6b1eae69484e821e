"""PeriodicJob — run an async action on a fixed interval until stopped."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Awaitable, Callable

logger = logging.getLogger(__name__)


class PeriodicJob:
    """Fire *action* immediately, then every *interval_s* seconds.

    A failing tick is logged and the job keeps going.
    """

    def __init__(self, name: str, interval_s: float, action: Callable[[], Awaitable[None]]):
        self.name = name
        self._interval = interval_s
        self._action = action
        self._task: asyncio.Task | None = None

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.is_running:
            return
        self._task = asyncio.get_running_loop().create_task(self._run(), name=self.name)
        logger.info("Started %s (every %.1fs)", self.name, self._interval)

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None or task.done():
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
        logger.info("Stopped %s", self.name)

    async def _run(self) -> None:
        while True:
            try:
                await self._action()
            except Exception:
                logger.exception("%s tick failed", self.name)
            await asyncio.sleep(self._interval)
