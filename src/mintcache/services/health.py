"""HealthMonitor — supervised background task that probes the database and RPC.

Connection failures are recorded as structured state instead of only being
logged, so the API and the CLI can report them.
"""

import asyncio
import logging
import time
from typing import Awaitable, Callable

from pydantic import BaseModel

logger = logging.getLogger(__name__)

HealthCheck = Callable[[], Awaitable[object]]


class ComponentHealth(BaseModel):
    ok: bool
    error: str | None = None


class HealthStatus(BaseModel):
    healthy: bool
    running: bool
    last_checked: int | None = None
    components: dict[str, ComponentHealth] = {}
    error: str | None = None  # Set when the monitor task itself died


class HealthMonitor:
    def __init__(
        self,
        checks: dict[str, HealthCheck],
        interval: float = 30.0,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._checks = checks
        self._interval = interval
        self._clock = clock
        self._task: asyncio.Task | None = None
        self._components: dict[str, ComponentHealth] = {}
        self._last_checked: int | None = None
        self._crash: str | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def status(self) -> HealthStatus:
        healthy = (
            self._crash is None
            and bool(self._components)
            and all(c.ok for c in self._components.values())
        )
        return HealthStatus(
            healthy=healthy,
            running=self.running,
            last_checked=self._last_checked,
            components=dict(self._components),
            error=self._crash,
        )

    async def check_once(self) -> HealthStatus:
        """Run every probe once and record the outcome."""
        for name, check in self._checks.items():
            try:
                await check()
            except Exception as exc:
                logger.warning("Health check %s failed: %s", name, exc)
                self._components[name] = ComponentHealth(ok=False, error=str(exc) or type(exc).__name__)
            else:
                self._components[name] = ComponentHealth(ok=True)
        self._last_checked = int(self._clock())
        return self.status

    async def _run(self) -> None:
        while True:
            await self.check_once()
            await asyncio.sleep(self._interval)

    def _on_done(self, task: asyncio.Task) -> None:
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Health monitor stopped unexpectedly", exc_info=exc)
            self._crash = f"{type(exc).__name__}: {exc}"

    def start(self) -> None:
        if self.running:
            return
        self._crash = None
        self._task = asyncio.create_task(self._run(), name="mintcache-health-monitor")
        self._task.add_done_callback(self._on_done)

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None or task.done():
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
