# Path: cdr_monitor/engine/orchestrator.py
"""
Monitor Orchestrator

Drives the refresh cycle: fetch the record set, verify every record,
publish the annotated set into MonitorState.

Architecture:
- refresh() is the single code path for timer ticks and manual refreshes
- Overlapping refreshes are allowed; the last one to publish wins
- A fetch failure keeps the previous records and raises a transient error
- The timer is a task that spawns one refresh per tick
- stop() cancels the timer, lets in-flight refreshes finish, closes state
"""

import asyncio
from datetime import datetime
from typing import Optional, Protocol, Any

from ..core.config_loader import ConfigLoader
from ..core.logger import get_logger
from ..constants import (
    LOG_INPUT,
    LOG_PROCESS,
    LOG_OUTPUT,
    MSG_FETCH_FAILED,
)
from ..models.record import Record
from .verifier import RecordVerifier
from .state import MonitorState
from .error_controller import TransientErrorController

logger = get_logger(__name__, 'engine')


class MonitorBackend(Protocol):
    """Backend operations the orchestrator relies on."""

    async def list_records(self) -> list[dict[str, Any]]:
        ...

    async def verify_record(self, index: int, storage_ref: Optional[str] = None) -> bool:
        ...

    async def health_check(self) -> bool:
        ...


class MonitorOrchestrator:
    """
    Owns the refresh timer and publishes verified record sets.

    Example:
        async with CDRAPIClient() as client:
            async with MonitorOrchestrator(client) as monitor:
                await asyncio.sleep(60)
                print(monitor.state.stats)

        # Manual refresh
        await monitor.refresh()
    """

    def __init__(
        self,
        client: MonitorBackend,
        config: Optional[ConfigLoader] = None,
        state: Optional[MonitorState] = None,
        refresh_interval: Optional[float] = None,
        error_clear_delay: Optional[float] = None,
        max_concurrent_verifications: Optional[int] = None
    ):
        """
        Initialize orchestrator.

        Args:
            client: Backend client (list_records, verify_record, health_check)
            config: Optional ConfigLoader instance
            state: Shared state aggregate (a fresh one if None)
            refresh_interval: Seconds between timer ticks (from config if None)
            error_clear_delay: Seconds a fetch error stays visible (from config if None)
            max_concurrent_verifications: Verification cap, 0 = unlimited (from config if None)
        """
        self.config = config if config else ConfigLoader()
        self.client = client
        self.state = state if state is not None else MonitorState()

        self.refresh_interval = refresh_interval if refresh_interval is not None else \
            self.config.get('refresh_interval')
        clear_delay = error_clear_delay if error_clear_delay is not None else \
            self.config.get('error_clear_delay')
        max_concurrent = max_concurrent_verifications if max_concurrent_verifications is not None else \
            self.config.get('max_concurrent_verifications')

        if self.refresh_interval <= 0:
            raise ValueError("refresh_interval must be positive")

        self.verifier = RecordVerifier(client, max_concurrent=max_concurrent)
        self.errors = TransientErrorController(self.state, clear_delay=clear_delay)

        self._timer: Optional[asyncio.Task] = None
        self._in_flight: set[asyncio.Task] = set()

    async def __aenter__(self) -> 'MonitorOrchestrator':
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.stop()

    @property
    def running(self) -> bool:
        return self._timer is not None and not self._timer.done()

    async def refresh(self) -> None:
        """
        Run one fetch-then-verify cycle.

        Never raises for backend failures: a failed fetch keeps the
        previous record set and surfaces a transient error instead.
        """
        logger.info(f"{LOG_INPUT} Refresh cycle started")
        self.state.set_loading(True)
        self.errors.clear()

        try:
            try:
                raw_records = await self.client.list_records()
                records = [Record.from_dict(item) for item in raw_records]
            except Exception as e:
                logger.error(f"Error fetching CDRs: {e}")
                self.errors.raise_error(MSG_FETCH_FAILED)
                return

            logger.info(f"{LOG_PROCESS} Fetched {len(records)} records, verifying")
            verified = await self.verifier.verify(records)

            self.state.publish_records(verified, refreshed_at=datetime.now())
            logger.info(
                f"{LOG_OUTPUT} Published {len(verified)} records "
                f"({self.state.stats.verified} verified)"
            )
        finally:
            self.state.mark_attempt(datetime.now())
            self.state.set_loading(False)

    async def check_health(self) -> bool:
        """Check backend health and record the result in state."""
        healthy = await self.client.health_check()
        self.state.set_health(healthy)
        return healthy

    def set_search_term(self, term: str) -> None:
        self.state.set_search_term(term)

    def dismiss_error(self) -> None:
        self.errors.clear()

    async def start(self) -> None:
        """Refresh immediately, then on every interval until stop()."""
        if self.running:
            return
        if self.state.closed:
            raise RuntimeError("Monitor state is closed; create a new orchestrator")

        logger.info(f"{LOG_INPUT} Starting monitor (interval {self.refresh_interval:.1f}s)")
        self._spawn_tick()
        self._timer = asyncio.create_task(self._run_timer())

    async def stop(self) -> None:
        """
        Tear down: cancel the timer and pending auto-clear, close state,
        then wait for in-flight work to run to completion.
        """
        if self._timer is not None:
            self._timer.cancel()
            try:
                await self._timer
            except asyncio.CancelledError:
                pass
            self._timer = None

        self.errors.shutdown()
        self.state.close()

        await self.wait_idle()
        logger.info(f"{LOG_OUTPUT} Monitor stopped")

    async def wait_idle(self) -> None:
        """Wait until every spawned refresh and health check has settled."""
        while self._in_flight:
            await asyncio.gather(*list(self._in_flight), return_exceptions=True)

    async def _run_timer(self) -> None:
        while True:
            await asyncio.sleep(self.refresh_interval)
            self._spawn_tick()

    def _spawn_tick(self) -> None:
        self._spawn(self.refresh())
        self._spawn(self.check_health())

    def _spawn(self, coro) -> asyncio.Task:
        task = asyncio.create_task(coro)
        self._in_flight.add(task)
        task.add_done_callback(self._on_task_done)
        return task

    def _on_task_done(self, task: asyncio.Task) -> None:
        self._in_flight.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.error(f"Background task failed: {task.exception()!r}")


__all__ = ['MonitorOrchestrator', 'MonitorBackend']
