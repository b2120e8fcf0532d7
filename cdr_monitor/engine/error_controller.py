# Path: cdr_monitor/engine/error_controller.py
"""
Transient Error Controller

Governs the visible lifetime of the fetch-failure message.

States:
- clear: no message
- active(message, deadline): message shown until the deadline

A new error while active replaces the message and restarts the
countdown; the previous auto-clear task is cancelled first.
"""

import asyncio
from typing import Optional

from ..core.logger import get_logger
from ..constants import DEFAULT_ERROR_CLEAR_DELAY, LOG_PROCESS
from .state import MonitorState

logger = get_logger(__name__, 'engine')


class TransientErrorController:
    """
    Auto-expiring error message writer for MonitorState.

    Example:
        errors = TransientErrorController(state, clear_delay=8.0)
        errors.raise_error("Backend unreachable")   # clear -> active
        errors.clear()                              # active -> clear
    """

    def __init__(self, state: MonitorState, clear_delay: float = DEFAULT_ERROR_CLEAR_DELAY):
        self.state = state
        self.clear_delay = clear_delay
        self._pending: Optional[asyncio.Task] = None
        self._deadline: Optional[float] = None

    @property
    def is_active(self) -> bool:
        return self.state.error_message is not None

    @property
    def message(self) -> Optional[str]:
        return self.state.error_message

    @property
    def deadline(self) -> Optional[float]:
        """Event-loop time at which the active message expires."""
        return self._deadline

    def raise_error(self, message: str) -> None:
        """
        Show a message and schedule its automatic removal.

        Must be called from inside the running event loop. Ignored once
        the state is closed.
        """
        self._cancel_pending()
        if self.state.closed:
            return

        loop = asyncio.get_running_loop()
        self.state.set_error(message)
        self._deadline = loop.time() + self.clear_delay
        self._pending = loop.create_task(self._expire_after(self.clear_delay))

    def clear(self) -> None:
        """Dismiss the current message (manual dismissal or new refresh cycle)."""
        self._cancel_pending()
        self.state.clear_error()

    def shutdown(self) -> None:
        """Cancel the pending auto-clear without touching state."""
        self._cancel_pending()

    async def _expire_after(self, delay: float) -> None:
        await asyncio.sleep(delay)
        logger.debug(f"{LOG_PROCESS} Error message expired after {delay:.1f}s")
        self._pending = None
        self._deadline = None
        self.state.clear_error()

    def _cancel_pending(self) -> None:
        if self._pending is not None and not self._pending.done():
            self._pending.cancel()
        self._pending = None
        self._deadline = None


__all__ = ['TransientErrorController']
