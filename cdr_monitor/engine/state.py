# Path: cdr_monitor/engine/state.py
"""
Monitor State

The single state aggregate shared between the orchestrator and the
presentation layer. Derived views are recomputed on every mutation of
their inputs, so readers never observe a stale filter or stats.
"""

from datetime import datetime
from typing import Optional, Any, Sequence

from ..models.record import Record, Stats
from .derivation import filter_records, compute_stats, status_distribution


class MonitorState:
    """
    Owned state for one monitor instance.

    Readers use the properties; the orchestrator and error controller
    use the mutators. After close() every mutator is a no-op, so work
    still in flight at teardown cannot resurrect the state.
    """

    def __init__(self, search_term: str = ''):
        self._records: tuple[Record, ...] = ()
        self._search_term: str = search_term
        self._filtered: Sequence[Record] = ()
        self._stats: Stats = Stats()
        self._distribution: dict[str, int] = status_distribution(())
        self._loading: bool = False
        self._error_message: Optional[str] = None
        self._last_refresh: Optional[datetime] = None
        self._last_attempt: Optional[datetime] = None
        self._healthy: Optional[bool] = None
        self._closed: bool = False

    # ------------------------------------------------------------------
    # Read interface
    # ------------------------------------------------------------------

    @property
    def records(self) -> tuple[Record, ...]:
        return self._records

    @property
    def filtered_records(self) -> Sequence[Record]:
        return self._filtered

    @property
    def stats(self) -> Stats:
        return self._stats

    @property
    def distribution(self) -> dict[str, int]:
        return dict(self._distribution)

    @property
    def search_term(self) -> str:
        return self._search_term

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def error_message(self) -> Optional[str]:
        return self._error_message

    @property
    def last_refresh(self) -> Optional[datetime]:
        """Completion time of the last successful fetch cycle."""
        return self._last_refresh

    @property
    def last_attempt(self) -> Optional[datetime]:
        """Completion time of the last fetch cycle, successful or not."""
        return self._last_attempt

    @property
    def healthy(self) -> Optional[bool]:
        return self._healthy

    @property
    def closed(self) -> bool:
        return self._closed

    def snapshot(self) -> dict[str, Any]:
        """Plain-data projection for the presentation layer."""
        return {
            'records': [record.to_dict() for record in self._records],
            'filtered_records': [record.to_dict() for record in self._filtered],
            'stats': self._stats.to_dict(),
            'distribution': dict(self._distribution),
            'search_term': self._search_term,
            'loading': self._loading,
            'error': self._error_message,
            'last_refresh': self._last_refresh.isoformat() if self._last_refresh else None,
            'last_attempt': self._last_attempt.isoformat() if self._last_attempt else None,
            'healthy': self._healthy,
        }

    # ------------------------------------------------------------------
    # Update interface
    # ------------------------------------------------------------------

    def publish_records(self, records: Sequence[Record], refreshed_at: Optional[datetime] = None) -> None:
        """Replace the whole record set and recompute every derived view."""
        if self._closed:
            return
        self._records = tuple(records)
        self._last_refresh = refreshed_at or datetime.now()
        self._stats = compute_stats(self._records)
        self._refilter()

    def set_search_term(self, term: str) -> None:
        if self._closed:
            return
        self._search_term = term
        self._refilter()

    def set_loading(self, loading: bool) -> None:
        if self._closed:
            return
        self._loading = loading

    def set_error(self, message: str) -> None:
        if self._closed:
            return
        self._error_message = message

    def clear_error(self) -> None:
        if self._closed:
            return
        self._error_message = None

    def mark_attempt(self, attempted_at: Optional[datetime] = None) -> None:
        if self._closed:
            return
        self._last_attempt = attempted_at or datetime.now()

    def set_health(self, healthy: bool) -> None:
        if self._closed:
            return
        self._healthy = healthy

    def close(self) -> None:
        self._closed = True

    def _refilter(self) -> None:
        self._filtered = filter_records(self._records, self._search_term)
        self._distribution = status_distribution(self._filtered)


__all__ = ['MonitorState']
