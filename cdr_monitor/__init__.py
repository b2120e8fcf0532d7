# Path: cdr_monitor/__init__.py
"""
CDR Monitor

Polls a CDR backend, re-verifies every record against the backend's
verification engine and keeps a continuously refreshed, filterable
view with aggregate statistics.
"""

__version__ = '1.0.0'

from .core import ConfigLoader, get_logger, configure_logging
from .models import Record, Stats
from .client import CDRAPIClient, CDRClientError, CDRResponseError
from .engine import (
    MonitorOrchestrator,
    MonitorState,
    RecordVerifier,
    TransientErrorController,
    filter_records,
    compute_stats,
    status_distribution,
)

__all__ = [
    'ConfigLoader',
    'get_logger',
    'configure_logging',
    'Record',
    'Stats',
    'CDRAPIClient',
    'CDRClientError',
    'CDRResponseError',
    'MonitorOrchestrator',
    'MonitorState',
    'RecordVerifier',
    'TransientErrorController',
    'filter_records',
    'compute_stats',
    'status_distribution',
]
