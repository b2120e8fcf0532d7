"""Engine Module - Verification, derivation, state and refresh orchestration"""

from .verifier import RecordVerifier
from .derivation import filter_records, compute_stats, status_distribution
from .state import MonitorState
from .error_controller import TransientErrorController
from .orchestrator import MonitorOrchestrator

__all__ = [
    'RecordVerifier',
    'filter_records',
    'compute_stats',
    'status_distribution',
    'MonitorState',
    'TransientErrorController',
    'MonitorOrchestrator',
]
