# Path: cdr_monitor/constants.py
"""
CDR Monitor Constants

Module-wide constants for record synchronization and verification.
Client-specific constants go in client/constants.py
"""

# Record Status Values (as reported by the backend)
STATUS_VERIFIED: str = 'verified'
STATUS_ERROR: str = 'error'
STATUS_MISMATCH: str = 'mismatch'
STATUS_PENDING: str = 'pending'
ERROR_STATUSES: tuple[str, ...] = (STATUS_ERROR, STATUS_MISMATCH)

# Status distribution buckets (chart data)
DISTRIBUTION_BUCKETS: tuple[str, ...] = (
    STATUS_VERIFIED,
    STATUS_ERROR,
    STATUS_MISMATCH,
    STATUS_PENDING,
)

# Record Dictionary Keys (backend wire format)
KEY_CALLER: str = 'caller'
KEY_CALLEE: str = 'callee'
KEY_HASH: str = 'hash'
KEY_STORAGE_REF: str = 'ipfs_cid'
KEY_STATUS: str = 'status'
KEY_VERIFIED: str = 'verified'
RECORD_KEYS: tuple[str, ...] = (
    KEY_CALLER,
    KEY_CALLEE,
    KEY_HASH,
    KEY_STORAGE_REF,
    KEY_STATUS,
    KEY_VERIFIED,
)

# Stats Dictionary Keys
KEY_TOTAL: str = 'total'
KEY_WITH_EXTERNAL_STORAGE: str = 'withExternalStorage'
KEY_ERRORS: str = 'errors'

# Timing defaults (seconds)
DEFAULT_REFRESH_INTERVAL: float = 20.0
DEFAULT_ERROR_CLEAR_DELAY: float = 8.0

# User-facing messages
MSG_FETCH_FAILED: str = 'Failed to fetch CDR data. Please check if the backend is running.'

# IPO Logging Prefixes
LOG_INPUT: str = '[INPUT]'
LOG_PROCESS: str = '[PROCESS]'
LOG_OUTPUT: str = '[OUTPUT]'

# Logging Components
LOGGER_ROOT: str = 'cdr_monitor'
LOGGER_CORE: str = 'cdr_monitor.core'
LOGGER_ENGINE: str = 'cdr_monitor.engine'
LOGGER_CLIENT: str = 'cdr_monitor.client'
LOGGER_CLI: str = 'cdr_monitor.cli'

# Log Format
LOG_FORMAT: str = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_DATE_FORMAT: str = '%Y-%m-%d %H:%M:%S'

# Log Files
LOG_FILE_ACTIVITY: str = 'monitor_activity.log'
LOG_FILE_API: str = 'api_calls.log'
LOG_FILE_ERRORS: str = 'errors.log'
