# Path: cdr_monitor/client/constants.py
"""
Backend Client Constants

HTTP-level constants for the CDR backend API.
"""

# HTTP Status Codes
HTTP_OK: int = 200
HTTP_TOO_MANY_REQUESTS: int = 429
HTTP_SERVER_ERROR: int = 500
HTTP_BAD_GATEWAY: int = 502
HTTP_SERVICE_UNAVAILABLE: int = 503
HTTP_GATEWAY_TIMEOUT: int = 504
RETRYABLE_STATUS_CODES: tuple[int, ...] = (
    HTTP_TOO_MANY_REQUESTS,
    HTTP_SERVER_ERROR,
    HTTP_BAD_GATEWAY,
    HTTP_SERVICE_UNAVAILABLE,
    HTTP_GATEWAY_TIMEOUT,
)

# Headers
HEADER_USER_AGENT: str = 'User-Agent'
HEADER_ACCEPT: str = 'Accept'
CONTENT_TYPE_JSON: str = 'application/json'

# Response body keys
KEY_RESPONSE_RECORDS: str = 'cdrs'
KEY_RESPONSE_VERIFIED: str = 'verified'

# Query parameters
PARAM_STORAGE_REF: str = 'cid'

# Retry backoff cap (seconds)
MAX_RETRY_WAIT: float = 10.0

# Error Messages
ERROR_REQUEST_FAILED: str = 'Request failed'
ERROR_INVALID_JSON: str = 'Invalid JSON response'
ERROR_INVALID_RECORDS: str = 'Record list is not a JSON array'
ERROR_MISSING_VERIFIED: str = 'Verification response has no verified flag'
