# Path: cdr_monitor/client/api_client.py
"""
CDR Backend API Client

Async HTTP client for the CDR record store and verification engine.
Wraps the two remote operations the monitor depends on (list records,
verify one record) plus a health check, with retry logic.
"""

import asyncio
from typing import Optional, Any
import aiohttp
from tenacity import (
    AsyncRetrying,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception,
)

from ..core.config_loader import ConfigLoader
from ..core.logger import get_logger
from ..constants import LOG_INPUT, LOG_PROCESS, LOG_OUTPUT
from .constants import (
    HTTP_OK,
    RETRYABLE_STATUS_CODES,
    HEADER_USER_AGENT,
    HEADER_ACCEPT,
    CONTENT_TYPE_JSON,
    KEY_RESPONSE_RECORDS,
    KEY_RESPONSE_VERIFIED,
    PARAM_STORAGE_REF,
    MAX_RETRY_WAIT,
    ERROR_REQUEST_FAILED,
    ERROR_INVALID_JSON,
    ERROR_INVALID_RECORDS,
    ERROR_MISSING_VERIFIED,
)

logger = get_logger(__name__, 'client')


class CDRClientError(Exception):
    """Transport or server failure talking to the CDR backend."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class CDRResponseError(CDRClientError):
    """Backend answered, but the payload is not what the monitor expects."""
    pass


def _is_retryable(error: BaseException) -> bool:
    """Transient transport errors and throttling/server statuses are retried."""
    if isinstance(error, aiohttp.ClientResponseError):
        return error.status in RETRYABLE_STATUS_CODES
    return isinstance(error, (aiohttp.ClientError, asyncio.TimeoutError))


class CDRAPIClient:
    """
    Async HTTP client for the CDR backend.

    Features:
    - Record listing and per-record verification
    - Automatic retry with exponential backoff (tenacity)
    - Timeout handling
    - Health check that never raises

    Example:
        async with CDRAPIClient() as client:
            raw = await client.list_records()
            ok = await client.verify_record(0, raw[0].get('ipfs_cid'))
    """

    def __init__(
        self,
        config: Optional[ConfigLoader] = None,
        base_url: Optional[str] = None,
        retry_attempts: Optional[int] = None,
        retry_delay: Optional[float] = None
    ):
        """
        Initialize backend API client.

        Args:
            config: Optional ConfigLoader instance
            base_url: Override for the configured backend URL
            retry_attempts: Override for total attempts per request
            retry_delay: Override for the backoff multiplier (seconds)
        """
        self.config = config if config else ConfigLoader()

        self.base_url = (base_url or self.config.get('api_base_url')).rstrip('/')
        self.records_path = self.config.get('api_records_path')
        self.verify_path = self.config.get('api_verify_path')
        self.health_path = self.config.get('api_health_path')
        self.timeout = self.config.get('api_timeout')
        self.user_agent = self.config.get('user_agent')
        self.retry_attempts = retry_attempts if retry_attempts is not None else \
            self.config.get('api_retry_attempts')
        self.retry_delay = retry_delay if retry_delay is not None else \
            self.config.get('api_retry_delay')

        # Session (created on first use)
        self._session: Optional[aiohttp.ClientSession] = None

    async def __aenter__(self) -> 'CDRAPIClient':
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                headers={
                    HEADER_USER_AGENT: self.user_agent,
                    HEADER_ACCEPT: CONTENT_TYPE_JSON,
                },
                timeout=aiohttp.ClientTimeout(total=self.timeout)
            )
        return self._session

    async def close(self) -> None:
        """Close HTTP session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def list_records(self) -> list[dict[str, Any]]:
        """
        Fetch the current record set.

        Returns:
            List of raw record dictionaries (empty when the backend omits the key)

        Raises:
            CDRClientError: Transport or server failure
            CDRResponseError: Body is not a JSON object with a record array
        """
        logger.debug(f"{LOG_INPUT} Listing records")

        data = await self.get_json(self.records_path)
        if not isinstance(data, dict):
            raise CDRResponseError(ERROR_INVALID_RECORDS)

        records = data.get(KEY_RESPONSE_RECORDS) or []
        if not isinstance(records, list):
            raise CDRResponseError(ERROR_INVALID_RECORDS)

        logger.debug(f"{LOG_OUTPUT} Received {len(records)} records")
        return records

    async def verify_record(self, index: int, storage_ref: Optional[str] = None) -> bool:
        """
        Ask the backend to verify one record.

        Args:
            index: Position of the record in the fetched sequence
            storage_ref: External storage pointer, sent when present

        Returns:
            Backend verification verdict

        Raises:
            CDRClientError: Transport or server failure
            CDRResponseError: Body lacks the verified flag
        """
        params = {PARAM_STORAGE_REF: storage_ref} if storage_ref else None
        data = await self.get_json(f"{self.verify_path}/{index}", params=params)

        if not isinstance(data, dict) or KEY_RESPONSE_VERIFIED not in data:
            raise CDRResponseError(ERROR_MISSING_VERIFIED)

        return bool(data[KEY_RESPONSE_VERIFIED])

    async def health_check(self) -> bool:
        """
        Check backend health.

        Returns:
            True if the health endpoint answers 200, False otherwise
        """
        url = f"{self.base_url}{self.health_path}"
        session = await self._get_session()

        try:
            async with session.get(url) as response:
                healthy = response.status == HTTP_OK
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.warning(f"Health check failed: {e}")
            return False

        logger.debug(f"{LOG_OUTPUT} Health check: {'ok' if healthy else 'unhealthy'}")
        return healthy

    async def get_json(self, path: str, params: Optional[dict[str, str]] = None) -> Any:
        """
        GET request returning JSON data, retried on transient failures.

        Args:
            path: Path relative to base_url
            params: Optional query parameters

        Returns:
            Parsed JSON body

        Raises:
            CDRClientError: If request fails after retries
            CDRResponseError: If body is not valid JSON
        """
        url = f"{self.base_url}{path}"
        logger.debug(f"{LOG_INPUT} GET {url}")

        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(self.retry_attempts),
                wait=wait_exponential(multiplier=self.retry_delay, max=MAX_RETRY_WAIT),
                retry=retry_if_exception(_is_retryable),
                reraise=True
            ):
                with attempt:
                    if attempt.retry_state.attempt_number > 1:
                        logger.warning(
                            f"{LOG_PROCESS} Retrying {url} "
                            f"(attempt {attempt.retry_state.attempt_number}/{self.retry_attempts})"
                        )
                    return await self._request_json(url, params)
        except aiohttp.ClientResponseError as e:
            logger.error(f"{ERROR_REQUEST_FAILED}: {url} -> {e.status}")
            raise CDRClientError(f"{ERROR_REQUEST_FAILED}: {e.status} {e.message}", status=e.status) from e
        except asyncio.TimeoutError as e:
            logger.error(f"Request timeout: {url}")
            raise CDRClientError(f"{ERROR_REQUEST_FAILED}: timeout") from e
        except aiohttp.ClientError as e:
            logger.error(f"{ERROR_REQUEST_FAILED}: {url} -> {e}")
            raise CDRClientError(f"{ERROR_REQUEST_FAILED}: {e}") from e

    async def _request_json(self, url: str, params: Optional[dict[str, str]]) -> Any:
        """Single HTTP attempt."""
        session = await self._get_session()

        async with session.get(url, params=params) as response:
            logger.debug(f"{LOG_PROCESS} Response: {response.status}")
            response.raise_for_status()

            try:
                return await response.json(content_type=None)
            except ValueError as e:
                logger.error(f"{ERROR_INVALID_JSON}: {e}")
                raise CDRResponseError(f"{ERROR_INVALID_JSON}: {e}") from e


__all__ = ['CDRAPIClient', 'CDRClientError', 'CDRResponseError']
