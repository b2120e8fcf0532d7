# Path: cdr_monitor/engine/verifier.py
"""
Record Verifier

Re-verifies every record of a freshly fetched set against the backend.

Architecture:
- One verification call per record, all issued concurrently
- Each call wrapped so its failure becomes verified=False
- Join only once every call has settled; order and length preserved
"""

import asyncio
from typing import Optional, Protocol, Sequence

from ..core.logger import get_logger
from ..constants import LOG_INPUT, LOG_OUTPUT
from ..models.record import Record

logger = get_logger(__name__, 'engine')


class VerificationBackend(Protocol):
    """The part of the API client the verifier depends on."""

    async def verify_record(self, index: int, storage_ref: Optional[str] = None) -> bool:
        ...


class RecordVerifier:
    """
    Annotates records with the backend's verification verdict.

    Example:
        verifier = RecordVerifier(client)
        annotated = await verifier.verify(records)
    """

    def __init__(self, client: VerificationBackend, max_concurrent: int = 0):
        """
        Initialize verifier.

        Args:
            client: Object exposing verify_record(index, storage_ref)
            max_concurrent: Cap on in-flight calls (0 = unlimited)
        """
        self.client = client
        self.max_concurrent = max_concurrent

    async def verify(self, records: Sequence[Record]) -> tuple[Record, ...]:
        """
        Verify every record concurrently.

        Args:
            records: Records in fetch order

        Returns:
            Annotated records, same order and length as the input
        """
        if not records:
            return ()

        logger.debug(f"{LOG_INPUT} Verifying {len(records)} records")

        semaphore = asyncio.Semaphore(self.max_concurrent) if self.max_concurrent > 0 else None
        results = await asyncio.gather(
            *(self._verify_one(index, record, semaphore) for index, record in enumerate(records))
        )

        failed = sum(1 for record in results if not record.verified)
        logger.debug(f"{LOG_OUTPUT} Verification settled: {len(results) - failed} ok, {failed} not verified")
        return tuple(results)

    async def _verify_one(
        self,
        index: int,
        record: Record,
        semaphore: Optional[asyncio.Semaphore]
    ) -> Record:
        """Verify a single record, converting any failure into verified=False."""
        try:
            if semaphore is None:
                verdict = await self.client.verify_record(index, record.external_storage_ref)
            else:
                async with semaphore:
                    verdict = await self.client.verify_record(index, record.external_storage_ref)
        except Exception as e:
            logger.warning(f"Verification failed for record {index}: {e}")
            return record.with_verification(False)

        return record.with_verification(bool(verdict))


__all__ = ['RecordVerifier', 'VerificationBackend']
