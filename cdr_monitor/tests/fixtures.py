# Path: cdr_monitor/tests/fixtures.py
"""
Test Fixtures for the CDR Monitor

Sample backend records and an in-memory backend double that implements
the client interface (list_records, verify_record, health_check) with
configurable delays and failures.
"""

import asyncio
from typing import Optional, Any, Iterable

from cdr_monitor.client.api_client import CDRClientError
from cdr_monitor.models.record import Record


def make_raw_records() -> list[dict[str, Any]]:
    """Four backend records covering every status and storage combination."""
    return [
        {'caller': 'Alice', 'callee': 'Bob', 'hash': 'aa11', 'ipfs_cid': 'QmAlpha', 'status': 'verified',
         'duration': 42},
        {'caller': 'Carol', 'callee': 'Dave', 'hash': 'bb22', 'ipfs_cid': 'QmBeta', 'status': 'error'},
        {'caller': 'Erin', 'callee': 'Frank', 'hash': 'cc33', 'status': 'mismatch'},
        {'caller': 'Grace', 'callee': 'Heidi', 'hash': 'dd44', 'ipfs_cid': 'QmGamma'},
    ]


def make_records(raw: Optional[Iterable[dict[str, Any]]] = None) -> tuple[Record, ...]:
    return tuple(Record.from_dict(item) for item in (raw if raw is not None else make_raw_records()))


class FakeBackend:
    """
    In-memory stand-in for CDRAPIClient.

    Attributes:
        responses: Queue of record lists; each list_records() call pops the
            next one (the last one repeats)
        failing_indices: Indices whose verify_record() raises
        verdicts: Per-index verify result (default True)
        list_error: Exception raised by list_records() when set
        list_delays: Queue of per-call list delays (last one repeats)
        verify_delay: Delay before each verify_record() answers
    """

    def __init__(
        self,
        records: Optional[list[dict[str, Any]]] = None,
        responses: Optional[list[list[dict[str, Any]]]] = None,
        failing_indices: Iterable[int] = (),
        verdicts: Optional[dict[int, bool]] = None,
        list_error: Optional[Exception] = None,
        list_delays: Optional[list[float]] = None,
        verify_delay: float = 0.0,
        healthy: bool = True
    ):
        if responses is None:
            responses = [records if records is not None else make_raw_records()]
        self.responses = list(responses)
        self.failing_indices = set(failing_indices)
        self.verdicts = verdicts or {}
        self.list_error = list_error
        self.list_delays = list(list_delays or [0.0])
        self.verify_delay = verify_delay
        self.healthy = healthy

        self.list_calls = 0
        self.list_completed = 0
        self.verify_calls: list[tuple[int, Optional[str]]] = []
        self.health_calls = 0

    async def list_records(self) -> list[dict[str, Any]]:
        call = self.list_calls
        self.list_calls += 1

        delay = self.list_delays[min(call, len(self.list_delays) - 1)]
        if delay:
            await asyncio.sleep(delay)

        self.list_completed += 1
        if self.list_error is not None:
            raise self.list_error

        response = self.responses[min(call, len(self.responses) - 1)]
        return [dict(item) if isinstance(item, dict) else item for item in response]

    async def verify_record(self, index: int, storage_ref: Optional[str] = None) -> bool:
        self.verify_calls.append((index, storage_ref))
        if self.verify_delay:
            await asyncio.sleep(self.verify_delay)
        if index in self.failing_indices:
            raise CDRClientError(f"verification backend failed for {index}", status=500)
        return self.verdicts.get(index, True)

    async def health_check(self) -> bool:
        self.health_calls += 1
        return self.healthy
