# Path: cdr_monitor/engine/derivation.py
"""
Derived Views

Pure functions over a record set: the search-filtered subset,
aggregate counters and the per-status distribution.
"""

from typing import Sequence

from ..constants import (
    STATUS_VERIFIED,
    STATUS_ERROR,
    STATUS_MISMATCH,
    STATUS_PENDING,
    ERROR_STATUSES,
    DISTRIBUTION_BUCKETS,
)
from ..models.record import Record, Stats


def is_verified(record: Record) -> bool:
    """Either the backend status or the client-side check counts."""
    return record.status == STATUS_VERIFIED or record.verified is True


def is_errored(record: Record) -> bool:
    return record.status in ERROR_STATUSES


def matches_term(record: Record, term: str) -> bool:
    """
    Case-insensitive substring match on any searchable field.

    Args:
        record: Record to test
        term: Lowercased search term
    """
    fields = [record.caller, record.callee, record.hash]
    if record.external_storage_ref:
        fields.append(record.external_storage_ref)
    return any(term in value.lower() for value in fields)


def filter_records(records: Sequence[Record], term: str) -> Sequence[Record]:
    """
    Filter records by search term.

    A blank term returns the input unchanged. Otherwise a record is kept
    when caller, callee, hash or storage reference contains the term.

    Args:
        records: Full record set
        term: Search term (any case)

    Returns:
        The input itself for a blank term, else the matching subsequence
    """
    if not term or not term.strip():
        return records

    needle = term.lower()
    return tuple(record for record in records if matches_term(record, needle))


def compute_stats(records: Sequence[Record]) -> Stats:
    """
    Count totals over the full record set.

    Returns:
        Stats with independent total/verified/with_external_storage/errors counts
    """
    return Stats(
        total=len(records),
        verified=sum(1 for record in records if is_verified(record)),
        with_external_storage=sum(1 for record in records if record.has_external_storage),
        errors=sum(1 for record in records if is_errored(record)),
    )


def status_distribution(records: Sequence[Record]) -> dict[str, int]:
    """
    Bucket every record into exactly one display status.

    Verified wins over the backend error statuses; anything else is pending.
    Bucket counts always sum to len(records).
    """
    distribution = {bucket: 0 for bucket in DISTRIBUTION_BUCKETS}

    for record in records:
        if is_verified(record):
            distribution[STATUS_VERIFIED] += 1
        elif record.status == STATUS_ERROR:
            distribution[STATUS_ERROR] += 1
        elif record.status == STATUS_MISMATCH:
            distribution[STATUS_MISMATCH] += 1
        else:
            distribution[STATUS_PENDING] += 1

    return distribution


__all__ = [
    'filter_records',
    'compute_stats',
    'status_distribution',
    'is_verified',
    'is_errored',
    'matches_term',
]
