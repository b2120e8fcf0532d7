# Path: cdr_monitor/models/record.py
"""
Record Models

Call detail record (CDR) as returned by the backend, plus the
aggregate statistics derived from a record set.
"""

from dataclasses import dataclass, field, replace
from typing import Optional, Any

from ..constants import (
    KEY_CALLER,
    KEY_CALLEE,
    KEY_HASH,
    KEY_STORAGE_REF,
    KEY_STATUS,
    KEY_VERIFIED,
    KEY_TOTAL,
    KEY_WITH_EXTERNAL_STORAGE,
    KEY_ERRORS,
    RECORD_KEYS,
)


@dataclass(frozen=True)
class Record:
    """
    Call detail record.

    Attributes:
        caller: Calling party
        callee: Called party
        hash: Content fingerprint declared by the backend
        external_storage_ref: Content-addressed storage pointer (IPFS CID)
        status: Backend status ('verified', 'error', 'mismatch' or None)
        verified: Outcome of the client-side verification pass (None until annotated)
        extra: Any other backend fields, preserved untouched
    """
    caller: str = ''
    callee: str = ''
    hash: str = ''
    external_storage_ref: Optional[str] = None
    status: Optional[str] = None
    verified: Optional[bool] = None
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> 'Record':
        """
        Build a record from a backend dictionary.

        Missing string fields default to ''. Unknown keys land in extra.
        """
        verified = data.get(KEY_VERIFIED)
        storage_ref = data.get(KEY_STORAGE_REF)
        status = data.get(KEY_STATUS)
        return cls(
            caller=str(data.get(KEY_CALLER) or ''),
            callee=str(data.get(KEY_CALLEE) or ''),
            hash=str(data.get(KEY_HASH) or ''),
            external_storage_ref=str(storage_ref) if storage_ref else None,
            status=str(status) if status else None,
            verified=bool(verified) if verified is not None else None,
            extra={k: v for k, v in data.items() if k not in RECORD_KEYS},
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert back to the backend dictionary shape."""
        data = dict(self.extra)
        data.update({
            KEY_CALLER: self.caller,
            KEY_CALLEE: self.callee,
            KEY_HASH: self.hash,
            KEY_STORAGE_REF: self.external_storage_ref,
            KEY_STATUS: self.status,
            KEY_VERIFIED: self.verified,
        })
        return data

    def with_verification(self, verified: bool) -> 'Record':
        """Return a copy annotated with a verification outcome."""
        return replace(self, verified=verified)

    @property
    def has_external_storage(self) -> bool:
        return bool(self.external_storage_ref)


@dataclass(frozen=True)
class Stats:
    """
    Aggregate counters over a record set.

    Counts are independent: one record may land in several buckets.
    """
    total: int = 0
    verified: int = 0
    with_external_storage: int = 0
    errors: int = 0

    def to_dict(self) -> dict[str, int]:
        return {
            KEY_TOTAL: self.total,
            KEY_VERIFIED: self.verified,
            KEY_WITH_EXTERNAL_STORAGE: self.with_external_storage,
            KEY_ERRORS: self.errors,
        }


__all__ = ['Record', 'Stats']
