# Path: cdr_monitor/tests/test_record.py
"""Record parsing from backend dictionaries."""

from cdr_monitor.models.record import Record


def test_from_dict_maps_known_keys_and_keeps_extras():
    record = Record.from_dict({
        'caller': 'Alice', 'callee': 'Bob', 'hash': 'aa11',
        'ipfs_cid': 'QmAlpha', 'status': 'verified', 'duration': 42,
    })

    assert record.external_storage_ref == 'QmAlpha'
    assert record.status == 'verified'
    assert record.verified is None
    assert record.extra == {'duration': 42}
    assert record.to_dict()['duration'] == 42


def test_from_dict_tolerates_missing_and_empty_fields():
    record = Record.from_dict({'hash': 'x', 'ipfs_cid': '', 'status': None})

    assert record.caller == ''
    assert record.callee == ''
    assert record.external_storage_ref is None
    assert record.status is None
    assert not record.has_external_storage


def test_with_verification_returns_annotated_copy():
    record = Record.from_dict({'caller': 'A', 'callee': 'B', 'hash': 'h1'})

    annotated = record.with_verification(True)

    assert annotated.verified is True
    assert record.verified is None
    assert annotated.hash == record.hash
