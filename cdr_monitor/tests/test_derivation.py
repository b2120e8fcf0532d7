# Path: cdr_monitor/tests/test_derivation.py
"""Filtering, stats and status distribution over record sets."""

from cdr_monitor.models.record import Record, Stats
from cdr_monitor.engine.derivation import filter_records, compute_stats, status_distribution
from cdr_monitor.tests.fixtures import make_records


def _two_record_scenario():
    return (
        Record(caller='A', callee='B', hash='h1', status='verified'),
        Record(caller='C', callee='D', hash='h2', status='error'),
    )


def test_blank_term_returns_input_unchanged():
    records = make_records()

    assert filter_records(records, '') is records
    assert filter_records(records, '   ') is records


def test_filter_is_case_insensitive_on_caller():
    records = _two_record_scenario()

    result = filter_records(records, 'a')

    assert list(result) == [records[0]]


def test_filter_matches_any_field():
    records = make_records()

    assert [r.caller for r in filter_records(records, 'FRANK')] == ['Erin']      # callee
    assert [r.caller for r in filter_records(records, 'bb2')] == ['Carol']       # hash
    assert [r.caller for r in filter_records(records, 'qmgam')] == ['Grace']     # storage ref
    assert [r.caller for r in filter_records(records, 'qm')] == ['Alice', 'Carol', 'Grace']


def test_filter_skips_missing_storage_ref_and_returns_empty_on_no_match():
    records = make_records()

    assert list(filter_records(records, 'none-such')) == []
    # Erin has no storage ref; must not raise
    assert [r.caller for r in filter_records(records, 'erin')] == ['Erin']


def test_filter_preserves_order():
    records = make_records()

    result = filter_records(records, 'O')

    assert [r.caller for r in result] == ['Alice', 'Carol']


def test_stats_of_empty_set_are_zero():
    assert compute_stats(()) == Stats(total=0, verified=0, with_external_storage=0, errors=0)


def test_stats_scenario():
    stats = compute_stats(_two_record_scenario())

    assert stats.to_dict() == {'total': 2, 'verified': 1, 'withExternalStorage': 0, 'errors': 1}


def test_verified_counts_status_or_flag():
    records = (
        Record(caller='x', callee='y', hash='1', status='verified'),
        Record(caller='x', callee='y', hash='2', verified=True),
        Record(caller='x', callee='y', hash='3', verified=False),
    )

    assert compute_stats(records).verified == 2


def test_stats_buckets_are_independent():
    records = (
        Record(caller='x', callee='y', hash='1', external_storage_ref='Qm1', status='mismatch', verified=True),
        Record(caller='x', callee='y', hash='2', external_storage_ref=''),
    )

    stats = compute_stats(records)

    assert stats.total == 2
    assert stats.verified == 1
    assert stats.with_external_storage == 1
    assert stats.errors == 1


def test_status_distribution_sums_to_total():
    records = make_records()

    distribution = status_distribution(records)

    assert distribution == {'verified': 1, 'error': 1, 'mismatch': 1, 'pending': 1}
    assert sum(distribution.values()) == len(records)


def test_status_distribution_prefers_verified_flag():
    records = (Record(hash='1', status='error', verified=True), Record(hash='2', status='pending'))

    assert status_distribution(records) == {'verified': 1, 'error': 0, 'mismatch': 0, 'pending': 1}
