# Path: cdr_monitor/tests/test_state.py
"""Derived views held by MonitorState."""

from cdr_monitor.engine.state import MonitorState
from cdr_monitor.tests.fixtures import make_records


def test_distribution_follows_search_term_but_stats_do_not():
    state = MonitorState(search_term='carol')
    state.publish_records(make_records())

    assert len(state.filtered_records) == 1
    assert state.distribution == {'verified': 0, 'error': 1, 'mismatch': 0, 'pending': 0}
    assert sum(state.distribution.values()) == len(state.filtered_records)
    assert state.stats.total == 4


def test_distribution_recomputed_when_search_term_changes():
    state = MonitorState()
    state.publish_records(make_records())
    assert sum(state.distribution.values()) == 4

    state.set_search_term('qm')
    assert state.distribution == {'verified': 1, 'error': 1, 'mismatch': 0, 'pending': 1}

    state.set_search_term('   ')
    assert sum(state.distribution.values()) == 4


def test_writes_after_close_are_ignored():
    state = MonitorState()
    state.close()

    state.publish_records(make_records())
    state.set_error('late')

    assert state.records == ()
    assert state.error_message is None
