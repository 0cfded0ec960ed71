"""Catalogue View State — tests for sequence-numbered request reconciliation.

Tests cover:
    - begin() issues increasing sequence numbers and enters LOADING
    - In-order responses are applied; older responses are discarded
    - Failures clear the previous result and record the error
    - Phase stays LOADING while a newer request is outstanding
    - Unknown sequence numbers are rejected
"""

import pytest

from seatfinder.core.domain_types import ViewPhase
from seatfinder.core.errors import SourceTimeoutError, SourceUnavailableError
from seatfinder.core.filter_state import FilterState
from seatfinder.core.resolve import resolve
from seatfinder.core.view_state import CatalogueViewState


CSE = FilterState(branch="CSE")
ECE = FilterState(branch="ECE")


def _result(make_record, branch):
    return resolve([make_record("1", branch_code=branch)], FilterState(branch=branch))


def test_initial_state_is_idle():
    state = CatalogueViewState()
    assert state.phase == ViewPhase.IDLE
    assert state.issued_seq == 0
    assert state.result is None
    assert not state.pending


def test_begin_issues_increasing_sequences():
    state = CatalogueViewState()
    assert state.begin(CSE) == 1
    assert state.begin(ECE) == 2
    assert state.phase == ViewPhase.LOADING
    assert state.filter_state == ECE
    assert state.pending


def test_in_order_response_is_applied(make_record):
    state = CatalogueViewState()
    seq = state.begin(CSE)
    result = _result(make_record, "CSE")
    assert state.accept_result(seq, CSE, result)
    assert state.phase == ViewPhase.READY
    assert state.result == result
    assert state.applied_filter == CSE
    assert state.applied_seq == 1


def test_late_response_for_older_request_is_discarded(make_record):
    state = CatalogueViewState()
    first = state.begin(CSE)
    second = state.begin(ECE)
    ece = _result(make_record, "ECE")

    assert state.accept_result(second, ECE, ece)
    assert not state.accept_result(first, CSE, _result(make_record, "CSE"))

    assert state.result == ece
    assert state.applied_filter == ECE
    assert state.discarded == 1
    assert state.phase == ViewPhase.READY


def test_older_response_arriving_first_is_shown_while_newer_pending(make_record):
    state = CatalogueViewState()
    first = state.begin(CSE)
    second = state.begin(ECE)

    assert state.accept_result(first, CSE, _result(make_record, "CSE"))
    assert state.phase == ViewPhase.LOADING

    assert state.accept_result(second, ECE, _result(make_record, "ECE"))
    assert state.phase == ViewPhase.READY
    assert state.applied_seq == 2


def test_failure_clears_previous_result(make_record):
    state = CatalogueViewState()
    state.accept_result(state.begin(CSE), CSE, _result(make_record, "CSE"))

    seq = state.begin(ECE)
    assert state.accept_failure(seq, ECE, SourceUnavailableError("boom", "network"))

    assert state.phase == ViewPhase.FAILED
    assert state.result is None
    assert state.error["code"] == "SOURCE_UNAVAILABLE"
    assert state.error["message"] == "Failed to load data. Please try again."


def test_stale_failure_is_discarded(make_record):
    state = CatalogueViewState()
    first = state.begin(CSE)
    second = state.begin(ECE)
    ece = _result(make_record, "ECE")
    state.accept_result(second, ECE, ece)

    assert not state.accept_failure(first, CSE, SourceTimeoutError(2.0))
    assert state.result == ece
    assert state.error is None


def test_success_after_failure_clears_error(make_record):
    state = CatalogueViewState()
    state.accept_failure(state.begin(CSE), CSE, SourceTimeoutError(2.0))
    assert state.error["code"] == "SOURCE_TIMEOUT"

    state.accept_result(state.begin(CSE), CSE, _result(make_record, "CSE"))
    assert state.error is None
    assert state.phase == ViewPhase.READY


def test_duplicate_response_for_same_sequence_is_discarded(make_record):
    state = CatalogueViewState()
    seq = state.begin(CSE)
    assert state.accept_result(seq, CSE, _result(make_record, "CSE"))
    assert not state.accept_result(seq, CSE, _result(make_record, "CSE"))


@pytest.mark.parametrize("seq", [0, 2, -1])
def test_unissued_sequence_is_rejected(seq, make_record):
    state = CatalogueViewState()
    state.begin(CSE)
    with pytest.raises(ValueError):
        state.accept_result(seq, CSE, _result(make_record, "CSE"))
