"""Seat Query Schema — filter normalization and conversion to FilterState."""

import pytest
from pydantic import ValidationError

from seatfinder.core.domain_types import NO_FILTER
from seatfinder.core.filter_state import FilterState
from seatfinder.core.resolve import resolve
from seatfinder.schemas.seats import ExportQuery, ResultSetResponse, SeatQuery


@pytest.mark.parametrize("blank", ["", "  ", "all", "ALL", "All", None])
def test_blank_selectors_normalize_to_no_filter(blank):
    query = SeatQuery(branch=blank, district=blank, caste=blank)
    assert query.branch == query.district == query.caste == NO_FILTER


def test_codes_upper_cased_caste_kept():
    query = SeatQuery(branch=" cse", district="hyd", caste=" OC Boys ")
    assert query.branch == "CSE"
    assert query.district == "HYD"
    assert query.caste == "OC Boys"


def test_rank_aliases_and_blank_ranks():
    query = SeatQuery.model_validate({"minRank": "100", "maxRank": ""})
    assert query.min_rank == 100
    assert query.max_rank is None


def test_non_numeric_rank_rejected():
    with pytest.raises(ValidationError):
        SeatQuery.model_validate({"minRank": "abc"})


def test_inverted_range_is_accepted():
    query = SeatQuery.model_validate({"minRank": 500, "maxRank": 100})
    assert query.to_filter_state().inverted_range


def test_round_trip_through_filter_state():
    state = FilterState(branch="CSE", caste="oc", min_rank=1, max_rank=9)
    assert SeatQuery.from_filter_state(state).to_filter_state() == state


def test_export_query_defaults():
    query = ExportQuery()
    assert query.format == "pdf"
    assert query.name == query.rank == query.student_caste == ""


def test_result_set_response_uses_wire_names(make_record):
    result = resolve(
        [make_record("1", inst_code="VNRJ", ocBoys=1200)],
        FilterState(caste="OC Boys"),
    )
    body = ResultSetResponse.from_result_set(result)
    assert body.columns == ["instCode", "instituteName", "branchCode", "distCode", "ocBoys"]
    assert body.column_labels[-1] == "OC Boys"
    assert body.rows == [{
        "instCode": "VNRJ", "instituteName": "", "branchCode": "",
        "distCode": "", "ocBoys": 1200,
    }]
    assert body.row_count == 1
    assert body.page_format == "a4"
