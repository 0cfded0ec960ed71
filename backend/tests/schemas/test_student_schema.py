"""Student Schema — ingestion-boundary validation of source payloads.

Tests cover:
    - "_id" and "id" accepted; empty/invalid ids rejected
    - camelCase aliases, extra fields ignored
    - Code normalization (strip + upper) and null identity fields
    - Rank values: int/float/str/null kept as-is, bool/list/object rejected
    - parse_payload rejects non-list payloads
"""

import pytest
from pydantic import ValidationError

from seatfinder.core.domain_types import Column
from seatfinder.schemas.student import StudentRecordIn, parse_payload


def _raw(**overrides):
    data = {
        "_id": "66f1a",
        "instCode": "VNRJ",
        "instituteName": "VNR VJIET",
        "branchCode": "CSE",
        "distCode": "HYD",
        "ocBoys": 1200,
        "ocGirls": "1500",
        "tuitionFee": 135000,
    }
    data.update(overrides)
    return data


def test_parses_wire_record():
    record = StudentRecordIn.model_validate(_raw()).to_record()
    assert record.id == "66f1a"
    assert record.inst_code == "VNRJ"
    assert record.institute_name == "VNR VJIET"
    assert record.rank(Column.OC_BOYS) == 1200
    assert record.rank(Column.OC_GIRLS) == "1500"
    assert record.rank(Column.SC_BOYS) is None


def test_plain_id_alias_and_integer_id():
    data = _raw()
    del data["_id"]
    data["id"] = 42
    assert StudentRecordIn.model_validate(data).id == "42"


@pytest.mark.parametrize("bad_id", ["", "   ", None, True, {"$oid": "x"}])
def test_invalid_ids_rejected(bad_id):
    with pytest.raises(ValidationError):
        StudentRecordIn.model_validate(_raw(_id=bad_id))


def test_missing_id_rejected():
    data = _raw()
    del data["_id"]
    with pytest.raises(ValidationError):
        StudentRecordIn.model_validate(data)


def test_codes_are_stripped_and_upper_cased():
    model = StudentRecordIn.model_validate(_raw(branchCode=" cse ", distCode="hyd"))
    assert model.branch_code == "CSE"
    assert model.dist_code == "HYD"


def test_null_identity_fields_become_empty():
    model = StudentRecordIn.model_validate(
        _raw(instCode=None, instituteName=None, branchCode=None, distCode=None),
    )
    assert (model.inst_code, model.institute_name, model.branch_code, model.dist_code) == (
        "", "", "", "",
    )


def test_missing_rank_fields_are_absent():
    model = StudentRecordIn.model_validate({"_id": "1"})
    assert dict(model.to_record().ranks) == {}


def test_rank_types_are_preserved():
    model = StudentRecordIn.model_validate(
        _raw(scBoys=20000.0, stGirls="NA", ewsGenOu=None),
    )
    record = model.to_record()
    assert record.rank(Column.SC_BOYS) == 20000.0
    assert isinstance(record.rank(Column.SC_BOYS), float)
    assert record.rank(Column.ST_GIRLS) == "NA"
    assert record.rank(Column.EWS_GEN_OU) is None


@pytest.mark.parametrize("bad_rank", [
    True, [1200], {"value": 1}, float("nan"), float("inf"), float("-inf"),
])
def test_invalid_ranks_rejected(bad_rank):
    with pytest.raises(ValidationError):
        StudentRecordIn.model_validate(_raw(ocBoys=bad_rank))


def test_populate_by_field_name():
    model = StudentRecordIn(id="1", inst_code="X", oc_boys=5)
    assert model.to_record().rank(Column.OC_BOYS) == 5


def test_parse_payload_returns_core_records():
    records = parse_payload([_raw(), _raw(_id="2", instCode="CBIT")])
    assert [r.id for r in records] == ["66f1a", "2"]


@pytest.mark.parametrize("payload", [{"students": []}, "oops", None, [1, 2]])
def test_parse_payload_rejects_non_record_lists(payload):
    with pytest.raises(ValidationError):
        parse_payload(payload)


def test_parse_payload_accepts_empty_list():
    assert parse_payload([]) == []
