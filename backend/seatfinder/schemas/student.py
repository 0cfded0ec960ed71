"""Student Schemas — ingestion-boundary validation of data-source payloads.

Invariants:
    - Accepts "_id" or "id" as the record identifier (string or integer, never empty)
    - Unknown/extra JSON fields are ignored
    - Identity fields: null → "", numbers → str, surrounding whitespace stripped;
      branchCode/distCode upper-cased so exact filter equality works
    - Rank fields accept int, float, str or null only — bools, lists and objects
      are rejected, and so are NaN and +/-Infinity (Python's JSON decoder
      accepts them), so NaN-like garbage never reaches the pipeline
    - parse_payload() rejects the whole payload if it is not a list of valid records

Design Decisions:
    - Explicit field per rank column with camelCase alias: the wire contract is
      readable in one place and populate_by_name keeps tests concise
    - Schema converts into core.StudentRecord; core never sees pydantic
"""

import math
from typing import Any

from pydantic import (
    AliasChoices, BaseModel, ConfigDict, Field, TypeAdapter, field_validator,
)

from seatfinder.core.domain_types import Column, RecordId
from seatfinder.core.student_record import StudentRecord

RANK_FIELD_NAMES: tuple[str, ...] = (
    "oc_boys", "oc_girls",
    "bc_a_boys", "bc_a_girls", "bc_b_boys", "bc_b_girls",
    "bc_c_boys", "bc_c_girls", "bc_d_boys", "bc_d_girls",
    "bc_e_boys", "bc_e_girls",
    "sc_boys", "sc_girls", "st_boys", "st_girls",
    "ews_gen_ou", "ews_girls_ou",
)

RankIn = int | float | str | None


def _as_text(v: Any) -> str:
    if v is None:
        return ""
    if isinstance(v, bool) or not isinstance(v, (str, int, float)):
        raise ValueError("expected a string")
    return str(v).strip()


class StudentRecordIn(BaseModel):
    """One raw record as returned by GET /students."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

    id: str = Field(validation_alias=AliasChoices("_id", "id"))
    inst_code: str = Field("", alias="instCode")
    institute_name: str = Field("", alias="instituteName")
    branch_code: str = Field("", alias="branchCode")
    dist_code: str = Field("", alias="distCode")

    oc_boys: RankIn = Field(None, alias="ocBoys")
    oc_girls: RankIn = Field(None, alias="ocGirls")
    bc_a_boys: RankIn = Field(None, alias="bcABoys")
    bc_a_girls: RankIn = Field(None, alias="bcAGirls")
    bc_b_boys: RankIn = Field(None, alias="bcBBoys")
    bc_b_girls: RankIn = Field(None, alias="bcBGirls")
    bc_c_boys: RankIn = Field(None, alias="bcCBoys")
    bc_c_girls: RankIn = Field(None, alias="bcCGirls")
    bc_d_boys: RankIn = Field(None, alias="bcDBoys")
    bc_d_girls: RankIn = Field(None, alias="bcDGirls")
    bc_e_boys: RankIn = Field(None, alias="bcEBoys")
    bc_e_girls: RankIn = Field(None, alias="bcEGirls")
    sc_boys: RankIn = Field(None, alias="scBoys")
    sc_girls: RankIn = Field(None, alias="scGirls")
    st_boys: RankIn = Field(None, alias="stBoys")
    st_girls: RankIn = Field(None, alias="stGirls")
    ews_gen_ou: RankIn = Field(None, alias="ewsGenOu")
    ews_girls_ou: RankIn = Field(None, alias="ewsGirlsOu")

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> str:
        if isinstance(v, bool) or not isinstance(v, (str, int)):
            raise ValueError("id must be a string or integer")
        v = str(v).strip()
        if not v:
            raise ValueError("id cannot be empty")
        return v

    @field_validator("inst_code", "institute_name", mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> str:
        return _as_text(v)

    @field_validator("branch_code", "dist_code", mode="before")
    @classmethod
    def normalize_code(cls, v: Any) -> str:
        return _as_text(v).upper()

    @field_validator(*RANK_FIELD_NAMES, mode="before")
    @classmethod
    def reject_non_scalar_rank(cls, v: Any) -> Any:
        if isinstance(v, bool) or not isinstance(v, (int, float, str, type(None))):
            raise ValueError("rank must be a number, a string or null")
        if isinstance(v, float) and not math.isfinite(v):
            raise ValueError("rank must be a finite number")
        return v

    def to_record(self) -> StudentRecord:
        ranks = {
            Column(type(self).model_fields[name].alias): getattr(self, name)
            for name in RANK_FIELD_NAMES
        }
        return StudentRecord(
            id=RecordId(self.id),
            inst_code=self.inst_code,
            institute_name=self.institute_name,
            branch_code=self.branch_code,
            dist_code=self.dist_code,
            ranks=ranks,
        )


_PAYLOAD = TypeAdapter(list[StudentRecordIn])


def parse_payload(data: Any) -> list[StudentRecord]:
    """Validate a decoded JSON payload into core records. Raises pydantic.ValidationError."""
    return [item.to_record() for item in _PAYLOAD.validate_python(data)]
