"""Seat Schemas — query/body models and responses for the seats, views and options APIs.

Invariants:
    - SeatQuery blank selectors ("", "all", "All") normalize to NO_FILTER
    - branch/district upper-cased to match the ingestion normalization
    - minRank/maxRank: blank → None, non-integer → validation error (400);
      min > max is accepted and simply matches nothing
    - ResultSetResponse keys rows by Column wire names, same order as columns

Design Decisions:
    - One SeatQuery model used both as query-param model (GET) and JSON body
      (views), so the filter contract has a single definition
"""

from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from seatfinder.core.domain_types import NO_FILTER
from seatfinder.core.export_layout import column_labels, page_format_for
from seatfinder.core.filter_state import FilterState
from seatfinder.core.resolve import ResultSet


def _selector(v: Any) -> str:
    if v is None:
        return NO_FILTER
    v = str(v).strip()
    if not v or v.lower() == NO_FILTER.lower():
        return NO_FILTER
    return v


class SeatQuery(BaseModel):
    """Filter dimensions as sent by clients."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    branch: str = NO_FILTER
    district: str = NO_FILTER
    caste: str = NO_FILTER
    min_rank: int | None = Field(None, alias="minRank")
    max_rank: int | None = Field(None, alias="maxRank")

    @field_validator("caste", mode="before")
    @classmethod
    def normalize_caste(cls, v: Any) -> str:
        return _selector(v)

    @field_validator("branch", "district", mode="before")
    @classmethod
    def normalize_code(cls, v: Any) -> str:
        v = _selector(v)
        return v if v == NO_FILTER else v.upper()

    @field_validator("min_rank", "max_rank", mode="before")
    @classmethod
    def blank_rank_is_unbounded(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    def to_filter_state(self) -> FilterState:
        return FilterState(
            branch=self.branch,
            district=self.district,
            caste=self.caste,
            min_rank=self.min_rank,
            max_rank=self.max_rank,
        )

    @classmethod
    def from_filter_state(cls, state: FilterState) -> "SeatQuery":
        return cls(
            branch=state.branch, district=state.district, caste=state.caste,
            min_rank=state.min_rank, max_rank=state.max_rank,
        )


class ExportQuery(SeatQuery):
    """Seat filters plus export format and the free-text student header block."""

    format: str = "pdf"
    name: str = Field("", max_length=200)
    rank: str = Field("", max_length=50)
    student_caste: str = Field("", alias="studentCaste", max_length=50)


class ResultSetResponse(BaseModel):
    """JSON rendering of a ResultSet."""
    columns: list[str]
    column_labels: list[str]
    rows: list[dict[str, int | float | str]]
    row_count: int
    page_format: str

    @classmethod
    def from_result_set(cls, result: ResultSet) -> "ResultSetResponse":
        return cls(
            columns=[c.value for c in result.columns],
            column_labels=column_labels(result.columns),
            rows=[
                {column.value: value for column, value in row.items()}
                for row in result.rows
            ],
            row_count=result.row_count,
            page_format=page_format_for(result.columns).value,
        )


class ViewResponse(BaseModel):
    """Current state of an interactive catalogue view."""
    id: UUID
    phase: str
    issued_seq: int
    applied_seq: int
    discarded: int
    filter: SeatQuery
    applied_filter: SeatQuery | None = None
    result: ResultSetResponse | None = None
    error: dict | None = None


class OptionsResponse(BaseModel):
    """Dropdown catalogues for building filters."""
    branches: list[str]
    districts: list[str]
    categories: list[str]
    caste_groups: dict[str, list[str]]
