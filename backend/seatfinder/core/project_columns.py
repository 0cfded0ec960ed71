"""Schema Projector — which columns a query produces, and row projection.

Invariants:
    - Columns always start with the 4 identity columns
    - Exactly one active Category → 5 columns (identity + that category)
    - Otherwise (no caste filter, multi-category group, unknown selector)
      → 22 columns (identity + all 18 in canonical order)
    - Rows carry identity values plus the RAW rank value, "" when absent

Design Decisions:
    - Single source of truth for table shape: display and export both read
      ResultSet.columns, neither re-derives it from the filter
"""

from seatfinder.core.domain_types import (
    CATEGORY_COLUMNS, Column, IDENTITY_COLUMNS, RANK_COLUMNS, RankValue,
)
from seatfinder.core.filter_state import FilterState
from seatfinder.core.student_record import StudentRecord

SINGLE_CATEGORY_WIDTH = len(IDENTITY_COLUMNS) + 1

EMPTY_CELL = ""


def project_columns(state: FilterState) -> tuple[Column, ...]:
    """Ordered result columns for a filter state."""
    single = state.single_category
    if single is not None:
        return IDENTITY_COLUMNS + (CATEGORY_COLUMNS[single],)
    return IDENTITY_COLUMNS + RANK_COLUMNS


def project_row(
    record: StudentRecord, columns: tuple[Column, ...],
) -> dict[Column, RankValue]:
    """Map a record onto columns; absent values become EMPTY_CELL."""
    row: dict[Column, RankValue] = {}
    for column in columns:
        value = record.value(column)
        row[column] = EMPTY_CELL if value is None else value
    return row


def is_single_category(columns: tuple[Column, ...]) -> bool:
    return len(columns) == SINGLE_CATEGORY_WIDTH
