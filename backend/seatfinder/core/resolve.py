"""Pipeline Orchestrator — raw records + FilterState → ResultSet.

Invariants:
    - resolve() is pure and reentrant: identical inputs give an identical ResultSet
    - Stage order is fixed: canonicalize → filter_all → sort_records → project
    - rows[i] is the projection of records[i]; columns == project_columns(state)
    - Empty results, unknown categories and inverted ranges yield empty rows,
      never exceptions

Design Decisions:
    - ResultSet keeps the surviving records next to the projected rows so
      callers can re-check rows against matches() without re-parsing rows
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from seatfinder.core.canonicalize import canonicalize
from seatfinder.core.collate import sort_records
from seatfinder.core.domain_types import Column, RankValue
from seatfinder.core.filter_records import filter_all
from seatfinder.core.filter_state import FilterState
from seatfinder.core.project_columns import project_columns, project_row
from seatfinder.core.student_record import StudentRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResultSet:
    """Columns + projected rows — the contract shared by display and export."""

    columns: tuple[Column, ...]
    rows: tuple[dict[Column, RankValue], ...] = ()
    records: tuple[StudentRecord, ...] = ()

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def is_empty(self) -> bool:
        return not self.rows


def resolve(raw: Iterable[StudentRecord], state: FilterState) -> ResultSet:
    """Run the full pipeline for one query."""
    columns = project_columns(state)
    unique = canonicalize(raw)
    ordered = sort_records(filter_all(unique, state))
    logger.debug(
        f"Resolved {len(ordered)}/{len(unique)} records into {len(columns)} columns",
        extra={"record_count": len(unique), "row_count": len(ordered)},
    )
    return ResultSet(
        columns=columns,
        rows=tuple(project_row(r, columns) for r in ordered),
        records=tuple(ordered),
    )
