"""Student Record — immutable institute/branch seat record as consumed by the pipeline.

Invariants:
    - Frozen: no pipeline stage mutates a record
    - Identity fields are never None (absent → "")
    - ranks only holds rank Columns; values are kept exactly as received
      (int, float, str) and absent ranks are simply missing from the mapping

Design Decisions:
    - ranks as a read-only mapping keyed by Column, not 18 attributes: the
      Category → Column table in domain_types is the only field lookup
    - Built from the pydantic ingestion schema (schemas/student.py); core never
      sees untyped dicts
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from seatfinder.core.domain_types import (
    Column, RankValue, RecordId, IDENTITY_COLUMNS, RANK_COLUMNS,
)


@dataclass(frozen=True)
class StudentRecord:
    """One institute/branch row with its per-category closing ranks."""

    id: RecordId
    inst_code: str = ""
    institute_name: str = ""
    branch_code: str = ""
    dist_code: str = ""
    ranks: Mapping[Column, RankValue] = field(default_factory=dict)

    def __post_init__(self) -> None:
        stray = [c for c in self.ranks if c not in RANK_COLUMNS]
        if stray:
            raise ValueError(f"Not rank columns: {[c.value for c in stray]}")
        # Drop explicit None so "absent" has a single representation
        frozen = {c: v for c, v in self.ranks.items() if v is not None}
        object.__setattr__(self, "ranks", MappingProxyType(frozen))

    def rank(self, column: Column) -> RankValue:
        """Raw rank value for a rank column, None when not offered."""
        return self.ranks.get(column)

    def value(self, column: Column) -> RankValue:
        """Raw value for any result column."""
        if column in IDENTITY_COLUMNS:
            return {
                Column.INST_CODE: self.inst_code,
                Column.INSTITUTE_NAME: self.institute_name,
                Column.BRANCH_CODE: self.branch_code,
                Column.DIST_CODE: self.dist_code,
            }[column]
        return self.rank(column)
