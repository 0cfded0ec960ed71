"""Export Layout — presentation decisions derived purely from ResultSet.columns.

Invariants:
    - Page format depends only on column count: 5 columns → A4 landscape,
      anything wider → A3 landscape
    - Column labels: identity columns get fixed labels, rank columns use their
      Category label
    - Header block fields render "-" when blank
    - Cells render the raw value as text; "" stays ""
"""

from dataclasses import dataclass
from enum import Enum

from seatfinder.core.domain_types import (
    CATEGORY_COLUMNS, Column, RankValue,
)
from seatfinder.core.project_columns import is_single_category

IDENTITY_LABELS: dict[Column, str] = {
    Column.INST_CODE: "Inst Code",
    Column.INSTITUTE_NAME: "Institute",
    Column.BRANCH_CODE: "Branch",
    Column.DIST_CODE: "District",
}

_RANK_LABELS: dict[Column, str] = {
    column: category.value for category, column in CATEGORY_COLUMNS.items()
}


class PageFormat(str, Enum):
    """Landscape page sizes, dimensions in millimetres (width, height)."""
    A4 = "a4"
    A3 = "a3"

    @property
    def landscape_mm(self) -> tuple[float, float]:
        return {"a4": (297.0, 210.0), "a3": (420.0, 297.0)}[self.value]


@dataclass(frozen=True)
class ExportHeader:
    """Free-text student block printed above the exported table."""
    name: str = ""
    rank: str = ""
    caste: str = ""

    def lines(self) -> list[tuple[str, str]]:
        return [
            ("Name", self.name.strip() or "-"),
            ("Rank", self.rank.strip() or "-"),
            ("Caste", self.caste.strip() or "-"),
        ]


def column_label(column: Column) -> str:
    return IDENTITY_LABELS.get(column) or _RANK_LABELS[column]


def column_labels(columns: tuple[Column, ...]) -> list[str]:
    return [column_label(c) for c in columns]


def page_format_for(columns: tuple[Column, ...]) -> PageFormat:
    """Narrow page for a single-category table, wide page for the full matrix."""
    return PageFormat.A4 if is_single_category(columns) else PageFormat.A3


def cell_text(value: RankValue) -> str:
    if value is None:
        return ""
    return str(value)
