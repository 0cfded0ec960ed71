"""Collator — ordering of result rows by institute code.

Invariants:
    - Ascending by inst_code, case-insensitive and accent-insensitive
      ("abc", "ABC" and "ábc" share a key)
    - Stable: equal keys keep their incoming relative order
    - Missing inst_code collates as "" and therefore sorts first
"""

import unicodedata
from collections.abc import Iterable

from seatfinder.core.student_record import StudentRecord


def collation_key(text: str | None) -> str:
    """Base-level comparison key: strip diacritics, then casefold."""
    if not text:
        return ""
    decomposed = unicodedata.normalize("NFKD", text)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return base.casefold()


def sort_records(records: Iterable[StudentRecord]) -> list[StudentRecord]:
    return sorted(records, key=lambda r: collation_key(r.inst_code))
