"""Record Canonicalizer — collapse duplicate records by id.

Invariants:
    - Exactly one record per id; the LAST occurrence in input order wins
    - Whole-record replacement, never a field merge
    - Output order is unspecified — only the Collator defines order
    - Input sequence and records are not mutated
"""

from collections.abc import Iterable

from seatfinder.core.domain_types import RecordId
from seatfinder.core.student_record import StudentRecord


def canonicalize(raw: Iterable[StudentRecord]) -> list[StudentRecord]:
    """Deduplicate by id, keeping the last record seen for each id."""
    by_id: dict[RecordId, StudentRecord] = {}
    for record in raw:
        by_id[record.id] = record
    return list(by_id.values())
