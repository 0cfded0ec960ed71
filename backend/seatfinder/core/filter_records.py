"""Filter Predicate Evaluator — decides whether a record matches a FilterState.

Invariants:
    - Four conditions ANDed: branch, district, caste presence, rank range
    - Branch/district use exact string equality (case normalized upstream)
    - Active caste selector resolving to zero categories excludes every record
    - Rank range applies only with an active caste selector; a record passes if
      AT LEAST ONE resolved rank parses and lies in [min_rank, max_rank]
    - Unparseable ranks are skipped, never coerced to 0
    - min_rank > max_rank matches nothing and never raises
    - parse_rank() is evaluation-only: records keep their raw values

Design Decisions:
    - parse_rank follows leading-integer semantics ("15abc" → 15, "12.7" → 12)
      because rank fields arrive as free-form strings from the source
    - Categories resolved once per filter_all() call, not once per record
"""

import math
import re
from collections.abc import Iterable

from seatfinder.core.domain_types import (
    CATEGORY_COLUMNS, Category, RankValue, is_active,
)
from seatfinder.core.filter_state import FilterState
from seatfinder.core.student_record import StudentRecord

_LEADING_INT = re.compile(r"\s*([+-]?[0-9]+)")


def parse_rank(value: RankValue) -> int | None:
    """Parse a raw rank value to an int, or None when it carries no number."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    if isinstance(value, str):
        m = _LEADING_INT.match(value)
        return int(m.group(1)) if m else None
    return None


def in_rank_range(rank: int, min_rank: int | None, max_rank: int | None) -> bool:
    """Inclusive bounds; None is unbounded on that side."""
    if min_rank is not None and rank < min_rank:
        return False
    if max_rank is not None and rank > max_rank:
        return False
    return True


def _any_rank_in_range(
    record: StudentRecord, categories: tuple[Category, ...], state: FilterState,
) -> bool:
    for category in categories:
        rank = parse_rank(record.rank(CATEGORY_COLUMNS[category]))
        if rank is None:
            continue
        if in_rank_range(rank, state.min_rank, state.max_rank):
            return True
    return False


def _matches(
    record: StudentRecord,
    state: FilterState,
    categories: tuple[Category, ...],
) -> bool:
    if is_active(state.branch) and record.branch_code != state.branch:
        return False
    if is_active(state.district) and record.dist_code != state.district:
        return False
    if not state.caste_active:
        return True
    if not categories:
        return False
    return _any_rank_in_range(record, categories, state)


def matches(record: StudentRecord, state: FilterState) -> bool:
    """True if record satisfies every active condition of state."""
    return _matches(record, state, state.categories)


def filter_all(
    records: Iterable[StudentRecord], state: FilterState,
) -> list[StudentRecord]:
    """Records satisfying matches(), input order preserved."""
    categories = state.categories
    return [r for r in records if _matches(r, state, categories)]
