"""Filter State — explicit, immutable query state passed into resolve().

Invariants:
    - Frozen: a changed filter is a new FilterState, never an in-place edit
    - min_rank > max_rank is legal (matches nothing) — not validated here
    - branch/district are compared exactly; callers normalize case beforehand

Design Decisions:
    - Selectors default to NO_FILTER rather than None so the no-filter state
      round-trips through query strings unchanged
"""

from dataclasses import dataclass

from seatfinder.core.domain_types import (
    Category, NO_FILTER, is_active, resolve_categories,
)


@dataclass(frozen=True)
class FilterState:
    """Branch / district / caste selectors plus an inclusive rank range."""

    branch: str = NO_FILTER
    district: str = NO_FILTER
    caste: str = NO_FILTER
    min_rank: int | None = None
    max_rank: int | None = None

    @property
    def caste_active(self) -> bool:
        return is_active(self.caste)

    @property
    def categories(self) -> tuple[Category, ...]:
        return resolve_categories(self.caste)

    @property
    def single_category(self) -> Category | None:
        """The one active Category in single-caste mode, else None."""
        cats = self.categories
        return cats[0] if len(cats) == 1 else None

    @property
    def inverted_range(self) -> bool:
        return (
            self.min_rank is not None
            and self.max_rank is not None
            and self.min_rank > self.max_rank
        )

    def to_query_params(self) -> dict[str, str]:
        """String-encoded params for the data source; inactive dimensions omitted."""
        params: dict[str, str] = {}
        if is_active(self.branch):
            params["branch"] = self.branch
        if is_active(self.district):
            params["district"] = self.district
        if self.caste_active:
            params["caste"] = self.caste
        if self.min_rank is not None:
            params["minRank"] = str(self.min_rank)
        if self.max_rank is not None:
            params["maxRank"] = str(self.max_rank)
        return params
