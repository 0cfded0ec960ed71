"""Catalogue View State — sequence-numbered request state for one interactive client.

Invariants:
    - Every fetch gets a strictly increasing sequence number from begin()
    - A response (result or failure) is applied only if its seq > applied_seq;
      older responses are discarded and counted, never displayed
    - A failure clears the previously applied result: stale and fresh rows never mix
    - phase is LOADING while any request newer than applied_seq is outstanding
    - applied_filter is the filter that produced the applied result/error

Design Decisions:
    - Pure dataclass, no IO, no asyncio: the shell (services/catalogue_view.py)
      awaits the fetch and hands the outcome back with its seq
    - No cancellation: concurrent fetches are allowed and reconciled by seq
"""

from dataclasses import dataclass, field

from seatfinder.core.domain_types import ViewPhase
from seatfinder.core.errors import SeatFinderError
from seatfinder.core.filter_state import FilterState
from seatfinder.core.resolve import ResultSet


@dataclass
class CatalogueViewState:
    """Per-view request state — pure dataclass, no IO."""

    # Latest filter requested by the client (may not be applied yet)
    filter_state: FilterState = field(default_factory=FilterState)

    # Filter that produced the currently applied outcome
    applied_filter: FilterState | None = None

    phase: ViewPhase = ViewPhase.IDLE
    issued_seq: int = 0
    applied_seq: int = 0

    result: ResultSet | None = None
    error: dict | None = None

    # Responses dropped because a newer one was already applied
    discarded: int = 0

    @property
    def pending(self) -> bool:
        return self.issued_seq > self.applied_seq

    def begin(self, filter_state: FilterState) -> int:
        """Register a new fetch for filter_state and return its sequence number."""
        self.issued_seq += 1
        self.filter_state = filter_state
        self.phase = ViewPhase.LOADING
        return self.issued_seq

    def accept_result(
        self, seq: int, filter_state: FilterState, result: ResultSet,
    ) -> bool:
        """Apply a successful response. Returns False if it was stale."""
        if not self._is_fresh(seq):
            return False
        self.applied_seq = seq
        self.applied_filter = filter_state
        self.result = result
        self.error = None
        self.phase = ViewPhase.LOADING if self.pending else ViewPhase.READY
        return True

    def accept_failure(
        self, seq: int, filter_state: FilterState, error: SeatFinderError,
    ) -> bool:
        """Apply a failed response. Clears any prior result. False if stale."""
        if not self._is_fresh(seq):
            return False
        self.applied_seq = seq
        self.applied_filter = filter_state
        self.result = None
        self.error = error.to_view_error()
        self.phase = ViewPhase.LOADING if self.pending else ViewPhase.FAILED
        return True

    def _is_fresh(self, seq: int) -> bool:
        if seq < 1 or seq > self.issued_seq:
            raise ValueError(
                f"Sequence {seq} was never issued (issued up to {self.issued_seq})",
            )
        if seq <= self.applied_seq:
            self.discarded += 1
            return False
        return True
