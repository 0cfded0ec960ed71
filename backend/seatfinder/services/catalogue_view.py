"""Catalogue View — fetch → resolve → apply cycle for one interactive client.

Invariants:
    - Follows the impureim sandwich: begin (pure) → await fetch (IO) →
      resolve (pure) → accept_result/accept_failure (pure)
    - Each refresh is tagged with its sequence number; late responses for older
      sequences are discarded by CatalogueViewState, never displayed
    - A SourceUnavailableError is recorded on the view (prior rows cleared) and
      not re-raised: the view itself is the user-visible error surface
    - Any other exit from a refresh (cancellation on client disconnect, an
      unexpected exception) is recorded as RefreshInterruptedError, then
      re-raised; no seq is ever left outstanding
    - Concurrent refresh() calls are allowed; older in-flight refreshes are
      never cancelled by a newer one

Design Decisions:
    - "Filter changed" is an explicit event (refresh with the new FilterState),
      not a side effect of reading the view
    - In-memory registry capped by settings.view_limit; oldest view evicted first
"""

import asyncio
import logging
from uuid import UUID, uuid4

from seatfinder.core.errors import (
    ErrorContext, RefreshInterruptedError, SourceUnavailableError,
)
from seatfinder.core.filter_state import FilterState
from seatfinder.core.resolve import resolve
from seatfinder.core.view_state import CatalogueViewState
from seatfinder.infrastructure.student_source import StudentSource

logger = logging.getLogger(__name__)


class CatalogueView:
    """Owns one view's request state and drives refreshes against the source."""

    def __init__(self, source: StudentSource, view_id: UUID | None = None):
        self.id = view_id or uuid4()
        self.source = source
        self.state = CatalogueViewState()

    async def refresh(self, filter_state: FilterState) -> bool:
        """Fetch and resolve for filter_state. True if the outcome was applied."""
        seq = self.state.begin(filter_state)
        ctx = ErrorContext(view_id=str(self.id), request_seq=seq)
        try:
            raw = await self.source.fetch(filter_state, context=ctx)
            result = resolve(raw, filter_state)
        except SourceUnavailableError as e:
            applied = self.state.accept_failure(seq, filter_state, e)
            logger.warning(
                f"View refresh failed: {e.message}",
                extra={
                    "view_id": str(self.id), "request_seq": seq,
                    "error_code": e.code,
                },
            )
            return applied
        except (Exception, asyncio.CancelledError) as e:
            self.state.accept_failure(
                seq, filter_state, RefreshInterruptedError(type(e).__name__, ctx),
            )
            logger.error(
                f"View refresh interrupted by {type(e).__name__}",
                extra={"view_id": str(self.id), "request_seq": seq},
            )
            raise

        applied = self.state.accept_result(seq, filter_state, result)
        if not applied:
            logger.info(
                "Discarded stale response",
                extra={"view_id": str(self.id), "request_seq": seq},
            )
        return applied


class ViewRegistry:
    """In-memory catalogue views keyed by id, bounded in size."""

    def __init__(self, limit: int = 100):
        self.limit = limit
        self._views: dict[UUID, CatalogueView] = {}

    def __len__(self) -> int:
        return len(self._views)

    def __contains__(self, view_id: UUID) -> bool:
        return view_id in self._views

    def add(self, view: CatalogueView) -> CatalogueView:
        while len(self._views) >= self.limit:
            oldest = next(iter(self._views))
            self._views.pop(oldest)
            logger.info("Evicted catalogue view", extra={"view_id": str(oldest)})
        self._views[view.id] = view
        return view

    def get(self, view_id: UUID) -> CatalogueView | None:
        return self._views.get(view_id)

    def remove(self, view_id: UUID) -> CatalogueView | None:
        return self._views.pop(view_id, None)

    def clear(self) -> None:
        self._views.clear()
