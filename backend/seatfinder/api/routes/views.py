"""Catalogue View Routes — interactive views with sequence-numbered refreshes.

Invariants:
    - _registry is the single source for in-memory views
    - PUT /{id}/filter is the "filter changed" event: it always triggers a refresh
    - A failed refresh is reported in the view body (phase "failed", error set),
      not as an HTTP error — the view is still there
    - Export of a view renders its applied result; with none (idle/failed) it
      renders a headers-only document for the view's filter

Design Decisions:
    - Module-level registry: single-process uvicorn, views lost on restart
      (no persistence by design); size capped by settings.view_limit
    - get_view_or_404 raises ViewNotFoundError → global handler (404)
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status

from seatfinder.api.routes.seats import (
    export_query, export_response, warn_if_inverted,
)
from seatfinder.config import get_settings
from seatfinder.core.errors import ViewNotFoundError
from seatfinder.core.export_layout import ExportHeader
from seatfinder.core.project_columns import project_columns
from seatfinder.core.resolve import ResultSet
from seatfinder.infrastructure.student_source import (
    StudentSource, get_student_source,
)
from seatfinder.schemas.seats import (
    ExportQuery, ResultSetResponse, SeatQuery, ViewResponse,
)
from seatfinder.services.catalogue_view import CatalogueView, ViewRegistry
from seatfinder.services.export_document import render_export

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/views", tags=["views"])

_registry = ViewRegistry(limit=get_settings().view_limit)


def get_view_or_404(view_id: UUID) -> CatalogueView:
    view = _registry.get(view_id)
    if view is None:
        raise ViewNotFoundError(str(view_id))
    return view


def build_view_response(view: CatalogueView) -> ViewResponse:
    state = view.state
    return ViewResponse(
        id=view.id,
        phase=state.phase.value,
        issued_seq=state.issued_seq,
        applied_seq=state.applied_seq,
        discarded=state.discarded,
        filter=SeatQuery.from_filter_state(state.filter_state),
        applied_filter=(
            SeatQuery.from_filter_state(state.applied_filter)
            if state.applied_filter else None
        ),
        result=(
            ResultSetResponse.from_result_set(state.result)
            if state.result is not None else None
        ),
        error=state.error,
    )


@router.post(
    "", response_model=ViewResponse, status_code=status.HTTP_201_CREATED,
)
async def create_view(
    body: SeatQuery, source: StudentSource = Depends(get_student_source),
):
    """Create a view and run its first refresh with the given filter."""
    view = _registry.add(CatalogueView(source))
    filter_state = body.to_filter_state()
    warn_if_inverted(filter_state)
    logger.info("Created catalogue view", extra={"view_id": str(view.id)})
    await view.refresh(filter_state)
    return build_view_response(view)


@router.get("/{view_id}", response_model=ViewResponse)
async def get_view(view_id: UUID):
    """Current phase, applied result or error of a view."""
    return build_view_response(get_view_or_404(view_id))


@router.put("/{view_id}/filter", response_model=ViewResponse)
async def change_filter(view_id: UUID, body: SeatQuery):
    """Filter-changed event: refresh the view with the new filter."""
    view = get_view_or_404(view_id)
    filter_state = body.to_filter_state()
    warn_if_inverted(filter_state)
    await view.refresh(filter_state)
    return build_view_response(view)


@router.delete("/{view_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_view(view_id: UUID):
    if _registry.remove(view_id) is None:
        raise ViewNotFoundError(str(view_id))
    logger.info("Deleted catalogue view", extra={"view_id": str(view_id)})
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{view_id}/export")
async def export_view(view_id: UUID, query: ExportQuery = Depends(export_query)):
    """Render the view's applied result. Filter params in the query are ignored."""
    view = get_view_or_404(view_id)
    state = view.state
    result = state.result
    if result is None:
        shown = state.applied_filter or state.filter_state
        result = ResultSet(columns=project_columns(shown))
    rendered = render_export(
        result, query.format,
        ExportHeader(name=query.name, rank=query.rank, caste=query.student_caste),
        title=get_settings().export_title,
    )
    return export_response(rendered)
