"""Seats Routes — one-shot query and export over the student source.

Invariants:
    - Every request is stateless: fetch → resolve → render, nothing kept
    - Display (GET /seats) and export (GET /seats/export) share the same
      resolve() call, so rows and columns cannot diverge
    - Inverted rank range is accepted (empty result) and logged as a warning
    - Source failures propagate as SeatFinderError → global handler (503/504)

Design Decisions:
    - Query params collected explicitly and validated through SeatQuery so
      "minRank=abc" fails with the standard 400 VALIDATION_ERROR envelope
"""

import logging

from fastapi import APIRouter, Depends, Query, Response
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from seatfinder.config import get_settings
from seatfinder.core.domain_types import NO_FILTER
from seatfinder.core.errors import UnsupportedExportFormatError
from seatfinder.core.export_layout import ExportHeader
from seatfinder.core.filter_state import FilterState
from seatfinder.core.resolve import ResultSet, resolve
from seatfinder.infrastructure.student_source import (
    StudentSource, get_student_source,
)
from seatfinder.schemas.seats import ExportQuery, ResultSetResponse, SeatQuery
from seatfinder.services.export_document import (
    DEFAULT_FORMAT, SUPPORTED_FORMATS, RenderedExport, render_export,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/seats", tags=["seats"])


def _validated(model: type[SeatQuery], **values) -> SeatQuery:
    try:
        return model(**values)
    except ValidationError as e:
        raise RequestValidationError(e.errors())


def seat_query(
    branch: str = Query(NO_FILTER),
    district: str = Query(NO_FILTER),
    caste: str = Query(NO_FILTER),
    min_rank: str | None = Query(None, alias="minRank"),
    max_rank: str | None = Query(None, alias="maxRank"),
) -> SeatQuery:
    """Collect filter query params into a validated SeatQuery."""
    return _validated(
        SeatQuery, branch=branch, district=district, caste=caste,
        minRank=min_rank, maxRank=max_rank,
    )


def export_query(
    query: SeatQuery = Depends(seat_query),
    export_format: str = Query(DEFAULT_FORMAT, alias="format"),
    name: str = Query(""),
    rank: str = Query(""),
    student_caste: str = Query("", alias="studentCaste"),
) -> ExportQuery:
    """Seat filters plus export options. Format checked before any fetch."""
    if export_format.strip().lower() not in SUPPORTED_FORMATS:
        raise UnsupportedExportFormatError(export_format)
    return _validated(
        ExportQuery, **query.model_dump(by_alias=True),
        format=export_format, name=name, rank=rank, studentCaste=student_caste,
    )


def warn_if_inverted(state: FilterState) -> None:
    if state.inverted_range:
        logger.warning(
            f"minRank {state.min_rank} > maxRank {state.max_rank}: "
            "query will match nothing",
        )


def export_response(rendered: RenderedExport) -> Response:
    return Response(
        content=rendered.content,
        media_type=rendered.media_type,
        headers={
            "Content-Disposition": f'attachment; filename="{rendered.filename}"',
        },
    )


async def fetch_and_resolve(
    source: StudentSource, state: FilterState,
) -> ResultSet:
    warn_if_inverted(state)
    raw = await source.fetch(state)
    return resolve(raw, state)


@router.get("", response_model=ResultSetResponse)
async def list_seats(
    query: SeatQuery = Depends(seat_query),
    source: StudentSource = Depends(get_student_source),
):
    """Filtered, sorted, column-projected seat table."""
    result = await fetch_and_resolve(source, query.to_filter_state())
    return ResultSetResponse.from_result_set(result)


@router.get("/export")
async def export_seats(
    query: ExportQuery = Depends(export_query),
    source: StudentSource = Depends(get_student_source),
):
    """Same table as GET /seats, rendered as a downloadable PDF, DOCX or CSV."""
    result = await fetch_and_resolve(source, query.to_filter_state())
    rendered = render_export(
        result, query.format,
        ExportHeader(name=query.name, rank=query.rank, caste=query.student_caste),
        title=get_settings().export_title,
    )
    return export_response(rendered)
