"""Student Source Client — httpx wrapper for the remote GET /students endpoint.

Invariants:
    - Every request carries an explicit timeout (settings.source_timeout_seconds)
    - Timeout → SourceTimeoutError; connection/transport failure, non-2xx status
      and malformed JSON/payload → SourceUnavailableError (core/errors.py)
    - No automatic retry: a failed fetch surfaces to the caller once
    - Filters forwarded as string query params; inactive dimensions omitted

Design Decisions:
    - One shared httpx.AsyncClient per process, created in the FastAPI lifespan
      and closed on shutdown
    - Transport injectable so tests drive the client with httpx.MockTransport
"""

import logging

import httpx
from pydantic import ValidationError

from seatfinder.core.errors import (
    ErrorContext, SourceTimeoutError, SourceUnavailableError,
)
from seatfinder.core.filter_state import FilterState
from seatfinder.core.student_record import StudentRecord
from seatfinder.schemas.student import parse_payload

logger = logging.getLogger(__name__)


class StudentSource:
    """Fetches raw student records from the data source."""

    def __init__(
        self,
        url: str,
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.url = url
        self.timeout_seconds = timeout_seconds
        self.client = httpx.AsyncClient(
            timeout=httpx.Timeout(timeout_seconds),
            transport=transport,
        )

    async def fetch(
        self, state: FilterState, context: ErrorContext | None = None,
    ) -> list[StudentRecord]:
        """GET the record set for state. Raises SourceUnavailableError."""
        ctx = context or ErrorContext()
        ctx.source_url = self.url
        params = state.to_query_params()

        try:
            response = await self.client.get(self.url, params=params)
        except httpx.TimeoutException as e:
            logger.warning(
                f"Student source timed out after {self.timeout_seconds}s: {e}",
                extra={"source_url": self.url, "request_seq": ctx.request_seq},
            )
            raise SourceTimeoutError(self.timeout_seconds, context=ctx)
        except httpx.HTTPError as e:
            logger.error(
                f"Student source request failed: {e}",
                extra={"source_url": self.url, "request_seq": ctx.request_seq},
            )
            raise SourceUnavailableError(str(e), "network", context=ctx)

        if not response.is_success:
            logger.error(
                f"Student source returned HTTP {response.status_code}",
                extra={"source_url": self.url, "request_seq": ctx.request_seq},
            )
            raise SourceUnavailableError(
                f"HTTP {response.status_code}", "http_status", context=ctx,
            )

        try:
            records = parse_payload(response.json())
        except (ValueError, ValidationError) as e:
            logger.error(
                f"Student source returned a malformed payload: {e}",
                extra={"source_url": self.url, "request_seq": ctx.request_seq},
            )
            raise SourceUnavailableError(
                "response is not a list of student records",
                "malformed_payload", context=ctx,
            )

        logger.info(
            f"Fetched {len(records)} records",
            extra={
                "source_url": self.url, "request_seq": ctx.request_seq,
                "record_count": len(records),
            },
        )
        return records

    async def health_check(self) -> bool:
        """Check the source answers at all (for readiness probes)."""
        try:
            response = await self.client.get(self.url)
            return response.is_success
        except httpx.HTTPError as e:
            logger.error(f"Student source health check failed: {e}")
            return False

    async def aclose(self) -> None:
        await self.client.aclose()


# Singleton (initialized on startup)
student_source: StudentSource | None = None


def init_student_source(url: str, timeout_seconds: float) -> StudentSource:
    global student_source
    student_source = StudentSource(url, timeout_seconds)
    return student_source


async def close_student_source() -> None:
    global student_source
    if student_source is not None:
        await student_source.aclose()
        student_source = None


def get_student_source() -> StudentSource:
    """FastAPI dependency for the shared source client."""
    if not student_source:
        raise RuntimeError("Student source not initialized")
    return student_source
