"""Student Source Client — request building and error mapping over httpx.MockTransport.

Invariants:
    - Active filters forwarded as string query params, inactive ones omitted
    - 2xx + valid payload → core records
    - Non-2xx, transport errors, timeouts and malformed payloads map to
      SourceUnavailableError / SourceTimeoutError
"""

import httpx
import pytest

from seatfinder.core.errors import (
    ErrorContext, SourceTimeoutError, SourceUnavailableError,
)
from seatfinder.core.filter_state import FilterState
from seatfinder.infrastructure.student_source import StudentSource

URL = "http://source.test/students"


def _source(handler) -> StudentSource:
    return StudentSource(URL, timeout_seconds=1.5, transport=httpx.MockTransport(handler))


async def test_fetch_forwards_active_filters_as_params():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen.update(request.url.params)
        return httpx.Response(200, json=[])

    source = _source(handler)
    await source.fetch(FilterState(branch="CSE", caste="OC Boys", min_rank=100))
    await source.aclose()

    assert seen == {"branch": "CSE", "caste": "OC Boys", "minRank": "100"}


async def test_fetch_without_filters_sends_no_params():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["query"] = request.url.query
        return httpx.Response(200, json=[])

    source = _source(handler)
    await source.fetch(FilterState())
    assert seen["query"] in (b"", "")


async def test_fetch_parses_records():
    payload = [
        {"_id": "1", "instCode": "VNRJ", "branchCode": "cse", "ocBoys": 1200},
        {"_id": "2", "instCode": "CBIT", "extra": {"nested": True}},
    ]
    source = _source(lambda request: httpx.Response(200, json=payload))
    records = await source.fetch(FilterState())
    assert [r.id for r in records] == ["1", "2"]
    assert records[0].branch_code == "CSE"


async def test_non_success_status_is_source_unavailable():
    source = _source(lambda request: httpx.Response(500, json={"error": "db down"}))
    with pytest.raises(SourceUnavailableError) as exc_info:
        await source.fetch(FilterState(), context=ErrorContext(request_seq=7))
    err = exc_info.value
    assert err.reason == "http_status"
    assert err.context.request_seq == 7
    assert err.context.source_url == URL
    assert not isinstance(err, SourceTimeoutError)


async def test_invalid_json_is_malformed_payload():
    source = _source(lambda request: httpx.Response(200, content=b"<html>oops"))
    with pytest.raises(SourceUnavailableError) as exc_info:
        await source.fetch(FilterState())
    assert exc_info.value.reason == "malformed_payload"


async def test_non_list_payload_is_malformed_payload():
    source = _source(lambda request: httpx.Response(200, json={"students": []}))
    with pytest.raises(SourceUnavailableError) as exc_info:
        await source.fetch(FilterState())
    assert exc_info.value.reason == "malformed_payload"


async def test_invalid_record_is_malformed_payload():
    source = _source(lambda request: httpx.Response(200, json=[{"instCode": "X"}]))
    with pytest.raises(SourceUnavailableError) as exc_info:
        await source.fetch(FilterState())
    assert exc_info.value.reason == "malformed_payload"


async def test_timeout_maps_to_source_timeout():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("too slow", request=request)

    source = _source(handler)
    with pytest.raises(SourceTimeoutError) as exc_info:
        await source.fetch(FilterState())
    assert exc_info.value.timeout_seconds == 1.5
    assert exc_info.value.http_status == 504


async def test_connection_error_maps_to_network_reason():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    source = _source(handler)
    with pytest.raises(SourceUnavailableError) as exc_info:
        await source.fetch(FilterState())
    assert exc_info.value.reason == "network"


async def test_health_check():
    ok = _source(lambda request: httpx.Response(200, json=[]))
    down = _source(lambda request: httpx.Response(503))

    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    assert await ok.health_check() is True
    assert await down.health_check() is False
    assert await _source(refuse).health_check() is False


async def test_non_finite_rank_is_malformed_payload():
    body = b'[{"_id": "1", "instCode": "A", "ocBoys": NaN, "ocGirls": Infinity}]'
    source = _source(lambda request: httpx.Response(
        200, content=body, headers={"content-type": "application/json"},
    ))
    with pytest.raises(SourceUnavailableError) as exc_info:
        await source.fetch(FilterState())
    assert exc_info.value.reason == "malformed_payload"
