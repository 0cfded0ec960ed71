"""Root conftest — shared test configuration and record factory."""

import os

import pytest

# Ensure tests never reach a real data source
os.environ.setdefault("SOURCE_URL", "http://source.test/students")
os.environ.setdefault("SOURCE_TIMEOUT_SECONDS", "2")

from seatfinder.core.domain_types import Column, RecordId  # noqa: E402
from seatfinder.core.student_record import StudentRecord  # noqa: E402


@pytest.fixture
def make_record():
    """Build a StudentRecord; rank kwargs use wire names (ocBoys=1200)."""

    def _make(
        record_id: str = "r1",
        inst_code: str = "",
        institute_name: str = "",
        branch_code: str = "",
        dist_code: str = "",
        **ranks,
    ) -> StudentRecord:
        return StudentRecord(
            id=RecordId(record_id),
            inst_code=inst_code,
            institute_name=institute_name,
            branch_code=branch_code,
            dist_code=dist_code,
            ranks={Column(k): v for k, v in ranks.items()},
        )

    return _make
