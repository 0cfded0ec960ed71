"""Settings — defaults, env overrides and validation."""

import pytest
from pydantic import ValidationError

from seatfinder.config import Settings


def test_env_overrides_source(monkeypatch):
    monkeypatch.setenv("SOURCE_URL", "http://records.internal/students/")
    monkeypatch.setenv("SOURCE_TIMEOUT_SECONDS", "3.5")
    settings = Settings()
    assert settings.source_url == "http://records.internal/students"
    assert settings.source_timeout_seconds == 3.5


def test_defaults():
    settings = Settings(_env_file=None)
    assert settings.view_limit == 100
    assert settings.export_title == "Students Data"
    assert settings.log_format == "json"


@pytest.mark.parametrize("timeout", [0, -1])
def test_non_positive_timeout_rejected(timeout):
    with pytest.raises(ValidationError):
        Settings(source_timeout_seconds=timeout)


def test_view_limit_must_be_positive():
    with pytest.raises(ValidationError):
        Settings(view_limit=0)
