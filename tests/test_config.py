import json

import pytest
import structlog
from pydantic import ValidationError

from mojangid.config import Settings
from mojangid.logs import configure_logging


def test_defaults(monkeypatch):
    for var in (
        "MOJANGID_API_BASE_URL",
        "MOJANGID_REQUEST_TIMEOUT_SECONDS",
        "MOJANGID_USER_AGENT",
        "MOJANGID_LOG_LEVEL",
    ):
        monkeypatch.delenv(var, raising=False)
    config = Settings(_env_file=None)
    assert config.api_base_url == "https://api.mojang.com"
    assert config.request_timeout_seconds == 5.0
    assert config.log_level == "info"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("MOJANGID_REQUEST_TIMEOUT_SECONDS", "3")
    monkeypatch.setenv("MOJANGID_API_BASE_URL", "https://proxy.example/mojang/")
    config = Settings(_env_file=None)
    assert config.request_timeout_seconds == 3.0
    assert config.api_base_url == "https://proxy.example/mojang"


@pytest.mark.parametrize("timeout", [0, -1])
def test_timeout_must_be_positive(timeout):
    with pytest.raises(ValidationError):
        Settings(request_timeout_seconds=timeout)


def test_configure_logging_filters_by_level(capsys, reset_structlog):
    configure_logging("warning")
    log = structlog.get_logger()
    log.info("hidden_event")
    log.warning("shown_event", status=500)

    lines = [line for line in capsys.readouterr().out.splitlines() if line]
    assert len(lines) == 1
    entry = json.loads(lines[0])
    assert entry["event"] == "shown_event"
    assert entry["level"] == "warning"
    assert entry["status"] == 500
    assert "timestamp" in entry


def test_configure_logging_rejects_unknown_level(reset_structlog):
    with pytest.raises(ValueError):
        configure_logging("chatty")
