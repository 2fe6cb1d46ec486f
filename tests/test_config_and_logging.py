"""Tests for settings loading, JSON logging and redaction."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from owm_onecall.config import Settings, load_settings
from owm_onecall.exceptions import ConfigError
from owm_onecall.log_setup import JsonConsoleFormatter, setup_logger
from owm_onecall.redaction import REDACTED, sanitize_for_logging, sanitize_text


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("OWM_LOG_LEVEL", "OWM_MAX_PRINT", "OWM_PAYLOAD_MAX_BYTES"):
        monkeypatch.delenv(name, raising=False)


def test_settings_defaults() -> None:
    settings = Settings(_env_file=None)
    assert settings.log_level == "INFO"
    assert settings.logging_level == logging.INFO
    assert settings.max_print == 8
    assert settings.payload_max_bytes == 5 * 1024 * 1024


def test_settings_read_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OWM_LOG_LEVEL", "debug")
    monkeypatch.setenv("OWM_MAX_PRINT", "3")
    settings = Settings(_env_file=None)
    assert settings.log_level == "DEBUG"
    assert settings.logging_level == logging.DEBUG
    assert settings.max_print == 3
    assert settings.safe_summary()["max_print"] == 3


def test_settings_read_dotenv(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text("OWM_PAYLOAD_MAX_BYTES=2048\n", encoding="utf-8")
    settings = Settings(_env_file=env_file)
    assert settings.payload_max_bytes == 2048


@pytest.mark.parametrize(
    ("name", "value"),
    [
        ("OWM_MAX_PRINT", "0"),
        ("OWM_PAYLOAD_MAX_BYTES", "-1"),
        ("OWM_LOG_LEVEL", "chatty"),
        ("OWM_MAX_PRINT", "many"),
    ],
)
def test_load_settings_wraps_invalid_values(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, name: str, value: str
) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv(name, value)
    with pytest.raises(ConfigError, match="Invalid configuration"):
        load_settings()


def test_json_formatter_redacts_api_keys() -> None:
    formatter = JsonConsoleFormatter()
    record = logging.LogRecord(
        name="owm_onecall",
        level=logging.ERROR,
        pathname=__file__,
        lineno=1,
        msg="request failed for https://api.openweathermap.org/data/3.0/onecall?lat=1&appid=%s&units=metric",
        args=("0123456789abcdef0123456789abcdef",),
        exc_info=None,
    )
    event = json.loads(formatter.format(record))
    assert event["level"] == "ERROR"
    assert event["logger"] == "owm_onecall"
    assert "0123456789abcdef" not in event["message"]
    assert f"appid={REDACTED}&units=metric" in event["message"]


def test_setup_logger_is_idempotent(monkeypatch: pytest.MonkeyPatch) -> None:
    logger = logging.getLogger("owm_onecall.test_setup")
    monkeypatch.setattr(logger, "handlers", [])
    first = setup_logger("owm_onecall.test_setup", level=logging.DEBUG)
    second = setup_logger("owm_onecall.test_setup")
    assert first is second
    assert len(second.handlers) == 1
    assert isinstance(second.handlers[0].formatter, JsonConsoleFormatter)
    assert second.propagate is False


def test_sanitize_helpers() -> None:
    header = sanitize_text("Authorization: Bearer abc.def")
    assert "abc.def" not in header
    assert header.startswith(f"Authorization={REDACTED}")
    nested = sanitize_for_logging(
        {"params": {"appid": "secret-key", "lat": 39.95}, "notes": ["api_key=xyz"]}
    )
    assert nested["params"] == {"appid": REDACTED, "lat": 39.95}
    assert nested["notes"] == [f"api_key={REDACTED}"]


def test_json_formatter_emits_redacted_decode_context() -> None:
    formatter = JsonConsoleFormatter()
    record = logging.LogRecord(
        name="owm_onecall.decoder",
        level=logging.WARNING,
        pathname=__file__,
        lineno=1,
        msg="One Call request returned %s",
        args=("OWM error 401: Invalid API key",),
        exc_info=None,
    )
    record.decode = {"cod": "401", "message": "rejected appid=0123456789abcdef", "appid": "x"}
    event = json.loads(formatter.format(record))
    assert event["decode"] == {
        "cod": "401",
        "message": f"rejected appid={REDACTED}",
        "appid": REDACTED,
    }


def test_json_formatter_omits_context_when_absent() -> None:
    record = logging.makeLogRecord({"name": "owm_onecall", "msg": "plain", "levelname": "INFO"})
    event = json.loads(JsonConsoleFormatter().format(record))
    assert "decode" not in event
    assert event["message"] == "plain"
