from __future__ import annotations

import logging

import pytest
from pydantic import ValidationError

from .models import TimelineConfig, TimelineRecord, ToAbsoluteDayRequest
from .settings import Settings
from .values import ListValue, NumberValue, StringValue, coerce_value


def test_record_wraps_properties_as_values():
    record = TimelineRecord(
        id="notes/battle.md",
        properties={"start": "2024-01-01", "rank": 3, "calendar": [30, 30], "done": True},
    )
    assert record.identity == "notes/battle.md"
    assert record.get_value("start") == StringValue("2024-01-01")
    assert record.get_value("rank") == NumberValue(3)
    assert record.get_value("calendar") == ListValue((30, 30))
    assert record.get_value("done") is None
    assert record.get_value("missing") is None


def test_value_truthiness():
    assert ListValue((1,)).is_truthy()
    assert not ListValue(()).is_truthy()
    assert StringValue("0").is_truthy()
    assert not StringValue("").is_truthy()
    assert NumberValue(-1).is_truthy()
    assert NumberValue(10**400).is_truthy()
    assert NumberValue(10**400).as_float() is None
    assert NumberValue(float("inf")).as_float() is None
    assert NumberValue(7).as_float() == 7.0
    assert not NumberValue(0).is_truthy()
    assert not NumberValue(float("nan")).is_truthy()
    assert coerce_value(object()) is None


def test_timeline_config_normalises_input():
    config = TimelineConfig(start_prop=" ", end_prop="end", mode="timeline", pixels_per_day=0)
    assert config.start_prop is None
    assert config.end_prop == "end"
    assert config.mode == "notes"
    assert config.pixels_per_day == 0.001

    assert TimelineConfig(mode="events").mode == "events"
    assert TimelineConfig(pixels_per_day="fast").pixels_per_day is None
    assert TimelineConfig(pixels_per_day=12).pixels_per_day == 12.0
    assert TimelineConfig(pixels_per_day=10**400).pixels_per_day == 200.0
    assert TimelineConfig(pixels_per_day=-(10**400)).pixels_per_day == 0.001
    assert TimelineConfig(pixels_per_day=float("nan")).pixels_per_day is None


def test_calendar_request_bounds():
    with pytest.raises(ValidationError):
        ToAbsoluteDayRequest(year=1, month=1, day=1, months=[-3])
    request = ToAbsoluteDayRequest(year=1, month=13, day=1, months=None)
    assert request.month == 13


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("CHRONOLANES_ALLOWED_ORIGINS", "https://a.example, https://b.example")
    monkeypatch.setenv("CHRONOLANES_MAX_RECORDS", "250")
    loaded = Settings(_env_file=None)
    assert loaded.allowed_origins == ["https://a.example", "https://b.example"]
    assert loaded.max_records == 250


def test_settings_accept_json_origins(monkeypatch):
    monkeypatch.setenv("CHRONOLANES_ALLOWED_ORIGINS", '["https://c.example"]')
    assert Settings(_env_file=None).allowed_origins == ["https://c.example"]


def test_settings_fall_back_to_info_for_unknown_log_level(monkeypatch, caplog):
    monkeypatch.setenv("CHRONOLANES_LOG_LEVEL", "chatty")
    with caplog.at_level(logging.WARNING, logger="chronolanes.settings"):
        loaded = Settings(_env_file=None)
    assert loaded.log_level == "INFO"
    assert "chatty" in caplog.text
