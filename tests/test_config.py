"""Tests for configuration helpers."""

import pytest

from carb_counter.config import Settings, parse_storage_backend


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (None, "file"),
        ("", "file"),
        (" Memory ", "memory"),
        ("SUPABASE", "supabase"),
        ("redis", "file"),
    ],
)
def test_parse_storage_backend(raw: str | None, expected: str) -> None:
    assert parse_storage_backend(raw) == expected


def test_settings_read_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CARB_STORAGE_BACKEND", "memory")
    monkeypatch.setenv("CARB_HISTORY_LIMIT", "5")

    settings = Settings()

    assert settings.storage_backend == "memory"
    assert settings.history_limit == 5
    assert settings.usage_window == 10


def test_settings_read_log_level(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CARB_LOG_LEVEL", "DEBUG")

    assert Settings().log_level == "DEBUG"
    monkeypatch.delenv("CARB_LOG_LEVEL")
    assert Settings().log_level == "INFO"
