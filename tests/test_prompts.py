from datetime import date

import pytest

from vouch.prompts import NATIVE_WEB_SEARCH_UNAVAILABLE, forecast_window, weather_prompt


def test_forecast_window_is_inclusive() -> None:
    assert forecast_window(date(2026, 2, 17), 14) == (date(2026, 2, 17), date(2026, 3, 2))
    assert forecast_window(date(2026, 2, 17), 1) == (date(2026, 2, 17), date(2026, 2, 17))


def test_forecast_window_rejects_empty_range() -> None:
    with pytest.raises(ValueError):
        forecast_window(date(2026, 2, 17), 0)


def test_weather_prompt_mentions_range_and_sentinel() -> None:
    prompt = weather_prompt("New York City", date(2026, 2, 17), 14)

    assert "New York City weather from 2026-02-17 to 2026-03-02" in prompt
    assert "Use no local tools" in prompt
    assert "Include source URLs" in prompt
    assert prompt.endswith(f"respond with exactly: {NATIVE_WEB_SEARCH_UNAVAILABLE}")
