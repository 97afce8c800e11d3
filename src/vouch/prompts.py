"""Prompt text for the image and forecast turns."""

from __future__ import annotations

from datetime import date, timedelta

NATIVE_WEB_SEARCH_UNAVAILABLE = "NATIVE_WEB_SEARCH_UNAVAILABLE"
IMAGE_DESCRIPTION_PROMPT = "Describe this image. Include the key visual details and any visible text."


def forecast_window(start: date, days: int) -> tuple[date, date]:
    if days < 1:
        raise ValueError(f"days must be positive, got {days}")
    return start, start + timedelta(days=days - 1)


def weather_prompt(city: str, start: date, days: int = 14) -> str:
    first, last = forecast_window(start, days)
    return " ".join([
        f"Use ONLY native web search to find {city} weather from {first.isoformat()} to {last.isoformat()}.",
        "Use no local tools. Use provider-native web search only.",
        f"Return a day-by-day {days}-day forecast with highs/lows and precipitation chances.",
        "Include source URLs you actually used.",
        f"If native web search is unavailable, respond with exactly: {NATIVE_WEB_SEARCH_UNAVAILABLE}",
    ])
