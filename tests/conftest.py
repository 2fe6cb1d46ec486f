"""Shared One Call payload fixtures, modelled on the documented API example."""

from __future__ import annotations

from typing import Any

import pytest


def _weather(
    main: str = "Clear",
    *,
    condition_id: int = 800,
    description: str = "clear sky",
    icon: str = "01d",
) -> dict[str, Any]:
    return {"id": condition_id, "main": main, "description": description, "icon": icon}


@pytest.fixture
def current_payload() -> dict[str, Any]:
    return {
        "dt": 1721691041,
        "sunrise": 1721647543,
        "sunset": 1721701329,
        "temp": 21.5,
        "feels_like": 21.2,
        "pressure": 1015,
        "humidity": 64,
        "dew_point": 14.3,
        "uvi": 0.89,
        "clouds": 0,
        "visibility": 10000,
        "wind_speed": 3.6,
        "wind_deg": 250,
        "weather": [_weather()],
    }


@pytest.fixture
def hourly_payload() -> dict[str, Any]:
    return {
        "dt": 1721692800,
        "temp": 20.9,
        "feels_like": 20.7,
        "pressure": 1015,
        "humidity": 68,
        "dew_point": 14.7,
        "uvi": 0,
        "clouds": 20,
        "visibility": 10000,
        "wind_speed": 2.9,
        "wind_deg": 245,
        "wind_gust": 5.1,
        "weather": [_weather("Rain", condition_id=500, description="light rain", icon="10n")],
        "pop": 0.35,
        "rain": {"1h": 0.25},
    }


@pytest.fixture
def daily_payload() -> dict[str, Any]:
    return {
        "dt": 1721728800,
        "sunrise": 1721733992,
        "sunset": 1721787689,
        "moonrise": 1721778840,
        "moonset": 1721728260,
        "moon_phase": 0.58,
        "summary": "Expect a day of partly cloudy with rain",
        "temp": {
            "day": 24.1,
            "min": 15.2,
            "max": 25.6,
            "night": 17.4,
            "eve": 22.8,
            "morn": 15.9,
        },
        "feels_like": {"day": 24.0, "night": 17.3, "eve": 22.7, "morn": 15.7},
        "pressure": 1013,
        "humidity": 55,
        "dew_point": 14.4,
        "wind_speed": 4.7,
        "wind_deg": 236,
        "wind_gust": 9.8,
        "weather": [_weather("Rain", condition_id=501, description="moderate rain", icon="10d")],
        "clouds": 48,
        "pop": 0.8,
        "rain": 3.12,
        "uvi": 6.4,
    }


@pytest.fixture
def alert_payload() -> dict[str, Any]:
    return {
        "sender_name": "NWS Philadelphia - Mount Holly (New Jersey, Delaware, Southeastern Pennsylvania)",
        "event": "Small Craft Advisory",
        "start": 1721736000,
        "end": 1721764800,
        "description": "...SMALL CRAFT ADVISORY REMAINS IN EFFECT FROM 5 PM THIS AFTERNOON...",
        "tags": ["Wind", "Marine"],
    }


@pytest.fixture
def onecall_payload(
    current_payload: dict[str, Any],
    hourly_payload: dict[str, Any],
    daily_payload: dict[str, Any],
    alert_payload: dict[str, Any],
) -> dict[str, Any]:
    return {
        "lat": 39.9526,
        "lon": -75.1652,
        "timezone": "America/New_York",
        "timezone_offset": -14400,
        "current": current_payload,
        "minutely": [
            {"dt": 1721691060, "precipitation": 0},
            {"dt": 1721691120, "precipitation": 0.12},
        ],
        "hourly": [hourly_payload],
        "daily": [daily_payload],
        "alerts": [alert_payload],
    }
