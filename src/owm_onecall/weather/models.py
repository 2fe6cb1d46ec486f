"""Typed records for OpenWeatherMap One Call responses.

Units follow whatever ``units`` the caller requested upstream; nothing here
converts them. Optional fields are ``None`` both when the key is absent and
when it is an explicit JSON null.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt, StrictStr

from .types import Condition, ErrorCode, UInt8, UInt16, UnixTimestamp


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class ApiError(_Record):
    """Error envelope returned instead of a forecast payload."""

    code: ErrorCode = Field(alias="cod")
    message: StrictStr

    def __str__(self) -> str:
        return f"OWM error {self.code}: {self.message}"


class WeatherDescriptor(_Record):
    """One entry of a ``weather`` array."""

    id: StrictInt = Field(description="Weather condition id")
    main: Condition
    description: StrictStr
    icon: StrictStr


class Precipitation(_Record):
    """Precipitation accumulated over the last hour, mm."""

    one_hour: StrictFloat = Field(alias="1h")


class CurrentConditions(_Record):
    """Current weather snapshot."""

    dt: UnixTimestamp
    sunrise: UnixTimestamp
    sunset: UnixTimestamp
    temp: StrictFloat
    feels_like: StrictFloat
    pressure: UInt16 = Field(description="Sea level pressure, hPa")
    humidity: UInt8 = Field(description="Humidity, %")
    dew_point: StrictFloat
    clouds: UInt8 = Field(description="Cloudiness, %")
    uvi: StrictFloat
    visibility: UInt16 | None = Field(default=None, description="Average visibility, metres")
    wind_speed: StrictFloat
    wind_gust: StrictFloat | None = None
    wind_deg: UInt16 = Field(description="Wind direction, meteorological degrees")
    rain: Precipitation | None = None
    snow: Precipitation | None = None
    weather: tuple[WeatherDescriptor, ...]


class MinuteForecastEntry(_Record):
    """Minute forecast entry; the API sends one per minute for the next hour."""

    dt: UnixTimestamp
    precipitation: StrictFloat = Field(description="Precipitation volume, mm")


class HourlyForecastEntry(_Record):
    """Hourly forecast entry."""

    dt: UnixTimestamp
    temp: StrictFloat
    feels_like: StrictFloat
    pressure: UInt16
    humidity: UInt8
    dew_point: StrictFloat
    uvi: StrictFloat = Field(description="UV index")
    clouds: UInt8 = Field(description="Cloudiness, %")
    visibility: UInt16 | None = Field(default=None, description="Average visibility, metres")
    wind_speed: StrictFloat
    wind_gust: StrictFloat | None = None
    wind_deg: UInt16
    pop: StrictFloat = Field(description="Probability of precipitation, 0..1")
    rain: Precipitation | None = None
    snow: Precipitation | None = None
    weather: tuple[WeatherDescriptor, ...]


class DailyTemperature(_Record):
    """Daily temperatures by time of day, plus the day's minimum and maximum."""

    morn: StrictFloat
    day: StrictFloat
    eve: StrictFloat
    night: StrictFloat
    min: StrictFloat
    max: StrictFloat


class DailyFeelsLike(_Record):
    """Daily apparent temperatures by time of day."""

    morn: StrictFloat
    day: StrictFloat
    eve: StrictFloat
    night: StrictFloat


class DailyForecastEntry(_Record):
    """Daily forecast entry.

    Unlike current and hourly data, daily ``rain``/``snow`` are flat totals in
    mm rather than ``{"1h": ...}`` objects; this matches the wire format.
    """

    dt: UnixTimestamp
    sunrise: UnixTimestamp
    sunset: UnixTimestamp
    moonrise: UnixTimestamp = Field(description="Moon rise time for the day, UTC")
    moonset: UnixTimestamp = Field(description="Moon set time for the day, UTC")
    moon_phase: StrictFloat = Field(
        description="0 and 1 are new moon, 0.25 first quarter, 0.5 full, 0.75 last quarter"
    )
    temp: DailyTemperature
    feels_like: DailyFeelsLike
    pressure: UInt16
    humidity: UInt8
    dew_point: StrictFloat
    wind_speed: StrictFloat
    wind_gust: StrictFloat | None = None
    wind_deg: UInt16
    clouds: UInt8
    uvi: StrictFloat = Field(description="Maximum UV index for the day")
    pop: StrictFloat = Field(description="Probability of precipitation, 0..1")
    rain: StrictFloat | None = Field(default=None, description="Precipitation volume, mm")
    snow: StrictFloat | None = Field(default=None, description="Snow volume, mm")
    weather: tuple[WeatherDescriptor, ...]


class Alert(_Record):
    """National weather alert."""

    sender_name: StrictStr
    event: StrictStr
    start: UnixTimestamp
    end: UnixTimestamp
    description: StrictStr
    tags: tuple[StrictStr, ...]


class ForecastResponse(_Record):
    """Top-level One Call payload.

    Which sections are present depends on the ``exclude`` parameter of the
    upstream request, so an absent section stays ``None`` instead of ``()``.
    """

    current: CurrentConditions | None = None
    minutely: tuple[MinuteForecastEntry, ...] | None = None
    hourly: tuple[HourlyForecastEntry, ...] | None = None
    daily: tuple[DailyForecastEntry, ...] | None = None
    alerts: tuple[Alert, ...] | None = None

    def present_sections(self) -> list[str]:
        return [name for name in SECTION_NAMES if getattr(self, name) is not None]


SECTION_NAMES = ("current", "minutely", "hourly", "daily", "alerts")
