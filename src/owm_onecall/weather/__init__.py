"""Typed decoding for OpenWeatherMap One Call payloads."""

from .decoder import (
    OneCallDecoder,
    decode_condition,
    decode_error_code,
    decode_timestamp,
)
from .models import (
    Alert,
    ApiError,
    CurrentConditions,
    DailyFeelsLike,
    DailyForecastEntry,
    DailyTemperature,
    ForecastResponse,
    HourlyForecastEntry,
    MinuteForecastEntry,
    Precipitation,
    WeatherDescriptor,
)
from .types import NumericErrorCode, TextErrorCode, WeatherCondition

__all__ = [
    "Alert",
    "ApiError",
    "CurrentConditions",
    "DailyFeelsLike",
    "DailyForecastEntry",
    "DailyTemperature",
    "ForecastResponse",
    "HourlyForecastEntry",
    "MinuteForecastEntry",
    "NumericErrorCode",
    "OneCallDecoder",
    "Precipitation",
    "TextErrorCode",
    "WeatherCondition",
    "WeatherDescriptor",
    "decode_condition",
    "decode_error_code",
    "decode_timestamp",
]
