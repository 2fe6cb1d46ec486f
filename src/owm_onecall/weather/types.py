"""Leaf value types shared by the One Call records.

These are the only places where decoding does more than map a JSON key onto a
field: epoch-second timestamps, the string-or-number ``cod`` error code, and the
closed weather-condition vocabulary.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from enum import StrEnum
from typing import Annotated, Any, ClassVar

from pydantic import Field, PlainSerializer, PlainValidator, StrictInt
from pydantic_core import PydanticCustomError

EPOCH = datetime(1970, 1, 1, tzinfo=UTC)

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1
INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1

# Bounds of ``datetime`` expressed as epoch seconds: 0001-01-01T00:00:00Z and
# 9999-12-31T23:59:59Z.
TIMESTAMP_MIN = -62135596800
TIMESTAMP_MAX = 253402300799


def _is_json_integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_unix_timestamp(value: Any) -> datetime:
    """Convert Unix epoch seconds into an aware UTC datetime.

    JSON serializers may emit the same timestamp as a signed or an unsigned
    number; both arrive here as ``int``. Anything past the signed 64-bit range
    cannot be a valid offset. Values inside it that ``datetime`` cannot hold
    are rejected as well rather than clamped.
    """
    if isinstance(value, datetime):
        if value.tzinfo is None:
            raise PydanticCustomError(
                "timestamp_type",
                "invalid type: expected a unix timestamp in seconds, got a naive datetime",
            )
        if value.microsecond:
            raise PydanticCustomError(
                "timestamp_type",
                "invalid type: expected a unix timestamp in whole seconds, got {value}",
                {"value": value.isoformat()},
            )
        try:
            return value.astimezone(UTC)
        except OverflowError:
            raise PydanticCustomError(
                "timestamp_out_of_range",
                "value out of range: {value}",
                {"value": value.isoformat()},
            ) from None
    if not _is_json_integer(value):
        raise PydanticCustomError(
            "timestamp_type",
            "invalid type: expected a unix timestamp in seconds",
        )
    if value > INT64_MAX or value < INT64_MIN:
        raise PydanticCustomError(
            "timestamp_out_of_range",
            "value out of range: {value}",
            {"value": str(value)},
        )
    try:
        return EPOCH + timedelta(seconds=value)
    except OverflowError:
        raise PydanticCustomError(
            "timestamp_out_of_range",
            "value out of range: {value}",
            {"value": str(value)},
        ) from None


def encode_unix_timestamp(value: datetime) -> int:
    """Whole seconds between ``value`` and the Unix epoch."""
    return (value - EPOCH) // timedelta(seconds=1)


UnixTimestamp = Annotated[
    datetime,
    PlainValidator(validate_unix_timestamp),
    PlainSerializer(encode_unix_timestamp, return_type=int),
]


@dataclass(frozen=True)
class TextErrorCode:
    """Error code the API sent as a JSON string, e.g. ``"404"``."""

    value: str
    kind: ClassVar[str] = "text"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class NumericErrorCode:
    """Error code the API sent as a JSON number, e.g. ``401``."""

    value: int
    kind: ClassVar[str] = "number"

    def __str__(self) -> str:
        return str(self.value)


def validate_error_code(value: Any) -> TextErrorCode | NumericErrorCode:
    """Tag ``cod`` by the JSON token kind it arrived as, with no coercion."""
    if isinstance(value, (TextErrorCode, NumericErrorCode)):
        return value
    if isinstance(value, str):
        return TextErrorCode(value)
    if _is_json_integer(value):
        if not INT32_MIN <= value <= INT32_MAX:
            raise PydanticCustomError(
                "error_code_out_of_range",
                "value out of range: {value}",
                {"value": str(value)},
            )
        return NumericErrorCode(value)
    raise PydanticCustomError(
        "error_code_type",
        "invalid type: expected a string or integer error code",
    )


def encode_error_code(code: TextErrorCode | NumericErrorCode) -> str | int:
    return code.value


ErrorCode = Annotated[
    TextErrorCode | NumericErrorCode,
    PlainValidator(validate_error_code),
    PlainSerializer(encode_error_code, return_type=str | int),
]


class WeatherCondition(StrEnum):
    """Group of weather parameters reported in ``weather[].main``."""

    THUNDERSTORM = "Thunderstorm"
    DRIZZLE = "Drizzle"
    RAIN = "Rain"
    SNOW = "Snow"
    MIST = "Mist"
    SMOKE = "Smoke"
    HAZE = "Haze"
    DUST = "Dust"
    FOG = "Fog"
    SAND = "Sand"
    ASH = "Ash"
    SQUALL = "Squall"
    TORNADO = "Tornado"
    CLEAR = "Clear"
    CLOUDS = "Clouds"


def validate_condition(value: Any) -> WeatherCondition:
    """Exact, case-sensitive lookup in the closed condition vocabulary."""
    if not isinstance(value, str):
        raise PydanticCustomError(
            "weather_condition_type",
            "invalid type: expected a weather condition string",
        )
    try:
        return WeatherCondition(value)
    except ValueError:
        raise PydanticCustomError(
            "weather_condition_unknown",
            "unknown weather condition '{value}'",
            {"value": str(value)},
        ) from None


Condition = Annotated[
    WeatherCondition,
    PlainValidator(validate_condition),
    PlainSerializer(lambda condition: condition.value, return_type=str),
]

UInt8 = Annotated[StrictInt, Field(ge=0, le=255)]
UInt16 = Annotated[StrictInt, Field(ge=0, le=65535)]
