"""Decode raw One Call JSON documents into typed records."""

from __future__ import annotations

import json
import logging
import math
from collections.abc import Mapping
from datetime import datetime
from typing import Any, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError

from ..exceptions import DecodeErrorKind, OpenWeatherAPIError, WeatherDecodeError
from .models import ApiError, ForecastResponse
from .types import (
    Condition,
    ErrorCode,
    NumericErrorCode,
    TextErrorCode,
    UnixTimestamp,
    WeatherCondition,
)

Payload = bytes | bytearray | str | Mapping[str, Any]
ModelT = TypeVar("ModelT", bound=BaseModel)

ROOT_PATH = "<root>"

_OUT_OF_RANGE_TYPES = frozenset(
    {
        "timestamp_out_of_range",
        "error_code_out_of_range",
        "greater_than_equal",
        "less_than_equal",
    }
)
_UNRECOGNIZED_ENUM_TYPES = frozenset({"enum", "weather_condition_unknown"})

_TIMESTAMP_ADAPTER: TypeAdapter[datetime] = TypeAdapter(UnixTimestamp)
_ERROR_CODE_ADAPTER: TypeAdapter[TextErrorCode | NumericErrorCode] = TypeAdapter(ErrorCode)
_CONDITION_ADAPTER: TypeAdapter[WeatherCondition] = TypeAdapter(Condition)


def classify_error_type(error_type: str) -> DecodeErrorKind:
    """Map a pydantic error type onto one of the decode failure kinds."""
    if error_type == "missing":
        return "missing_field"
    if error_type in _OUT_OF_RANGE_TYPES:
        return "out_of_range"
    if error_type in _UNRECOGNIZED_ENUM_TYPES:
        return "unrecognized_enum"
    return "type_mismatch"


def format_error_path(loc: tuple[int | str, ...]) -> str:
    return ".".join(str(part) for part in loc) if loc else ROOT_PATH


def translate_validation_error(exc: ValidationError) -> WeatherDecodeError:
    """Collapse a pydantic ValidationError into a single WeatherDecodeError.

    The first reported error decides kind and path; the full list is kept on
    ``errors`` for diagnostics.
    """
    errors = exc.errors(include_url=False)
    first = errors[0]
    return WeatherDecodeError(
        first["msg"],
        kind=classify_error_type(first["type"]),
        path=format_error_path(first["loc"]),
        errors=errors,
    )


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-standard JSON constant {name!r}")


def _parse_finite_float(text: str) -> float:
    value = float(text)
    if not math.isfinite(value):
        raise ValueError(f"number {text} is out of range for a float")
    return value


def load_json(payload: bytes | bytearray | str) -> Any:
    """Parse JSON text, rejecting NaN/Infinity the way strict parsers do."""
    try:
        return json.loads(
            payload,
            parse_constant=_reject_constant,
            parse_float=_parse_finite_float,
        )
    except ValueError as exc:
        raise WeatherDecodeError(
            f"payload is not valid JSON: {exc}",
            kind="malformed_json",
        ) from exc
    except RecursionError as exc:
        raise WeatherDecodeError(
            "payload is not valid JSON: nesting exceeds the parser depth limit",
            kind="malformed_json",
        ) from exc


def _adapt(adapter: TypeAdapter[Any], value: Any) -> Any:
    try:
        return adapter.validate_python(value)
    except ValidationError as exc:
        raise translate_validation_error(exc) from exc


def decode_timestamp(value: Any) -> datetime:
    """Decode one JSON epoch-seconds value into an aware UTC datetime."""
    return _adapt(_TIMESTAMP_ADAPTER, value)


def decode_error_code(value: Any) -> TextErrorCode | NumericErrorCode:
    """Decode a ``cod`` value, remembering whether it was text or a number."""
    return _adapt(_ERROR_CODE_ADAPTER, value)


def decode_condition(value: Any) -> WeatherCondition:
    return _adapt(_CONDITION_ADAPTER, value)


class OneCallDecoder:
    """Decode One Call payloads into ForecastResponse or ApiError values.

    The decoder keeps no state between calls, so one instance may be shared.
    """

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self.logger = logger or logging.getLogger("owm_onecall.weather.decoder")

    def decode(self, payload: Payload) -> ForecastResponse | ApiError:
        """Decode a payload that may be either a forecast or an error envelope.

        A top-level object carrying ``cod`` is treated as an error envelope.
        """
        document = self._load(payload)
        if isinstance(document, Mapping) and "cod" in document:
            return self._decode_error_document(document)
        return self._decode_forecast_document(document)

    def decode_forecast(self, payload: Payload) -> ForecastResponse:
        return self._decode_forecast_document(self._load(payload))

    def decode_error(self, payload: Payload) -> ApiError:
        return self._decode_error_document(self._load(payload))

    def decode_forecast_or_raise(self, payload: Payload) -> ForecastResponse:
        """Decode a forecast, raising OpenWeatherAPIError for error envelopes."""
        result = self.decode(payload)
        if isinstance(result, ApiError):
            self.logger.warning(
                "One Call request returned %s",
                result,
                extra={"decode": {"cod": str(result.code), "message": result.message}},
            )
            raise OpenWeatherAPIError(result)
        return result

    def _decode_forecast_document(self, document: Any) -> ForecastResponse:
        forecast = self._validate(ForecastResponse, document, what="forecast")
        self.logger.debug(
            "Decoded One Call forecast with sections: %s",
            ", ".join(forecast.present_sections()) or "none",
        )
        return forecast

    def _decode_error_document(self, document: Any) -> ApiError:
        api_error = self._validate(ApiError, document, what="error envelope")
        self.logger.debug(
            "Decoded One Call error envelope (%s code %s)",
            api_error.code.kind,
            api_error.code,
        )
        return api_error

    def _load(self, payload: Any) -> Any:
        if not isinstance(payload, (bytes, bytearray, str)):
            return payload
        try:
            return load_json(payload)
        except WeatherDecodeError as exc:
            self.logger.warning(
                "One Call payload rejected: %s",
                exc,
                extra={"decode": {"kind": exc.kind, "path": exc.path}},
            )
            raise

    def _validate(self, model: type[ModelT], document: Any, *, what: str) -> ModelT:
        try:
            return model.model_validate(document)
        except ValidationError as exc:
            error = translate_validation_error(exc)
            self.logger.warning(
                "One Call %s decode failed: kind=%s path=%s reason=%s",
                what,
                error.kind,
                error.path,
                error.message,
                extra={"decode": {"kind": error.kind, "path": error.path, "document": what}},
            )
            raise error from exc
