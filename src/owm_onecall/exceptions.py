"""Application exception classes."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Literal

if TYPE_CHECKING:
    from .weather.models import ApiError

DecodeErrorKind = Literal[
    "type_mismatch",
    "out_of_range",
    "unrecognized_enum",
    "missing_field",
    "malformed_json",
]


class ConfigError(Exception):
    """Raised when configuration is invalid or incomplete."""


class WeatherDecodeError(Exception):
    """Raised when a One Call payload cannot be decoded into typed records."""

    def __init__(
        self,
        message: str,
        *,
        kind: DecodeErrorKind,
        path: str = "<root>",
        errors: list[dict[str, Any]] | None = None,
    ) -> None:
        super().__init__(f"{kind} at {path}: {message}")
        self.message = message
        self.kind = kind
        self.path = path
        self.errors = errors or []


class OpenWeatherAPIError(Exception):
    """Raised when the API answered with an error envelope instead of a forecast."""

    def __init__(self, api_error: ApiError) -> None:
        super().__init__(str(api_error))
        self.api_error = api_error


class PayloadReadError(Exception):
    """Raised when a saved payload cannot be read or exceeds the size limit."""
