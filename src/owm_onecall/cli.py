"""Inspect CLI: decode a saved One Call payload and print a summary."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from datetime import UTC, datetime
from pathlib import Path

from rich.console import Console
from rich.table import Table

from .config import load_settings
from .exceptions import ConfigError, PayloadReadError, WeatherDecodeError
from .log_setup import setup_logger
from .redaction import sanitize_for_logging, sanitize_text
from .weather.decoder import OneCallDecoder
from .weather.models import (
    SECTION_NAMES,
    ApiError,
    ForecastResponse,
    WeatherDescriptor,
)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse inspect CLI arguments."""
    parser = argparse.ArgumentParser(
        description="Decode a saved OpenWeatherMap One Call payload and summarize it."
    )
    parser.add_argument("source", help="Path to a JSON payload file, or '-' for stdin.")
    parser.add_argument(
        "--section",
        action="append",
        choices=list(SECTION_NAMES),
        default=None,
        help="Section to print; repeatable. Defaults to every section present.",
    )
    parser.add_argument(
        "--max-print",
        type=int,
        default=None,
        help="Number of rows to print per section.",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the decoded payload in normalized wire form instead of tables.",
    )
    return parser.parse_args(argv)


def read_payload(source: str, max_bytes: int) -> bytes:
    """Read a payload from a file or stdin, enforcing the size limit."""
    if source == "-":
        data = sys.stdin.buffer.read(max_bytes + 1)
    else:
        path = Path(source)
        try:
            size = path.stat().st_size
            if size > max_bytes:
                raise PayloadReadError(
                    f"Payload {path} is {size} bytes; limit is {max_bytes} bytes."
                )
            data = path.read_bytes()
        except OSError as exc:
            raise PayloadReadError(f"Failed reading payload {path}: {exc}") from exc
    if len(data) > max_bytes:
        raise PayloadReadError(f"Payload exceeds limit of {max_bytes} bytes.")
    return data


def _fmt_time(value: datetime) -> str:
    return value.astimezone(UTC).replace(tzinfo=None).isoformat(sep=" ", timespec="minutes")


def _fmt_conditions(weather: Sequence[WeatherDescriptor]) -> str:
    if not weather:
        return "-"
    return ", ".join(f"{item.main.value} ({item.description})" for item in weather)


def _fmt_optional(value: float | None, suffix: str = "") -> str:
    return f"{value:g}{suffix}" if value is not None else "-"


def _print_forecast(
    console: Console,
    forecast: ForecastResponse,
    sections: Sequence[str],
    max_print: int,
) -> None:
    present = forecast.present_sections()
    console.print(f"Sections present: {', '.join(present) if present else 'none'}")

    for section in sections:
        if getattr(forecast, section) is None:
            console.print(f"Section '{section}' not present in payload.")

    if "current" in sections and forecast.current is not None:
        current = forecast.current
        table = Table(title="Current Conditions")
        table.add_column("Time (UTC)")
        table.add_column("Temp")
        table.add_column("Feels Like")
        table.add_column("Humidity")
        table.add_column("Wind")
        table.add_column("Rain 1h")
        table.add_column("Conditions", overflow="fold")
        table.add_row(
            _fmt_time(current.dt),
            f"{current.temp:g}",
            f"{current.feels_like:g}",
            f"{current.humidity}%",
            f"{current.wind_speed:g} @ {current.wind_deg}°",
            _fmt_optional(current.rain.one_hour if current.rain else None, " mm"),
            _fmt_conditions(current.weather),
        )
        console.print(table)

    if "minutely" in sections and forecast.minutely is not None:
        table = Table(title="Minutely Precipitation")
        table.add_column("Time (UTC)")
        table.add_column("Precip (mm)")
        for minute in forecast.minutely[:max_print]:
            table.add_row(_fmt_time(minute.dt), f"{minute.precipitation:g}")
        console.print(table)

    if "hourly" in sections and forecast.hourly is not None:
        table = Table(title="Hourly Forecast")
        table.add_column("Time (UTC)")
        table.add_column("Temp")
        table.add_column("Pop")
        table.add_column("Wind")
        table.add_column("Conditions", overflow="fold")
        for hour in forecast.hourly[:max_print]:
            table.add_row(
                _fmt_time(hour.dt),
                f"{hour.temp:g}",
                f"{hour.pop:.0%}",
                f"{hour.wind_speed:g} @ {hour.wind_deg}°",
                _fmt_conditions(hour.weather),
            )
        console.print(table)

    if "daily" in sections and forecast.daily is not None:
        table = Table(title="Daily Forecast")
        table.add_column("Date (UTC)")
        table.add_column("Min / Max")
        table.add_column("Pop")
        table.add_column("Rain (mm)")
        table.add_column("Snow (mm)")
        table.add_column("Conditions", overflow="fold")
        for day in forecast.daily[:max_print]:
            table.add_row(
                day.dt.astimezone(UTC).date().isoformat(),
                f"{day.temp.min:g} / {day.temp.max:g}",
                f"{day.pop:.0%}",
                _fmt_optional(day.rain),
                _fmt_optional(day.snow),
                _fmt_conditions(day.weather),
            )
        console.print(table)

    if "alerts" in sections and forecast.alerts is not None:
        table = Table(title="Alerts")
        table.add_column("Sender", overflow="fold")
        table.add_column("Event", overflow="fold")
        table.add_column("Start (UTC)")
        table.add_column("End (UTC)")
        table.add_column("Tags", overflow="fold")
        for alert in forecast.alerts[:max_print]:
            table.add_row(
                alert.sender_name,
                alert.event,
                _fmt_time(alert.start),
                _fmt_time(alert.end),
                ", ".join(alert.tags) or "-",
            )
        console.print(table)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the inspect workflow."""
    args = parse_args(argv)
    logger = setup_logger()
    console = Console()

    try:
        settings = load_settings()
    except ConfigError as exc:
        logger.error("Configuration failure: %s", exc)
        return 2
    logger.setLevel(settings.logging_level)
    logger.debug("Loaded settings: %s", settings.safe_summary())

    if args.max_print is not None and args.max_print <= 0:
        logger.error("--max-print must be > 0 when provided.")
        return 2

    try:
        raw = read_payload(args.source, settings.payload_max_bytes)
    except PayloadReadError as exc:
        logger.error("Payload read failure: %s", exc)
        return 3

    decoder = OneCallDecoder(logger=logger.getChild("decoder"))
    try:
        result = decoder.decode(raw)
    except WeatherDecodeError as exc:
        logger.error(
            "Decode failure: %s",
            exc,
            extra={"decode": {"kind": exc.kind, "path": exc.path, "source": args.source}},
        )
        return 4

    if isinstance(result, ApiError):
        if args.json:
            console.print_json(
                data=sanitize_for_logging(result.model_dump(mode="json", by_alias=True))
            )
        else:
            console.print(sanitize_text(str(result)), markup=False)
        return 5

    if args.json:
        console.print_json(
            data=result.model_dump(mode="json", by_alias=True, exclude_none=True)
        )
        return 0

    sections = args.section or result.present_sections()
    max_print = args.max_print or settings.max_print
    _print_forecast(console, result, sections=sections, max_print=max_print)
    return 0


if __name__ == "__main__":
    sys.exit(main())
