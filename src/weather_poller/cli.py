"""
Command-line interface for the weather poller.

This module provides the main entry point for the CLI.
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from functools import partial

from weather_poller import __version__
from weather_poller.config import get_settings
from weather_poller.datasources.openweather import fetch_current
from weather_poller.polling import Failure, PollCycle, Poller, Success, fetch_once_blocking
from weather_poller.schemas import CurrentWeather
from weather_poller.services.http import create_session


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="weather-poller",
        description="Poll OpenWeatherMap for current weather",
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # 'once' command - blocking one-shot fetch
    once_parser = subparsers.add_parser("once", help="Fetch current weather once")
    once_parser.add_argument(
        "--location",
        type=str,
        default=None,
        help="City name, city id or 'lat,lon' (default: location from settings)",
    )
    once_parser.add_argument(
        "--timeout",
        type=float,
        default=60.0,
        help="Seconds to keep retrying before giving up (default: 60)",
    )

    # 'watch' command - print every new update until interrupted
    watch_parser = subparsers.add_parser("watch", help="Poll continuously and print updates")
    watch_parser.add_argument(
        "--location",
        type=str,
        default=None,
        help="City name, city id or 'lat,lon' (default: location from settings)",
    )
    watch_parser.add_argument(
        "--interval",
        type=int,
        default=None,
        help="Minutes between polls (default: interval_minutes from settings)",
    )

    # 'info' command
    subparsers.add_parser("info", help="Show application info")

    return parser


def format_weather(record: CurrentWeather) -> str:
    """One-line summary of a weather record."""
    conditions = ", ".join(c.description for c in record.weather) or "n/a"
    return (
        f"{record.name}, {record.sys.country}: {record.main.temp:.1f}° "
        f"(feels {record.main.feels_like:.1f}°), {conditions}, "
        f"humidity {record.main.humidity:.0f}%, wind {record.wind.speed:.1f}"
    )


def _make_cycle() -> PollCycle:
    """Poll cycle using the endpoint and timeout from settings."""
    settings = get_settings()
    fetch = partial(
        fetch_current,
        base_url=settings.base_url,
        session=create_session(timeout=settings.request_timeout),
    )
    return PollCycle(fetch=fetch)


def cmd_once(args: argparse.Namespace) -> int:
    """Handle the 'once' command."""
    settings = get_settings()
    location = args.location or settings.location
    try:
        outcome = fetch_once_blocking(
            location,
            settings.units,
            settings.language,
            settings.api_key,
            timeout=args.timeout,
            cycle=_make_cycle(),
            retry_delay=settings.retry_seconds,
        )
    except TimeoutError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(format_weather(outcome.record))
    return 0


def cmd_watch(args: argparse.Namespace) -> int:
    """Handle the 'watch' command: probe once a second, print what's new."""
    settings = get_settings()
    target = settings.target(args.location, args.interval)
    if target.one_shot:
        print("Interval is 0; use 'once' for a single fetch.", file=sys.stderr)
        return 1

    with Poller(target, cycle=_make_cycle(), retry_delay=settings.retry_seconds) as poller:
        print(f"Polling {target.location} every {target.interval} (Ctrl+C to stop)")
        try:
            while True:
                outcome = poller.poll()
                if isinstance(outcome, Success):
                    print(format_weather(outcome.record))
                elif isinstance(outcome, Failure):
                    print(f"[{outcome.error.kind.value}] {outcome.error.message}")
                time.sleep(1)
        except KeyboardInterrupt:
            print("\nStopped.")

    return 0


def cmd_info(_args: argparse.Namespace) -> int:
    """Handle the 'info' command."""
    settings = get_settings()
    print(f"Application: {settings.app_name}")
    print(f"Version: {__version__}")
    print(f"Location: {settings.location}")
    print(f"Units: {settings.units.value}")
    print(f"Language: {settings.language}")
    print(f"Interval: {settings.interval_minutes} min")
    print(f"API key: {'set' if settings.api_key else 'not set'}")
    return 0


def main() -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args()

    if args.command is None:
        parser.print_help()
        return 0

    logging.basicConfig(
        level=logging.DEBUG if args.debug or get_settings().debug else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    commands = {
        "once": cmd_once,
        "watch": cmd_watch,
        "info": cmd_info,
    }

    handler = commands.get(args.command)
    if handler:
        return handler(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
