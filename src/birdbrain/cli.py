"""
Command-line interface for the application.

Runs one ranking mode against the live APIs and prints the JSON payload a web
layer would return. Errors are printed as ``{"message": ...}`` on stderr.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from typing import Any

from birdbrain import __version__
from birdbrain.config import get_settings
from birdbrain.errors import ConfigurationError, error_payload
from birdbrain.flows.hotspots import HotspotFinder
from birdbrain.schemas import HealthStatus, Mode


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="birdbrain",
        description="Find nearby birding hotspots ranked by recent eBird activity",
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

    for mode, help_text in (
        (Mode.RANDOM, "Pick a random nearby hotspot"),
        (Mode.TOP, "Five most active nearby hotspots"),
        (Mode.NOTABLE, "Five nearby hotspots with the most notable species"),
    ):
        mode_parser = subparsers.add_parser(mode.value, help=help_text)
        mode_parser.add_argument("--lat", type=str, default=None, help="Latitude")
        mode_parser.add_argument("--lng", type=str, default=None, help="Longitude")
        mode_parser.add_argument(
            "--postal-code",
            type=str,
            default=None,
            help="5-digit US postal code (used when lat/lng are omitted)",
        )
        mode_parser.add_argument(
            "--distance-km",
            type=str,
            default=None,
            help="Search radius in km, clamped to 1-500 (default: from settings)",
        )

    subparsers.add_parser("info", help="Show application info")
    subparsers.add_parser("health", help="Print a health payload")

    return parser


def configure_logging(debug: bool) -> None:
    """Route log output to stderr so stdout stays valid JSON."""
    level = logging.DEBUG if debug else get_settings().log_level.upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _print_json(payload: dict[str, Any]) -> None:
    print(json.dumps(payload, indent=2))


def cmd_search(args: argparse.Namespace) -> int:
    """Handle the 'random', 'top' and 'notable' commands."""
    settings = get_settings()
    try:
        finder = HotspotFinder.from_settings(settings)
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2

    try:
        response = asyncio.run(
            finder.search(
                args.command,
                lat=args.lat,
                lng=args.lng,
                postal_code=args.postal_code,
                distance_km=args.distance_km,
            )
        )
    except Exception as exc:  # noqa: BLE001
        status, payload = error_payload(exc)
        print(json.dumps({**payload, "status": status}), file=sys.stderr)
        return 1

    _print_json(response.to_payload())
    return 0


def cmd_info(_args: argparse.Namespace) -> int:
    """Handle the 'info' command."""
    settings = get_settings()
    print(f"Application: {settings.app_name}")
    print(f"Version: {__version__}")
    print(f"Environment: {settings.app_env}")
    print(f"Debug: {settings.debug}")
    print(f"eBird API key: {'set' if settings.ebird_api_key else 'missing'}")
    return 0


def cmd_health(_args: argparse.Namespace) -> int:
    """Handle the 'health' command."""
    _print_json(HealthStatus().to_payload())
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    configure_logging(args.debug or get_settings().debug)

    commands = {
        Mode.RANDOM.value: cmd_search,
        Mode.TOP.value: cmd_search,
        Mode.NOTABLE.value: cmd_search,
        "info": cmd_info,
        "health": cmd_health,
    }

    handler = commands.get(args.command)
    if handler:
        return handler(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
