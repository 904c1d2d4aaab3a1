"""
Command-line interface for the application.

This module provides the main entry point for the CLI.
"""

from __future__ import annotations

import argparse
import functools
import http.server
import logging
import sys
from pathlib import Path

from daily_highs import __version__
from daily_highs.config import get_settings
from daily_highs.datasources import PROVIDERS, get_adapter
from daily_highs.errors import DailyHighsError, user_message
from daily_highs.flows.build import build_all
from daily_highs.flows.fetch import fetch_all
from daily_highs.pipeline import fetch_high_temperatures
from daily_highs.renderers.text import format_calendar, format_failures, format_table
from daily_highs.schemas import FetchState


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="daily-highs",
        description="Daily high temperatures for a ZIP code, as a table or calendar",
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

    subparsers.add_parser("info", help="Show application info")

    def add_provider_args(p: argparse.ArgumentParser) -> None:
        p.add_argument(
            "--provider",
            choices=sorted(PROVIDERS),
            default=None,
            help="Weather provider (default: provider from settings)",
        )
        p.add_argument(
            "--api-key",
            default=None,
            help="API key for providers that need one (default: from settings)",
        )

    # 'fetch' command - print records to the terminal
    fetch_parser = subparsers.add_parser("fetch", help="Fetch and print daily highs")
    add_provider_args(fetch_parser)
    fetch_parser.add_argument(
        "--view",
        choices=["table", "calendar"],
        default="table",
        help="Output layout (default: table)",
    )

    # 'refresh' command - fetch data and build site
    refresh_parser = subparsers.add_parser("refresh", help="Fetch data and build site")
    add_provider_args(refresh_parser)

    # 'serve' command - serve built site locally
    serve_parser = subparsers.add_parser("serve", help="Serve site locally")
    serve_parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to serve on (default: api_port from settings)",
    )

    return parser


def configure_logging(debug: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def cmd_info(_args: argparse.Namespace) -> int:
    """Handle the 'info' command."""
    settings = get_settings()
    print(f"Application: {settings.app_name}")
    print(f"Version: {__version__}")
    print(f"Environment: {settings.app_env}")
    print(f"Provider: {settings.provider}")
    print(f"ZIP code: {settings.zip_code} ({settings.lat}, {settings.lon})")
    return 0


def _print_progress(state: FetchState) -> None:
    print(f"\rFetched {state.completed}/{state.total} days", end="", file=sys.stderr)
    if state.completed == state.total:
        print(file=sys.stderr)


def cmd_fetch(args: argparse.Namespace) -> int:
    """Handle the 'fetch' command: fetch and print records."""
    settings = get_settings()
    try:
        adapter = get_adapter(settings, args.provider, args.api_key)
    except DailyHighsError as exc:
        print(user_message(exc), file=sys.stderr)
        return 1

    outcome = fetch_high_temperatures(
        adapter,
        delay_seconds=settings.request_delay_seconds,
        default_retry_after=settings.default_retry_after_seconds,
        max_rate_limit_retries=settings.max_rate_limit_retries,
        on_progress=_print_progress if adapter.sequential else None,
    )
    if outcome.error:
        print(outcome.error, file=sys.stderr)
        return 1

    render = format_calendar if args.view == "calendar" else format_table
    print(f"Daily High Temperatures for {settings.zip_code}")
    print(render(outcome.records))
    failures = format_failures(outcome.failures)
    if failures:
        print(failures, file=sys.stderr)
    return 0


def cmd_refresh(args: argparse.Namespace) -> int:
    """Handle the 'refresh' command: fetch data then build site."""
    settings = get_settings()
    provider = getattr(args, "provider", None) or settings.provider
    if provider not in PROVIDERS:
        print(f"Unknown provider: {provider}", file=sys.stderr)
        return 1

    print(f"Fetching daily highs for {settings.zip_code} from {provider}...")
    outcome = fetch_all(provider=provider, api_key=getattr(args, "api_key", None))

    print("Building site...")
    build_all(outcome)

    if outcome.error:
        print(outcome.error, file=sys.stderr)
        return 1
    print("Done.")
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    """Handle the 'serve' command: serve the built site locally."""
    settings = get_settings()
    port = args.port if args.port is not None else settings.api_port
    site_dir = Path(settings.site_dir)

    if not site_dir.exists():
        print("No site directory found. Run 'daily-highs refresh' first.", file=sys.stderr)
        return 1

    handler = functools.partial(http.server.SimpleHTTPRequestHandler, directory=str(site_dir))

    with http.server.HTTPServer(("", port), handler) as server:
        print(f"Serving site on http://localhost:{port}/ (Ctrl+C to stop)")
        print("Use the page's Download/Print PDF button to print.")
        try:
            server.serve_forever()
        except KeyboardInterrupt:
            print("\nServer stopped.")

    return 0


def main() -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args()

    if args.command is None:
        parser.print_help()
        return 0

    configure_logging(getattr(args, "debug", False) or get_settings().debug)

    commands = {
        "info": cmd_info,
        "fetch": cmd_fetch,
        "refresh": cmd_refresh,
        "serve": cmd_serve,
    }

    handler = commands.get(args.command)
    if handler:
        return handler(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
