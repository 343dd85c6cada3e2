"""Command line entry point: which departures home can I still catch?"""

import argparse
import asyncio
import logging
import sys
from datetime import UTC, date, datetime, time

from colorama import just_fix_windows_console

from mvg_home import __version__
from mvg_home.adapters.config import AppConfig, default_config_path, load_config
from mvg_home.adapters.mvg_api import MvgDepartureRepository, MvgHttpClientFactory
from mvg_home.adapters.proxy import SystemProxyResolver
from mvg_home.adapters.terminal import (
    DepartureFormatter,
    JsonDisplayAdapter,
    TerminalDisplayAdapter,
)
from mvg_home.application.services import CommuteService, DepartureSelector
from mvg_home.domain.errors import MvgHomeError
from mvg_home.domain.ports import DisplayAdapter

logger = logging.getLogger(__name__)

LOG_LEVELS = (logging.WARNING, logging.INFO, logging.DEBUG)


def parse_start_time(value: str) -> datetime:
    """Parse --at: an ISO datetime or HH:MM today. Naive values are local time."""
    try:
        if len(value) <= 5 and ":" in value:
            parsed = datetime.combine(date.today(), time.fromisoformat(value))
        else:
            parsed = datetime.fromisoformat(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid time {value!r}: {e}") from e
    return parsed if parsed.tzinfo else parsed.astimezone()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mvg-home",
        description="Show the next MVG departures home that you can still catch.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Configuration is read from environment variables (MVG_HOME_*) and
{default_config_path()}, for example:

  [home]
  station_id = "de:09162:70"
  station_name = "Universität"
  walk_minutes = 7
  buffer_minutes = 2
  ignore_lines = ["N"]
""",
    )
    parser.add_argument("--config", metavar="FILE", help="Use a different configuration file")
    parser.add_argument("--station", metavar="ID", help="Station id to depart from")
    parser.add_argument(
        "-n",
        "--max-results",
        type=int,
        metavar="N",
        help="Number of departures to show",
    )
    parser.add_argument("--walk", type=int, metavar="MIN", help="Minutes to walk to the stop")
    parser.add_argument("--buffer", type=int, metavar="MIN", help="Safety buffer in minutes")
    parser.add_argument(
        "-s",
        "--at",
        type=parse_start_time,
        metavar="TIME",
        help="Leave at TIME (HH:MM or ISO datetime) instead of now",
    )
    parser.add_argument("--json", action="store_true", help="Output as JSON")
    parser.add_argument(
        "-v", "--verbose", action="count", default=0, help="Log more (repeat for debug output)"
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def configure_logging(verbosity: int) -> None:
    logging.basicConfig(
        level=LOG_LEVELS[min(verbosity, len(LOG_LEVELS) - 1)],
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )


def build_service(config: AppConfig) -> CommuteService:
    """Wire the commute service from configuration."""
    return CommuteService(
        proxy_resolver=SystemProxyResolver(
            config.mvg_api_base_url, timeout=config.proxy_discovery_timeout
        ),
        client_factory=MvgHttpClientFactory(
            config.mvg_api_base_url, timeout=config.mvg_api_timeout, ca_file=config.ca_file
        ),
        departure_repository=MvgDepartureRepository(
            config.mvg_api_base_url, limit=config.mvg_api_limit
        ),
        selector=DepartureSelector(config.max_results),
        walk_plan=config.walk_plan,
        ignore_lines=config.ignore_lines,
        include_cancelled=config.include_cancelled,
    )


def build_display(as_json: bool, formatter: DepartureFormatter) -> DisplayAdapter:
    if as_json:
        return JsonDisplayAdapter(formatter)
    return TerminalDisplayAdapter(formatter)


async def run(argv: list[str] | None = None) -> int:
    """Run the CLI and return the process exit code."""
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    display = build_display(args.json, DepartureFormatter())
    try:
        config = load_config(
            args.config,
            station_id=args.station,
            max_results=args.max_results,
            walk_minutes=args.walk,
            buffer_minutes=args.buffer,
        )
        station_id = config.require_station_id()
        display = build_display(args.json, DepartureFormatter(config.timezone))
        logger.info(
            f"Departures from {config.station_name or station_id} with "
            f"{config.walk_minutes} min walk and {config.buffer_minutes} min buffer"
        )
        recommendations = await build_service(config).recommend(station_id, now=args.at)
    except MvgHomeError as e:
        logger.debug("Aborting", exc_info=True)
        display.show_error(e)
        return 1

    display.show_recommendations(recommendations, args.at or datetime.now(UTC))
    return 0


def cli_main() -> None:
    """Console script entry point."""
    just_fix_windows_console()
    sys.exit(asyncio.run(run()))


if __name__ == "__main__":
    cli_main()
