"""Command line front-end for the stop router.

Examples:
  # Cheapest route between two stops
  stop-router route "HASTINGS ST FS HOLDOM AVE EB" "BROADWAY FS COMMERCIAL DR WB"

  # Stops whose name starts with a prefix
  stop-router search "hastings st"

  # Wildcard search, "." matches any character
  stop-router match "MAIN ST FS ..TH AVE NB"

  # Trips with a stop at a given time
  stop-router trips 05:25:00
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .adapters.feed import CSVFeedRepository
from .config import AppConfig, ObservabilityConfig, get_config
from .domain.errors import StopRouterError
from .domain.models import Stop
from .services import RoutePlannerService, StopSearchService, TripSearchService


def configure_logging(config: ObservabilityConfig, debug: bool = False) -> None:
    """Configure root logging from the observability settings."""
    level = logging.DEBUG if debug else getattr(logging, config.level.upper(), logging.INFO)
    logging.basicConfig(level=level, format=config.format)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="stop-router",
        description="Stop search and shortest routes over a GTFS-style transit feed",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__.split("Examples:", 1)[1] if __doc__ else None,
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("--data-dir", type=Path, help="Directory holding the feed files")
    parser.add_argument(
        "--policy",
        choices=["finalize_on_pop", "first_enqueue"],
        help="Shortest-path relaxation policy",
    )

    subparsers = parser.add_subparsers(dest="command")

    route_parser = subparsers.add_parser("route", help="Cheapest route between two stops")
    route_parser.add_argument("start", help="Departure stop name")
    route_parser.add_argument("end", help="Arrival stop name")

    search_parser = subparsers.add_parser("search", help="Stops starting with a prefix")
    search_parser.add_argument("prefix", help="Start of the stop name")

    match_parser = subparsers.add_parser("match", help="Stops matching a wildcard pattern")
    match_parser.add_argument("pattern", help="Pattern where '.' matches any character")

    trips_parser = subparsers.add_parser("trips", help="Trips arriving at a given time")
    trips_parser.add_argument("time", help="Arrival time as HH:MM:SS")

    return parser


def _apply_overrides(config: AppConfig, args: argparse.Namespace) -> AppConfig:
    if args.data_dir is not None:
        config = config.model_copy(
            update={"feed": config.feed.model_copy(update={"data_dir": args.data_dir})}
        )
    if args.policy is not None:
        config = config.model_copy(
            update={
                "routing": config.routing.model_copy(
                    update={"relaxation_policy": args.policy}
                )
            }
        )
    return config


def _print_stops(stops: List[Stop]) -> None:
    if not stops:
        print("No results have been found")
        return
    for stop in stops:
        print(f"{stop.name} (id {stop.stop_id})")


def run(args: argparse.Namespace, config: AppConfig) -> int:
    repository = CSVFeedRepository(config.feed)
    stop_search = StopSearchService(repository)

    if args.command == "route":
        planner = RoutePlannerService(repository, config.routing, stop_search)
        route = planner.plan(args.start, args.end)
        for line in planner.format_route(route):
            print(line)
    elif args.command == "search":
        _print_stops(stop_search.search(args.prefix))
    elif args.command == "match":
        _print_stops(stop_search.match(args.pattern))
    elif args.command == "trips":
        service = TripSearchService(repository)
        trips = service.trips_arriving_at(args.time)
        if not trips:
            print("No trips exist with this arrival time")
        for trip in trips:
            print(service.format_trip(trip))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help()
        return 2

    config = _apply_overrides(get_config(), args)
    configure_logging(config.observability, args.debug)

    try:
        return run(args, config)
    except StopRouterError as e:
        logging.getLogger(__name__).debug("Command failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
