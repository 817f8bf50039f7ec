"""High-level pipeline orchestration for the Journey Planner.

The pipeline is organized in several stages:

1. Static topology loading (locations and gates from JSON).
2. One refresh of every enabled ephemeral feed.
3. Name resolution of the departure and arrival locations.
4. Filtering and minimum-hop path computation.

This module wires these stages together for command-line use. Each
step delegates work to the services built by the container.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
from typing import List, Optional, Sequence

from .container import Container
from .domain.capacity import parse_size
from .domain.models import (
    ErrorStatus,
    RouteFilterOptions,
    RouteRequest,
    RouteResult,
    SpaceClass,
)
from .observability import configure_logging
from .ports.rendering import RouteFormatterPort
from .services import FeedPoller, JourneyPlannerService

logger = logging.getLogger(__name__)


def resolve_location_id(
    planner: JourneyPlannerService, name: Optional[str]
) -> Optional[int]:
    """Map a user-typed name to a location id.

    An exact (case-insensitive) match wins; otherwise the first prefix
    match in name order is used. Returns None when nothing matches.
    """
    if not name:
        return None
    matches = planner.search_locations(name)
    for location in matches:
        if location.name.lower() == name.lower():
            return location.id
    return matches[0].id if matches else None


def plan_journey(
    departure: Optional[str],
    arrival: Optional[str],
    options: Optional[RouteFilterOptions] = None,
    *,
    container: Optional[Container] = None,
    refresh: bool = True,
) -> str:
    """Run the core pipeline once and return a printable message.

    This helper is designed to be reused from other front-ends
    (CLI, tests, a long-running watcher).
    """
    container = container or Container.create_default()
    planner: JourneyPlannerService = container.resolve(JourneyPlannerService)

    if refresh:
        poller: FeedPoller = container.resolve(FeedPoller)
        asyncio.run(poller.refresh_all())

    request = RouteRequest(
        source_id=resolve_location_id(planner, departure),
        destination_id=resolve_location_id(planner, arrival),
        options=options or RouteFilterOptions(),
    )
    return planner.describe(request)


def _parse_class(value: str) -> SpaceClass:
    for space_class in SpaceClass:
        if value.lower() in (space_class.label.lower(), space_class.name.lower()):
            return space_class
    raise argparse.ArgumentTypeError(f"Unknown location class: {value!r}")


def _parse_size(value: str) -> int:
    try:
        return parse_size(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="journey-planner",
        description="Plan a route over gates and reported wormholes.",
    )
    parser.add_argument("departure", help="Departure location name")
    parser.add_argument("arrival", help="Arrival location name")
    parser.add_argument(
        "--avoid",
        action="append",
        default=[],
        metavar="NAME",
        help="Location to avoid (repeatable)",
    )
    parser.add_argument(
        "--exclude-class",
        action="append",
        default=[],
        type=_parse_class,
        metavar="CLASS",
        help="Location class to avoid, e.g. HS, C13, Thera (repeatable)",
    )
    parser.add_argument("--exclude-voc", action="store_true")
    parser.add_argument("--exclude-destab", action="store_true")
    parser.add_argument("--exclude-eol", action="store_true")
    parser.add_argument(
        "--size",
        type=_parse_size,
        default=None,
        help="Ship size: a number or one of SML, MED, LRG",
    )
    parser.add_argument(
        "--watch",
        action="store_true",
        help="Keep polling the feeds and print the route on every change",
    )
    parser.add_argument(
        "--no-refresh",
        action="store_true",
        help="Skip the feed refresh and route over gates only",
    )
    return parser


def request_from(
    planner: JourneyPlannerService,
    args: argparse.Namespace,
    options: RouteFilterOptions,
) -> RouteRequest:
    return RouteRequest(
        source_id=resolve_location_id(planner, args.departure),
        destination_id=resolve_location_id(planner, args.arrival),
        options=options,
    )


def watch(container: Container, request: RouteRequest) -> int:
    """Poll every feed until interrupted, printing each re-planned route."""
    planner: JourneyPlannerService = container.resolve(JourneyPlannerService)
    poller: FeedPoller = container.resolve(FeedPoller)
    formatter: RouteFormatterPort = container.resolve(RouteFormatterPort)

    def show(route: Optional[RouteResult], status: Optional[ErrorStatus]) -> None:
        if status is not None:
            print(formatter.format_error(status))
        else:
            print(formatter.format_route(route))

    planner.subscribe(show)
    planner.set_request(request)
    try:
        asyncio.run(poller.run())
    except KeyboardInterrupt:
        logger.info("Watch interrupted")
    return 0


def run_pipeline(argv: Optional[Sequence[str]] = None) -> int:
    """Command-line entry point. Returns the process exit code."""
    args = build_parser().parse_args(argv)
    configure_logging()

    container = Container.create_default()
    planner: JourneyPlannerService = container.resolve(JourneyPlannerService)

    avoid_ids: List[int] = []
    for name in args.avoid:
        location_id = resolve_location_id(planner, name)
        if location_id is None:
            logger.warning("Unknown location to avoid", extra={"location": name})
            continue
        avoid_ids.append(location_id)

    options = RouteFilterOptions(
        avoid_ids=frozenset(avoid_ids),
        excluded_classes=frozenset(args.exclude_class),
        exclude_very_unstable=args.exclude_voc,
        exclude_destabilized=args.exclude_destab,
        exclude_end_of_life=args.exclude_eol,
        min_capacity=args.size,
    )
    if args.watch:
        return watch(container, request_from(planner, args, options))

    if args.no_refresh:
        planner.config = planner.config.model_copy(update={"wait_for_feeds": False})
    else:
        poller: FeedPoller = container.resolve(FeedPoller)
        asyncio.run(poller.refresh_all())

    request = request_from(planner, args, options)
    route, status = planner.plan_safe(request)
    formatter = container.resolve(RouteFormatterPort)
    if status is not None:
        print(formatter.format_error(status))
        return 1
    print(formatter.format_route(route))
    return 0


if __name__ == "__main__":
    raise SystemExit(run_pipeline())
