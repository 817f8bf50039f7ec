from dataclasses import replace

import pytest

from journey_planner.adapters.rendering import TextRouteFormatter
from journey_planner.domain.errors import ErrorCategory
from journey_planner.domain.models import (
    ErrorStatus,
    Gate,
    LinkLife,
    LinkMass,
    Location,
    RouteResult,
    RouteStep,
    SpaceClass,
)

JITA = Location(30000142, "Jita", 0.9, SpaceClass.HIGHSEC)
PERIMETER = Location(30000144, "Perimeter", 0.9, SpaceClass.HIGHSEC)
J123456 = Location(31000100, "J123456", -1.0, SpaceClass.C2)


@pytest.fixture
def formatter():
    return TextRouteFormatter()


@pytest.fixture
def route(wormhole):
    link = replace(
        wormhole,
        signature="ABC-123",
        life=LinkLife.END_OF_LIFE,
        mass=LinkMass.VERY_UNSTABLE,
    )
    return RouteResult(
        source=JITA,
        steps=(RouteStep(PERIMETER, Gate()), RouteStep(J123456, link)),
    )


def test_format_route(formatter, route):
    assert formatter.format_route(route) == "Jita > Perimeter > J123456 (ABC, EOL, VOC)"


def test_stable_wormhole_shows_signature_only(formatter, wormhole):
    route = RouteResult(source=JITA, steps=(RouteStep(J123456, wormhole),))
    assert formatter.format_route(route) == "Jita > J123456 (ABC)"


def test_unknown_signature(formatter, wormhole):
    link = replace(wormhole, signature=None, mass=LinkMass.DESTABILIZED)
    route = RouteResult(source=JITA, steps=(RouteStep(J123456, link),))
    assert formatter.format_route(route) == "Jita > J123456 (???, Destab)"


def test_route_without_jumps(formatter):
    assert formatter.format_route(RouteResult(source=JITA)) == "Jita"


def test_format_rows(formatter, route):
    rows = formatter.format_rows(route)

    assert rows == [
        {"name": "Jita", "class": "HS", "signature": "", "life": "", "mass": ""},
        {"name": "Perimeter", "class": "HS", "signature": "", "life": "", "mass": ""},
        {
            "name": "J123456",
            "class": "C2",
            "signature": "ABC",
            "life": "EOL",
            "mass": "VOC",
        },
    ]


def test_row_without_class(formatter):
    rows = formatter.format_rows(RouteResult(source=Location(1, "Nowhere")))
    assert rows[0]["class"] == ""


def test_format_error(formatter):
    status = ErrorStatus(ErrorCategory.ROUTING, "No path between the locations")
    assert formatter.format_error(status) == "Routing Problem: No path between the locations"


def test_custom_separator(wormhole):
    route = RouteResult(source=JITA, steps=(RouteStep(PERIMETER, Gate()),))
    assert TextRouteFormatter(separator=" -> ").format_route(route) == "Jita -> Perimeter"
