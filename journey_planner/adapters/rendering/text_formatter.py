"""Plain-text route formatting.

Renders a RouteResult either as one pastable line:

    Jita > Perimeter > J123456 (ABC, EOL, VOC)

or as table rows (one per location) for a tabular view.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ...domain.models import (
    EphemeralLink,
    ErrorStatus,
    Gate,
    LinkLife,
    LinkMass,
    Location,
    RouteResult,
    RouteStep,
)

UNKNOWN_SIGNATURE = "???"
SIGNATURE_LENGTH = 3
ROUTE_SEPARATOR = " > "

LIFE_LABELS = {
    LinkLife.STABLE: "Stable",
    LinkLife.END_OF_LIFE: "EOL",
}

MASS_LABELS = {
    LinkMass.STABLE: "Stable",
    LinkMass.DESTABILIZED: "Destab",
    LinkMass.VERY_UNSTABLE: "VOC",
}


def short_signature(signature: Optional[str]) -> str:
    """First characters of a signature, or the unknown marker."""
    if not signature:
        return UNKNOWN_SIGNATURE
    return signature[:SIGNATURE_LENGTH]


def class_label(location: Location) -> str:
    if location.space_class is None:
        return ""
    return location.space_class.label


@dataclass
class TextRouteFormatter:
    """Route formatter producing plain strings.

    This adapter implements RouteFormatterPort.

    Attributes:
        separator: Text placed between consecutive location names
    """

    separator: str = ROUTE_SEPARATOR

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def format_route(self, route: RouteResult) -> str:
        """Render the route as a single line.

        Hops entered through an ephemeral link are annotated with the
        departure-side signature and any non-stable life/mass labels.
        """
        parts = [route.source.name]
        parts.extend(self._format_step(step) for step in route.steps)
        return self.separator.join(parts)

    def _format_step(self, step: RouteStep) -> str:
        connection = step.connection
        if isinstance(connection, Gate):
            return step.location.name
        if isinstance(connection, EphemeralLink):
            notes = [short_signature(connection.signature)]
            if connection.life is not LinkLife.STABLE:
                notes.append(LIFE_LABELS[connection.life])
            if connection.mass is not LinkMass.STABLE:
                notes.append(MASS_LABELS[connection.mass])
            return f"{step.location.name} ({', '.join(notes)})"
        raise TypeError(f"Unknown connection type: {type(connection).__name__}")

    def format_rows(self, route: RouteResult) -> List[Dict[str, str]]:
        """Render the route as table rows, source first.

        Returns:
            One dict per location with keys name, class, signature,
            life and mass. Link columns are blank for the source and for
            locations entered through a gate.
        """
        rows = [self._row(route.source, None)]
        rows.extend(self._row(step.location, step.connection) for step in route.steps)
        return rows

    def _row(self, location: Location, connection: object) -> Dict[str, str]:
        row = {
            "name": location.name,
            "class": class_label(location),
            "signature": "",
            "life": "",
            "mass": "",
        }
        if isinstance(connection, EphemeralLink):
            row["signature"] = short_signature(connection.signature)
            row["life"] = LIFE_LABELS[connection.life]
            row["mass"] = MASS_LABELS[connection.mass]
        return row

    def format_error(self, status: ErrorStatus) -> str:
        """Render an error as "<category title>: <description>"."""
        return f"{status.category.title}: {status.description}"
