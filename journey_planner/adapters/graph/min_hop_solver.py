"""Minimum-hop path finder adapter.

This adapter wraps graph/pathfinding.py and logs each outcome.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from ...domain.errors import RoutingError
from ...domain.models import RouteResult
from ...graph.model import Graph
from ...graph.pathfinding import find_path


@dataclass
class MinHopPathFinder:
    """Path finder that minimizes the number of hops.

    This adapter implements PathFinderPort.
    """

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def solve(
        self,
        graph: Graph,
        source_id: int,
        destination_id: int,
    ) -> RouteResult:
        """Find a minimum-hop route between two locations.

        Args:
            graph: The filtered travel graph.
            source_id: Departure location id.
            destination_id: Arrival location id.

        Returns:
            RouteResult with the ordered steps.

        Raises:
            EndpointNotInGraphError: If an endpoint is not in the graph.
            NoRouteFoundError: If no path exists.
            ConsistencyError: If a step is joined by several edges.
        """
        self._logger.debug(
            "Calculating shortest path",
            extra={"source_id": source_id, "destination_id": destination_id},
        )

        try:
            route = find_path(graph, source_id, destination_id)
        except RoutingError as e:
            self._logger.info(
                "No route",
                extra={
                    "source_id": source_id,
                    "destination_id": destination_id,
                    "reason": e.message,
                },
            )
            raise

        self._logger.info(
            "Route found",
            extra={
                "source_id": source_id,
                "destination_id": destination_id,
                "jumps": route.jumps,
            },
        )
        return route
