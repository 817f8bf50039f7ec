"""Minimum-hop path finding over the travel graph.

Every edge costs one hop, so a breadth-first search gives the same
result as a uniform-cost search with a zero heuristic.
"""

from __future__ import annotations

from collections import deque
from typing import Deque, Dict, List, Optional

from ..domain.errors import (
    ConsistencyError,
    EndpointNotInGraphError,
    NoRouteFoundError,
)
from ..domain.models import Location, RouteResult, RouteStep
from .model import Graph


def shortest_hops(graph: Graph, start: int, end: int) -> List[int]:
    """Compute a minimum-hop node sequence from ``start`` to ``end``.

    Returns:
        Location ids from ``start`` to ``end`` inclusive, or an empty
        list if ``end`` is unreachable or either id is absent.
    """
    if start not in graph or end not in graph:
        return []

    previous: Dict[int, Optional[int]] = {start: None}
    queue: Deque[int] = deque([start])

    while queue:
        u = queue.popleft()
        if u == end:
            break
        for edge in graph.out_edges(u):
            if edge.target not in previous:
                previous[edge.target] = u
                queue.append(edge.target)

    if end not in previous:
        return []

    path: List[int] = []
    current: Optional[int] = end
    while current is not None:
        path.append(current)
        current = previous[current]

    path.reverse()
    return path


def find_path(graph: Graph, source_id: int, destination_id: int) -> RouteResult:
    """Find a minimum-hop route and reconstruct its steps.

    Args:
        graph: The (filtered) travel graph.
        source_id: Departure location id.
        destination_id: Arrival location id.

    Returns:
        RouteResult whose steps pair each location after the source
        with the connection used to enter it.

    Raises:
        EndpointNotInGraphError: If an endpoint was filtered out.
        NoRouteFoundError: If the destination is unreachable.
        ConsistencyError: If a step is not joined by exactly one edge.
    """
    source = graph.node(source_id)
    if source is None:
        raise EndpointNotInGraphError(
            "Source not in graph. It was probably removed by the filtering rules.",
            location_id=source_id,
            role="source",
        )
    if destination_id not in graph:
        raise EndpointNotInGraphError(
            "Destination not in graph. It was probably removed by the filtering rules.",
            location_id=destination_id,
            role="destination",
        )

    path = shortest_hops(graph, source_id, destination_id)
    if not path:
        raise NoRouteFoundError(
            "No path between the locations",
            source_id=source_id,
            destination_id=destination_id,
        )

    steps: List[RouteStep] = []
    for u, v in zip(path, path[1:]):
        connecting = graph.edges_connecting(u, v)
        if len(connecting) != 1:
            raise ConsistencyError(
                f"Expected exactly one edge from {u} to {v}, found {len(connecting)}"
            )
        location: Location = graph.nodes[v]
        steps.append(RouteStep(location=location, connection=connecting[0].connection))

    return RouteResult(source=source, steps=tuple(steps))
