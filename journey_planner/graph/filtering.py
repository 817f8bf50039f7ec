"""Filtered views of the travel graph.

The same base graph is re-filtered on every toggle change, so
``filter_graph`` never mutates its input.
"""

from __future__ import annotations

from typing import Dict, List

from ..domain.errors import ConsistencyError
from ..domain.models import (
    Connection,
    EphemeralLink,
    Gate,
    LinkLife,
    LinkMass,
    Location,
    RouteFilterOptions,
)
from .model import Edge, Graph


def keep_location(location: Location, options: RouteFilterOptions) -> bool:
    """Check a location against the node predicates."""
    if location.id in options.avoid_ids:
        return False
    if location.space_class is not None and location.space_class in options.excluded_classes:
        return False
    return True


def keep_connection(connection: Connection, options: RouteFilterOptions) -> bool:
    """Check a connection against the edge predicates.

    Gates always pass. An ephemeral link with no known capacity is
    never excluded by the size rule.

    Raises:
        ConsistencyError: For an unknown connection kind.
    """
    if isinstance(connection, Gate):
        return True
    if isinstance(connection, EphemeralLink):
        if options.exclude_very_unstable and connection.mass is LinkMass.VERY_UNSTABLE:
            return False
        if options.exclude_destabilized and connection.mass is LinkMass.DESTABILIZED:
            return False
        if options.exclude_end_of_life and connection.life is LinkLife.END_OF_LIFE:
            return False
        if (
            options.min_capacity is not None
            and connection.capacity is not None
            and options.min_capacity > connection.capacity
        ):
            return False
        return True
    raise ConsistencyError(f"Unknown connection kind: {type(connection).__name__}")


def filter_graph(graph: Graph, options: RouteFilterOptions) -> Graph:
    """Project the graph onto the locations and edges that pass ``options``.

    Args:
        graph: The unfiltered graph.
        options: Exclusion predicates.

    Returns:
        A new Graph whose nodes and edges are subsets of ``graph``'s.
    """
    nodes: Dict[int, Location] = {
        location_id: location
        for location_id, location in graph.nodes.items()
        if keep_location(location, options)
    }

    edges: List[Edge] = [
        edge
        for edge in graph.edges()
        if edge.source in nodes
        and edge.target in nodes
        and keep_connection(edge.connection, options)
    ]

    return Graph.from_parts(nodes, edges)
