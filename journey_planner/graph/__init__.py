"""Graph-related utilities for representing the travel network.

This subpackage builds the directed multigraph of locations from the
static topology and the ephemeral feeds, filters it, and runs
minimum-hop path finding on top of it.
"""

from .builder import build_graph
from .filtering import filter_graph, keep_connection, keep_location
from .model import Edge, Graph
from .pathfinding import find_path, shortest_hops

__all__ = [
    "Edge",
    "Graph",
    "build_graph",
    "filter_graph",
    "keep_connection",
    "keep_location",
    "find_path",
    "shortest_hops",
]
