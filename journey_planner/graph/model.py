"""Directed multigraph of locations and connections.

Nodes are Locations keyed by id; edges carry a Connection payload.
Several edges may join the same ordered pair of nodes, e.g. a gate
and an ephemeral link between the same two locations.

A Graph is never mutated after construction: the builder and the
route filter both produce new instances.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Mapping, Optional, Sequence, Tuple

from ..domain.models import Connection, Location


@dataclass(frozen=True, slots=True)
class Edge:
    """A directed edge between two location ids."""

    source: int
    target: int
    connection: Connection


@dataclass(frozen=True)
class Graph:
    """Immutable adjacency-list multigraph.

    Attributes:
        nodes: Locations keyed by id, in insertion order
        adjacency: Outgoing edges keyed by source id
    """

    nodes: Mapping[int, Location] = field(default_factory=dict)
    adjacency: Mapping[int, Tuple[Edge, ...]] = field(default_factory=dict)

    @classmethod
    def from_parts(
        cls, nodes: Dict[int, Location], edges: Sequence[Edge]
    ) -> Graph:
        """Assemble a graph from nodes and edges already validated."""
        outgoing: Dict[int, List[Edge]] = {node_id: [] for node_id in nodes}
        for edge in edges:
            outgoing[edge.source].append(edge)
        return cls(
            nodes=dict(nodes),
            adjacency={k: tuple(v) for k, v in outgoing.items()},
        )

    def __contains__(self, location_id: object) -> bool:
        return location_id in self.nodes

    def __len__(self) -> int:
        return len(self.nodes)

    def node(self, location_id: int) -> Optional[Location]:
        return self.nodes.get(location_id)

    def out_edges(self, location_id: int) -> Tuple[Edge, ...]:
        return self.adjacency.get(location_id, ())

    def edges(self) -> Iterator[Edge]:
        for outgoing in self.adjacency.values():
            yield from outgoing

    def edges_connecting(self, source: int, target: int) -> List[Edge]:
        return [edge for edge in self.out_edges(source) if edge.target == target]

    @property
    def node_count(self) -> int:
        return len(self.nodes)

    @property
    def edge_count(self) -> int:
        return sum(len(outgoing) for outgoing in self.adjacency.values())
