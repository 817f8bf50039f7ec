"""Graph construction from static topology and feed snapshots.

``build_graph`` is rerun every time a feed refreshes, so it stays a
pure, deterministic function of its inputs.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Sequence

from ..domain.errors import ConsistencyError
from ..domain.models import FeedSnapshot, Gate, Location, PermanentLink
from .model import Edge, Graph

logger = logging.getLogger(__name__)


def build_graph(
    locations: Sequence[Location],
    links: Iterable[PermanentLink],
    snapshots: Iterable[Optional[FeedSnapshot]] = (),
) -> Graph:
    """Compose the travel graph.

    Args:
        locations: Every known location.
        links: Permanent links, one per traversal direction. The loader
            is responsible for supplying both directions.
        snapshots: Current snapshot of each ephemeral feed. ``None``
            entries (feeds without data yet) are skipped.

    Returns:
        A new Graph with one Gate edge per permanent link and one edge
        per directed ephemeral link.

    Raises:
        ConsistencyError: If a link references an unknown location id.
    """
    nodes: Dict[int, Location] = {}
    for location in locations:
        nodes[location.id] = location

    edges: List[Edge] = []
    gate = Gate()

    for link in links:
        _require(nodes, link.from_id, "Permanent link from")
        _require(nodes, link.to_id, "Permanent link to")
        edges.append(Edge(link.from_id, link.to_id, gate))

    ephemeral_count = 0
    for snapshot in snapshots:
        if snapshot is None:
            continue
        for ephemeral in snapshot.links:
            _require(nodes, ephemeral.source_id, f"{snapshot.feed} link from")
            _require(nodes, ephemeral.target_id, f"{snapshot.feed} link to")
            edges.append(Edge(ephemeral.source_id, ephemeral.target_id, ephemeral))
            ephemeral_count += 1

    graph = Graph.from_parts(nodes, edges)
    logger.debug(
        "Graph built",
        extra={
            "nodes": graph.node_count,
            "edges": graph.edge_count,
            "ephemeral_edges": ephemeral_count,
        },
    )
    return graph


def _require(nodes: Dict[int, Location], location_id: int, what: str) -> None:
    if location_id not in nodes:
        raise ConsistencyError(
            f"{what} location {location_id} missing from static data"
        )
