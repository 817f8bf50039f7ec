"""Graph ports - Abstractions for topology loading and routing.

These protocols define the contracts for graph operations, including
loading the static topology and computing minimum-hop paths.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Protocol, Sequence

if TYPE_CHECKING:
    from ..domain.models import Location, PermanentLink, RouteResult
    from ..graph.model import Graph


class TopologyRepositoryPort(Protocol):
    """Port for loading the static topology.

    Implementation: adapters/topology/json_repository.py

    The repository loads locations and permanent links once per
    session and caches them.
    """

    def locations(self) -> Sequence[Location]:
        """Return every location of the static topology."""
        ...

    def links(self) -> Sequence[PermanentLink]:
        """Return permanent links, one per traversal direction."""
        ...

    def get_location(self, location_id: int) -> Optional[Location]:
        """Get a location by id.

        Args:
            location_id: The location id to look up.

        Returns:
            The Location, or None if not found.
        """
        ...

    def search(self, prefix: str, limit: int = 20) -> Sequence[Location]:
        """Find locations whose name starts with ``prefix``.

        Args:
            prefix: Case-insensitive name prefix.
            limit: Maximum number of results.

        Returns:
            Matching locations sorted by name.
        """
        ...


class PathFinderPort(Protocol):
    """Port for route computation.

    Wraps: graph/pathfinding.py (find_path)

    The path finder computes minimum-hop routes through a filtered graph.
    """

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
        """
        ...
