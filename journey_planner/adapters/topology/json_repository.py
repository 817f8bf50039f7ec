"""JSON topology repository adapter.

Loads the static topology document once per session:
- Location metadata (id, name, security, class)
- Permanent links, expanded to both traversal directions
- Name-prefix search for pick-lists

The document is a JSON list. Each entry is either the compact
positional form ``[id, name, security_tenths, class, neighbours]`` or
an object with the keys ``id``, ``name``, ``security``, ``class`` and
``neighbours``. Each physical link is listed from one side only.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, Set, Tuple

from ...config import TopologyConfig, get_config
from ...domain.errors import TopologyError
from ...domain.models import Location, PermanentLink, SpaceClass

_RawEntry = Tuple[Location, List[int]]


@dataclass
class JSONTopologyRepository:
    """Topology repository that loads from a JSON document.

    This adapter implements TopologyRepositoryPort.

    Attributes:
        config: Topology configuration (data directory, file name)
    """

    config: TopologyConfig = field(default_factory=lambda: get_config().topology)
    _logger: logging.Logger = field(init=False, repr=False)

    # Cached data
    _locations: Optional[Dict[int, Location]] = field(default=None, repr=False)
    _links: Optional[List[PermanentLink]] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def locations(self) -> Sequence[Location]:
        """Return every location, in document order.

        Raises:
            TopologyError: If the document cannot be loaded.
        """
        self._ensure_loaded()
        assert self._locations is not None
        return list(self._locations.values())

    def links(self) -> Sequence[PermanentLink]:
        """Return permanent links, one per traversal direction.

        Raises:
            TopologyError: If the document cannot be loaded.
        """
        self._ensure_loaded()
        assert self._links is not None
        return list(self._links)

    def get_location(self, location_id: int) -> Optional[Location]:
        self._ensure_loaded()
        assert self._locations is not None
        return self._locations.get(location_id)

    def search(self, prefix: str, limit: int = 20) -> Sequence[Location]:
        """Find locations whose name starts with ``prefix``.

        Args:
            prefix: Case-insensitive name prefix.
            limit: Maximum number of results.

        Returns:
            Matching locations sorted by name.
        """
        needle = prefix.strip().lower()
        matches = [
            location
            for location in sorted(self.locations())
            if location.name.lower().startswith(needle)
        ]
        return matches[:limit]

    def _ensure_loaded(self) -> None:
        if self._locations is not None:
            return

        path = self.config.topology_path
        self._logger.debug("Loading topology", extra={"topology_path": str(path)})

        try:
            with path.open(encoding="utf-8") as f:
                document = json.load(f)
            locations, links = self.parse(document)
        except (OSError, TypeError, ValueError) as e:
            raise TopologyError(
                f"Failed to load topology: {e}",
                file_path=str(path),
                cause=e,
            )

        self._locations = locations
        self._links = links
        self._logger.info(
            "Topology loaded",
            extra={"locations": len(locations), "links": len(links)},
        )

    @classmethod
    def parse(
        cls, document: Any
    ) -> Tuple[Dict[int, Location], List[PermanentLink]]:
        """Parse a decoded topology document.

        Neighbour lists are expanded to both directions and duplicate
        pairs are collapsed.

        Raises:
            ValueError: If the document or an entry is malformed.
            TypeError: If a numeric field has the wrong type.
        """
        if not isinstance(document, list):
            raise ValueError("Topology document is not a list")

        entries = [cls._parse_entry(raw) for raw in document]

        locations: Dict[int, Location] = {}
        for location, _ in entries:
            locations[location.id] = location

        seen: Set[Tuple[int, int]] = set()
        links: List[PermanentLink] = []
        for location, neighbours in entries:
            for neighbour in neighbours:
                for pair in ((location.id, neighbour), (neighbour, location.id)):
                    if pair not in seen:
                        seen.add(pair)
                        links.append(PermanentLink(from_id=pair[0], to_id=pair[1]))

        return locations, links

    @staticmethod
    def _parse_entry(raw: Any) -> _RawEntry:
        if isinstance(raw, list):
            if len(raw) != 5:
                raise ValueError(f"Topology entry has {len(raw)} fields, expected 5")
            location_id, name, security_tenths, class_code, neighbours = raw
            security = float(security_tenths) / 10.0
        elif isinstance(raw, Mapping):
            location_id = raw.get("id")
            name = raw.get("name")
            security = float(raw.get("security", 0.0))
            class_code = raw.get("class")
            neighbours = raw.get("neighbours", [])
        else:
            raise ValueError(f"Topology entry is not a list or object: {raw!r}")

        if not isinstance(location_id, int) or isinstance(location_id, bool):
            raise ValueError(f"Location id is not an integer: {location_id!r}")
        if not isinstance(name, str) or not name:
            raise ValueError(f"Location {location_id} has no name")
        if not isinstance(neighbours, list) or not all(
            isinstance(n, int) for n in neighbours
        ):
            raise ValueError(f"Location {location_id} neighbours are not integers")

        space_class = SpaceClass(class_code) if class_code is not None else None

        location = Location(
            id=location_id,
            name=name,
            security=security,
            space_class=space_class,
        )
        return location, list(neighbours)

    def clear_cache(self) -> None:
        """Clear cached topology data."""
        self._locations = None
        self._links = None
        self._logger.debug("Topology cache cleared")
