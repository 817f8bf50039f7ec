"""Immutable domain models for the Journey Planner.

All models are frozen dataclasses with slots. They have no external
dependencies and represent the core concepts of the application:
locations, the two kinds of connection between them, feed snapshots
and route requests/results.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum, IntEnum
from typing import Any, Mapping, Optional, Union

from .errors import ErrorCategory, JourneyPlannerError


class SpaceClass(IntEnum):
    """Class tag of a location, using the static data's numeric codes."""

    C1 = 1
    C2 = 2
    C3 = 3
    C4 = 4
    C5 = 5
    C6 = 6
    HIGHSEC = 7
    LOWSEC = 8
    NULLSEC = 9
    THERA = 12
    C13 = 13
    DRIFTER_SENTINEL = 14
    DRIFTER_BARBICAN = 15
    DRIFTER_VIDETTE = 16
    DRIFTER_CONFLUX = 17
    DRIFTER_REDOUBT = 18
    POCHVEN = 25
    ZARZAKH = 50

    @property
    def label(self) -> str:
        """Short label used in route tables."""
        return _SPACE_CLASS_LABELS[self]


_SPACE_CLASS_LABELS = {
    SpaceClass.C1: "C1",
    SpaceClass.C2: "C2",
    SpaceClass.C3: "C3",
    SpaceClass.C4: "C4",
    SpaceClass.C5: "C5",
    SpaceClass.C6: "C6",
    SpaceClass.HIGHSEC: "HS",
    SpaceClass.LOWSEC: "LS",
    SpaceClass.NULLSEC: "NS",
    SpaceClass.THERA: "Thera",
    SpaceClass.C13: "C13",
    SpaceClass.DRIFTER_SENTINEL: "Drifter (Sentinel)",
    SpaceClass.DRIFTER_BARBICAN: "Drifter (Barbican)",
    SpaceClass.DRIFTER_VIDETTE: "Drifter (Vidette)",
    SpaceClass.DRIFTER_CONFLUX: "Drifter (Conflux)",
    SpaceClass.DRIFTER_REDOUBT: "Drifter (Redoubt)",
    SpaceClass.POCHVEN: "Pochven",
    SpaceClass.ZARZAKH: "Zarzakh",
}


class LinkLife(Enum):
    """Whether an ephemeral link is fresh or nearing expiry."""

    STABLE = "stable"
    END_OF_LIFE = "eol"


class LinkMass(Enum):
    """How much more traversal an ephemeral link can sustain."""

    STABLE = "stable"
    DESTABILIZED = "destab"
    VERY_UNSTABLE = "voc"


@dataclass(frozen=True, slots=True, eq=False)
class Location:
    """A node of the travel graph.

    Equality and hashing use ``id`` only; ordering uses ``name`` and is
    meant for sorting pick-lists, never for graph logic.

    Attributes:
        id: Globally unique location identifier
        name: Display name
        security: Numeric security (danger) value
        space_class: Class tag, or None when the source has none
    """

    id: int
    name: str
    security: float = 0.0
    space_class: Optional[SpaceClass] = None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Location):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __lt__(self, other: Location) -> bool:
        return self.name < other.name


@dataclass(frozen=True, slots=True)
class PermanentLink:
    """One traversal direction of a permanent (gate) connection."""

    from_id: int
    to_id: int

    def reversed(self) -> PermanentLink:
        return PermanentLink(from_id=self.to_id, to_id=self.from_id)


@dataclass(frozen=True, slots=True)
class Gate:
    """Connection variant for a permanent link. Carries no attributes."""


@dataclass(frozen=True, slots=True)
class EphemeralLink:
    """One directed edge of a feed-discovered ephemeral connection.

    A raw feed record always produces two of these, one per direction,
    with ``signature``/``other_signature`` swapped.

    Attributes:
        source_id: Location the edge leaves from
        target_id: Location the edge arrives at
        signature: Label of the endpoint on the source side
        other_signature: Label of the endpoint on the target side
        type_code: Normalized link type code, if known
        life: Life state at classification time
        mass: Mass/stability state
        capacity: Maximum traversable size, if the type is known
        created_at: When the link was first recorded
        provenance: Name of the feed that reported it
    """

    source_id: int
    target_id: int
    signature: Optional[str]
    other_signature: Optional[str]
    type_code: Optional[str]
    life: LinkLife
    mass: LinkMass
    capacity: Optional[int]
    created_at: datetime
    provenance: str = ""

    def reversed(self) -> EphemeralLink:
        """Return the opposite traversal direction of this link."""
        return EphemeralLink(
            source_id=self.target_id,
            target_id=self.source_id,
            signature=self.other_signature,
            other_signature=self.signature,
            type_code=self.type_code,
            life=self.life,
            mass=self.mass,
            capacity=self.capacity,
            created_at=self.created_at,
            provenance=self.provenance,
        )


# Edge payload of the travel graph.
Connection = Union[Gate, EphemeralLink]

EPOCH = datetime.min.replace(tzinfo=timezone.utc)


@dataclass(frozen=True, slots=True)
class AsOfMarker:
    """Incremental-update marker echoed back to a stateful feed.

    Attributes:
        record_count: Number of endpoint descriptors known
        latest_modified: Latest modification time among them
    """

    record_count: int = 0
    latest_modified: datetime = EPOCH


@dataclass(frozen=True, slots=True)
class FeedSnapshot:
    """Currently known ephemeral links of one feed.

    Replaced wholesale on each successful refresh; on a failed refresh
    the links and marker are kept and ``update_error`` is set.

    Attributes:
        feed: Name of the feed (provenance)
        links: Directed ephemeral edges, both directions of each record
        marker: As-of marker of the payload the links came from
        fetched_at: When the payload was classified
        update_error: Message of the most recent failed refresh
        payload: Last full raw payload, for re-classification
    """

    feed: str
    links: tuple[EphemeralLink, ...] = field(default_factory=tuple)
    marker: AsOfMarker = field(default_factory=AsOfMarker)
    fetched_at: Optional[datetime] = None
    update_error: Optional[str] = None
    payload: Optional[Mapping[str, Any]] = field(
        default=None, repr=False, compare=False
    )

    @property
    def record_count(self) -> int:
        return self.marker.record_count

    @property
    def has_error(self) -> bool:
        return self.update_error is not None


@dataclass(frozen=True, slots=True)
class RouteFilterOptions:
    """Exclusion predicates applied before path finding.

    Attributes:
        avoid_ids: Locations that must not be visited
        excluded_classes: Location classes that must not be visited
        exclude_very_unstable: Drop ephemeral links that are very unstable
        exclude_destabilized: Drop ephemeral links that are destabilized
        exclude_end_of_life: Drop ephemeral links at end of life
        min_capacity: Traveler size; links with a smaller capacity are dropped
    """

    avoid_ids: frozenset[int] = frozenset()
    excluded_classes: frozenset[SpaceClass] = frozenset()
    exclude_very_unstable: bool = False
    exclude_destabilized: bool = False
    exclude_end_of_life: bool = False
    min_capacity: Optional[int] = None

    @property
    def filters_edges(self) -> bool:
        return (
            self.exclude_very_unstable
            or self.exclude_destabilized
            or self.exclude_end_of_life
            or self.min_capacity is not None
        )


@dataclass(frozen=True, slots=True)
class RouteRequest:
    """User selections for one planning run."""

    source_id: Optional[int] = None
    destination_id: Optional[int] = None
    options: RouteFilterOptions = field(default_factory=RouteFilterOptions)


@dataclass(frozen=True, slots=True)
class RouteStep:
    """A location on the route and the connection used to enter it."""

    location: Location
    connection: Connection


@dataclass(frozen=True, slots=True)
class RouteResult:
    """Result of path finding.

    The source location is carried separately because it has no
    incoming connection.

    Attributes:
        source: Departure location
        steps: Ordered hops after the source
    """

    source: Location
    steps: tuple[RouteStep, ...] = field(default_factory=tuple)

    @property
    def jumps(self) -> int:
        """Return the number of hops."""
        return len(self.steps)

    @property
    def destination(self) -> Location:
        return self.steps[-1].location if self.steps else self.source

    @property
    def locations(self) -> tuple[Location, ...]:
        """All locations on the route, source included."""
        return (self.source,) + tuple(step.location for step in self.steps)


@dataclass(frozen=True, slots=True)
class ErrorStatus:
    """Error classification handed to the presentation layer."""

    category: ErrorCategory
    description: str

    @classmethod
    def from_exception(cls, error: JourneyPlannerError) -> ErrorStatus:
        return cls(category=error.category, description=str(error))

    @property
    def is_recoverable(self) -> bool:
        """Check if the user can fix this by changing the request."""
        return self.category is not ErrorCategory.CRITICAL
