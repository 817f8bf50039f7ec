"""Typed domain errors for the Journey Planner.

Every error carries a category so the presentation layer can tell an
expected, user-correctable routing problem apart from a data defect:

- LOADING: required input is not available yet (a transient state)
- INPUT: the user has not completed a required selection
- ROUTING: the filtered graph has no valid path or lacks an endpoint
- CRITICAL: the data is malformed or violates a structural invariant

All errors inherit from JourneyPlannerError and can optionally
wrap a root cause exception for debugging.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Optional


class ErrorCategory(Enum):
    """Classification of a planning failure."""

    LOADING = "loading"
    INPUT = "input"
    ROUTING = "routing"
    CRITICAL = "critical"

    @property
    def title(self) -> str:
        """Heading shown next to an error of this category."""
        return _CATEGORY_TITLES[self]


_CATEGORY_TITLES = {
    ErrorCategory.LOADING: "Loading",
    ErrorCategory.INPUT: "Input Error",
    ErrorCategory.ROUTING: "Routing Problem",
    ErrorCategory.CRITICAL: "Critical Error",
}


@dataclass
class JourneyPlannerError(Exception):
    """Base error for the journey planner domain.

    Attributes:
        message: Human-readable error description
        cause: Optional underlying exception that caused this error
    """

    category: ClassVar[ErrorCategory] = ErrorCategory.CRITICAL

    message: str
    cause: Optional[Exception] = field(default=None, repr=False)

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def __post_init__(self) -> None:
        super().__init__(self.message)


@dataclass
class LoadingError(JourneyPlannerError):
    """Static or feed data has not been loaded yet.

    Attributes:
        resource: Name of the resource still loading
    """

    category: ClassVar[ErrorCategory] = ErrorCategory.LOADING

    resource: str = ""


@dataclass
class InputError(JourneyPlannerError):
    """A required user selection is missing.

    Attributes:
        field_name: The request field that is missing
    """

    category: ClassVar[ErrorCategory] = ErrorCategory.INPUT

    field_name: str = ""


@dataclass
class RoutingError(JourneyPlannerError):
    """The filtered graph cannot satisfy the request.

    Recoverable by changing the filters or the selection.
    """

    category: ClassVar[ErrorCategory] = ErrorCategory.ROUTING


@dataclass
class EndpointNotInGraphError(RoutingError):
    """A route endpoint is absent from the (filtered) graph.

    Attributes:
        location_id: Id of the missing location
        role: Either "source" or "destination"
    """

    location_id: int = 0
    role: str = ""


@dataclass
class NoRouteFoundError(RoutingError):
    """No path exists between the requested locations.

    Attributes:
        source_id: Departure location id
        destination_id: Arrival location id
    """

    source_id: int = 0
    destination_id: int = 0


@dataclass
class ConsistencyError(JourneyPlannerError):
    """The static and dynamic data contradict each other.

    Raised for unknown location ids referenced by links and for
    ambiguous parallel edges on a path step.
    """


@dataclass
class ParseError(JourneyPlannerError):
    """A feed payload or record is malformed.

    Attributes:
        feed: Name of the feed that produced the payload
        record_id: Identifier of the offending record, if any
    """

    feed: str = ""
    record_id: Optional[str] = None


@dataclass
class FeedError(JourneyPlannerError):
    """Fetching a feed failed at the transport level.

    Attributes:
        feed: Name of the feed
        status_code: HTTP status code if a response was received
    """

    feed: str = ""
    status_code: Optional[int] = None


@dataclass
class TopologyError(JourneyPlannerError):
    """Static topology could not be loaded.

    Attributes:
        file_path: Path to the topology document if relevant
    """

    file_path: Optional[str] = None


@dataclass
class ConfigurationError(JourneyPlannerError):
    """Invalid or missing configuration.

    Attributes:
        setting_name: Name of the problematic setting
        expected_type: Expected type or format
    """

    setting_name: str = ""
    expected_type: Optional[str] = None
