"""Domain layer - Core models, errors and static tables.

This module contains immutable domain models and typed errors
used throughout the application. No external dependencies.
"""

from .capacity import capacity_for, normalize_type_code, parse_size
from .errors import (
    ConfigurationError,
    ConsistencyError,
    EndpointNotInGraphError,
    ErrorCategory,
    FeedError,
    InputError,
    JourneyPlannerError,
    LoadingError,
    NoRouteFoundError,
    ParseError,
    RoutingError,
    TopologyError,
)
from .models import (
    AsOfMarker,
    Connection,
    EphemeralLink,
    ErrorStatus,
    FeedSnapshot,
    Gate,
    LinkLife,
    LinkMass,
    Location,
    PermanentLink,
    RouteFilterOptions,
    RouteRequest,
    RouteResult,
    RouteStep,
    SpaceClass,
)

__all__ = [
    # Models
    "Location",
    "SpaceClass",
    "PermanentLink",
    "Gate",
    "EphemeralLink",
    "Connection",
    "LinkLife",
    "LinkMass",
    "AsOfMarker",
    "FeedSnapshot",
    "RouteFilterOptions",
    "RouteRequest",
    "RouteStep",
    "RouteResult",
    "ErrorStatus",
    # Capacity
    "capacity_for",
    "normalize_type_code",
    "parse_size",
    # Errors
    "ErrorCategory",
    "JourneyPlannerError",
    "LoadingError",
    "InputError",
    "RoutingError",
    "EndpointNotInGraphError",
    "NoRouteFoundError",
    "ConsistencyError",
    "ParseError",
    "FeedError",
    "TopologyError",
    "ConfigurationError",
]
