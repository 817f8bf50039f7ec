"""Ports layer - Abstract interfaces (Protocols) for the application.

Ports define the contracts between the application core and external
adapters. They enable dependency injection and make the system testable.

This module follows the Hexagonal Architecture pattern:
- Input ports: How the application is driven (services)
- Output ports: How the application drives external systems (adapters)
"""

from .cache import SnapshotCachePort
from .feeds import FeedSourcePort
from .graph import PathFinderPort, TopologyRepositoryPort
from .rendering import RouteFormatterPort

__all__ = [
    # Graph
    "TopologyRepositoryPort",
    "PathFinderPort",
    # Feeds
    "FeedSourcePort",
    # Cache
    "SnapshotCachePort",
    # Rendering
    "RouteFormatterPort",
]
