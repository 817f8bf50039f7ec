"""Journey planner service - Main orchestrator.

This service owns the current travel graph and the current route
request. Two kinds of event trigger a re-plan: a feed refresh
completing (which rebuilds the graph first) and the user changing the
request. Subscribers receive either a route or an error status.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from ..config import PlannerConfig, get_config
from ..domain.errors import (
    FeedError,
    InputError,
    JourneyPlannerError,
    LoadingError,
)
from ..domain.models import ErrorStatus, Location, RouteRequest, RouteResult
from ..graph.builder import build_graph
from ..graph.filtering import filter_graph
from ..graph.model import Graph
from ..ports.cache import SnapshotCachePort
from ..ports.graph import PathFinderPort, TopologyRepositoryPort
from ..ports.rendering import RouteFormatterPort

Listener = Callable[[Optional[RouteResult], Optional[ErrorStatus]], None]


@dataclass
class JourneyPlannerService:
    """Main service for planning routes over gates and ephemeral links.

    The pipeline for one plan is:
    1. Validate the request selections
    2. Check every feed has answered at least once
    3. Filter the current graph with the request options
    4. Find a minimum-hop path

    Attributes:
        topology_repository: Source of static locations and gates
        caches: One snapshot cache per ephemeral feed
        path_finder: Computes routes on the filtered graph
        formatter: Optional formatter used by describe()
        config: Planner settings
    """

    topology_repository: TopologyRepositoryPort
    path_finder: PathFinderPort
    caches: Sequence[SnapshotCachePort] = ()
    formatter: Optional[RouteFormatterPort] = None
    config: PlannerConfig = field(default_factory=lambda: get_config().planner)

    _graph: Optional[Graph] = field(default=None, init=False, repr=False)
    _graph_error: Optional[JourneyPlannerError] = field(
        default=None, init=False, repr=False
    )
    _request: RouteRequest = field(default_factory=RouteRequest, init=False)
    _listeners: List[Listener] = field(default_factory=list, init=False, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    @property
    def request(self) -> RouteRequest:
        return self._request

    @property
    def graph(self) -> Optional[Graph]:
        """The most recently built graph, if any."""
        return self._graph

    def rebuild_graph(self) -> Graph:
        """Build the graph from static data and every held snapshot.

        Returns:
            The new graph, which also becomes the current one.

        Raises:
            TopologyError: If the static data cannot be loaded.
            ConsistencyError: If a link references an unknown location.
        """
        snapshots = [cache.snapshot for cache in self.caches]
        try:
            graph = build_graph(
                self.topology_repository.locations(),
                self.topology_repository.links(),
                snapshots,
            )
        except JourneyPlannerError as e:
            self._graph = None
            self._graph_error = e
            raise

        self._graph = graph
        self._graph_error = None
        self._logger.info(
            "Graph rebuilt",
            extra={
                "node_count": graph.node_count,
                "edge_count": graph.edge_count,
                "snapshot_count": sum(1 for s in snapshots if s is not None),
            },
        )
        return graph

    def on_feed_refreshed(self, cache: SnapshotCachePort) -> None:
        """Rebuild the graph after a refresh and re-plan the current request."""
        self._logger.debug("Feed refresh completed", extra={"feed": cache.name})
        try:
            self.rebuild_graph()
        except JourneyPlannerError as e:
            self._logger.error(
                "Graph rebuild failed",
                extra={"feed": cache.name, "error": str(e)},
            )
        self._publish()

    def set_request(self, request: RouteRequest) -> None:
        """Replace the current request and notify subscribers."""
        self._request = request
        self._publish()

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener for plan results.

        Returns:
            A callable that removes the listener again.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _publish(self) -> None:
        route, status = self.plan_safe(self._request)
        for listener in list(self._listeners):
            listener(route, status)

    def plan(self, request: Optional[RouteRequest] = None) -> RouteResult:
        """Plan a route for a request (the current one by default).

        Returns:
            RouteResult with the minimum-hop route.

        Raises:
            InputError: If source or destination is not selected.
            LoadingError: If a feed has not produced its first snapshot.
            FeedError: If a feed's first refresh failed.
            RoutingError: If the filtered graph has no route.
            ConsistencyError: If the data is inconsistent.
        """
        request = request or self._request

        if request.source_id is None:
            raise InputError("From system not selected", field_name="source_id")
        if request.destination_id is None:
            raise InputError("To system not selected", field_name="destination_id")

        self._check_feeds()

        graph = self._current_graph()
        filtered = filter_graph(graph, request.options)
        self._logger.debug(
            "Graph filtered",
            extra={
                "node_count": filtered.node_count,
                "edge_count": filtered.edge_count,
            },
        )
        return self.path_finder.solve(
            filtered, request.source_id, request.destination_id
        )

    def plan_safe(
        self, request: Optional[RouteRequest] = None
    ) -> Tuple[Optional[RouteResult], Optional[ErrorStatus]]:
        """Plan a route, returning errors as a status instead of raising.

        Returns:
            Tuple of (route, None) on success or (None, status) on failure.
        """
        try:
            return self.plan(request), None
        except JourneyPlannerError as e:
            status = ErrorStatus.from_exception(e)
            if not status.is_recoverable:
                self._logger.error(
                    "Planning failed",
                    extra={"category": status.category.value, "error": str(e)},
                )
            return None, status

    def describe(self, request: Optional[RouteRequest] = None) -> str:
        """Plan a route and render the outcome as text.

        Raises:
            ValueError: If no formatter is configured.
        """
        if self.formatter is None:
            raise ValueError("No route formatter configured")
        route, status = self.plan_safe(request)
        if status is not None:
            return self.formatter.format_error(status)
        return self.formatter.format_route(route)

    def _check_feeds(self) -> None:
        if not self.config.wait_for_feeds:
            return
        for cache in self.caches:
            if cache.snapshot is not None:
                continue
            error = cache.last_error
            if error is not None:
                raise FeedError(
                    f"{cache.name} initial refresh failed",
                    feed=cache.name,
                    status_code=getattr(error, "status_code", None),
                    cause=error,
                )
            raise LoadingError(f"Waiting for {cache.name} feed", resource=cache.name)

    def _current_graph(self) -> Graph:
        if self._graph_error is not None:
            raise self._graph_error
        if self._graph is None:
            return self.rebuild_graph()
        return self._graph

    def search_locations(
        self, prefix: str, limit: Optional[int] = None
    ) -> Sequence[Location]:
        """Find locations whose name starts with a prefix, ignoring case."""
        return self.topology_repository.search(
            prefix, limit if limit is not None else self.config.search_limit
        )

    def feed_status(self) -> List[Dict[str, Any]]:
        """Summarize the state of every feed.

        Returns:
            One dict per feed with name, fetched_at, record_count,
            link_count and update_error.
        """
        status = []
        for cache in self.caches:
            snapshot = cache.snapshot
            if snapshot is None:
                error = cache.last_error
                status.append(
                    {
                        "name": cache.name,
                        "fetched_at": None,
                        "record_count": 0,
                        "link_count": 0,
                        "update_error": str(error) if error is not None else None,
                    }
                )
                continue
            status.append(
                {
                    "name": cache.name,
                    "fetched_at": snapshot.fetched_at,
                    "record_count": snapshot.record_count,
                    "link_count": len(snapshot.links),
                    "update_error": snapshot.update_error,
                }
            )
        return status
