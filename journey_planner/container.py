"""Dependency injection container.

Wires the static topology repository, one snapshot cache per enabled
feed, the path finder and the formatter into a JourneyPlannerService,
plus the FeedPoller that keeps the caches fresh.

Registrations are explicit factories keyed by port type. Singletons
are created lazily on first resolve, under a lock so two callers
never build two copies.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Tuple

from .config import AppConfig, get_config


@dataclass
class Container:
    """Dependency injection container.

    Usage:
        # Production
        container = Container.create_default()
        planner = container.resolve(JourneyPlannerService)

        # Testing
        container = Container()
        container.register(TopologyRepositoryPort, lambda: FakeTopology())
        topology = container.resolve(TopologyRepositoryPort)

    Attributes:
        config: Application configuration
    """

    config: AppConfig = field(default_factory=get_config)

    _factories: Dict[type[Any], Callable[[], Any]] = field(
        default_factory=dict, repr=False
    )
    _singletons: Dict[type[Any], Any] = field(default_factory=dict, repr=False)
    _singleton_types: set[type[Any]] = field(default_factory=set, repr=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)

    def register(
        self,
        port_type: type[Any],
        factory: Callable[[], Any],
        singleton: bool = True,
    ) -> None:
        """Register a factory for a port type.

        Args:
            port_type: The type (usually a Protocol) to register.
            factory: A callable that creates instances of the type.
            singleton: If True, only one instance is created.
        """
        with self._lock:
            self._factories[port_type] = factory
            if singleton:
                self._singleton_types.add(port_type)

    def resolve(self, port_type: type[Any]) -> Any:
        """Resolve an instance of a port type.

        Args:
            port_type: The type to resolve.

        Returns:
            An instance of the requested type.

        Raises:
            KeyError: If the type is not registered.
        """
        with self._lock:
            if port_type not in self._factories:
                raise KeyError(f"Type not registered: {port_type}")

            if port_type in self._singleton_types:
                if port_type not in self._singletons:
                    self._singletons[port_type] = self._factories[port_type]()
                return self._singletons[port_type]

            return self._factories[port_type]()

    @classmethod
    def create_default(cls, config: Optional[AppConfig] = None) -> Container:
        """Create a container with default production bindings.

        Feeds disabled in the configuration get no cache, so the
        planner neither polls nor waits for them.

        Args:
            config: Optional configuration override.

        Returns:
            A configured Container instance.
        """
        from .adapters.cache import RefreshCache
        from .adapters.feeds import EveScoutFeedSource, TripwireFeedSource
        from .adapters.graph import MinHopPathFinder
        from .adapters.rendering import TextRouteFormatter
        from .adapters.topology import JSONTopologyRepository
        from .ports.graph import PathFinderPort, TopologyRepositoryPort
        from .ports.rendering import RouteFormatterPort
        from .services import FeedPoller, JourneyPlannerService

        config = config or get_config()
        container = cls(config=config)

        # Static data
        container.register(
            TopologyRepositoryPort,
            lambda: JSONTopologyRepository(config.topology),
        )

        # Routing and presentation
        container.register(PathFinderPort, lambda: MinHopPathFinder())
        container.register(RouteFormatterPort, lambda: TextRouteFormatter())

        # One cache per enabled feed
        def create_caches() -> Tuple[RefreshCache, ...]:
            caches = []
            if config.tripwire.enabled:
                caches.append(
                    RefreshCache(
                        TripwireFeedSource(config.tripwire),
                        poll_interval_seconds=config.tripwire.poll_interval_seconds,
                    )
                )
            if config.eve_scout.enabled:
                caches.append(
                    RefreshCache(
                        EveScoutFeedSource(config.eve_scout),
                        poll_interval_seconds=config.eve_scout.poll_interval_seconds,
                    )
                )
            return tuple(caches)

        container.register(RefreshCache, create_caches)

        # Main service
        def create_planner() -> JourneyPlannerService:
            return JourneyPlannerService(
                topology_repository=container.resolve(TopologyRepositoryPort),
                path_finder=container.resolve(PathFinderPort),
                caches=container.resolve(RefreshCache),
                formatter=container.resolve(RouteFormatterPort),
                config=config.planner,
            )

        container.register(JourneyPlannerService, create_planner)

        # Poller notifies the planner after every refresh
        def create_poller() -> FeedPoller:
            planner = container.resolve(JourneyPlannerService)
            return FeedPoller(
                caches=planner.caches,
                on_refresh=planner.on_feed_refreshed,
            )

        container.register(FeedPoller, create_poller)

        return container
