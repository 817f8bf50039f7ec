"""Periodic feed polling on an asyncio event loop.

One task per feed loops refresh -> notify -> sleep. Polls of the same
feed never overlap; different feeds refresh concurrently.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence

from ..domain.errors import JourneyPlannerError
from ..domain.models import FeedSnapshot
from ..ports.cache import SnapshotCachePort

RefreshCallback = Callable[[SnapshotCachePort], None]


@dataclass
class FeedPoller:
    """Drives the refresh loop of every snapshot cache.

    Attributes:
        caches: Caches to poll, each at its own interval
        on_refresh: Called after every refresh attempt, failed or not
    """

    caches: Sequence[SnapshotCachePort]
    on_refresh: Optional[RefreshCallback] = None

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    async def poll_once(self, cache: SnapshotCachePort) -> Optional[FeedSnapshot]:
        """Refresh one cache and notify.

        Returns:
            The snapshot now held, or None if the first refresh failed.
        """
        snapshot: Optional[FeedSnapshot]
        try:
            snapshot = await cache.refresh()
        except JourneyPlannerError as e:
            self._logger.error(
                "Feed unavailable",
                extra={"feed": cache.name, "error": str(e)},
            )
            snapshot = None

        if self.on_refresh is not None:
            self.on_refresh(cache)
        return snapshot

    async def refresh_all(self) -> List[Optional[FeedSnapshot]]:
        """Refresh every cache once, concurrently."""
        results = await asyncio.gather(*(self.poll_once(c) for c in self.caches))
        return list(results)

    async def run(self, stop_event: Optional[asyncio.Event] = None) -> None:
        """Poll until the stop event is set.

        The current tick of each loop completes before it exits.
        """
        stop_event = stop_event or asyncio.Event()
        self._logger.info(
            "Feed poller started",
            extra={"feeds": [cache.name for cache in self.caches]},
        )
        tasks = [
            asyncio.create_task(self._poll_loop(cache, stop_event))
            for cache in self.caches
        ]
        try:
            await asyncio.gather(*tasks)
        finally:
            for task in tasks:
                if not task.done():
                    task.cancel()
            self._logger.info("Feed poller stopped")

    async def _poll_loop(
        self, cache: SnapshotCachePort, stop_event: asyncio.Event
    ) -> None:
        while not stop_event.is_set():
            await self.poll_once(cache)
            try:
                await asyncio.wait_for(
                    stop_event.wait(), timeout=cache.poll_interval_seconds
                )
            except asyncio.TimeoutError:
                pass
