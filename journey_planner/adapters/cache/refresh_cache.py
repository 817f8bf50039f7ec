"""Last-known-good snapshot holder for one ephemeral feed.

Each feed gets its own RefreshCache. A refresh either replaces the
held snapshot or, when the fetch fails and data is already held,
keeps the old links and marker and attaches the error message. The
first refresh has nothing to fall back on, so its error propagates.
"""

from __future__ import annotations

import asyncio
import dataclasses
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from ...domain.errors import JourneyPlannerError
from ...domain.models import FeedSnapshot
from ...ports.feeds import FeedSourcePort


@dataclass
class RefreshCache:
    """Fetch-with-fallback cache around a FeedSourcePort.

    This cache implements the SnapshotCachePort protocol. Refreshes of
    one cache are serialized by an asyncio.Lock; the blocking fetch
    runs in a worker thread.

    Attributes:
        source: Feed source to fetch from
        poll_interval_seconds: How often the poller should refresh

    Example:
        cache = RefreshCache(EveScoutFeedSource(), poll_interval_seconds=300)
        snapshot = await cache.refresh()
    """

    source: FeedSourcePort
    poll_interval_seconds: float = 60.0

    _snapshot: Optional[FeedSnapshot] = field(default=None, init=False, repr=False)
    _last_error: Optional[JourneyPlannerError] = field(
        default=None, init=False, repr=False
    )
    _lock: asyncio.Lock = field(default_factory=asyncio.Lock, init=False, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    # Statistics
    _successes: int = field(default=0, init=False, repr=False)
    _failures: int = field(default=0, init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    @property
    def name(self) -> str:
        return self.source.name

    @property
    def snapshot(self) -> Optional[FeedSnapshot]:
        return self._snapshot

    @property
    def last_error(self) -> Optional[JourneyPlannerError]:
        return self._last_error

    async def refresh(self) -> FeedSnapshot:
        """Fetch the feed once, falling back to the held snapshot.

        Returns:
            The fresh snapshot, or the previous one with ``update_error``
            set when the fetch failed.

        Raises:
            JourneyPlannerError: If the fetch fails and no snapshot has
                been held yet.
        """
        async with self._lock:
            previous = self._snapshot
            try:
                snapshot = await asyncio.to_thread(self.source.fetch, previous)
            except JourneyPlannerError as e:
                self._failures += 1
                self._last_error = e
                if previous is None:
                    self._logger.error(
                        "Initial feed refresh failed",
                        extra={"feed": self.name, "error": str(e)},
                    )
                    raise
                self._logger.warning(
                    "Feed refresh failed, keeping previous snapshot",
                    extra={
                        "feed": self.name,
                        "error": str(e),
                        "record_count": previous.record_count,
                    },
                )
                self._snapshot = dataclasses.replace(previous, update_error=str(e))
                return self._snapshot

            self._successes += 1
            self._last_error = None
            self._snapshot = snapshot
            self._logger.info(
                "Feed refreshed",
                extra={
                    "feed": self.name,
                    "record_count": snapshot.record_count,
                    "link_count": len(snapshot.links),
                },
            )
            return snapshot

    def clear(self) -> None:
        """Drop the held snapshot and error."""
        self._snapshot = None
        self._last_error = None
        self._logger.info("Snapshot cleared", extra={"feed": self.name})

    def stats(self) -> Dict[str, Any]:
        """Get refresh statistics.

        Returns:
            Dict with successes, failures, record count and error state.
        """
        total = self._successes + self._failures
        snapshot = self._snapshot
        return {
            "name": self.name,
            "successes": self._successes,
            "failures": self._failures,
            "success_rate": self._successes / total if total > 0 else 0.0,
            "record_count": snapshot.record_count if snapshot else 0,
            "link_count": len(snapshot.links) if snapshot else 0,
            "update_error": snapshot.update_error if snapshot else None,
        }
