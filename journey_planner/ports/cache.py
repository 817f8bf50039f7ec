"""Cache port - Last-known-good feed state.

This protocol defines the contract for the per-feed snapshot holder,
replacing a process-wide mutable cell with an object the caller owns
and threads through the polling loop.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Optional, Protocol

if TYPE_CHECKING:
    from ..domain.errors import JourneyPlannerError
    from ..domain.models import FeedSnapshot


class SnapshotCachePort(Protocol):
    """Port for fetch-with-fallback snapshot caching.

    Implementations:
    - adapters/cache/refresh_cache.py (RefreshCache)
    """

    @property
    def name(self) -> str:
        """Return the name of the cached feed."""
        ...

    @property
    def poll_interval_seconds(self) -> float:
        """Return the polling interval of the feed."""
        ...

    @property
    def snapshot(self) -> Optional[FeedSnapshot]:
        """Return the held snapshot, or None before the first success."""
        ...

    @property
    def last_error(self) -> Optional[JourneyPlannerError]:
        """Return the error of the most recent failed refresh, if any."""
        ...

    async def refresh(self) -> FeedSnapshot:
        """Fetch the feed, falling back to the held snapshot on failure.

        Returns:
            The new snapshot, or the previous one annotated with the
            error when the fetch failed.

        Raises:
            JourneyPlannerError: If the very first fetch fails.
        """
        ...

    def stats(self) -> Dict[str, Any]:
        """Return refresh statistics."""
        ...
