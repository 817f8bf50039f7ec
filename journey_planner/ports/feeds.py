"""Feed ports - Abstraction over ephemeral link sources.

A feed source performs one blocking fetch and normalizes the response.
It is driven by a RefreshCache, which owns the last good snapshot.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Protocol

if TYPE_CHECKING:
    from ..domain.models import FeedSnapshot


class FeedSourcePort(Protocol):
    """Port for an ephemeral feed.

    Implementations:
    - adapters/feeds/tripwire_source.py (TripwireFeedSource)
    - adapters/feeds/eve_scout_source.py (EveScoutFeedSource)
    """

    @property
    def name(self) -> str:
        """Return the feed name used as link provenance."""
        ...

    def fetch(self, previous: Optional[FeedSnapshot]) -> FeedSnapshot:
        """Fetch and normalize the current state of the feed.

        Args:
            previous: Snapshot from the last successful fetch, or None
                on the first call. Stateful feeds echo its marker.

        Returns:
            A new FeedSnapshot.

        Raises:
            FeedError: If the transport fails.
            ParseError: If the response is malformed.
        """
        ...
