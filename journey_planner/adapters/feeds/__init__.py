"""Feed adapters - Implementations of FeedSourcePort.

Available implementations:
- TripwireFeedSource: Stateful, incremental feed
- EveScoutFeedSource: Stateless public feed
"""

from .eve_scout_source import EveScoutFeedSource
from .tripwire_source import TripwireFeedSource

__all__ = ["TripwireFeedSource", "EveScoutFeedSource"]
