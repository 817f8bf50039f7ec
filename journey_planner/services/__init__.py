"""Services layer - Application orchestration.

This module contains the application services that orchestrate
the flow of data through adapters to fulfill use cases.

Available services:
- JourneyPlannerService: Graph ownership, planning and notification
- FeedPoller: Periodic refresh of every ephemeral feed
"""

from .feed_poller import FeedPoller
from .journey_planner import JourneyPlannerService

__all__ = ["JourneyPlannerService", "FeedPoller"]
