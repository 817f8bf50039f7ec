"""EvE-Scout feed source adapter.

The feed is stateless: every poll downloads the full public list.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Optional

import requests

from ...config import EveScoutConfig, get_config
from ...domain.models import FeedSnapshot
from ...feeds.eve_scout import FEED_NAME, normalize_eve_scout
from .http import request_json, utcnow


@dataclass
class EveScoutFeedSource:
    """Feed source for the EvE-Scout public signatures endpoint.

    This adapter implements FeedSourcePort.
    """

    config: EveScoutConfig = field(default_factory=lambda: get_config().eve_scout)
    session: requests.Session = field(default_factory=requests.Session, repr=False)
    clock: Callable[[], datetime] = field(default=utcnow, repr=False)

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    @property
    def name(self) -> str:
        return FEED_NAME

    def fetch(self, previous: Optional[FeedSnapshot]) -> FeedSnapshot:
        """Download and normalize the public link list.

        ``previous`` is ignored: the feed has no incremental mode.

        Raises:
            FeedError: If the HTTP request fails.
            ParseError: If the response is malformed.
        """
        self._logger.debug("EvE-Scout updating", extra={"url": self.config.url})
        payload = request_json(
            self.session,
            "GET",
            self.config.url,
            feed=self.name,
            timeout=self.config.timeout_seconds,
        )
        return normalize_eve_scout(payload, now=self.clock(), feed=self.name)
