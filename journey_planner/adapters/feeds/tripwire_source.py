"""Tripwire feed source adapter.

Polls the stateful feed with an incremental request: the marker of the
previous snapshot is echoed back so the server can answer "no changes"
cheaply. Normalization is delegated to feeds/tripwire.py.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Dict, Optional

import requests

from ...config import TripwireConfig, get_config
from ...domain.models import AsOfMarker, FeedSnapshot
from ...feeds.tripwire import FEED_NAME, format_timestamp, normalize_tripwire
from .http import request_json, utcnow


@dataclass
class TripwireFeedSource:
    """Feed source for the Tripwire refresh endpoint.

    This adapter implements FeedSourcePort.

    Attributes:
        config: Tripwire configuration (URL, anchor system, timeout)
        session: HTTP session, shared across polls
        clock: Source of the classification time
    """

    config: TripwireConfig = field(default_factory=lambda: get_config().tripwire)
    session: requests.Session = field(default_factory=requests.Session, repr=False)
    clock: Callable[[], datetime] = field(default=utcnow, repr=False)

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    @property
    def name(self) -> str:
        return FEED_NAME

    @property
    def url(self) -> str:
        return f"{self.config.base_url.rstrip('/')}/refresh.php"

    def request_form(self, previous: Optional[FeedSnapshot]) -> Dict[str, str]:
        """Build the form body, echoing the previous as-of marker."""
        marker = previous.marker if previous is not None else AsOfMarker()
        return {
            "mode": "refresh",
            "systemID": str(self.config.system_id),
            "systemName": self.config.system_name,
            "signatureCount": str(marker.record_count),
            "signatureTime": format_timestamp(marker.latest_modified),
        }

    def fetch(self, previous: Optional[FeedSnapshot]) -> FeedSnapshot:
        """Fetch and normalize the current Tripwire state.

        Raises:
            FeedError: If the HTTP request fails.
            ParseError: If the response is malformed.
        """
        form = self.request_form(previous)
        self._logger.debug(
            "Tripwire updating",
            extra={
                "signature_count": form["signatureCount"],
                "signature_time": form["signatureTime"],
            },
        )
        payload = request_json(
            self.session,
            "POST",
            self.url,
            feed=self.name,
            timeout=self.config.timeout_seconds,
            data=form,
        )
        return normalize_tripwire(payload, previous, now=self.clock(), feed=self.name)
