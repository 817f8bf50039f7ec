"""Shared HTTP plumbing for feed sources."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

import requests

from ...domain.errors import FeedError, ParseError

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def request_json(
    session: requests.Session,
    method: str,
    url: str,
    feed: str,
    timeout: float,
    **kwargs: Any,
) -> Any:
    """Perform one request and decode its JSON body.

    Raises:
        FeedError: On connection failures, timeouts and HTTP errors.
        ParseError: If the body is not valid JSON.
    """
    try:
        response = session.request(method, url, timeout=timeout, **kwargs)
        response.raise_for_status()
    except requests.HTTPError as e:
        status = e.response.status_code if e.response is not None else None
        logger.warning(
            "Feed returned an error status",
            extra={"feed": feed, "url": url, "status_code": status},
        )
        raise FeedError(
            f"{feed} HTTP request failed",
            feed=feed,
            status_code=status,
            cause=e,
        )
    except requests.RequestException as e:
        logger.warning(
            "Feed request failed",
            extra={"feed": feed, "url": url, "error": str(e)},
        )
        raise FeedError(f"{feed} HTTP request failed", feed=feed, cause=e)

    try:
        return response.json()
    except ValueError as e:
        raise ParseError(f"{feed} JSON parse failed", feed=feed, cause=e)
