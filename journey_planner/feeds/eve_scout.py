"""Normalizer for the EvE-Scout-style stateless ephemeral feed.

The feed publishes a flat JSON list of links that are already
described from both sides. There is no age-based life computation:
every link is treated as stable, and its capacity comes from the
static type table.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, TypeAdapter, ValidationError, field_validator

from ..domain.capacity import normalize_type_code
from ..domain.errors import ParseError
from ..domain.models import (
    EPOCH,
    AsOfMarker,
    EphemeralLink,
    FeedSnapshot,
    LinkLife,
    LinkMass,
)
from .common import clean_signature, link_pair, rejection_reason, utc

logger = logging.getLogger(__name__)

FEED_NAME = "eve-scout"


class EveScoutRecord(BaseModel):
    """One link as published by the feed."""

    model_config = ConfigDict(extra="ignore")

    out_system_id: int
    out_signature: Optional[str] = None
    in_system_id: int
    in_signature: Optional[str] = None
    remaining_hours: Optional[float] = None
    wh_type: Optional[str] = None
    updated_at: datetime

    @field_validator("updated_at")
    @classmethod
    def as_utc(cls, v: datetime) -> datetime:
        return utc(v)


_RECORDS = TypeAdapter(List[EveScoutRecord])


def parse_records(payload: object, feed: str = FEED_NAME) -> List[EveScoutRecord]:
    """Validate the decoded JSON list.

    Raises:
        ParseError: If the payload is not a list of well-formed records.
    """
    try:
        return _RECORDS.validate_python(payload)
    except ValidationError as e:
        raise ParseError("EvE-Scout JSON parse failed", feed=feed, cause=e)


def normalize_eve_scout(
    payload: object,
    now: Optional[datetime] = None,
    feed: str = FEED_NAME,
) -> FeedSnapshot:
    """Turn the feed's record list into a snapshot of directed links.

    Args:
        payload: Decoded JSON response.
        now: Fetch time recorded on the snapshot.
        feed: Provenance name stamped on every link.

    Returns:
        A new FeedSnapshot whose marker counts the records and holds
        their latest ``updated_at``.

    Raises:
        ParseError: If the payload is malformed.
    """
    now = utc(now) if now is not None else datetime.now(timezone.utc)
    records = parse_records(payload, feed)

    links: List[EphemeralLink] = []
    latest = EPOCH

    for index, record in enumerate(records):
        if record.updated_at > latest:
            latest = record.updated_at

        signature = clean_signature(record.out_signature)
        other_signature = clean_signature(record.in_signature)
        type_code = normalize_type_code(record.wh_type)

        reason = rejection_reason(signature, other_signature, type_code)
        if reason is not None:
            logger.debug(
                "Dropping link record",
                extra={"feed": feed, "record_index": index, "reason": reason},
            )
            continue

        links.extend(
            link_pair(
                source_id=record.out_system_id,
                target_id=record.in_system_id,
                signature=signature,
                other_signature=other_signature,
                type_code=type_code,
                life=LinkLife.STABLE,
                mass=LinkMass.STABLE,
                created_at=record.updated_at,
                provenance=feed,
            )
        )

    logger.info(
        "EvE-Scout update",
        extra={"feed": feed, "records": len(records), "links": len(links)},
    )

    return FeedSnapshot(
        feed=feed,
        links=tuple(links),
        marker=AsOfMarker(record_count=len(records), latest_modified=latest),
        fetched_at=now,
    )
