"""Normalizer for the Tripwire-style stateful ephemeral feed.

A payload holds two maps: ``signatures`` (endpoint descriptors keyed by
signature id) and ``wormholes`` (link records referencing two signature
ids). Each accepted link record becomes two directed EphemeralLinks.

Classification rules, applied per link record:

1. ``life`` is ``critical`` -> end of life; ``stable`` -> stable unless
   the link is at least 20 hours old, then end of life.
2. ``mass`` maps ``stable``/``destab``/``critical`` to the three mass
   states.
3. Links older than 24 hours are dropped, as are links without any
   signature label and links that are really permanent gates.

Any other value for life or mass makes the whole payload invalid.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, List, Mapping, Optional

from ..domain.errors import ParseError
from ..domain.capacity import normalize_type_code
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

FEED_NAME = "tripwire"

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

END_OF_LIFE_AGE = timedelta(hours=20)
EXPIRY_AGE = timedelta(hours=24)

# System ids at or below this value are class codes ("some lowsec
# system"), not specific locations.
MAX_CLASS_CODE = 10

_UNKNOWN_TYPES = {"????", ""}

_MASS_STATES = {
    "stable": LinkMass.STABLE,
    "destab": LinkMass.DESTABILIZED,
    "critical": LinkMass.VERY_UNSTABLE,
}


def parse_timestamp(raw: object) -> Optional[datetime]:
    """Parse a feed timestamp as UTC, or None if absent or malformed."""
    if not isinstance(raw, str):
        return None
    try:
        return utc(datetime.strptime(raw, TIMESTAMP_FORMAT))
    except ValueError:
        return None


def format_timestamp(value: datetime) -> str:
    """Format a marker timestamp the way the feed expects it back.

    Years below 1000 keep their leading zeros, which ``strftime`` does
    not guarantee on every platform.
    """
    return utc(value).replace(tzinfo=None).isoformat(sep=" ", timespec="seconds")


def classify_life(reported: object, age: timedelta, record_id: str) -> LinkLife:
    """Derive the life state from the reported status and the age."""
    if reported == "critical":
        return LinkLife.END_OF_LIFE
    if reported == "stable":
        return LinkLife.STABLE if age < END_OF_LIFE_AGE else LinkLife.END_OF_LIFE
    if reported is None:
        raise ParseError(
            f"Tripwire wormhole life missing from {record_id}",
            feed=FEED_NAME,
            record_id=record_id,
        )
    raise ParseError(
        f"Tripwire wormhole life is not stable or critical for {record_id}",
        feed=FEED_NAME,
        record_id=record_id,
    )


def classify_mass(reported: object, record_id: str) -> LinkMass:
    """Map the reported mass status onto a mass state."""
    if reported is None:
        raise ParseError(
            f"Tripwire wormhole mass is missing from {record_id}",
            feed=FEED_NAME,
            record_id=record_id,
        )
    mass = _MASS_STATES.get(reported) if isinstance(reported, str) else None
    if mass is None:
        raise ParseError(
            f"Tripwire wormhole mass is not stable, destab or critical for {record_id}",
            feed=FEED_NAME,
            record_id=record_id,
        )
    return mass


def compute_marker(signatures: Mapping[str, Any]) -> AsOfMarker:
    """Count endpoint descriptors and find their latest modification."""
    latest = EPOCH
    for descriptor in signatures.values():
        if not isinstance(descriptor, Mapping):
            continue
        modified = parse_timestamp(descriptor.get("modifiedTime"))
        if modified is not None and modified > latest:
            latest = modified
    return AsOfMarker(record_count=len(signatures), latest_modified=latest)


def normalize_tripwire(
    payload: object,
    previous: Optional[FeedSnapshot] = None,
    now: Optional[datetime] = None,
    feed: str = FEED_NAME,
) -> FeedSnapshot:
    """Turn a feed response into a snapshot of directed ephemeral links.

    Args:
        payload: Decoded JSON response.
        previous: Snapshot from the last successful refresh, if any.
        now: Classification time (defaults to the current UTC time).
        feed: Provenance name stamped on every link.

    Returns:
        A new FeedSnapshot. When the response reports no changes, the
        previous marker is kept and its payload is re-classified.

    Raises:
        ParseError: If the payload or one of its records is malformed.
    """
    now = utc(now) if now is not None else datetime.now(timezone.utc)

    if not isinstance(payload, Mapping):
        raise ParseError("Tripwire response is not a JSON object", feed=feed)

    signatures = payload.get("signatures")
    if not isinstance(signatures, Mapping):
        if previous is None:
            raise ParseError(
                "Tripwire signatures not present in initial refresh", feed=feed
            )
        logger.debug("Tripwire reported no changes", extra={"feed": feed})
        if previous.payload is None:
            return FeedSnapshot(
                feed=feed, links=previous.links, marker=previous.marker, fetched_at=now
            )
        return FeedSnapshot(
            feed=feed,
            links=tuple(_classify_links(previous.payload, now, feed)),
            marker=previous.marker,
            fetched_at=now,
            payload=previous.payload,
        )

    marker = compute_marker(signatures)
    links = _classify_links(payload, now, feed)

    logger.info(
        "Signature update",
        extra={
            "feed": feed,
            "signature_count": marker.record_count,
            "signature_time": format_timestamp(marker.latest_modified)
            if marker.latest_modified != EPOCH
            else None,
            "links": len(links),
        },
    )

    return FeedSnapshot(
        feed=feed, links=tuple(links), marker=marker, fetched_at=now, payload=payload
    )


def _location_id(raw: object) -> Optional[int]:
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, str):
        try:
            return int(raw.strip())
        except ValueError:
            return None
    return None


def _reference(record: Mapping[str, Any], key: str, record_id: str, feed: str) -> str:
    value = record.get(key)
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        raise ParseError(
            f"Tripwire {key} missing from wormhole {record_id}",
            feed=feed,
            record_id=record_id,
        )
    return str(value)


def _classify_links(
    payload: Mapping[str, Any], now: datetime, feed: str
) -> List[EphemeralLink]:
    signatures = payload.get("signatures")
    if not isinstance(signatures, Mapping):
        raise ParseError("Tripwire signatures not present", feed=feed)
    wormholes = payload.get("wormholes")
    if not isinstance(wormholes, Mapping):
        raise ParseError("Tripwire wormholes not present", feed=feed)

    links: List[EphemeralLink] = []

    for raw_id, record in wormholes.items():
        record_id = str(raw_id)
        if not isinstance(record, Mapping):
            raise ParseError(
                f"Tripwire wormhole {record_id} is not an object",
                feed=feed,
                record_id=record_id,
            )

        initial = signatures.get(_reference(record, "initialID", record_id, feed))
        secondary = signatures.get(_reference(record, "secondaryID", record_id, feed))
        initial = initial if isinstance(initial, Mapping) else {}
        secondary = secondary if isinstance(secondary, Mapping) else {}

        from_id = _location_id(initial.get("systemID"))
        if from_id is None:
            continue
        to_id = _location_id(secondary.get("systemID"))

        signature = clean_signature(initial.get("signatureID"))
        other_signature = clean_signature(secondary.get("signatureID"))

        raw_type = record.get("type")
        type_code = (
            normalize_type_code(raw_type)
            if isinstance(raw_type, str) and raw_type.strip() not in _UNKNOWN_TYPES
            else None
        )

        created_at = parse_timestamp(initial.get("lifeTime"))
        if created_at is None:
            raise ParseError(
                f"Tripwire wormhole lifeTime missing or malformed for {record_id}",
                feed=feed,
                record_id=record_id,
            )
        age = now - created_at

        life = classify_life(record.get("life"), age, record_id)
        mass = classify_mass(record.get("mass"), record_id)

        if age > EXPIRY_AGE:
            logger.debug(
                "Dropping expired link",
                extra={"feed": feed, "record_id": record_id, "age_hours": age / timedelta(hours=1)},
            )
            continue

        reason = rejection_reason(signature, other_signature, type_code)
        if reason is not None:
            logger.debug(
                "Dropping link record",
                extra={"feed": feed, "record_id": record_id, "reason": reason},
            )
            continue

        if from_id <= MAX_CLASS_CODE or to_id is None or to_id <= MAX_CLASS_CODE:
            logger.debug(
                "Dropping link without a specific far side",
                extra={"feed": feed, "record_id": record_id},
            )
            continue

        links.extend(
            link_pair(
                source_id=from_id,
                target_id=to_id,
                signature=signature,
                other_signature=other_signature,
                type_code=type_code,
                life=life,
                mass=mass,
                created_at=created_at,
                provenance=feed,
            )
        )

    return links
