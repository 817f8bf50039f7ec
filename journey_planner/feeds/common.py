"""Rules shared by every ephemeral feed normalizer."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional, Tuple

from ..domain.capacity import capacity_for, is_permanent_link_type
from ..domain.models import EphemeralLink, LinkLife, LinkMass

# Signature label feeds use for the permanent-link side of a record.
PERMANENT_LINK_SIGNATURE = "GAT"

UNKNOWN_SIGNATURE = "???"


def clean_signature(raw: object) -> Optional[str]:
    """Normalize an endpoint signature label; None when absent."""
    if not isinstance(raw, str):
        return None
    label = raw.strip().upper()
    if not label or label == UNKNOWN_SIGNATURE:
        return None
    return label


def utc(value: datetime) -> datetime:
    """Attach UTC to a naive timestamp."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def rejection_reason(
    signature: Optional[str],
    other_signature: Optional[str],
    type_code: Optional[str],
) -> Optional[str]:
    """Explain why a record must not become an edge, or None to keep it."""
    if signature is None and other_signature is None:
        # Usually left behind by a pilot dying and respawning
        return "no signature on either side"
    if is_permanent_link_type(type_code):
        return "permanent link type"
    if PERMANENT_LINK_SIGNATURE in (signature, other_signature):
        return "permanent link signature"
    return None


def link_pair(
    source_id: int,
    target_id: int,
    signature: Optional[str],
    other_signature: Optional[str],
    type_code: Optional[str],
    life: LinkLife,
    mass: LinkMass,
    created_at: datetime,
    provenance: str,
) -> Tuple[EphemeralLink, EphemeralLink]:
    """Expand one accepted record into its two traversal directions."""
    forward = EphemeralLink(
        source_id=source_id,
        target_id=target_id,
        signature=signature,
        other_signature=other_signature,
        type_code=type_code,
        life=life,
        mass=mass,
        capacity=capacity_for(type_code),
        created_at=created_at,
        provenance=provenance,
    )
    return forward, forward.reversed()
