"""Ephemeral feed normalizers.

Pure functions turning decoded feed payloads into FeedSnapshots.
Transport lives in ``adapters.feeds``.
"""

from .eve_scout import normalize_eve_scout
from .tripwire import normalize_tripwire

__all__ = ["normalize_eve_scout", "normalize_tripwire"]
