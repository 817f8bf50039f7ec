"""Cache adapters - Implementations of the SnapshotCachePort.

Available implementations:
- RefreshCache: Per-feed last-known-good snapshot with error fallback
"""

from .refresh_cache import RefreshCache

__all__ = ["RefreshCache"]
