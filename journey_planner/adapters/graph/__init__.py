"""Graph adapters - Implementations of graph-related ports.

Available implementations:
- MinHopPathFinder: Finds minimum-hop routes with breadth-first search
"""

from .min_hop_solver import MinHopPathFinder

__all__ = ["MinHopPathFinder"]
