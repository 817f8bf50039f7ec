"""Rendering adapters - Implementations of RouteFormatterPort.

Available implementations:
- TextRouteFormatter: One-line and tabular plain-text routes
"""

from .text_formatter import TextRouteFormatter

__all__ = ["TextRouteFormatter"]
