"""Rendering port - Abstraction for presenting route results.

This protocol defines the contract for route formatting, allowing
different implementations (plain text, HTML table, etc.) to be used.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict, List, Protocol

if TYPE_CHECKING:
    from ..domain.models import ErrorStatus, RouteResult


class RouteFormatterPort(Protocol):
    """Port for route rendering.

    Implementation: adapters/rendering/text_formatter.py
    """

    def format_route(self, route: RouteResult) -> str:
        """Render a route as a compact, pastable string."""
        ...

    def format_rows(self, route: RouteResult) -> List[Dict[str, str]]:
        """Render a route as one table row per location."""
        ...

    def format_error(self, status: ErrorStatus) -> str:
        """Render an error classification for display."""
        ...
