"""Adapters layer - Concrete implementations of ports.

This module contains implementations of the port interfaces,
connecting the application to external systems like:
- Static topology storage (JSON documents)
- Ephemeral link feeds (Tripwire, EvE-Scout over HTTP)
- Feed snapshot caching (last known good state)
- Path finding (breadth-first search)
- Rendering (plain text)
"""
