"""Top-level package for the Journey Planner project.

The planner combines a static graph of locations joined by permanent
gates with short-lived wormhole links reported by polled feeds, and
finds minimum-hop routes through the result under user filters.
"""
