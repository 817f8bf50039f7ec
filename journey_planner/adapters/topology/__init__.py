"""Topology adapters - Implementations of TopologyRepositoryPort.

Available implementations:
- JSONTopologyRepository: Loads locations and gates from a JSON document
"""

from .json_repository import JSONTopologyRepository

__all__ = ["JSONTopologyRepository"]
