"""Shared fixtures: a four-location graph with one wormhole.

    A --gate-- B --gate-- C
               |
            wormhole (ABC / XYZ, capacity 375)
               |
               D
"""

from datetime import datetime, timezone

import pytest

from journey_planner.config import reset_config
from journey_planner.domain.models import (
    EphemeralLink,
    FeedSnapshot,
    LinkLife,
    LinkMass,
    Location,
    PermanentLink,
    SpaceClass,
)
from journey_planner.graph.builder import build_graph

A, B, C, D = 1001, 1002, 1003, 1004

NOW = datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def fresh_config():
    reset_config()
    yield
    reset_config()


@pytest.fixture
def locations():
    return [
        Location(A, "Alpha", 0.9, SpaceClass.HIGHSEC),
        Location(B, "Bravo", 0.4, SpaceClass.LOWSEC),
        Location(C, "Charlie", -0.2, SpaceClass.NULLSEC),
        Location(D, "J100004", -1.0, SpaceClass.C3),
    ]


@pytest.fixture
def gates():
    links = [PermanentLink(A, B), PermanentLink(B, C)]
    return links + [link.reversed() for link in links]


@pytest.fixture
def wormhole():
    return EphemeralLink(
        source_id=B,
        target_id=D,
        signature="ABC",
        other_signature="XYZ",
        type_code="B274",
        life=LinkLife.STABLE,
        mass=LinkMass.STABLE,
        capacity=375,
        created_at=NOW,
        provenance="test",
    )


@pytest.fixture
def snapshot(wormhole):
    return FeedSnapshot(feed="test", links=(wormhole, wormhole.reversed()))


@pytest.fixture
def graph(locations, gates, snapshot):
    return build_graph(locations, gates, [snapshot])
