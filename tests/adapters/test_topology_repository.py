"""Tests for the JSON topology repository."""

import json

import pytest

from journey_planner.adapters.topology import JSONTopologyRepository
from journey_planner.config import TopologyConfig
from journey_planner.domain.errors import TopologyError
from journey_planner.domain.models import PermanentLink, SpaceClass

COMPACT = [
    [30000142, "Jita", 9, 7, [30000144]],
    [30000144, "Perimeter", 9, 7, [30000142, 30000145]],
    [30000145, "New Caldari", 10, 7, []],
    [31000005, "Thera", -10, 12, []],
]


def write_topology(tmp_path, document, name="topology.json"):
    (tmp_path / name).write_text(json.dumps(document), encoding="utf-8")
    return JSONTopologyRepository(TopologyConfig(data_dir=tmp_path, topology_file=name))


class TestJSONTopologyRepository:
    """Test suite for JSONTopologyRepository."""

    @pytest.fixture
    def repository(self, tmp_path):
        return write_topology(tmp_path, COMPACT)

    def test_locations_in_document_order(self, repository):
        names = [location.name for location in repository.locations()]
        assert names == ["Jita", "Perimeter", "New Caldari", "Thera"]

    def test_compact_security_is_in_tenths(self, repository):
        jita = repository.get_location(30000142)
        assert jita.security == pytest.approx(0.9)
        assert repository.get_location(31000005).security == pytest.approx(-1.0)

    def test_space_class(self, repository):
        assert repository.get_location(30000142).space_class is SpaceClass.HIGHSEC
        assert repository.get_location(31000005).space_class is SpaceClass.THERA

    def test_links_expanded_and_deduplicated(self, repository):
        links = repository.links()

        # Jita-Perimeter is listed from both sides, Perimeter-New Caldari once
        assert len(links) == 4
        assert len(set(links)) == 4
        assert PermanentLink(30000142, 30000144) in links
        assert PermanentLink(30000145, 30000144) in links

    def test_get_unknown_location(self, repository):
        assert repository.get_location(1) is None

    def test_search_prefix_case_insensitive_sorted(self, repository):
        names = [location.name for location in repository.search("j")]
        assert names == ["Jita"]

        names = [location.name for location in repository.search("")]
        assert names == ["Jita", "New Caldari", "Perimeter", "Thera"]

    def test_search_limit(self, repository):
        assert len(repository.search("", limit=2)) == 2

    def test_object_entries(self, tmp_path):
        repository = write_topology(
            tmp_path,
            [
                {"id": 1, "name": "One", "security": 0.5, "class": 8, "neighbours": [2]},
                {"id": 2, "name": "Two"},
            ],
        )

        one = repository.get_location(1)
        assert one.security == 0.5
        assert one.space_class is SpaceClass.LOWSEC
        assert repository.get_location(2).space_class is None
        assert set(repository.links()) == {PermanentLink(1, 2), PermanentLink(2, 1)}

    def test_loaded_once(self, repository, tmp_path):
        repository.locations()
        (tmp_path / "topology.json").write_text("[]", encoding="utf-8")

        assert len(repository.locations()) == 4

        repository.clear_cache()
        assert repository.locations() == []

    def test_missing_file(self, tmp_path):
        repository = JSONTopologyRepository(TopologyConfig(data_dir=tmp_path / "nope"))

        with pytest.raises(TopologyError) as exc_info:
            repository.locations()
        assert exc_info.value.file_path.endswith("topology.json")

    @pytest.mark.parametrize(
        "document",
        [
            {"not": "a list"},
            [[1, "Short", 5]],
            [[1, "Bad class", 5, 99, []]],
            [[1, "Bad neighbours", 5, 7, ["x"]]],
            [{"id": "1", "name": "String id"}],
            [{"id": 1, "name": "Null security", "security": None}],
        ],
    )
    def test_malformed_documents(self, tmp_path, document):
        repository = write_topology(tmp_path, document)
        with pytest.raises(TopologyError):
            repository.locations()

    def test_invalid_json(self, tmp_path):
        (tmp_path / "topology.json").write_text("[1,", encoding="utf-8")
        repository = JSONTopologyRepository(TopologyConfig(data_dir=tmp_path))
        with pytest.raises(TopologyError):
            repository.links()
