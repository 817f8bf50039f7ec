from datetime import datetime, timedelta, timezone

import pytest

from journey_planner.domain.errors import ParseError
from journey_planner.domain.models import EPOCH, LinkLife, LinkMass
from journey_planner.feeds import normalize_eve_scout, normalize_tripwire
from journey_planner.feeds.common import clean_signature
from journey_planner.feeds.tripwire import (
    compute_marker,
    format_timestamp,
    parse_timestamp,
)

NOW = datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)


def stamp(hours_ago):
    return format_timestamp(NOW - timedelta(hours=hours_ago))


def tripwire_payload(
    life="stable",
    mass="stable",
    wh_type="B274",
    age_hours=2,
    signature="abc",
    other_signature="xyz",
    far_system="1004",
):
    return {
        "signatures": {
            "11": {
                "signatureID": signature,
                "systemID": "1002",
                "lifeTime": stamp(age_hours),
                "modifiedTime": stamp(1),
            },
            "12": {
                "signatureID": other_signature,
                "systemID": far_system,
                "lifeTime": stamp(age_hours),
                "modifiedTime": stamp(0.5),
            },
        },
        "wormholes": {
            "7": {
                "initialID": "11",
                "secondaryID": "12",
                "type": wh_type,
                "life": life,
                "mass": mass,
            }
        },
    }


class TestTripwire:
    """Classification of the stateful feed."""

    def test_accepted_record_becomes_two_links(self):
        snapshot = normalize_tripwire(tripwire_payload(), now=NOW)

        forward, backward = snapshot.links
        assert (forward.source_id, forward.target_id) == (1002, 1004)
        assert (backward.source_id, backward.target_id) == (1004, 1002)
        assert (forward.signature, forward.other_signature) == ("ABC", "XYZ")
        assert (backward.signature, backward.other_signature) == ("XYZ", "ABC")
        for link in snapshot.links:
            assert link.type_code == "B274"
            assert link.capacity == 375
            assert link.life is LinkLife.STABLE
            assert link.mass is LinkMass.STABLE
            assert link.provenance == "tripwire"

    def test_marker(self):
        snapshot = normalize_tripwire(tripwire_payload(), now=NOW)

        assert snapshot.marker.record_count == 2
        assert snapshot.marker.latest_modified == NOW - timedelta(hours=0.5)
        assert snapshot.fetched_at == NOW

    @pytest.mark.parametrize(
        "life, age_hours, expected",
        [
            ("critical", 1, LinkLife.END_OF_LIFE),
            ("stable", 19, LinkLife.STABLE),
            ("stable", 20, LinkLife.END_OF_LIFE),
            ("stable", 23, LinkLife.END_OF_LIFE),
        ],
    )
    def test_life(self, life, age_hours, expected):
        snapshot = normalize_tripwire(
            tripwire_payload(life=life, age_hours=age_hours), now=NOW
        )
        assert {link.life for link in snapshot.links} == {expected}

    @pytest.mark.parametrize(
        "mass, expected",
        [
            ("stable", LinkMass.STABLE),
            ("destab", LinkMass.DESTABILIZED),
            ("critical", LinkMass.VERY_UNSTABLE),
        ],
    )
    def test_mass(self, mass, expected):
        snapshot = normalize_tripwire(tripwire_payload(mass=mass), now=NOW)
        assert {link.mass for link in snapshot.links} == {expected}

    def test_expired_link_dropped(self):
        snapshot = normalize_tripwire(tripwire_payload(age_hours=25), now=NOW)
        assert snapshot.links == ()

    def test_link_at_expiry_boundary_kept(self):
        # Expiry is strictly older than 24 hours
        snapshot = normalize_tripwire(tripwire_payload(age_hours=24), now=NOW)

        assert len(snapshot.links) == 2
        assert {link.life for link in snapshot.links} == {LinkLife.END_OF_LIFE}

    def test_invalid_life_rejects_payload(self):
        with pytest.raises(ParseError) as exc_info:
            normalize_tripwire(tripwire_payload(life="dying"), now=NOW)
        assert exc_info.value.record_id == "7"

    def test_missing_mass_rejects_payload(self):
        payload = tripwire_payload()
        del payload["wormholes"]["7"]["mass"]
        with pytest.raises(ParseError, match="mass"):
            normalize_tripwire(payload, now=NOW)

    def test_missing_life_time_rejects_payload(self):
        payload = tripwire_payload()
        del payload["signatures"]["11"]["lifeTime"]
        with pytest.raises(ParseError, match="lifeTime"):
            normalize_tripwire(payload, now=NOW)

    def test_gate_type_dropped(self):
        snapshot = normalize_tripwire(tripwire_payload(wh_type="GATE"), now=NOW)
        assert snapshot.links == ()

    def test_gate_signature_dropped(self):
        snapshot = normalize_tripwire(tripwire_payload(other_signature="GAT"), now=NOW)
        assert snapshot.links == ()

    def test_no_signature_on_either_side_dropped(self):
        snapshot = normalize_tripwire(
            tripwire_payload(signature="???", other_signature=""), now=NOW
        )
        assert snapshot.links == ()

    def test_one_signature_is_enough(self):
        snapshot = normalize_tripwire(tripwire_payload(other_signature="???"), now=NOW)
        forward, _ = snapshot.links
        assert forward.signature == "ABC"
        assert forward.other_signature is None

    def test_unknown_type_has_no_capacity(self):
        snapshot = normalize_tripwire(tripwire_payload(wh_type="????"), now=NOW)
        for link in snapshot.links:
            assert link.type_code is None
            assert link.capacity is None

    def test_class_code_far_side_dropped(self):
        snapshot = normalize_tripwire(tripwire_payload(far_system="8"), now=NOW)
        assert snapshot.links == ()

    def test_not_an_object(self):
        with pytest.raises(ParseError):
            normalize_tripwire(["not", "a", "dict"], now=NOW)

    def test_initial_refresh_needs_signatures(self):
        with pytest.raises(ParseError, match="initial refresh"):
            normalize_tripwire({"sync": "2024-05-01 12:00:00"}, now=NOW)

    def test_no_changes_keeps_marker_and_reclassifies(self):
        first = normalize_tripwire(tripwire_payload(age_hours=18), now=NOW)

        later = NOW + timedelta(hours=3)
        second = normalize_tripwire({"sync": "later"}, previous=first, now=later)

        assert second.marker == first.marker
        assert second.fetched_at == later
        assert len(second.links) == 2
        # 21 hours old now
        assert {link.life for link in second.links} == {LinkLife.END_OF_LIFE}

    def test_no_changes_eventually_expires_links(self):
        first = normalize_tripwire(tripwire_payload(age_hours=18), now=NOW)
        second = normalize_tripwire(
            {}, previous=first, now=NOW + timedelta(hours=7)
        )
        assert second.links == ()
        assert second.marker == first.marker


class TestTripwireHelpers:
    """Timestamp and marker helpers."""

    def test_timestamp_round_trip_format(self):
        assert format_timestamp(NOW) == "2024-05-01 12:00:00"
        assert parse_timestamp("2024-05-01 12:00:00") == NOW

    def test_malformed_timestamp(self):
        assert parse_timestamp("yesterday") is None
        assert parse_timestamp(None) is None

    def test_epoch_formats(self):
        assert format_timestamp(EPOCH) == "0001-01-01 00:00:00"

    def test_empty_marker(self):
        marker = compute_marker({})
        assert marker.record_count == 0
        assert marker.latest_modified == EPOCH


@pytest.mark.parametrize(
    "raw, expected",
    [("abc", "ABC"), (" Abc-123 ", "ABC-123"), ("???", None), ("", None), (None, None)],
)
def test_clean_signature(raw, expected):
    assert clean_signature(raw) == expected


def eve_scout_record(**overrides):
    record = {
        "id": "42",
        "out_system_id": 31000005,
        "out_system_name": "Thera",
        "out_signature": "ABC-123",
        "in_system_id": 30002187,
        "in_system_name": "Amarr",
        "in_signature": "XYZ-789",
        "remaining_hours": 14,
        "wh_type": "Q003",
        "updated_at": "2024-05-01T10:00:00.000Z",
    }
    record.update(overrides)
    return record


class TestEveScout:
    """Normalization of the stateless feed."""

    def test_records_become_stable_link_pairs(self):
        snapshot = normalize_eve_scout([eve_scout_record()], now=NOW)

        forward, backward = snapshot.links
        assert (forward.source_id, forward.target_id) == (31000005, 30002187)
        assert (backward.signature, backward.other_signature) == ("XYZ-789", "ABC-123")
        for link in snapshot.links:
            assert link.life is LinkLife.STABLE
            assert link.mass is LinkMass.STABLE
            assert link.capacity == 5
            assert link.provenance == "eve-scout"

    def test_marker_counts_records(self):
        snapshot = normalize_eve_scout(
            [
                eve_scout_record(),
                eve_scout_record(updated_at="2024-05-01T11:30:00Z", wh_type="GATE"),
            ],
            now=NOW,
        )

        assert len(snapshot.links) == 2
        assert snapshot.marker.record_count == 2
        assert snapshot.marker.latest_modified == datetime(
            2024, 5, 1, 11, 30, tzinfo=timezone.utc
        )

    def test_empty_list(self):
        snapshot = normalize_eve_scout([], now=NOW)
        assert snapshot.links == ()
        assert snapshot.marker.latest_modified == EPOCH

    def test_unknown_type(self):
        snapshot = normalize_eve_scout([eve_scout_record(wh_type="K162")], now=NOW)
        assert {link.capacity for link in snapshot.links} == {None}

    def test_gate_signature_dropped(self):
        snapshot = normalize_eve_scout([eve_scout_record(in_signature="GAT")], now=NOW)
        assert snapshot.links == ()

    @pytest.mark.parametrize(
        "payload",
        [
            {"not": "a list"},
            [eve_scout_record(out_system_id="Thera")],
            [{"out_signature": "ABC"}],
        ],
    )
    def test_malformed_payload(self, payload):
        with pytest.raises(ParseError, match="EvE-Scout JSON parse failed"):
            normalize_eve_scout(payload, now=NOW)
