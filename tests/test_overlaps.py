"""Tests for zone x parcel overlap detection."""

import pytest

from parcel_classification.overlaps import DEFAULT_ENGINE, ENGINES, find_overlaps
from parcel_classification.polygon_utils import build_polygon, build_polygons
from parcel_classification.records import ParcelRecord, ZoneRecord, parse_records, validate_text
from parcel_classification.severity import FloodZone, Overlap


def zone(code, *coords):
    return build_polygon(ZoneRecord(FloodZone(code), coords))


def parcel(name, *coords):
    return build_polygon(ParcelRecord(name, coords))


@pytest.fixture(params=sorted(ENGINES))
def engine(request):
    return request.param


class TestFindOverlaps:
    """Tests for find_overlaps with every engine."""

    def test_identical_rings_overlap(self, engine):
        ring = ((15, 7), (15, 11), (22, 11), (22, 7))
        overlaps = find_overlaps([zone("X", *ring)], [parcel("1", *ring)], engine=engine)
        assert overlaps == [Overlap(parcel="1", zone=FloodZone.X)]

    def test_disjoint_rings_do_not_overlap(self, engine):
        zones = [zone("X", (15, 7), (15, 11), (22, 11), (22, 7))]
        parcels = [parcel("1", (99, 99), (98, 99), (96, 96), (97, 97))]
        assert find_overlaps(zones, parcels, engine=engine) == []

    def test_single_point_contact_counts(self, engine):
        """Rings touching only at one corner still overlap."""
        zones = [zone("AE", (0, 0), (0, 10), (10, 10), (10, 0))]
        parcels = [parcel("1", (10, 10), (10, 12), (14, 12), (14, 10))]
        assert find_overlaps(zones, parcels, engine=engine) == [
            Overlap(parcel="1", zone=FloodZone.AE)
        ]

    def test_contained_parcel_counts(self, engine):
        zones = [zone("VE", (0, 0), (0, 20), (20, 20), (20, 0))]
        parcels = [parcel("7", (5, 5), (5, 6), (6, 6), (6, 5))]
        assert len(find_overlaps(zones, parcels, engine=engine)) == 1

    def test_zone_then_parcel_order(self, engine, mixed_batch_text):
        batch = parse_records(validate_text(mixed_batch_text))
        zones = build_polygons(batch.zones)
        parcels = build_polygons(batch.parcels)

        overlaps = find_overlaps(zones, parcels, engine=engine)

        assert [(o.parcel, o.zone.value) for o in overlaps] == [
            ("2", "X"),
            ("1", "AE"),
            ("1", "AE"),
            ("2", "AE"),
            ("1", "VE"),
        ]

    def test_empty_inputs(self, engine):
        assert find_overlaps([], [], engine=engine) == []


class TestEngines:
    """Tests for engine selection."""

    def test_unknown_engine_raises(self):
        with pytest.raises(ValueError, match="Unknown engine"):
            find_overlaps([], [], engine="turf")

    def test_default_engine_is_exact(self):
        assert DEFAULT_ENGINE == "exact"

    @pytest.mark.parametrize("base", [2 ** 53, 10 ** 20, int("9" * 400)])
    def test_engines_agree_beyond_float_precision(self, base):
        """Rings too large for floats must not be reported as overlapping when apart."""
        zones = [zone("VE", (0, 0), (0, 1), (base + 3, 1), (base + 3, 0))]
        apart = parcel("1", (base + 5, 0), (base + 5, 1), (base + 9, 1), (base + 9, 0))
        touching = parcel("2", (base + 3, 0), (base + 3, 1), (base + 9, 1), (base + 9, 0))

        expected = [Overlap(parcel="2", zone=FloodZone.VE)]
        for name in ENGINES:
            assert find_overlaps(zones, [apart, touching], engine=name) == expected

    def test_engines_agree_on_sample_data(self, sample_data_dir):
        for path in sorted(sample_data_dir.glob("parcel-*.txt")):
            batch = parse_records(validate_text(path.read_text()))
            zones = build_polygons(batch.zones)
            parcels = build_polygons(batch.parcels)
            assert find_overlaps(zones, parcels, engine="exact") == find_overlaps(
                zones, parcels, engine="shapely"
            )
