from medzones.models.domain import GeoPoint, LocatableRecord, Zone
from medzones.services.zones import (
    UNASSIGNED_BUCKET,
    classify_point,
    count_records_per_zone,
    group_records_by_zone,
    zone_contains,
)

OBELISCO = GeoPoint(-34.6037, -58.3816)
PALERMO = GeoPoint(-34.5889, -58.4300)
CORDOBA = GeoPoint(-31.4201, -64.1888)


def _circle(zone_id: str, center: GeoPoint, radius_km: float, name: str | None = None) -> Zone:
    return Zone(id=zone_id, name=name or zone_id.title(), type="circle", center=center, radius_km=radius_km)


def _palermo_polygon() -> Zone:
    return Zone(
        id="palermo",
        name="Palermo",
        type="polygon",
        coordinates=(
            GeoPoint(-34.600, -58.450),
            GeoPoint(-34.600, -58.410),
            GeoPoint(-34.570, -58.410),
            GeoPoint(-34.570, -58.450),
        ),
    )


def _record(record_id: str, point: GeoPoint | None, verified: bool = True) -> LocatableRecord:
    return LocatableRecord(id=record_id, point=point, verified=verified)


def test_first_listed_zone_wins_on_overlap():
    big = _circle("big", OBELISCO, 10.0)
    small = _circle("small", OBELISCO, 1.0)

    for _ in range(10):
        assert classify_point(OBELISCO, [big, small]) is big
        assert classify_point(OBELISCO, [small, big]) is small


def test_polygon_zone_matches_inside_point():
    zones = [_circle("centro", OBELISCO, 1.0), _palermo_polygon()]

    match = classify_point(PALERMO, zones)

    assert match is not None
    assert match.id == "palermo"


def test_no_match_and_missing_point_return_none():
    zones = [_circle("centro", OBELISCO, 5.0), _palermo_polygon()]

    assert classify_point(CORDOBA, zones) is None
    assert classify_point(None, zones) is None
    assert classify_point(OBELISCO, []) is None


def test_circle_includes_its_boundary():
    zone = _circle("dot", OBELISCO, 0.0)

    assert zone_contains(zone, *OBELISCO)
    assert not zone_contains(zone, -34.6038, -58.3816)


def test_zone_without_parameters_never_matches():
    zone = Zone(id="broken", name="Broken", type="circle", center=None, radius_km=None)

    assert not zone_contains(zone, *OBELISCO)
    assert classify_point(OBELISCO, [zone]) is None


def test_group_records_by_zone_collects_unassigned():
    zones = [_circle("centro", OBELISCO, 2.0, name="Centro"), _palermo_polygon()]
    records = [
        _record("d1", OBELISCO),
        _record("d2", PALERMO),
        _record("d3", CORDOBA),
        _record("d4", None),
    ]

    groups = group_records_by_zone(records, zones)

    assert list(groups) == [UNASSIGNED_BUCKET, "Centro", "Palermo"]
    assert [record.id for record in groups["Centro"]] == ["d1"]
    assert [record.id for record in groups["Palermo"]] == ["d2"]
    assert [record.id for record in groups[UNASSIGNED_BUCKET]] == ["d3", "d4"]


def test_count_records_per_zone_counts_overlaps_and_skips_unverified():
    big = _circle("big", OBELISCO, 10.0)
    small = _circle("small", OBELISCO, 1.0)
    records = [
        _record("d1", OBELISCO),
        _record("d2", PALERMO),
        _record("d3", OBELISCO, verified=False),
        _record("d4", None),
    ]

    counts = count_records_per_zone(records, [big, small])

    assert [(zone.id, count) for zone, count in counts] == [("big", 2), ("small", 1)]
