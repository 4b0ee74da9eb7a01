import pytest

from medzones.errors import InvalidCoordinatesError, InvalidRadiusError
from medzones.models.domain import GeoPoint, LocatableRecord
from medzones.services.geospatial import haversine_km
from medzones.services.proximity import rank_by_proximity, validate_radius

ORIGIN = GeoPoint(-34.6037, -58.3816)


def _record(record_id: str, lat: float, lng: float, verified: bool = True) -> LocatableRecord:
    return LocatableRecord(id=record_id, point=GeoPoint(lat, lng), verified=verified)


def _grid_records() -> list[LocatableRecord]:
    records = []
    for i in range(-6, 7):
        for j in range(-6, 7):
            records.append(_record(f"r{i}_{j}", ORIGIN.latitude + i * 0.02, ORIGIN.longitude + j * 0.025))
    return records


def test_radius_filter_matches_brute_force():
    records = _grid_records()

    matches = rank_by_proximity(ORIGIN, records, 10)

    expected = {
        record.id
        for record in records
        if haversine_km(*ORIGIN, *record.point) <= 10
    }
    assert {match.record.id for match in matches} == expected
    assert all(match.distance_km <= 10 for match in matches)
    assert 0 < len(matches) < len(records)


def test_results_are_sorted_closest_first():
    records = _grid_records()

    distances = [match.distance_km for match in rank_by_proximity(ORIGIN, records, 25)]

    assert distances == sorted(distances)
    assert distances[0] == 0.0


def test_equal_distances_keep_input_order():
    records = [
        _record("second", -34.6137, -58.3816),
        _record("first-a", -34.5937, -58.3816),
        _record("first-b", -34.5937, -58.3816),
    ]

    matches = rank_by_proximity(ORIGIN, records, 5)

    ids = [match.record.id for match in matches]
    assert ids.index("first-a") < ids.index("first-b")


def test_only_verified_located_records_are_eligible():
    records = [
        _record("verified", -34.6040, -58.3820),
        _record("unverified", -34.6040, -58.3820, verified=False),
        LocatableRecord(id="no-point", point=None, verified=True),
    ]

    matches = rank_by_proximity(ORIGIN, records, 10)

    assert [match.record.id for match in matches] == ["verified"]


def test_display_distance_is_rounded_but_exact_value_kept():
    matches = rank_by_proximity(ORIGIN, [_record("near", -34.5997, -58.3819)], 10)

    match = matches[0]
    assert match.display_distance_km == round(match.distance_km, 2)
    assert match.distance_km != match.display_distance_km


def test_empty_result_is_not_an_error():
    assert rank_by_proximity(ORIGIN, [_record("cordoba", -31.4201, -64.1888)], 10) == []
    assert rank_by_proximity(ORIGIN, [], 10) == []


def test_invalid_origin_is_rejected():
    with pytest.raises(InvalidCoordinatesError):
        rank_by_proximity(GeoPoint(float("nan"), 0.0), [], 10)


@pytest.mark.parametrize("radius", [-1, float("nan"), float("inf"), "far"])
def test_invalid_radius_is_rejected(radius):
    with pytest.raises(InvalidRadiusError):
        validate_radius(radius)


def test_radius_above_limit_is_rejected():
    assert validate_radius(500, 500) == 500.0
    with pytest.raises(InvalidRadiusError):
        validate_radius(500.1, 500)
