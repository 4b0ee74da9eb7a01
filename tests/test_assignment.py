import time

import pytest

from medzones.errors import BatchCommitError
from medzones.models.domain import AssignedZone, GeoPoint, LocatableRecord, Zone
from medzones.persistence.memory import InMemoryRecordStore
from medzones.services.assignment import assign_zones
from medzones.services.assignment import service as assignment_service

OBELISCO = GeoPoint(-34.6037, -58.3816)

CENTRO = Zone(id="z-centro", name="Centro", type="circle", center=OBELISCO, radius_km=3.0)
NORTE = Zone(
    id="z-norte",
    name="Norte",
    type="polygon",
    coordinates=(
        GeoPoint(-34.58, -58.50),
        GeoPoint(-34.58, -58.40),
        GeoPoint(-34.50, -58.40),
        GeoPoint(-34.50, -58.50),
    ),
)
ZONES = (CENTRO, NORTE)


def _record(record_id: str | None, lat: float | None, lng: float | None) -> LocatableRecord:
    point = GeoPoint(lat, lng) if lat is not None and lng is not None else None
    return LocatableRecord(id=record_id, point=point, verified=True)


def _valid_records(count: int) -> list[LocatableRecord]:
    records = []
    for i in range(count):
        match i % 3:
            case 0:
                records.append(_record(f"d{i}", -34.6037 + i * 0.0001, -58.3816))
            case 1:
                records.append(_record(f"d{i}", -34.55, -58.45 + i * 0.0001))
            case _:
                records.append(_record(f"d{i}", -31.4201, -64.1888))
    return records


class RecordingSink:
    def __init__(self):
        self.calls = []

    def __call__(self, updates):
        self.calls.append(list(updates))


def test_assign_zones_counts_and_stages_updates():
    records = [
        _record("in-centro", -34.6040, -58.3820),
        _record("in-norte", -34.55, -58.45),
        _record("nowhere", -31.4201, -64.1888),
    ]
    sink = RecordingSink()

    result = assign_zones(records, ZONES, sink)

    assert result.assigned_count == 2
    assert result.unassigned_count == 1
    assert result.errors == []
    assert len(sink.calls) == 1
    assert [(u.record_id, u.assigned_zone) for u in sink.calls[0]] == [
        ("in-centro", AssignedZone(id="z-centro", name="Centro")),
        ("in-norte", AssignedZone(id="z-norte", name="Norte")),
        ("nowhere", None),
    ]


def test_records_without_id_or_point_are_unassigned_without_update():
    records = [
        _record(None, -34.6040, -58.3820),
        _record("no-point", None, None),
        _record("in-centro", -34.6040, -58.3820),
    ]
    sink = RecordingSink()

    result = assign_zones(records, ZONES, sink)

    assert result.assigned_count == 1
    assert result.unassigned_count == 2
    assert result.errors == []
    assert [u.record_id for u in sink.calls[0]] == ["in-centro"]


def test_malformed_record_is_isolated():
    records = _valid_records(99)
    records.insert(42, _record("broken", float("nan"), -58.3816))
    sink = RecordingSink()

    result = assign_zones(records, ZONES, sink)

    assert result.assigned_count + result.unassigned_count == 99
    assert len(result.errors) == 1
    assert result.errors[0].record_id == "broken"
    assert "finite" in result.errors[0].error_message
    assert len(sink.calls[0]) == 99
    assert "broken" not in {u.record_id for u in sink.calls[0]}


def test_unexpected_classification_error_is_isolated(monkeypatch):
    original = assignment_service.classify_point

    def flaky_classify(point, zones):
        if point.latitude == -34.55:
            raise RuntimeError("zone lookup exploded")
        return original(point, zones)

    monkeypatch.setattr(assignment_service, "classify_point", flaky_classify)
    records = [_record("ok", -34.6040, -58.3820), _record("bad", -34.55, -58.45)]

    result = assign_zones(records, ZONES, RecordingSink())

    assert result.assigned_count == 1
    assert [(e.record_id, e.error_message) for e in result.errors] == [("bad", "zone lookup exploded")]


def test_parallel_classification_matches_sequential():
    records = _valid_records(60)
    sequential, parallel = RecordingSink(), RecordingSink()

    first = assign_zones(records, ZONES, sequential)
    second = assign_zones(records, ZONES, parallel, max_workers=4)

    assert (first.assigned_count, first.unassigned_count) == (second.assigned_count, second.unassigned_count)
    assert sequential.calls == parallel.calls


def test_rerun_is_idempotent():
    store = InMemoryRecordStore(_valid_records(30))

    first = assign_zones(store.list_locatable_records(), ZONES, store.commit_assignments)
    snapshot = {r.id: r.assigned_zone for r in store.list_locatable_records()}
    second = assign_zones(store.list_locatable_records(), ZONES, store.commit_assignments)

    assert (first.assigned_count, first.unassigned_count) == (second.assigned_count, second.unassigned_count)
    assert first.errors == second.errors == []
    assert {r.id: r.assigned_zone for r in store.list_locatable_records()} == snapshot
    assert store.commits[0] == store.commits[1]


def test_commit_failure_raises_batch_error_and_keeps_store_untouched():
    store = InMemoryRecordStore([_record("d1", -34.6040, -58.3820)])

    def failing_commit(updates):
        raise ConnectionError("database unavailable")

    with pytest.raises(BatchCommitError) as excinfo:
        assign_zones(store.list_locatable_records(), ZONES, failing_commit)

    assert isinstance(excinfo.value.__cause__, ConnectionError)
    assert store.get("d1").assigned_zone is None
    assert store.commits == []


def test_commit_past_deadline_raises_batch_error_and_applies_nothing():
    store = InMemoryRecordStore([_record("d1", -34.6040, -58.3820)])

    def slow_commit(updates, *, deadline):
        time.sleep(0.2)
        store.commit_assignments(updates, deadline=deadline)

    with pytest.raises(BatchCommitError, match="timed out") as excinfo:
        assign_zones(store.list_locatable_records(), ZONES, slow_commit, commit_timeout=0.05)

    assert isinstance(excinfo.value.__cause__, TimeoutError)
    assert store.get("d1").assigned_zone is None
    assert store.commits == []


def test_commit_within_deadline_applies_updates():
    store = InMemoryRecordStore([_record("d1", -34.6040, -58.3820)])

    result = assign_zones(store.list_locatable_records(), ZONES, store.commit_assignments, commit_timeout=5)

    assert result.assigned_count == 1
    assert store.get("d1").assigned_zone == AssignedZone(id="z-centro", name="Centro")


def test_empty_batch_skips_commit():
    sink = RecordingSink()

    result = assign_zones([_record("no-point", None, None)], ZONES, sink)

    assert result.unassigned_count == 1
    assert sink.calls == []
