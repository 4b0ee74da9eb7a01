"""Batch zone assignment with per-record fault isolation and a single atomic commit."""

from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from ...errors import BatchCommitError
from ...models.domain import (
    AssignedZone,
    BatchResult,
    LocatableRecord,
    RecordError,
    Zone,
    ZoneAssignmentUpdate,
)
from ..geospatial import validate_coordinates
from ..zones.classifier import classify_point

CommitFn = Callable[..., None]


@dataclass(slots=True)
class _Outcome:
    update: Optional[ZoneAssignmentUpdate] = None
    error: Optional[RecordError] = None


def _classify_record(record: LocatableRecord, zones: Sequence[Zone]) -> _Outcome:
    if not record.id or record.point is None:
        return _Outcome()
    try:
        validate_coordinates(record.point.latitude, record.point.longitude)
        zone = classify_point(record.point, zones)
    except Exception as exc:
        logging.warning(f"Zone classification failed for record {record.id}: {exc}")
        return _Outcome(error=RecordError(record_id=record.id, error_message=str(exc)))
    assigned = AssignedZone.from_zone(zone) if zone else None
    return _Outcome(update=ZoneAssignmentUpdate(record_id=record.id, assigned_zone=assigned))


def _classify_all(
    records: Sequence[LocatableRecord],
    zones: Sequence[Zone],
    max_workers: int,
) -> list[_Outcome]:
    if max_workers <= 1 or len(records) <= 1:
        return [_classify_record(record, zones) for record in records]
    with ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="zone-assign") as executor:
        return list(executor.map(lambda record: _classify_record(record, zones), records))


def _commit(commit: CommitFn, updates: list[ZoneAssignmentUpdate], timeout: Optional[float]) -> None:
    try:
        if timeout is None:
            commit(updates)
        else:
            commit(updates, deadline=time.monotonic() + timeout)
    except TimeoutError as exc:
        raise BatchCommitError(
            f"Commit of {len(updates)} zone assignments timed out after {timeout}s: {exc}"
        ) from exc
    except Exception as exc:
        raise BatchCommitError(f"Failed to commit {len(updates)} zone assignments: {exc}") from exc


def assign_zones(
    records: Sequence[LocatableRecord],
    zones: Sequence[Zone],
    commit: CommitFn,
    *,
    max_workers: int = 1,
    commit_timeout: Optional[float] = None,
) -> BatchResult:
    """Classify every record against ``zones`` and commit all assignments at once.

    Records without an id or coordinates are counted as unassigned and left
    untouched. A record whose classification raises is reported in
    ``errors`` and excluded from the commit; the rest of the batch carries on.
    ``commit`` receives every staged update in a single call and must apply
    them atomically. With ``commit_timeout`` set it is also called with a
    ``deadline`` keyword (a ``time.monotonic()`` value) and must raise
    ``TimeoutError`` instead of applying anything once the deadline has
    passed. A failure or timeout raises ``BatchCommitError`` for the batch as
    a whole.
    """

    zones = tuple(zones)
    logging.info(f"Starting zone assignment for {len(records)} records against {len(zones)} active zones")

    result = BatchResult()
    for outcome in _classify_all(records, zones, max_workers):
        if outcome.error is not None:
            result.errors.append(outcome.error)
            continue
        if outcome.update is not None:
            result.updates.append(outcome.update)
            if outcome.update.assigned_zone is not None:
                result.assigned_count += 1
                continue
        result.unassigned_count += 1

    if result.updates:
        try:
            _commit(commit, result.updates, commit_timeout)
        except BatchCommitError as exc:
            logging.error(f"Zone assignment batch not committed: {exc}")
            raise
    else:
        logging.info("No zone assignments staged; skipping commit")

    logging.info(
        f"Zone assignment finished: assigned={result.assigned_count}, "
        f"unassigned={result.unassigned_count}, errors={len(result.errors)}"
    )
    return result
