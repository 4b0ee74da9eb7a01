"""In-memory collaborators used by local runs and tests."""

from __future__ import annotations

import dataclasses
import threading
import time
from typing import Iterable, Optional, Sequence

from ..models.domain import LocatableRecord, Zone, ZoneAssignmentUpdate
from ..services.zones.catalog import ZoneCatalog


class InMemoryZoneProvider:
    """Serves zones from a ZoneCatalog."""

    def __init__(self, catalog: ZoneCatalog | None = None) -> None:
        self.catalog = catalog if catalog is not None else ZoneCatalog()

    def list_active_zones(self) -> Sequence[Zone]:
        return self.catalog.list_active_zones()

    def list_zones(self) -> Sequence[Zone]:
        return self.catalog.list_zones()


class InMemoryRecordStore:
    """Doctor records kept in a dict; doubles as provider and assignment sink.

    ``commit_assignments`` validates the whole batch and checks the deadline
    before touching any record, so a rejected batch leaves the store unchanged.
    """

    def __init__(self, records: Iterable[LocatableRecord] = ()) -> None:
        self._records: dict[str, LocatableRecord] = {}
        self._unkeyed: list[LocatableRecord] = []
        self._lock = threading.Lock()
        self.commits: list[tuple[ZoneAssignmentUpdate, ...]] = []
        for record in records:
            if record.id:
                self._records[record.id] = record
            else:
                self._unkeyed.append(record)

    def list_locatable_records(self, *, verified_only: bool = False) -> Sequence[LocatableRecord]:
        with self._lock:
            records = [*self._records.values(), *self._unkeyed]
        if verified_only:
            records = [record for record in records if record.verified]
        return records

    def get(self, record_id: str) -> LocatableRecord:
        return self._records[record_id]

    def commit_assignments(
        self,
        updates: Sequence[ZoneAssignmentUpdate],
        *,
        deadline: Optional[float] = None,
    ) -> None:
        with self._lock:
            missing = [update.record_id for update in updates if update.record_id not in self._records]
            if missing:
                raise KeyError(f"Unknown record ids in assignment batch: {missing[:5]}")
            if deadline is not None and time.monotonic() > deadline:
                raise TimeoutError("Commit deadline passed before any assignment was applied")
            for update in updates:
                current = self._records[update.record_id]
                self._records[update.record_id] = dataclasses.replace(
                    current, assigned_zone=update.assigned_zone
                )
            self.commits.append(tuple(updates))
