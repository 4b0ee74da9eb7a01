"""Supabase-backed zone catalog, doctor records and assignment commits."""

from __future__ import annotations

import logging
import time
from typing import Any, Optional, Sequence

from supabase import Client

from ..config import settings
from ..data.mappers import record_from_mapping, zone_from_mapping
from ..models.domain import LocatableRecord, Zone, ZoneAssignmentUpdate
from ..services.zones.catalog import validate_zone

QUERY_CANCELED = "57014"


def _assignment_payload(update: ZoneAssignmentUpdate) -> dict[str, Any]:
    zone = update.assigned_zone
    return {
        "doctor_id": update.record_id,
        "zone_id": zone.id if zone else None,
        "zone_name": zone.name if zone else None,
    }


class SupabaseZoneProvider:
    """Reads zones from ``settings.zones_table`` ordered by creation time."""

    def __init__(self, client: Client, table: str | None = None) -> None:
        self.client = client
        self.table = table or settings.zones_table

    def _fetch(self, *, active_only: bool) -> list[Zone]:
        try:
            query = self.client.table(self.table).select("*")
            if active_only:
                query = query.eq("is_active", True)
            response = query.order("created_at").order("id").execute()
        except Exception as exc:
            logging.error(f"Failed to load zones from '{self.table}': {exc}")
            raise ConnectionError(f"Cannot load zones from database: {exc}") from exc

        zones: list[Zone] = []
        for row in response.data or []:
            try:
                zones.append(validate_zone(zone_from_mapping(row)))
            except ValueError as exc:
                logging.warning(f"Skipping unusable zone {row.get('id')}: {exc}")
        logging.info(f"Retrieved {len(zones)} zones from database (active_only={active_only})")
        return zones

    def list_active_zones(self) -> Sequence[Zone]:
        return tuple(self._fetch(active_only=True))

    def list_zones(self) -> Sequence[Zone]:
        return tuple(self._fetch(active_only=False))


class SupabaseRecordProvider:
    """Reads doctor documents from ``settings.doctors_table``."""

    def __init__(self, client: Client, table: str | None = None) -> None:
        self.client = client
        self.table = table or settings.doctors_table

    def list_locatable_records(self, *, verified_only: bool = False) -> Sequence[LocatableRecord]:
        try:
            query = self.client.table(self.table).select("*")
            if verified_only:
                query = query.eq("verified", True)
            response = query.order("created_at", desc=True).execute()
        except Exception as exc:
            logging.error(f"Failed to load doctors from '{self.table}': {exc}")
            raise ConnectionError(f"Cannot load doctors from database: {exc}") from exc

        records = [record_from_mapping(row) for row in response.data or []]
        logging.info(f"Retrieved {len(records)} doctors from database (verified_only={verified_only})")
        return records


class SupabaseAssignmentSink:
    """Commits a batch through a single Postgres function call.

    The function named by ``settings.assign_zones_function`` (see
    ``sql/assign_doctor_zones.sql``) receives
    ``{"assignments": [{"doctor_id", "zone_id", "zone_name"}, ...]}`` and
    updates every doctor inside one transaction, so a failure leaves no
    partial assignments behind. With a deadline the remaining budget is sent
    as ``timeout_ms``; the function raises ``query_canceled`` and rolls back
    when it cannot finish within it.
    """

    def __init__(self, client: Client, function_name: str | None = None) -> None:
        self.client = client
        self.function_name = function_name or settings.assign_zones_function

    def commit_assignments(
        self,
        updates: Sequence[ZoneAssignmentUpdate],
        *,
        deadline: Optional[float] = None,
    ) -> None:
        payload: dict[str, Any] = {"assignments": [_assignment_payload(update) for update in updates]}
        if deadline is not None:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                raise TimeoutError("Commit deadline passed before the assignment call was sent")
            payload["timeout_ms"] = max(1, int(remaining * 1000))

        try:
            self.client.rpc(self.function_name, payload).execute()
        except Exception as exc:
            if getattr(exc, "code", None) == QUERY_CANCELED:
                raise TimeoutError(f"{self.function_name}() exceeded its time budget and rolled back") from exc
            raise
        logging.info(f"Committed {len(updates)} zone assignments via {self.function_name}()")
