"""Public operations for zone classification, proximity search and batch assignment."""

from __future__ import annotations

import logging
from typing import Any, Optional

from ..config import settings
from ..data.mappers import load_zones_file
from ..db.supabase import get_supabase_client
from ..models.domain import BatchResult, GeoPoint, LocatableRecord, NeighborhoodLabel, ProximityMatch, Zone
from ..persistence.base import AssignmentSink, RecordProvider, ZoneProvider
from ..persistence.database import SupabaseAssignmentSink, SupabaseRecordProvider, SupabaseZoneProvider
from ..persistence.memory import InMemoryRecordStore, InMemoryZoneProvider
from .addresses import classify_address, filter_records_by_neighborhood, neighborhood_filter_options
from .assignment import assign_zones
from .geospatial import validate_coordinates
from .proximity import rank_by_proximity, validate_radius
from .zones.catalog import ZoneCatalog
from .zones.classifier import classify_point, count_records_per_zone, group_records_by_zone


class ZoneLocator:
    """Facade over the zone, doctor and assignment collaborators.

    Each operation reads one zone snapshot from the provider at its start and
    uses it for its whole duration.
    """

    def __init__(
        self,
        zones: ZoneProvider,
        records: RecordProvider,
        sink: AssignmentSink,
        *,
        default_radius_km: float | None = None,
        max_radius_km: float | None = None,
        batch_max_workers: int | None = None,
        commit_timeout: Optional[float] = None,
    ) -> None:
        self.zones = zones
        self.records = records
        self.sink = sink
        self.default_radius_km = (
            settings.default_search_radius_km if default_radius_km is None else default_radius_km
        )
        self.max_radius_km = settings.max_search_radius_km if max_radius_km is None else max_radius_km
        self.batch_max_workers = settings.batch_max_workers if batch_max_workers is None else batch_max_workers
        self.commit_timeout = commit_timeout

    def classify_point(self, lat: float, lng: float) -> Optional[Zone]:
        validate_coordinates(lat, lng)
        return classify_point(GeoPoint(float(lat), float(lng)), self.zones.list_active_zones())

    def classify_address(self, text: Any) -> NeighborhoodLabel:
        return classify_address(text)

    def find_nearby(self, lat: float, lng: float, radius_km: float | None = None) -> list[ProximityMatch]:
        validate_coordinates(lat, lng)
        radius = validate_radius(
            self.default_radius_km if radius_km is None else radius_km,
            self.max_radius_km,
        )
        records = self.records.list_locatable_records(verified_only=True)
        return rank_by_proximity(GeoPoint(float(lat), float(lng)), records, radius)

    def run_zone_assignment_batch(self) -> BatchResult:
        zones = tuple(self.zones.list_active_zones())
        records = self.records.list_locatable_records(verified_only=False)
        return assign_zones(
            records,
            zones,
            self.sink.commit_assignments,
            max_workers=self.batch_max_workers,
            commit_timeout=self.commit_timeout,
        )

    def zone_doctor_counts(self) -> list[tuple[Zone, int]]:
        zones = tuple(self.zones.list_zones())
        return count_records_per_zone(self.records.list_locatable_records(verified_only=True), zones)

    def doctors_by_zone(self) -> dict[str, list[LocatableRecord]]:
        zones = tuple(self.zones.list_active_zones())
        return group_records_by_zone(self.records.list_locatable_records(verified_only=False), zones)

    def neighborhood_options(self, *, verified_only: bool = True) -> list[dict]:
        return neighborhood_filter_options(self.records.list_locatable_records(verified_only=verified_only))

    def doctors_in_neighborhood(self, barrio: str | None, *, verified_only: bool = True) -> list[LocatableRecord]:
        records = self.records.list_locatable_records(verified_only=verified_only)
        return filter_records_by_neighborhood(records, barrio)


def build_locator() -> ZoneLocator:
    """Wire a ZoneLocator from settings: Supabase when configured, memory otherwise."""

    client = get_supabase_client()
    if client is not None:
        return ZoneLocator(
            SupabaseZoneProvider(client),
            SupabaseRecordProvider(client),
            SupabaseAssignmentSink(client),
            commit_timeout=settings.commit_timeout_seconds,
        )

    catalog = ZoneCatalog()
    if settings.zones_file is not None:
        for zone in load_zones_file(settings.zones_file):
            catalog.add(zone)
    logging.info(f"Supabase not configured - serving {len(catalog)} zones from memory")
    store = InMemoryRecordStore()
    return ZoneLocator(
        InMemoryZoneProvider(catalog),
        store,
        store,
        commit_timeout=settings.commit_timeout_seconds,
    )
