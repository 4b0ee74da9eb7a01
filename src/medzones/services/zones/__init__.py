"""Zone catalog and classification helpers."""

from .catalog import ZoneCatalog, new_zone_id, validate_zone
from .classifier import (
    UNASSIGNED_BUCKET,
    classify_point,
    count_records_per_zone,
    group_records_by_zone,
    zone_contains,
)

__all__ = [
    "ZoneCatalog",
    "new_zone_id",
    "validate_zone",
    "UNASSIGNED_BUCKET",
    "classify_point",
    "count_records_per_zone",
    "group_records_by_zone",
    "zone_contains",
]
