"""Address heuristics."""

from .barrios import (
    BARRIOS_MAPPING,
    CAPITAL_OTHER,
    GREATER_BUENOS_AIRES_OTHER,
    OTHER,
    classify_address,
    filter_records_by_neighborhood,
    group_records_by_neighborhood,
    neighborhood_filter_options,
    neighborhood_labels,
)

__all__ = [
    "BARRIOS_MAPPING",
    "CAPITAL_OTHER",
    "GREATER_BUENOS_AIRES_OTHER",
    "OTHER",
    "classify_address",
    "filter_records_by_neighborhood",
    "group_records_by_neighborhood",
    "neighborhood_filter_options",
    "neighborhood_labels",
]
