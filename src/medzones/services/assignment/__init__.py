"""Zone assignment batch service."""

from .service import assign_zones

__all__ = ["assign_zones"]
