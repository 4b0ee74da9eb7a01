"""Route group exports."""

from . import addresses, doctors, health, zones

__all__ = ["zones", "doctors", "addresses", "health"]
