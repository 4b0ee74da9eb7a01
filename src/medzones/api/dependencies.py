"""FastAPI dependencies."""

from __future__ import annotations

from functools import lru_cache

from ..services.locator import ZoneLocator, build_locator


@lru_cache()
def _configured_locator() -> ZoneLocator:
    return build_locator()


def get_locator() -> ZoneLocator:
    """Locator wired from settings; override in tests via ``app.dependency_overrides``."""
    return _configured_locator()
