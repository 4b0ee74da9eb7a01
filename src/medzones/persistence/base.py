"""Contracts for the collaborators supplying zones and doctors and storing assignments."""

from __future__ import annotations

from typing import Optional, Protocol, Sequence, runtime_checkable

from ..models.domain import LocatableRecord, Zone, ZoneAssignmentUpdate


@runtime_checkable
class ZoneProvider(Protocol):
    def list_active_zones(self) -> Sequence[Zone]:
        """Active zones in catalog order."""
        ...

    def list_zones(self) -> Sequence[Zone]:
        """All zones, active or not, in catalog order."""
        ...


@runtime_checkable
class RecordProvider(Protocol):
    def list_locatable_records(self, *, verified_only: bool = False) -> Sequence[LocatableRecord]:
        ...


@runtime_checkable
class AssignmentSink(Protocol):
    def commit_assignments(
        self,
        updates: Sequence[ZoneAssignmentUpdate],
        *,
        deadline: Optional[float] = None,
    ) -> None:
        """Apply every update or none of them; raise on failure.

        ``deadline`` is a ``time.monotonic()`` value. Once it has passed the
        sink raises ``TimeoutError`` and applies nothing.
        """
        ...
