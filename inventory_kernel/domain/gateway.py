"""
InventoryGateway -- the read-only data-access contract used by the checks.

Any backing store that can answer simple equality filters over parts,
ledger rows, stock locations and tracked units satisfies the contract.
No ordering or transactional guarantee is required: the checks tolerate a
snapshot that is slightly stale.

Failure modes:
    Implementations raise ``GatewayError`` subclasses (never driver
    exceptions) so the diagnostic runner can fold them into a FAIL result
    for the check that issued the read.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol, runtime_checkable

from inventory_kernel.domain.entities import (
    InventoryRecord,
    Part,
    StockLocation,
    TrackedUnit,
)


@runtime_checkable
class InventoryGateway(Protocol):
    """Read-only query surface over the inventory store."""

    def list_parts(self) -> tuple[Part, ...]:
        """All part definitions."""
        ...

    def sum_inventory_quantity(self, part_id: str) -> int:
        """Sum of ledger quantities for one part across all locations."""
        ...

    def list_inventory_records(
        self,
        part_id: str | None = None,
        location_id: str | None = None,
    ) -> tuple[InventoryRecord, ...]:
        """Ledger rows, optionally filtered by part and/or location."""
        ...

    def list_all_inventory_records(self) -> tuple[InventoryRecord, ...]:
        """Every ledger row, duplicates included."""
        ...

    def list_locations(self) -> tuple[StockLocation, ...]:
        """All stock locations."""
        ...

    def get_location(self, location_id: str) -> StockLocation | None:
        """One stock location by id, or None."""
        ...

    def list_mobile_active_locations(self) -> tuple[StockLocation, ...]:
        """Active, mobile locations of the configured vehicle type."""
        ...

    def find_location(
        self,
        name: str,
        location_type: str | None = None,
    ) -> StockLocation | None:
        """First location with the given name (and type, if given)."""
        ...

    def list_tracked_units(
        self,
        location_id: str | None = None,
        statuses: Iterable[str] | None = None,
    ) -> tuple[TrackedUnit, ...]:
        """Tracked units, optionally filtered by location and status set."""
        ...

    def list_all_tracked_units(self) -> tuple[TrackedUnit, ...]:
        """Every tracked unit regardless of status."""
        ...
