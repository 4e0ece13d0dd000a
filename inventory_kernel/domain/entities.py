"""
Inventory entity snapshots -- read-only inputs to the reconciliation engine.

Pure frozen dataclasses populated by a gateway (SQL selector or in-memory
snapshot). The engine receives them as immutable inputs and never writes
them back; the surrounding application owns their lifecycle.

Invariants the engine verifies against these types:
    - Part.quantity_on_hand equals the sum of the part's InventoryRecord
      quantities across all locations.
    - At most one InventoryRecord per (part_id, location_id).
    - TrackedUnit status agrees with its location / equipment references.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class UnitStatus(str, Enum):
    """Lifecycle status of an individually tracked (serialized) unit."""

    IN_STOCK = "in_stock"
    IN_TRANSIT = "in_transit"
    INSTALLED = "installed"
    RETURNED = "returned"
    DEFECTIVE = "defective"
    WARRANTY_CLAIM = "warranty_claim"


class LocationType(str, Enum):
    """Storage location categories."""

    WAREHOUSE = "warehouse"
    TRUCK = "truck"           # Field service vehicle
    CUSTOMER_SITE = "customer_site"
    PROJECT_SITE = "project_site"
    VENDOR = "vendor"


@dataclass(frozen=True)
class Part:
    """A stock-keeping unit definition.

    ``quantity_on_hand`` is the denormalized cached total. It may be None
    when the aggregate was never populated; the sync check treats that as
    drift rather than as zero.
    """

    id: str
    name: str
    part_number: str | None = None
    quantity_on_hand: int | None = None
    manufacturer: str | None = None


@dataclass(frozen=True)
class InventoryRecord:
    """One ledger row: the bulk quantity of a part held at a location."""

    id: str
    part_id: str
    location_id: str
    quantity: int = 0

    @property
    def key(self) -> tuple[str, str]:
        """The (part, location) pair that must be unique across the ledger."""
        return (self.part_id, self.location_id)


@dataclass(frozen=True)
class StockLocation:
    """A physical or mobile storage location."""

    id: str
    name: str
    location_type: str
    is_mobile: bool = False
    is_active: bool = True
    location_code: str | None = None
    technician_id: str | None = None


@dataclass(frozen=True)
class TrackedUnit:
    """An individually serial-numbered physical unit of a part.

    ``status`` is kept as the raw stored string so values outside
    ``UnitStatus`` reach the engine unchanged and can be reported.
    """

    id: str
    part_id: str
    serial_number: str
    status: str
    current_location_id: str | None = None
    installed_on_equipment_id: str | None = None

    @property
    def has_location(self) -> bool:
        return bool(self.current_location_id)

    @property
    def has_equipment(self) -> bool:
        return bool(self.installed_on_equipment_id)
