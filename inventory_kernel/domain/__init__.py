"""
Pure domain layer.

Entity snapshots, the gateway contract and the clock abstraction. No ORM,
no database, no I/O.
"""

from inventory_kernel.domain.clock import Clock, DeterministicClock, SystemClock
from inventory_kernel.domain.entities import (
    InventoryRecord,
    LocationType,
    Part,
    StockLocation,
    TrackedUnit,
    UnitStatus,
)
from inventory_kernel.domain.gateway import InventoryGateway

__all__ = [
    "Clock",
    "DeterministicClock",
    "SystemClock",
    "InventoryGateway",
    "InventoryRecord",
    "LocationType",
    "Part",
    "StockLocation",
    "TrackedUnit",
    "UnitStatus",
]
