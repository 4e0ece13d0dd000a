"""Selectors for the inventory kernel (read side / gateway implementations)."""

from inventory_kernel.selectors.inventory_selector import InventorySelector
from inventory_kernel.selectors.snapshot_selector import SnapshotSelector

__all__ = [
    "InventorySelector",
    "SnapshotSelector",
]
