"""ORM models for the inventory store (read by the selectors)."""

from inventory_kernel.models.part import PartModel
from inventory_kernel.models.part_inventory import PartInventoryModel
from inventory_kernel.models.serialized_part import SerializedPartModel
from inventory_kernel.models.stock_location import StockLocationModel

__all__ = [
    "PartModel",
    "PartInventoryModel",
    "SerializedPartModel",
    "StockLocationModel",
]
