"""
Inventory services -- imperative shell over the pure diagnostic checks.

Usage:
    from inventory_services import InventoryDiagnosticRunner

    runner = InventoryDiagnosticRunner(gateway, clock=SystemClock())
    report = runner.run_full_diagnostic(timeout=30)
"""

from inventory_services.diagnostic_runner import InventoryDiagnosticRunner
from inventory_services.vehicle_inventory_service import (
    VehicleInventoryReport,
    VehicleInventoryService,
    VehicleStockLine,
    VehicleSummary,
    VehicleUnitLine,
)

__all__ = [
    "InventoryDiagnosticRunner",
    "VehicleInventoryReport",
    "VehicleInventoryService",
    "VehicleStockLine",
    "VehicleSummary",
    "VehicleUnitLine",
]
