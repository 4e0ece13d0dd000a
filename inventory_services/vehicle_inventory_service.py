"""
VehicleInventoryService -- on-demand inventory report for one named vehicle.

Architecture: inventory_services -- imperative shell over InventoryGateway.

Contract:
    - ``get_vehicle_inventory_report(name)`` finds the vehicle-type location
      by name and returns its bulk stock lines (with part details) and the
      tracked units available on it.
    - Raises VehicleNotFoundError when no vehicle has that name.
    - Gateway errors propagate unchanged; this is not a diagnostic check.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from inventory_config.schema import DiagnosticsConfig
from inventory_kernel.domain.gateway import InventoryGateway
from inventory_kernel.exceptions import VehicleNotFoundError
from inventory_kernel.logging_config import get_logger

logger = get_logger("services.vehicle_inventory")


@dataclass(frozen=True)
class VehicleSummary:
    id: str
    name: str
    location_code: str | None = None
    assigned_to: str | None = None


@dataclass(frozen=True)
class VehicleStockLine:
    """A bulk ledger row on the vehicle, joined with its part."""

    inventory_id: str
    part_id: str
    quantity: int
    part_number: str | None = None
    part_name: str | None = None
    manufacturer: str | None = None


@dataclass(frozen=True)
class VehicleUnitLine:
    """A tracked unit available on the vehicle."""

    unit_id: str
    part_id: str
    serial_number: str
    status: str
    part_number: str | None = None
    part_name: str | None = None


@dataclass(frozen=True)
class VehicleInventoryReport:
    vehicle: VehicleSummary
    non_serialized: tuple[VehicleStockLine, ...] = ()
    serialized: tuple[VehicleUnitLine, ...] = ()

    @property
    def total_non_serialized_units(self) -> int:
        return sum(line.quantity for line in self.non_serialized)

    @property
    def total_serialized_units(self) -> int:
        return len(self.serialized)

    def to_dict(self) -> dict[str, Any]:
        return {
            "vehicle": {
                "id": self.vehicle.id,
                "name": self.vehicle.name,
                "location_code": self.vehicle.location_code,
                "assigned_to": self.vehicle.assigned_to,
            },
            "non_serialized": [
                {
                    "inventory_id": line.inventory_id,
                    "part_id": line.part_id,
                    "part_number": line.part_number,
                    "part_name": line.part_name,
                    "manufacturer": line.manufacturer,
                    "quantity": line.quantity,
                }
                for line in self.non_serialized
            ],
            "serialized": [
                {
                    "unit_id": line.unit_id,
                    "part_id": line.part_id,
                    "part_number": line.part_number,
                    "part_name": line.part_name,
                    "serial_number": line.serial_number,
                    "status": line.status,
                }
                for line in self.serialized
            ],
            "total_non_serialized_units": self.total_non_serialized_units,
            "total_serialized_units": self.total_serialized_units,
        }


class VehicleInventoryService:
    """Builds the per-vehicle inventory report.

    Non-goals:
        - Does NOT evaluate invariants (see VehicleInventoryCheck).
        - Does NOT modify any data (read-only).
    """

    def __init__(
        self,
        gateway: InventoryGateway,
        config: DiagnosticsConfig | None = None,
    ) -> None:
        self._gateway = gateway
        self._config = config or DiagnosticsConfig()

    def get_vehicle_inventory_report(self, vehicle_name: str) -> VehicleInventoryReport:
        """Return the bulk and tracked inventory carried by ``vehicle_name``.

        Raises:
            VehicleNotFoundError: If no vehicle location has that name.
        """
        vehicle = self._gateway.find_location(
            vehicle_name,
            location_type=self._config.vehicle_location_type,
        )
        if vehicle is None:
            logger.info("vehicle_not_found", extra={"vehicle_name": vehicle_name})
            raise VehicleNotFoundError(vehicle_name)

        parts = {p.id: p for p in self._gateway.list_parts()}

        stock_lines = []
        for rec in self._gateway.list_inventory_records(location_id=vehicle.id):
            part = parts.get(rec.part_id)
            stock_lines.append(VehicleStockLine(
                inventory_id=rec.id,
                part_id=rec.part_id,
                quantity=rec.quantity,
                part_number=part.part_number if part else None,
                part_name=part.name if part else None,
                manufacturer=part.manufacturer if part else None,
            ))

        unit_lines = []
        for unit in self._gateway.list_tracked_units(
            location_id=vehicle.id,
            statuses=self._config.vehicle_unit_statuses,
        ):
            part = parts.get(unit.part_id)
            unit_lines.append(VehicleUnitLine(
                unit_id=unit.id,
                part_id=unit.part_id,
                serial_number=unit.serial_number,
                status=unit.status,
                part_number=part.part_number if part else None,
                part_name=part.name if part else None,
            ))

        report = VehicleInventoryReport(
            vehicle=VehicleSummary(
                id=vehicle.id,
                name=vehicle.name,
                location_code=vehicle.location_code,
                assigned_to=vehicle.technician_id,
            ),
            non_serialized=tuple(stock_lines),
            serialized=tuple(unit_lines),
        )

        logger.info(
            "vehicle_inventory_report_built",
            extra={
                "vehicle_id": vehicle.id,
                "non_serialized_lines": len(stock_lines),
                "serialized_units": len(unit_lines),
            },
        )
        return report
