"""
Inventory query selector -- the SQL implementation of InventoryGateway.

Key design decisions:
- Returns frozen domain dataclasses, not ORM models
- One short-lived session per read; concurrent checks never share a Session
- No ordering or isolation guarantees beyond READ COMMITTED: the checks
  accept a snapshot that may be a few milliseconds stale
"""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy import func, select
from sqlalchemy.orm import Session, sessionmaker

from inventory_kernel.domain.entities import (
    InventoryRecord,
    LocationType,
    Part,
    StockLocation,
    TrackedUnit,
)
from inventory_kernel.models.part import PartModel
from inventory_kernel.models.part_inventory import PartInventoryModel
from inventory_kernel.models.serialized_part import SerializedPartModel
from inventory_kernel.models.stock_location import StockLocationModel
from inventory_kernel.selectors.base import BaseSelector


def _to_part(row: PartModel) -> Part:
    return Part(
        id=row.id,
        name=row.name,
        part_number=row.part_number,
        quantity_on_hand=row.quantity_on_hand,
        manufacturer=row.manufacturer,
    )


def _to_record(row: PartInventoryModel) -> InventoryRecord:
    return InventoryRecord(
        id=row.id,
        part_id=row.part_id,
        location_id=row.stock_location_id,
        quantity=row.quantity,
    )


def _to_location(row: StockLocationModel) -> StockLocation:
    return StockLocation(
        id=row.id,
        name=row.name,
        location_type=row.location_type,
        is_mobile=row.is_mobile,
        is_active=row.is_active,
        location_code=row.location_code,
        technician_id=row.technician_id,
    )


def _to_unit(row: SerializedPartModel) -> TrackedUnit:
    return TrackedUnit(
        id=row.id,
        part_id=row.part_id,
        serial_number=row.serial_number,
        status=row.status,
        current_location_id=row.current_location_id,
        installed_on_equipment_id=row.installed_on_equipment_id,
    )


class InventorySelector(BaseSelector):
    """
    Selector for the reconciliation engine's reads.

    Satisfies ``inventory_kernel.domain.gateway.InventoryGateway``.
    """

    def __init__(
        self,
        session_factory: sessionmaker[Session],
        vehicle_location_type: str = LocationType.TRUCK.value,
    ):
        super().__init__(session_factory)
        self.vehicle_location_type = vehicle_location_type

    # =========================================================================
    # Parts
    # =========================================================================

    def list_parts(self) -> tuple[Part, ...]:
        with self._read("list_parts") as session:
            rows = session.execute(select(PartModel)).scalars().all()
            return tuple(_to_part(r) for r in rows)

    # =========================================================================
    # Ledger
    # =========================================================================

    def sum_inventory_quantity(self, part_id: str) -> int:
        with self._read("sum_inventory_quantity") as session:
            total = session.execute(
                select(func.coalesce(func.sum(PartInventoryModel.quantity), 0))
                .where(PartInventoryModel.part_id == part_id)
            ).scalar_one()
            return int(total)

    def list_inventory_records(
        self,
        part_id: str | None = None,
        location_id: str | None = None,
    ) -> tuple[InventoryRecord, ...]:
        stmt = select(PartInventoryModel)
        if part_id is not None:
            stmt = stmt.where(PartInventoryModel.part_id == part_id)
        if location_id is not None:
            stmt = stmt.where(PartInventoryModel.stock_location_id == location_id)

        with self._read("list_inventory_records") as session:
            rows = session.execute(stmt).scalars().all()
            return tuple(_to_record(r) for r in rows)

    def list_all_inventory_records(self) -> tuple[InventoryRecord, ...]:
        return self.list_inventory_records()

    # =========================================================================
    # Locations
    # =========================================================================

    def list_locations(self) -> tuple[StockLocation, ...]:
        with self._read("list_locations") as session:
            rows = session.execute(select(StockLocationModel)).scalars().all()
            return tuple(_to_location(r) for r in rows)

    def get_location(self, location_id: str) -> StockLocation | None:
        with self._read("get_location") as session:
            row = session.get(StockLocationModel, location_id)
            return _to_location(row) if row is not None else None

    def list_mobile_active_locations(self) -> tuple[StockLocation, ...]:
        stmt = select(StockLocationModel).where(
            StockLocationModel.location_type == self.vehicle_location_type,
            StockLocationModel.is_mobile.is_(True),
            StockLocationModel.is_active.is_(True),
        )
        with self._read("list_mobile_active_locations") as session:
            rows = session.execute(stmt).scalars().all()
            return tuple(_to_location(r) for r in rows)

    def find_location(
        self,
        name: str,
        location_type: str | None = None,
    ) -> StockLocation | None:
        stmt = select(StockLocationModel).where(StockLocationModel.name == name)
        if location_type is not None:
            stmt = stmt.where(StockLocationModel.location_type == location_type)

        with self._read("find_location") as session:
            row = session.execute(stmt.limit(1)).scalars().first()
            return _to_location(row) if row is not None else None

    # =========================================================================
    # Tracked units
    # =========================================================================

    def list_tracked_units(
        self,
        location_id: str | None = None,
        statuses: Iterable[str] | None = None,
    ) -> tuple[TrackedUnit, ...]:
        stmt = select(SerializedPartModel)
        if location_id is not None:
            stmt = stmt.where(SerializedPartModel.current_location_id == location_id)
        if statuses is not None:
            stmt = stmt.where(SerializedPartModel.status.in_(list(statuses)))

        with self._read("list_tracked_units") as session:
            rows = session.execute(stmt).scalars().all()
            return tuple(_to_unit(r) for r in rows)

    def list_all_tracked_units(self) -> tuple[TrackedUnit, ...]:
        return self.list_tracked_units()
