"""
In-memory implementation of InventoryGateway over a fixed entity snapshot.

Used for offline audits of an exported snapshot file (YAML or JSON, which
is valid YAML) and as the fixture gateway in tests.  Reads are served from
immutable tuples, so the selector is safe to share between threads.

Snapshot document layout::

    parts:
      - {id: P1, name: Filter, part_number: F-100, quantity_on_hand: 10}
    locations:
      - {id: TRUCK-1, name: Truck 1, location_type: truck, is_mobile: true}
    inventory:
      - {part_id: P1, location_id: TRUCK-1, quantity: 10}
    tracked_units:
      - {id: U1, part_id: P1, serial_number: SN-1, status: in_stock,
         current_location_id: TRUCK-1}

Failure modes:
    - Missing file -> FileNotFoundError propagates.
    - Malformed YAML -> yaml.YAMLError propagates.
    - Missing required keys -> KeyError propagates.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml

from inventory_kernel.domain.entities import (
    InventoryRecord,
    LocationType,
    Part,
    StockLocation,
    TrackedUnit,
)


def _optional_id(value: Any) -> str | None:
    # Exports may carry integer keys; entities compare ids as strings
    return str(value) if value is not None else None


class SnapshotSelector:
    """Gateway backed by in-memory entity tuples."""

    def __init__(
        self,
        parts: Sequence[Part] = (),
        inventory_records: Sequence[InventoryRecord] = (),
        locations: Sequence[StockLocation] = (),
        tracked_units: Sequence[TrackedUnit] = (),
        vehicle_location_type: str = LocationType.TRUCK.value,
    ):
        self._parts = tuple(parts)
        self._records = tuple(inventory_records)
        self._locations = tuple(locations)
        self._units = tuple(tracked_units)
        self._locations_by_id = {loc.id: loc for loc in self._locations}
        self.vehicle_location_type = vehicle_location_type

    # -----------------------------------------------------------------
    # Construction from documents
    # -----------------------------------------------------------------

    @classmethod
    def from_mapping(
        cls,
        data: Mapping[str, Any],
        vehicle_location_type: str = LocationType.TRUCK.value,
    ) -> SnapshotSelector:
        """Build a selector from a parsed snapshot document."""
        parts = [
            Part(
                id=str(p["id"]),
                name=p["name"],
                part_number=p.get("part_number"),
                quantity_on_hand=p.get("quantity_on_hand"),
                manufacturer=p.get("manufacturer"),
            )
            for p in data.get("parts") or ()
        ]
        locations = [
            StockLocation(
                id=str(loc["id"]),
                name=loc["name"],
                location_type=loc["location_type"],
                is_mobile=bool(loc.get("is_mobile", False)),
                is_active=bool(loc.get("is_active", True)),
                location_code=loc.get("location_code"),
                technician_id=_optional_id(loc.get("technician_id")),
            )
            for loc in data.get("locations") or ()
        ]
        records = [
            InventoryRecord(
                id=str(r.get("id", f"inv-{i}")),
                part_id=str(r["part_id"]),
                location_id=str(r["location_id"]),
                quantity=int(r.get("quantity", 0)),
            )
            for i, r in enumerate(data.get("inventory") or ())
        ]
        units = [
            TrackedUnit(
                id=str(u.get("id", f"unit-{i}")),
                part_id=str(u["part_id"]),
                serial_number=str(u["serial_number"]),
                status=u["status"],
                current_location_id=_optional_id(u.get("current_location_id")),
                installed_on_equipment_id=_optional_id(u.get("installed_on_equipment_id")),
            )
            for i, u in enumerate(data.get("tracked_units") or ())
        ]
        return cls(
            parts=parts,
            inventory_records=records,
            locations=locations,
            tracked_units=units,
            vehicle_location_type=vehicle_location_type,
        )

    @classmethod
    def from_file(
        cls,
        path: Path | str,
        vehicle_location_type: str = LocationType.TRUCK.value,
    ) -> SnapshotSelector:
        """Load a YAML/JSON snapshot file."""
        with open(path) as f:
            data = yaml.safe_load(f) or {}
        return cls.from_mapping(data, vehicle_location_type=vehicle_location_type)

    # -----------------------------------------------------------------
    # InventoryGateway
    # -----------------------------------------------------------------

    def list_parts(self) -> tuple[Part, ...]:
        return self._parts

    def sum_inventory_quantity(self, part_id: str) -> int:
        return sum(r.quantity for r in self._records if r.part_id == part_id)

    def list_inventory_records(
        self,
        part_id: str | None = None,
        location_id: str | None = None,
    ) -> tuple[InventoryRecord, ...]:
        return tuple(
            r for r in self._records
            if (part_id is None or r.part_id == part_id)
            and (location_id is None or r.location_id == location_id)
        )

    def list_all_inventory_records(self) -> tuple[InventoryRecord, ...]:
        return self._records

    def list_locations(self) -> tuple[StockLocation, ...]:
        return self._locations

    def get_location(self, location_id: str) -> StockLocation | None:
        return self._locations_by_id.get(location_id)

    def list_mobile_active_locations(self) -> tuple[StockLocation, ...]:
        return tuple(
            loc for loc in self._locations
            if loc.location_type == self.vehicle_location_type
            and loc.is_mobile
            and loc.is_active
        )

    def find_location(
        self,
        name: str,
        location_type: str | None = None,
    ) -> StockLocation | None:
        for loc in self._locations:
            if loc.name == name and (location_type is None or loc.location_type == location_type):
                return loc
        return None

    def list_tracked_units(
        self,
        location_id: str | None = None,
        statuses: Iterable[str] | None = None,
    ) -> tuple[TrackedUnit, ...]:
        wanted = frozenset(statuses) if statuses is not None else None
        return tuple(
            u for u in self._units
            if (location_id is None or u.current_location_id == location_id)
            and (wanted is None or u.status in wanted)
        )

    def list_all_tracked_units(self) -> tuple[TrackedUnit, ...]:
        return self._units
