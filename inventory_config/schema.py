"""
DiagnosticsConfig schema.

The human-authored YAML file is parsed into this frozen dataclass by the
loader.  Defaults reproduce the behaviour of the reconciliation engine when
no configuration file is supplied.
"""

from __future__ import annotations

from dataclasses import dataclass

from inventory_kernel.domain.entities import LocationType, UnitStatus


@dataclass(frozen=True)
class DiagnosticsConfig:
    """Runtime settings for the inventory diagnostic run."""

    # Location type that identifies field vehicles
    vehicle_location_type: str = LocationType.TRUCK.value
    # Location types an installed unit must no longer point at
    stock_location_types: tuple[str, ...] = (
        LocationType.WAREHOUSE.value,
        LocationType.TRUCK.value,
    )
    # Tracked-unit statuses that count as carried on a vehicle
    vehicle_unit_statuses: tuple[str, ...] = (
        UnitStatus.IN_STOCK.value,
        UnitStatus.IN_TRANSIT.value,
    )
    known_unit_statuses: tuple[str, ...] = tuple(s.value for s in UnitStatus)
    flag_unrecognized_statuses: bool = True

    # Execution
    concurrent: bool = True
    max_workers: int = 5
    location_workers: int = 1
    timeout_seconds: float | None = None
