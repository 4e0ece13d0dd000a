"""
Inventory diagnostic checks -- pure engine over the InventoryGateway contract.

Each check reads a well-defined subset of entities through the gateway,
evaluates one invariant family and returns a CheckOutcome.  Checks are
independent of each other, never write, and may raise GatewayError;
``run_check_safely`` is the one place where such errors become FAIL results.

Checks:
    inventory_sync       Aggregate quantity_on_hand equals ledger sum
    vehicle_inventory    Combined bulk + serialized view per vehicle
    serialized_status    Tracked-unit status agrees with location/equipment
    installed_leakage    Installed units no longer in stock locations
    duplicate_records    One ledger row per (part, location)
"""

from __future__ import annotations

import contextvars
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from typing import Protocol, runtime_checkable

from inventory_kernel.domain.entities import (
    Part,
    StockLocation,
    TrackedUnit,
    UnitStatus,
)
from inventory_kernel.domain.gateway import InventoryGateway
from inventory_kernel.exceptions import GatewayError
from inventory_kernel.logging_config import LogContext, get_logger
from inventory_engines.tracer import traced_check

from inventory_engines.diagnostics.types import (
    NON_SERIALIZED,
    SERIALIZED,
    CheckOutcome,
    CheckResult,
    CheckStatus,
    DuplicateInventoryKey,
    InstalledUnitLeak,
    LocationInventoryItem,
    LocationInventoryReport,
    QuantityMismatch,
    UnitIssue,
    UnitIssueCode,
)

logger = get_logger("engines.diagnostics.checks")

_DEFAULT_VEHICLE_STATUSES = (UnitStatus.IN_STOCK.value, UnitStatus.IN_TRANSIT.value)
_DEFAULT_STOCK_LOCATION_TYPES = ("warehouse", "truck")


@runtime_checkable
class DiagnosticCheck(Protocol):
    """Interface every diagnostic check implements.

    Contract:
        - ``check_id``: stable machine name, unique within a registry.
        - ``name``: display name used in reports.
        - ``error_subject``: phrase used in "Error checking <subject>: ...".
        - ``evidence_kind``: the evidence variant this check emits.
        - ``evaluate()``: reads through the gateway, returns a CheckOutcome.
          May raise GatewayError; must not write.
    """

    check_id: str
    name: str
    error_subject: str
    evidence_kind: str

    def evaluate(self, gateway: InventoryGateway) -> CheckOutcome: ...


def _parts_by_id(gateway: InventoryGateway) -> dict[str, Part]:
    return {p.id: p for p in gateway.list_parts()}


# =============================================================================
# Aggregate / ledger sync
# =============================================================================


class InventorySyncCheck:
    """Cached part quantity must equal the sum of its ledger rows.

    A part whose ``quantity_on_hand`` is None is reported as a mismatch.
    """

    check_id = "inventory_sync"
    name = "Inventory Synchronization"
    error_subject = "inventory sync"
    evidence_kind = QuantityMismatch.kind

    @traced_check("1.0")
    def evaluate(self, gateway: InventoryGateway) -> CheckOutcome:
        mismatches: list[QuantityMismatch] = []

        for part in gateway.list_parts():
            ledger_sum = gateway.sum_inventory_quantity(part.id)
            if ledger_sum != part.quantity_on_hand:
                mismatches.append(QuantityMismatch(
                    part_id=part.id,
                    part_number=part.part_number,
                    name=part.name,
                    parts_table_qty=part.quantity_on_hand,
                    inventory_table_qty=ledger_sum,
                ))

        if mismatches:
            return CheckOutcome(
                status=CheckStatus.FAIL,
                message=f"Found {len(mismatches)} parts with quantity mismatches",
                evidence=tuple(mismatches),
            )

        return CheckOutcome(
            status=CheckStatus.PASS,
            message="All parts quantities are in sync between parts and part_inventory tables",
        )


# =============================================================================
# Per-vehicle inventory snapshot
# =============================================================================


class VehicleInventoryCheck:
    """Combined bulk + serialized inventory view for every active vehicle.

    Informational: always PASS.  The reports are evidence for auditing, not
    an assertion.  With ``location_workers > 1`` vehicles are read in
    parallel; report order still follows the gateway's location order.
    """

    check_id = "vehicle_inventory"
    name = "Vehicle Inventory Consistency"
    error_subject = "vehicle inventory"
    evidence_kind = LocationInventoryReport.kind

    def __init__(
        self,
        vehicle_unit_statuses: Iterable[str] = _DEFAULT_VEHICLE_STATUSES,
        location_workers: int = 1,
    ) -> None:
        self.vehicle_unit_statuses = tuple(vehicle_unit_statuses)
        self.location_workers = location_workers

    @traced_check("1.0")
    def evaluate(self, gateway: InventoryGateway) -> CheckOutcome:
        vehicles = gateway.list_mobile_active_locations()
        parts = _parts_by_id(gateway)

        def build(vehicle: StockLocation) -> LocationInventoryReport:
            return self.build_report(gateway, vehicle, parts)

        if self.location_workers > 1 and len(vehicles) > 1:
            with ThreadPoolExecutor(max_workers=self.location_workers) as pool:
                # Each task runs in its own copy of the caller's log context
                futures = [
                    pool.submit(contextvars.copy_context().run, build, v)
                    for v in vehicles
                ]
                reports = tuple(f.result() for f in futures)
        else:
            reports = tuple(build(v) for v in vehicles)

        return CheckOutcome(
            status=CheckStatus.PASS,
            message=f"Checked {len(vehicles)} vehicles",
            evidence=reports,
        )

    def build_report(
        self,
        gateway: InventoryGateway,
        vehicle: StockLocation,
        parts: dict[str, Part],
    ) -> LocationInventoryReport:
        """Snapshot one vehicle's bulk records and carried tracked units."""
        records = gateway.list_inventory_records(location_id=vehicle.id)
        units = gateway.list_tracked_units(
            location_id=vehicle.id,
            statuses=self.vehicle_unit_statuses,
        )

        items: list[LocationInventoryItem] = []
        for rec in records:
            part = parts.get(rec.part_id)
            items.append(LocationInventoryItem(
                item_type=NON_SERIALIZED,
                part_id=rec.part_id,
                part_number=part.part_number if part else None,
                part_name=part.name if part else None,
                quantity=rec.quantity,
            ))
        for unit in units:
            part = parts.get(unit.part_id)
            items.append(LocationInventoryItem(
                item_type=SERIALIZED,
                part_id=unit.part_id,
                part_number=part.part_number if part else None,
                part_name=part.name if part else None,
                serial_number=unit.serial_number,
                status=unit.status,
            ))

        return LocationInventoryReport(
            location_id=vehicle.id,
            location_name=vehicle.name,
            non_serialized_count=len(records),
            non_serialized_total_qty=sum(r.quantity for r in records),
            serialized_count=len(units),
            items=tuple(items),
        )


# =============================================================================
# Tracked-unit status / location consistency
# =============================================================================


class SerializedStatusCheck:
    """Tracked-unit status must agree with its location and equipment refs.

    Predicates are independent; a unit may produce several issues.  Units
    whose status is not recognised are reported once as
    UNRECOGNIZED_STATUS (when enabled) and are not evaluated further.
    """

    check_id = "serialized_status"
    name = "Serialized Parts Location Status"
    error_subject = "serialized parts"
    evidence_kind = UnitIssue.kind

    def __init__(
        self,
        known_statuses: Iterable[str] = tuple(s.value for s in UnitStatus),
        flag_unrecognized: bool = True,
    ) -> None:
        self.known_statuses = frozenset(known_statuses)
        self.flag_unrecognized = flag_unrecognized

    @traced_check("1.0")
    def evaluate(self, gateway: InventoryGateway) -> CheckOutcome:
        units = gateway.list_all_tracked_units()
        parts = _parts_by_id(gateway)

        issues: list[UnitIssue] = []
        for unit in units:
            issues.extend(self.unit_issues(unit, parts))

        if issues:
            return CheckOutcome(
                status=CheckStatus.WARNING,
                message=f"Found {len(issues)} serialized parts with inconsistent status/location",
                evidence=tuple(issues),
            )

        return CheckOutcome(
            status=CheckStatus.PASS,
            message=f"All {len(units)} serialized parts have consistent status and location data",
        )

    def unit_issues(self, unit: TrackedUnit, parts: dict[str, Part]) -> list[UnitIssue]:
        """Evaluate every predicate for one unit."""
        part = parts.get(unit.part_id)
        part_number = part.part_number if part else None

        def issue(code: UnitIssueCode, text: str) -> UnitIssue:
            return UnitIssue(
                unit_id=unit.id,
                serial_number=unit.serial_number,
                part_id=unit.part_id,
                part_number=part_number,
                code=code,
                issue=text,
            )

        if unit.status not in self.known_statuses:
            if not self.flag_unrecognized:
                return []
            logger.debug(
                "unrecognized_unit_status",
                extra={"serial_number": unit.serial_number, "unit_status": unit.status},
            )
            return [issue(
                UnitIssueCode.UNRECOGNIZED_STATUS,
                f"Unrecognized status '{unit.status}'",
            )]

        found: list[UnitIssue] = []
        if unit.status == UnitStatus.IN_STOCK.value and not unit.has_location:
            found.append(issue(
                UnitIssueCode.IN_STOCK_WITHOUT_LOCATION,
                "Marked as in_stock but has no current_location_id",
            ))
        if unit.status == UnitStatus.INSTALLED.value and not unit.has_equipment:
            found.append(issue(
                UnitIssueCode.INSTALLED_WITHOUT_EQUIPMENT,
                "Marked as installed but has no installed_on_equipment_id",
            ))
        if unit.status == UnitStatus.IN_STOCK.value and unit.has_equipment:
            found.append(issue(
                UnitIssueCode.IN_STOCK_WITH_EQUIPMENT,
                "Marked as in_stock but still has installed_on_equipment_id",
            ))
        return found


# =============================================================================
# Installed-unit leakage into stock views
# =============================================================================


class InstalledLeakageCheck:
    """Installed units must not keep a warehouse/vehicle location.

    Overlaps with SerializedStatusCheck on purpose; the two are kept
    separate and filter locations differently.
    """

    check_id = "installed_leakage"
    name = "Installed Parts Stock Filter"
    error_subject = "installed parts"
    evidence_kind = InstalledUnitLeak.kind

    def __init__(
        self,
        stock_location_types: Iterable[str] = _DEFAULT_STOCK_LOCATION_TYPES,
    ) -> None:
        self.stock_location_types = frozenset(stock_location_types)

    @traced_check("1.0")
    def evaluate(self, gateway: InventoryGateway) -> CheckOutcome:
        units = gateway.list_tracked_units(statuses=(UnitStatus.INSTALLED.value,))
        parts = _parts_by_id(gateway)
        locations: dict[str, StockLocation | None] = {}

        leaks: list[InstalledUnitLeak] = []
        for unit in units:
            if unit.status != UnitStatus.INSTALLED.value or not unit.current_location_id:
                continue

            loc_id = unit.current_location_id
            if loc_id not in locations:
                locations[loc_id] = gateway.get_location(loc_id)
            loc = locations[loc_id]

            if loc is not None and loc.location_type in self.stock_location_types:
                part = parts.get(unit.part_id)
                leaks.append(InstalledUnitLeak(
                    unit_id=unit.id,
                    serial_number=unit.serial_number,
                    part_id=unit.part_id,
                    part_number=part.part_number if part else None,
                    location_id=loc.id,
                    current_location=loc.name,
                    location_type=loc.location_type,
                    issue=f"Installed part still has {loc.location_type} location",
                ))

        if leaks:
            return CheckOutcome(
                status=CheckStatus.WARNING,
                message=f"Found {len(leaks)} installed parts that appear in stock locations",
                evidence=tuple(leaks),
            )

        return CheckOutcome(
            status=CheckStatus.PASS,
            message="Installed parts correctly filtered out of stock views",
        )


# =============================================================================
# Duplicate ledger rows
# =============================================================================


class DuplicateRecordsCheck:
    """At most one ledger row per (part, location).

    Single linear pass with a seen-set; every occurrence after the first
    yields one evidence entry.
    """

    check_id = "duplicate_records"
    name = "Duplicate Inventory Records"
    error_subject = "duplicates"
    evidence_kind = DuplicateInventoryKey.kind

    @traced_check("1.0")
    def evaluate(self, gateway: InventoryGateway) -> CheckOutcome:
        seen: set[tuple[str, str]] = set()
        duplicates: list[DuplicateInventoryKey] = []

        for record in gateway.list_all_inventory_records():
            if record.key in seen:
                duplicates.append(DuplicateInventoryKey(
                    part_id=record.part_id,
                    location_id=record.location_id,
                ))
            seen.add(record.key)

        if duplicates:
            return CheckOutcome(
                status=CheckStatus.FAIL,
                message=f"Found {len(duplicates)} duplicate part-location combinations",
                evidence=tuple(duplicates),
            )

        return CheckOutcome(
            status=CheckStatus.PASS,
            message="No duplicate inventory records found",
        )


# =============================================================================
# Check boundary
# =============================================================================


def run_check_safely(check: DiagnosticCheck, gateway: InventoryGateway) -> CheckResult:
    """Evaluate one check and map its outcome or failure to a CheckResult.

    GatewayError becomes FAIL with the error text in the message.  Any
    other exception raised by a check is treated the same way and logged
    with its traceback, so one broken check never aborts a run.
    """
    with LogContext.bind(check_id=check.check_id):
        try:
            outcome = check.evaluate(gateway)
        except GatewayError as exc:
            logger.warning(
                "diagnostic_check_errored",
                extra={"error_code": exc.code, "error": str(exc)},
            )
            outcome = CheckOutcome(
                status=CheckStatus.FAIL,
                message=f"Error checking {check.error_subject}: {exc}",
            )
        except Exception as exc:
            logger.error(
                "diagnostic_check_errored",
                extra={"error_code": "UNHANDLED_EXCEPTION", "error": str(exc)},
                exc_info=True,
            )
            outcome = CheckOutcome(
                status=CheckStatus.FAIL,
                message=f"Error checking {check.error_subject}: {exc}",
            )

        logger.info(
            "diagnostic_check_completed",
            extra={
                "status": outcome.status.value,
                "evidence_count": len(outcome.evidence),
            },
        )

    return CheckResult.from_outcome(
        check_id=check.check_id,
        name=check.name,
        outcome=outcome,
        evidence_kind=check.evidence_kind,
    )
