"""Text rendering for diagnostic reports and vehicle inventory reports."""

from inventory_engines.diagnostics.types import (
    CheckResult,
    DiagnosticReport,
    DuplicateInventoryKey,
    InstalledUnitLeak,
    LocationInventoryReport,
    QuantityMismatch,
    UnitIssue,
)
from inventory_services.vehicle_inventory_service import VehicleInventoryReport

W = 80

# Evidence lines shown per check before eliding the rest
MAX_EVIDENCE_LINES = 20


def banner(title: str) -> None:
    print()
    print("=" * W)
    print(f"  {title}")
    print("=" * W)


def section(title: str) -> None:
    print()
    print(f"--- {title} ---")
    print()


def field(name: str, value, indent: int = 4) -> None:
    print(f"{' ' * indent}{name}: {value}")


def describe_evidence(item) -> str:
    """One-line description of an evidence item."""
    if isinstance(item, QuantityMismatch):
        return (
            f"{item.part_number or item.part_id} ({item.name}): "
            f"parts={item.parts_table_qty} ledger={item.inventory_table_qty}"
        )
    if isinstance(item, LocationInventoryReport):
        return (
            f"{item.location_name}: {item.non_serialized_count} bulk lines "
            f"({item.non_serialized_total_qty} units), "
            f"{item.serialized_count} serialized"
        )
    if isinstance(item, UnitIssue):
        return f"{item.serial_number} [{item.code.value}] {item.issue}"
    if isinstance(item, InstalledUnitLeak):
        return f"{item.serial_number} at {item.current_location}: {item.issue}"
    if isinstance(item, DuplicateInventoryKey):
        return f"duplicate ledger row {item.key}"
    return str(item)


def print_check(result: CheckResult) -> None:
    section(f"[{result.status.value}] {result.name}")
    field("check_id", result.check_id)
    field("message", result.message)
    if not result.evidence:
        return
    print()
    for item in result.evidence[:MAX_EVIDENCE_LINES]:
        print(f"      - {describe_evidence(item)}")
    hidden = len(result.evidence) - MAX_EVIDENCE_LINES
    if hidden > 0:
        print(f"      ... and {hidden} more")


def print_report(report: DiagnosticReport) -> None:
    banner("INVENTORY DIAGNOSTIC REPORT")
    field("timestamp", report.timestamp.isoformat())
    field("overall_status", report.overall_status.value)
    for result in report.checks:
        print_check(result)
    banner(f"OVERALL: {report.overall_status.value}")


def print_vehicle_report(report: VehicleInventoryReport) -> None:
    banner(f"VEHICLE INVENTORY: {report.vehicle.name}")
    field("id", report.vehicle.id)
    field("location_code", report.vehicle.location_code or "-")
    field("assigned_to", report.vehicle.assigned_to or "-")

    section(f"Non-serialized ({report.total_non_serialized_units} units)")
    if not report.non_serialized:
        print("    (none)")
    for line in report.non_serialized:
        print(
            f"    {line.part_number or line.part_id:<16} "
            f"{(line.part_name or '')[:40]:<40} {line.quantity:>6}"
        )

    section(f"Serialized ({report.total_serialized_units} units)")
    if not report.serialized:
        print("    (none)")
    for unit in report.serialized:
        print(
            f"    {unit.serial_number:<20} "
            f"{unit.part_number or unit.part_id:<16} {unit.status}"
        )
