"""
Diagnostics - Pure inventory consistency checks and their result types.

The checks read through ``InventoryGateway`` only and never write.  The
runner that schedules them lives in inventory_services.diagnostic_runner.
"""

from inventory_kernel.logging_config import get_logger

logger = get_logger("engines.diagnostics")

from inventory_engines.diagnostics.types import (
    EVIDENCE_TYPES,
    NON_SERIALIZED,
    SERIALIZED,
    CheckOutcome,
    CheckResult,
    CheckStatus,
    DiagnosticReport,
    DuplicateInventoryKey,
    Evidence,
    InstalledUnitLeak,
    LocationInventoryItem,
    LocationInventoryReport,
    QuantityMismatch,
    UnitIssue,
    UnitIssueCode,
    evidence_from_dict,
    worst_status,
)

from inventory_engines.diagnostics.checks import (
    DiagnosticCheck,
    DuplicateRecordsCheck,
    InstalledLeakageCheck,
    InventorySyncCheck,
    SerializedStatusCheck,
    VehicleInventoryCheck,
    run_check_safely,
)

from inventory_engines.diagnostics.registry import (
    CheckRegistry,
    default_check_registry,
)

__all__ = [
    # Results and evidence
    "CheckOutcome",
    "CheckResult",
    "CheckStatus",
    "DiagnosticReport",
    "DuplicateInventoryKey",
    "EVIDENCE_TYPES",
    "Evidence",
    "InstalledUnitLeak",
    "LocationInventoryItem",
    "LocationInventoryReport",
    "NON_SERIALIZED",
    "QuantityMismatch",
    "SERIALIZED",
    "UnitIssue",
    "UnitIssueCode",
    "evidence_from_dict",
    "worst_status",
    # Checks
    "DiagnosticCheck",
    "DuplicateRecordsCheck",
    "InstalledLeakageCheck",
    "InventorySyncCheck",
    "SerializedStatusCheck",
    "VehicleInventoryCheck",
    "run_check_safely",
    # Registry
    "CheckRegistry",
    "default_check_registry",
]
