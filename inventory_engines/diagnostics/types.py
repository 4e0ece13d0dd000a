"""
Inventory diagnostic domain types.

Pure frozen dataclasses and enums shared by the checks (pure engine) and
the diagnostic runner (imperative shell).

Evidence is a tagged union: each variant carries a ``kind`` class
attribute, serializes with that tag, and is restored by
``evidence_from_dict`` dispatching on it.  A check produces evidence of one
kind only, recorded on its result as ``evidence_kind``.

Architecture: inventory_engines/diagnostics -- pure domain, zero I/O.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, ClassVar, Union


# =============================================================================
# Status
# =============================================================================


class CheckStatus(str, Enum):
    """Outcome of one check, and of a whole run."""

    PASS = "PASS"
    WARNING = "WARNING"
    FAIL = "FAIL"

    @property
    def rank(self) -> int:
        return _STATUS_RANK[self]


_STATUS_RANK: dict[CheckStatus, int] = {
    CheckStatus.PASS: 0,
    CheckStatus.WARNING: 1,
    CheckStatus.FAIL: 2,
}


def worst_status(statuses: Iterable[CheckStatus]) -> CheckStatus:
    """Highest-ranked status; PASS for an empty input."""
    return max(statuses, key=lambda s: s.rank, default=CheckStatus.PASS)


# =============================================================================
# Evidence variants
# =============================================================================


@dataclass(frozen=True)
class QuantityMismatch:
    """A part whose cached aggregate disagrees with its ledger sum."""

    kind: ClassVar[str] = "quantity_mismatch"

    part_id: str
    part_number: str | None
    name: str
    parts_table_qty: int | None
    inventory_table_qty: int

    @property
    def difference(self) -> int | None:
        if self.parts_table_qty is None:
            return None
        return self.parts_table_qty - self.inventory_table_qty

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "part_id": self.part_id,
            "part_number": self.part_number,
            "name": self.name,
            "parts_table_qty": self.parts_table_qty,
            "inventory_table_qty": self.inventory_table_qty,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> QuantityMismatch:
        return cls(
            part_id=data["part_id"],
            part_number=data.get("part_number"),
            name=data["name"],
            parts_table_qty=data.get("parts_table_qty"),
            inventory_table_qty=data["inventory_table_qty"],
        )


NON_SERIALIZED = "non-serialized"
SERIALIZED = "serialized"


@dataclass(frozen=True)
class LocationInventoryItem:
    """One line of a location snapshot: a bulk record or a tracked unit."""

    item_type: str  # NON_SERIALIZED | SERIALIZED
    part_id: str
    part_number: str | None = None
    part_name: str | None = None
    quantity: int | None = None
    serial_number: str | None = None
    status: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "type": self.item_type,
            "part_id": self.part_id,
            "part_number": self.part_number,
            "part_name": self.part_name,
        }
        if self.item_type == NON_SERIALIZED:
            data["quantity"] = self.quantity
        else:
            data["serial_number"] = self.serial_number
            data["status"] = self.status
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> LocationInventoryItem:
        return cls(
            item_type=data["type"],
            part_id=data["part_id"],
            part_number=data.get("part_number"),
            part_name=data.get("part_name"),
            quantity=data.get("quantity"),
            serial_number=data.get("serial_number"),
            status=data.get("status"),
        )


@dataclass(frozen=True)
class LocationInventoryReport:
    """Combined bulk + serialized snapshot of one mobile location."""

    kind: ClassVar[str] = "location_inventory"

    location_id: str
    location_name: str
    non_serialized_count: int
    non_serialized_total_qty: int
    serialized_count: int
    items: tuple[LocationInventoryItem, ...] = ()

    @property
    def is_empty(self) -> bool:
        return self.non_serialized_count == 0 and self.serialized_count == 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "location_id": self.location_id,
            "location_name": self.location_name,
            "non_serialized_count": self.non_serialized_count,
            "non_serialized_total_qty": self.non_serialized_total_qty,
            "serialized_count": self.serialized_count,
            "items": [item.to_dict() for item in self.items],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> LocationInventoryReport:
        return cls(
            location_id=data["location_id"],
            location_name=data["location_name"],
            non_serialized_count=data["non_serialized_count"],
            non_serialized_total_qty=data["non_serialized_total_qty"],
            serialized_count=data["serialized_count"],
            items=tuple(LocationInventoryItem.from_dict(i) for i in data.get("items", ())),
        )


class UnitIssueCode(str, Enum):
    """Tracked-unit predicates evaluated by the status/location check."""

    IN_STOCK_WITHOUT_LOCATION = "IN_STOCK_WITHOUT_LOCATION"
    INSTALLED_WITHOUT_EQUIPMENT = "INSTALLED_WITHOUT_EQUIPMENT"
    IN_STOCK_WITH_EQUIPMENT = "IN_STOCK_WITH_EQUIPMENT"
    UNRECOGNIZED_STATUS = "UNRECOGNIZED_STATUS"


@dataclass(frozen=True)
class UnitIssue:
    """One violated predicate for one tracked unit."""

    kind: ClassVar[str] = "unit_issue"

    unit_id: str
    serial_number: str
    part_id: str
    part_number: str | None
    code: UnitIssueCode
    issue: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "unit_id": self.unit_id,
            "serial_number": self.serial_number,
            "part_id": self.part_id,
            "part_number": self.part_number,
            "code": self.code.value,
            "issue": self.issue,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> UnitIssue:
        return cls(
            unit_id=data["unit_id"],
            serial_number=data["serial_number"],
            part_id=data["part_id"],
            part_number=data.get("part_number"),
            code=UnitIssueCode(data["code"]),
            issue=data["issue"],
        )


@dataclass(frozen=True)
class InstalledUnitLeak:
    """An installed unit still pointing at a stock-holding location."""

    kind: ClassVar[str] = "installed_leak"

    unit_id: str
    serial_number: str
    part_id: str
    part_number: str | None
    location_id: str
    current_location: str
    location_type: str
    issue: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "unit_id": self.unit_id,
            "serial_number": self.serial_number,
            "part_id": self.part_id,
            "part_number": self.part_number,
            "location_id": self.location_id,
            "current_location": self.current_location,
            "location_type": self.location_type,
            "issue": self.issue,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> InstalledUnitLeak:
        return cls(
            unit_id=data["unit_id"],
            serial_number=data["serial_number"],
            part_id=data["part_id"],
            part_number=data.get("part_number"),
            location_id=data["location_id"],
            current_location=data["current_location"],
            location_type=data["location_type"],
            issue=data["issue"],
        )


@dataclass(frozen=True)
class DuplicateInventoryKey:
    """A repeat occurrence of a (part, location) ledger key."""

    kind: ClassVar[str] = "duplicate_key"

    part_id: str
    location_id: str

    @property
    def key(self) -> str:
        return f"{self.part_id}-{self.location_id}"

    def __str__(self) -> str:
        return self.key

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "key": self.key,
            "part_id": self.part_id,
            "location_id": self.location_id,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> DuplicateInventoryKey:
        return cls(part_id=data["part_id"], location_id=data["location_id"])


Evidence = Union[
    QuantityMismatch,
    LocationInventoryReport,
    UnitIssue,
    InstalledUnitLeak,
    DuplicateInventoryKey,
]

EVIDENCE_TYPES: dict[str, type] = {
    cls.kind: cls
    for cls in (
        QuantityMismatch,
        LocationInventoryReport,
        UnitIssue,
        InstalledUnitLeak,
        DuplicateInventoryKey,
    )
}


def evidence_from_dict(data: Mapping[str, Any]) -> Evidence:
    """Restore one evidence item from its tagged dict.

    Raises:
        ValueError: If the ``kind`` tag is missing or unknown.
    """
    kind = data.get("kind")
    cls = EVIDENCE_TYPES.get(kind)  # type: ignore[arg-type]
    if cls is None:
        raise ValueError(f"Unknown evidence kind: {kind!r}")
    return cls.from_dict(data)


# =============================================================================
# Check and run results
# =============================================================================


@dataclass(frozen=True)
class CheckOutcome:
    """What a check's ``evaluate`` returns: status, message, evidence.

    Identity (check_id, name) is attached by the check boundary when the
    outcome becomes a CheckResult.
    """

    status: CheckStatus
    message: str
    evidence: tuple[Evidence, ...] = ()


@dataclass(frozen=True)
class CheckResult:
    """Uniform per-check entry in a DiagnosticReport."""

    check_id: str
    name: str
    status: CheckStatus
    message: str
    evidence: tuple[Evidence, ...] = ()
    evidence_kind: str | None = None

    @property
    def passed(self) -> bool:
        return self.status == CheckStatus.PASS

    @classmethod
    def from_outcome(
        cls,
        check_id: str,
        name: str,
        outcome: CheckOutcome,
        evidence_kind: str | None = None,
    ) -> CheckResult:
        return cls(
            check_id=check_id,
            name=name,
            status=outcome.status,
            message=outcome.message,
            evidence=outcome.evidence,
            evidence_kind=evidence_kind,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "check_id": self.check_id,
            "name": self.name,
            "status": self.status.value,
            "message": self.message,
            "evidence_kind": self.evidence_kind,
            "evidence": [e.to_dict() for e in self.evidence],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> CheckResult:
        return cls(
            check_id=data["check_id"],
            name=data["name"],
            status=CheckStatus(data["status"]),
            message=data["message"],
            evidence=tuple(evidence_from_dict(e) for e in data.get("evidence", ())),
            evidence_kind=data.get("evidence_kind"),
        )


@dataclass(frozen=True)
class DiagnosticReport:
    """Complete result of a diagnostic run.

    ``overall_status`` is derived from the worst check status.
    ``checks`` keep registration order.
    """

    timestamp: datetime
    overall_status: CheckStatus
    checks: tuple[CheckResult, ...] = ()

    @classmethod
    def from_results(
        cls,
        timestamp: datetime,
        results: Iterable[CheckResult],
    ) -> DiagnosticReport:
        """Factory that derives overall status from the check results."""
        checks = tuple(results)
        return cls(
            timestamp=timestamp,
            overall_status=worst_status(c.status for c in checks),
            checks=checks,
        )

    @property
    def failed_checks(self) -> tuple[CheckResult, ...]:
        return tuple(c for c in self.checks if c.status == CheckStatus.FAIL)

    @property
    def warning_checks(self) -> tuple[CheckResult, ...]:
        return tuple(c for c in self.checks if c.status == CheckStatus.WARNING)

    @property
    def is_clean(self) -> bool:
        return self.overall_status == CheckStatus.PASS

    def get(self, check_id: str) -> CheckResult | None:
        """Find a check result by check_id."""
        for check in self.checks:
            if check.check_id == check_id:
                return check
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "timestamp": self.timestamp.isoformat(),
            "overall_status": self.overall_status.value,
            "checks": [c.to_dict() for c in self.checks],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> DiagnosticReport:
        return cls(
            timestamp=datetime.fromisoformat(data["timestamp"]),
            overall_status=CheckStatus(data["overall_status"]),
            checks=tuple(CheckResult.from_dict(c) for c in data.get("checks", ())),
        )
