"""
CheckRegistry -- explicit, ordered registration of diagnostic checks.

Contract:
    ``CheckRegistry`` stores checks keyed by ``check_id`` in registration
    order.  Lookup accepts either the ``check_id`` or the display name.
    ``default_check_registry()`` returns a fresh registry holding the five
    standard checks, configured from a ``DiagnosticsConfig``.

Report order follows registration order, never completion order.
"""

from __future__ import annotations

from collections.abc import Iterator

from inventory_config.schema import DiagnosticsConfig
from inventory_kernel.exceptions import CheckNotRegisteredError, DuplicateCheckError

from inventory_engines.diagnostics.checks import (
    DiagnosticCheck,
    DuplicateRecordsCheck,
    InstalledLeakageCheck,
    InventorySyncCheck,
    SerializedStatusCheck,
    VehicleInventoryCheck,
)


class CheckRegistry:
    """Registry mapping check ids to DiagnosticCheck implementations.

    Contract:
        - ``register()`` appends a check; raises DuplicateCheckError if the
          check_id or display name is already taken.
        - ``get()`` retrieves by check_id or name; raises
          CheckNotRegisteredError listing the available ids.
        - Iteration yields checks in registration order.
    """

    def __init__(self) -> None:
        self._checks: dict[str, DiagnosticCheck] = {}

    def register(self, check: DiagnosticCheck) -> None:
        if check.check_id in self._checks or self._find_by_name(check.name):
            raise DuplicateCheckError(check.check_id)
        self._checks[check.check_id] = check

    def get(self, check_name: str) -> DiagnosticCheck:
        check = self._checks.get(check_name) or self._find_by_name(check_name)
        if check is None:
            raise CheckNotRegisteredError(check_name, tuple(self._checks))
        return check

    def list_checks(self) -> tuple[str, ...]:
        """Return registered check ids in registration order."""
        return tuple(self._checks)

    def _find_by_name(self, name: str) -> DiagnosticCheck | None:
        for check in self._checks.values():
            if check.name == name:
                return check
        return None

    def __iter__(self) -> Iterator[DiagnosticCheck]:
        return iter(tuple(self._checks.values()))

    def __len__(self) -> int:
        return len(self._checks)

    def __contains__(self, check_name: str) -> bool:
        return check_name in self._checks or self._find_by_name(check_name) is not None


def default_check_registry(config: DiagnosticsConfig | None = None) -> CheckRegistry:
    """Create a registry holding the standard checks in report order."""
    config = config or DiagnosticsConfig()

    registry = CheckRegistry()
    registry.register(InventorySyncCheck())
    registry.register(VehicleInventoryCheck(
        vehicle_unit_statuses=config.vehicle_unit_statuses,
        location_workers=config.location_workers,
    ))
    registry.register(SerializedStatusCheck(
        known_statuses=config.known_unit_statuses,
        flag_unrecognized=config.flag_unrecognized_statuses,
    ))
    registry.register(InstalledLeakageCheck(
        stock_location_types=config.stock_location_types,
    ))
    registry.register(DuplicateRecordsCheck())
    return registry
