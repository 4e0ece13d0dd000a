"""
Typed exception hierarchy for the inventory kernel.

Every error has a typed class, a machine-readable ``code`` class attribute,
and carries its context as attributes rather than only in the message.

    InventoryKernelError (base)
    |
    +-- GatewayError
    |   +-- GatewayQueryError
    |   +-- GatewayUnavailableError
    |
    +-- DiagnosticError
    |   +-- CheckNotRegisteredError
    |   +-- DuplicateCheckError
    |   +-- DiagnosticAbortedError
    |       +-- DiagnosticTimeoutError
    |       +-- DiagnosticCancelledError
    |
    +-- VehicleNotFoundError
    |
    +-- ConfigurationError

Category     | Code                   | When Raised
-------------|------------------------|--------------------------------------------
Gateway      | GATEWAY_QUERY_FAILED   | A read against the backing store failed
             | GATEWAY_UNAVAILABLE    | The backing store could not be reached
-------------|------------------------|--------------------------------------------
Diagnostic   | CHECK_NOT_REGISTERED   | run_check() called with an unknown name
             | DUPLICATE_CHECK        | Two checks registered under one check_id
             | DIAGNOSTIC_TIMEOUT     | Run exceeded its deadline, no report made
             | DIAGNOSTIC_CANCELLED   | Caller cancelled the run, no report made
-------------|------------------------|--------------------------------------------
Vehicle      | VEHICLE_NOT_FOUND      | No vehicle location with the given name
-------------|------------------------|--------------------------------------------
Config       | INVALID_CONFIGURATION  | Diagnostics config failed validation

Gateway errors never escape a diagnostic run: the runner folds them into a
FAIL result for the check that issued the read. Only run aborts and unknown
check names reach the caller.
"""


class InventoryKernelError(Exception):
    """Base exception for all inventory kernel errors."""

    code: str = "INVENTORY_KERNEL_ERROR"


# Gateway exceptions


class GatewayError(InventoryKernelError):
    """Base exception for data-access gateway failures."""

    code: str = "GATEWAY_ERROR"


class GatewayQueryError(GatewayError):
    """A read query against the backing store failed."""

    code: str = "GATEWAY_QUERY_FAILED"

    def __init__(self, operation: str, reason: str):
        self.operation = operation
        self.reason = reason
        super().__init__(f"{operation} failed: {reason}")


class GatewayUnavailableError(GatewayError):
    """The backing store could not be reached."""

    code: str = "GATEWAY_UNAVAILABLE"

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Inventory data source unavailable: {reason}")


# Diagnostic exceptions


class DiagnosticError(InventoryKernelError):
    """Base exception for diagnostic runner errors."""

    code: str = "DIAGNOSTIC_ERROR"


class CheckNotRegisteredError(DiagnosticError):
    """No check is registered under the requested name."""

    code: str = "CHECK_NOT_REGISTERED"

    def __init__(self, check_name: str, available: tuple[str, ...] = ()):
        self.check_name = check_name
        self.available = available
        super().__init__(
            f"No check registered as '{check_name}'. "
            f"Available: {', '.join(available) or '(none)'}"
        )


class DuplicateCheckError(DiagnosticError):
    """A check with the same check_id is already registered."""

    code: str = "DUPLICATE_CHECK"

    def __init__(self, check_id: str):
        self.check_id = check_id
        super().__init__(f"Check '{check_id}' is already registered")


class DiagnosticAbortedError(DiagnosticError):
    """A diagnostic run was aborted before every check finished.

    An aborted run produces no report.
    """

    code: str = "DIAGNOSTIC_ABORTED"

    def __init__(self, message: str, pending_checks: tuple[str, ...] = ()):
        self.pending_checks = pending_checks
        super().__init__(message)


class DiagnosticTimeoutError(DiagnosticAbortedError):
    """The run did not complete within the caller's timeout."""

    code: str = "DIAGNOSTIC_TIMEOUT"

    def __init__(self, timeout_seconds: float, pending_checks: tuple[str, ...] = ()):
        self.timeout_seconds = timeout_seconds
        super().__init__(
            f"Diagnostic run exceeded {timeout_seconds}s timeout "
            f"({len(pending_checks)} check(s) unfinished)",
            pending_checks,
        )


class DiagnosticCancelledError(DiagnosticAbortedError):
    """The caller cancelled the run."""

    code: str = "DIAGNOSTIC_CANCELLED"

    def __init__(self, pending_checks: tuple[str, ...] = ()):
        super().__init__(
            f"Diagnostic run cancelled "
            f"({len(pending_checks)} check(s) unfinished)",
            pending_checks,
        )


# Vehicle exceptions


class VehicleNotFoundError(InventoryKernelError):
    """No vehicle-type stock location has the given name."""

    code: str = "VEHICLE_NOT_FOUND"

    def __init__(self, vehicle_name: str):
        self.vehicle_name = vehicle_name
        super().__init__(f'Vehicle "{vehicle_name}" not found')


# Configuration exceptions


class ConfigurationError(InventoryKernelError):
    """Diagnostics configuration is invalid."""

    code: str = "INVALID_CONFIGURATION"

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(f"Invalid configuration for '{field}': {reason}")
