"""
InventoryDiagnosticRunner -- runs the registered checks and builds the report.

Composes the pure checks in inventory_engines.diagnostics with clock
injection, a thread pool and run-scoped log context.

Architecture: inventory_services -- imperative shell.
    The runner owns scheduling only.  Checks read through the gateway it is
    given; gateway errors are converted to FAIL results by
    ``run_check_safely`` and never reach the runner.

Contract:
    - ``run_full_diagnostic()`` evaluates every registered check, concurrently
      by default, and returns a DiagnosticReport whose ``checks`` follow
      registration order.
    - A timeout or a set cancel event aborts the run: pending checks are
      cancelled and DiagnosticTimeoutError / DiagnosticCancelledError is
      raised.  No partial report is produced.
    - ``run_check()`` evaluates one check by check_id or display name.

Non-goals:
    - Does NOT persist reports (caller decides).
    - Does NOT modify any data (read-only).
"""

from __future__ import annotations

import contextvars
import threading
import time
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from uuid import uuid4

from inventory_config.schema import DiagnosticsConfig
from inventory_kernel.domain.clock import Clock, SystemClock
from inventory_kernel.domain.gateway import InventoryGateway
from inventory_kernel.exceptions import (
    DiagnosticAbortedError,
    DiagnosticCancelledError,
    DiagnosticTimeoutError,
)
from inventory_kernel.logging_config import LogContext, get_logger

from inventory_engines.diagnostics.checks import DiagnosticCheck, run_check_safely
from inventory_engines.diagnostics.registry import CheckRegistry, default_check_registry
from inventory_engines.diagnostics.types import CheckResult, DiagnosticReport

logger = get_logger("services.diagnostic_runner")

# Upper bound on how long a cancel event can go unnoticed
_CANCEL_POLL_SECONDS = 0.05


class InventoryDiagnosticRunner:
    """Service that runs inventory diagnostics against one gateway.

    Args:
        gateway: Read-only data source for every check.
        clock: Source of the report timestamp.
        registry: Ordered checks to run.  Defaults to the standard five,
            configured from ``config``.
        config: Execution settings (concurrency, worker cap, timeout).
    """

    def __init__(
        self,
        gateway: InventoryGateway,
        clock: Clock | None = None,
        registry: CheckRegistry | None = None,
        config: DiagnosticsConfig | None = None,
    ) -> None:
        self._gateway = gateway
        self._clock = clock or SystemClock()
        self._config = config or DiagnosticsConfig()
        self._registry = registry if registry is not None else default_check_registry(self._config)

    @property
    def registry(self) -> CheckRegistry:
        return self._registry

    # -------------------------------------------------------------------------
    # Full run
    # -------------------------------------------------------------------------

    def run_full_diagnostic(
        self,
        timeout: float | None = None,
        cancel_event: threading.Event | None = None,
    ) -> DiagnosticReport:
        """Run every registered check and return the combined report.

        Args:
            timeout: Seconds before the run is aborted.  Falls back to
                ``config.timeout_seconds``; None waits indefinitely.
            cancel_event: When set, the run is aborted.

        Raises:
            DiagnosticTimeoutError: The deadline passed before all checks finished.
            DiagnosticCancelledError: ``cancel_event`` was set first.
        """
        if timeout is None:
            timeout = self._config.timeout_seconds

        checks = tuple(self._registry)
        run_id = str(uuid4())
        concurrent = self._config.concurrent and len(checks) > 1

        with LogContext.bind(run_id=run_id):
            logger.info(
                "diagnostic_run_started",
                extra={
                    "check_count": len(checks),
                    "concurrent": concurrent,
                    "timeout_seconds": timeout,
                },
            )
            t0 = time.monotonic()

            try:
                if concurrent:
                    results = self._run_concurrent(checks, timeout, cancel_event)
                else:
                    results = self._run_sequential(checks, timeout, cancel_event)
            except DiagnosticAbortedError as exc:
                logger.warning(
                    "diagnostic_run_aborted",
                    extra={
                        "error_code": exc.code,
                        "pending_checks": list(exc.pending_checks),
                        "duration_ms": round((time.monotonic() - t0) * 1000, 2),
                    },
                )
                raise

            report = DiagnosticReport.from_results(self._clock.now(), results)

            logger.info(
                "diagnostic_run_completed",
                extra={
                    "overall_status": report.overall_status.value,
                    "failed": len(report.failed_checks),
                    "warnings": len(report.warning_checks),
                    "duration_ms": round((time.monotonic() - t0) * 1000, 2),
                },
            )
            return report

    def _run_sequential(
        self,
        checks: tuple[DiagnosticCheck, ...],
        timeout: float | None,
        cancel_event: threading.Event | None,
    ) -> list[CheckResult]:
        deadline = time.monotonic() + timeout if timeout is not None else None
        results: list[CheckResult] = []

        for i, check in enumerate(checks):
            pending = tuple(c.check_id for c in checks[i:])
            if cancel_event is not None and cancel_event.is_set():
                raise DiagnosticCancelledError(pending)
            if deadline is not None and time.monotonic() >= deadline:
                raise DiagnosticTimeoutError(timeout, pending)
            results.append(run_check_safely(check, self._gateway))

        return results

    def _run_concurrent(
        self,
        checks: tuple[DiagnosticCheck, ...],
        timeout: float | None,
        cancel_event: threading.Event | None,
    ) -> list[CheckResult]:
        deadline = time.monotonic() + timeout if timeout is not None else None
        workers = max(1, min(len(checks), self._config.max_workers))

        pool = ThreadPoolExecutor(
            max_workers=workers,
            thread_name_prefix="inventory-check",
        )
        aborted = False
        try:
            # Each submission runs in its own copy of the caller's log context
            futures: dict[Future[CheckResult], DiagnosticCheck] = {
                pool.submit(
                    contextvars.copy_context().run,
                    run_check_safely,
                    check,
                    self._gateway,
                ): check
                for check in checks
            }

            pending = set(futures)
            while pending:
                if cancel_event is not None and cancel_event.is_set():
                    aborted = True
                    raise DiagnosticCancelledError(_pending_ids(futures, pending))

                wait_for: float | None = None
                if cancel_event is not None:
                    wait_for = _CANCEL_POLL_SECONDS
                if deadline is not None:
                    remaining = deadline - time.monotonic()
                    if remaining <= 0:
                        aborted = True
                        raise DiagnosticTimeoutError(timeout, _pending_ids(futures, pending))
                    wait_for = remaining if wait_for is None else min(wait_for, remaining)

                _, pending = wait(pending, timeout=wait_for, return_when=FIRST_COMPLETED)

            return [future.result() for future in futures]
        finally:
            pool.shutdown(wait=not aborted, cancel_futures=aborted)

    # -------------------------------------------------------------------------
    # Single check
    # -------------------------------------------------------------------------

    def run_check(self, check_name: str) -> CheckResult:
        """Run one registered check by check_id or display name.

        Raises:
            CheckNotRegisteredError: If no check matches ``check_name``.
        """
        check = self._registry.get(check_name)
        with LogContext.bind(run_id=str(uuid4())):
            return run_check_safely(check, self._gateway)

    def list_checks(self) -> tuple[DiagnosticCheck, ...]:
        """Registered checks in report order."""
        return tuple(self._registry)


def _pending_ids(
    futures: dict[Future[CheckResult], DiagnosticCheck],
    pending: set[Future[CheckResult]],
) -> tuple[str, ...]:
    return tuple(check.check_id for future, check in futures.items() if future in pending)
