"""
inventory_engines.tracer -- Check invocation tracer emitting INVENTORY_CHECK_TRACE.

Responsibility:
    Provide a lightweight decorator (``@traced_check``) that wraps a check's
    ``evaluate`` method with structured trace logging: check_id, check
    version, outcome status, evidence count and duration_ms.

Architecture position:
    Engines -- infrastructure support for the pure check layer.  Emits a
    log record only; does not touch inputs or results.

Failure modes:
    - If ``evaluate`` raises, a trace record with ``status="error"`` and the
      exception type is emitted and the exception propagates unchanged.

Usage:
    from inventory_engines.tracer import traced_check

    class InventorySyncCheck:
        check_id = "inventory_sync"

        @traced_check("1.0")
        def evaluate(self, gateway):
            ...
"""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from typing import Any

from inventory_kernel.logging_config import get_logger

_logger = get_logger("engines.tracer")


def traced_check(check_version: str) -> Callable:
    """Decorator that emits INVENTORY_CHECK_TRACE for a check evaluation.

    The decorated callable must be a method whose instance exposes
    ``check_id``.

    Args:
        check_version: Version string of the check's logic (e.g., "1.0").
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(self: Any, *args: Any, **kwargs: Any) -> Any:
            t0 = time.monotonic()
            try:
                outcome = func(self, *args, **kwargs)
            except Exception as exc:
                _logger.info(
                    "INVENTORY_CHECK_TRACE",
                    extra={
                        "trace_type": "INVENTORY_CHECK_TRACE",
                        "check_id": self.check_id,
                        "check_version": check_version,
                        "status": "error",
                        "error_type": type(exc).__name__,
                        "duration_ms": round((time.monotonic() - t0) * 1000, 2),
                    },
                )
                raise

            _logger.info(
                "INVENTORY_CHECK_TRACE",
                extra={
                    "trace_type": "INVENTORY_CHECK_TRACE",
                    "check_id": self.check_id,
                    "check_version": check_version,
                    "status": outcome.status.value,
                    "evidence_count": len(outcome.evidence),
                    "duration_ms": round((time.monotonic() - t0) * 1000, 2),
                },
            )
            return outcome

        return wrapper

    return decorator
