"""
Module: inventory_engines
Responsibility:
    Pure check layer of the reconciliation engine.  Checks evaluate
    consistency invariants over entity snapshots read through the
    ``InventoryGateway`` contract and return typed results.

Architecture position:
    Engines -- may import inventory_kernel and inventory_config.schema.
    MUST NOT import inventory_services.

Invariants enforced:
    - Checks never write and never call ``datetime.now()``; report
      timestamps come from the caller's Clock.
    - Identical gateway contents always produce identical results.

Usage:
    from inventory_engines.diagnostics import default_check_registry, run_check_safely
"""

from inventory_kernel.logging_config import get_logger

logger = get_logger("engines")
