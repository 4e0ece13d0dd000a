"""
Inventory Kernel

Read-only foundation for the inventory reconciliation engine:
- Structured logging and typed exceptions
- Frozen entity snapshots (parts, ledger rows, locations, tracked units)
- The data-access gateway contract and its SQL / snapshot implementations
"""

__version__ = "0.1.0"
