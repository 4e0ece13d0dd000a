"""
Inventory diagnostics CLI.

Runs the reconciliation checks against a database or an exported snapshot
file, or prints one vehicle's inventory report.

Entry point: the ``inventory-diagnostics`` console script or python -m scripts.cli
"""

from scripts.cli.main import main

__all__ = ["main"]
