"""
Pytest fixtures for the inventory reconciliation test suite.

Provides:
- Structured logging setup and a JSON log capture fixture
- In-memory snapshot gateways for the standard scenarios
- File-backed SQLite databases for selector and end-to-end tests

SQLite files (not ``:memory:``) are used wherever the diagnostic runner's
worker threads read through the SQL selector; every thread must see the
same database.
"""

import json
import logging
from io import StringIO

import pytest

from inventory_kernel.db.engine import (
    create_tables,
    get_session_factory,
    init_engine_from_url,
    reset_engine,
)
from inventory_kernel.domain.entities import (
    InventoryRecord,
    Part,
    StockLocation,
    TrackedUnit,
)
from inventory_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)
from inventory_kernel.selectors import SnapshotSelector


# =============================================================================
# Logging fixtures
# =============================================================================


@pytest.fixture(autouse=True, scope="session")
def _configure_test_logging():
    """Configure structured logging for the test suite."""
    reset_logging()
    configure_logging(level=logging.DEBUG)
    yield
    reset_logging()


@pytest.fixture(autouse=True)
def _clear_log_context():
    """Clear LogContext between tests to prevent cross-test contamination."""
    LogContext.clear()
    yield
    LogContext.clear()


@pytest.fixture
def captured_logs():
    """
    Capture inventory_kernel logs as parsed JSON dicts.

    Usage::

        def test_something(captured_logs, runner):
            runner.run_full_diagnostic()
            logs = captured_logs()
            assert any(r["message"] == "diagnostic_run_completed" for r in logs)
    """
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    root = logging.getLogger("inventory_kernel")
    previous_level = root.level
    root.setLevel(logging.DEBUG)
    root.addHandler(handler)

    def _get_records() -> list[dict]:
        lines = stream.getvalue().strip().split("\n")
        return [json.loads(line) for line in lines if line]

    yield _get_records

    root.removeHandler(handler)
    root.setLevel(previous_level)


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "concurrency: mark test as exercising the thread pool"
    )


# =============================================================================
# Snapshot gateways
# =============================================================================


def _clean_entities() -> dict:
    """One warehouse, one truck, two parts in sync, two well-formed units."""
    return {
        "parts": [
            Part(id="P1", name="Air Filter", part_number="AF-100", quantity_on_hand=15),
            Part(id="P2", name="Compressor", part_number="CP-200", quantity_on_hand=2),
        ],
        "locations": [
            StockLocation(id="WH", name="Main Warehouse", location_type="warehouse"),
            StockLocation(
                id="T1", name="Truck 1", location_type="truck",
                is_mobile=True, location_code="TRK-01", technician_id="tech-7",
            ),
            StockLocation(id="SITE", name="Acme HQ", location_type="customer_site"),
        ],
        "inventory_records": [
            InventoryRecord(id="I1", part_id="P1", location_id="WH", quantity=10),
            InventoryRecord(id="I2", part_id="P1", location_id="T1", quantity=5),
            InventoryRecord(id="I3", part_id="P2", location_id="WH", quantity=2),
        ],
        "tracked_units": [
            TrackedUnit(
                id="U1", part_id="P2", serial_number="SN-001",
                status="in_stock", current_location_id="T1",
            ),
            TrackedUnit(
                id="U2", part_id="P2", serial_number="SN-002",
                status="installed", installed_on_equipment_id="EQ-9",
                current_location_id="SITE",
            ),
        ],
    }


@pytest.fixture
def clean_entities() -> dict:
    """Keyword arguments for a consistent SnapshotSelector."""
    return _clean_entities()


@pytest.fixture
def clean_gateway(clean_entities) -> SnapshotSelector:
    """A gateway over which every check passes."""
    return SnapshotSelector(**clean_entities)


# =============================================================================
# SQLite database
# =============================================================================


@pytest.fixture
def sqlite_url(tmp_path) -> str:
    return f"sqlite:///{tmp_path / 'inventory.db'}"


@pytest.fixture
def session_factory(sqlite_url):
    """Initialize a fresh file-backed SQLite schema; yields the session factory."""
    init_engine_from_url(sqlite_url, echo=False)
    create_tables()
    yield get_session_factory()
    reset_engine()
