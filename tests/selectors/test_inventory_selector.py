"""
Tests for InventorySelector against a file-backed SQLite database.

Covers DTO conversion, filtering, aggregate sums, error translation, and a
full concurrent diagnostic run through the SQL gateway.
"""

from datetime import UTC, datetime

import pytest
from sqlalchemy import text

from inventory_kernel.db.engine import session_scope
from inventory_kernel.domain.clock import DeterministicClock
from inventory_kernel.domain.entities import InventoryRecord, Part, StockLocation, TrackedUnit
from inventory_kernel.exceptions import GatewayError, GatewayQueryError
from inventory_kernel.models import (
    PartInventoryModel,
    PartModel,
    SerializedPartModel,
    StockLocationModel,
)
from inventory_kernel.selectors import InventorySelector
from inventory_engines.diagnostics.types import CheckStatus
from inventory_services.diagnostic_runner import InventoryDiagnosticRunner


@pytest.fixture
def seeded(session_factory):
    """Seed one warehouse, two trucks, a job site, parts, ledger rows and units."""
    with session_scope() as session:
        session.add_all([
            PartModel(id="P1", name="Air Filter", part_number="AF-100", quantity_on_hand=15),
            PartModel(id="P2", name="Compressor", part_number="CP-200", quantity_on_hand=2),
            PartModel(id="P3", name="Capacitor", part_number="CA-300", quantity_on_hand=None),
        ])
        session.add_all([
            StockLocationModel(id="WH", name="Main Warehouse", location_type="warehouse"),
            StockLocationModel(
                id="T1", name="Truck 1", location_type="truck", is_mobile=True,
                location_code="TRK-01", technician_id="tech-7",
            ),
            StockLocationModel(
                id="T2", name="Truck 2", location_type="truck", is_mobile=True, is_active=False,
            ),
            StockLocationModel(id="SITE", name="Acme HQ", location_type="customer_site"),
        ])
        session.flush()
        session.add_all([
            PartInventoryModel(id="I1", part_id="P1", stock_location_id="WH", quantity=10),
            PartInventoryModel(id="I2", part_id="P1", stock_location_id="T1", quantity=5),
            PartInventoryModel(id="I3", part_id="P2", stock_location_id="WH", quantity=2),
            SerializedPartModel(
                id="U1", part_id="P2", serial_number="SN-001",
                status="in_stock", current_location_id="T1",
            ),
            SerializedPartModel(
                id="U2", part_id="P2", serial_number="SN-002", status="installed",
                current_location_id="SITE", installed_on_equipment_id="EQ-9",
            ),
        ])
    return InventorySelector(session_factory)


class TestReads:
    def test_list_parts_returns_domain_objects(self, seeded):
        parts = {p.id: p for p in seeded.list_parts()}
        assert parts["P1"] == Part(
            id="P1", name="Air Filter", part_number="AF-100", quantity_on_hand=15,
        )
        assert parts["P3"].quantity_on_hand is None

    def test_sum_inventory_quantity(self, seeded):
        assert seeded.sum_inventory_quantity("P1") == 15
        assert seeded.sum_inventory_quantity("P2") == 2

    def test_sum_for_part_without_rows_is_zero(self, seeded):
        assert seeded.sum_inventory_quantity("P3") == 0

    def test_list_inventory_records_filters(self, seeded):
        by_location = seeded.list_inventory_records(location_id="WH")
        assert {r.part_id for r in by_location} == {"P1", "P2"}

        by_both = seeded.list_inventory_records(part_id="P1", location_id="T1")
        assert by_both == (InventoryRecord(id="I2", part_id="P1", location_id="T1", quantity=5),)

        assert len(seeded.list_all_inventory_records()) == 3

    def test_get_location(self, seeded):
        truck = seeded.get_location("T1")
        assert isinstance(truck, StockLocation)
        assert truck.location_code == "TRK-01"
        assert truck.technician_id == "tech-7"
        assert seeded.get_location("missing") is None

    def test_mobile_active_locations(self, seeded):
        assert [loc.id for loc in seeded.list_mobile_active_locations()] == ["T1"]

    def test_find_location_by_name_and_type(self, seeded):
        assert seeded.find_location("Truck 1", location_type="truck").id == "T1"
        assert seeded.find_location("Truck 1", location_type="warehouse") is None
        assert seeded.find_location("Main Warehouse").id == "WH"

    def test_list_tracked_units_filters(self, seeded):
        on_truck = seeded.list_tracked_units(location_id="T1", statuses=("in_stock", "in_transit"))
        assert on_truck == (TrackedUnit(
            id="U1", part_id="P2", serial_number="SN-001",
            status="in_stock", current_location_id="T1",
        ),)

        installed = seeded.list_tracked_units(statuses=["installed"])
        assert [u.serial_number for u in installed] == ["SN-002"]
        assert installed[0].has_equipment

        assert len(seeded.list_all_tracked_units()) == 2

    def test_unknown_status_loads_unchanged(self, seeded):
        with session_scope() as session:
            session.add(SerializedPartModel(
                id="U3", part_id="P1", serial_number="SN-003", status="lost",
            ))
        units = {u.id: u for u in seeded.list_all_tracked_units()}
        assert units["U3"].status == "lost"

    def test_configured_vehicle_location_type(self, session_factory, seeded):
        with session_scope() as session:
            session.add(StockLocationModel(
                id="V1", name="Van 1", location_type="van", is_mobile=True,
            ))
        selector = InventorySelector(session_factory, vehicle_location_type="van")
        assert [loc.id for loc in selector.list_mobile_active_locations()] == ["V1"]


class TestErrorTranslation:
    def test_missing_table_raises_gateway_query_error(self, seeded):
        with seeded.session_factory() as session:
            session.execute(text("DROP TABLE serialized_parts"))
            session.commit()

        with pytest.raises(GatewayQueryError) as exc_info:
            seeded.list_all_tracked_units()
        assert exc_info.value.operation == "list_tracked_units"
        assert exc_info.value.code == "GATEWAY_QUERY_FAILED"

    def test_missing_table_fails_only_its_checks(self, seeded):
        with seeded.session_factory() as session:
            session.execute(text("DROP TABLE part_inventory"))
            session.commit()

        report = InventoryDiagnosticRunner(seeded).run_full_diagnostic()

        failed = {c.check_id for c in report.failed_checks}
        assert failed == {"inventory_sync", "vehicle_inventory", "duplicate_records"}
        assert report.get("inventory_sync").message.startswith("Error checking inventory sync: ")
        assert report.get("serialized_status").status != CheckStatus.FAIL
        assert issubclass(GatewayQueryError, GatewayError)


@pytest.mark.concurrency
class TestDiagnosticsOverSql:
    def test_full_run_reports_seeded_drift(self, seeded):
        clock = DeterministicClock(datetime(2026, 2, 1, 12, 0, 0, tzinfo=UTC))
        report = InventoryDiagnosticRunner(seeded, clock=clock).run_full_diagnostic(timeout=30)

        sync = report.get("inventory_sync")
        assert sync.status == CheckStatus.FAIL
        assert [m.part_id for m in sync.evidence] == ["P3"]

        vehicles = report.get("vehicle_inventory")
        assert vehicles.status == CheckStatus.PASS
        assert vehicles.message == "Checked 1 vehicles"
        assert vehicles.evidence[0].non_serialized_total_qty == 5

        assert report.get("serialized_status").status == CheckStatus.PASS
        assert report.get("installed_leakage").status == CheckStatus.PASS
        assert report.get("duplicate_records").status == CheckStatus.PASS
        assert report.overall_status == CheckStatus.FAIL
        assert report.timestamp == clock.now()

    def test_duplicate_rows_detected_without_unique_constraint(self, seeded):
        with session_scope() as session:
            session.add(PartInventoryModel(
                id="I4", part_id="P2", stock_location_id="WH", quantity=0,
            ))

        result = InventoryDiagnosticRunner(seeded).run_check("duplicate_records")
        assert result.status == CheckStatus.FAIL
        assert [d.key for d in result.evidence] == ["P2-WH"]
