"""Tests for VehicleInventoryService.get_vehicle_inventory_report."""

import json
from dataclasses import replace

import pytest

from inventory_config.schema import DiagnosticsConfig
from inventory_kernel.domain.entities import StockLocation, TrackedUnit
from inventory_kernel.exceptions import VehicleNotFoundError
from inventory_kernel.selectors import SnapshotSelector
from inventory_services.vehicle_inventory_service import VehicleInventoryService


@pytest.fixture
def service(clean_gateway):
    return VehicleInventoryService(clean_gateway)


class TestVehicleInventoryReport:
    def test_vehicle_summary(self, service):
        report = service.get_vehicle_inventory_report("Truck 1")
        assert report.vehicle.id == "T1"
        assert report.vehicle.location_code == "TRK-01"
        assert report.vehicle.assigned_to == "tech-7"

    def test_bulk_lines_carry_part_details(self, service):
        report = service.get_vehicle_inventory_report("Truck 1")
        assert len(report.non_serialized) == 1
        line = report.non_serialized[0]
        assert line.part_number == "AF-100"
        assert line.part_name == "Air Filter"
        assert line.quantity == 5
        assert report.total_non_serialized_units == 5

    def test_available_units_only(self, clean_entities):
        units = list(clean_entities["tracked_units"]) + [
            TrackedUnit(id="U3", part_id="P2", serial_number="SN-003",
                        status="in_transit", current_location_id="T1"),
            TrackedUnit(id="U4", part_id="P2", serial_number="SN-004",
                        status="defective", current_location_id="T1"),
        ]
        gw = SnapshotSelector(**{**clean_entities, "tracked_units": units})
        report = VehicleInventoryService(gw).get_vehicle_inventory_report("Truck 1")

        assert [u.serial_number for u in report.serialized] == ["SN-001", "SN-003"]
        assert report.total_serialized_units == 2

    def test_unknown_vehicle_raises(self, service):
        with pytest.raises(VehicleNotFoundError, match='Vehicle "Truck 9" not found'):
            service.get_vehicle_inventory_report("Truck 9")

    def test_non_vehicle_location_name_not_matched(self, service):
        with pytest.raises(VehicleNotFoundError):
            service.get_vehicle_inventory_report("Main Warehouse")

    def test_inactive_vehicle_still_reported(self, clean_entities):
        locations = [
            replace(loc, is_active=False) if loc.id == "T1" else loc
            for loc in clean_entities["locations"]
        ]
        gw = SnapshotSelector(**{**clean_entities, "locations": locations})
        report = VehicleInventoryService(gw).get_vehicle_inventory_report("Truck 1")
        assert report.vehicle.id == "T1"

    def test_configured_vehicle_type(self, clean_entities):
        locations = list(clean_entities["locations"]) + [
            StockLocation(id="V1", name="Van 1", location_type="van", is_mobile=True),
        ]
        gw = SnapshotSelector(**{**clean_entities, "locations": locations})
        config = DiagnosticsConfig(vehicle_location_type="van")

        report = VehicleInventoryService(gw, config=config).get_vehicle_inventory_report("Van 1")
        assert report.vehicle.id == "V1"
        assert report.non_serialized == ()
        assert report.total_serialized_units == 0

    def test_to_dict_is_json_compatible(self, service):
        doc = service.get_vehicle_inventory_report("Truck 1").to_dict()
        restored = json.loads(json.dumps(doc))
        assert restored["vehicle"]["name"] == "Truck 1"
        assert restored["total_non_serialized_units"] == 5
        assert restored["total_serialized_units"] == 1
        assert restored["serialized"][0]["serial_number"] == "SN-001"
