"""Unit tests for CSV exports."""

from __future__ import annotations

import csv
import io
from datetime import date

from fleetdesk.core.database.entities import (
    FuelLog,
    FuelType,
    Maintenance,
    MaintenanceStatus,
    ServiceType,
    Trip,
    TripStatus,
    Vehicle,
    VehicleType,
)
from fleetdesk.documents import attachment_headers, fuel_logs_csv, maintenance_csv, trips_csv, vehicle_label


def parse(content: str):
    return list(csv.reader(io.StringIO(content)))


VEHICLES = {
    "vehicle-1": Vehicle(id="vehicle-1", make="Toyota", model="Land Cruiser", registration="SO-1234",
                         type=VehicleType.ARMOURED),
}


def test_vehicle_label():
    assert vehicle_label(VEHICLES["vehicle-1"]) == "Toyota Land Cruiser - SO-1234"
    assert vehicle_label(None) == "Unknown Vehicle"


def test_maintenance_csv():
    records = [
        Maintenance(vehicle_id="vehicle-1", date=date(2025, 3, 1), description="Oil change, filters",
                    service_provider="Garage", status=MaintenanceStatus.COMPLETED, cost=120.5,
                    next_scheduled=date(2025, 6, 1)),
        Maintenance(vehicle_id="missing", date=date(2025, 3, 2), description="Tyres"),
    ]

    rows = parse(maintenance_csv(records, VEHICLES))

    assert rows[0] == ["Date", "Vehicle", "Description", "Service Provider", "Status", "Cost", "Next Scheduled"]
    assert rows[1] == ["2025-03-01", "Toyota Land Cruiser - SO-1234", "Oil change, filters", "Garage", "completed",
                       "120.50", "2025-06-01"]
    assert rows[2] == ["2025-03-02", "Unknown Vehicle", "Tyres", "", "scheduled", "0.00", ""]


def test_trips_csv():
    trips = [
        Trip(date=date(2025, 3, 5), time="09:00", service_type=ServiceType.AIRPORT_PICKUP,
             status=TripStatus.SCHEDULED, vehicle_id="vehicle-1", pickup_location="AAE Airport",
             dropoff_location="Hotel", amount=250),
    ]

    rows = parse(trips_csv(trips, VEHICLES))

    assert rows[0] == ["Date", "Time", "Return Time", "Service Type", "Status", "Vehicle", "Pickup", "Dropoff",
                       "Amount"]
    assert rows[1] == ["2025-03-05", "09:00", "", "airport_pickup", "scheduled", "Toyota Land Cruiser - SO-1234",
                       "AAE Airport", "Hotel", "250.00"]


def test_fuel_logs_csv():
    logs = [
        FuelLog(vehicle_id="vehicle-1", date=date(2025, 3, 7), fuel_type=FuelType.DIESEL, volume=60.0, cost=75.0,
                price_per_liter=1.25, current_mileage=12000.0, notes="Full tank"),
    ]

    rows = parse(fuel_logs_csv(logs, VEHICLES))

    assert rows[0] == ["Date", "Vehicle", "Fuel Type", "Volume", "Cost", "Price Per Liter", "Current Mileage", "Notes"]
    assert rows[1] == ["2025-03-07", "Toyota Land Cruiser - SO-1234", "diesel", "60.0", "75.00", "1.25", "12000.0",
                       "Full tank"]


def test_empty_export_has_only_headers():
    assert parse(trips_csv([], {})) == [
        ["Date", "Time", "Return Time", "Service Type", "Status", "Vehicle", "Pickup", "Dropoff", "Amount"]
    ]


def test_attachment_headers():
    assert attachment_headers("trips.csv") == {"Content-Disposition": 'attachment; filename="trips.csv"'}
