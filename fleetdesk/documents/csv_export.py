"""CSV exports of maintenance, trips and fuel logs."""

from __future__ import annotations

import csv
import io
from datetime import date
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

UNKNOWN_VEHICLE = "Unknown Vehicle"

MAINTENANCE_HEADERS = ["Date", "Vehicle", "Description", "Service Provider", "Status", "Cost", "Next Scheduled"]
TRIP_HEADERS = ["Date", "Time", "Return Time", "Service Type", "Status", "Vehicle", "Pickup", "Dropoff", "Amount"]
FUEL_LOG_HEADERS = ["Date", "Vehicle", "Fuel Type", "Volume", "Cost", "Price Per Liter", "Current Mileage", "Notes"]


def vehicle_label(vehicle: Any) -> str:
    if vehicle is None:
        return UNKNOWN_VEHICLE
    return f"{vehicle.make} {vehicle.model} - {vehicle.registration}"


def _cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, date):
        return value.isoformat()
    return str(getattr(value, "value", value))


def _money(value: Optional[float]) -> str:
    return f"{float(value or 0):.2f}"


def to_csv(headers: Sequence[str], rows: Iterable[Sequence[Any]]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(headers)
    for row in rows:
        writer.writerow([_cell(value) for value in row])
    return buffer.getvalue()


def maintenance_csv(records: Iterable[Any], vehicles: Mapping[str, Any]) -> str:
    rows: List[List[Any]] = []
    for record in records:
        rows.append(
            [
                record.date,
                vehicle_label(vehicles.get(record.vehicle_id)),
                record.description,
                record.service_provider,
                record.status,
                _money(record.cost),
                record.next_scheduled,
            ]
        )
    return to_csv(MAINTENANCE_HEADERS, rows)


def trips_csv(trips: Iterable[Any], vehicles: Mapping[str, Any]) -> str:
    rows = [
        [
            trip.date,
            trip.time,
            trip.return_time,
            trip.service_type,
            trip.status,
            vehicle_label(vehicles.get(trip.vehicle_id)),
            trip.pickup_location,
            trip.dropoff_location,
            _money(trip.amount),
        ]
        for trip in trips
    ]
    return to_csv(TRIP_HEADERS, rows)


def fuel_logs_csv(logs: Iterable[Any], vehicles: Mapping[str, Any]) -> str:
    rows = [
        [
            log.date,
            vehicle_label(vehicles.get(log.vehicle_id)),
            log.fuel_type,
            log.volume,
            _money(log.cost),
            log.price_per_liter,
            log.current_mileage,
            log.notes,
        ]
        for log in logs
    ]
    return to_csv(FUEL_LOG_HEADERS, rows)


def attachment_headers(filename: str) -> Dict[str, str]:
    return {"Content-Disposition": f'attachment; filename="{filename}"'}
