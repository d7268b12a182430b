"""Unit tests for driver and vehicle availability."""

from __future__ import annotations

from datetime import date, datetime, time
from types import SimpleNamespace

import pytest

from fleetdesk.dispatch.availability import (
    ResourceType,
    expected_trip_end,
    parse_time,
    resource_availability,
    slot_availability,
    trip_uses,
)

DAY = date(2025, 3, 15)


def make_trip(trip_id="trip-1", *, day=DAY, at="10:00", return_time=None, service_type="one_way_transfer",
              status="scheduled", driver_id="driver-1", vehicle_id="vehicle-1", **crew):
    return SimpleNamespace(
        id=trip_id,
        date=day,
        time=at,
        return_time=return_time,
        service_type=service_type,
        status=status,
        driver_id=driver_id,
        vehicle_id=vehicle_id,
        **crew,
    )


class TestTimes:
    @pytest.mark.parametrize(
        "value, expected",
        [("09:30", time(9, 30)), ("14:05:59", time(14, 5)), ("7", time(7, 0)), (None, time(0, 0)), ("", time(0, 0))],
    )
    def test_parse_time(self, value, expected):
        assert parse_time(value) == expected

    @pytest.mark.parametrize(
        "service_type, end",
        [
            ("airport_pickup", datetime(2025, 3, 15, 12, 0)),
            ("one_way_transfer", datetime(2025, 3, 15, 11, 30)),
            ("round_trip", datetime(2025, 3, 15, 14, 0)),
            ("full_day", datetime(2025, 3, 15, 18, 0)),
            ("half_day", datetime(2025, 3, 15, 14, 0)),
            ("something_else", datetime(2025, 3, 15, 12, 0)),
        ],
    )
    def test_expected_end_by_service_type(self, service_type, end):
        assert expected_trip_end(make_trip(service_type=service_type)) == end

    def test_return_time_wins(self):
        assert expected_trip_end(make_trip(return_time="16:45")) == datetime(2025, 3, 15, 16, 45)

    def test_buffer_extends_end(self):
        assert expected_trip_end(make_trip(), buffer_hours=1) == datetime(2025, 3, 15, 12, 30)


class TestTripUses:
    def test_primary_assignment(self):
        trip = make_trip()

        assert trip_uses(trip, ResourceType.DRIVER, "driver-1")
        assert trip_uses(trip, ResourceType.VEHICLE, "vehicle-1")
        assert not trip_uses(trip, ResourceType.DRIVER, "vehicle-1")

    def test_escort_and_carrier_vehicles(self):
        trip = make_trip(escort_vehicle_ids=["escort-1"], assigned_vehicle_ids=["carrier-1"])

        assert trip_uses(trip, ResourceType.VEHICLE, "escort-1")
        assert trip_uses(trip, ResourceType.VEHICLE, "carrier-1")
        assert not trip_uses(trip, ResourceType.DRIVER, "escort-1")

    def test_carrier_drivers(self):
        trip = make_trip(driver_id=None, assigned_driver_ids=["driver-2"])

        assert trip_uses(trip, ResourceType.DRIVER, "driver-2")
        assert not trip_uses(trip, ResourceType.VEHICLE, "driver-2")

    def test_missing_lists_are_empty(self):
        trip = make_trip(escort_vehicle_ids=None)

        assert not trip_uses(trip, ResourceType.VEHICLE, "escort-1")


class TestResourceAvailability:
    def test_no_trips_means_available(self):
        result = resource_availability("driver-1", ResourceType.DRIVER, [], now=datetime(2025, 3, 15, 9))

        assert result.is_available
        assert result.reason is None

    def test_upcoming_trip_today(self):
        result = resource_availability(
            "driver-1", ResourceType.DRIVER, [make_trip()], now=datetime(2025, 3, 15, 8, 0)
        )

        assert not result.is_available
        assert result.reason == "Scheduled for trip from 10:00 AM to 11:30 AM"
        assert result.available_at == datetime(2025, 3, 15, 11, 30)
        assert result.conflicting_trip_id == "trip-1"

    def test_on_trip_now(self):
        result = resource_availability(
            "vehicle-1", ResourceType.VEHICLE, [make_trip(service_type="full_day")], now=datetime(2025, 3, 15, 13, 0)
        )

        assert not result.is_available
        assert result.reason == "Currently on trip (until 06:00 PM)"

    def test_buffer_keeps_resource_busy_after_trip(self):
        result = resource_availability(
            "driver-1", ResourceType.DRIVER, [make_trip()], now=datetime(2025, 3, 15, 12, 0), buffer_hours=1
        )

        assert not result.is_available
        assert result.reason == "Unavailable until 12:30 PM"
        assert result.available_at == datetime(2025, 3, 15, 12, 30)

    def test_finished_trip_frees_resource(self):
        result = resource_availability(
            "driver-1", ResourceType.DRIVER, [make_trip()], now=datetime(2025, 3, 15, 11, 30)
        )

        assert result.is_available

    @pytest.mark.parametrize("status", ["cancelled", "completed"])
    def test_closed_trips_never_block(self, status):
        result = resource_availability(
            "driver-1", ResourceType.DRIVER, [make_trip(status=status)], now=datetime(2025, 3, 15, 10, 30)
        )

        assert result.is_available

    def test_future_dated_trips_do_not_block(self):
        result = resource_availability(
            "driver-1", ResourceType.DRIVER, [make_trip(day=date(2025, 3, 16))], now=datetime(2025, 3, 15, 10, 30)
        )

        assert result.is_available

    def test_carrier_driver_is_busy(self):
        trips = [make_trip(driver_id=None, assigned_driver_ids=["driver-2"])]

        result = resource_availability("driver-2", ResourceType.DRIVER, trips, now=datetime(2025, 3, 15, 10, 30))

        assert not result.is_available
        assert result.conflicting_trip_id == "trip-1"

    def test_other_resources_are_ignored(self):
        trips = [make_trip(driver_id="driver-2")]

        assert resource_availability("driver-1", ResourceType.DRIVER, trips, now=datetime(2025, 3, 15, 10, 30)).is_available
        assert not resource_availability(
            "vehicle-1", ResourceType.VEHICLE, trips, now=datetime(2025, 3, 15, 10, 30)
        ).is_available


class TestSlotAvailability:
    def test_free_slot(self):
        result = slot_availability("driver-1", ResourceType.DRIVER, DAY, "14:00", [make_trip()])

        assert result.is_available
        assert result.conflicts == []

    def test_overlapping_slot(self):
        result = slot_availability("driver-1", ResourceType.DRIVER, DAY, "11:00", [make_trip()])

        assert not result.is_available
        assert result.reason == "Conflicts with 1 existing trip(s)"
        assert result.conflicts == ["trip-1"]

    def test_slot_ending_inside_trip(self):
        result = slot_availability("driver-1", ResourceType.DRIVER, DAY, "08:30", [make_trip()], target_return_time="10:30")

        assert result.conflicts == ["trip-1"]

    def test_slot_covering_trip(self):
        result = slot_availability("driver-1", ResourceType.DRIVER, DAY, "09:00", [make_trip()], target_return_time="13:00")

        assert result.conflicts == ["trip-1"]

    def test_back_to_back_slot_is_free(self):
        result = slot_availability("driver-1", ResourceType.DRIVER, DAY, "08:00", [make_trip()])

        assert result.is_available

    def test_cancelled_excluded_and_other_days_are_skipped(self):
        trips = [
            make_trip("cancelled", status="cancelled"),
            make_trip("self"),
            make_trip("tomorrow", day=date(2025, 3, 16)),
        ]

        result = slot_availability("driver-1", ResourceType.DRIVER, DAY, "10:00", trips, exclude_trip_id="self")

        assert result.is_available

    def test_counts_every_conflict(self):
        trips = [make_trip("a"), make_trip("b", at="11:00")]

        result = slot_availability("vehicle-1", ResourceType.VEHICLE, DAY, "10:30", trips)

        assert result.conflicts == ["a", "b"]
        assert result.reason == "Conflicts with 2 existing trip(s)"

    def test_escort_vehicle_is_blocked(self):
        trips = [make_trip(escort_vehicle_ids=["escort-1"])]

        result = slot_availability("escort-1", ResourceType.VEHICLE, DAY, "11:00", trips)

        assert result.conflicts == ["trip-1"]
