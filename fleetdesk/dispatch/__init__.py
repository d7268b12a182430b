"""Dispatch rules: when drivers and vehicles are free to take a trip."""

from .availability import (
    ResourceAvailability,
    ResourceType,
    SlotAvailability,
    expected_trip_end,
    resource_availability,
    slot_availability,
    trip_uses,
)

__all__ = [
    "ResourceAvailability",
    "ResourceType",
    "SlotAvailability",
    "expected_trip_end",
    "resource_availability",
    "slot_availability",
    "trip_uses",
]
