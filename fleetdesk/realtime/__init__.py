"""Realtime change fan-out for live dashboards."""

from .manager import ChangeEvent, ChangeType, RealtimeManager, get_realtime_manager, realtime_manager

__all__ = ["ChangeEvent", "ChangeType", "RealtimeManager", "get_realtime_manager", "realtime_manager"]
