"""Core domain: rooms, devices, automation rules, status and alerts."""

from core.automation import AutomationSettings, apply
from core.catalog import DEVICE_CATALOG, DeviceKind, DeviceType, device_type
from core.consumption import recompute
from core.errors import (
    ConfigurationError,
    EnergyMonitorError,
    InvariantViolation,
    UnknownDeviceError,
    UnknownRoomError,
)
from core.models import (
    Alert,
    AlertSeverity,
    Device,
    GlobalTotals,
    HourlySlot,
    Room,
    RoomCategory,
    RoomStatus,
    Statistics,
    Tariff,
)
from core.snapshot import FacilitySnapshot, RoomView, SettingsView, settings_view
from core.status import RoomFilter, build_alerts, classify

__all__ = [
    "DEVICE_CATALOG",
    "Alert",
    "AlertSeverity",
    "AutomationSettings",
    "ConfigurationError",
    "Device",
    "DeviceKind",
    "DeviceType",
    "EnergyMonitorError",
    "FacilitySnapshot",
    "GlobalTotals",
    "HourlySlot",
    "InvariantViolation",
    "Room",
    "RoomCategory",
    "RoomFilter",
    "RoomStatus",
    "RoomView",
    "SettingsView",
    "Statistics",
    "Tariff",
    "UnknownDeviceError",
    "UnknownRoomError",
    "apply",
    "build_alerts",
    "classify",
    "device_type",
    "recompute",
    "settings_view",
]
