"""Status classifier and alert generator."""

from collections.abc import Iterable
from enum import StrEnum

from core.models import Alert, AlertSeverity, GlobalTotals, Room, RoomStatus

_DANGER_ENERGY_PER_OCCUPANT_KWH = 5.0
_DANGER_POWER_KW = 7.0
_WARNING_ENERGY_PER_OCCUPANT_KWH = 3.0
_WARNING_POWER_KW = 5.0

_GLOBAL_POWER_ALERT_KW = 100.0
_GLOBAL_WATER_ALERT_LPM = 15.0


def classify(energy_per_occupant: float, power_kw: float) -> RoomStatus:
    """Danger is checked before warning; the first matching tier wins."""
    if energy_per_occupant > _DANGER_ENERGY_PER_OCCUPANT_KWH or power_kw > _DANGER_POWER_KW:
        return RoomStatus.DANGER
    if energy_per_occupant > _WARNING_ENERGY_PER_OCCUPANT_KWH or power_kw > _WARNING_POWER_KW:
        return RoomStatus.WARNING
    return RoomStatus.NORMAL


def classify_room(room: Room) -> RoomStatus:
    room.status = classify(room.energy_per_occupant, room.power_kw)
    return room.status


def build_alerts(totals: GlobalTotals, rooms: Iterable[Room]) -> list[Alert]:
    """Rebuild the alert list from current state.

    Order: global power, global water, then one alert per room in danger.
    """
    alerts: list[Alert] = []

    if totals.power_kw > _GLOBAL_POWER_ALERT_KW:
        alerts.append(
            Alert(
                severity=AlertSeverity.DANGER,
                icon="⚠️",
                message=f"High Power: {totals.power_kw:.1f} kW",
            )
        )

    if totals.water_flow_lpm > _GLOBAL_WATER_ALERT_LPM:
        alerts.append(
            Alert(
                severity=AlertSeverity.WARNING,
                icon="💧",
                message=f"High Water Flow: {totals.water_flow_lpm:.1f} L/min",
            )
        )

    for room in rooms:
        if room.status == RoomStatus.DANGER:
            alerts.append(
                Alert(
                    severity=AlertSeverity.DANGER,
                    icon="🏢",
                    message=f"High usage in {room.name}: {room.energy_kwh:.1f} kWh",
                    room_id=room.id,
                )
            )

    return alerts


class RoomFilter(StrEnum):
    ALL = "all"
    HIGH = "high"  # danger only
    WARNING = "warning"  # warning or danger


def matches_filter(status: RoomStatus, room_filter: RoomFilter) -> bool:
    match room_filter:
        case RoomFilter.ALL:
            return True
        case RoomFilter.HIGH:
            return status == RoomStatus.DANGER
        case RoomFilter.WARNING:
            return status in {RoomStatus.WARNING, RoomStatus.DANGER}
