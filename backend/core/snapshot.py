"""Read-only snapshot views handed to the dashboard."""

import dataclasses
from dataclasses import dataclass
from typing import Self

from core.automation import AutomationSettings
from core.catalog import DeviceKind
from core.models import Alert, GlobalTotals, HourlySlot, Room, RoomCategory, RoomStatus, Statistics
from core.status import RoomFilter, matches_filter


@dataclass(frozen=True)
class DeviceView:
    kind: DeviceKind
    name: str
    icon: str
    on: bool
    power_kw: float


@dataclass(frozen=True)
class RoomView:
    id: str
    name: str
    category: RoomCategory
    capacity: int
    occupancy: int
    temperature: float
    power_kw: float
    energy_kwh: float
    water_l: float
    cost: float
    energy_per_occupant: float
    status: RoomStatus
    efficiency: float
    active_devices: int
    device_count: int
    devices: tuple[DeviceView, ...]
    last_actions: tuple[str, ...]


@dataclass(frozen=True)
class TotalsView:
    energy_kwh: float
    water_l: float
    cost: float
    co2_kg: float
    power_kw: float
    water_flow_lpm: float
    energy_saved_kwh: float


@dataclass(frozen=True)
class SettingsView:
    lights_off_time: str
    occupancy_control: bool
    target_temp_c: int
    tolerance_c: int


@dataclass(frozen=True)
class FacilitySnapshot:
    tick: int
    taken_at: str  # ISO timestamp of the last state change
    totals: TotalsView
    rooms: tuple[RoomView, ...]
    alerts: tuple[Alert, ...]
    hourly: tuple[HourlySlot, ...]
    statistics: Statistics
    settings: SettingsView

    def filtered(self, room_filter: RoomFilter) -> Self:
        """Same snapshot with only the rooms matching ``room_filter``."""
        rooms = tuple(room for room in self.rooms if matches_filter(room.status, room_filter))
        return dataclasses.replace(self, rooms=rooms)


def room_view(room: Room) -> RoomView:
    return RoomView(
        id=room.id,
        name=room.name,
        category=room.category,
        capacity=room.capacity,
        occupancy=room.occupancy,
        temperature=room.temperature,
        power_kw=room.power_kw,
        energy_kwh=room.energy_kwh,
        water_l=room.water_l,
        cost=room.cost,
        energy_per_occupant=room.energy_per_occupant,
        status=room.status,
        efficiency=room.efficiency,
        active_devices=room.active_devices,
        device_count=len(room.devices),
        devices=tuple(
            DeviceView(
                kind=kind,
                name=device.type.name,
                icon=device.type.icon,
                on=device.on,
                power_kw=device.power_kw,
            )
            for kind, device in room.devices.items()
        ),
        last_actions=tuple(room.last_actions),
    )


def totals_view(totals: GlobalTotals) -> TotalsView:
    return TotalsView(
        energy_kwh=totals.energy_kwh,
        water_l=totals.water_l,
        cost=totals.cost,
        co2_kg=totals.co2_kg,
        power_kw=totals.power_kw,
        water_flow_lpm=totals.water_flow_lpm,
        energy_saved_kwh=totals.energy_saved_kwh,
    )


def settings_view(settings: AutomationSettings) -> SettingsView:
    return SettingsView(
        lights_off_time=settings.lights_off_label,
        occupancy_control=settings.occupancy_control,
        target_temp_c=settings.target_temp_c,
        tolerance_c=settings.tolerance_c,
    )
