"""Core data models for the campus energy monitor."""

from dataclasses import dataclass, field
from enum import StrEnum

from core.catalog import DeviceKind, DeviceType, device_type, parse_device_kind
from core.errors import UnknownDeviceError


class RoomCategory(StrEnum):
    CLASSROOM = "classroom"
    LAB = "lab"
    LIBRARY = "library"
    HOSTEL = "hostel"
    COMMON = "common"
    OFFICE = "office"


class RoomStatus(StrEnum):
    NORMAL = "normal"
    WARNING = "warning"
    DANGER = "danger"


class AlertSeverity(StrEnum):
    INFO = "info"
    WARNING = "warning"
    DANGER = "danger"


@dataclass(frozen=True)
class Tariff:
    """Fixed unit rates used to derive cost and CO2 from cumulative totals."""

    energy_per_kwh: float = 7.0  # ₹ per kWh
    water_per_litre: float = 0.05  # ₹ per litre
    co2_kg_per_kwh: float = 0.82

    def cost(self, energy_kwh: float, water_l: float) -> float:
        return energy_kwh * self.energy_per_kwh + water_l * self.water_per_litre


@dataclass
class Device:
    type: DeviceType
    on: bool = True
    power_kw: float = 0.0  # Current draw, maintained by the consumption calculator


def build_devices(kinds: tuple[DeviceKind, ...], on: bool = True) -> dict[DeviceKind, Device]:
    """Create a fresh device map, one device per catalog kind."""
    return {kind: Device(type=device_type(kind), on=on) for kind in kinds}


@dataclass
class Room:
    """Live state of one room.

    The device map is fixed at construction; automation and toggles only
    flip ``on``. Cost is derived from the cumulative totals on every read.
    """

    id: str
    name: str
    category: RoomCategory
    capacity: int
    devices: dict[DeviceKind, Device]
    occupancy: int = 0
    temperature: float = 25.0  # °C
    energy_kwh: float = 0.0
    water_l: float = 0.0
    tariff: Tariff = field(default_factory=Tariff)
    status: RoomStatus = RoomStatus.NORMAL
    efficiency: float = 100.0
    power_kw: float = 0.0
    active_devices: int = 0
    last_actions: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.capacity < 0:
            raise ValueError(f"Room {self.id}: capacity must be non-negative, got {self.capacity}")
        if not 0 <= self.occupancy <= self.capacity:
            raise ValueError(f"Room {self.id}: occupancy {self.occupancy} outside [0, {self.capacity}]")

        devices: dict[DeviceKind, Device] = {}
        for key, device in self.devices.items():
            kind = parse_device_kind(key)
            if device.type.kind != kind:
                raise ValueError(f"Room {self.id}: device under '{kind}' is a '{device.type.kind}'")
            devices[kind] = device
        self.devices = devices

    @property
    def cost(self) -> float:
        return self.tariff.cost(self.energy_kwh, self.water_l)

    @property
    def energy_per_occupant(self) -> float:
        return self.energy_kwh / max(1, self.occupancy)

    def device(self, kind: DeviceKind | str) -> Device:
        """Look up one of this room's devices."""
        try:
            return self.devices[parse_device_kind(kind)]
        except (KeyError, UnknownDeviceError):
            raise UnknownDeviceError(str(kind), room_id=self.id) from None

    def is_on(self, kind: DeviceKind) -> bool:
        device = self.devices.get(kind)
        return device is not None and device.on


@dataclass
class GlobalTotals:
    """Facility-wide running totals. Cost and CO2 are always derived."""

    tariff: Tariff = field(default_factory=Tariff)
    energy_kwh: float = 0.0
    water_l: float = 0.0
    power_kw: float = 0.0
    water_flow_lpm: float = 0.0
    energy_saved_kwh: float = 0.0

    @property
    def cost(self) -> float:
        return self.tariff.cost(self.energy_kwh, self.water_l)

    @property
    def co2_kg(self) -> float:
        return self.energy_kwh * self.tariff.co2_kg_per_kwh


@dataclass(frozen=True)
class Alert:
    severity: AlertSeverity
    icon: str
    message: str
    room_id: str | None = None


@dataclass(frozen=True)
class HourlySlot:
    hour: int
    energy_kwh: float
    water_l: float
    cost: float


@dataclass(frozen=True)
class Statistics:
    peak_hour: int
    low_hour: int
    active_devices: int
    total_devices: int
    energy_saved_kwh: float
    cost_rate_per_hour: float
    average_efficiency: float
