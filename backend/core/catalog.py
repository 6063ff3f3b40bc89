"""Device catalog - static device types and their nominal draw."""

from dataclasses import dataclass
from enum import StrEnum

from core.errors import UnknownDeviceError


class DeviceKind(StrEnum):
    LIGHTS = "lights"
    FAN = "fan"
    AC = "ac"
    MOTOR = "motor"


@dataclass(frozen=True)
class DeviceType:
    kind: DeviceKind
    name: str
    icon: str
    power_kw: float  # nominal draw when on; the pump motor is a kW-equivalent load


DEVICE_CATALOG: dict[DeviceKind, DeviceType] = {
    DeviceKind.LIGHTS: DeviceType(DeviceKind.LIGHTS, "Lights", "💡", 0.06),
    DeviceKind.FAN: DeviceType(DeviceKind.FAN, "Fan", "💨", 0.08),
    DeviceKind.AC: DeviceType(DeviceKind.AC, "AC", "❄️", 1.2),
    DeviceKind.MOTOR: DeviceType(DeviceKind.MOTOR, "Water Pump", "🚰", 0.75),
}

# Devices the occupancy rules switch together; the pump is left alone.
COMFORT_DEVICES: tuple[DeviceKind, ...] = (DeviceKind.LIGHTS, DeviceKind.FAN, DeviceKind.AC)


def parse_device_kind(value: str) -> DeviceKind:
    """Resolve a device id string, rejecting anything outside the catalog."""
    try:
        return DeviceKind(value)
    except ValueError:
        raise UnknownDeviceError(value) from None


def device_type(kind: DeviceKind | str) -> DeviceType:
    if not isinstance(kind, DeviceKind):
        kind = parse_device_kind(kind)
    return DEVICE_CATALOG[kind]
