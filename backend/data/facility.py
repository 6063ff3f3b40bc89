"""Campus room registry - the fixed set of monitored rooms."""

from dataclasses import dataclass

from core.catalog import DeviceKind
from core.models import RoomCategory

_STANDARD_DEVICES = (DeviceKind.LIGHTS, DeviceKind.FAN, DeviceKind.AC)
_PUMPED_DEVICES = (*_STANDARD_DEVICES, DeviceKind.MOTOR)


@dataclass(frozen=True)
class RoomDefinition:
    id: str
    name: str
    category: RoomCategory
    capacity: int
    initial_occupancy: int
    devices: tuple[DeviceKind, ...] = _STANDARD_DEVICES


ROOM_REGISTRY: tuple[RoomDefinition, ...] = (
    RoomDefinition("r-01", "Classroom A", RoomCategory.CLASSROOM, capacity=30, initial_occupancy=25),
    RoomDefinition("r-02", "Classroom B", RoomCategory.CLASSROOM, capacity=28, initial_occupancy=20),
    RoomDefinition("r-03", "Computer Lab", RoomCategory.LAB, capacity=35, initial_occupancy=32),
    RoomDefinition("r-04", "Library", RoomCategory.LIBRARY, capacity=25, initial_occupancy=12),
    RoomDefinition(
        "r-05", "Hostel Block A", RoomCategory.HOSTEL, capacity=50, initial_occupancy=45, devices=_PUMPED_DEVICES
    ),
    RoomDefinition(
        "r-06", "Hostel Block B", RoomCategory.HOSTEL, capacity=45, initial_occupancy=40, devices=_PUMPED_DEVICES
    ),
    RoomDefinition(
        "r-07", "Cafeteria", RoomCategory.COMMON, capacity=60, initial_occupancy=35, devices=_PUMPED_DEVICES
    ),
    RoomDefinition("r-08", "Office Wing", RoomCategory.OFFICE, capacity=20, initial_occupancy=18),
)
