"""Error types raised by the room/device core."""


class EnergyMonitorError(Exception):
    """Base class for every error the core raises on purpose."""


class ConfigurationError(EnergyMonitorError, ValueError):
    """Automation settings input was rejected."""


class UnknownRoomError(EnergyMonitorError, LookupError):
    def __init__(self, room_id: str) -> None:
        super().__init__(f"Unknown room: {room_id}")
        self.room_id = room_id


class UnknownDeviceError(EnergyMonitorError, LookupError):
    def __init__(self, device: str, room_id: str | None = None) -> None:
        where = f" in room {room_id}" if room_id is not None else ""
        super().__init__(f"Unknown device: {device}{where}")
        self.device = device
        self.room_id = room_id


class InvariantViolation(EnergyMonitorError, RuntimeError):
    """Room or facility state left its valid range."""
