"""Consumption calculator - derives a room's draw from its device states."""

from core.models import Room


def recompute(room: Room) -> float:
    """Refresh per-device draw, room power and active device count.

    Returns the room's instantaneous power in kW.
    """
    total_kw = 0.0
    active = 0
    for device in room.devices.values():
        if device.on:
            device.power_kw = device.type.power_kw
            total_kw += device.power_kw
            active += 1
        else:
            device.power_kw = 0.0

    room.power_kw = total_kw
    room.active_devices = active
    return total_kw
