"""Static facility data."""

from data.facility import ROOM_REGISTRY, RoomDefinition

__all__ = ["ROOM_REGISTRY", "RoomDefinition"]
