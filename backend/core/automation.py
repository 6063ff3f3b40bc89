"""Automation rule engine - time and occupancy policies for room devices.

Rules are evaluated per room in a fixed order, and later rules may override
earlier ones within the same evaluation:

1. Time rule - at or after the lights-off time, lights go off. Never turns
   anything on.
2. Occupancy-off rule - empty room with occupancy control enabled: lights,
   fan and AC go off together. If any of them was on, the combined nominal
   draw of the three is credited to the energy-saved counter as one minute
   of avoided consumption.
3. Occupancy-on rule - occupied room with occupancy control enabled: lights
   on only while still before the lights-off time (rule 1 wins otherwise),
   fan on, AC driven by the temperature band.

The AC band has a dead zone between ``target`` and ``target + tolerance``
where the AC is left as it is.
"""

import logging
import re
from dataclasses import dataclass
from datetime import datetime, time
from enum import StrEnum

from core.catalog import COMFORT_DEVICES, DeviceKind
from core.errors import ConfigurationError
from core.models import GlobalTotals, Room

logger = logging.getLogger(__name__)

_LIGHTS_OFF_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})$")
_MINUTES_PER_HOUR = 60


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


def parse_lights_off_time(value: str) -> time:
    """Parse ``HH:MM`` with hour 0-23 and minute 0-59."""
    if not isinstance(value, str):
        raise ConfigurationError(f"Lights-off time must be a string 'HH:MM', got {type(value).__name__}")
    parsed = _LIGHTS_OFF_PATTERN.match(value.strip())
    if parsed is None:
        raise ConfigurationError(f"Lights-off time must look like 'HH:MM', got {value!r}")
    hour, minute = int(parsed.group(1)), int(parsed.group(2))
    if not 0 <= hour <= 23:
        raise ConfigurationError(f"Lights-off hour must be 0-23, got {hour}")
    if not 0 <= minute <= 59:
        raise ConfigurationError(f"Lights-off minute must be 0-59, got {minute}")
    return time(hour, minute)


def _require_int(name: str, value: object) -> int:
    # bool is an int subclass; "true" is not a temperature.
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"{name} must be an integer, got {value!r}")
    return value


def _require_bool(name: str, value: object) -> bool:
    if not isinstance(value, bool):
        raise ConfigurationError(f"{name} must be true or false, got {value!r}")
    return value


@dataclass
class AutomationSettings:
    """Process-wide automation policy. Read-only to the rule engine."""

    lights_off_time: time = time(22, 0)
    occupancy_control: bool = True
    target_temp_c: int = 24
    tolerance_c: int = 0

    @property
    def lights_off_label(self) -> str:
        return self.lights_off_time.strftime("%H:%M")

    def update(
        self,
        *,
        lights_off_time: str | None = None,
        occupancy_control: bool | None = None,
        target_temp_c: int | None = None,
        tolerance_c: int | None = None,
    ) -> None:
        """Validate every given field, then apply them all.

        Raises ``ConfigurationError`` without changing anything if any field
        is invalid.
        """
        changes: dict[str, object] = {}
        if lights_off_time is not None:
            changes["lights_off_time"] = parse_lights_off_time(lights_off_time)
        if occupancy_control is not None:
            changes["occupancy_control"] = _require_bool("Occupancy control", occupancy_control)
        if target_temp_c is not None:
            changes["target_temp_c"] = _require_int("Target temperature", target_temp_c)
        if tolerance_c is not None:
            tolerance = _require_int("Temperature tolerance", tolerance_c)
            if tolerance < 0:
                raise ConfigurationError(f"Temperature tolerance must be non-negative, got {tolerance}")
            changes["tolerance_c"] = tolerance

        for name, value in changes.items():
            setattr(self, name, value)
        if changes:
            logger.info(
                "Automation settings updated: lights_off=%s occupancy_control=%s target=%d°C tolerance=%d°C",
                self.lights_off_label,
                self.occupancy_control,
                self.target_temp_c,
                self.tolerance_c,
            )

    def set_lights_off_time(self, value: str) -> None:
        self.update(lights_off_time=value)

    def set_occupancy_control(self, enabled: bool) -> None:
        self.update(occupancy_control=enabled)

    def set_target_temperature(self, value: int) -> None:
        self.update(target_temp_c=value)

    def set_tolerance(self, value: int) -> None:
        self.update(tolerance_c=value)


# ---------------------------------------------------------------------------
# Action variants
# ---------------------------------------------------------------------------


class AutomationRule(StrEnum):
    TIME = "time"
    OCCUPANCY_OFF = "occupancy_off"
    OCCUPANCY_ON = "occupancy_on"


@dataclass
class SwitchOn:
    """A rule turned a device on."""

    room_id: str
    device: DeviceKind
    rule: AutomationRule


@dataclass
class SwitchOff:
    """A rule turned a device off."""

    room_id: str
    device: DeviceKind
    rule: AutomationRule


type Action = SwitchOn | SwitchOff


def action_id(action: Action) -> str:
    """Stable string identifier for serialisation / API responses."""
    match action:
        case SwitchOn(device=device):
            return f"{device}_on"
        case SwitchOff(device=device):
            return f"{device}_off"


# ---------------------------------------------------------------------------
# Rule evaluation
# ---------------------------------------------------------------------------


def _switch(room: Room, kind: DeviceKind, on: bool, rule: AutomationRule, actions: list[Action]) -> None:
    device = room.devices.get(kind)
    if device is None or device.on == on:
        return
    device.on = on
    actions.append(SwitchOn(room.id, kind, rule) if on else SwitchOff(room.id, kind, rule))


def _apply_time_rule(room: Room, after_lights_off: bool, actions: list[Action]) -> None:
    if after_lights_off:
        _switch(room, DeviceKind.LIGHTS, False, AutomationRule.TIME, actions)


def _apply_occupancy_off_rule(room: Room, totals: GlobalTotals, actions: list[Action]) -> None:
    any_on = any(room.is_on(kind) for kind in COMFORT_DEVICES)
    for kind in COMFORT_DEVICES:
        _switch(room, kind, False, AutomationRule.OCCUPANCY_OFF, actions)
    if any_on:
        saved_kw = sum(room.devices[kind].type.power_kw for kind in COMFORT_DEVICES if kind in room.devices)
        totals.energy_saved_kwh += saved_kw / _MINUTES_PER_HOUR


def _apply_occupancy_on_rule(
    room: Room,
    settings: AutomationSettings,
    after_lights_off: bool,
    actions: list[Action],
) -> None:
    rule = AutomationRule.OCCUPANCY_ON
    if not after_lights_off:
        _switch(room, DeviceKind.LIGHTS, True, rule, actions)
    _switch(room, DeviceKind.FAN, True, rule, actions)

    if room.temperature > settings.target_temp_c + settings.tolerance_c:
        _switch(room, DeviceKind.AC, True, rule, actions)
    elif room.temperature < settings.target_temp_c:
        _switch(room, DeviceKind.AC, False, rule, actions)


def apply(room: Room, settings: AutomationSettings, now: datetime, totals: GlobalTotals) -> list[Action]:
    """Evaluate all rules for one room and return the switches made."""
    actions: list[Action] = []
    after_lights_off = now.time() >= settings.lights_off_time

    _apply_time_rule(room, after_lights_off, actions)

    if settings.occupancy_control:
        if room.occupancy == 0:
            _apply_occupancy_off_rule(room, totals, actions)
        else:
            _apply_occupancy_on_rule(room, settings, after_lights_off, actions)

    for action in actions:
        logger.debug("Room %s: %s (%s rule)", room.id, action_id(action), action.rule)
    return actions
