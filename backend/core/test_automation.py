"""Automation rule engine and its settings."""

from datetime import datetime, time

import pytest

from core.automation import AutomationRule, AutomationSettings, SwitchOff, SwitchOn, action_id, apply
from core.catalog import DEVICE_CATALOG, DeviceKind
from core.errors import ConfigurationError
from core.models import GlobalTotals, Room, RoomCategory, build_devices

_DAYTIME = datetime(2025, 3, 10, 14, 30)
_NIGHT = datetime(2025, 3, 10, 22, 15)


def _room(occupancy: int, temperature: float = 26.0, on: bool = True, pump: bool = False) -> Room:
    kinds = (DeviceKind.LIGHTS, DeviceKind.FAN, DeviceKind.AC)
    if pump:
        kinds = (*kinds, DeviceKind.MOTOR)
    return Room(
        id="r-a",
        name="Lecture Hall",
        category=RoomCategory.CLASSROOM,
        capacity=40,
        devices=build_devices(kinds, on=on),
        occupancy=occupancy,
        temperature=temperature,
    )


def _on(room: Room) -> dict[DeviceKind, bool]:
    return {kind: device.on for kind, device in room.devices.items()}


# ---------------------------------------------------------------------------
# Occupancy-off rule
# ---------------------------------------------------------------------------


def test_empty_room_switches_comfort_devices_off_and_credits_savings() -> None:
    room = _room(occupancy=0)
    totals = GlobalTotals(energy_saved_kwh=1.0)

    actions = apply(room, AutomationSettings(), _DAYTIME, totals)

    assert _on(room) == {DeviceKind.LIGHTS: False, DeviceKind.FAN: False, DeviceKind.AC: False}
    lights, fan, ac = (DEVICE_CATALOG[k].power_kw for k in (DeviceKind.LIGHTS, DeviceKind.FAN, DeviceKind.AC))
    assert totals.energy_saved_kwh == 1.0 + (lights + fan + ac) / 60
    assert [action_id(a) for a in actions] == ["lights_off", "fan_off", "ac_off"]
    assert all(a.rule == AutomationRule.OCCUPANCY_OFF for a in actions)


def test_empty_room_already_off_saves_nothing() -> None:
    room = _room(occupancy=0, on=False)
    totals = GlobalTotals()

    assert apply(room, AutomationSettings(), _DAYTIME, totals) == []
    assert totals.energy_saved_kwh == 0.0


def test_one_device_on_still_credits_all_three() -> None:
    room = _room(occupancy=0, on=False)
    room.devices[DeviceKind.FAN].on = True
    totals = GlobalTotals()

    apply(room, AutomationSettings(), _DAYTIME, totals)

    assert totals.energy_saved_kwh == pytest.approx((0.06 + 0.08 + 1.2) / 60)


def test_pump_is_not_touched_by_occupancy_rules() -> None:
    room = _room(occupancy=0, pump=True)
    apply(room, AutomationSettings(), _DAYTIME, GlobalTotals())
    assert room.devices[DeviceKind.MOTOR].on is True


def test_occupancy_control_disabled_leaves_empty_room_alone() -> None:
    room = _room(occupancy=0)
    settings = AutomationSettings(occupancy_control=False)
    totals = GlobalTotals()

    assert apply(room, settings, _DAYTIME, totals) == []
    assert all(_on(room).values())
    assert totals.energy_saved_kwh == 0.0


# ---------------------------------------------------------------------------
# Time rule and precedence
# ---------------------------------------------------------------------------


def test_lights_go_off_at_lights_off_time() -> None:
    room = _room(occupancy=0)
    settings = AutomationSettings(occupancy_control=False)

    actions = apply(room, settings, datetime(2025, 3, 10, 22, 0), GlobalTotals())

    assert room.devices[DeviceKind.LIGHTS].on is False
    assert actions == [SwitchOff("r-a", DeviceKind.LIGHTS, AutomationRule.TIME)]


def test_time_rule_never_turns_lights_on() -> None:
    room = _room(occupancy=5, on=False)
    settings = AutomationSettings(occupancy_control=False)

    assert apply(room, settings, _DAYTIME, GlobalTotals()) == []
    assert room.devices[DeviceKind.LIGHTS].on is False


def test_occupied_room_after_lights_off_keeps_lights_off() -> None:
    room = _room(occupancy=12)

    apply(room, AutomationSettings(), _NIGHT, GlobalTotals())

    assert room.devices[DeviceKind.LIGHTS].on is False
    assert room.devices[DeviceKind.FAN].on is True


def test_occupied_room_before_lights_off_switches_lights_on() -> None:
    room = _room(occupancy=12, on=False)
    settings = AutomationSettings(lights_off_time=time(22, 45))

    actions = apply(room, settings, datetime(2025, 3, 10, 22, 30), GlobalTotals())

    assert SwitchOn("r-a", DeviceKind.LIGHTS, AutomationRule.OCCUPANCY_ON) in actions
    assert room.devices[DeviceKind.LIGHTS].on is True


# ---------------------------------------------------------------------------
# AC temperature band
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    ("temperature", "ac_before", "ac_after"),
    [
        (27.5, False, True),  # above target + tolerance
        (22.0, True, False),  # below target
        (24.0, True, True),  # inside the band: unchanged
        (24.0, False, False),
        (25.5, False, False),
        (26.0, True, True),  # exactly target + tolerance does not switch
    ],
)
def test_ac_follows_temperature_band(temperature: float, ac_before: bool, ac_after: bool) -> None:
    room = _room(occupancy=3, temperature=temperature)
    room.devices[DeviceKind.AC].on = ac_before
    settings = AutomationSettings(target_temp_c=24, tolerance_c=2)

    apply(room, settings, _DAYTIME, GlobalTotals())

    assert room.devices[DeviceKind.AC].on is ac_after


def test_fan_is_switched_on_for_occupied_room() -> None:
    room = _room(occupancy=1, temperature=20.0, on=False)
    actions = apply(room, AutomationSettings(), _DAYTIME, GlobalTotals())
    assert [action_id(a) for a in actions] == ["lights_on", "fan_on"]


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


def test_settings_defaults() -> None:
    settings = AutomationSettings()
    assert settings.lights_off_label == "22:00"
    assert settings.occupancy_control is True
    assert settings.target_temp_c == 24
    assert settings.tolerance_c == 0


def test_settings_setters_accept_valid_values() -> None:
    settings = AutomationSettings()
    settings.set_lights_off_time("7:05")
    settings.set_occupancy_control(False)
    settings.set_target_temperature(26)
    settings.set_tolerance(1)

    assert settings.lights_off_time == time(7, 5)
    assert settings.lights_off_label == "07:05"
    assert settings.occupancy_control is False
    assert settings.target_temp_c == 26
    assert settings.tolerance_c == 1


@pytest.mark.parametrize("value", ["24:00", "12:60", "noon", "12", "", "1230"])
def test_malformed_lights_off_time_is_rejected(value: str) -> None:
    with pytest.raises(ConfigurationError):
        AutomationSettings().set_lights_off_time(value)


@pytest.mark.parametrize("value", [24.5, "24", True])
def test_non_integer_temperature_is_rejected(value: object) -> None:
    settings = AutomationSettings()
    with pytest.raises(ConfigurationError, match="integer"):
        settings.set_target_temperature(value)  # type: ignore[arg-type]
    assert settings.target_temp_c == 24


def test_negative_tolerance_is_rejected() -> None:
    with pytest.raises(ConfigurationError, match="non-negative"):
        AutomationSettings().set_tolerance(-1)


def test_occupancy_control_requires_bool() -> None:
    with pytest.raises(ConfigurationError):
        AutomationSettings().set_occupancy_control("yes")  # type: ignore[arg-type]


def test_update_changes_nothing_when_any_field_is_invalid() -> None:
    settings = AutomationSettings()
    with pytest.raises(ConfigurationError):
        settings.update(lights_off_time="21:00", tolerance_c=-3)
    assert settings == AutomationSettings()
