"""Tick orchestrator - advances all facility state once per interval."""

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import datetime

from analysis.hourly import HourlySeries
from analysis.statistics import compute_statistics
from core import automation
from core.automation import AutomationSettings, action_id
from core.catalog import DeviceKind
from core.consumption import recompute
from core.errors import InvariantViolation, UnknownRoomError
from core.models import Alert, GlobalTotals, Room, Statistics, build_devices
from core.snapshot import FacilitySnapshot, RoomView, room_view, settings_view, totals_view
from core.status import RoomFilter, build_alerts, classify_room
from data.facility import ROOM_REGISTRY, RoomDefinition
from simulation.config import DEFAULT, SimConfig
from simulation.random_source import RandomSource, SeededRandomSource

logger = logging.getLogger(__name__)


@dataclass
class FacilityState:
    """Everything the tick loop and toggle handler mutate."""

    rooms: dict[str, Room]  # registry order
    totals: GlobalTotals
    settings: AutomationSettings
    hourly: HourlySeries
    statistics: Statistics
    alerts: list[Alert] = field(default_factory=list)
    tick: int = 0
    updated_at: datetime = field(default_factory=datetime.now)


class TickOrchestrator:
    """Owns the facility state and runs each tick to completion.

    Per tick, in order:

    1. draw facility-wide power and water flow samples
    2. integrate them into the global totals (one tick = one minute)
    3. per room: recompute draw, integrate, drift temperature/occupancy,
       classify status, apply automation, recompute draw again
    4. rebuild alerts
    5. write the current hour's slot in the hourly series
    6. recompute statistics

    A failure in one room is logged and the remaining rooms still tick.
    """

    def __init__(
        self,
        registry: Iterable[RoomDefinition] = ROOM_REGISTRY,
        config: SimConfig = DEFAULT,
        source: RandomSource | None = None,
        settings: AutomationSettings | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.config = config
        self.source: RandomSource = source if source is not None else SeededRandomSource()
        self.clock = clock

        rooms: dict[str, Room] = {}
        for definition in registry:
            if definition.id in rooms:
                raise ValueError(f"Duplicate room id in registry: {definition.id}")
            rooms[definition.id] = self._build_room(definition)

        totals = GlobalTotals(tariff=config.tariff)
        hourly = HourlySeries.seeded(
            self.source,
            config.tariff,
            config.hourly_energy_seed_range_kwh,
            config.hourly_water_seed_range_l,
        )
        self.state = FacilityState(
            rooms=rooms,
            totals=totals,
            settings=settings if settings is not None else AutomationSettings(),
            hourly=hourly,
            statistics=compute_statistics(hourly, list(rooms.values()), totals),
            updated_at=clock(),
        )
        self._refresh_alerts()
        logger.info("Facility initialised with %d rooms", len(rooms))

    def _build_room(self, definition: RoomDefinition) -> Room:
        cfg = self.config
        room = Room(
            id=definition.id,
            name=definition.name,
            category=definition.category,
            capacity=definition.capacity,
            devices=build_devices(definition.devices),
            occupancy=definition.initial_occupancy,
            temperature=cfg.initial_temperature_c,
            energy_kwh=self.source.next_in_range(*cfg.initial_room_energy_range_kwh),
            water_l=self.source.next_in_range(*cfg.initial_room_water_range_l),
            tariff=cfg.tariff,
            efficiency=self.source.next_in_range(*cfg.initial_efficiency_range),
        )
        recompute(room)
        classify_room(room)
        return room

    @property
    def settings(self) -> AutomationSettings:
        return self.state.settings

    # ------------------------------------------------------------------
    # Tick
    # ------------------------------------------------------------------

    def tick(self, now: datetime | None = None) -> None:
        """Advance the facility by one tick."""
        now = now if now is not None else self.clock()
        cfg = self.config
        totals = self.state.totals

        totals.power_kw = self.source.next_in_range(*cfg.global_power_range_kw)
        totals.water_flow_lpm = self.source.next_in_range(*cfg.global_water_flow_range_lpm)
        totals.energy_kwh += self._increment(totals.power_kw / cfg.ticks_per_hour, "global energy")
        totals.water_l += self._increment(totals.water_flow_lpm / cfg.ticks_per_hour, "global water")

        for room in self.state.rooms.values():
            try:
                self._step_room(room, now)
            except InvariantViolation:
                raise
            except Exception:
                logger.exception("Room %s: tick %d failed, skipping room", room.id, self.state.tick)

        self._refresh_alerts()
        self.state.hourly.record(
            now.hour,
            totals.power_kw * cfg.hourly_energy_scale,
            totals.water_flow_lpm * cfg.hourly_water_scale,
        )
        self._refresh_statistics()

        self.state.tick += 1
        self.state.updated_at = now
        logger.debug(
            "Tick %d: power=%.1f kW water=%.1f L/min alerts=%d",
            self.state.tick,
            totals.power_kw,
            totals.water_flow_lpm,
            len(self.state.alerts),
        )

    def _step_room(self, room: Room, now: datetime) -> None:
        cfg = self.config
        self._guard_occupancy(room)

        # Automation sees the draw left by the previous tick's switches and toggles.
        recompute(room)
        room.energy_kwh += self._increment(room.power_kw / cfg.ticks_per_hour, f"room {room.id} energy")
        room.water_l += self._increment(
            self.source.next_in_range(*cfg.room_water_increment_range_l),
            f"room {room.id} water",
        )

        room.temperature = self.source.next_in_range(*cfg.temperature_range_c)
        step = self.source.next_int(-cfg.occupancy_step, cfg.occupancy_step)
        room.occupancy = max(0, min(room.capacity, room.occupancy + step))
        room.efficiency = min(100.0, self.source.next_in_range(*cfg.efficiency_range))

        classify_room(room)
        actions = automation.apply(room, self.state.settings, now, self.state.totals)
        room.last_actions = [action_id(action) for action in actions]
        recompute(room)

    # ------------------------------------------------------------------
    # Invariant guards
    # ------------------------------------------------------------------

    def _violation(self, message: str) -> None:
        if self.config.strict_invariants:
            raise InvariantViolation(message)
        logger.warning("Invariant violated, clamping: %s", message)

    def _increment(self, amount: float, what: str) -> float:
        """Cumulative totals only ever grow."""
        if not amount >= 0:
            self._violation(f"{what} increment {amount:.4f} is negative or NaN")
            return 0.0
        return amount

    def _guard_occupancy(self, room: Room) -> None:
        if 0 <= room.occupancy <= room.capacity:
            return
        self._violation(f"room {room.id} occupancy {room.occupancy} outside [0, {room.capacity}]")
        room.occupancy = max(0, min(room.capacity, room.occupancy))

    # ------------------------------------------------------------------
    # Derived state
    # ------------------------------------------------------------------

    def _refresh_alerts(self) -> None:
        self.state.alerts = build_alerts(self.state.totals, self.state.rooms.values())

    def _refresh_statistics(self) -> None:
        self.state.statistics = compute_statistics(
            self.state.hourly,
            list(self.state.rooms.values()),
            self.state.totals,
        )

    # ------------------------------------------------------------------
    # Commands and queries for the dashboard
    # ------------------------------------------------------------------

    def _room(self, room_id: str) -> Room:
        room = self.state.rooms.get(room_id)
        if room is None:
            raise UnknownRoomError(room_id)
        return room

    def toggle_device(self, room_id: str, device: DeviceKind | str) -> RoomView:
        """Flip one device and refresh the figures that depend on it.

        Raises ``UnknownRoomError`` / ``UnknownDeviceError`` for ids that do
        not exist; nothing is changed in that case.
        """
        room = self._room(room_id)
        target = room.device(device)
        target.on = not target.on

        recompute(room)
        classify_room(room)
        self._refresh_alerts()
        self._refresh_statistics()
        self.state.updated_at = self.clock()

        logger.info("Room %s: %s switched %s", room.id, target.type.kind, "on" if target.on else "off")
        return room_view(room)

    def room(self, room_id: str) -> RoomView:
        return room_view(self._room(room_id))

    def snapshot(self, room_filter: RoomFilter = RoomFilter.ALL) -> FacilitySnapshot:
        state = self.state
        snapshot = FacilitySnapshot(
            tick=state.tick,
            taken_at=state.updated_at.isoformat(),
            totals=totals_view(state.totals),
            rooms=tuple(room_view(room) for room in state.rooms.values()),
            alerts=tuple(state.alerts),
            hourly=tuple(state.hourly.slots()),
            statistics=state.statistics,
            settings=settings_view(state.settings),
        )
        return snapshot.filtered(room_filter)
