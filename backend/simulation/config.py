"""Centralised simulation tunables.

Every magic number that drives the tick loop lives here.
Create a custom ``SimConfig`` to tweak values for testing::

    cfg = SimConfig(strict_invariants=True, global_power_range_kw=(50.0, 50.0))
    orchestrator = TickOrchestrator(ROOM_REGISTRY, config=cfg)
"""

from dataclasses import dataclass, field

from core.models import Tariff


@dataclass(frozen=True)
class SimConfig:
    """All simulation tunables, grouped by category."""

    # --- Tick timing ---
    tick_interval_s: float = 5.0  # wall clock between ticks
    ticks_per_hour: float = 60.0  # one tick integrates one minute of consumption

    # --- Rates ---
    tariff: Tariff = field(default_factory=Tariff)

    # --- Facility-wide sensor stand-ins ---
    global_power_range_kw: tuple[float, float] = (40.0, 120.0)
    global_water_flow_range_lpm: tuple[float, float] = (5.0, 20.0)

    # --- Per-room drift ---
    room_water_increment_range_l: tuple[float, float] = (0.0, 2.0)
    temperature_range_c: tuple[float, float] = (24.0, 28.0)  # baseline 24 °C + up to 4 °C
    occupancy_step: int = 2  # random walk moves by at most this many people per tick
    efficiency_range: tuple[float, float] = (50.0, 100.0)

    # --- Seed values at startup ---
    initial_room_energy_range_kwh: tuple[float, float] = (50.0, 250.0)
    initial_room_water_range_l: tuple[float, float] = (200.0, 1200.0)
    initial_efficiency_range: tuple[float, float] = (70.0, 100.0)
    initial_temperature_c: float = 25.0
    hourly_energy_seed_range_kwh: tuple[float, float] = (30.0, 80.0)
    hourly_water_seed_range_l: tuple[float, float] = (300.0, 1200.0)

    # --- Hourly series estimate from instantaneous readings ---
    hourly_energy_scale: float = 0.6  # kWh written per kW of current draw
    hourly_water_scale: float = 60.0  # L per hour from L/min

    # --- Invariant handling ---
    # True: broken invariants raise InvariantViolation. False: log and clamp.
    strict_invariants: bool = False


DEFAULT = SimConfig()
