"""Hourly series buffer - one energy/water reading per hour of day."""

from typing import TYPE_CHECKING, Self

import numpy as np
from numpy.typing import NDArray

from core.models import HourlySlot, Tariff

if TYPE_CHECKING:
    from simulation.random_source import RandomSource

HOURS_PER_DAY = 24


class HourlySeries:
    """24 fixed slots keyed by hour of day.

    Only the slot for the hour being written changes; every other slot keeps
    its seed or last written value. This is a rolling "today so far" view,
    not a history log.
    """

    def __init__(self, energy: NDArray[np.float64], water: NDArray[np.float64], tariff: Tariff) -> None:
        if energy.shape != (HOURS_PER_DAY,) or water.shape != (HOURS_PER_DAY,):
            raise ValueError(f"Hourly series needs {HOURS_PER_DAY} slots per reading")
        self._energy = energy.astype(np.float64, copy=True)
        self._water = water.astype(np.float64, copy=True)
        self.tariff = tariff

    @classmethod
    def seeded(
        cls,
        source: "RandomSource",
        tariff: Tariff,
        energy_range: tuple[float, float],
        water_range: tuple[float, float],
    ) -> Self:
        """Fill every slot with a placeholder reading drawn from the ranges."""
        energy = np.array([source.next_in_range(*energy_range) for _ in range(HOURS_PER_DAY)])
        water = np.array([source.next_in_range(*water_range) for _ in range(HOURS_PER_DAY)])
        return cls(energy, water, tariff)

    def record(self, hour: int, energy_kwh: float, water_l: float) -> None:
        if not 0 <= hour < HOURS_PER_DAY:
            raise ValueError(f"Hour must be 0-{HOURS_PER_DAY - 1}, got {hour}")
        self._energy[hour] = energy_kwh
        self._water[hour] = water_l

    def peak_hour(self) -> int:
        """Hour with the highest energy reading; earliest hour on ties."""
        return int(np.argmax(self._energy))

    def low_hour(self) -> int:
        return int(np.argmin(self._energy))

    def slots(self) -> list[HourlySlot]:
        # Cost per slot follows the dashboard's chart: a day's rate spread over 24 hours.
        costs = self._energy * self.tariff.energy_per_kwh / HOURS_PER_DAY
        return [
            HourlySlot(
                hour=hour,
                energy_kwh=float(self._energy[hour]),
                water_l=float(self._water[hour]),
                cost=float(costs[hour]),
            )
            for hour in range(HOURS_PER_DAY)
        ]
