"""Statistics aggregator - derived figures shown alongside the live totals."""

from collections.abc import Sequence

from analysis.hourly import HourlySeries
from core.models import GlobalTotals, Room, Statistics


def compute_statistics(series: HourlySeries, rooms: Sequence[Room], totals: GlobalTotals) -> Statistics:
    active = sum(room.active_devices for room in rooms)
    total = sum(len(room.devices) for room in rooms)
    average_efficiency = sum(room.efficiency for room in rooms) / len(rooms) if rooms else 0.0

    return Statistics(
        peak_hour=series.peak_hour(),
        low_hour=series.low_hour(),
        active_devices=active,
        total_devices=total,
        energy_saved_kwh=totals.energy_saved_kwh,
        cost_rate_per_hour=totals.power_kw * totals.tariff.energy_per_kwh,
        average_efficiency=average_efficiency,
    )
