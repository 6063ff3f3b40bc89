"""Analysis utilities - hourly readings and derived statistics."""

from analysis.hourly import HOURS_PER_DAY, HourlySeries
from analysis.statistics import compute_statistics

__all__ = [
    "HOURS_PER_DAY",
    "HourlySeries",
    "compute_statistics",
]
