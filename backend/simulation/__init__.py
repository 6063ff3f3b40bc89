"""Simulation module - tick loop, drift sources and tunables."""

from simulation.config import DEFAULT as DEFAULT_SIM_CONFIG
from simulation.config import SimConfig
from simulation.orchestrator import FacilityState, TickOrchestrator
from simulation.random_source import FixedRandomSource, RandomSource, SeededRandomSource
from simulation.ticker import Ticker

__all__ = [
    "DEFAULT_SIM_CONFIG",
    "FacilityState",
    "FixedRandomSource",
    "RandomSource",
    "SeededRandomSource",
    "SimConfig",
    "TickOrchestrator",
    "Ticker",
]
