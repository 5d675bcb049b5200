"""Service layer for out-of-battle game logic."""

from .progression import ProgressionService
from .simulation import BattleTelemetry, GreedyPilot, simulate_battle

__all__ = [
    "ProgressionService",
    "BattleTelemetry",
    "GreedyPilot",
    "simulate_battle",
]
