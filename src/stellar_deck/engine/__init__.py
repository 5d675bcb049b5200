"""Battle engine module - handles piles, card resolution, turn sequencing and the enemy AI."""

from .enemy import EnemyIntent, EnemyPolicy, RandomEnemyPolicy, apply_enemy_intent
from .events import BattleEvents, BattleListener
from .logging import BattleLog, BattleLogger, LogEntry, LogEventType
from .piles import DrawResult, Piles, assemble_battle_deck, draw, shuffle
from .resolver import EffectResolver
from .runner import BattleRunner
from .scheduler import ManualClock, ScheduledEvent, TimerKind, TimerQueue
from .session import BattleSession
from .turn import BattleContext, TurnController
from .types import (
    ActionResult,
    BattleSnapshot,
    CombatState,
    DamageResult,
    InvariantViolation,
    ResolutionResult,
    VfxTrigger,
    absorb_damage,
)

__all__ = [
    "BattleSession",
    "BattleRunner",
    "BattleContext",
    "TurnController",
    "EffectResolver",
    "EnemyPolicy",
    "RandomEnemyPolicy",
    "EnemyIntent",
    "apply_enemy_intent",
    "Piles",
    "DrawResult",
    "draw",
    "shuffle",
    "assemble_battle_deck",
    "TimerQueue",
    "TimerKind",
    "ScheduledEvent",
    "ManualClock",
    "BattleEvents",
    "BattleListener",
    "BattleLogger",
    "BattleLog",
    "LogEntry",
    "LogEventType",
    "CombatState",
    "DamageResult",
    "ResolutionResult",
    "VfxTrigger",
    "ActionResult",
    "BattleSnapshot",
    "InvariantViolation",
    "absorb_damage",
]
