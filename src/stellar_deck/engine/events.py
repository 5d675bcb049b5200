"""Engine-to-presentation event interface."""

import logging
from typing import Any

from ..models.cards import CardInstance
from ..models.enums import BattleOutcome, EffectKind, Side
from .types import BattleSnapshot, ResolutionResult

logger = logging.getLogger(__name__)


class BattleListener:
    """Receives battle events. Override the hooks you care about.

    Hooks are called synchronously, in the order events happen.
    """

    def on_log(self, message: str) -> None:
        """A line for the battle feed."""

    def on_vfx(self, kind: EffectKind, target: Side) -> None:
        """A visual effect trigger. The presentation owns duration and cleanup."""

    def on_state_change(self, snapshot: BattleSnapshot) -> None:
        """The battle state changed."""

    def on_battle_end(self, outcome: BattleOutcome) -> None:
        """The battle reached a terminal outcome."""

    def on_reward(self, card: CardInstance) -> None:
        """A victory reward is on offer."""


class BattleEvents:
    """Fans events out to every subscribed listener.

    A failing listener is logged and skipped so the battle transition that
    emitted the event always completes.
    """

    def __init__(self) -> None:
        self.listeners: list[BattleListener] = []

    def subscribe(self, listener: BattleListener) -> None:
        if listener not in self.listeners:
            self.listeners.append(listener)

    def _notify(self, hook: str, *args: Any) -> None:
        for listener in list(self.listeners):
            try:
                getattr(listener, hook)(*args)
            except Exception:
                logger.exception("Listener %r failed in %s", listener, hook)

    def log(self, message: str) -> None:
        self._notify("on_log", message)

    def vfx(self, kind: EffectKind, target: Side) -> None:
        self._notify("on_vfx", kind, target)

    def state_change(self, snapshot: BattleSnapshot) -> None:
        self._notify("on_state_change", snapshot)

    def battle_end(self, outcome: BattleOutcome) -> None:
        self._notify("on_battle_end", outcome)

    def reward(self, card: CardInstance) -> None:
        self._notify("on_reward", card)

    def resolution(self, result: ResolutionResult) -> None:
        """Forward the log lines and VFX of a resolved action."""
        for message in result.messages:
            self.log(message)
        for trigger in result.vfx:
            self.vfx(trigger.kind, trigger.target)
