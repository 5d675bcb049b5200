"""Headless battle simulation.

Plays battles to completion on a manual clock with a simple greedy
autopilot and reports per-battle telemetry. Useful for balancing the
catalog and as an end-to-end smoke test of the engine.
"""

import logging
import random
from collections import Counter
from dataclasses import dataclass, field
from typing import Any

from ..config import Settings, get_settings
from ..content.catalog import CardCatalog
from ..engine.scheduler import ManualClock
from ..engine.session import BattleSession
from ..models.cards import CardInstance, effective_stats
from ..models.collection import Collection
from ..models.enums import BattleOutcome, CardType, TurnPhase

logger = logging.getLogger(__name__)

MAX_ROUNDS = 200

_TYPE_PRIORITY = {CardType.ATTACK: 0, CardType.SKILL: 1, CardType.DEFEND: 2}


@dataclass
class BattleTelemetry:
    """Stats from a single simulated battle."""

    battle_id: str
    outcome: BattleOutcome | None  # None if the round cap was hit
    rounds: int
    player_hp_end: int
    enemy_hp_end: int
    damage_dealt: int
    hp_lost: int
    cards_played: int
    cards_played_by_id: dict[str, int] = field(default_factory=dict)
    reward: CardInstance | None = None

    @property
    def won(self) -> bool:
        return self.outcome == BattleOutcome.WIN

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "battle_id": self.battle_id,
            "outcome": self.outcome.value if self.outcome else None,
            "rounds": self.rounds,
            "player_hp_end": self.player_hp_end,
            "enemy_hp_end": self.enemy_hp_end,
            "damage_dealt": self.damage_dealt,
            "hp_lost": self.hp_lost,
            "cards_played": self.cards_played,
            "cards_played_by_id": dict(self.cards_played_by_id),
            "reward_id": self.reward.template_id if self.reward else None,
        }


class GreedyPilot:
    """Plays the most expensive affordable card, attacks first on ties."""

    def choose(self, session: BattleSession) -> CardInstance | None:
        state = session.state
        if state is None or session.phase not in (TurnPhase.PLAYER_ACTIVE, TurnPhase.PLAYER_AUTO_END):
            return None

        in_flight = session.in_flight
        playable = [
            card
            for card in session.hand
            if card.instance_id not in in_flight and effective_stats(card).cost <= state.energy
        ]
        if not playable:
            return None
        return min(playable, key=lambda c: (-effective_stats(c).cost, _TYPE_PRIORITY[c.template.type]))


def simulate_battle(
    collection: Collection,
    catalog: CardCatalog,
    settings: Settings | None = None,
    rng: random.Random | None = None,
    pilot: GreedyPilot | None = None,
    max_rounds: int = MAX_ROUNDS,
) -> BattleTelemetry:
    """Run one battle to completion with the given pilot.

    Time only moves when nothing can be played: the manual clock jumps
    straight to the next scheduled event.
    """
    settings = settings or get_settings()
    pilot = pilot or GreedyPilot()
    clock = ManualClock()
    session = BattleSession(catalog, settings=settings, rng=rng or random.Random(), clock=clock)

    result = session.start_battle(collection.cards)
    if not result.success:
        raise RuntimeError(f"Could not start battle: {result.message}")

    played: Counter[str] = Counter()
    while not session.is_settled:
        if session.context.round_number > max_rounds:
            logger.warning("Battle %s hit the %d round cap", session.battle_id, max_rounds)
            session.close()
            break

        card = pilot.choose(session)
        if card is not None:
            if session.play_card(card.instance_id).success:
                played[card.template_id] += 1
                continue

        delay = session.timers.seconds_until_next()
        if delay is None:
            # Nothing scheduled and nothing the pilot wants to play
            ended = session.end_turn()
            if not ended.success:
                raise RuntimeError(f"Simulation stalled in {session.phase.value}: {ended.message}")
            continue
        clock.advance(delay)
        session.tick()

    state = session.state
    telemetry = BattleTelemetry(
        battle_id=session.battle_id,
        outcome=session.outcome,
        rounds=session.context.round_number,
        player_hp_end=state.player_hp,
        enemy_hp_end=state.enemy_hp,
        damage_dealt=state.enemy_max_hp - state.enemy_hp,
        hp_lost=state.player_max_hp - state.player_hp,
        cards_played=sum(played.values()),
        cards_played_by_id=dict(played),
        reward=session.reward,
    )
    logger.debug("Simulated battle: %s", telemetry.to_dict())
    return telemetry
