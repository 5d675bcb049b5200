"""Turn controller - drives the player/enemy phase state machine."""

import logging
import random
from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ..config import Settings
from ..models.cards import CardInstance, create_card, effective_stats
from ..models.enums import BattleOutcome, Side, TurnPhase
from .enemy import EnemyPolicy
from .events import BattleEvents
from .logging import BattleLogger
from .piles import Piles
from .resolver import EffectResolver
from .scheduler import ScheduledEvent, TimerKind, TimerQueue
from .types import ActionResult, BattleSnapshot, CombatState, InvariantViolation, ResolutionResult

if TYPE_CHECKING:
    from ..content.catalog import CardCatalog

logger = logging.getLogger(__name__)

PLAYER_PHASES = {TurnPhase.PLAYER_ACTIVE, TurnPhase.PLAYER_AUTO_END}


@dataclass
class InFlightPlay:
    """A play that was accepted and paid for but has not resolved yet."""

    card: CardInstance
    commit_event: ScheduledEvent


@dataclass
class BattleContext:
    """Everything one battle owns. Shared by the controller and the session."""

    battle_id: str
    state: CombatState
    piles: Piles
    deck_ids: Counter[str] = field(default_factory=Counter)
    phase: TurnPhase = TurnPhase.NOT_STARTED
    outcome: BattleOutcome | None = None
    round_number: int = 1
    in_flight: dict[str, InFlightPlay] = field(default_factory=dict)
    auto_end_event: ScheduledEvent | None = None
    reward: CardInstance | None = None

    @property
    def is_over(self) -> bool:
        return self.phase == TurnPhase.BATTLE_OVER

    def snapshot(self) -> BattleSnapshot:
        """Read-only view of the current state."""
        return BattleSnapshot(
            player_hp=self.state.player_hp,
            player_max_hp=self.state.player_max_hp,
            enemy_hp=self.state.enemy_hp,
            enemy_max_hp=self.state.enemy_max_hp,
            player_shield=self.state.player_shield,
            enemy_shield=self.state.enemy_shield,
            enemy_frozen=self.state.enemy_frozen,
            energy=self.state.energy,
            turn=self.state.turn,
            phase=self.phase,
            draw_pile_size=len(self.piles.draw_pile),
            hand_size=len(self.piles.hand),
            discard_pile_size=len(self.piles.discard_pile),
            outcome=self.outcome,
        )


class TurnController:
    """Orchestrates phase transitions for one battle.

    Phase flow:
    1. PLAYER_ACTIVE - cards are played (cost paid now, effect after a settle delay)
    2. PLAYER_AUTO_END - nothing affordable, automatic end of turn pending
    3. ENEMY_ACTIVE - after a thinking delay the enemy acts (or skips if frozen)
    4. ROUND_RESET - energy refilled, cards drawn, shield decays, back to 1
    Any HP change may end the battle (BATTLE_OVER), which cancels pending timers.
    """

    def __init__(
        self,
        context: BattleContext,
        settings: Settings,
        catalog: "CardCatalog",
        timers: TimerQueue,
        events: BattleEvents,
        battle_logger: BattleLogger,
        enemy_policy: EnemyPolicy,
        rng: random.Random,
    ) -> None:
        self.context = context
        self.settings = settings
        self.catalog = catalog
        self.timers = timers
        self.events = events
        self.battle_logger = battle_logger
        self.enemy_policy = enemy_policy
        self.rng = rng
        self.resolver = EffectResolver(settings, rng)

    # -------------------------------------------------------------------------
    # Inbound requests
    # -------------------------------------------------------------------------

    def start(self, deck: Sequence[CardInstance]) -> None:
        """Set up piles and state for a new battle and open the first player turn."""
        ctx = self.context
        ctx.piles = Piles.from_deck(deck)
        ctx.deck_ids = ctx.piles.all_ids()
        ctx.state = CombatState.fresh(
            player_max_hp=self.settings.player_max_hp,
            enemy_max_hp=self.settings.enemy_max_hp,
            starting_energy=self.settings.starting_energy,
        )
        ctx.piles.draw(self.settings.opening_hand_size)
        ctx.phase = TurnPhase.PLAYER_ACTIVE

        self.battle_logger.log_battle_start(ctx.snapshot())
        self._say("Battle start!")
        self._verify_invariants()
        self._publish_state()
        self._evaluate_auto_end()

    def play_card(self, instance_id: str) -> ActionResult:
        """Accept a play request: pay the cost now, resolve after the settle delay."""
        ctx = self.context

        if ctx.is_over:
            return self._reject(instance_id, "Battle is over")
        if ctx.phase not in PLAYER_PHASES or ctx.state.turn != Side.PLAYER:
            return self._reject(instance_id, "Not your turn")
        if instance_id in ctx.in_flight:
            return self._reject(instance_id, "Card is already being played")

        card = ctx.piles.find_in_hand(instance_id)
        if card is None:
            return self._reject(instance_id, "Card is not in hand")

        stats = effective_stats(card)
        if not ctx.state.spend_energy(stats.cost):
            return self._reject(instance_id, "Not enough energy")

        commit_event = self.timers.schedule(self.settings.play_settle_delay, TimerKind.PLAY_COMMIT, instance_id)
        ctx.in_flight[instance_id] = InFlightPlay(card=card, commit_event=commit_event)
        self.battle_logger.log_card_played(ctx.round_number, stats.name, instance_id, stats.cost)

        self._publish_state()
        self._evaluate_auto_end()
        return ActionResult(success=True, message=f"Playing {stats.name}")

    def end_turn(self) -> ActionResult:
        """End the player's turn. Pending plays resolve first."""
        ctx = self.context

        if ctx.is_over:
            return ActionResult(success=False, message="Battle is over")
        if ctx.phase not in PLAYER_PHASES:
            return ActionResult(success=False, message="Not your turn")

        self._flush_in_flight()
        if ctx.is_over:
            return ActionResult(success=True, message="Battle ended")

        self._begin_enemy_phase("turn ended")
        return ActionResult(success=True, message="Turn ended")

    def handle(self, event: ScheduledEvent) -> None:
        """Dispatch a due timer event."""
        match event.kind:
            case TimerKind.PLAY_COMMIT:
                self._commit_play(event.payload)
            case TimerKind.AUTO_END:
                self._fire_auto_end(event)
            case TimerKind.ENEMY_ACTION:
                self._run_enemy_action()
            case TimerKind.REWARD:
                self._grant_reward()

    # -------------------------------------------------------------------------
    # Player phase
    # -------------------------------------------------------------------------

    def _commit_play(self, instance_id: str) -> None:
        """Resolve an in-flight card and move it to the discard pile."""
        ctx = self.context
        play = ctx.in_flight.pop(instance_id, None)
        if play is None or ctx.is_over:
            return

        result = self.resolver.resolve(play.card, ctx.state, ctx.piles)
        ctx.piles.move_to_discard(play.card)

        self._emit_resolution(result)
        self.battle_logger.log_card_resolved(ctx.round_number, result.card_name, instance_id, ctx.snapshot())
        self._verify_invariants()

        if self._check_outcome():
            return

        self._publish_state()
        self._evaluate_auto_end()

    def _flush_in_flight(self) -> None:
        """Resolve every pending play immediately, in the order they were made."""
        for instance_id in list(self.context.in_flight):
            play = self.context.in_flight.get(instance_id)
            if play is None:
                continue
            self.timers.cancel(play.commit_event)
            self._commit_play(instance_id)

    def _has_affordable_card(self) -> bool:
        """Whether any hand card that isn't in flight can be paid for."""
        ctx = self.context
        return any(
            effective_stats(card).cost <= ctx.state.energy
            for card in ctx.piles.hand
            if card.instance_id not in ctx.in_flight
        )

    def _evaluate_auto_end(self) -> None:
        """Schedule (or call off) the automatic end of turn."""
        ctx = self.context
        if ctx.phase not in PLAYER_PHASES:
            return

        if self._has_affordable_card():
            if ctx.auto_end_event is not None:
                self.timers.cancel(ctx.auto_end_event)
                ctx.auto_end_event = None
                ctx.phase = TurnPhase.PLAYER_ACTIVE
            return

        if ctx.auto_end_event is None:
            ctx.auto_end_event = self.timers.schedule(self.settings.auto_end_delay, TimerKind.AUTO_END)
            ctx.phase = TurnPhase.PLAYER_AUTO_END

    def _fire_auto_end(self, event: ScheduledEvent) -> None:
        """Auto-end timer elapsed. Re-check before ending the turn."""
        ctx = self.context
        if ctx.auto_end_event is not event:
            return
        ctx.auto_end_event = None
        if ctx.phase not in PLAYER_PHASES:
            return

        # A pending commit re-evaluates when it lands
        if ctx.in_flight or self._has_affordable_card():
            ctx.phase = TurnPhase.PLAYER_ACTIVE
            return

        if not ctx.piles.hand and not ctx.piles.draw_pile:
            self._say("Out of cards, turn over")
            reason = "out of cards"
        elif not ctx.piles.hand:
            self._say("Hand exhausted, turn over")
            reason = "hand empty"
        else:
            self._say("Not enough energy, turn over")
            reason = "not enough energy"
        self._begin_enemy_phase(reason)

    def _begin_enemy_phase(self, reason: str) -> None:
        ctx = self.context
        if ctx.auto_end_event is not None:
            self.timers.cancel(ctx.auto_end_event)
            ctx.auto_end_event = None

        ctx.phase = TurnPhase.ENEMY_ACTIVE
        ctx.state.turn = Side.ENEMY
        self.battle_logger.log_turn_ended(ctx.round_number, reason)
        self.timers.schedule(self.settings.enemy_turn_delay, TimerKind.ENEMY_ACTION)
        self._publish_state()

    # -------------------------------------------------------------------------
    # Enemy phase and round reset
    # -------------------------------------------------------------------------

    def _run_enemy_action(self) -> None:
        """Run the enemy's action (or consume a freeze), then start the next round."""
        ctx = self.context
        if ctx.phase != TurnPhase.ENEMY_ACTIVE:
            return

        if ctx.state.enemy_frozen:
            ctx.state.enemy_frozen = False
            self._say("The enemy is frozen and cannot act!")
            self.battle_logger.log_enemy_frozen(ctx.round_number)
        else:
            result = self.enemy_policy.act(ctx.state, self.rng)
            self._emit_resolution(result)
            value = result.damage.raw_damage if result.damage else result.shield_gained
            self.battle_logger.log_enemy_action(ctx.round_number, result.card_name, value, ctx.snapshot())

        self._verify_invariants()
        if self._check_outcome():
            return

        self._reset_round()

    def _reset_round(self) -> None:
        """Refill energy, draw into the existing hand, decay shield, hand control back."""
        ctx = self.context
        ctx.phase = TurnPhase.ROUND_RESET
        ctx.round_number += 1

        ctx.state.turn = Side.PLAYER
        ctx.state.energy = self.settings.starting_energy

        drawn = ctx.piles.draw(self.settings.round_draw_count)
        if drawn == 0:
            self._say("The draw pile is empty, no cards drawn!")
        else:
            self._say(f"Round {ctx.round_number} begins, drew {drawn} card(s)")

        ctx.state.decay_player_shield()
        ctx.phase = TurnPhase.PLAYER_ACTIVE

        self.battle_logger.log_round_start(ctx.round_number, drawn, ctx.snapshot())
        self._verify_invariants()
        self._publish_state()
        self._evaluate_auto_end()

    # -------------------------------------------------------------------------
    # Battle end
    # -------------------------------------------------------------------------

    def _check_outcome(self) -> bool:
        """End the battle if either side is down. Returns True if it ended."""
        state = self.context.state
        if not state.is_enemy_alive():
            self._finish(BattleOutcome.WIN)
            return True
        if not state.is_player_alive():
            self._finish(BattleOutcome.LOSS)
            return True
        return False

    def _finish(self, outcome: BattleOutcome) -> None:
        ctx = self.context
        ctx.phase = TurnPhase.BATTLE_OVER
        ctx.outcome = outcome
        ctx.in_flight.clear()
        ctx.auto_end_event = None
        cancelled = self.timers.cancel_all()
        logger.info("Battle %s ended: %s (%d timers cancelled)", ctx.battle_id, outcome.value, cancelled)

        self._say("Victory!" if outcome == BattleOutcome.WIN else "Defeat...")
        self.battle_logger.log_battle_end(ctx.round_number, outcome, ctx.snapshot())
        self._publish_state()
        self.events.battle_end(outcome)

        if outcome == BattleOutcome.WIN:
            self.timers.schedule(self.settings.reward_delay, TimerKind.REWARD)

    def _grant_reward(self) -> None:
        """Offer a random catalog card. Happens at most once per battle."""
        ctx = self.context
        if ctx.outcome != BattleOutcome.WIN or ctx.reward is not None:
            return
        ctx.reward = create_card(self.catalog.random_template(self.rng))
        stats = effective_stats(ctx.reward)
        self.battle_logger.log_reward(ctx.round_number, stats.name, ctx.reward.instance_id)
        self.events.reward(ctx.reward)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _reject(self, instance_id: str, reason: str) -> ActionResult:
        logger.debug("Rejected play of %s: %s", instance_id, reason)
        self.battle_logger.log_play_rejected(self.context.round_number, instance_id, reason)
        return ActionResult(success=False, message=reason)

    def _say(self, message: str) -> None:
        self.battle_logger.log_message(self.context.round_number, message)
        self.events.log(message)

    def _emit_resolution(self, result: ResolutionResult) -> None:
        for message in result.messages:
            self.battle_logger.log_message(self.context.round_number, message)
        self.events.resolution(result)

    def _publish_state(self) -> None:
        self.events.state_change(self.context.snapshot())

    def _verify_invariants(self) -> None:
        """Check HP/shield/energy bounds and pile conservation.

        Raises InvariantViolation in debug mode, otherwise clamps and warns.
        """
        ctx = self.context
        state = ctx.state
        problems: list[str] = []

        for name in ("player_hp", "enemy_hp", "player_shield", "enemy_shield", "energy"):
            if getattr(state, name) < 0:
                problems.append(f"{name} is negative ({getattr(state, name)})")
        if state.player_hp > state.player_max_hp:
            problems.append(f"player_hp {state.player_hp} exceeds max {state.player_max_hp}")

        pile_ids = ctx.piles.all_ids()
        if pile_ids != ctx.deck_ids:
            problems.append("pile contents differ from the battle deck")
        duplicates = [iid for iid, count in pile_ids.items() if count > 1]
        if duplicates:
            problems.append(f"duplicate instances across piles: {duplicates}")

        if not problems:
            return

        message = "; ".join(problems)
        if self.settings.debug:
            raise InvariantViolation(message)

        logger.warning("Invariant violation in battle %s: %s", ctx.battle_id, message)
        state.player_hp = min(max(0, state.player_hp), state.player_max_hp)
        state.enemy_hp = max(0, state.enemy_hp)
        state.player_shield = max(0, state.player_shield)
        state.enemy_shield = max(0, state.enemy_shield)
        state.energy = max(0, state.energy)
