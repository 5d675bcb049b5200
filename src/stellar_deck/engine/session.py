"""Battle session - the one aggregate a presentation layer talks to."""

import logging
import random
import uuid
from collections.abc import Callable, Sequence

from ..config import Settings, get_settings
from ..content.catalog import CardCatalog
from ..models.cards import CardInstance
from ..models.enums import BattleOutcome, TurnPhase
from .enemy import EnemyPolicy, RandomEnemyPolicy
from .events import BattleEvents, BattleListener
from .logging import BattleLog, BattleLogger
from .piles import Piles, assemble_battle_deck
from .scheduler import TimerQueue
from .turn import BattleContext, TurnController
from .types import ActionResult, BattleSnapshot, CombatState

logger = logging.getLogger(__name__)


class BattleSession:
    """One battle attempt: owns combat state, piles and timers.

    Inbound operations never raise for invalid requests; they return an
    ActionResult instead. Scheduled delays only progress when ``tick()`` is
    called (see BattleRunner for a real-time driver).
    """

    def __init__(
        self,
        catalog: CardCatalog,
        settings: Settings | None = None,
        rng: random.Random | None = None,
        clock: Callable[[], float] | None = None,
        enemy_policy: EnemyPolicy | None = None,
        battle_id: str | None = None,
    ) -> None:
        self.catalog = catalog
        self.settings = settings or get_settings()
        self.rng = rng or random.Random()
        self.battle_id = battle_id or uuid.uuid4().hex[:12]
        self.timers = TimerQueue(clock)
        self.events = BattleEvents()
        self.battle_logger = BattleLogger(battle_id=self.battle_id)
        self.enemy_policy = enemy_policy or RandomEnemyPolicy.from_settings(self.settings)
        self.context: BattleContext | None = None
        self.controller: TurnController | None = None
        self.closed = False

    # -------------------------------------------------------------------------
    # Presentation-facing API
    # -------------------------------------------------------------------------

    def subscribe(self, listener: BattleListener) -> None:
        """Register a listener for log, VFX, state and end-of-battle events."""
        self.events.subscribe(listener)

    def start_battle(self, collection_cards: Sequence[CardInstance]) -> ActionResult:
        """Assemble the battle deck from the collection and start the first turn."""
        if self.closed:
            return ActionResult(success=False, message="Session is closed")
        if self.context is not None:
            return ActionResult(success=False, message="Battle already started")

        deck = assemble_battle_deck(collection_cards, self.catalog, self.settings.battle_deck_size, self.rng)
        self.context = BattleContext(
            battle_id=self.battle_id,
            state=CombatState.fresh(
                self.settings.player_max_hp,
                self.settings.enemy_max_hp,
                self.settings.starting_energy,
            ),
            piles=Piles(),
        )
        self.controller = TurnController(
            context=self.context,
            settings=self.settings,
            catalog=self.catalog,
            timers=self.timers,
            events=self.events,
            battle_logger=self.battle_logger,
            enemy_policy=self.enemy_policy,
            rng=self.rng,
        )
        logger.info("Starting battle %s with a %d-card deck", self.battle_id, len(deck))
        self.controller.start(deck)
        return ActionResult(success=True, message="Battle started")

    def play_card(self, instance_id: str) -> ActionResult:
        """Request to play a card from hand."""
        if self.closed or self.controller is None:
            return ActionResult(success=False, message="No battle in progress")
        return self.controller.play_card(instance_id)

    def end_turn(self) -> ActionResult:
        """Request to end the player's turn."""
        if self.closed or self.controller is None:
            return ActionResult(success=False, message="No battle in progress")
        return self.controller.end_turn()

    def tick(self) -> int:
        """Fire every scheduled event that is due. Returns the number fired."""
        if self.closed or self.controller is None:
            return 0
        fired = 0
        while (event := self.timers.pop_due()) is not None:
            self.controller.handle(event)
            fired += 1
            if self.closed:
                break
        return fired

    def close(self) -> None:
        """Tear the session down. Pending timers are dropped and later requests are no-ops."""
        if self.closed:
            return
        cancelled = self.timers.cancel_all()
        self.closed = True
        logger.debug("Closed battle %s (%d timers cancelled)", self.battle_id, cancelled)

    # -------------------------------------------------------------------------
    # Read-only views
    # -------------------------------------------------------------------------

    def snapshot(self) -> BattleSnapshot | None:
        return self.context.snapshot() if self.context else None

    @property
    def state(self) -> CombatState | None:
        return self.context.state if self.context else None

    @property
    def piles(self) -> Piles | None:
        return self.context.piles if self.context else None

    @property
    def hand(self) -> list[CardInstance]:
        return list(self.context.piles.hand) if self.context else []

    @property
    def phase(self) -> TurnPhase:
        return self.context.phase if self.context else TurnPhase.NOT_STARTED

    @property
    def outcome(self) -> BattleOutcome | None:
        return self.context.outcome if self.context else None

    @property
    def reward(self) -> CardInstance | None:
        return self.context.reward if self.context else None

    @property
    def in_flight(self) -> set[str]:
        """Instance IDs of cards played but not yet resolved."""
        return set(self.context.in_flight) if self.context else set()

    @property
    def is_over(self) -> bool:
        return self.context is not None and self.context.is_over

    @property
    def is_settled(self) -> bool:
        """True once the battle is over and nothing else is scheduled (reward included)."""
        return self.closed or (self.is_over and self.timers.pending() == 0)

    @property
    def log(self) -> BattleLog:
        return self.battle_logger.get_log()

    def recent_messages(self, count: int | None = None) -> list[str]:
        """The visible feed window, newest first."""
        return self.log.recent(self.settings.log_window if count is None else count)
