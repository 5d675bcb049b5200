"""Shared fixtures for battle tests."""

import random

import pytest

from stellar_deck.config import Settings
from stellar_deck.content import default_catalog
from stellar_deck.engine import BattleListener, BattleSession, EnemyIntent, EnemyPolicy, ManualClock
from stellar_deck.models import CardInstance, EnemyActionType


class ScriptedEnemyPolicy(EnemyPolicy):
    """Plays back a fixed list of intents, then idles."""

    def __init__(self, intents: list[EnemyIntent] | None = None) -> None:
        self.intents = list(intents or [])
        self.calls = 0

    def choose(self, state, rng):
        self.calls += 1
        if self.intents:
            return self.intents.pop(0)
        return EnemyIntent(action=EnemyActionType.DEFEND, amount=0)


class RecordingListener(BattleListener):
    """Collects every event a session emits."""

    def __init__(self) -> None:
        self.logs: list[str] = []
        self.vfx: list[tuple] = []
        self.snapshots: list = []
        self.outcomes: list = []
        self.rewards: list[CardInstance] = []

    def on_log(self, message):
        self.logs.append(message)

    def on_vfx(self, kind, target):
        self.vfx.append((kind, target))

    def on_state_change(self, snapshot):
        self.snapshots.append(snapshot)

    def on_battle_end(self, outcome):
        self.outcomes.append(outcome)

    def on_reward(self, card):
        self.rewards.append(card)


def attack(amount: int) -> EnemyIntent:
    return EnemyIntent(action=EnemyActionType.ATTACK, amount=amount)


def defend(amount: int) -> EnemyIntent:
    return EnemyIntent(action=EnemyActionType.DEFEND, amount=amount)


@pytest.fixture
def settings():
    """Default rules with invariant checks raising."""
    return Settings(_env_file=None, debug=True)


@pytest.fixture
def catalog():
    return default_catalog()


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def listener():
    return RecordingListener()


@pytest.fixture
def advance(clock):
    """Move the manual clock forward and fire whatever is due."""

    def _advance(session: BattleSession, seconds: float) -> int:
        clock.advance(seconds)
        return session.tick()

    return _advance


@pytest.fixture
def make_session(settings, catalog, rng, clock, listener):
    """Start a battle whose whole deck is the given cards.

    By default the opening hand is the entire deck, so every card can be
    played by instance ID right away. Cards may be template IDs or
    pre-built (e.g. upgraded) instances.
    """

    def _make(cards, intents=None, **overrides):
        deck = [catalog.create(card) if isinstance(card, str) else card for card in cards]
        session_settings = settings.model_copy(
            update={"battle_deck_size": len(deck), "opening_hand_size": len(deck), **overrides}
        )
        session = BattleSession(
            catalog,
            settings=session_settings,
            rng=rng,
            clock=clock,
            enemy_policy=ScriptedEnemyPolicy(intents),
        )
        session.subscribe(listener)
        result = session.start_battle(deck)
        assert result.success
        return session, deck

    return _make
