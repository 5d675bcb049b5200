"""Enemy policy - decides and performs the enemy's action each round."""

import random
from abc import ABC, abstractmethod
from dataclasses import dataclass

from ..config import Settings
from ..models.enums import EffectKind, EnemyActionType, Side
from .types import CombatState, ResolutionResult


@dataclass(frozen=True)
class EnemyIntent:
    """What the enemy will do: attack for ``amount`` damage or defend for ``amount`` shield."""

    action: EnemyActionType
    amount: int


class EnemyPolicy(ABC):
    """Base class for enemy AI.

    Subclasses only decide; applying the intent is shared so every policy
    uses the same shield rules. A policy never touches energy, piles or
    upgrades.
    """

    @abstractmethod
    def choose(self, state: CombatState, rng: random.Random) -> EnemyIntent:
        """Choose the enemy's action for the current state."""

    def act(self, state: CombatState, rng: random.Random) -> ResolutionResult:
        """Choose an action and apply it to the combat state."""
        intent = self.choose(state, rng)
        return apply_enemy_intent(intent, state)


class RandomEnemyPolicy(EnemyPolicy):
    """Attacks with a fixed probability, otherwise raises its shield."""

    def __init__(
        self,
        attack_chance: float = 0.7,
        damage_min: int = 8,
        damage_max: int = 17,
        block: int = 10,
    ) -> None:
        self.attack_chance = attack_chance
        self.damage_min = damage_min
        self.damage_max = damage_max
        self.block = block

    @classmethod
    def from_settings(cls, settings: Settings) -> "RandomEnemyPolicy":
        return cls(
            attack_chance=settings.enemy_attack_chance,
            damage_min=settings.enemy_damage_min,
            damage_max=settings.enemy_damage_max,
            block=settings.enemy_block,
        )

    def choose(self, state: CombatState, rng: random.Random) -> EnemyIntent:
        if rng.random() < self.attack_chance:
            return EnemyIntent(action=EnemyActionType.ATTACK, amount=rng.randint(self.damage_min, self.damage_max))
        return EnemyIntent(action=EnemyActionType.DEFEND, amount=self.block)


def apply_enemy_intent(intent: EnemyIntent, state: CombatState) -> ResolutionResult:
    """Apply an enemy intent using the same shield absorption as player attacks."""
    result = ResolutionResult(card_name=intent.action.value)

    match intent.action:
        case EnemyActionType.ATTACK:
            damage_result = state.damage_player(intent.amount)
            result.damage = damage_result
            if damage_result.hp_loss > 0:
                result.log(f"The enemy attacks! {damage_result.hp_loss} damage taken")
                result.trigger(EffectKind.SLASH, Side.PLAYER)
            else:
                result.log("The enemy attacks! Your shield blocked it")
        case EnemyActionType.DEFEND:
            state.enemy_shield += max(0, intent.amount)
            result.shield_gained = max(0, intent.amount)
            result.log("The enemy strengthens its defenses")
            result.trigger(EffectKind.BLOCK, Side.ENEMY)

    return result
