"""Type definitions for the battle engine."""

from dataclasses import dataclass, field
from typing import Any

from ..models.enums import BattleOutcome, EffectKind, Side, TurnPhase


class InvariantViolation(AssertionError):
    """Engine state broke an invariant. Indicates a programming defect."""


def absorb_damage(shield: int, damage: int, true_damage: bool = False) -> tuple[int, int]:
    """Resolve damage against a shield.

    Returns (shield_after, hp_loss). Shield absorbs first unless the damage
    is true damage, which leaves the shield untouched.
    """
    damage = max(0, damage)
    shield = max(0, shield)
    if true_damage:
        return shield, damage
    absorbed = min(shield, damage)
    return shield - absorbed, damage - absorbed


@dataclass
class DamageResult:
    """Result of applying damage to one side."""

    raw_damage: int
    absorbed: int
    hp_loss: int
    true_damage: bool = False


@dataclass
class CombatState:
    """Mutable state of one battle.

    HP and shields never go negative; player HP is capped at its max.
    """

    player_hp: int
    player_max_hp: int
    enemy_hp: int
    enemy_max_hp: int
    energy: int
    player_shield: int = 0
    enemy_shield: int = 0
    enemy_frozen: bool = False
    turn: Side = Side.PLAYER

    @classmethod
    def fresh(cls, player_max_hp: int, enemy_max_hp: int, starting_energy: int) -> "CombatState":
        """Create the state for a new battle."""
        return cls(
            player_hp=player_max_hp,
            player_max_hp=player_max_hp,
            enemy_hp=enemy_max_hp,
            enemy_max_hp=enemy_max_hp,
            energy=starting_energy,
        )

    def is_player_alive(self) -> bool:
        return self.player_hp > 0

    def is_enemy_alive(self) -> bool:
        return self.enemy_hp > 0

    def damage_enemy(self, damage: int, true_damage: bool = False) -> DamageResult:
        """Apply damage to the enemy, shield first unless true damage."""
        shield_after, hp_loss = absorb_damage(self.enemy_shield, damage, true_damage)
        absorbed = self.enemy_shield - shield_after
        self.enemy_shield = shield_after
        self.enemy_hp = max(0, self.enemy_hp - hp_loss)
        return DamageResult(raw_damage=damage, absorbed=absorbed, hp_loss=hp_loss, true_damage=true_damage)

    def damage_player(self, damage: int, true_damage: bool = False) -> DamageResult:
        """Apply damage to the player, shield first unless true damage."""
        shield_after, hp_loss = absorb_damage(self.player_shield, damage, true_damage)
        absorbed = self.player_shield - shield_after
        self.player_shield = shield_after
        self.player_hp = max(0, self.player_hp - hp_loss)
        return DamageResult(raw_damage=damage, absorbed=absorbed, hp_loss=hp_loss, true_damage=true_damage)

    def heal_player(self, amount: int) -> int:
        """Heal the player, capped at max HP. Returns actual HP restored."""
        actual = max(0, min(self.player_max_hp - self.player_hp, amount))
        self.player_hp += actual
        return actual

    def pay_player_hp(self, amount: int) -> int:
        """Spend player HP as a cost. Never drops below 1. Returns HP lost."""
        new_hp = max(1, self.player_hp - amount)
        lost = max(0, self.player_hp - new_hp)
        self.player_hp -= lost
        return lost

    def gain_energy(self, amount: int) -> None:
        self.energy += max(0, amount)

    def spend_energy(self, amount: int) -> bool:
        """Spend energy. Returns False (no change) if there isn't enough."""
        if amount > self.energy:
            return False
        self.energy -= amount
        return True

    def decay_player_shield(self) -> int:
        """Halve the player's shield (floor). Returns the amount lost."""
        before = self.player_shield
        self.player_shield = before // 2
        return before - self.player_shield


@dataclass(frozen=True)
class VfxTrigger:
    """Fire-and-forget visual effect request."""

    kind: EffectKind
    target: Side


@dataclass
class ResolutionResult:
    """Result of resolving one played card."""

    card_name: str
    messages: list[str] = field(default_factory=list)
    vfx: list[VfxTrigger] = field(default_factory=list)
    damage: DamageResult | None = None
    healed: int = 0
    shield_gained: int = 0
    energy_gained: int = 0
    cards_drawn: int = 0

    def log(self, message: str) -> None:
        self.messages.append(message)

    def trigger(self, kind: EffectKind, target: Side) -> None:
        self.vfx.append(VfxTrigger(kind=kind, target=target))


@dataclass
class ActionResult:
    """Result of an inbound request (play, end turn, upgrade, claim)."""

    success: bool
    message: str


@dataclass(frozen=True)
class BattleSnapshot:
    """Read-only view of a battle for rendering."""

    player_hp: int
    player_max_hp: int
    enemy_hp: int
    enemy_max_hp: int
    player_shield: int
    enemy_shield: int
    enemy_frozen: bool
    energy: int
    turn: Side
    phase: TurnPhase
    draw_pile_size: int
    hand_size: int
    discard_pile_size: int
    outcome: BattleOutcome | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "player_hp": self.player_hp,
            "player_max_hp": self.player_max_hp,
            "enemy_hp": self.enemy_hp,
            "enemy_max_hp": self.enemy_max_hp,
            "player_shield": self.player_shield,
            "enemy_shield": self.enemy_shield,
            "enemy_frozen": self.enemy_frozen,
            "energy": self.energy,
            "turn": self.turn.value,
            "phase": self.phase.value,
            "draw_pile_size": self.draw_pile_size,
            "hand_size": self.hand_size,
            "discard_pile_size": self.discard_pile_size,
            "outcome": self.outcome.value if self.outcome else None,
        }
