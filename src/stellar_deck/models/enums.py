"""Enums for card and battle models."""

from enum import Enum


class CardType(str, Enum):
    """Card types - each one resolves through its own branch."""

    ATTACK = "attack"  # Damage the enemy
    DEFEND = "defend"  # Shield the player
    SKILL = "skill"  # Branches on effect kind


class EffectKind(str, Enum):
    """Visual effect kinds. SKILL cards also branch on these."""

    SLASH = "slash"
    BLOCK = "block"
    HEAL = "heal"
    BUFF_AURA = "buff_aura"
    EXPLOSION = "explosion"
    ICE_NOVA = "ice_nova"
    THUNDER = "thunder"
    DRAW = "draw"
    LASER = "laser"
    VOID = "void"
    DRAIN = "drain"
    SPIN_SLASH = "spin_slash"


class UpgradePath(str, Enum):
    """Mutually exclusive, permanent upgrade paths."""

    POWER = "power"
    SPEED = "speed"
    SPECIAL = "special"


class ModifierKind(str, Enum):
    """Special rules an upgrade option can attach to a card."""

    DOUBLE_HIT = "double_hit"  # Flat damage multiplier
    EXECUTE = "execute"  # Lethal damage below an HP threshold
    PIERCE = "pierce"  # Damage ignores shield
    LIFESTEAL = "lifesteal"  # Multiplies drain healing
    FREEZE = "freeze"  # Enemy skips its next action
    VOID_TRADE = "void_trade"  # Overrides HP cost / energy gain of VOID skills
    BONUS_ENERGY = "bonus_energy"  # Skill also grants energy
    BONUS_HEAL = "bonus_heal"  # Skill also heals
    SELF_DAMAGE = "self_damage"  # Skill costs HP
    RECOVER_DISCARD = "recover_discard"  # Draw skill pulls from discard instead


class Side(str, Enum):
    """A side of the battle - used for turn ownership and VFX targets."""

    PLAYER = "player"
    ENEMY = "enemy"


class TurnPhase(str, Enum):
    """States of the turn controller."""

    NOT_STARTED = "not_started"
    PLAYER_ACTIVE = "player_active"
    PLAYER_AUTO_END = "player_auto_end"  # Auto-end timer pending
    ENEMY_ACTIVE = "enemy_active"
    ROUND_RESET = "round_reset"
    BATTLE_OVER = "battle_over"


class BattleOutcome(str, Enum):
    """Terminal result of a battle."""

    WIN = "win"
    LOSS = "loss"


class EnemyActionType(str, Enum):
    """Actions the enemy policy can choose."""

    ATTACK = "attack"
    DEFEND = "defend"


class RewardChoice(str, Enum):
    """What the player takes from a victory reward."""

    CARD = "card"  # Keep the offered card
    POINT = "point"  # Take one upgrade point instead
