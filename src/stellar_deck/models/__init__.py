"""Card and collection models."""

from .cards import (
    CardInstance,
    CardStats,
    CardTemplate,
    EffectModifier,
    UpgradeOption,
    create_card,
    effective_stats,
)
from .collection import Collection
from .enums import (
    BattleOutcome,
    CardType,
    EffectKind,
    EnemyActionType,
    ModifierKind,
    RewardChoice,
    Side,
    TurnPhase,
    UpgradePath,
)

__all__ = [
    # Cards
    "CardTemplate",
    "UpgradeOption",
    "EffectModifier",
    "CardInstance",
    "CardStats",
    "create_card",
    "effective_stats",
    # Collection
    "Collection",
    # Enums
    "CardType",
    "EffectKind",
    "UpgradePath",
    "ModifierKind",
    "Side",
    "TurnPhase",
    "BattleOutcome",
    "EnemyActionType",
    "RewardChoice",
]
