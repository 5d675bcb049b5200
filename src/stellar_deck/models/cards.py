"""Card templates, card instances and effective stat calculation."""

import uuid
from dataclasses import dataclass, field

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .enums import CardType, EffectKind, ModifierKind, UpgradePath

VALUE_PLACEHOLDER = "{value}"


class EffectModifier(BaseModel):
    """A special rule attached to an upgrade option.

    Only the fields relevant to ``kind`` are read by the resolver:
    DOUBLE_HIT / LIFESTEAL use ``multiplier``, EXECUTE uses ``threshold`` or
    ``threshold_fraction``, VOID_TRADE uses ``amount`` (HP cost) and ``energy``,
    the BONUS_* / SELF_DAMAGE / RECOVER_DISCARD kinds use ``amount``.
    """

    model_config = ConfigDict(frozen=True)

    kind: ModifierKind
    amount: int = 0
    energy: int = 0
    multiplier: int = 2
    threshold: int | None = Field(default=None, description="Absolute enemy HP threshold")
    threshold_fraction: float | None = Field(default=None, description="Fraction of max enemy HP")

    @model_validator(mode="after")
    def _check_execute_threshold(self) -> "EffectModifier":
        if self.kind == ModifierKind.EXECUTE and self.threshold is None and self.threshold_fraction is None:
            raise ValueError("EXECUTE modifier needs threshold or threshold_fraction")
        return self


class UpgradeOption(BaseModel):
    """One branch of a card's upgrade tree."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    value_delta: int = 0
    cost_delta: int = 0
    modifiers: tuple[EffectModifier, ...] = ()


class CardTemplate(BaseModel):
    """Immutable catalog definition of a card."""

    model_config = ConfigDict(frozen=True)

    id: str
    type: CardType
    base_name: str
    base_description: str = Field(description="Card text, may contain the {value} placeholder")
    base_cost: int = Field(ge=0)
    base_value: int
    effect_kind: EffectKind
    color: str = "#ffffff"
    drain: bool = False  # Heals the player by the HP damage dealt
    upgrade_options: dict[UpgradePath, UpgradeOption] = Field(default_factory=dict)


@dataclass
class CardInstance:
    """A concrete copy of a template owned by a collection or a battle deck.

    Only ``level`` and ``chosen_path`` ever change, and only once.
    """

    template: CardTemplate
    instance_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    level: int = 1
    chosen_path: UpgradePath | None = None

    @property
    def template_id(self) -> str:
        return self.template.id

    @property
    def is_upgraded(self) -> bool:
        return self.chosen_path is not None

    def upgrade(self, path: UpgradePath) -> bool:
        """Apply an upgrade path. Returns False if already upgraded or the path doesn't exist."""
        if self.chosen_path is not None:
            return False
        if path not in self.template.upgrade_options:
            return False
        self.chosen_path = path
        self.level = 2
        return True


@dataclass(frozen=True)
class CardStats:
    """Effective stats of a card instance."""

    cost: int
    value: int
    name: str
    description: str
    long_description: str
    effect_kind: EffectKind
    modifiers: tuple[EffectModifier, ...] = ()

    def get_modifier(self, kind: ModifierKind) -> EffectModifier | None:
        """Get the first modifier of a kind, if any."""
        for modifier in self.modifiers:
            if modifier.kind == kind:
                return modifier
        return None

    def has_modifier(self, kind: ModifierKind) -> bool:
        return self.get_modifier(kind) is not None


def create_card(template: CardTemplate) -> CardInstance:
    """Create a fresh, unupgraded instance of a template."""
    return CardInstance(template=template)


def effective_stats(card: CardInstance) -> CardStats:
    """Compute a card's effective stats from its template and chosen path.

    Cost is clamped at zero even when the upgrade's cost delta is negative.
    """
    template = card.template
    value = template.base_value
    cost = template.base_cost
    name = template.base_name
    modifiers: tuple[EffectModifier, ...] = ()
    upgrade: UpgradeOption | None = None

    if card.chosen_path is not None:
        upgrade = template.upgrade_options.get(card.chosen_path)

    if upgrade is not None:
        value += upgrade.value_delta
        cost += upgrade.cost_delta
        name = upgrade.name
        modifiers = upgrade.modifiers

    cost = max(0, cost)
    description = template.base_description.replace(VALUE_PLACEHOLDER, str(value))
    long_description = f"{description} ({upgrade.description})" if upgrade else description

    return CardStats(
        cost=cost,
        value=value,
        name=name,
        description=description,
        long_description=long_description,
        effect_kind=template.effect_kind,
        modifiers=modifiers,
    )
