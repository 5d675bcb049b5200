"""Card catalog - the templates battle decks and rewards are drawn from."""

import random
from collections.abc import Iterable

from ..models.cards import CardInstance, CardTemplate, EffectModifier, UpgradeOption, create_card
from ..models.collection import Collection
from ..models.enums import CardType, EffectKind, ModifierKind, UpgradePath


class CardCatalog:
    """Lookup of card templates by ID, in catalog order."""

    def __init__(self, templates: Iterable[CardTemplate]) -> None:
        self._templates: dict[str, CardTemplate] = {}
        for template in templates:
            if template.id in self._templates:
                raise ValueError(f"Duplicate template id: {template.id}")
            self._templates[template.id] = template

    def get(self, template_id: str) -> CardTemplate | None:
        return self._templates.get(template_id)

    def __getitem__(self, template_id: str) -> CardTemplate:
        return self._templates[template_id]

    def __contains__(self, template_id: object) -> bool:
        return template_id in self._templates

    def __len__(self) -> int:
        return len(self._templates)

    def all(self) -> list[CardTemplate]:
        return list(self._templates.values())

    def random_template(self, rng: random.Random) -> CardTemplate:
        """Pick a template uniformly at random."""
        if not self._templates:
            raise ValueError("Catalog is empty")
        return rng.choice(self.all())

    def create(self, template_id: str) -> CardInstance:
        """Create a fresh instance of a template."""
        return create_card(self[template_id])


DEFAULT_TEMPLATES: list[CardTemplate] = [
    CardTemplate(
        id="c1",
        type=CardType.ATTACK,
        base_name="Star Slash",
        base_description="Deal {value} damage",
        base_cost=1,
        base_value=8,
        effect_kind=EffectKind.SLASH,
        color="#ef4444",
        upgrade_options={
            UpgradePath.POWER: UpgradeOption(name="Heavy Slash", description="Much more damage", value_delta=5),
            UpgradePath.SPEED: UpgradeOption(
                name="Lightspeed Slash", description="Cheaper", value_delta=-2, cost_delta=-1
            ),
            UpgradePath.SPECIAL: UpgradeOption(
                name="Twin Star Slash",
                description="Hits twice",
                cost_delta=1,
                modifiers=(EffectModifier(kind=ModifierKind.DOUBLE_HIT),),
            ),
        },
    ),
    CardTemplate(
        id="c2",
        type=CardType.DEFEND,
        base_name="Phase Shield",
        base_description="Gain {value} shield",
        base_cost=1,
        base_value=7,
        effect_kind=EffectKind.BLOCK,
        color="#3b82f6",
        upgrade_options={
            UpgradePath.POWER: UpgradeOption(name="Force Field", description="More shield", value_delta=5),
            UpgradePath.SPEED: UpgradeOption(
                name="Light Shield", description="Costs nothing", value_delta=-2, cost_delta=-1
            ),
            UpgradePath.SPECIAL: UpgradeOption(
                name="Absolute Zero",
                description="Gain shield and freeze the enemy",
                cost_delta=1,
                modifiers=(EffectModifier(kind=ModifierKind.FREEZE),),
            ),
        },
    ),
    CardTemplate(
        id="c3",
        type=CardType.ATTACK,
        base_name="Thunderstrike",
        base_description="Deal {value} damage",
        base_cost=2,
        base_value=14,
        effect_kind=EffectKind.THUNDER,
        color="#a855f7",
        upgrade_options={
            UpgradePath.POWER: UpgradeOption(name="Thunderstorm", description="Huge damage boost", value_delta=8),
            UpgradePath.SPEED: UpgradeOption(name="Flash Thunder", description="Cheaper", cost_delta=-1),
            UpgradePath.SPECIAL: UpgradeOption(
                name="Piercing Lance",
                description="Ignores shield",
                modifiers=(EffectModifier(kind=ModifierKind.PIERCE),),
            ),
        },
    ),
    CardTemplate(
        id="c4",
        type=CardType.SKILL,
        base_name="Overcharge",
        base_description="Gain {value} energy",
        base_cost=0,
        base_value=1,
        effect_kind=EffectKind.BUFF_AURA,
        color="#eab308",
        upgrade_options={
            UpgradePath.POWER: UpgradeOption(
                name="Overload",
                description="Gain 3 energy at the cost of 5 HP",
                value_delta=2,
                modifiers=(EffectModifier(kind=ModifierKind.SELF_DAMAGE, amount=5),),
            ),
            UpgradePath.SPEED: UpgradeOption(name="Stable Charge", description="Gain 2 energy", value_delta=1),
            UpgradePath.SPECIAL: UpgradeOption(
                name="Life Conversion",
                description="Gain energy and restore 5 HP",
                modifiers=(EffectModifier(kind=ModifierKind.BONUS_HEAL, amount=5),),
            ),
        },
    ),
    CardTemplate(
        id="c5",
        type=CardType.ATTACK,
        base_name="Fusion Strike",
        base_description="Deal {value} damage",
        base_cost=3,
        base_value=25,
        effect_kind=EffectKind.EXPLOSION,
        color="#f43f5e",
        upgrade_options={
            UpgradePath.POWER: UpgradeOption(name="Meltdown", description="More damage", value_delta=10),
            UpgradePath.SPEED: UpgradeOption(name="Quick Reaction", description="Cost -1", cost_delta=-1),
            UpgradePath.SPECIAL: UpgradeOption(
                name="Execute",
                description="Destroys an enemy below 30 HP",
                modifiers=(EffectModifier(kind=ModifierKind.EXECUTE, threshold=30),),
            ),
        },
    ),
    CardTemplate(
        id="c6",
        type=CardType.ATTACK,
        base_name="Boomerang Blade",
        base_description="Deal {value} damage",
        base_cost=1,
        base_value=6,
        effect_kind=EffectKind.SPIN_SLASH,
        color="#ec4899",
        upgrade_options={
            UpgradePath.POWER: UpgradeOption(name="Heavy Blade", description="Damage +4", value_delta=4),
            UpgradePath.SPEED: UpgradeOption(name="Hyperspeed", description="Costs nothing", value_delta=-1, cost_delta=-1),
            UpgradePath.SPECIAL: UpgradeOption(
                name="Double Spin",
                description="Triggers twice",
                cost_delta=1,
                modifiers=(EffectModifier(kind=ModifierKind.DOUBLE_HIT),),
            ),
        },
    ),
    CardTemplate(
        id="c7",
        type=CardType.ATTACK,
        base_name="Vampiric Touch",
        base_description="Deal {value} damage and heal",
        base_cost=2,
        base_value=8,
        effect_kind=EffectKind.DRAIN,
        color="#be123c",
        drain=True,
        upgrade_options={
            UpgradePath.POWER: UpgradeOption(name="Blood Feast", description="Damage +5", value_delta=5),
            UpgradePath.SPEED: UpgradeOption(name="Swift Drain", description="Cost -1", value_delta=-2, cost_delta=-1),
            UpgradePath.SPECIAL: UpgradeOption(
                name="Life Siphon",
                description="Healing doubled",
                modifiers=(EffectModifier(kind=ModifierKind.LIFESTEAL, multiplier=2),),
            ),
        },
    ),
    CardTemplate(
        id="c9",
        type=CardType.ATTACK,
        base_name="Beam Cannon",
        base_description="Deal {value} damage",
        base_cost=2,
        base_value=12,
        effect_kind=EffectKind.LASER,
        color="#3b82f6",
        upgrade_options={
            UpgradePath.POWER: UpgradeOption(name="High-Energy Cannon", description="Damage +8", value_delta=8),
            UpgradePath.SPEED: UpgradeOption(name="Burst Mode", description="Cost -1", value_delta=-2, cost_delta=-1),
            UpgradePath.SPECIAL: UpgradeOption(
                name="Piercing Beam",
                description="Ignores shield",
                modifiers=(EffectModifier(kind=ModifierKind.PIERCE),),
            ),
        },
    ),
    CardTemplate(
        id="c10",
        type=CardType.SKILL,
        base_name="Forbidden Pact",
        base_description="Trade HP for energy",
        base_cost=0,
        base_value=0,
        effect_kind=EffectKind.VOID,
        color="#7f1d1d",
        upgrade_options={
            UpgradePath.POWER: UpgradeOption(
                name="Demon Pact",
                description="Lose 15 HP, gain 3 energy",
                modifiers=(EffectModifier(kind=ModifierKind.VOID_TRADE, amount=15, energy=3),),
            ),
            UpgradePath.SPEED: UpgradeOption(
                name="Light Pact",
                description="Lose 5 HP, gain 1 energy",
                modifiers=(EffectModifier(kind=ModifierKind.VOID_TRADE, amount=5, energy=1),),
            ),
            UpgradePath.SPECIAL: UpgradeOption(
                name="Equivalent Exchange",
                description="Lose 10 HP, gain 2 energy",
                modifiers=(EffectModifier(kind=ModifierKind.VOID_TRADE, amount=10, energy=2),),
            ),
        },
    ),
    CardTemplate(
        id="c11",
        type=CardType.SKILL,
        base_name="Tactical Supply",
        base_description="Draw {value} cards",
        base_cost=0,
        base_value=2,
        effect_kind=EffectKind.DRAW,
        color="#10b981",
        upgrade_options={
            UpgradePath.POWER: UpgradeOption(
                name="Mass Supply", description="Draw 3 cards, cost +1", value_delta=1, cost_delta=1
            ),
            UpgradePath.SPEED: UpgradeOption(name="Quick Supply", description="Draw 2 cards"),
            UpgradePath.SPECIAL: UpgradeOption(
                name="Energy Supply",
                description="Draw 1 card and gain 1 energy",
                value_delta=-1,
                modifiers=(EffectModifier(kind=ModifierKind.BONUS_ENERGY, amount=1),),
            ),
        },
    ),
    CardTemplate(
        id="c12",
        type=CardType.SKILL,
        base_name="Emergency Expansion",
        base_description="Draw {value} cards",
        base_cost=1,
        base_value=3,
        effect_kind=EffectKind.DRAW,
        color="#059669",
        upgrade_options={
            UpgradePath.POWER: UpgradeOption(
                name="Maximum Expansion", description="Draw 5 cards", value_delta=2, cost_delta=1
            ),
            UpgradePath.SPEED: UpgradeOption(
                name="Portable Expansion", description="Free, draw 2 cards", value_delta=-1, cost_delta=-1
            ),
            UpgradePath.SPECIAL: UpgradeOption(
                name="Recycle",
                description="Return a random card from the discard pile to your hand",
                modifiers=(EffectModifier(kind=ModifierKind.RECOVER_DISCARD, amount=1),),
            ),
        },
    ),
]

# Template IDs of the starter collection, in order
STARTER_DECK = ["c1", "c1", "c1", "c2", "c2", "c3", "c4", "c11"]


def default_catalog() -> CardCatalog:
    """Get the built-in card catalog."""
    return CardCatalog(DEFAULT_TEMPLATES)


def build_starter_collection(catalog: CardCatalog, upgrade_points: int = 0) -> Collection:
    """Create a new player's collection from the starter deck."""
    return Collection(
        cards=[catalog.create(template_id) for template_id in STARTER_DECK],
        upgrade_points=upgrade_points,
    )
