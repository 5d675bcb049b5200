"""Validators for card catalog content."""

from dataclasses import dataclass, field

from ..models.cards import CardTemplate, EffectModifier
from ..models.enums import CardType, EffectKind, ModifierKind
from .catalog import CardCatalog


@dataclass
class ValidationError:
    """A single validation error."""

    field: str
    message: str
    value: str | None = None


@dataclass
class ValidationResult:
    """Result of validation."""

    valid: bool
    errors: list[ValidationError] = field(default_factory=list)

    def add_error(self, field: str, message: str, value: str | None = None) -> None:
        """Add a validation error."""
        self.errors.append(ValidationError(field=field, message=message, value=value))
        self.valid = False

    def merge(self, other: "ValidationResult") -> None:
        """Merge another validation result into this one."""
        if not other.valid:
            self.valid = False
            self.errors.extend(other.errors)


# Effect kinds the SKILL branch of the resolver knows how to handle
SKILL_EFFECT_KINDS = {EffectKind.DRAW, EffectKind.BUFF_AURA, EffectKind.HEAL, EffectKind.VOID}

# Which card types each modifier is meaningful on
MODIFIER_CARD_TYPES: dict[ModifierKind, set[CardType]] = {
    ModifierKind.DOUBLE_HIT: {CardType.ATTACK},
    ModifierKind.EXECUTE: {CardType.ATTACK},
    ModifierKind.PIERCE: {CardType.ATTACK},
    ModifierKind.LIFESTEAL: {CardType.ATTACK},
    ModifierKind.FREEZE: {CardType.DEFEND},
    ModifierKind.VOID_TRADE: {CardType.SKILL},
    ModifierKind.BONUS_ENERGY: {CardType.SKILL},
    ModifierKind.BONUS_HEAL: {CardType.SKILL},
    ModifierKind.SELF_DAMAGE: {CardType.SKILL},
    ModifierKind.RECOVER_DISCARD: {CardType.SKILL},
}


class TemplateValidator:
    """Validate a single card template."""

    def validate(self, template: CardTemplate) -> ValidationResult:
        """Validate a card template.

        Args:
            template: Template to validate

        Returns:
            ValidationResult with any errors found
        """
        result = ValidationResult(valid=True)
        prefix = f"templates.{template.id}"

        if not template.id.strip():
            result.add_error("templates", "Template id cannot be empty")

        if not template.base_name.strip():
            result.add_error(f"{prefix}.base_name", "Name cannot be empty")

        if template.type == CardType.SKILL and template.effect_kind not in SKILL_EFFECT_KINDS:
            result.add_error(
                f"{prefix}.effect_kind",
                f"Skill effect must be one of {sorted(k.value for k in SKILL_EFFECT_KINDS)}",
                template.effect_kind.value,
            )

        if template.type != CardType.SKILL and template.base_value < 0:
            result.add_error(f"{prefix}.base_value", "Attack/defend value cannot be negative", str(template.base_value))

        for path, option in template.upgrade_options.items():
            option_prefix = f"{prefix}.upgrade_options.{path.value}"
            if not option.name.strip():
                result.add_error(f"{option_prefix}.name", "Upgrade name cannot be empty")

            upgraded_value = template.base_value + option.value_delta
            if template.effect_kind == EffectKind.DRAW and upgraded_value < 0:
                result.add_error(f"{option_prefix}.value_delta", "Draw count cannot go negative", str(upgraded_value))

            for modifier in option.modifiers:
                result.merge(self._validate_modifier(template, modifier, f"{option_prefix}.modifiers"))

        return result

    def _validate_modifier(self, template: CardTemplate, modifier: EffectModifier, prefix: str) -> ValidationResult:
        """Validate a modifier against the card it is attached to."""
        result = ValidationResult(valid=True)
        allowed = MODIFIER_CARD_TYPES.get(modifier.kind, set())
        if template.type not in allowed:
            result.add_error(prefix, f"{modifier.kind.value} has no effect on {template.type.value} cards")

        match modifier.kind:
            case ModifierKind.DOUBLE_HIT | ModifierKind.LIFESTEAL:
                if modifier.multiplier < 1:
                    result.add_error(prefix, "Multiplier must be at least 1", str(modifier.multiplier))
            case ModifierKind.EXECUTE:
                if modifier.threshold_fraction is not None and not 0 < modifier.threshold_fraction <= 1:
                    result.add_error(prefix, "Threshold fraction must be in (0, 1]", str(modifier.threshold_fraction))
            case ModifierKind.VOID_TRADE:
                if template.effect_kind != EffectKind.VOID:
                    result.add_error(prefix, "void_trade only applies to void skills")
                if modifier.amount < 0 or modifier.energy < 0:
                    result.add_error(prefix, "HP cost and energy gain cannot be negative")
            case ModifierKind.RECOVER_DISCARD:
                if template.effect_kind != EffectKind.DRAW:
                    result.add_error(prefix, "recover_discard only applies to draw skills")
                if modifier.amount < 1:
                    result.add_error(prefix, "Must recover at least one card", str(modifier.amount))
            case ModifierKind.BONUS_ENERGY | ModifierKind.BONUS_HEAL | ModifierKind.SELF_DAMAGE:
                if modifier.amount < 0:
                    result.add_error(prefix, "Amount cannot be negative", str(modifier.amount))
            case _:
                pass

        return result


class CatalogValidator:
    """Validate a whole catalog."""

    def __init__(self) -> None:
        self.template_validator = TemplateValidator()

    def validate(self, catalog: CardCatalog) -> ValidationResult:
        """Validate every template in a catalog."""
        result = ValidationResult(valid=True)

        if len(catalog) == 0:
            result.add_error("templates", "Catalog must contain at least one template")
            return result

        for template in catalog.all():
            result.merge(self.template_validator.validate(template))

        return result
