"""Effect resolver - applies a played card to the combat state."""

import logging
import random

from ..config import Settings
from ..models.cards import CardInstance, CardStats, EffectModifier, effective_stats
from ..models.enums import CardType, EffectKind, ModifierKind, Side
from .piles import Piles
from .types import CombatState, ResolutionResult

logger = logging.getLogger(__name__)


class EffectResolver:
    """Resolves card effects against combat state and piles.

    Special rules come from the modifiers on the card's chosen upgrade,
    never from card IDs.
    """

    def __init__(self, settings: Settings, rng: random.Random) -> None:
        self.settings = settings
        self.rng = rng

    def resolve(self, card: CardInstance, state: CombatState, piles: Piles) -> ResolutionResult:
        """Resolve a card whose cost has already been paid.

        Args:
            card: The card being played
            state: Combat state to mutate
            piles: Piles to mutate (draw/recover skills)

        Returns:
            ResolutionResult with log lines and VFX triggers
        """
        stats = effective_stats(card)
        result = ResolutionResult(card_name=stats.name)
        result.log(f"You played {stats.name}!")

        match card.template.type:
            case CardType.ATTACK:
                self._resolve_attack(card, stats, state, result)
            case CardType.DEFEND:
                self._resolve_defend(stats, state, result)
            case CardType.SKILL:
                self._resolve_skill(stats, state, piles, result)

        logger.debug("Resolved %s (%s): %s", stats.name, card.instance_id, result.messages)
        return result

    def _resolve_attack(
        self,
        card: CardInstance,
        stats: CardStats,
        state: CombatState,
        result: ResolutionResult,
    ) -> None:
        """Deal damage to the enemy, shield first unless the card pierces."""
        damage = max(0, stats.value)
        true_damage = stats.has_modifier(ModifierKind.PIERCE)

        double_hit = stats.get_modifier(ModifierKind.DOUBLE_HIT)
        if double_hit:
            # Flat multiplier: one shield check, one on-hit trigger
            damage *= double_hit.multiplier
            result.log(f"{stats.name}! {double_hit.multiplier * 100}% damage")

        execute = stats.get_modifier(ModifierKind.EXECUTE)
        if execute and self._below_execute_threshold(execute, state):
            damage = self.settings.execute_damage
            result.log(f"{stats.name}! Execute!")
            result.trigger(EffectKind.EXPLOSION, Side.ENEMY)

        damage_result = state.damage_enemy(damage, true_damage=true_damage)
        result.damage = damage_result

        if damage_result.hp_loss == 0 and damage_result.absorbed > 0:
            result.log("The shield blocked the attack")
        elif true_damage and state.enemy_shield > 0:
            result.log(f"Pierced the shield for {damage_result.hp_loss} damage")

        lifesteal = stats.get_modifier(ModifierKind.LIFESTEAL)
        if card.template.drain or lifesteal:
            multiplier = lifesteal.multiplier if lifesteal else 1
            result.healed = state.heal_player(damage_result.hp_loss * multiplier)
            result.trigger(EffectKind.DRAIN, Side.PLAYER)

        result.trigger(stats.effect_kind, Side.ENEMY)

    def _below_execute_threshold(self, modifier: EffectModifier, state: CombatState) -> bool:
        if modifier.threshold is not None and state.enemy_hp < modifier.threshold:
            return True
        if modifier.threshold_fraction is not None:
            return state.enemy_hp < state.enemy_max_hp * modifier.threshold_fraction
        return False

    def _resolve_defend(self, stats: CardStats, state: CombatState, result: ResolutionResult) -> None:
        """Add shield, optionally freezing the enemy."""
        gained = max(0, stats.value)
        state.player_shield += gained
        result.shield_gained = gained
        result.trigger(stats.effect_kind, Side.PLAYER)

        if stats.has_modifier(ModifierKind.FREEZE):
            state.enemy_frozen = True
            result.log("A chill sets in! The enemy is frozen")
            result.trigger(EffectKind.ICE_NOVA, Side.ENEMY)

    def _resolve_skill(
        self,
        stats: CardStats,
        state: CombatState,
        piles: Piles,
        result: ResolutionResult,
    ) -> None:
        """Branch on the skill's effect kind, then apply bonus modifiers."""
        match stats.effect_kind:
            case EffectKind.DRAW:
                recover = stats.get_modifier(ModifierKind.RECOVER_DISCARD)
                if recover:
                    recovered = piles.recover_from_discard(recover.amount, self.rng)
                    result.cards_drawn = recovered
                    result.log(f"Recovered {recovered} card(s) from the discard pile")
                else:
                    requested = max(0, stats.value)
                    drawn = piles.draw(requested)
                    result.cards_drawn = drawn
                    result.log(f"Resupply! Drew {drawn} card(s)")
                    if drawn < requested:
                        result.log("The draw pile is empty")
                result.trigger(EffectKind.DRAW, Side.PLAYER)

            case EffectKind.BUFF_AURA:
                gain = stats.value if stats.value > 0 else self.settings.buff_fallback_energy
                state.gain_energy(gain)
                result.energy_gained += gain
                result.trigger(EffectKind.BUFF_AURA, Side.PLAYER)

            case EffectKind.HEAL:
                result.healed += state.heal_player(stats.value)
                result.trigger(EffectKind.HEAL, Side.PLAYER)

            case EffectKind.VOID:
                trade = stats.get_modifier(ModifierKind.VOID_TRADE)
                hp_cost = trade.amount if trade else self.settings.void_hp_cost
                energy_gain = trade.energy if trade else self.settings.void_energy_gain
                state.pay_player_hp(hp_cost)
                state.gain_energy(energy_gain)
                result.energy_gained += energy_gain
                result.log("Forbidden pact: life traded for energy")
                result.trigger(EffectKind.VOID, Side.PLAYER)

            case _:
                logger.warning("Skill %s has unsupported effect kind %s", stats.name, stats.effect_kind.value)

        bonus_energy = stats.get_modifier(ModifierKind.BONUS_ENERGY)
        if bonus_energy:
            state.gain_energy(bonus_energy.amount)
            result.energy_gained += bonus_energy.amount

        bonus_heal = stats.get_modifier(ModifierKind.BONUS_HEAL)
        if bonus_heal:
            result.healed += state.heal_player(bonus_heal.amount)
            result.trigger(EffectKind.HEAL, Side.PLAYER)

        self_damage = stats.get_modifier(ModifierKind.SELF_DAMAGE)
        if self_damage:
            lost = state.pay_player_hp(self_damage.amount)
            result.log(f"Paid {lost} HP")
