"""Progression service - upgrades and victory rewards between battles."""

import logging

from ..engine.types import ActionResult
from ..models.cards import CardInstance, effective_stats
from ..models.collection import Collection
from ..models.enums import RewardChoice, UpgradePath

logger = logging.getLogger(__name__)


class ProgressionService:
    """Mutates a collection outside of battle."""

    UPGRADE_COST = 1

    def __init__(self, collection: Collection) -> None:
        self.collection = collection
        self._claimed_rewards: set[str] = set()

    def choose_upgrade(self, instance_id: str, path: UpgradePath) -> ActionResult:
        """Upgrade an owned card along a path for one upgrade point.

        Args:
            instance_id: Card to upgrade
            path: Upgrade path to apply

        Returns:
            ActionResult - rejected if the card is unknown, already upgraded,
            lacks the path, or there are not enough upgrade points
        """
        card = self.collection.get_card(instance_id)
        if card is None:
            return ActionResult(success=False, message="Card not in collection")
        if card.is_upgraded:
            return ActionResult(success=False, message="Card is already upgraded")
        if self.collection.upgrade_points < self.UPGRADE_COST:
            return ActionResult(success=False, message="Not enough upgrade points")
        if not card.upgrade(path):
            return ActionResult(success=False, message=f"No {path.value} upgrade for this card")

        self.collection.upgrade_points -= self.UPGRADE_COST
        name = effective_stats(card).name
        logger.info("Upgraded %s (%s) along %s", name, instance_id, path.value)
        return ActionResult(success=True, message=f"Upgraded to {name}")

    def claim_reward(self, reward: CardInstance, choice: RewardChoice) -> ActionResult:
        """Claim a victory reward: keep the offered card or take an upgrade point.

        A reward can only be claimed once.
        """
        if reward.instance_id in self._claimed_rewards:
            return ActionResult(success=False, message="Reward already claimed")
        self._claimed_rewards.add(reward.instance_id)

        match choice:
            case RewardChoice.CARD:
                self.collection.add_card(reward)
                return ActionResult(success=True, message=f"Added {effective_stats(reward).name} to the collection")
            case RewardChoice.POINT:
                self.collection.upgrade_points += 1
                return ActionResult(success=True, message="Gained 1 upgrade point")

        return ActionResult(success=False, message=f"Unknown reward choice: {choice}")
