"""The player's persistent card collection."""

from dataclasses import dataclass, field

from .cards import CardInstance


@dataclass
class Collection:
    """Cards owned by the player plus the upgrade currency.

    Lives across battles. A battle only ever works on a transient copy of
    the card references (the battle deck).
    """

    cards: list[CardInstance] = field(default_factory=list)
    upgrade_points: int = 0

    def get_card(self, instance_id: str) -> CardInstance | None:
        """Find an owned card by instance ID."""
        for card in self.cards:
            if card.instance_id == instance_id:
                return card
        return None

    def add_card(self, card: CardInstance) -> None:
        self.cards.append(card)

    def __len__(self) -> int:
        return len(self.cards)
