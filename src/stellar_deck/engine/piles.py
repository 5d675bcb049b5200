"""Pile manager - draw pile, hand and discard pile of one battle."""

import logging
import random
from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, TypeVar

from ..models.cards import CardInstance, create_card

if TYPE_CHECKING:
    from ..content.catalog import CardCatalog

logger = logging.getLogger(__name__)

T = TypeVar("T")


def shuffle(cards: Sequence[T], rng: random.Random) -> list[T]:
    """Return a uniformly random permutation of ``cards`` (Fisher-Yates).

    The input sequence is left untouched.
    """
    result = list(cards)
    for i in range(len(result) - 1, 0, -1):
        j = rng.randint(0, i)
        result[i], result[j] = result[j], result[i]
    return result


@dataclass
class DrawResult:
    """Result of a draw request."""

    new_hand: list[CardInstance]
    new_draw_pile: list[CardInstance]
    drawn_count: int

    @property
    def drawn(self) -> list[CardInstance]:
        """Cards that were drawn, in draw order."""
        return self.new_hand[len(self.new_hand) - self.drawn_count :] if self.drawn_count else []


def draw(count: int, draw_pile: Sequence[CardInstance], hand: Sequence[CardInstance]) -> DrawResult:
    """Draw up to ``count`` cards from the front of the draw pile into the hand.

    A short pile draws what it has. The discard pile is never reshuffled in.
    """
    count = max(0, count)
    drawn = list(draw_pile[:count])
    return DrawResult(
        new_hand=[*hand, *drawn],
        new_draw_pile=list(draw_pile[len(drawn) :]),
        drawn_count=len(drawn),
    )


def assemble_battle_deck(
    collection_cards: Sequence[CardInstance],
    catalog: "CardCatalog",
    size: int,
    rng: random.Random,
) -> list[CardInstance]:
    """Build the battle deck from the collection.

    Pads with fresh random catalog cards (not owned by the collection) up to
    ``size``, then shuffles and truncates to ``size``.
    """
    cards = list(collection_cards)
    padding = 0
    while len(cards) < size:
        cards.append(create_card(catalog.random_template(rng)))
        padding += 1
    if padding:
        logger.debug("Padded battle deck with %d random cards", padding)
    return shuffle(cards, rng)[:size]


@dataclass
class Piles:
    """The three piles of a battle. Every deck card is in exactly one of them."""

    draw_pile: list[CardInstance] = field(default_factory=list)
    hand: list[CardInstance] = field(default_factory=list)
    discard_pile: list[CardInstance] = field(default_factory=list)

    @classmethod
    def from_deck(cls, deck: Sequence[CardInstance]) -> "Piles":
        return cls(draw_pile=list(deck))

    def draw(self, count: int) -> int:
        """Draw into the hand. Returns the number of cards actually drawn."""
        result = draw(count, self.draw_pile, self.hand)
        self.hand = result.new_hand
        self.draw_pile = result.new_draw_pile
        return result.drawn_count

    def find_in_hand(self, instance_id: str) -> CardInstance | None:
        for card in self.hand:
            if card.instance_id == instance_id:
                return card
        return None

    def move_to_discard(self, card: CardInstance) -> bool:
        """Move a hand card to the discard pile. Returns False if it isn't in hand."""
        for index, held in enumerate(self.hand):
            if held.instance_id == card.instance_id:
                self.discard_pile.append(self.hand.pop(index))
                return True
        return False

    def recover_from_discard(self, count: int, rng: random.Random) -> int:
        """Move up to ``count`` random discard cards back into the hand."""
        recovered = 0
        while recovered < count and self.discard_pile:
            index = rng.randrange(len(self.discard_pile))
            self.hand.append(self.discard_pile.pop(index))
            recovered += 1
        return recovered

    def total(self) -> int:
        return len(self.draw_pile) + len(self.hand) + len(self.discard_pile)

    def all_ids(self) -> Counter[str]:
        """Multiset of instance IDs across all three piles."""
        return Counter(card.instance_id for card in (*self.draw_pile, *self.hand, *self.discard_pile))
