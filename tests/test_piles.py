"""Tests for pile management."""

import random
from collections import Counter

from stellar_deck.engine import Piles, assemble_battle_deck, draw, shuffle


class TestShuffle:
    """Tests for the Fisher-Yates shuffle."""

    def test_is_permutation(self):
        """Test shuffling keeps exactly the same elements."""
        items = list(range(20))

        result = shuffle(items, random.Random(7))

        assert sorted(result) == items

    def test_input_untouched(self):
        """Test the input sequence is not modified."""
        items = list(range(10))

        shuffle(items, random.Random(7))

        assert items == list(range(10))

    def test_deterministic_with_seed(self):
        """Test the same seed gives the same order."""
        items = list(range(10))

        assert shuffle(items, random.Random(3)) == shuffle(items, random.Random(3))

    def test_empty_and_single(self):
        """Test degenerate inputs."""
        rng = random.Random(1)
        assert shuffle([], rng) == []
        assert shuffle(["a"], rng) == ["a"]

    def test_every_position_reachable(self):
        """Test each element lands in each position over many shuffles."""
        rng = random.Random(11)
        seen = {i: set() for i in range(4)}
        for _ in range(500):
            for position, value in enumerate(shuffle([0, 1, 2, 3], rng)):
                seen[value].add(position)

        assert all(positions == {0, 1, 2, 3} for positions in seen.values())


class TestDraw:
    """Tests for the pure draw function."""

    def test_draw_from_front(self, catalog):
        """Test cards are drawn from the front and appended to the hand."""
        held = catalog.create("c2")
        pile = [catalog.create("c1") for _ in range(3)]

        result = draw(2, pile, [held])

        assert result.new_hand == [held, pile[0], pile[1]]
        assert result.new_draw_pile == [pile[2]]
        assert result.drawn_count == 2
        assert result.drawn == [pile[0], pile[1]]

    def test_inputs_untouched(self, catalog):
        """Test the draw pile and hand passed in are not modified."""
        hand = [catalog.create("c2")]
        pile = [catalog.create("c1") for _ in range(3)]

        draw(2, pile, hand)

        assert len(hand) == 1
        assert len(pile) == 3

    def test_short_pile(self, catalog):
        """Test drawing more than the pile holds draws what is there."""
        pile = [catalog.create("c1")]

        result = draw(3, pile, [])

        assert result.drawn_count == 1
        assert result.new_draw_pile == []

    def test_empty_pile(self, catalog):
        """Test drawing from an empty pile is a no-op."""
        hand = [catalog.create("c1")]

        result = draw(2, [], hand)

        assert result.drawn_count == 0
        assert result.drawn == []
        assert result.new_hand == hand

    def test_zero_and_negative_count(self, catalog):
        """Test non-positive counts draw nothing."""
        pile = [catalog.create("c1")]

        assert draw(0, pile, []).drawn_count == 0
        assert draw(-2, pile, []).drawn_count == 0


class TestAssembleBattleDeck:
    """Tests for battle deck assembly."""

    def test_pads_small_collection(self, catalog, rng):
        """Test a small collection is padded with fresh random cards."""
        owned = [catalog.create("c1") for _ in range(3)]

        deck = assemble_battle_deck(owned, catalog, 10, rng)

        assert len(deck) == 10
        assert all(card in deck for card in owned)
        assert len({card.instance_id for card in deck}) == 10

    def test_truncates_large_collection(self, catalog, rng):
        """Test a large collection is cut down to the deck size."""
        owned = [catalog.create("c2") for _ in range(12)]

        deck = assemble_battle_deck(owned, catalog, 10, rng)

        assert len(deck) == 10
        owned_ids = {card.instance_id for card in owned}
        assert all(card.instance_id in owned_ids for card in deck)

    def test_collection_untouched(self, catalog, rng):
        """Test padding does not add cards to the collection list."""
        owned = [catalog.create("c1")]

        assemble_battle_deck(owned, catalog, 5, rng)

        assert len(owned) == 1


class TestPiles:
    """Tests for the Piles container."""

    def test_from_deck(self, catalog):
        """Test a new battle puts the whole deck in the draw pile."""
        deck = [catalog.create("c1") for _ in range(4)]

        piles = Piles.from_deck(deck)

        assert piles.draw_pile == deck
        assert piles.hand == []
        assert piles.discard_pile == []
        assert piles.total() == 4

    def test_draw_into_hand(self, catalog):
        """Test drawing updates hand and draw pile."""
        piles = Piles.from_deck([catalog.create("c1") for _ in range(4)])

        assert piles.draw(3) == 3
        assert piles.draw(3) == 1
        assert len(piles.hand) == 4
        assert piles.draw_pile == []

    def test_move_to_discard(self, catalog):
        """Test a hand card moves to the discard pile."""
        card = catalog.create("c1")
        piles = Piles(hand=[card])

        assert piles.move_to_discard(card)
        assert piles.hand == []
        assert piles.discard_pile == [card]
        assert not piles.move_to_discard(card)

    def test_find_in_hand(self, catalog):
        """Test hand lookup by instance ID."""
        card = catalog.create("c1")
        piles = Piles(draw_pile=[catalog.create("c2")], hand=[card])

        assert piles.find_in_hand(card.instance_id) is card
        assert piles.find_in_hand(piles.draw_pile[0].instance_id) is None

    def test_recover_from_discard(self, catalog, rng):
        """Test recovering moves at most the requested number of cards."""
        discarded = [catalog.create("c1") for _ in range(3)]
        piles = Piles(discard_pile=list(discarded))

        assert piles.recover_from_discard(2, rng) == 2
        assert len(piles.hand) == 2
        assert len(piles.discard_pile) == 1
        assert piles.recover_from_discard(5, rng) == 1
        assert piles.recover_from_discard(1, rng) == 0

    def test_all_ids(self, catalog):
        """Test the multiset of IDs spans all piles."""
        a, b, c = (catalog.create("c1") for _ in range(3))
        piles = Piles(draw_pile=[a], hand=[b], discard_pile=[c])

        assert piles.all_ids() == Counter({a.instance_id: 1, b.instance_id: 1, c.instance_id: 1})
