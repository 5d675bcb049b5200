"""Entry point for running headless Stellar Deck battles."""

import logging
import random
import sys

from stellar_deck.config import get_settings
from stellar_deck.content import CatalogValidator, build_starter_collection, default_catalog
from stellar_deck.models import RewardChoice
from stellar_deck.services import ProgressionService, simulate_battle


def main() -> int:
    """Play a series of battles, claiming rewards and spending upgrade points in between."""
    settings = get_settings()

    logging.basicConfig(
        level=logging.DEBUG if settings.debug else getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    catalog = default_catalog()
    validation = CatalogValidator().validate(catalog)
    if not validation.valid:
        for error in validation.errors:
            logging.error("Catalog error in %s: %s", error.field, error.message)
        return 1

    rng = random.Random()
    collection = build_starter_collection(catalog, upgrade_points=settings.starting_upgrade_points)
    progression = ProgressionService(collection)
    wins = 0

    logging.info("Simulating %d battles...", settings.simulation_battles)
    for number in range(1, settings.simulation_battles + 1):
        telemetry = simulate_battle(collection, catalog, settings, rng)
        logging.info(
            "Battle %d: %s in %d rounds (player %d HP, enemy %d HP, %d cards played)",
            number,
            telemetry.outcome.value if telemetry.outcome else "unfinished",
            telemetry.rounds,
            telemetry.player_hp_end,
            telemetry.enemy_hp_end,
            telemetry.cards_played,
        )
        if not telemetry.won:
            continue
        wins += 1

        if telemetry.reward is not None:
            choice = RewardChoice.CARD if rng.random() < 0.5 else RewardChoice.POINT
            logging.info(progression.claim_reward(telemetry.reward, choice).message)

        for card in collection.cards:
            if collection.upgrade_points == 0:
                break
            if card.is_upgraded or not card.template.upgrade_options:
                continue
            path = rng.choice(sorted(card.template.upgrade_options, key=lambda p: p.value))
            logging.info(progression.choose_upgrade(card.instance_id, path).message)

    logging.info("Won %d of %d battles with a %d-card collection", wins, settings.simulation_battles, len(collection))
    return 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        sys.exit(0)
