"""Application configuration using pydantic-settings."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Battle rules and runtime options loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="STELLAR_DECK_",
        case_sensitive=False,
    )

    debug: bool = False  # Invariant violations raise instead of being clamped
    log_level: str = "INFO"

    # Combatants
    player_max_hp: int = 100
    enemy_max_hp: int = 200
    starting_energy: int = 3

    # Deck
    battle_deck_size: int = 30
    opening_hand_size: int = 3
    round_draw_count: int = 2

    # Enemy policy
    enemy_attack_chance: float = 0.7
    enemy_damage_min: int = 8
    enemy_damage_max: int = 17
    enemy_block: int = 10

    # Card effect constants
    void_hp_cost: int = 10
    void_energy_gain: int = 2
    buff_fallback_energy: int = 1
    execute_damage: int = 999

    # Scripted delays in seconds
    play_settle_delay: float = 0.3
    auto_end_delay: float = 1.5
    enemy_turn_delay: float = 2.0
    reward_delay: float = 2.0

    # Presentation hints
    log_window: int = 3  # Number of recent log lines a UI should show

    # Progression
    starting_upgrade_points: int = 0

    # Headless simulation (python -m stellar_deck)
    simulation_battles: int = 5


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
