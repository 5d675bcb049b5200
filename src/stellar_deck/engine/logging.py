"""Battle logging system for tracking and verifying engine output.

Provides structured logging of all battle events including:
- Battle start and end
- Card plays, rejections and resolutions
- Player turn endings and enemy actions
- Round starts with draw results
- Player-facing messages (the feed a UI shows)
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..models.enums import BattleOutcome
from .types import BattleSnapshot


class LogEventType(str, Enum):
    """Types of log events."""

    # Battle lifecycle
    BATTLE_START = "battle_start"
    BATTLE_END = "battle_end"
    REWARD_GRANTED = "reward_granted"

    # Player actions
    CARD_PLAYED = "card_played"  # Accepted and paid for, effect pending
    CARD_RESOLVED = "card_resolved"
    PLAY_REJECTED = "play_rejected"
    TURN_ENDED = "turn_ended"

    # Enemy phase
    ENEMY_ACTION = "enemy_action"
    ENEMY_FROZEN = "enemy_frozen"

    # Round lifecycle
    ROUND_START = "round_start"

    # Player-facing feed line
    MESSAGE = "message"


@dataclass
class LogEntry:
    """A single log entry representing a battle event."""

    event_type: LogEventType
    round_number: int
    timestamp_order: int = 0  # Order within the battle for deterministic sorting

    # Event-specific data
    message: str | None = None
    card_name: str | None = None
    instance_id: str | None = None
    value: int | None = None
    reason: str | None = None
    action: str | None = None
    outcome: BattleOutcome | None = None

    # State after the event
    snapshot: BattleSnapshot | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        result: dict[str, Any] = {
            "event_type": self.event_type.value,
            "round_number": self.round_number,
            "timestamp_order": self.timestamp_order,
        }

        if self.message is not None:
            result["message"] = self.message
        if self.card_name is not None:
            result["card_name"] = self.card_name
        if self.instance_id is not None:
            result["instance_id"] = self.instance_id
        if self.value is not None:
            result["value"] = self.value
        if self.reason is not None:
            result["reason"] = self.reason
        if self.action is not None:
            result["action"] = self.action
        if self.outcome is not None:
            result["outcome"] = self.outcome.value
        if self.snapshot is not None:
            result["snapshot"] = self.snapshot.to_dict()

        return result


@dataclass
class BattleLog:
    """Complete log of one battle."""

    battle_id: str
    entries: list[LogEntry] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "battle_id": self.battle_id,
            "entries": [entry.to_dict() for entry in self.entries],
        }

    def get_entries_by_type(self, event_type: LogEventType) -> list[LogEntry]:
        """Get all entries of a specific type."""
        return [e for e in self.entries if e.event_type == event_type]

    def get_entries_for_round(self, round_number: int) -> list[LogEntry]:
        """Get all entries for a specific round."""
        return [e for e in self.entries if e.round_number == round_number]

    def messages(self) -> list[str]:
        """All player-facing messages, oldest first."""
        return [e.message for e in self.entries if e.event_type == LogEventType.MESSAGE and e.message]

    def recent(self, count: int = 3) -> list[str]:
        """The visible feed window: the last ``count`` messages, newest first."""
        if count <= 0:
            return []
        return list(reversed(self.messages()[-count:]))

    def format_readable(self) -> str:
        """Format the log in a human-readable format."""
        lines: list[str] = []
        lines.append(f"=== Battle Log ({self.battle_id}) ===")

        current_round = -1
        for entry in self.entries:
            if entry.round_number != current_round:
                current_round = entry.round_number
                lines.append(f"\n--- Round {current_round} ---")
            lines.append(self._format_entry(entry))

        return "\n".join(lines)

    def _format_entry(self, entry: LogEntry) -> str:
        """Format a single log entry."""
        match entry.event_type:
            case LogEventType.BATTLE_START:
                return "  Battle begins"

            case LogEventType.CARD_PLAYED:
                return f"  > Played {entry.card_name} (cost {entry.value})"

            case LogEventType.CARD_RESOLVED:
                hp = ""
                if entry.snapshot:
                    hp = f" [enemy HP {entry.snapshot.enemy_hp}, shield {entry.snapshot.enemy_shield}]"
                return f"  = {entry.card_name} resolved{hp}"

            case LogEventType.PLAY_REJECTED:
                return f"  x Play of {entry.instance_id} rejected: {entry.reason}"

            case LogEventType.TURN_ENDED:
                return f"  Player turn ends ({entry.reason})"

            case LogEventType.ENEMY_ACTION:
                return f"  Enemy {entry.action} for {entry.value}"

            case LogEventType.ENEMY_FROZEN:
                return "  Enemy is frozen and skips its action"

            case LogEventType.ROUND_START:
                return f"  Round starts, drew {entry.value}"

            case LogEventType.MESSAGE:
                return f"    {entry.message}"

            case LogEventType.BATTLE_END:
                return f"  *** {entry.outcome.value.upper() if entry.outcome else '?'} ***"

            case LogEventType.REWARD_GRANTED:
                return f"  Reward offered: {entry.card_name}"

            case _:
                return f"  {entry.event_type.value}: {entry.message or ''}"


class BattleLogger:
    """Logger for tracking battle events.

    Usage:
        logger = BattleLogger(battle_id="abc")
        logger.log_battle_start(snapshot)
        logger.log_message(1, "Battle begins!")
        # ... log events ...
        log = logger.get_log()
        print(log.format_readable())
    """

    def __init__(self, battle_id: str) -> None:
        """Initialize the logger for a battle."""
        self.battle_id = battle_id
        self._log = BattleLog(battle_id=battle_id)
        self._order_counter = 0

    def _next_order(self) -> int:
        """Get the next timestamp order value."""
        self._order_counter += 1
        return self._order_counter

    def _append(self, entry: LogEntry) -> LogEntry:
        entry.timestamp_order = self._next_order()
        self._log.entries.append(entry)
        return entry

    def get_log(self) -> BattleLog:
        """Get the complete battle log."""
        return self._log

    def clear(self) -> None:
        """Clear all log entries."""
        self._log.entries.clear()
        self._order_counter = 0

    def log_battle_start(self, snapshot: BattleSnapshot) -> None:
        """Log the start of the battle with the opening state."""
        self._append(LogEntry(event_type=LogEventType.BATTLE_START, round_number=1, snapshot=snapshot))

    def log_message(self, round_number: int, message: str) -> None:
        """Log a player-facing message."""
        self._append(LogEntry(event_type=LogEventType.MESSAGE, round_number=round_number, message=message))

    def log_card_played(self, round_number: int, card_name: str, instance_id: str, cost: int) -> None:
        """Log an accepted play (cost paid, effect pending)."""
        self._append(
            LogEntry(
                event_type=LogEventType.CARD_PLAYED,
                round_number=round_number,
                card_name=card_name,
                instance_id=instance_id,
                value=cost,
            )
        )

    def log_play_rejected(self, round_number: int, instance_id: str, reason: str) -> None:
        """Log a rejected play request."""
        self._append(
            LogEntry(
                event_type=LogEventType.PLAY_REJECTED,
                round_number=round_number,
                instance_id=instance_id,
                reason=reason,
            )
        )

    def log_card_resolved(
        self,
        round_number: int,
        card_name: str,
        instance_id: str,
        snapshot: BattleSnapshot,
    ) -> None:
        """Log a committed card effect with the resulting state."""
        self._append(
            LogEntry(
                event_type=LogEventType.CARD_RESOLVED,
                round_number=round_number,
                card_name=card_name,
                instance_id=instance_id,
                snapshot=snapshot,
            )
        )

    def log_turn_ended(self, round_number: int, reason: str) -> None:
        """Log the end of the player's turn."""
        self._append(LogEntry(event_type=LogEventType.TURN_ENDED, round_number=round_number, reason=reason))

    def log_enemy_action(self, round_number: int, action: str, value: int, snapshot: BattleSnapshot) -> None:
        """Log an enemy action with the resulting state."""
        self._append(
            LogEntry(
                event_type=LogEventType.ENEMY_ACTION,
                round_number=round_number,
                action=action,
                value=value,
                snapshot=snapshot,
            )
        )

    def log_enemy_frozen(self, round_number: int) -> None:
        """Log a skipped enemy action."""
        self._append(LogEntry(event_type=LogEventType.ENEMY_FROZEN, round_number=round_number))

    def log_round_start(self, round_number: int, drawn: int, snapshot: BattleSnapshot) -> None:
        """Log the start of a new round with the number of cards drawn."""
        self._append(
            LogEntry(
                event_type=LogEventType.ROUND_START,
                round_number=round_number,
                value=drawn,
                snapshot=snapshot,
            )
        )

    def log_battle_end(self, round_number: int, outcome: BattleOutcome, snapshot: BattleSnapshot) -> None:
        """Log the battle outcome."""
        self._append(
            LogEntry(
                event_type=LogEventType.BATTLE_END,
                round_number=round_number,
                outcome=outcome,
                snapshot=snapshot,
            )
        )

    def log_reward(self, round_number: int, card_name: str, instance_id: str) -> None:
        """Log the reward offered after a victory."""
        self._append(
            LogEntry(
                event_type=LogEventType.REWARD_GRANTED,
                round_number=round_number,
                card_name=card_name,
                instance_id=instance_id,
            )
        )
