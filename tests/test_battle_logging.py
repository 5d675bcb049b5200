"""Tests for the battle logging system."""

from stellar_deck.engine import BattleLog, BattleLogger, LogEntry, LogEventType
from stellar_deck.models import BattleOutcome, TurnPhase, UpgradePath


class TestLogEntry:
    """Tests for LogEntry data class."""

    def test_to_dict_skips_empty_fields(self):
        """Test only populated fields are serialized."""
        entry = LogEntry(event_type=LogEventType.MESSAGE, round_number=2, timestamp_order=5, message="Hi")

        assert entry.to_dict() == {
            "event_type": "message",
            "round_number": 2,
            "timestamp_order": 5,
            "message": "Hi",
        }

    def test_to_dict_outcome(self):
        """Test enum fields are serialized by value."""
        entry = LogEntry(event_type=LogEventType.BATTLE_END, round_number=4, outcome=BattleOutcome.LOSS)

        assert entry.to_dict()["outcome"] == "loss"


class TestBattleLogger:
    """Tests for BattleLogger."""

    def test_entries_are_ordered(self):
        """Test each entry gets an increasing order number."""
        logger = BattleLogger(battle_id="b1")
        logger.log_message(1, "one")
        logger.log_turn_ended(1, "turn ended")
        logger.log_message(2, "two")

        orders = [entry.timestamp_order for entry in logger.get_log().entries]
        assert orders == [1, 2, 3]

    def test_recent_newest_first(self):
        """Test the feed window returns the latest messages, newest first."""
        logger = BattleLogger(battle_id="b1")
        for text in ["a", "b", "c", "d"]:
            logger.log_message(1, text)
        logger.log_turn_ended(1, "turn ended")

        log = logger.get_log()
        assert log.recent(3) == ["d", "c", "b"]
        assert log.recent(10) == ["d", "c", "b", "a"]
        assert log.recent(0) == []
        assert log.messages() == ["a", "b", "c", "d"]

    def test_filters(self):
        """Test lookups by type and round."""
        logger = BattleLogger(battle_id="b1")
        logger.log_card_played(1, "Star Slash", "x1", 1)
        logger.log_play_rejected(1, "x2", "Not enough energy")
        logger.log_enemy_frozen(2)

        log = logger.get_log()
        assert len(log.get_entries_by_type(LogEventType.CARD_PLAYED)) == 1
        assert len(log.get_entries_for_round(1)) == 2
        assert log.get_entries_for_round(2)[0].event_type == LogEventType.ENEMY_FROZEN

    def test_clear(self):
        """Test clearing resets entries and ordering."""
        logger = BattleLogger(battle_id="b1")
        logger.log_message(1, "one")

        logger.clear()
        logger.log_message(1, "two")

        entries = logger.get_log().entries
        assert len(entries) == 1
        assert entries[0].timestamp_order == 1

    def test_format_readable(self):
        """Test the human-readable dump groups by round."""
        logger = BattleLogger(battle_id="b1")
        logger.log_message(1, "Battle start!")
        logger.log_card_played(1, "Star Slash", "x1", 1)
        logger.log_turn_ended(1, "turn ended")
        logger.log_enemy_frozen(1)
        logger.log_message(2, "Round 2 begins, drew 2 card(s)")

        text = logger.get_log().format_readable()

        assert text.startswith("=== Battle Log (b1) ===")
        assert "--- Round 1 ---" in text
        assert "--- Round 2 ---" in text
        assert "> Played Star Slash (cost 1)" in text
        assert "Player turn ends (turn ended)" in text
        assert "Enemy is frozen" in text

    def test_log_to_dict(self):
        """Test the whole log serializes."""
        log = BattleLog(battle_id="b1")

        assert log.to_dict() == {"battle_id": "b1", "entries": []}


class TestSessionLogging:
    """Tests for what a battle writes to its log."""

    def test_play_and_resolution_logged(self, make_session, advance):
        """Test a play logs acceptance and resolution with a snapshot."""
        session, deck = make_session(["c1", "c2"])
        session.play_card(deck[0].instance_id)
        advance(session, 0.3)

        log = session.log
        played = log.get_entries_by_type(LogEventType.CARD_PLAYED)
        resolved = log.get_entries_by_type(LogEventType.CARD_RESOLVED)

        assert played[0].card_name == "Star Slash"
        assert played[0].value == 1
        assert resolved[0].instance_id == deck[0].instance_id
        assert resolved[0].snapshot.enemy_hp == 192

    def test_full_round_logged(self, make_session, advance):
        """Test a complete round leaves a start, turn end, enemy action and round start."""
        session, deck = make_session(["c1", "c2"])
        session.end_turn()
        advance(session, 2.5)

        types = [entry.event_type for entry in session.log.entries]

        assert types[0] == LogEventType.BATTLE_START
        assert LogEventType.TURN_ENDED in types
        assert LogEventType.ENEMY_ACTION in types
        assert LogEventType.ROUND_START in types
        round_start = session.log.get_entries_by_type(LogEventType.ROUND_START)[0]
        assert round_start.round_number == 2
        assert round_start.snapshot.phase == TurnPhase.PLAYER_ACTIVE

    def test_battle_end_and_reward_logged(self, make_session, catalog, advance):
        """Test the outcome and reward are recorded."""
        execute = catalog.create("c5")
        execute.upgrade(UpgradePath.SPECIAL)
        session, deck = make_session([execute])
        session.state.enemy_hp = 10
        session.play_card(execute.instance_id)
        advance(session, 0.3)
        advance(session, 2.0)

        end = session.log.get_entries_by_type(LogEventType.BATTLE_END)
        reward = session.log.get_entries_by_type(LogEventType.REWARD_GRANTED)

        assert end[0].outcome == BattleOutcome.WIN
        assert reward[0].instance_id == session.reward.instance_id
        assert "*** WIN ***" in session.log.format_readable()
