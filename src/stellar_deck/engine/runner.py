"""Async driver that runs a battle session's scheduled delays in real time."""

import asyncio
import contextlib
import logging

from .session import BattleSession
from .types import ActionResult

logger = logging.getLogger(__name__)


class BattleRunner:
    """Ticks a BattleSession whenever its next scheduled event is due.

    Requests made through the runner wake it up so newly scheduled events
    are picked up without waiting for an unrelated timer.
    """

    def __init__(self, session: BattleSession) -> None:
        self.session = session
        self._wakeup = asyncio.Event()
        session.timers.add_listener(self._wakeup.set)

    def play_card(self, instance_id: str) -> ActionResult:
        result = self.session.play_card(instance_id)
        self._wakeup.set()
        return result

    def end_turn(self) -> ActionResult:
        result = self.session.end_turn()
        self._wakeup.set()
        return result

    def stop(self) -> None:
        """Close the session and let ``run`` return."""
        self.session.close()
        self._wakeup.set()

    async def run(self) -> None:
        """Drive the session until the battle is settled or the session is closed."""
        while not self.session.is_settled:
            self._wakeup.clear()
            delay = self.session.timers.seconds_until_next()
            if delay is None:
                await self._wakeup.wait()
            elif delay > 0:
                with contextlib.suppress(asyncio.TimeoutError):
                    await asyncio.wait_for(self._wakeup.wait(), timeout=delay)
            self.session.tick()
        logger.debug("Runner for battle %s finished", self.session.battle_id)
