"""Frame driver: one simulation tick per display frame.

The driver does not own a clock. Whoever owns the display loop calls
``frame()`` once per refresh; the driver decides whether that frame
advances the game. It starts itself when the session enters RUNNING and
stops when the runner crashes, so a dead session schedules no more ticks.
"""

import asyncio
import logging
from typing import Optional

from bearrun.core.state import State
from bearrun.game.session import BearRunGame

logger = logging.getLogger(__name__)


class FrameDriver:
    """Start/stop gate in front of ``BearRunGame.tick``."""

    def __init__(self, game: BearRunGame):
        self.game = game
        self._running = False
        self._frames = 0
        self._ticks = 0
        self._fatal_error: Optional[BaseException] = None

        game.state_machine.add_listener(self._on_state_changed)
        if game.state is State.RUNNING:
            self.start()

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def ticks(self) -> int:
        """Ticks applied since the driver was created."""
        return self._ticks

    @property
    def fatal_error(self) -> Optional[BaseException]:
        """The exception that stopped the driver, if any."""
        return self._fatal_error

    def start(self) -> None:
        """Begin ticking on subsequent frames. Safe to call repeatedly."""
        if self._running:
            return
        self._running = True
        self._fatal_error = None
        logger.debug("Driver started")

    def stop(self) -> None:
        """Stop ticking. Safe to call repeatedly."""
        if not self._running:
            return
        self._running = False
        logger.debug(f"Driver stopped after {self._ticks} ticks")

    def frame(self) -> bool:
        """Handle one display frame.

        Returns:
            True if the game advanced by one tick
        """
        self._frames += 1
        if not self._running:
            return False

        try:
            advanced = self.game.tick()
        except Exception as e:
            self._fatal_error = e
            logger.exception(f"Tick {self.game.session.tick} failed, stopping driver")
            self.stop()
            return False

        if advanced:
            self._ticks += 1
        if self.game.state is not State.RUNNING:
            self.stop()
        return advanced

    async def run(self, fps: int = 60, max_frames: Optional[int] = None) -> None:
        """Standalone frame loop for headless use.

        Calls ``frame()`` at roughly ``fps`` and yields to the event loop
        between frames. Runs until the driver stops (or ``max_frames``).
        """
        interval = 1.0 / fps
        frames = 0
        self.start()
        while self._running:
            self.frame()
            frames += 1
            if max_frames is not None and frames >= max_frames:
                break
            await asyncio.sleep(interval)

    def _on_state_changed(self, old_state: State, new_state: State) -> None:
        if new_state is State.RUNNING:
            self.start()
        elif new_state is State.DEAD:
            self.stop()
