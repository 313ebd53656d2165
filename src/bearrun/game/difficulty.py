"""Difficulty staircase and the day/night blend."""

import logging

from bearrun.config.settings import GameSettings
from bearrun.game.state import GameSession

logger = logging.getLogger(__name__)


def speed_for_score(score: int, settings: GameSettings) -> float:
    """Scroll speed: base plus one step per full milestone of score."""
    milestones = max(score, 0) // settings.speed_milestone
    return settings.base_speed + milestones * settings.speed_step


class DayNightController:
    """Ramps the night blend in once the score crosses the threshold.

    The blend snaps back to 0 below the threshold (only possible after a
    restart, since score never decreases within a session).
    """

    def __init__(self, settings: GameSettings):
        self.settings = settings

    def is_night(self, score: int) -> bool:
        return score >= self.settings.night_threshold

    def update(self, session: GameSession) -> bool:
        """Apply one tick to ``session.night_blend``.

        Returns:
            True on the first ramping tick of the session
        """
        if not self.is_night(session.score):
            session.night_blend = 0.0
            return False

        session.night_blend = min(session.night_blend + self.settings.night_step, 1.0)
        if session.night_announced:
            return False

        session.night_announced = True
        logger.info(f"Night falls at score {session.score}")
        return True
