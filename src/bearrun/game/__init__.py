"""BEAR RUN simulation core."""

from bearrun.game.difficulty import DayNightController, speed_for_score
from bearrun.game.driver import FrameDriver
from bearrun.game.obstacles import ObstacleArena, ObstacleGenerator, ObstacleLifecycle
from bearrun.game.session import BearRunGame
from bearrun.game.state import (
    GameSession,
    GameSnapshot,
    Obstacle,
    ObstacleSnapshot,
    RunnerSnapshot,
    RunnerState,
)

__all__ = [
    "BearRunGame",
    "DayNightController",
    "FrameDriver",
    "GameSession",
    "GameSnapshot",
    "Obstacle",
    "ObstacleArena",
    "ObstacleGenerator",
    "ObstacleLifecycle",
    "ObstacleSnapshot",
    "RunnerSnapshot",
    "RunnerState",
    "speed_for_score",
]
