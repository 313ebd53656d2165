"""Simulation state for a BEAR RUN session.

Mutable state lives in ``RunnerState``, ``Obstacle`` and ``GameSession``;
the renderer only ever sees the frozen ``*Snapshot`` copies.
"""

from dataclasses import dataclass
from typing import Tuple

from bearrun.game.constants import (
    GROUND_Y,
    OBSTACLE_WIDTH,
    RUNNER_X,
    SHORT_HEIGHT,
    TALL_HEIGHT,
)


@dataclass
class RunnerState:
    """The bear: fixed x, vertical arc while airborne."""
    x: float = RUNNER_X
    y: float = GROUND_Y
    velocity: float = 0.0
    airborne: bool = False
    animation_phase: float = 0.0


@dataclass
class Obstacle:
    """A log. ``tall`` stacks a second log on top."""
    x: float
    tall: bool = False
    scored: bool = False

    @property
    def height(self) -> int:
        return TALL_HEIGHT if self.tall else SHORT_HEIGHT

    @property
    def right(self) -> float:
        return self.x + OBSTACLE_WIDTH

    def mark_scored(self) -> bool:
        """Flip the scored flag. Returns False if it was already set."""
        if self.scored:
            return False
        self.scored = True
        return True


@dataclass
class GameSession:
    """Scalar session state (the obstacle arena is held separately)."""
    score: int = 0
    best: int = 0
    speed: float = 5.0
    tick: int = 0
    night_blend: float = 0.0
    running: bool = False
    dead: bool = False
    night_announced: bool = False

    def add_point(self) -> None:
        self.score += 1
        if self.score > self.best:
            self.best = self.score

    def reset(self, base_speed: float) -> None:
        """Fresh session values; ``best`` survives."""
        self.score = 0
        self.speed = base_speed
        self.tick = 0
        self.night_blend = 0.0
        self.running = False
        self.dead = False
        self.night_announced = False


@dataclass(frozen=True)
class RunnerSnapshot:
    x: float
    y: float
    velocity: float
    airborne: bool
    animation_phase: float


@dataclass(frozen=True)
class ObstacleSnapshot:
    x: float
    tall: bool
    scored: bool

    @property
    def height(self) -> int:
        return TALL_HEIGHT if self.tall else SHORT_HEIGHT


@dataclass(frozen=True)
class GameSnapshot:
    """Read-only view of one tick, consumed by renderers and the HUD."""
    runner: RunnerSnapshot
    obstacles: Tuple[ObstacleSnapshot, ...]
    tick: int
    night_blend: float
    score: int
    best: int
    speed: float
    running: bool
    dead: bool

    @property
    def idle(self) -> bool:
        return not self.running and not self.dead
