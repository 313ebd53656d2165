"""Runner physics and collision detection.

One call to ``integrate`` is one fixed simulation step; there is no
wall-clock delta anywhere in here.
"""

from typing import Iterable, Optional

from bearrun.config.settings import GameSettings
from bearrun.game.constants import (
    GROUND_Y,
    OBSTACLE_HITBOX_LEFT,
    OBSTACLE_HITBOX_RIGHT,
    OBSTACLE_HITBOX_TOP,
    RUNNER_HEIGHT,
    RUNNER_HITBOX_LEFT,
    RUNNER_HITBOX_RIGHT,
)
from bearrun.game.state import Obstacle, RunnerState


def integrate(runner: RunnerState, speed: float, settings: GameSettings) -> bool:
    """Advance the runner by one tick.

    Airborne runners accelerate under gravity and land when they reach the
    ground. Grounded runners only advance their leg-cycle phase, faster at
    higher scroll speed.

    Returns:
        True if the runner landed on this tick
    """
    landed = False
    if runner.airborne:
        runner.velocity += settings.gravity
        runner.y += runner.velocity
        if runner.y >= GROUND_Y:
            runner.y = GROUND_Y
            runner.velocity = 0.0
            runner.airborne = False
            landed = True

    if not runner.airborne:
        runner.animation_phase += settings.animation_rate * speed

    return landed


def try_jump(runner: RunnerState, settings: GameSettings) -> bool:
    """Start a jump if grounded. No double jumps."""
    if runner.airborne:
        return False
    runner.airborne = True
    runner.velocity = settings.jump_velocity
    return True


def overlaps(runner: RunnerState, obstacle: Obstacle) -> bool:
    """AABB test between the runner and one obstacle.

    Strict inequalities on both axes: boxes that only share an edge do not
    collide.
    """
    runner_left = runner.x + RUNNER_HITBOX_LEFT
    runner_right = runner.x + RUNNER_HITBOX_RIGHT
    runner_top = runner.y - RUNNER_HEIGHT
    runner_bottom = runner.y

    obs_left = obstacle.x + OBSTACLE_HITBOX_LEFT
    obs_right = obstacle.x + OBSTACLE_HITBOX_RIGHT
    obs_top = GROUND_Y - obstacle.height + OBSTACLE_HITBOX_TOP
    obs_bottom = GROUND_Y

    return (runner_right > obs_left and runner_left < obs_right and
            runner_bottom > obs_top and runner_top < obs_bottom)


def find_collision(runner: RunnerState, obstacles: Iterable[Obstacle]) -> Optional[Obstacle]:
    """First obstacle the runner overlaps, in insertion order."""
    for obstacle in obstacles:
        if overlaps(runner, obstacle):
            return obstacle
    return None
