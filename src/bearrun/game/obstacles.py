"""Obstacle arena, spawn generator and lifecycle.

Obstacles are held by stable integer handles. Removal only marks a handle;
``ObstacleArena.compact`` drops marked handles in a single pass per tick,
so iteration during a tick never sees the set change underneath it.
"""

import logging
import random
from typing import Dict, Iterator, List, Optional, Protocol, Set, Tuple

from bearrun.config.settings import GameSettings
from bearrun.game.constants import FIELD_WIDTH, PRUNE_MARGIN, SPAWN_OFFSET
from bearrun.game.state import Obstacle

logger = logging.getLogger(__name__)


class RandomSource(Protocol):
    """Anything with ``random() -> float`` in [0, 1), e.g. ``random.Random``."""

    def random(self) -> float:
        ...


class ObstacleArena:
    """Insertion-ordered store of live obstacles keyed by stable handles."""

    def __init__(self) -> None:
        self._slots: Dict[int, Obstacle] = {}
        self._removed: Set[int] = set()
        self._next_handle = 0

    def add(self, obstacle: Obstacle) -> int:
        """Store an obstacle and return its handle."""
        handle = self._next_handle
        self._next_handle += 1
        self._slots[handle] = obstacle
        return handle

    def get(self, handle: int) -> Optional[Obstacle]:
        if handle in self._removed:
            return None
        return self._slots.get(handle)

    def remove(self, handle: int) -> None:
        """Mark for removal; takes effect on the next ``compact``."""
        if handle in self._slots:
            self._removed.add(handle)

    def compact(self) -> int:
        """Drop every obstacle marked for removal. Returns how many went."""
        count = len(self._removed)
        for handle in self._removed:
            del self._slots[handle]
        self._removed.clear()
        return count

    def clear(self) -> None:
        self._slots.clear()
        self._removed.clear()

    def newest(self) -> Optional[Obstacle]:
        """Most recently inserted live obstacle."""
        for handle in reversed(self._slots):
            if handle not in self._removed:
                return self._slots[handle]
        return None

    def items(self) -> Iterator[Tuple[int, Obstacle]]:
        for handle, obstacle in self._slots.items():
            if handle not in self._removed:
                yield handle, obstacle

    def __iter__(self) -> Iterator[Obstacle]:
        for _, obstacle in self.items():
            yield obstacle

    def __len__(self) -> int:
        return len(self._slots) - len(self._removed)


class ObstacleGenerator:
    """Spawns logs ahead of the runner.

    Spawning is only attempted once the newest log has scrolled a full gap
    away from the right edge; after that it is a coin flip each tick with
    odds proportional to speed, which keeps the cadence irregular.
    """

    def __init__(self, settings: GameSettings, rng: Optional[RandomSource] = None):
        self.settings = settings
        self.rng: RandomSource = rng if rng is not None else random.Random()

    def gap_for(self, speed: float) -> float:
        """Minimum distance between the newest log and a new one."""
        s = self.settings
        return max(s.base_gap - speed * s.gap_shrink_factor, s.min_gap)

    def can_spawn(self, arena: ObstacleArena, speed: float) -> bool:
        newest = arena.newest()
        return newest is None or newest.x < FIELD_WIDTH - self.gap_for(speed)

    def maybe_spawn(self, arena: ObstacleArena, speed: float, score: int) -> Optional[int]:
        """Roll for a spawn. Returns the new handle or None."""
        if not self.can_spawn(arena, speed):
            return None
        if self.rng.random() >= self.settings.spawn_rate * speed:
            return None

        obstacle = Obstacle(x=float(FIELD_WIDTH + SPAWN_OFFSET), tall=self._roll_tall(score))
        handle = arena.add(obstacle)
        logger.debug(f"Spawned {'tall' if obstacle.tall else 'short'} log #{handle}")
        return handle

    def _roll_tall(self, score: int) -> bool:
        # Tall logs are withheld until the player has warmed up
        if score <= self.settings.tall_min_score:
            return False
        return self.rng.random() < self.settings.tall_probability


class ObstacleLifecycle:
    """Per-tick scroll, pass-through detection and pruning."""

    def advance(self, arena: ObstacleArena, speed: float) -> None:
        for obstacle in arena:
            obstacle.x -= speed

    def collect_passed(self, arena: ObstacleArena, runner_x: float) -> List[int]:
        """Mark logs whose right edge is behind the runner as scored.

        Each log is reported at most once in its lifetime.
        """
        passed = []
        for handle, obstacle in arena.items():
            if not obstacle.scored and obstacle.right < runner_x:
                obstacle.mark_scored()
                passed.append(handle)
        return passed

    def prune(self, arena: ObstacleArena) -> int:
        """Remove logs that are fully past the left edge."""
        for handle, obstacle in arena.items():
            if obstacle.right <= -PRUNE_MARGIN:
                arena.remove(handle)
        return arena.compact()
