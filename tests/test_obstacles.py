"""Tests for the obstacle arena, spawning and lifecycle."""

import pytest

from bearrun.game.constants import FIELD_WIDTH, RUNNER_X, SPAWN_OFFSET
from bearrun.game.obstacles import ObstacleArena, ObstacleGenerator, ObstacleLifecycle
from bearrun.game.state import Obstacle

from conftest import ScriptedRandom


class TestObstacleArena:

    def test_handles_are_stable_across_removal(self):
        arena = ObstacleArena()
        a = arena.add(Obstacle(x=100.0))
        b = arena.add(Obstacle(x=200.0))
        c = arena.add(Obstacle(x=300.0))

        arena.remove(b)
        assert arena.get(b) is None
        assert len(arena) == 2

        assert arena.compact() == 1
        assert arena.get(a).x == 100.0
        assert arena.get(c).x == 300.0
        assert [o.x for o in arena] == [100.0, 300.0]

    def test_handles_are_never_reused(self):
        arena = ObstacleArena()
        first = arena.add(Obstacle(x=1.0))
        arena.remove(first)
        arena.compact()

        assert arena.add(Obstacle(x=2.0)) != first

    def test_newest_skips_removed(self):
        arena = ObstacleArena()
        assert arena.newest() is None

        arena.add(Obstacle(x=100.0))
        last = arena.add(Obstacle(x=500.0))
        assert arena.newest().x == 500.0

        arena.remove(last)
        assert arena.newest().x == 100.0

    def test_remove_unknown_handle_is_ignored(self):
        arena = ObstacleArena()
        arena.add(Obstacle(x=1.0))

        arena.remove(42)

        assert arena.compact() == 0
        assert len(arena) == 1

    def test_clear(self):
        arena = ObstacleArena()
        arena.add(Obstacle(x=1.0))
        arena.remove(arena.add(Obstacle(x=2.0)))

        arena.clear()

        assert len(arena) == 0
        assert list(arena) == []


class TestObstacleGenerator:

    @pytest.mark.parametrize("speed,expected", [
        (5.0, 240.0),
        (10.0, 200.0),
        (12.5, 180.0),
        (20.0, 180.0),
    ])
    def test_gap_shrinks_to_floor(self, settings, speed, expected):
        generator = ObstacleGenerator(settings, ScriptedRandom())

        assert generator.gap_for(speed) == pytest.approx(expected)

    def test_spawns_off_screen_right(self, settings):
        arena = ObstacleArena()
        generator = ObstacleGenerator(settings, ScriptedRandom([0.0]))

        handle = generator.maybe_spawn(arena, 5.0, 0)

        assert handle is not None
        spawned = arena.get(handle)
        assert spawned.x == FIELD_WIDTH + SPAWN_OFFSET
        assert not spawned.tall
        assert not spawned.scored

    def test_failed_roll_does_not_spawn(self, settings):
        arena = ObstacleArena()
        # 0.02 * 5 = 0.1 chance per tick
        generator = ObstacleGenerator(settings, ScriptedRandom([0.15]))

        assert generator.maybe_spawn(arena, 5.0, 0) is None
        assert len(arena) == 0

    def test_roll_odds_grow_with_speed(self, settings):
        arena = ObstacleArena()
        generator = ObstacleGenerator(settings, ScriptedRandom([0.11]))

        assert generator.maybe_spawn(arena, 6.0, 0) is not None

    def test_no_roll_until_gap_cleared(self, settings):
        arena = ObstacleArena()
        arena.add(Obstacle(x=FIELD_WIDTH - 240.0))
        rng = ScriptedRandom([0.0])
        generator = ObstacleGenerator(settings, rng)

        assert generator.maybe_spawn(arena, 5.0, 0) is None
        assert rng.calls == 0

        arena.newest().x -= 0.5
        assert generator.maybe_spawn(arena, 5.0, 0) is not None

    def test_no_tall_logs_early(self, settings):
        arena = ObstacleArena()
        rng = ScriptedRandom([0.0, 0.0])
        generator = ObstacleGenerator(settings, rng)

        handle = generator.maybe_spawn(arena, 5.0, 5)

        assert not arena.get(handle).tall
        # The tall roll is skipped entirely
        assert rng.calls == 1

    def test_tall_logs_after_warmup(self, settings):
        arena = ObstacleArena()
        generator = ObstacleGenerator(settings, ScriptedRandom([0.0, 0.39]))

        handle = generator.maybe_spawn(arena, 5.5, 6)

        assert arena.get(handle).tall

    def test_tall_roll_can_fail(self, settings):
        arena = ObstacleArena()
        generator = ObstacleGenerator(settings, ScriptedRandom([0.0, 0.4]))

        handle = generator.maybe_spawn(arena, 5.5, 6)

        assert not arena.get(handle).tall

    def test_spawned_logs_respect_gap(self, settings):
        arena = ObstacleArena()
        lifecycle = ObstacleLifecycle()
        # Always win the roll: spawn as soon as the gap allows
        generator = ObstacleGenerator(settings, ScriptedRandom(default=0.0))

        spawned = 0
        for _ in range(400):
            if generator.maybe_spawn(arena, 5.0, 0) is not None:
                spawned += 1
            lifecycle.advance(arena, 5.0)

        xs = sorted(o.x for o in arena)
        gaps = [b - a for a, b in zip(xs, xs[1:])]
        assert spawned > 3
        assert all(gap >= 240.0 for gap in gaps)


class TestObstacleLifecycle:

    def test_advance_scrolls_left(self):
        arena = ObstacleArena()
        handle = arena.add(Obstacle(x=300.0))

        ObstacleLifecycle().advance(arena, 5.5)

        assert arena.get(handle).x == pytest.approx(294.5)

    def test_pass_reported_once(self):
        arena = ObstacleArena()
        handle = arena.add(Obstacle(x=RUNNER_X - 31))
        lifecycle = ObstacleLifecycle()

        assert lifecycle.collect_passed(arena, RUNNER_X) == [handle]
        assert lifecycle.collect_passed(arena, RUNNER_X) == []
        assert arena.get(handle).scored

    def test_right_edge_level_with_runner_not_yet_passed(self):
        arena = ObstacleArena()
        arena.add(Obstacle(x=RUNNER_X - 30))

        assert ObstacleLifecycle().collect_passed(arena, RUNNER_X) == []

    def test_prune_drops_logs_past_left_edge(self):
        arena = ObstacleArena()
        gone = arena.add(Obstacle(x=-40.0, scored=True))
        kept = arena.add(Obstacle(x=-39.0, scored=True))

        assert ObstacleLifecycle().prune(arena) == 1
        assert arena.get(gone) is None
        assert arena.get(kept) is not None
