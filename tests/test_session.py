"""Tests for the BEAR RUN session state machine and tick."""

import dataclasses
import random

import pytest

from bearrun.audio.output import NullAudio
from bearrun.core.events import EventType
from bearrun.core.state import State
from bearrun.game.constants import GROUND_Y, RUNNER_X
from bearrun.game.session import BearRunGame
from bearrun.game.state import Obstacle

from conftest import land


def crash(game: BearRunGame) -> None:
    """Drop a log right on top of the grounded runner and tick once."""
    land(game)
    game.obstacles.add(Obstacle(x=RUNNER_X + game.session.speed))
    assert game.tick()
    assert game.state is State.DEAD


class TestInput:

    def test_starts_idle(self, game):
        assert game.state is State.IDLE
        assert not game.is_running
        assert not game.is_dead
        assert game.snapshot().idle

    def test_idle_tick_is_noop(self, game):
        before = game.snapshot()

        assert not game.tick()
        assert game.snapshot() == before

    def test_start_also_jumps(self, game, recorder):
        assert game.on_start()

        assert game.state is State.RUNNING
        assert game.is_running
        assert game.runner.airborne
        assert game.runner.velocity == game.settings.jump_velocity
        assert EventType.STATE_CHANGED in recorder.types()
        assert EventType.JUMPED in recorder.types()

    def test_start_only_from_idle(self, game):
        game.on_start()

        assert not game.on_start()
        assert game.state is State.RUNNING

    def test_input_while_idle_starts(self, game):
        assert game.on_jump_or_restart()

        assert game.state is State.RUNNING
        assert game.runner.airborne

    def test_input_while_running_jumps_only_from_ground(self, game, recorder):
        game.on_start()
        assert not game.on_jump_or_restart()

        land(game)
        assert game.on_jump_or_restart()
        assert game.runner.airborne
        assert len(recorder.of(EventType.JUMPED)) == 2

    def test_audio_acquired_once_on_first_input(self, game, audio):
        assert audio.ready_requests == 0

        game.on_jump_or_restart()
        land(game)
        game.on_jump_or_restart()
        game.on_jump_or_restart()

        assert audio.ready_requests == 1

    def test_game_runs_without_audio(self, settings, bus, quiet_rng):
        class BrokenAudio(NullAudio):
            def ensure_ready(self) -> bool:
                super().ensure_ready()
                return False

        game = BearRunGame(settings, bus, quiet_rng, BrokenAudio())

        assert game.on_start()
        assert game.tick()


class TestTick:

    def test_long_run_without_spawns(self, game, quiet_rng):
        game.on_start()

        for _ in range(1000):
            assert game.tick()

        assert game.session.tick == 1000
        assert game.score == 0
        assert not game.is_dead
        assert game.runner.y == GROUND_Y
        assert len(game.obstacles) == 0
        assert quiet_rng.calls == 1000

    def test_passing_a_log_scores_once(self, game, recorder):
        game.on_start()
        land(game)
        # Right edge ends up at x=79 after this tick's scroll
        game.obstacles.add(Obstacle(x=RUNNER_X - 31 + 5.0))

        game.tick()
        game.tick()

        assert game.score == 1
        assert game.best == 1
        scored = recorder.of(EventType.SCORED)
        assert len(scored) == 1
        assert scored[0].data == {"score": 1, "best": 1}

    def test_log_scores_before_it_is_pruned(self, game):
        game.on_start()
        game.obstacles.add(Obstacle(x=-35.0))

        game.tick()

        assert game.score == 1
        assert len(game.obstacles) == 0

    def test_collision_ends_run_on_that_tick(self, game, recorder):
        game.on_start()

        crash(game)

        assert game.is_dead
        assert not game.is_running
        crashed = recorder.of(EventType.CRASHED)
        assert len(crashed) == 1
        assert crashed[0].data == {"score": 0, "best": 0}

    def test_dead_session_is_frozen(self, game):
        game.on_start()
        crash(game)
        before = game.snapshot()

        for _ in range(10):
            assert not game.tick()

        assert game.snapshot() == before

    def test_night_begins_once(self, game, recorder):
        game.on_start()
        game.session.score = 17

        game.tick()
        assert game.session.night_blend == pytest.approx(0.005)

        for _ in range(20):
            game.tick()

        assert len(recorder.of(EventType.NIGHT_BEGAN)) == 1
        assert game.session.night_blend == pytest.approx(0.105)

    def test_speed_follows_score(self, game):
        game.on_start()
        game.session.score = 10

        game.tick()

        assert game.session.speed == pytest.approx(6.0)

    def test_events_flushed_after_tick_is_applied(self, game, bus):
        seen = []

        def on_crash(event):
            seen.append((game.state, game.is_dead, game.session.tick))
            game.on_jump_or_restart()

        bus.subscribe(EventType.CRASHED, on_crash)
        game.on_start()
        ticks_before_crash = land(game) + 1

        game.obstacles.add(Obstacle(x=RUNNER_X + game.session.speed))
        game.tick()

        assert seen == [(State.DEAD, True, ticks_before_crash)]
        # The handler's restart went through after the tick completed
        assert game.state is State.RUNNING
        assert game.session.tick == 0

    def test_reentrant_tick_is_rejected(self, game):
        game.on_start()
        land(game)
        nested = []
        game.state_machine.add_listener(lambda old, new: nested.append(game.tick()))

        game.obstacles.add(Obstacle(x=RUNNER_X + game.session.speed))
        game.tick()

        assert nested == [False]

    def test_best_never_below_score(self, settings, bus, audio):
        game = BearRunGame(settings, bus, random.Random(7), audio)
        game.on_start()

        last_score = 0
        for _ in range(5000):
            if game.is_dead:
                game.on_jump_or_restart()
                last_score = 0
            elif any(RUNNER_X + 10 <= o.x <= RUNNER_X + 60 for o in game.obstacles):
                game.on_jump_or_restart()
            game.tick()
            assert game.best >= game.score
            assert game.score >= last_score
            last_score = game.score

        assert game.best > 0


class TestRestart:

    def test_restart_keeps_best(self, game):
        game.on_start()
        land(game)
        for _ in range(3):
            game.session.add_point()
        crash(game)

        assert game.on_jump_or_restart()

        assert game.state is State.RUNNING
        assert game.score == 0
        assert game.best == 3
        assert game.session.tick == 0
        assert game.session.night_blend == 0.0
        assert not game.session.night_announced
        assert len(game.obstacles) == 0
        assert not game.runner.airborne

    def test_restart_only_when_dead(self, game):
        assert not game.restart()
        game.on_start()
        assert not game.restart()

    def test_night_clears_on_restart(self, game):
        game.on_start()
        land(game)
        game.session.score = 20
        for _ in range(10):
            game.tick()
        assert game.session.night_blend > 0
        crash(game)

        game.on_jump_or_restart()
        game.tick()

        assert game.session.night_blend == 0.0


class TestSnapshot:

    def test_snapshot_is_read_only(self, game):
        game.on_start()
        game.obstacles.add(Obstacle(x=400.0, tall=True))

        snapshot = game.snapshot()

        with pytest.raises(dataclasses.FrozenInstanceError):
            snapshot.score = 99
        with pytest.raises(dataclasses.FrozenInstanceError):
            snapshot.runner.y = 0.0
        assert snapshot.obstacles[0].tall
        assert snapshot.obstacles[0].height == 38

    def test_snapshot_is_detached_from_live_state(self, game):
        game.on_start()
        snapshot = game.snapshot()

        game.tick()

        assert snapshot.tick == 0
        assert game.snapshot().tick == 1
