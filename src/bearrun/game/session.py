"""BEAR RUN session: the per-tick game state machine.

Composes difficulty, day/night, physics, spawning, obstacle lifecycle and
collision into one ``tick()``, and exposes the two input entry points the
front-end calls (``on_start`` and ``on_jump_or_restart``).

Gameplay events raised during a tick are buffered and emitted once the
tick's update has been fully applied, so a handler that reacts to an event
(by feeding input back in, say) never observes a half-updated tick.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from bearrun.audio.output import AudioOutput, NullAudio
from bearrun.config.settings import GameSettings
from bearrun.core.events import Event, EventBus, EventType
from bearrun.core.state import State, StateMachine
from bearrun.game.difficulty import DayNightController, speed_for_score
from bearrun.game.obstacles import ObstacleArena, ObstacleGenerator, ObstacleLifecycle, RandomSource
from bearrun.game.physics import find_collision, integrate, try_jump
from bearrun.game.state import (
    GameSession,
    GameSnapshot,
    ObstacleSnapshot,
    RunnerSnapshot,
    RunnerState,
)

logger = logging.getLogger(__name__)


class BearRunGame:
    """One player's endless-runner session.

    Usage:
        game = BearRunGame(GameSettings(), event_bus)

        # On input (key, click, tap):
        game.on_jump_or_restart()

        # Once per frame:
        game.tick()
        snapshot = game.snapshot()
    """

    def __init__(
        self,
        settings: Optional[GameSettings] = None,
        event_bus: Optional[EventBus] = None,
        rng: Optional[RandomSource] = None,
        audio: Optional[AudioOutput] = None,
    ):
        self.settings = settings or GameSettings()
        self.event_bus = event_bus or EventBus()
        self.audio: AudioOutput = audio or NullAudio()

        self.state_machine = StateMachine()
        self.state_machine.add_listener(self._on_state_changed)

        self.session = GameSession(speed=self.settings.base_speed)
        self.runner = RunnerState()
        self.obstacles = ObstacleArena()

        self.generator = ObstacleGenerator(self.settings, rng)
        self.lifecycle = ObstacleLifecycle()
        self.day_night = DayNightController(self.settings)

        self._audio_requested = False
        self._in_tick = False
        self._pending: List[Tuple[EventType, Dict[str, Any]]] = []

    # Observable state
    @property
    def state(self) -> State:
        return self.state_machine.state

    @property
    def score(self) -> int:
        return self.session.score

    @property
    def best(self) -> int:
        return self.session.best

    @property
    def is_running(self) -> bool:
        return self.session.running

    @property
    def is_dead(self) -> bool:
        return self.session.dead

    # Input entry points
    def on_start(self) -> bool:
        """Start from IDLE. The starting input also jumps.

        Returns:
            True if the session started
        """
        self._acquire_audio()
        if self.state is not State.IDLE:
            return False
        self.session.running = True
        self.session.dead = False
        self.state_machine.transition(State.RUNNING)
        self._jump()
        return True

    def on_jump_or_restart(self) -> bool:
        """Single input handler, meaning depends on the current state.

        IDLE starts (and jumps), RUNNING jumps, DEAD restarts.

        Returns:
            True if the input changed anything
        """
        state = self.state
        if state is State.IDLE:
            return self.on_start()

        self._acquire_audio()
        if state is State.RUNNING:
            return self._jump()
        return self.restart()

    def restart(self) -> bool:
        """Fresh runner, obstacles and score; the best score carries over."""
        if self.state is not State.DEAD:
            return False

        self.session.reset(self.settings.base_speed)
        self.runner = RunnerState()
        self.obstacles.clear()

        self.session.running = True
        self.state_machine.transition(State.RUNNING)
        logger.info(f"Session restarted (best {self.session.best})")
        return True

    # Simulation
    def tick(self) -> bool:
        """Advance the simulation by exactly one step.

        Returns:
            True if a step was applied (only while RUNNING)
        """
        if self._in_tick:
            logger.warning("Re-entrant tick ignored")
            return False
        if self.state is not State.RUNNING:
            return False

        self._in_tick = True
        try:
            self._step()
        except Exception:
            self._pending.clear()
            raise
        finally:
            self._in_tick = False

        self._flush_events()
        return True

    def _step(self) -> None:
        session = self.session
        session.tick += 1

        # Difficulty
        session.speed = speed_for_score(session.score, self.settings)

        # Day/night
        if self.day_night.update(session):
            self._emit(EventType.NIGHT_BEGAN, {"score": session.score})

        # Physics
        integrate(self.runner, session.speed, self.settings)

        # Spawning
        self.generator.maybe_spawn(self.obstacles, session.speed, session.score)

        # Lifecycle: scroll, score, then prune
        self.lifecycle.advance(self.obstacles, session.speed)
        for _ in self.lifecycle.collect_passed(self.obstacles, self.runner.x):
            session.add_point()
            self._emit(EventType.SCORED, {"score": session.score, "best": session.best})
        self.lifecycle.prune(self.obstacles)

        # Collision
        if find_collision(self.runner, self.obstacles) is not None:
            self._crash()

    def _crash(self) -> None:
        self.session.running = False
        self.session.dead = True
        self.state_machine.transition(State.DEAD)
        logger.info(f"Crashed at score {self.session.score} (best {self.session.best})")
        self._emit(EventType.CRASHED, {"score": self.session.score, "best": self.session.best})

    def _jump(self) -> bool:
        if not try_jump(self.runner, self.settings):
            return False
        self._emit(EventType.JUMPED)
        return True

    def snapshot(self) -> GameSnapshot:
        """Immutable copy of everything a renderer needs."""
        r = self.runner
        s = self.session
        return GameSnapshot(
            runner=RunnerSnapshot(
                x=r.x,
                y=r.y,
                velocity=r.velocity,
                airborne=r.airborne,
                animation_phase=r.animation_phase,
            ),
            obstacles=tuple(
                ObstacleSnapshot(x=o.x, tall=o.tall, scored=o.scored)
                for o in self.obstacles
            ),
            tick=s.tick,
            night_blend=s.night_blend,
            score=s.score,
            best=s.best,
            speed=s.speed,
            running=s.running,
            dead=s.dead,
        )

    # Internals
    def _acquire_audio(self) -> None:
        # Output may only be opened in response to a user gesture
        if self._audio_requested:
            return
        self._audio_requested = True
        if not self.audio.ensure_ready():
            logger.warning("Audio unavailable, continuing without sound")

    def _on_state_changed(self, old_state: State, new_state: State) -> None:
        self._emit(EventType.STATE_CHANGED, {"from": old_state, "to": new_state})

    def _emit(self, event_type: EventType, data: Optional[Dict[str, Any]] = None) -> None:
        payload = data or {}
        if self._in_tick:
            self._pending.append((event_type, payload))
            return
        self.event_bus.emit(Event(event_type, data=payload, source="game"))

    def _flush_events(self) -> None:
        pending, self._pending = self._pending, []
        for event_type, payload in pending:
            self.event_bus.emit(Event(event_type, data=payload, source="game"))
