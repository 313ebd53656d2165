"""Shared fixtures for BEAR RUN tests."""

from typing import Iterable, List

import pytest

from bearrun.audio.output import NullAudio
from bearrun.config.settings import GameSettings
from bearrun.core.events import Event, EventBus
from bearrun.game.session import BearRunGame


class ScriptedRandom:
    """Deterministic stand-in for ``random.Random``.

    Hands out the scripted values in order, then ``default`` forever.
    The default of 0.999 never passes a spawn or tall roll.
    """

    def __init__(self, values: Iterable[float] = (), default: float = 0.999):
        self.values: List[float] = list(values)
        self.default = default
        self.calls = 0

    def random(self) -> float:
        self.calls += 1
        if self.values:
            return self.values.pop(0)
        return self.default


class EventRecorder:
    """Collects every event emitted on a bus."""

    def __init__(self, bus: EventBus):
        self.events: List[Event] = []
        bus.subscribe_all(self.events.append)

    def types(self) -> list:
        return [e.type for e in self.events]

    def of(self, event_type) -> List[Event]:
        return [e for e in self.events if e.type == event_type]


@pytest.fixture
def settings() -> GameSettings:
    return GameSettings()


@pytest.fixture
def bus() -> EventBus:
    return EventBus()


@pytest.fixture
def recorder(bus: EventBus) -> EventRecorder:
    return EventRecorder(bus)


@pytest.fixture
def quiet_rng() -> ScriptedRandom:
    """Never spawns anything."""
    return ScriptedRandom()


@pytest.fixture
def audio() -> NullAudio:
    return NullAudio()


@pytest.fixture
def game(settings, bus, quiet_rng, audio) -> BearRunGame:
    return BearRunGame(settings=settings, event_bus=bus, rng=quiet_rng, audio=audio)


def land(game: BearRunGame, limit: int = 200) -> int:
    """Tick until the runner is back on the ground. Returns ticks used."""
    for i in range(limit):
        if not game.runner.airborne:
            return i
        game.tick()
    raise AssertionError("runner never landed")
