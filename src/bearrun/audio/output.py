"""Audio output handle used by the game.

The simulation never talks to a sound device directly. It is handed an
``AudioOutput`` at construction and asks it to get ready on the first user
gesture; cue playback is wired separately through the event bus.
"""

from enum import Enum
from typing import Protocol


class Cue(Enum):
    """Sound cues, one per gameplay event."""
    JUMP = "jump"
    SCORE = "score"
    CRASH = "crash"
    NIGHT = "night"


class AudioOutput(Protocol):
    """Minimal interface the game and cue wiring rely on."""

    def ensure_ready(self) -> bool:
        """Acquire the output device if not done yet. True if usable."""
        ...

    def play(self, cue: Cue) -> None:
        ...

    def cleanup(self) -> None:
        ...


class NullAudio:
    """Silent output for headless runs and tests."""

    def __init__(self) -> None:
        self.ready_requests = 0
        self.played: list[Cue] = []

    def ensure_ready(self) -> bool:
        self.ready_requests += 1
        return True

    def play(self, cue: Cue) -> None:
        self.played.append(cue)

    def cleanup(self) -> None:
        pass
