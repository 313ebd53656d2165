"""Wires gameplay events to sound cues."""

import logging
from typing import Callable, List

from bearrun.audio.output import AudioOutput, Cue
from bearrun.core.events import Event, EventBus, EventType

logger = logging.getLogger(__name__)

CUE_FOR_EVENT = {
    EventType.JUMPED: Cue.JUMP,
    EventType.SCORED: Cue.SCORE,
    EventType.CRASHED: Cue.CRASH,
    EventType.NIGHT_BEGAN: Cue.NIGHT,
}


class AudioCues:
    """Plays the matching cue whenever a gameplay event is emitted."""

    def __init__(self, event_bus: EventBus, audio: AudioOutput):
        self.audio = audio
        self._unsubscribers: List[Callable[[], None]] = [
            event_bus.subscribe(event_type, self._on_event)
            for event_type in CUE_FOR_EVENT
        ]

    def _on_event(self, event: Event) -> None:
        cue = CUE_FOR_EVENT.get(event.type)
        if cue is not None:
            self.audio.play(cue)

    def detach(self) -> None:
        """Stop listening. Safe to call more than once."""
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers.clear()
        logger.debug("Audio cues detached")
