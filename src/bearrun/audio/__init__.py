"""
BEAR RUN Audio System - chiptune cues.

The pygame-backed engine lives in ``bearrun.audio.engine``.
"""

from .cues import AudioCues
from .output import AudioOutput, Cue, NullAudio

__all__ = ["AudioCues", "AudioOutput", "Cue", "NullAudio"]
