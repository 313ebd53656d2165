"""
BEAR RUN Audio Engine - chiptune cues on the pygame mixer.

The mixer is opened lazily: ``ensure_ready()`` is called by the game on the
first player input, never at construction. If the mixer cannot be opened
the engine stays silent and every cue is a no-op.
"""

import array
import logging
import math
import random
from typing import Callable, Dict, List, Optional

import pygame

from bearrun.audio.output import Cue

logger = logging.getLogger(__name__)

SAMPLE_RATE = 44100

Wave = Callable[[float, float], float]


def square(t: float, freq: float) -> float:
    """Square wave oscillator."""
    return 1 if (t * freq) % 1 < 0.5 else -1


def sine(t: float, freq: float) -> float:
    """Sine wave oscillator."""
    return math.sin(2 * math.pi * freq * t)


def saw(t: float, freq: float) -> float:
    """Sawtooth wave."""
    return 2 * ((t * freq) % 1) - 1


def noise(t: float, freq: float) -> float:
    """White noise (time and frequency are ignored)."""
    return random.random() * 2 - 1


def decay(t: float, duration: float) -> float:
    """Exponential fade from 1 down to 0.001 over ``duration``."""
    return 0.001 ** (t / duration)


class ToneMix:
    """Float sample buffer that tones are layered into."""

    def __init__(self, sample_rate: int = SAMPLE_RATE):
        self.sample_rate = sample_rate
        self.samples: List[float] = []

    def add(
        self,
        freq: float,
        duration: float,
        wave: Wave = square,
        volume: float = 0.12,
        delay: float = 0.0,
    ) -> "ToneMix":
        """Layer a decaying tone starting ``delay`` seconds in."""
        start = int(delay * self.sample_rate)
        count = int(duration * self.sample_rate)
        end = start + count
        if len(self.samples) < end:
            self.samples.extend([0.0] * (end - len(self.samples)))

        for i in range(count):
            t = i / self.sample_rate
            self.samples[start + i] += wave(t, freq) * volume * decay(t, duration)
        return self

    def to_pcm(self) -> array.array:
        """Signed 16-bit mono PCM, clipped."""
        pcm = array.array('h')
        for s in self.samples:
            pcm.append(int(max(-1.0, min(1.0, s)) * 32767))
        return pcm


def render_cue(cue: Cue, sample_rate: int = SAMPLE_RATE) -> array.array:
    """Synthesize the PCM for one cue."""
    mix = ToneMix(sample_rate)
    if cue is Cue.JUMP:
        mix.add(523, 0.08, square, 0.12)
        mix.add(659, 0.06, square, 0.10, delay=0.05)
    elif cue is Cue.SCORE:
        mix.add(784, 0.06, square, 0.10)
        mix.add(1047, 0.08, square, 0.12, delay=0.06)
    elif cue is Cue.CRASH:
        mix.add(0, 0.20, noise, 0.15)
        mix.add(131, 0.15, saw, 0.10, delay=0.05)
    elif cue is Cue.NIGHT:
        mix.add(330, 0.5, sine, 0.08)
        mix.add(392, 0.4, sine, 0.07, delay=0.3)
        mix.add(494, 0.6, sine, 0.08, delay=0.6)
    return mix.to_pcm()


class AudioEngine:
    """
    pygame mixer backed ``AudioOutput``.

    Sounds are generated once, right after the mixer opens.
    """

    def __init__(self, sample_rate: int = SAMPLE_RATE, volume: float = 0.8, enabled: bool = True):
        self._sample_rate = sample_rate
        self._enabled = enabled
        self._initialized = False
        self._attempted = False
        self._sounds: Dict[Cue, pygame.mixer.Sound] = {}
        self._volume_master = volume
        self._muted = False

    @property
    def is_ready(self) -> bool:
        return self._initialized

    def ensure_ready(self) -> bool:
        """Open the mixer on first use. Only the first call tries."""
        if self._attempted:
            return self._initialized
        self._attempted = True

        if not self._enabled:
            logger.info("Audio disabled by configuration")
            return False

        return self.init()

    def init(self) -> bool:
        """Initialize the audio system."""
        try:
            pygame.mixer.pre_init(self._sample_rate, -16, 2, 512)
            pygame.mixer.init()
            self._generate_all_sounds()
            self._initialized = True
            logger.info(f"Audio engine initialized ({len(self._sounds)} cues)")
            return True
        except Exception as e:
            logger.error(f"Failed to initialize audio: {e}")
            self._sounds.clear()
            return False

    def _create_sound(self, samples: array.array) -> pygame.mixer.Sound:
        """Create a pygame Sound from mono samples (auto-converted to stereo)."""
        stereo = array.array('h')
        for s in samples:
            stereo.append(s)
            stereo.append(s)
        return pygame.mixer.Sound(buffer=stereo)

    def _generate_all_sounds(self) -> None:
        for cue in Cue:
            self._sounds[cue] = self._create_sound(render_cue(cue, self._sample_rate))

    def play(self, cue: Cue) -> Optional[pygame.mixer.Channel]:
        """Fire a cue. Silently does nothing when audio is unavailable."""
        if not self._initialized or self._muted:
            return None
        sound = self._sounds.get(cue)
        if sound is None:
            return None
        try:
            sound.set_volume(self._volume_master)
            return sound.play()
        except Exception as e:
            logger.warning(f"Failed to play {cue.value}: {e}")
            return None

    def set_volume(self, volume: float) -> None:
        self._volume_master = max(0.0, min(1.0, volume))

    def get_volume(self) -> float:
        return self._volume_master

    def is_muted(self) -> bool:
        return self._muted

    def mute(self) -> None:
        """Mute all audio."""
        if not self._muted:
            self._muted = True
            logger.info("Audio muted")

    def unmute(self) -> None:
        """Unmute audio."""
        if self._muted:
            self._muted = False
            logger.info("Audio unmuted")

    def toggle_mute(self) -> bool:
        """Toggle mute state."""
        if self._muted:
            self.unmute()
        else:
            self.mute()
        return self._muted

    def cleanup(self) -> None:
        """Cleanup audio resources."""
        if self._initialized:
            pygame.mixer.quit()
            self._initialized = False
            self._sounds.clear()
            logger.info("Audio engine cleaned up")
