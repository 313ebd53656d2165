"""Day/night colour pairs and interpolation helpers.

Every scenery colour is a ``(day, night)`` pair blended by the session's
night-blend value.
"""

from typing import Tuple

from bearrun.graphics.primitives import Color

ColorPair = Tuple[Color, Color]


def lerp(start: float, end: float, t: float) -> float:
    """Linear interpolation with ``t`` clamped to [0, 1]."""
    return start + (end - start) * max(0.0, min(1.0, t))


def lerp_color(start: Color, end: Color, t: float) -> Color:
    """Interpolate between two RGB colors.

    Args:
        start: Starting RGB color
        end: Ending RGB color
        t: Progress (0.0 to 1.0)

    Returns:
        Interpolated RGB color
    """
    return (
        int(round(lerp(start[0], end[0], t))),
        int(round(lerp(start[1], end[1], t))),
        int(round(lerp(start[2], end[2], t))),
    )


def blend(pair: ColorPair, night: float) -> Color:
    return lerp_color(pair[0], pair[1], night)


# Scenery
SKY: ColorPair = ((135, 206, 235), (15, 15, 45))
MOUNTAINS_FAR: ColorPair = ((107, 163, 104), (25, 40, 30))
MOUNTAINS_NEAR: ColorPair = ((123, 184, 120), (35, 55, 40))
GROUND_EDGE: ColorPair = ((93, 138, 78), (20, 45, 25))
GROUND: ColorPair = ((74, 115, 64), (15, 35, 20))
GROUND_SPECKLE: ColorPair = ((61, 98, 52), (12, 30, 15))
GRASS: ColorPair = ((107, 163, 104), (25, 55, 30))

STAR = (255, 255, 220)
MOON = (255, 248, 200)
CLOUD = (255, 255, 255)
FIREFLY = (200, 255, 100)

# Logs: (day, dark) chosen by a hard switch at half night, not blended
LOG_BARK = ((92, 58, 30), (74, 46, 20))
LOG_GROOVE = ((74, 46, 20), (58, 32, 16))
LOG_RING = ((139, 99, 64), (123, 83, 48))
LOG_CORE = ((160, 120, 80), (144, 104, 64))
LOG_TOP = ((107, 66, 38), (90, 54, 32))

# Bear
BEAR_BODY = ((139, 94, 60), (122, 82, 50))
BEAR_DARK = ((107, 66, 38), (90, 56, 32))
BEAR_SNOUT = ((212, 149, 106), (196, 133, 90))
BEAR_NOSE = (34, 34, 34)
BEAR_EYE = ((34, 34, 34), (255, 255, 255))


def pick(pair: ColorPair, dark: bool) -> Color:
    """Hard day/dark switch used for sprites."""
    return pair[1] if dark else pair[0]
