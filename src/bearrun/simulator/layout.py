"""Responsive layout for the game canvas.

Layout never touches the simulation: the field is always simulated at
its logical size and only scaled on screen.
"""

from dataclasses import dataclass

from bearrun.game.constants import FIELD_HEIGHT, FIELD_WIDTH

MARGIN = 12
NARROW_WIDTH = 820   # below this the canvas shrinks to fit
COMPACT_WIDTH = 500  # below this the UI switches to touch wording


@dataclass(frozen=True)
class Layout:
    """Where and how large the canvas is drawn inside the window."""
    window_width: int
    window_height: int
    canvas_x: int
    canvas_y: int
    canvas_width: int
    canvas_height: int
    compact: bool

    @property
    def scale(self) -> float:
        return self.canvas_width / FIELD_WIDTH


def compute_layout(window_width: int, window_height: int) -> Layout:
    """Fit the 800x300 field into a window.

    Narrow windows get a canvas ``MARGIN`` px narrower than the window on
    each side; wide windows get the field at native size.
    """
    if window_width < NARROW_WIDTH:
        canvas_width = max(1, min(window_width - 2 * MARGIN, FIELD_WIDTH))
    else:
        canvas_width = FIELD_WIDTH
    canvas_height = max(1, round(FIELD_HEIGHT * canvas_width / FIELD_WIDTH))

    return Layout(
        window_width=window_width,
        window_height=window_height,
        canvas_x=(window_width - canvas_width) // 2,
        canvas_y=max(0, (window_height - canvas_height) // 2),
        canvas_width=canvas_width,
        canvas_height=canvas_height,
        compact=window_width < COMPACT_WIDTH,
    )
