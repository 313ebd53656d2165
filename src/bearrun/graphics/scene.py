"""Scene renderer: draws a ``GameSnapshot`` into an RGB buffer.

Rendering is a pure function of the snapshot plus the renderer's own
decoration (the star field). Nothing here writes back into the game.
"""

import math
import random
from dataclasses import dataclass
from typing import List, Optional

from bearrun.game.constants import FIELD_HEIGHT, FIELD_WIDTH, GROUND_Y
from bearrun.game.state import GameSnapshot, ObstacleSnapshot, RunnerSnapshot
from bearrun.graphics import palette
from bearrun.graphics.primitives import (
    Buffer,
    blend_rect,
    draw_circle,
    draw_rect,
    draw_triangle,
    new_buffer,
)


@dataclass(frozen=True)
class Star:
    """A twinkling star; brightness follows ``sin(phase + speed * tick)``."""
    x: float
    y: float
    size: float
    phase: float
    speed: float


class SceneRenderer:
    """Parallax day/night scenery, logs and the bear.

    Usage:
        renderer = SceneRenderer()
        buffer = renderer.render(game.snapshot())
    """

    MOON_X = 680
    MOON_Y = 50

    def __init__(
        self,
        width: int = FIELD_WIDTH,
        height: int = FIELD_HEIGHT,
        star_count: int = 50,
        seed: Optional[int] = None,
    ):
        self.width = width
        self.height = height
        self.ground = int(GROUND_Y)
        self.stars = self._make_stars(star_count, random.Random(seed))

    def _make_stars(self, count: int, rng: random.Random) -> List[Star]:
        return [
            Star(
                x=rng.random() * self.width,
                y=rng.random() * (self.ground - 20),
                size=rng.random() * 1.5 + 0.5,
                phase=rng.random() * math.tau,
                speed=rng.random() * 0.03 + 0.01,
            )
            for _ in range(count)
        ]

    def render(self, snapshot: GameSnapshot, buffer: Optional[Buffer] = None) -> Buffer:
        """Draw one frame. Allocates a buffer when none is given."""
        if buffer is None:
            buffer = new_buffer(self.width, self.height)

        n = snapshot.night_blend
        self._render_sky(buffer, snapshot.tick, n)
        self._render_mountains(buffer, snapshot.tick, n)
        self._render_ground(buffer, snapshot.tick, snapshot.speed, n)
        if n > 0.5:
            self._render_fireflies(buffer, snapshot.tick, n)

        dark = n > 0.5
        for obstacle in snapshot.obstacles:
            self._render_log(buffer, obstacle, dark)
        self._render_bear(buffer, snapshot.runner, dark)
        return buffer

    # Scenery
    def _render_sky(self, buffer: Buffer, tick: int, n: float) -> None:
        sky = palette.blend(palette.SKY, n)
        buffer[:self.ground, :] = sky

        if n > 0.1:
            for star in self.stars:
                twinkle = 0.5 + 0.5 * math.sin(star.phase + star.speed * tick)
                size = math.ceil(star.size)
                blend_rect(buffer, round(star.x), round(star.y), size, size, palette.STAR, n * twinkle)

        if n > 0.3:
            alpha = min((n - 0.3) / 0.4, 1.0)
            draw_circle(buffer, self.MOON_X, self.MOON_Y, 22, palette.MOON, alpha=alpha * 0.9)
            # Crescent: cover part of the disc with sky
            draw_circle(buffer, self.MOON_X + 10, self.MOON_Y - 5, 18, sky)

        cloud_alpha = max(1.0 - n * 1.5, 0.0)
        if cloud_alpha > 0:
            span = self.width + 100
            for offset, rate, y in ((0, 0.3, 40), (300, 0.2, 75)):
                cx = ((tick * rate + offset) % span) - 50
                blend_rect(buffer, cx, y, 40, 12, palette.CLOUD, cloud_alpha)
                blend_rect(buffer, cx + 8, y - 6, 24, 6, palette.CLOUD, cloud_alpha)

    def _render_mountains(self, buffer: Buffer, tick: int, n: float) -> None:
        far = palette.blend(palette.MOUNTAINS_FAR, n)
        for i in range(4):
            mx = i * 250 - (tick * 0.5 % 250)
            draw_triangle(buffer, mx, self.ground, 160, 80, far)

        near = palette.blend(palette.MOUNTAINS_NEAR, n)
        for i in range(5):
            mx = i * 200 - (tick * 0.8 % 200)
            draw_triangle(buffer, mx, self.ground, 100, 50, near)

    def _render_ground(self, buffer: Buffer, tick: int, speed: float, n: float) -> None:
        g = self.ground
        draw_rect(buffer, 0, g, self.width, 4, palette.blend(palette.GROUND_EDGE, n))
        draw_rect(buffer, 0, g + 4, self.width, self.height - g - 4, palette.blend(palette.GROUND, n))

        speckle = palette.blend(palette.GROUND_SPECKLE, n)
        for i in range(20):
            gx = (i * 45 - (tick * speed) % 45 + 900) % 900 - 50
            draw_rect(buffer, gx, g + 6, 8, 2, speckle)

        grass = palette.blend(palette.GRASS, n)
        for i in range(12):
            gx = (i * 70 - (tick * speed * 0.8) % 70 + 900) % 900 - 60
            draw_rect(buffer, gx, g - 4, 2, 4, grass)
            draw_rect(buffer, gx + 3, g - 6, 2, 6, grass)

    def _render_fireflies(self, buffer: Buffer, tick: int, n: float) -> None:
        for i in range(6):
            fx = (math.sin(tick * 0.02 + i * 2.5) * 0.5 + 0.5) * self.width
            fy = (math.cos(tick * 0.015 + i * 3.1) * 0.3 + 0.5) * (self.ground - 30)
            fa = (math.sin(tick * 0.05 + i * 1.7) * 0.5 + 0.5) * n
            blend_rect(buffer, round(fx) - 1, round(fy) - 1, 3, 3, palette.FIREFLY, fa * 0.6)

    # Sprites
    def _render_log(self, buffer: Buffer, obstacle: ObstacleSnapshot, dark: bool) -> None:
        g = self.ground
        x = obstacle.x
        groove = palette.pick(palette.LOG_GROOVE, dark)

        draw_rect(buffer, x, g - 20, 30, 20, palette.pick(palette.LOG_BARK, dark))
        for gx in (3, 14, 25):
            draw_rect(buffer, x + gx, g - 18, 2, 16, groove)
        draw_rect(buffer, x + 8, g - 16, 14, 12, palette.pick(palette.LOG_RING, dark))
        draw_rect(buffer, x + 11, g - 13, 8, 6, palette.pick(palette.LOG_CORE, dark))

        if obstacle.tall:
            draw_rect(buffer, x + 2, g - 38, 26, 18, palette.pick(palette.LOG_TOP, dark))
            draw_rect(buffer, x + 6, g - 36, 2, 14, groove)
            draw_rect(buffer, x + 16, g - 36, 2, 14, groove)
            draw_rect(buffer, x + 10, g - 32, 10, 8, palette.pick(palette.LOG_CORE, dark))

    def _render_bear(self, buffer: Buffer, runner: RunnerSnapshot, dark: bool) -> None:
        bx, by = runner.x, runner.y
        body = palette.pick(palette.BEAR_BODY, dark)
        fur = palette.pick(palette.BEAR_DARK, dark)
        snout = palette.pick(palette.BEAR_SNOUT, dark)

        # Body and head
        draw_rect(buffer, bx, by - 32, 28, 24, body)
        draw_rect(buffer, bx + 20, by - 42, 18, 18, body)
        # Ears
        draw_rect(buffer, bx + 20, by - 48, 6, 6, fur)
        draw_rect(buffer, bx + 32, by - 48, 6, 6, fur)
        draw_rect(buffer, bx + 21, by - 47, 4, 4, snout)
        draw_rect(buffer, bx + 33, by - 47, 4, 4, snout)
        # Snout, nose and eye
        draw_rect(buffer, bx + 30, by - 36, 10, 8, snout)
        draw_rect(buffer, bx + 36, by - 36, 4, 3, palette.BEAR_NOSE)
        draw_rect(buffer, bx + 28, by - 40, 3, 3, palette.pick(palette.BEAR_EYE, dark))
        if dark:
            draw_rect(buffer, bx + 29, by - 39, 1, 1, palette.BEAR_NOSE)

        # Legs
        if runner.airborne:
            draw_rect(buffer, bx + 4, by - 8, 6, 8, fur)
            draw_rect(buffer, bx + 16, by - 8, 6, 8, fur)
        else:
            step = int(math.floor(runner.animation_phase)) % 4
            a = 0 if step < 2 else 4
            b = 4 if step < 2 else 0
            draw_rect(buffer, bx + 2, by - 8 + a, 6, 8 - a, fur)
            draw_rect(buffer, bx + 10, by - 8 + b, 6, 8 - b, fur)
            draw_rect(buffer, bx + 16, by - 8 + b, 6, 8 - b, fur)
            draw_rect(buffer, bx + 24, by - 8 + a, 6, 8 - a, fur)

        # Tail
        draw_rect(buffer, bx - 4, by - 28, 6, 6, body)
