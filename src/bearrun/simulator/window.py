"""
Desktop window for BEAR RUN using pygame.

Owns the display loop: polls input, hands each frame to the driver,
renders the latest snapshot and draws the HUD and overlays on top.
"""

import pygame
import asyncio
import logging
from dataclasses import dataclass

from ..core.events import EventBus, Event, EventType, button_press_event, resize_event, tick_event
from ..game.driver import FrameDriver
from ..game.session import BearRunGame
from ..game.state import GameSnapshot
from ..graphics.scene import SceneRenderer
from .layout import Layout, compute_layout

logger = logging.getLogger(__name__)


@dataclass
class WindowConfig:
    """Window configuration."""
    width: int = 824
    height: int = 420
    title: str = "BEAR RUN"
    fullscreen: bool = False
    fps: int = 60

    # Colors
    bg_color: tuple[int, int, int] = (26, 26, 46)
    title_color: tuple[int, int, int] = (139, 94, 60)
    hint_color: tuple[int, int, int] = (136, 136, 136)
    best_color: tuple[int, int, int] = (76, 217, 100)
    game_over_color: tuple[int, int, int] = (230, 57, 70)


class GameWindow:
    """
    Main game window.

    Keyboard Mapping:
        SPACE / UP: Start, jump, or retry
        Mouse click / touch: Start, jump, or retry
        M: Toggle mute
        ESC / Q: Quit
    """

    JUMP_KEYS = (pygame.K_SPACE, pygame.K_UP)

    def __init__(
        self,
        game: BearRunGame,
        driver: FrameDriver,
        renderer: SceneRenderer | None = None,
        config: WindowConfig | None = None,
        event_bus: EventBus | None = None,
    ) -> None:
        self.config = config or WindowConfig()
        self.game = game
        self.driver = driver
        self.renderer = renderer or SceneRenderer()
        self.event_bus = event_bus or game.event_bus

        self._screen: pygame.Surface | None = None
        self._clock: pygame.time.Clock | None = None
        self._running = False
        self._frame_count = 0
        self._layout: Layout = compute_layout(self.config.width, self.config.height)

        self._font: pygame.font.Font | None = None
        self._big_font: pygame.font.Font | None = None
        self._small_font: pygame.font.Font | None = None

        logger.info("GameWindow created")

    @property
    def layout(self) -> Layout:
        return self._layout

    def _init_pygame(self) -> None:
        """Initialize pygame display and fonts."""
        pygame.display.init()
        pygame.font.init()
        pygame.display.set_caption(self.config.title)

        flags = pygame.RESIZABLE | pygame.DOUBLEBUF
        if self.config.fullscreen:
            flags |= pygame.FULLSCREEN
        self._screen = pygame.display.set_mode((self.config.width, self.config.height), flags)
        self._clock = pygame.time.Clock()

        self._font = pygame.font.SysFont("couriernew,dejavusansmono,monospace", 16, bold=True)
        self._big_font = pygame.font.SysFont("couriernew,dejavusansmono,monospace", 26, bold=True)
        self._small_font = pygame.font.SysFont("couriernew,dejavusansmono,monospace", 12)

        w, h = self._screen.get_size()
        self.on_resize(w, h)
        logger.info(f"Pygame initialized: {w}x{h}")

    # Input
    def on_resize(self, width: int, height: int) -> None:
        """Recompute the canvas layout. No effect on the simulation."""
        self._layout = compute_layout(width, height)
        self.event_bus.emit(resize_event(width, height))
        logger.debug(f"Layout: canvas {self._layout.canvas_width}x{self._layout.canvas_height}")

    def _press(self, source: str) -> None:
        self.event_bus.emit(button_press_event(source))
        self.game.on_jump_or_restart()

    def _handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            self._handle_event(event)

    def _handle_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.QUIT:
            self._running = False

        elif event.type == pygame.KEYDOWN:
            self._handle_keydown(event)

        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            # SDL also synthesizes a click for every touch; FINGERDOWN covers it
            if not getattr(event, "touch", False):
                self._press("mouse")

        elif event.type == pygame.FINGERDOWN:
            self._press("touch")

        elif event.type == pygame.VIDEORESIZE:
            self.on_resize(event.w, event.h)

    def _handle_keydown(self, event: pygame.event.Event) -> None:
        """Handle key press."""
        key = event.key

        if key in (pygame.K_ESCAPE, pygame.K_q):
            self._running = False
        elif key in self.JUMP_KEYS:
            self._press("keyboard")
        elif key == pygame.K_m:
            toggle = getattr(self.game.audio, "toggle_mute", None)
            if toggle is not None:
                toggle()

    # Rendering
    def _render(self) -> None:
        """Render the canvas, HUD and overlays."""
        if not self._screen:
            return

        snapshot = self.game.snapshot()
        layout = self._layout
        self._screen.fill(self.config.bg_color)

        buffer = self.renderer.render(snapshot)
        surface = pygame.surfarray.make_surface(buffer.swapaxes(0, 1))
        self._draw_hud(surface, snapshot)
        if (layout.canvas_width, layout.canvas_height) != surface.get_size():
            surface = pygame.transform.smoothscale(surface, (layout.canvas_width, layout.canvas_height))

        canvas = pygame.Rect(layout.canvas_x, layout.canvas_y, layout.canvas_width, layout.canvas_height)
        self._screen.blit(surface, canvas.topleft)

        if snapshot.idle:
            self._draw_start_overlay(canvas)
        elif snapshot.dead:
            self._draw_game_over_overlay(canvas, snapshot)

        self._draw_footer(canvas)
        pygame.display.flip()

    def _draw_hud(self, surface: pygame.Surface, snapshot: GameSnapshot) -> None:
        """Score and best in the top-right corner of the field."""
        dark = snapshot.night_blend > 0.5
        color = (221, 221, 221) if dark else (51, 51, 51)
        right = surface.get_width() - 20
        for text, y in ((f"Score: {snapshot.score}", 16), (f"Best: {snapshot.best}", 36)):
            label = self._font.render(text, True, color)
            surface.blit(label, (right - label.get_width(), y))

    def _dim(self, canvas: pygame.Rect, alpha: int) -> None:
        shade = pygame.Surface(canvas.size, pygame.SRCALPHA)
        shade.fill((0, 0, 0, alpha))
        self._screen.blit(shade, canvas.topleft)

    def _blit_centered(self, font: pygame.font.Font, text: str, color, center_x: int, y: int) -> None:
        label = font.render(text, True, color)
        self._screen.blit(label, (center_x - label.get_width() // 2, y))

    def _draw_start_overlay(self, canvas: pygame.Rect) -> None:
        self._dim(canvas, 102)
        cx, cy = canvas.centerx, canvas.centery
        prompt = "TAP to start!" if self._layout.compact else "Press SPACE or TAP to start"
        self._blit_centered(self._big_font, "BEAR RUN", self.config.title_color, cx, cy - 50)
        self._blit_centered(self._font, prompt, (255, 255, 255), cx, cy - 10)
        self._blit_centered(self._small_font, "Jump over logs to score!", (204, 204, 204), cx, cy + 14)
        self._blit_centered(
            self._small_font,
            f"Reach {self.game.settings.night_threshold} for a surprise...",
            (170, 170, 170), cx, cy + 32,
        )

    def _draw_game_over_overlay(self, canvas: pygame.Rect, snapshot: GameSnapshot) -> None:
        self._dim(canvas, 128)
        cx, cy = canvas.centerx, canvas.centery
        retry = "TAP to retry" if self._layout.compact else "SPACE or TAP to retry"
        self._blit_centered(self._big_font, "GAME OVER", self.config.game_over_color, cx, cy - 50)
        self._blit_centered(self._font, f"Score: {snapshot.score}", (255, 255, 255), cx, cy - 14)
        self._blit_centered(self._font, f"Best: {snapshot.best}", self.config.best_color, cx, cy + 6)
        self._blit_centered(self._small_font, retry, (204, 204, 204), cx, cy + 32)

    def _draw_footer(self, canvas: pygame.Rect) -> None:
        hint = "TAP anywhere to jump" if self._layout.compact else "SPACE / UP / TAP to jump"
        y = min(canvas.bottom + 10, self._layout.window_height - 16)
        self._blit_centered(self._small_font, hint, self.config.hint_color, canvas.centerx, y)

    # Loop
    async def run(self) -> None:
        """Main display loop."""
        self._init_pygame()
        self._running = True

        logger.info("Game window started")

        while self._running:
            self._handle_events()

            if self.driver.frame():
                self.event_bus.emit(tick_event(self._frame_count))

            self._render()

            if self._clock:
                self._clock.tick(self.config.fps)
            self._frame_count += 1

            # Yield to other tasks
            await asyncio.sleep(0)

        self._cleanup()

    def _cleanup(self) -> None:
        """Clean up pygame resources."""
        self.driver.stop()
        self.event_bus.emit(Event(EventType.SHUTDOWN, source="window"))
        pygame.quit()
        logger.info("Game window stopped")

    def stop(self) -> None:
        """Stop the window loop."""
        self._running = False
