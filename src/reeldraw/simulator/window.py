"""
Reel simulator window using pygame.

Provides a desktop view of the reel: the container is a one-row viewport,
children are stacked below it and scrolled upward by the spin animation.
"""

from typing import Callable, Optional
import asyncio
import logging

import pygame

from reeldraw.animation.easing import interpolate
from reeldraw.config.settings import SimulatorSettings
from reeldraw.surface.memory import MemorySurface

logger = logging.getLogger(__name__)

Color = tuple[int, int, int]

BG_COLOR: Color = (20, 20, 30)
PANEL_COLOR: Color = (40, 40, 50)
TEXT_COLOR: Color = (200, 200, 220)
ACCENT_COLOR: Color = (100, 150, 255)


class ReelWindow(MemorySurface):
    """
    Display surface rendered into a pygame window each frame.

    Keyboard Mapping:
        SPACE / RETURN: Request a spin
        ESC / Q: Exit
    """

    def __init__(
        self,
        config: Optional[SimulatorSettings] = None,
        on_spin_request: Optional[Callable[[], None]] = None,
        status: Optional[Callable[[], str]] = None,
        **surface_kwargs,
    ) -> None:
        super().__init__(**surface_kwargs)
        self.config = config or SimulatorSettings()
        self.on_spin_request = on_spin_request
        self._status = status

        self._screen: pygame.Surface | None = None
        self._clock: pygame.time.Clock | None = None
        self._font: pygame.font.Font | None = None
        self._small_font: pygame.font.Font | None = None
        self._viewport: pygame.Rect | None = None
        self._running = False
        self._frame_count = 0

        logger.info("ReelWindow created")

    @property
    def running(self) -> bool:
        return self._running

    def _init_pygame(self) -> None:
        """Initialize pygame and create window."""
        pygame.init()
        pygame.display.set_caption(self.config.title)

        flags = pygame.DOUBLEBUF
        if self.config.fullscreen:
            flags |= pygame.FULLSCREEN

        self._screen = pygame.display.set_mode(
            (self.config.window_width, self.config.window_height),
            flags
        )
        self._clock = pygame.time.Clock()

        pygame.font.init()
        self._font = pygame.font.SysFont(None, int(self.item_height * 0.4))
        self._small_font = pygame.font.SysFont(None, 18)

        # One reel row, centered
        height = int(self.item_height)
        width = self.config.window_width - 40
        top = (self.config.window_height - height) // 2
        self._viewport = pygame.Rect(20, top, width, height)

        logger.info(f"Pygame initialized: {self.config.window_width}x{self.config.window_height}")

    def _handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.stop()
            elif event.type == pygame.KEYDOWN:
                self._handle_keydown(event.key)

    def _handle_keydown(self, key: int) -> None:
        if key in (pygame.K_ESCAPE, pygame.K_q):
            self.stop()
        elif key in (pygame.K_SPACE, pygame.K_RETURN):
            if self.on_spin_request is not None:
                self.on_spin_request()

    def _text_color(self) -> Color:
        # Blur is approximated by fading text toward the panel color
        return tuple(
            int(interpolate(text, panel, min(self.blur, 1.0) * 0.6))
            for text, panel in zip(TEXT_COLOR, PANEL_COLOR)
        )

    def _render(self) -> None:
        screen, viewport = self._screen, self._viewport
        screen.fill(BG_COLOR)
        pygame.draw.rect(screen, PANEL_COLOR, viewport)

        screen.set_clip(viewport)
        color = self._text_color()
        for index, item in enumerate(self.children):
            row_top = viewport.top + index * self.item_height + self.offset
            if row_top + self.item_height < viewport.top or row_top > viewport.bottom:
                continue
            text = self._font.render(item.text, True, color)
            rect = text.get_rect(center=(viewport.centerx, int(row_top + self.item_height / 2)))
            screen.blit(text, rect)
        screen.set_clip(None)

        pygame.draw.rect(screen, ACCENT_COLOR, viewport, width=2)

        if self._status is not None:
            status = self._small_font.render(self._status(), True, TEXT_COLOR)
            screen.blit(status, (20, 12))
        hint = self._small_font.render("SPACE: spin   ESC: quit", True, TEXT_COLOR)
        screen.blit(hint, (20, self.config.window_height - 28))

        pygame.display.flip()

    async def run(self) -> None:
        """Main window loop."""
        self._init_pygame()
        self._running = True

        logger.info("Simulator started")

        while self._running:
            self._handle_events()
            self._render()

            if self._clock:
                self._clock.tick(self.config.fps)

            self._frame_count += 1

            # Yield to the spin task
            await asyncio.sleep(0)

        self._cleanup()

    def _cleanup(self) -> None:
        """Clean up pygame resources."""
        pygame.quit()
        logger.info("Simulator stopped")

    def stop(self) -> None:
        """Stop the window loop."""
        self._running = False
