"""
Main application module for the Mandelbrot viewer.

Contains the MandelbrotApp class which handles:
- Window setup and main loop
- User input (drag, double click, scroll, keyboard)
- Presenting the rendered RGBA buffer and the info overlay
"""

import logging
import os
from datetime import datetime

import pygame

from .colormaps import get_colormap, list_colormap_names
from .controls import ClickTracker, ZoomKeys, pan_step
from .renderer import BYTES_PER_PIXEL, MandelbrotRenderer
from .settings import Settings
from .view import ViewController

logger = logging.getLogger(__name__)

PAN_KEYS = {
    pygame.K_UP: 'up',
    pygame.K_k: 'up',
    pygame.K_DOWN: 'down',
    pygame.K_j: 'down',
    pygame.K_LEFT: 'left',
    pygame.K_h: 'left',
    pygame.K_RIGHT: 'right',
    pygame.K_l: 'right',
}

# Overlay text: light gray with a black drop shadow
TEXT_COLOR = (0xb0, 0xb0, 0xb0)
SHADOW_COLOR = (0x00, 0x00, 0x00)


class MandelbrotApp:
    """
    Main application class for the Mandelbrot viewer.

    Handles the pygame window, event loop, and hands input to the
    ViewController and frames to the MandelbrotRenderer.
    """

    FPS = 60
    OVERLAY_POS = (5, 5)
    OVERLAY_LINE_HEIGHT = 12

    def __init__(self, settings=None):
        """
        Initialize the application.

        Args:
            settings: Settings to run with (default: built-in defaults)
        """
        self.settings = settings or Settings()
        s = self.settings
        self.width = s.window_width
        self.height = s.window_height
        self.show_info = s.show_info

        self.controller = ViewController(s)
        self.renderer = MandelbrotRenderer(
            self.controller,
            colormap=get_colormap(s.colormap),
            band_size=s.band_size,
            num_threads=s.threads,
        )
        self.colormap_name = s.colormap
        self.zoom_keys = ZoomKeys(self.controller, s.zoom_step,
                                  s.fine_zoom_step, s.auto_zoom_step)
        self.clicks = ClickTracker(s.double_click_ms)
        self.frame = bytearray(self.width * self.height * BYTES_PER_PIXEL)

        # Pygame state (initialized in run())
        self.screen = None
        self.clock = None
        self.font = None

        self.running = False

    def run(self):
        """Run the application main loop."""
        self._init_pygame()
        pygame.display.set_caption("Compiling (first run only)...")
        self.renderer.warmup()
        pygame.display.set_caption("Mandelbrot")

        self.running = True
        while self.running:
            self._handle_events()
            self.zoom_keys.tick()
            self.renderer.render(self.frame, self.width, self.height)
            self._draw()
            self.clock.tick(self.FPS)

        pygame.quit()

    def _init_pygame(self):
        """Initialize pygame and create window."""
        pygame.init()
        self.screen = pygame.display.set_mode(
            (self.width, self.height),
            pygame.RESIZABLE
        )
        self.clock = pygame.time.Clock()
        pygame.font.init()
        self.font = pygame.font.SysFont('Arial', 12)

    def _handle_events(self):
        """Process all pending pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.VIDEORESIZE:
                self._handle_resize(event)
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                self._handle_mouse_down(event)
            elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
                self._handle_mouse_up(event)
            elif event.type == pygame.MOUSEWHEEL:
                logger.info("scroll: %s", event.y)
                self.controller.zoom(event.y)
            elif event.type == pygame.KEYDOWN:
                self._handle_key(event)

    def _handle_resize(self, event):
        """Reallocate the frame buffer for the new window size."""
        self.width, self.height = max(1, event.w), max(1, event.h)
        self.screen = pygame.display.set_mode((self.width, self.height), pygame.RESIZABLE)
        self.frame = bytearray(self.width * self.height * BYTES_PER_PIXEL)
        self.controller.mark_dirty()
        logger.info("window resized to %dx%d", self.width, self.height)

    def _handle_mouse_down(self, event):
        """Double click recenters; a single press starts a drag."""
        if self.clicks.press(event.pos, pygame.time.get_ticks()):
            logger.info("double clicked at %s", event.pos)
            x, y = event.pos
            self.controller.recenter(x, y, self.width, self.height)

    def _handle_mouse_up(self, event):
        """Apply the drag vector of a finished drag."""
        drag = self.clicks.release(event.pos)
        if drag is not None:
            logger.info("drag: %s", drag)
            self.controller.pan(*drag)

    def _handle_key(self, event):
        """Handle keyboard input."""
        mods = pygame.key.get_mods()
        if event.key == pygame.K_q:
            self.running = False
        elif event.key in (pygame.K_PAGEUP, pygame.K_PAGEDOWN):
            direction = 1.0 if event.key == pygame.K_PAGEUP else -1.0
            self.zoom_keys.press(direction,
                                 shift=bool(mods & pygame.KMOD_SHIFT),
                                 alt=bool(mods & pygame.KMOD_ALT))
        elif event.key == pygame.K_ESCAPE:
            self.zoom_keys.stop()
        elif event.key == pygame.K_SPACE:
            self.zoom_keys.stop()
            self.controller.reset()
        elif event.key in PAN_KEYS:
            pan_step(self.controller, PAN_KEYS[event.key], self.settings.pan_step)
        elif event.key == pygame.K_i:
            self.show_info = not self.show_info
        elif event.key == pygame.K_c:
            self._next_colormap()
        elif event.key == pygame.K_d:
            self._dump_view()
        elif event.key == pygame.K_s:
            self._save_image()

    def _next_colormap(self):
        """Switch to the next registered colormap."""
        names = list_colormap_names()
        idx = names.index(self.colormap_name) if self.colormap_name in names else -1
        self.colormap_name = names[(idx + 1) % len(names)]
        self.renderer.update_settings(colormap=get_colormap(self.colormap_name))
        logger.info("colormap %s", self.colormap_name)

    def _info_lines(self):
        cx, cy = self.controller.center
        return [
            f"x: {cx}",
            f"y: {cy}",
            f"scale: {self.controller.scale}",
            f"max round: {self.controller.max_round}",
            f"rendering time: {self.renderer.last_render_time:.4f}[sec]",
        ]

    def _dump_view(self):
        """Print the current view to stdout."""
        print()
        for line in self._info_lines():
            print(line)

    def _save_image(self):
        """Save the current frame (without overlay) as a PNG."""
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filename = os.path.abspath(f"mandelbrot_{timestamp}.png")
        surface = pygame.image.frombuffer(bytes(self.frame), (self.width, self.height), 'RGBA')
        pygame.image.save(surface, filename)
        print(f"Image saved to: {filename}")

    def _draw(self):
        """Draw the current frame and composite the overlay on top."""
        surface = pygame.image.frombuffer(self.frame, (self.width, self.height), 'RGBA')
        self.screen.blit(surface, (0, 0))
        if self.show_info:
            self._draw_info()
        pygame.display.flip()

    def _draw_info(self):
        x, y = self.OVERLAY_POS
        for line in self._info_lines():
            text = self.font.render(line, True, TEXT_COLOR)
            shadow = self.font.render(line, True, SHADOW_COLOR)
            self.screen.blit(shadow, (x + 1, y + 1))
            self.screen.blit(text, (x, y))
            y += self.OVERLAY_LINE_HEIGHT


def run(settings=None):
    """
    Run the Mandelbrot viewer.

    Args:
        settings: Settings to run with (default: built-in defaults)
    """
    app = MandelbrotApp(settings)
    try:
        app.run()
    except KeyboardInterrupt:
        logger.info("interrupted")
        pygame.quit()
