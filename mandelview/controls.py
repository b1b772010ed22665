"""
Input policy for the Mandelbrot viewer.

Turns raw input facts (which key, which modifiers, when a click happened)
into ViewController calls. Nothing here talks to pygame, so the policy can
be exercised without a display.
"""

import logging

logger = logging.getLogger(__name__)


class ZoomKeys:
    """
    Page Up / Page Down zoom with modifiers and auto-zoom.

    - plain: one big step (zoom_step)
    - Shift: one fine step (fine_zoom_step)
    - Alt: start auto-zoom, applying auto_zoom_step every frame

    While auto-zoom runs, a plain or Shift press stops it instead of
    zooming. Auto-zoom also stops on stop() or as soon as the controller
    reports a clamped zoom.
    """

    def __init__(self, controller, zoom_step=3.0, fine_zoom_step=0.1, auto_zoom_step=0.2):
        self.controller = controller
        self.zoom_step = zoom_step
        self.fine_zoom_step = fine_zoom_step
        self.auto_zoom_step = auto_zoom_step
        self.auto_amount = 0.0

    @property
    def auto_zooming(self):
        return self.auto_amount != 0.0

    def press(self, direction, shift=False, alt=False):
        """
        Handle a zoom key press.

        Args:
            direction: +1 for zoom in, -1 for zoom out
            shift, alt: Modifier state

        Returns:
            The zoom amount applied (0.0 if the press stopped auto-zoom).
        """
        if alt:
            amount = self.auto_zoom_step * direction
            self.auto_amount = amount
            logger.info("auto zoom %+.2f", amount)
        elif self.auto_zooming:
            self.stop()
            logger.info("auto zoom stopped")
            return 0.0
        elif shift:
            amount = self.fine_zoom_step * direction
        else:
            amount = self.zoom_step * direction
        self._apply(amount)
        return amount

    def tick(self):
        """Apply one frame of auto-zoom, if running."""
        if self.auto_zooming:
            self._apply(self.auto_amount)

    def stop(self):
        self.auto_amount = 0.0

    def _apply(self, amount):
        if not self.controller.zoom(amount):
            if self.auto_zooming:
                logger.info("auto zoom stopped at scale limit")
            self.auto_amount = 0.0


class ClickTracker:
    """
    Tell double clicks from drags.

    A press within interval_ms of the previous press is a double click.
    Any other press starts a drag, which is applied on release.
    """

    def __init__(self, interval_ms=700):
        self.interval_ms = interval_ms
        self.last_press_ms = None
        self.press_pos = None
        self.double_clicked = False

    def press(self, pos, now_ms):
        """
        Record a press.

        Returns:
            True if this press completes a double click.
        """
        interval = None if self.last_press_ms is None else now_ms - self.last_press_ms
        logger.debug("click interval %s", interval)
        self.last_press_ms = now_ms
        self.double_clicked = interval is not None and interval < self.interval_ms
        if self.double_clicked:
            self.press_pos = None
        else:
            self.press_pos = pos
        return self.double_clicked

    def release(self, pos):
        """
        Record a release.

        Returns:
            (dx, dy) pan vector in pixels with y pointing up, or None if
            the release ends a double click.
        """
        if self.double_clicked or self.press_pos is None:
            return None
        dx = self.press_pos[0] - pos[0]
        dy = -(self.press_pos[1] - pos[1])
        self.press_pos = None
        return dx, dy


# Arrow / vi key pan directions, in (x, y) with y pointing up
PAN_DIRECTIONS = {
    'up': (0.0, 1.0),
    'down': (0.0, -1.0),
    'left': (-1.0, 0.0),
    'right': (1.0, 0.0),
}


def pan_step(controller, direction, step=10.0):
    """
    Pan one key step.

    Args:
        controller: ViewController to move
        direction: Key of PAN_DIRECTIONS
        step: Step size in pixels
    """
    ux, uy = PAN_DIRECTIONS[direction]
    controller.pan(ux * step, uy * step)
