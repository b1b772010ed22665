"""
View state for the Mandelbrot viewer.

ViewState is an immutable snapshot of the window over the complex plane.
ViewController owns the current snapshot and the redraw flag, and is the
only place the view is changed. The renderer reads a snapshot, so a fill
never sees a half-applied mutation.
"""

import logging
from dataclasses import dataclass, replace

from .compute import pixel_to_plane
from .settings import Settings

logger = logging.getLogger(__name__)


def round_cap_for(scale, threshold=5e-6, coarse_cap=512, fine_cap=1024):
    """
    Iteration cap for a given scale.

    Coarse views need few iterations to resolve their detail; once the
    scale drops to the threshold the cap steps up.
    """
    return coarse_cap if scale > threshold else fine_cap


@dataclass(frozen=True)
class ViewState:
    """
    A window over the complex plane.

    Attributes:
        center_x, center_y: Plane coordinates of the window's center
        scale: Plane units per pixel
        max_round: Iteration cap
        min_scale, max_scale: Bounds scale must stay within
    """

    center_x: float
    center_y: float
    scale: float
    max_round: int
    min_scale: float
    max_scale: float

    def __post_init__(self):
        if not self.scale > 0:
            raise ValueError(f"scale must be positive, got {self.scale}")
        if not self.min_scale <= self.scale <= self.max_scale:
            raise ValueError(
                f"scale {self.scale} outside [{self.min_scale}, {self.max_scale}]"
            )
        if self.max_round < 1:
            raise ValueError(f"max_round must be at least 1, got {self.max_round}")

    def to_plane(self, column, row, width, height):
        """Plane coordinates of pixel (column, row) in a width x height frame."""
        return pixel_to_plane(column, row, width, height,
                              self.center_x, self.center_y, self.scale)


class RedrawFlag:
    """Tracks whether the rendered frame is stale."""

    def __init__(self, dirty=True):
        self._dirty = dirty

    def mark(self):
        self._dirty = True

    def clear(self):
        self._dirty = False

    def is_set(self):
        return self._dirty


class ViewController:
    """
    Owns the current view and applies pan/zoom/recenter/reset to it.

    Every mutation marks the frame dirty. Only the renderer clears the
    flag, once a fill has completed.

    Usage:
        controller = ViewController()
        controller.zoom(1.0)
        state = controller.snapshot()
    """

    def __init__(self, settings=None):
        """
        Initialize the controller at the startup view.

        Args:
            settings: Settings to take defaults and zoom policy from
        """
        self.settings = settings or Settings()
        s = self.settings
        self.zoom_base = s.zoom_base
        self._initial = ViewState(
            center_x=s.center_x,
            center_y=s.center_y,
            scale=s.scale,
            max_round=self._cap_for(s.scale),
            min_scale=s.min_scale,
            max_scale=s.max_scale,
        )
        self._state = self._initial
        self.redraw_flag = RedrawFlag()

    def _cap_for(self, scale):
        s = self.settings
        return round_cap_for(scale, s.fine_scale_threshold,
                             s.coarse_max_round, s.fine_max_round)

    def snapshot(self):
        """The current ViewState."""
        return self._state

    @property
    def center(self):
        return self._state.center_x, self._state.center_y

    @property
    def scale(self):
        return self._state.scale

    @property
    def max_round(self):
        return self._state.max_round

    def pan(self, dx_px, dy_px):
        """
        Move the center by a pixel offset.

        Args:
            dx_px, dy_px: Offset in screen pixels (dy positive = up)
        """
        state = self._state
        self._state = replace(
            state,
            center_x=state.center_x + dx_px * state.scale,
            center_y=state.center_y + dy_px * state.scale,
        )
        logger.info("center (%r, %r)", self._state.center_x, self._state.center_y)
        self.mark_dirty()

    def recenter(self, screen_x, screen_y, window_w, window_h):
        """
        Make the point under (screen_x, screen_y) the new center.

        Args:
            screen_x, screen_y: Pixel position, row 0 at the top
            window_w, window_h: Frame size in pixels
        """
        state = self._state
        self._state = replace(
            state,
            center_x=state.center_x + (screen_x - window_w / 2.0) * state.scale,
            center_y=state.center_y + (window_h / 2.0 - screen_y) * state.scale,
        )
        logger.info("center (%r, %r)", self._state.center_x, self._state.center_y)
        self.mark_dirty()

    def zoom(self, amount):
        """
        Zoom by a signed amount (positive = in).

        The scale is multiplied by zoom_base ** -amount and clamped into
        [min_scale, max_scale]; the iteration cap follows the new scale.

        Returns:
            True if the zoom was applied in full, False if it was clamped.
        """
        state = self._state
        try:
            scale = state.scale * self.zoom_base ** (-amount)
        except OverflowError:
            scale = float('inf')
        applied = True
        if scale > state.max_scale:
            scale = state.max_scale
            applied = False
        elif scale < state.min_scale:
            logger.info("scale is smaller than machine epsilon: %r", scale)
            scale = state.min_scale
            applied = False

        self._state = replace(state, scale=scale, max_round=self._cap_for(scale))
        logger.info("scale %r, max_round %d", scale, self._state.max_round)
        self.mark_dirty()
        return applied

    def reset(self):
        """Restore the startup view."""
        self._state = self._initial
        logger.info("view reset")
        self.mark_dirty()

    def mark_dirty(self):
        self.redraw_flag.mark()

    def mark_clean(self):
        """Called by the renderer once a frame is complete."""
        self.redraw_flag.clear()

    def is_dirty(self):
        return self.redraw_flag.is_set()
