"""
Frame renderer for the Mandelbrot viewer.

The MandelbrotRenderer class handles:
- Validating the caller's RGBA8 buffer against the frame size
- Skipping the fill entirely when the view has not changed
- Running the parallel fill on a snapshot of the view
- Timing each fill for the info overlay
"""

import logging
import time

import numba
import numpy as np

from .colormaps import get_default_colormap
from .compute import check_palette_capacity, fill_frame, warmup_jit

logger = logging.getLogger(__name__)

BYTES_PER_PIXEL = 4


def as_frame_array(buffer, width, height):
    """
    View a caller-owned buffer as a (height, width, 4) uint8 array
    without copying.

    Args:
        buffer: Writable bytes-like object or uint8 numpy array
        width, height: Frame dimensions in pixels

    Raises:
        ValueError if the dimensions are not positive or the buffer
        length is not width * height * 4.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"frame dimensions must be positive, got {width}x{height}")

    if isinstance(buffer, np.ndarray):
        if buffer.dtype != np.uint8:
            raise ValueError(f"frame buffer must be uint8, got {buffer.dtype}")
        if not buffer.flags.c_contiguous:
            raise ValueError("frame buffer must be contiguous")
        frame = buffer.reshape(-1)
    else:
        frame = np.frombuffer(buffer, dtype=np.uint8)

    expected = width * height * BYTES_PER_PIXEL
    if frame.size != expected:
        raise ValueError(
            f"frame buffer holds {frame.size} bytes, a {width}x{height} RGBA "
            f"frame needs {expected}"
        )
    if not frame.flags.writeable:
        raise ValueError("frame buffer is read-only")
    return frame.reshape(height, width, BYTES_PER_PIXEL)


class MandelbrotRenderer:
    """
    Fills RGBA8 frames from a ViewController's current view.

    Usage:
        controller = ViewController()
        renderer = MandelbrotRenderer(controller)
        buffer = bytearray(width * height * 4)

        # In your game loop:
        elapsed = renderer.render(buffer, width, height)

    Attributes:
        controller: The ViewController whose view is drawn
        colormap: (N, 3) color stop table
        band_size: Rounds per color band
        last_render_time: Seconds taken by the most recent fill
        render_count: Number of completed fills
    """

    def __init__(self, controller, colormap=None, band_size=256, num_threads=None):
        """
        Initialize the renderer.

        Args:
            controller: ViewController to read the view from
            colormap: Color stop table (default Classic)
            band_size: Rounds per color band (default 256)
            num_threads: Worker threads for the fill (None = numba default)
        """
        self.controller = controller
        self.colormap = get_default_colormap() if colormap is None else np.asarray(colormap, dtype=np.int64)
        self.band_size = band_size
        self.last_render_time = 0.0
        self.render_count = 0
        self._last_size = None

        # Fail at startup rather than on the first deep zoom
        settings = controller.settings
        deepest_cap = max(settings.coarse_max_round, settings.fine_max_round)
        check_palette_capacity(deepest_cap, self.colormap, self.band_size)

        if num_threads is not None:
            numba.set_num_threads(num_threads)
            logger.info("frame filler using %d threads", num_threads)

    def warmup(self):
        """Compile the fill kernels before the first real frame."""
        start = time.perf_counter()
        warmup_jit(self.colormap, self.band_size)
        logger.info("kernels ready in %.3f[sec]", time.perf_counter() - start)

    def render(self, buffer, width, height):
        """
        Fill buffer with the current view if it is stale.

        A frame of a different size than the last one is always filled,
        since the buffer cannot hold a valid image of it yet.

        Args:
            buffer: Writable RGBA8 buffer, row-major, width * height * 4 bytes
            width, height: Frame dimensions in pixels

        Returns:
            Seconds spent filling, or 0.0 if the fill was skipped.
        """
        frame = as_frame_array(buffer, width, height)

        size = (width, height)
        if not self.controller.is_dirty() and size == self._last_size:
            return 0.0

        state = self.controller.snapshot()
        check_palette_capacity(state.max_round, self.colormap, self.band_size)

        start = time.perf_counter()
        fill_frame(frame, width, height, state.center_x, state.center_y,
                   state.scale, state.max_round, self.colormap, self.band_size)
        elapsed = time.perf_counter() - start

        self._last_size = size
        self.last_render_time = elapsed
        self.render_count += 1
        self.controller.mark_clean()
        logger.info("rendering time: %.4f[sec]", elapsed)
        return elapsed

    def update_settings(self, colormap=None, band_size=None):
        """
        Change the coloring.

        Marks the view dirty since the visual appearance will change.

        Returns:
            True if any setting changed, False otherwise
        """
        new_colormap = self.colormap if colormap is None else np.asarray(colormap, dtype=np.int64)
        new_band = self.band_size if band_size is None else band_size
        changed = new_band != self.band_size or not np.array_equal(new_colormap, self.colormap)
        if changed:
            settings = self.controller.settings
            check_palette_capacity(max(settings.coarse_max_round, settings.fine_max_round),
                                   new_colormap, new_band)
            self.colormap = new_colormap
            self.band_size = new_band
            self.controller.mark_dirty()
        return changed
