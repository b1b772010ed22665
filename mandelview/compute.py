"""
Escape-time computation functions using Numba JIT compilation.

This module contains all the performance-critical functions that are
JIT-compiled for speed:
- Pixel to complex-plane coordinate mapping
- The z² + c divergence test
- Banded colormap lookup with linear interpolation
- The parallel frame fill over an RGBA8 buffer

None of the kernels use fastmath: a frame must be reproducible bit for
bit for the same view, whatever the thread count.

Inside the kernels a point that never escapes is reported as BOUNDED (0).
Rounds are 1-indexed, so 0 is never a real escape round. The Python
helpers at the bottom of the module translate that to None.
"""

import numpy as np
from numba import jit, prange


BOUNDED = 0
ESCAPE_RADIUS_SQUARED = 4.0

# Opaque black for points inside the set
IN_SET_COLOR = (0x00, 0x00, 0x00, 0xff)


@jit(nopython=True, cache=True)
def pixel_to_plane(column, row, width, height, center_x, center_y, scale):
    """
    Map a pixel to its point on the complex plane.

    Row 0 is the top edge of the frame and maps to the largest imaginary
    part (screen rows grow downward, the imaginary axis grows upward).

    Returns:
        (x, y): Real and imaginary parts of the point
    """
    min_x = center_x - (scale * width) / 2.0
    max_y = center_y + (scale * height) / 2.0
    return min_x + column * scale, max_y - row * scale


@jit(nopython=True, cache=True)
def check_divergence(x, y, max_round):
    """
    Run the escape-time test for c = x + iy.

    Iterates z_{n+1} = z_n² + c from z_0 = 0, keeping z as a real and
    imaginary pair. The squared components of each step are reused for
    both the magnitude test and the next step.

    Args:
        x, y: Real and imaginary parts of c
        max_round: Iteration cap (>= 1)

    Returns:
        The 1-indexed round at which |z|² >= 4, or BOUNDED.
    """
    # |c| >= 2 escapes on the first round
    if abs(x) >= 2.0 or abs(y) >= 2.0:
        return 1

    xn = 0.0
    yn = 0.0
    xn_sq = 0.0
    yn_sq = 0.0

    round_ = 1
    while round_ < max_round:
        yn = 2.0 * xn * yn + y
        xn = xn_sq - yn_sq + x

        xn_sq = xn * xn
        yn_sq = yn * yn

        if xn_sq + yn_sq >= ESCAPE_RADIUS_SQUARED:
            return round_
        round_ += 1
    return BOUNDED


@jit(nopython=True, cache=True)
def write_color(round_, table, band_size, pixel):
    """
    Write the RGBA color of an escape result into a 4-byte pixel.

    Escaped rounds are located in a band of band_size rounds and
    interpolated between table[index] and table[index + 1]. The caller
    guarantees index + 1 < len(table) (see check_palette_capacity).
    """
    if round_ == BOUNDED:
        for channel in range(4):
            pixel[channel] = IN_SET_COLOR[channel]
        return

    index = round_ // band_size
    offset = round_ % band_size
    weight = band_size - offset
    for channel in range(3):
        a = table[index, channel]
        b = table[index + 1, channel]
        pixel[channel] = ((a * weight + b * offset) // band_size) & 0xff
    pixel[3] = 0xff


@jit(nopython=True, parallel=True, cache=True)
def fill_frame(out, width, height, center_x, center_y, scale, max_round,
               table, band_size):
    """
    Fill a whole RGBA8 frame in parallel.

    Rows are split across worker threads with prange. Every pixel depends
    only on its own index and the view values passed in, and writes only
    its own 4 bytes, so no synchronization is needed.

    Args:
        out: uint8 array of shape (height, width, 4) (modified in place)
        width, height: Frame dimensions in pixels
        center_x, center_y, scale: View transform
        max_round: Iteration cap
        table: (N, 3) int64 color stops
        band_size: Rounds per color band
    """
    for row in prange(height):
        for column in range(width):
            x, y = pixel_to_plane(column, row, width, height,
                                  center_x, center_y, scale)
            round_ = check_divergence(x, y, max_round)
            write_color(round_, table, band_size, out[row, column])


def check_palette_capacity(max_round, table, band_size):
    """
    Make sure every round below max_round has two stops to blend.

    The kernels do no bounds checking, so a cap that is too large for the
    table must be rejected before a fill starts.

    Raises:
        ValueError if the table is too short for the cap.
    """
    if band_size < 1:
        raise ValueError(f"band_size must be positive, got {band_size}")
    if table.ndim != 2 or table.shape[0] < 2 or table.shape[1] != 3:
        raise ValueError(f"color table must have shape (N >= 2, 3), got {table.shape}")
    # max_round - 1 is the largest round that can be reported as escaped
    needed = (max_round - 1) // band_size + 2
    if needed > table.shape[0]:
        raise ValueError(
            f"max_round {max_round} needs {needed} color stops with band size "
            f"{band_size}, table has {table.shape[0]}"
        )


def escape_time(x, y, max_round):
    """
    Escape round of c = x + iy, or None if it stays bounded.

    Args:
        x, y: Real and imaginary parts of c
        max_round: Iteration cap (>= 1)
    """
    if max_round < 1:
        raise ValueError(f"max_round must be at least 1, got {max_round}")
    round_ = check_divergence(float(x), float(y), int(max_round))
    return None if round_ == BOUNDED else round_


def round_to_color(round_, table, band_size=256):
    """
    RGBA color for an escape result.

    Args:
        round_: Escape round, or None for a bounded point
        table: (N, 3) color stops
        band_size: Rounds per color band

    Returns:
        Tuple (r, g, b, a) of ints
    """
    table = np.asarray(table, dtype=np.int64)
    out = np.zeros(4, dtype=np.uint8)
    if round_ is None:
        write_color(BOUNDED, table, band_size, out)
    else:
        if round_ < 1:
            raise ValueError(f"escape rounds start at 1, got {round_}")
        if round_ // band_size + 1 >= table.shape[0]:
            raise ValueError(
                f"round {round_} is past the last color band "
                f"({table.shape[0]} stops, band size {band_size})"
            )
        write_color(int(round_), table, band_size, out)
    return tuple(int(v) for v in out)


def warmup_jit(table, band_size=256):
    """
    Warm up JIT compilation with a tiny frame.

    Call this once at startup to pre-compile the Numba functions,
    avoiding a delay on the first real frame.
    """
    dummy = np.zeros((4, 4, 4), dtype=np.uint8)
    fill_frame(dummy, 4, 4, -0.7, 0.0, 0.5, 8, table, band_size)
