"""
Color stop tables for Mandelbrot visualization.

Each colormap function returns a numpy array of shape (N, 3) with RGB
values (int64). Every stop spans one band of iteration counts (256 by
default); the color mapper interpolates linearly between a stop and the
next one, so a table of N stops can color rounds up to
(N - 1) * band_size - 1.

To add a new colormap:
1. Define a create_colormap_xxx() function that returns the stop array
2. Add it to the COLORMAPS dictionary at the bottom of this file
"""

import numpy as np


def _stops(*colors):
    return np.array(colors, dtype=np.int64)


def create_colormap_classic():
    """
    Classic colormap: navy -> green -> yellow -> cyan -> blue.

    High contrast between bands, so each doubling of the escape time
    is easy to tell apart.
    """
    return _stops(
        (0x00, 0x00, 0x80),
        (0x00, 0xff, 0x00),
        (0xff, 0xff, 0x00),
        (0x00, 0xff, 0xff),
        (0x00, 0x00, 0xff),
    )


def create_colormap_hot():
    """Hot colormap: dark red -> red -> orange -> yellow -> white."""
    return _stops(
        (0x40, 0x00, 0x00),
        (0xff, 0x00, 0x00),
        (0xff, 0x80, 0x00),
        (0xff, 0xff, 0x00),
        (0xff, 0xff, 0xff),
    )


def create_colormap_ocean():
    """Ocean colormap: deep blue -> cyan -> white."""
    return _stops(
        (0x00, 0x00, 0x32),
        (0x00, 0x40, 0x90),
        (0x00, 0x80, 0xc0),
        (0x00, 0xff, 0xff),
        (0xff, 0xff, 0xff),
    )


def create_colormap_grayscale():
    """Grayscale colormap: black -> white."""
    return _stops(
        (0x10, 0x10, 0x10),
        (0x50, 0x50, 0x50),
        (0x90, 0x90, 0x90),
        (0xd0, 0xd0, 0xd0),
        (0xff, 0xff, 0xff),
    )


# Registry of all available colormaps.
# Keys are display names, values are factory functions.
COLORMAPS = {
    'Classic': create_colormap_classic,
    'Hot': create_colormap_hot,
    'Ocean': create_colormap_ocean,
    'Grayscale': create_colormap_grayscale,
}


def get_colormap(name):
    """
    Get a colormap by name.

    Args:
        name: Key from COLORMAPS dictionary

    Returns:
        Stop array (N, 3) of int64 RGB values

    Raises:
        KeyError if name not found
    """
    return COLORMAPS[name]()


def get_default_colormap():
    """Get the default colormap (Classic)."""
    return create_colormap_classic()


def list_colormap_names():
    """Get list of available colormap names."""
    return list(COLORMAPS.keys())
