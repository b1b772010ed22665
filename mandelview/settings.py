"""
Settings for the Mandelbrot viewer.

Values are read from settings.json next to this module (or a file given
on the command line). Any key missing from the file keeps its built-in
default, and an unreadable file falls back to the defaults entirely.
"""

import json
import logging
import os
from dataclasses import dataclass, fields, replace
from typing import Optional

import numpy as np

logger = logging.getLogger(__name__)

SETTINGS_PATH = os.path.join(os.path.dirname(__file__), 'settings.json')


@dataclass(frozen=True)
class Settings:
    """All tunable values of the viewer."""

    # Window
    window_width: int = 640
    window_height: int = 480

    # Startup view
    center_x: float = -0.7
    center_y: float = 0.0
    scale: float = 0.005
    min_scale: float = float(np.finfo(np.float64).eps)
    max_scale: float = 0.1
    zoom_base: float = 1.07

    # Iteration cap step function
    fine_scale_threshold: float = 5e-6
    coarse_max_round: int = 512
    fine_max_round: int = 1024

    # Coloring
    band_size: int = 256
    colormap: str = 'Classic'

    # Worker threads for the frame filler (None = numba default)
    threads: Optional[int] = None

    # Input policy
    pan_step: float = 10.0
    zoom_step: float = 3.0
    fine_zoom_step: float = 0.1
    auto_zoom_step: float = 0.2
    double_click_ms: int = 700
    show_info: bool = True


def load_settings(path=None):
    """
    Load settings from a JSON file.

    Args:
        path: JSON file to read (default: the packaged settings.json)

    Returns:
        Settings with the file's values applied over the defaults.
    """
    path = path or SETTINGS_PATH
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning("Could not load %s: %s", path, e)
        return Settings()

    if not isinstance(data, dict):
        logger.warning("Ignoring %s: expected a JSON object", path)
        return Settings()

    known = {f.name for f in fields(Settings)}
    unknown = sorted(set(data) - known)
    if unknown:
        logger.warning("Ignoring unknown settings: %s", ", ".join(unknown))

    # null means "use the default"
    values = {k: v for k, v in data.items() if k in known and v is not None}
    return replace(Settings(), **values)
