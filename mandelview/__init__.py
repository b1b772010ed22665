"""
Mandelbrot Set Viewer Package

An interactive Mandelbrot set explorer using Pygame for display and
Numba for the JIT-compiled, parallel escape-time engine.

Quick Start:
    python -m mandelview

Or drive the engine without a window:
    from mandelview import ViewController, MandelbrotRenderer
    controller = ViewController()
    renderer = MandelbrotRenderer(controller)
    frame = bytearray(640 * 480 * 4)
    renderer.render(frame, 640, 480)

Package Structure:
    - compute.py: JIT-compiled coordinate mapping, escape test, coloring and frame fill
    - colormaps.py: Color stop tables (Classic, Hot, Ocean, Grayscale)
    - view.py: View state and the controller that pans/zooms it
    - renderer.py: Frame rendering with the redraw short-circuit
    - controls.py: Zoom keys, auto-zoom and click handling policy
    - settings.py: settings.json loading
    - app.py: Main application and event loop

Controls:
    - Drag: Pan around
    - Double click: Recenter on the clicked point
    - Scroll / PageUp / PageDown: Zoom (Shift = fine, Alt = auto-zoom)
    - Arrows or h/j/k/l: Pan
    - Space: Reset to default view
    - Esc: Stop auto-zoom
    - I: Toggle info overlay, C: Next colormap, D: Print view, S: Save PNG
    - Q: Quit
"""

from .colormaps import COLORMAPS, get_colormap, list_colormap_names
from .compute import escape_time, round_to_color
from .renderer import MandelbrotRenderer
from .settings import Settings, load_settings
from .view import RedrawFlag, ViewController, ViewState

__version__ = "1.0.0"
__all__ = [
    "COLORMAPS",
    "get_colormap",
    "list_colormap_names",
    "escape_time",
    "round_to_color",
    "MandelbrotRenderer",
    "Settings",
    "load_settings",
    "RedrawFlag",
    "ViewController",
    "ViewState",
]
