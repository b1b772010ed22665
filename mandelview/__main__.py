"""
Allow running the package directly: python -m mandelview
"""
import argparse
import logging
from dataclasses import replace

from .colormaps import list_colormap_names
from .settings import load_settings


def main():
    parser = argparse.ArgumentParser(
        prog="mandelview",
        description="Interactive Mandelbrot set viewer",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "--settings",
        default=None,
        help="settings JSON file (default: the packaged settings.json)",
    )
    parser.add_argument("--width", type=int, help="window width in pixels")
    parser.add_argument("--height", type=int, help="window height in pixels")
    parser.add_argument(
        "--threads",
        type=int,
        help="worker threads for the frame fill",
    )
    parser.add_argument(
        "--colormap",
        choices=list_colormap_names(),
        help="color scheme",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="log view changes and render times (-vv for input details)",
    )
    args = parser.parse_args()

    level = logging.WARNING
    if args.verbose == 1:
        level = logging.INFO
    elif args.verbose > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s - %(message)s")

    settings = load_settings(args.settings)
    overrides = {
        "window_width": args.width,
        "window_height": args.height,
        "threads": args.threads,
        "colormap": args.colormap,
    }
    settings = replace(settings, **{k: v for k, v in overrides.items() if v is not None})

    from .app import run
    run(settings)


if __name__ == "__main__":
    main()
