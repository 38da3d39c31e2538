"""
demo.py - Render a squircle to an image and print its path data.

    squircle-demo --size 200 100 --radius 20 --smoothing 0.6 \\
                  --background skyblue --border 3 --border-color navy
"""

import argparse
import logging
from dataclasses import asdict
from pathlib import Path
from typing import Optional, Sequence

import matplotlib as mpl

# Use a non-interactive backend (safe for headless runs)
mpl.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.axes import Axes

from .config import DEFAULTS, DemoConfig
from .geometry import Rect
from .logging_utils import LOGGER_NAME, configure_logging
from .squircle import Squircle


def setup_axes(ax: Axes, bounds: Rect, margin: float = 0.05) -> None:
    """Fit the view to `bounds` in screen orientation (y down), axes hidden."""
    pad_x, pad_y = bounds.width * margin, bounds.height * margin
    ax.set_xlim(bounds.left - pad_x, bounds.right + pad_x)
    ax.set_ylim(bounds.bottom + pad_y, bounds.top - pad_y)
    ax.set_aspect("equal", adjustable="box")
    ax.axis("off")


def render(squircle: Squircle, output: Path, config: DemoConfig) -> Path:
    """Draw the squircle alone on a figure and save it."""
    w, h = config.img_size
    fig, ax = plt.subplots(figsize=(w / config.dpi, h / config.dpi), dpi=config.dpi)
    try:
        setup_axes(ax, squircle.bounds)
        squircle.draw(ax)
        fig.savefig(output, dpi=config.dpi, transparent=True)
    finally:
        plt.close(fig)
    return output


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="squircle-demo",
        description="Render a smoothed rounded rectangle and print its SVG path data.",
    )
    parser.add_argument("--size", nargs=2, type=float, default=(200.0, 100.0),
                        metavar=("WIDTH", "HEIGHT"), help="shape size in data units")
    parser.add_argument("--radius", default=str(DEFAULTS.corner_radius),
                        help='corner radius: "r", "top,bottom" or "tl,tr,br,bl"')
    parser.add_argument("--smoothing", type=float, default=DEFAULTS.corner_smoothing,
                        help="corner smoothing, nominally 0..1")
    parser.add_argument("--preserve-smoothing", action="store_true",
                        help="keep the requested smoothing even when corners overlap")
    parser.add_argument("--border", type=float, default=DEFAULTS.border_thickness,
                        help="border thickness in data units")
    parser.add_argument("--border-color", default=None)
    parser.add_argument("--background", default="skyblue")
    parser.add_argument("--output-dir", type=Path, default=Path("./out"))
    parser.add_argument("--name", default="squircle.png", help="output file name")
    parser.add_argument("--precision", type=int, default=DEFAULTS.precision,
                        help="decimals in the printed path data")
    parser.add_argument("--verbose", "-v", action="store_true")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    config = DemoConfig(
        logger_level=logging.DEBUG if args.verbose else logging.INFO,
        output_dir=args.output_dir,
    )
    configure_logging(level=config.logger_level, name=LOGGER_NAME)
    logger = logging.getLogger(LOGGER_NAME)
    logger.debug(f"DemoConfig: {asdict(config)}")

    try:
        squircle = Squircle(
            bounds=Rect.from_size(*args.size),
            corner_radius=args.radius,
            corner_smoothing=args.smoothing,
            preserve_smoothing=args.preserve_smoothing,
            border_thickness=args.border,
            border_color=args.border_color,
            background=args.background,
        )
    except (TypeError, ValueError) as e:
        logger.error(f"Invalid shape parameters: {e}")
        return 2

    if squircle.path.is_empty:
        logger.warning(f"Degenerate size {tuple(args.size)}; nothing to render.")
        return 1

    output = render(squircle, config.output_dir / args.name, config)
    logger.info(f"Image written: {output}")
    print(squircle.path.to_svg(args.precision))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
