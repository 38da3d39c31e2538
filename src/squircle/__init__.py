from .geometry import Corner, CORNER_ORDER, CornerRadii, Rect
from .corner_solver import CornerParams, ZERO_CORNER, arc_sweep, solve_corner
from .path_builder import (
    MoveTo, LineTo, CubicTo, ArcTo, ClosePath, PathCommand, SquirclePath,
    build_path, solve_corners, squircle_path,
)
from .svg_path import format_number, parse_svg_path, to_svg_path
from .mpl_path_utils import (
    arc_to_cubics, endpoint_arc, flatten_path, path_area, path_extents,
    polygon_area, to_mpl_path,
)
from .raster import clip_image, squircle_mask
from .base import Shape
from .squircle import Squircle
from .config import DEFAULTS, DemoConfig, SquircleConfig
from .logging_utils import LOGGER_NAME, ColorFormatter, configure_logging

__all__ = [
    # geometry
    "Corner", "CORNER_ORDER", "CornerRadii", "Rect",
    # corner solver
    "CornerParams", "ZERO_CORNER", "arc_sweep", "solve_corner",
    # path
    "MoveTo", "LineTo", "CubicTo", "ArcTo", "ClosePath", "PathCommand",
    "SquirclePath", "build_path", "solve_corners", "squircle_path",
    # serialization
    "format_number", "parse_svg_path", "to_svg_path",
    # matplotlib
    "arc_to_cubics", "endpoint_arc", "flatten_path", "path_area",
    "path_extents", "polygon_area", "to_mpl_path",
    # raster
    "clip_image", "squircle_mask",
    # shapes
    "Shape", "Squircle",
    # config and logging
    "DEFAULTS", "DemoConfig", "SquircleConfig",
    "LOGGER_NAME", "ColorFormatter", "configure_logging",
]
