"""
path_builder.py
---------------

Builds the closed squircle outline from four solved corners.

The outline starts on the top edge, right after the top-left corner, and
walks clockwise (screen coordinates) through the top-right, bottom-right,
bottom-left and top-left corners. Every corner is emitted as

    LineTo -> CubicTo -> ArcTo -> CubicTo

and the path is closed back to the start point.

Core API:

    build_path(rect, radii, params) -> SquirclePath

        Emits the path for already clamped radii and solved corners.

    squircle_path(rect, radii, corner_smoothing=0.6, preserve_smoothing=False) -> SquirclePath

        Full pipeline: clamp radii, solve the four corners, build the path.
"""

from __future__ import annotations

__all__ = [
    "MoveTo", "LineTo", "CubicTo", "ArcTo", "ClosePath", "PathCommand",
    "SquirclePath", "build_path", "solve_corners", "squircle_path",
]

import math
import logging
from dataclasses import dataclass, astuple
from typing import Iterator, Mapping, Optional, TypeAlias, Union

from .config import DEFAULTS
from .corner_solver import CornerParams, solve_corner
from .geometry import Corner, CORNER_ORDER, CornerRadii, Rect
from .logging_utils import LOGGER_NAME


# ---------------------------------------------------------------------------
# Path commands
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class MoveTo:
    x: float
    y: float


@dataclass(frozen=True)
class LineTo:
    x: float
    y: float


@dataclass(frozen=True)
class CubicTo:
    x1: float
    y1: float
    x2: float
    y2: float
    x: float
    y: float


@dataclass(frozen=True)
class ArcTo:
    """Elliptical arc in SVG endpoint form; the squircle only emits circles."""
    rx: float
    ry: float
    rotation: float
    large_arc: bool
    sweep: bool
    x: float
    y: float


@dataclass(frozen=True)
class ClosePath:
    pass


PathCommand: TypeAlias = Union[MoveTo, LineTo, CubicTo, ArcTo, ClosePath]


@dataclass(frozen=True)
class SquirclePath:
    """Immutable, ordered sequence of drawing commands."""
    commands: tuple[PathCommand, ...] = ()

    def __iter__(self) -> Iterator[PathCommand]:
        return iter(self.commands)

    def __len__(self) -> int:
        return len(self.commands)

    def __getitem__(self, index):
        return self.commands[index]

    @property
    def is_empty(self) -> bool:
        return not self.commands

    @property
    def is_closed(self) -> bool:
        return bool(self.commands) and isinstance(self.commands[-1], ClosePath)

    @property
    def start_point(self) -> tuple[float, float] | None:
        if self.is_empty or not isinstance(self.commands[0], MoveTo):
            return None
        first = self.commands[0]
        return (first.x, first.y)

    def is_finite(self) -> bool:
        """True when no coordinate is NaN or infinite."""
        return all(
            math.isfinite(float(v))
            for cmd in self.commands
            for v in astuple(cmd)
        )

    def to_svg(self, precision: Optional[int] = DEFAULTS.precision) -> str:
        from .svg_path import to_svg_path
        return to_svg_path(self, precision=precision)

    @classmethod
    def from_svg(cls, d: str) -> SquirclePath:
        from .svg_path import parse_svg_path
        return parse_svg_path(d)

    def to_mpl_path(self):
        from .mpl_path_utils import to_mpl_path
        return to_mpl_path(self)


EMPTY_PATH = SquirclePath()


# ---------------------------------------------------------------------------
# Path emission
# ---------------------------------------------------------------------------
def _corner_arc(radius: float, x: float, y: float) -> ArcTo:
    return ArcTo(radius, radius, 0.0, False, True, x, y)


def build_path(
        rect   : Rect,
        radii  : CornerRadii,
        params : Mapping[Corner, CornerParams],
    ) -> SquirclePath:
    """Emit the closed squircle outline.

    Args:
        rect: Target rectangle.
        radii: Radii already clamped to half of the shorter side.
        params: Solved parameters for each of the four corners.

    Returns:
        SquirclePath; empty when the rectangle has no positive extent.
    """
    if rect.is_empty:
        logging.getLogger(LOGGER_NAME).debug(f"build_path(): empty rect {rect}, no path emitted.")
        return EMPTY_PATH

    left, top, right, bottom = rect.left, rect.top, rect.right, rect.bottom
    tr = params[Corner.TOP_RIGHT]
    br = params[Corner.BOTTOM_RIGHT]
    bl = params[Corner.BOTTOM_LEFT]
    tl = params[Corner.TOP_LEFT]

    cmds: list[PathCommand] = []

    # Start at the left end of the top straight segment.
    cmds.append(MoveTo(left + tl.p, top))

    # --- Top right -----------------------------------------------------------
    x = right - tr.p
    cmds.append(LineTo(x, top))
    cmds.append(CubicTo(
        x + tr.a, top,
        x + tr.ab, top,
        x + tr.abc, top + tr.d,
    ))
    y = top + tr.p_minus_abc
    cmds.append(_corner_arc(radii.top_right, right - tr.d, y))
    cmds.append(CubicTo(
        right, y + tr.c,
        right, y + tr.bc,
        right, y + tr.abc,
    ))

    # --- Bottom right --------------------------------------------------------
    y = bottom - br.p
    cmds.append(LineTo(right, y))
    cmds.append(CubicTo(
        right, y + br.a,
        right, y + br.ab,
        right - br.d, y + br.abc,
    ))
    x = right - br.p_minus_abc
    cmds.append(_corner_arc(radii.bottom_right, x, bottom - br.d))
    cmds.append(CubicTo(
        x - br.c, bottom,
        x - br.bc, bottom,
        x - br.abc, bottom,
    ))

    # --- Bottom left ---------------------------------------------------------
    x = left + bl.p
    cmds.append(LineTo(x, bottom))
    cmds.append(CubicTo(
        x - bl.a, bottom,
        x - bl.ab, bottom,
        x - bl.abc, bottom - bl.d,
    ))
    y = bottom - bl.p_minus_abc
    cmds.append(_corner_arc(radii.bottom_left, left + bl.d, y))
    cmds.append(CubicTo(
        left, y - bl.c,
        left, y - bl.bc,
        left, y - bl.abc,
    ))

    # --- Top left ------------------------------------------------------------
    y = top + tl.p
    cmds.append(LineTo(left, y))
    cmds.append(CubicTo(
        left, y - tl.a,
        left, y - tl.ab,
        left + tl.d, y - tl.abc,
    ))
    x = left + tl.p_minus_abc
    cmds.append(_corner_arc(radii.top_left, x, top + tl.d))
    cmds.append(CubicTo(
        x + tl.c, top,
        x + tl.bc, top,
        x + tl.abc, top,
    ))

    cmds.append(ClosePath())
    return SquirclePath(tuple(cmds))


def solve_corners(
        rect               : Rect,
        radii              : CornerRadii,
        corner_smoothing   : float = DEFAULTS.corner_smoothing,
        preserve_smoothing : bool  = DEFAULTS.preserve_smoothing,
    ) -> tuple[CornerRadii, dict[Corner, CornerParams]]:
    """Clamp the radii to the rectangle and solve all four corners.

    Returns:
        (clamped_radii, params) - radii capped at half of the shorter side and
        the solved parameters keyed by corner.
    """
    max_rounding_and_smoothing = rect.shorter_side / 2
    clamped = radii.clamped(max_rounding_and_smoothing)
    params = {
        corner: solve_corner(
            clamped[corner],
            corner_smoothing,
            preserve_smoothing,
            max_rounding_and_smoothing,
        )
        for corner in CORNER_ORDER
    }
    return clamped, params


def squircle_path(
        rect               : Rect,
        radii              : Union[CornerRadii, float, str, tuple] = DEFAULTS.corner_radius,
        corner_smoothing   : float = DEFAULTS.corner_smoothing,
        preserve_smoothing : bool  = DEFAULTS.preserve_smoothing,
    ) -> SquirclePath:
    """Generate the squircle outline for a rectangle.

    Pure and deterministic: identical inputs always yield an equal path.

    Raises:
        TypeError: If `rect` is not a Rect or `radii` has an unsupported type.
    """
    if not isinstance(rect, Rect):
        raise TypeError(f"Expected a Rect, got {type(rect).__name__}.")
    radii = CornerRadii.coerce(radii)

    if rect.is_empty:
        logging.getLogger(LOGGER_NAME).debug(f"squircle_path(): empty rect {rect}, skipping.")
        return EMPTY_PATH

    clamped, params = solve_corners(rect, radii, corner_smoothing, preserve_smoothing)
    return build_path(rect, clamped, params)
