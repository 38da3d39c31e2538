"""
mpl_path_utils.py
-----------------

Conversion of SquirclePath into Matplotlib paths, plus a few measurements on
the result.

Matplotlib has no arc code, so every ArcTo is re-expressed as a chain of cubic
Bezier segments. `svgpathtools.Arc` resolves the SVG endpoint form into its
center, start angle and sweep; the arc is then split into pieces no wider
than 90deg, and each piece is modelled on the unit circle and mapped onto the
ellipse with a scale -> rotate -> translate transform.

Core API:

    endpoint_arc(x0, y0, rx, ry, rotation_deg, large_arc, sweep, x1, y1) -> Arc | None

        svgpathtools arc for SVG endpoint parameters. None for degenerate arcs
        (zero radius or coincident endpoints), which render as straight lines.

    arc_to_cubics(x0, y0, rx, ry, rotation_deg, large_arc, sweep, x1, y1) -> NDArray (3n, 2)

        Control and end points of the Bezier chain approximating the arc.

    to_mpl_path(path: SquirclePath) -> mplPath

        MOVETO / LINETO / CURVE4 / CLOSEPOLY representation.

    flatten_path(path: mplPath, samples_per_curve: int = 16) -> list[NDArray]

        Polyline approximation, one (N, 2) array per subpath.

    polygon_area(vertices) -> float, path_area(path) -> float,
    path_extents(path) -> Rect
"""

from __future__ import annotations

__all__ = [
    "endpoint_arc", "unit_arc_segment", "arc_to_cubics",
    "to_mpl_path", "flatten_path", "polygon_area", "path_area", "path_extents",
]

import math
from typing import Optional, TypeAlias, Union

import numpy as np
from numpy.typing import NDArray
from matplotlib.path import Path as mplPath
from matplotlib.transforms import Affine2D
from svgpathtools import Arc

from .geometry import Rect
from .path_builder import (
    MoveTo, LineTo, CubicTo, ArcTo, ClosePath, SquirclePath,
)

numeric: TypeAlias = Union[int, float]

MAX_SEGMENT_DEG = 90.0


# ---------------------------------------------------------------------------
# Arc conversion
# ---------------------------------------------------------------------------
def endpoint_arc(
        x0           : numeric,
        y0           : numeric,
        rx           : numeric,
        ry           : numeric,
        rotation_deg : numeric,
        large_arc    : bool,
        sweep        : bool,
        x1           : numeric,
        y1           : numeric,
    ) -> Optional[Arc]:
    """Build the svgpathtools arc for SVG endpoint parameters.

    Radii too small to span the chord are scaled up by svgpathtools. With
    `sweep` set the arc runs in the direction of increasing angle, which is
    clockwise on a y-down screen. The resulting `center`, `theta` (start
    angle, degrees) and `delta` (signed sweep, degrees) drive the Bezier
    approximation.

    Returns:
        Arc, or None when the arc degenerates to a straight line.
    """
    rx, ry = abs(float(rx)), abs(float(ry))
    start, end = complex(x0, y0), complex(x1, y1)
    if rx == 0 or ry == 0 or start == end:
        return None
    return Arc(start, complex(rx, ry), float(rotation_deg), bool(large_arc), bool(sweep), end)


def unit_arc_segment(start_deg: float, end_deg: float) -> NDArray[np.float64]:
    """Cubic Bezier approximating a unit-circle arc of at most 90deg.

    The handle length `t = 4/3 * tan(theta / 4)` keeps tangent continuity;
    the radial error stays below 0.00027 for a full 90deg span. Negative spans
    produce a clockwise (decreasing angle) segment.

    Returns:
        (4, 2) array: start point, two handles, end point.
    """
    span = abs(end_deg - start_deg)
    if span > MAX_SEGMENT_DEG + 1e-9:
        raise ValueError(
            f"Span too large ({span:.2f}deg) for single cubic Bezier; "
            "split into <= 90deg segments."
        )

    start = np.radians(start_deg)
    end = np.radians(end_deg)
    t = 4.0 / 3.0 * np.tan((end - start) / 4.0)

    cos_s, sin_s = np.cos(start), np.sin(start)
    cos_e, sin_e = np.cos(end), np.sin(end)

    return np.array([
        (cos_s, sin_s),
        (cos_s - t * sin_s, sin_s + t * cos_s),
        (cos_e + t * sin_e, sin_e - t * cos_e),
        (cos_e, sin_e),
    ], dtype=float)


def arc_to_cubics(
        x0           : numeric,
        y0           : numeric,
        rx           : numeric,
        ry           : numeric,
        rotation_deg : numeric,
        large_arc    : bool,
        sweep        : bool,
        x1           : numeric,
        y1           : numeric,
    ) -> NDArray[np.float64]:
    """Approximate an SVG endpoint arc with a chain of cubic Beziers.

    Returns:
        Array of shape (3n, 2) holding (handle1, handle2, end) for each of the
        n segments. Degenerate arcs give a single straight "cubic" whose
        handles sit on the chord.
    """
    arc = endpoint_arc(x0, y0, rx, ry, rotation_deg, large_arc, sweep, x1, y1)
    if arc is None:
        p0, p1 = np.array([x0, y0], dtype=float), np.array([x1, y1], dtype=float)
        return np.array([p0 + (p1 - p0) / 3.0, p0 + 2.0 * (p1 - p0) / 3.0, p1])

    n_segments = max(1, math.ceil(abs(arc.delta) / MAX_SEGMENT_DEG - 1e-9))
    step = arc.delta / n_segments

    unit_points = []
    for k in range(n_segments):
        a0 = arc.theta + k * step
        unit_points.append(unit_arc_segment(a0, a0 + step)[1:])
    unit_points = np.concatenate(unit_points)

    trans: Affine2D = (
        Affine2D()
        .scale(arc.radius.real, arc.radius.imag)
        .rotate_deg(arc.rotation)
        .translate(arc.center.real, arc.center.imag)
    )
    points = trans.transform(unit_points)
    points[-1] = (x1, y1)  # pin the exact endpoint
    return points


# ---------------------------------------------------------------------------
# SquirclePath -> Matplotlib Path
# ---------------------------------------------------------------------------
def to_mpl_path(path: SquirclePath) -> mplPath:
    """Convert a SquirclePath to a Matplotlib Path (arcs become cubics)."""
    if not isinstance(path, SquirclePath):
        raise TypeError(f"Expected a SquirclePath, got {type(path).__name__}.")
    if path.is_empty:
        return mplPath(np.empty((0, 2), dtype=float))

    verts: list[tuple[float, float]] = []
    codes: list[int] = []
    cx = cy = 0.0
    sx = sy = 0.0

    for cmd in path:
        if isinstance(cmd, MoveTo):
            verts.append((cmd.x, cmd.y))
            codes.append(mplPath.MOVETO)
            sx, sy = cmd.x, cmd.y
        elif isinstance(cmd, LineTo):
            verts.append((cmd.x, cmd.y))
            codes.append(mplPath.LINETO)
        elif isinstance(cmd, CubicTo):
            verts.extend([(cmd.x1, cmd.y1), (cmd.x2, cmd.y2), (cmd.x, cmd.y)])
            codes.extend([mplPath.CURVE4] * 3)
        elif isinstance(cmd, ArcTo):
            pts = arc_to_cubics(cx, cy, cmd.rx, cmd.ry, cmd.rotation,
                                cmd.large_arc, cmd.sweep, cmd.x, cmd.y)
            verts.extend(map(tuple, pts))
            codes.extend([mplPath.CURVE4] * len(pts))
        elif isinstance(cmd, ClosePath):
            verts.append((sx, sy))
            codes.append(mplPath.CLOSEPOLY)
            cx, cy = sx, sy
            continue
        else:
            raise TypeError(f"Unsupported path command: {type(cmd).__name__}")
        cx, cy = verts[-1]

    return mplPath(np.asarray(verts, dtype=float), np.asarray(codes, dtype=np.uint8))


# ---------------------------------------------------------------------------
# Measurements
# ---------------------------------------------------------------------------
def _cubic_points(p0, p1, p2, p3, samples: int) -> NDArray[np.float64]:
    t = np.linspace(0.0, 1.0, samples + 1)[1:, None]
    mt = 1.0 - t
    return (mt ** 3) * p0 + 3 * (mt ** 2) * t * p1 + 3 * mt * (t ** 2) * p2 + (t ** 3) * p3


def _quad_points(p0, p1, p2, samples: int) -> NDArray[np.float64]:
    t = np.linspace(0.0, 1.0, samples + 1)[1:, None]
    mt = 1.0 - t
    return (mt ** 2) * p0 + 2 * mt * t * p1 + (t ** 2) * p2


def flatten_path(path: mplPath, samples_per_curve: int = 16) -> list[NDArray[np.float64]]:
    """Polyline approximation of a Matplotlib path, one array per subpath."""
    if not isinstance(path, mplPath):
        raise TypeError(f"Expected a Matplotlib Path, got {type(path).__name__}.")
    if samples_per_curve < 1:
        raise ValueError(f"samples_per_curve must be >= 1, got {samples_per_curve}.")

    polygons: list[NDArray[np.float64]] = []
    current: list[NDArray[np.float64]] = []
    last = None

    for verts, code in path.iter_segments(curves=True, simplify=False):
        verts = np.asarray(verts, dtype=float).reshape(-1, 2)
        if code == mplPath.MOVETO:
            if current:
                polygons.append(np.vstack(current))
            current = [verts[-1:]]
        elif code == mplPath.LINETO:
            current.append(verts)
        elif code == mplPath.CURVE3:
            current.append(_quad_points(last, verts[0], verts[1], samples_per_curve))
        elif code == mplPath.CURVE4:
            current.append(_cubic_points(last, verts[0], verts[1], verts[2], samples_per_curve))
        elif code == mplPath.CLOSEPOLY:
            if current:
                polygons.append(np.vstack(current))
            current = []
            continue
        last = verts[-1]

    if current:
        polygons.append(np.vstack(current))
    return polygons


def polygon_area(vertices: NDArray[np.float64]) -> float:
    """Absolute area of a simple polygon (shoelace formula)."""
    v = np.asarray(vertices, dtype=float)
    if len(v) < 3:
        return 0.0
    x, y = v[:, 0], v[:, 1]
    return float(abs(np.dot(x, np.roll(y, -1)) - np.dot(y, np.roll(x, -1))) / 2.0)


def path_area(path: Union[SquirclePath, mplPath], samples_per_curve: int = 32) -> float:
    """Enclosed area of a single-outline path (0 for an empty path)."""
    if isinstance(path, SquirclePath):
        path = to_mpl_path(path)
    return sum(polygon_area(p) for p in flatten_path(path, samples_per_curve))


def path_extents(path: Union[SquirclePath, mplPath], samples_per_curve: int = 32) -> Optional[Rect]:
    """Tight bounds of the outline, or None for an empty path."""
    if isinstance(path, SquirclePath):
        path = to_mpl_path(path)
    polygons = flatten_path(path, samples_per_curve)
    if not polygons:
        return None
    pts = np.vstack(polygons)
    return Rect.from_ltrb(pts[:, 0].min(), pts[:, 1].min(), pts[:, 0].max(), pts[:, 1].max())
