"""
test_path_builder.py
--------------------
Unit tests for path_builder.py
"""

import math
import numpy as np
import pytest
from dataclasses import astuple

from squircle.corner_solver import solve_corner
from squircle.geometry import Corner, CORNER_ORDER, CornerRadii, Rect
from squircle.mpl_path_utils import flatten_path, path_area, to_mpl_path
from squircle.path_builder import (
    MoveTo, LineTo, CubicTo, ArcTo, ClosePath, SquirclePath,
    build_path, solve_corners, squircle_path,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _rotate_cw(cmd, cx, cy):
    """Rotate a command 90deg clockwise (y-down screen) about (cx, cy)."""
    rot = lambda x, y: (cx - (y - cy), cy + (x - cx))
    if isinstance(cmd, (MoveTo, LineTo)):
        return type(cmd)(*rot(cmd.x, cmd.y))
    if isinstance(cmd, CubicTo):
        return CubicTo(*rot(cmd.x1, cmd.y1), *rot(cmd.x2, cmd.y2), *rot(cmd.x, cmd.y))
    if isinstance(cmd, ArcTo):
        return ArcTo(cmd.rx, cmd.ry, cmd.rotation, cmd.large_arc, cmd.sweep, *rot(cmd.x, cmd.y))
    return cmd


def _translate(cmd, dx, dy):
    if isinstance(cmd, (MoveTo, LineTo)):
        return type(cmd)(cmd.x + dx, cmd.y + dy)
    if isinstance(cmd, CubicTo):
        return CubicTo(cmd.x1 + dx, cmd.y1 + dy, cmd.x2 + dx, cmd.y2 + dy, cmd.x + dx, cmd.y + dy)
    if isinstance(cmd, ArcTo):
        return ArcTo(cmd.rx, cmd.ry, cmd.rotation, cmd.large_arc, cmd.sweep, cmd.x + dx, cmd.y + dy)
    return cmd


def _assert_commands_close(actual, expected, tol=1e-9):
    assert type(actual) is type(expected)
    assert np.allclose(
        np.array(astuple(actual), dtype=float),
        np.array(astuple(expected), dtype=float),
        atol=tol,
    )


def _end_point(cmd):
    return (cmd.x, cmd.y)


def _segments_cross(p1, p2, p3, p4) -> bool:
    """Proper intersection of segments p1p2 and p3p4 (touching excluded)."""
    def orient(a, b, c):
        return (b[0] - a[0]) * (c[1] - a[1]) - (b[1] - a[1]) * (c[0] - a[0])
    d1, d2 = orient(p3, p4, p1), orient(p3, p4, p2)
    d3, d4 = orient(p1, p2, p3), orient(p1, p2, p4)
    return d1 * d2 < 0 and d3 * d4 < 0


def _is_simple(poly: np.ndarray) -> bool:
    pts = [tuple(p) for p in poly]
    if pts[0] != pts[-1]:
        pts.append(pts[0])
    segs = list(zip(pts[:-1], pts[1:]))
    n = len(segs)
    for i in range(n):
        for j in range(i + 2, n):
            if i == 0 and j == n - 1:
                continue
            if _segments_cross(*segs[i], *segs[j]):
                return False
    return True


# ---------------------------------------------------------------------------
# End-to-end reference example
# ---------------------------------------------------------------------------

def test_reference_structure(reference_path):
    cmds = reference_path.commands
    assert len(cmds) == 18
    assert isinstance(cmds[0], MoveTo)
    assert isinstance(cmds[-1], ClosePath)
    for k in range(4):
        block = cmds[1 + 4 * k: 5 + 4 * k]
        assert [type(c) for c in block] == [LineTo, CubicTo, ArcTo, CubicTo]
        arc = block[2]
        assert arc.rx == arc.ry == 20.0
        assert arc.large_arc is False
        assert arc.sweep is True
    assert reference_path.is_closed
    assert reference_path.is_finite()


def test_reference_start_and_close(reference_path):
    assert reference_path.start_point == pytest.approx((32.0, 0.0))
    last_cubic = reference_path.commands[-2]
    assert _end_point(last_cubic) == pytest.approx((32.0, 0.0))


def test_reference_top_right_corner(reference_path):
    tr = solve_corner(20.0, 0.6, False, 50.0)
    line, cubic1, arc, cubic2 = reference_path.commands[1:5]
    assert _end_point(line) == pytest.approx((168.0, 0.0))
    assert (cubic1.x1, cubic1.y1) == pytest.approx((168.0 + tr.a, 0.0))
    assert (cubic1.x2, cubic1.y2) == pytest.approx((168.0 + tr.ab, 0.0))
    assert _end_point(cubic1) == pytest.approx((168.0 + tr.abc, tr.d))
    assert _end_point(arc) == pytest.approx((200.0 - tr.d, tr.p_minus_abc))
    assert _end_point(cubic2) == pytest.approx((200.0, 32.0))


def test_arc_endpoints_lie_on_corner_circle(reference_path):
    """The circular section of each corner is centered r inside the corner."""
    r = 20.0
    centers = {
        Corner.TOP_RIGHT: (180.0, 20.0),
        Corner.BOTTOM_RIGHT: (180.0, 80.0),
        Corner.BOTTOM_LEFT: (20.0, 80.0),
        Corner.TOP_LEFT: (20.0, 20.0),
    }
    cmds = reference_path.commands
    for k, corner in enumerate(CORNER_ORDER):
        cubic1, arc = cmds[2 + 4 * k], cmds[3 + 4 * k]
        cx, cy = centers[corner]
        assert math.dist(_end_point(cubic1), (cx, cy)) == pytest.approx(r)
        assert math.dist(_end_point(arc), (cx, cy)) == pytest.approx(r)


def test_reference_area_bounds(reference_path):
    area = path_area(reference_path)
    assert area < 200.0 * 100.0
    # Each corner only cuts into its own p x p box.
    assert area > 200.0 * 100.0 - 4 * 32.0 ** 2
    assert area > 180.0 * 60.0


def test_reference_is_simple_closed_curve(reference_path):
    polygons = flatten_path(to_mpl_path(reference_path), samples_per_curve=12)
    assert len(polygons) == 1
    assert _is_simple(polygons[0])


def test_reference_containment(reference_path):
    mpath = to_mpl_path(reference_path)
    assert mpath.contains_point((100.0, 50.0))
    assert mpath.contains_point((100.0, 1.0))
    assert not mpath.contains_point((1.0, 1.0))
    assert not mpath.contains_point((199.0, 99.0))


def test_no_smoothing_matches_rounded_rectangle_area(wide_rect):
    path = squircle_path(wide_rect, 20, corner_smoothing=0.0)
    expected = 200.0 * 100.0 - (4 - math.pi) * 20.0 ** 2
    assert path_area(path) == pytest.approx(expected, rel=1e-4)


def test_smoothing_removes_more_area_than_plain_rounding(wide_rect):
    plain = path_area(squircle_path(wide_rect, 20, corner_smoothing=0.0))
    smooth = path_area(squircle_path(wide_rect, 20, corner_smoothing=0.6))
    assert smooth < plain


# ---------------------------------------------------------------------------
# Symmetry
# ---------------------------------------------------------------------------

def test_square_corners_identical():
    rect = Rect(0, 0, 120, 120)
    _, params = solve_corners(rect, CornerRadii.uniform(25), 0.6, False)
    values = list(params.values())
    assert all(v == values[0] for v in values)


@pytest.mark.parametrize("smoothing", [0.0, 0.3, 0.6, 1.0])
def test_square_path_invariant_under_quarter_turn(smoothing):
    rect = Rect(10, 20, 120, 120)
    path = squircle_path(rect, 25, smoothing)
    cx, cy = rect.center
    cmds = path.commands
    for k in range(3):
        block = cmds[1 + 4 * k: 5 + 4 * k]
        next_block = cmds[5 + 4 * k: 9 + 4 * k]
        for cmd, expected in zip(block, next_block):
            _assert_commands_close(_rotate_cw(cmd, cx, cy), expected)


def test_translation_shifts_every_point():
    base = squircle_path(Rect(0, 0, 150, 90), 18, 0.6)
    moved = squircle_path(Rect(30, -12, 150, 90), 18, 0.6)
    assert len(base) == len(moved)
    for a, b in zip(base, moved):
        _assert_commands_close(_translate(a, 30, -12), b)


# ---------------------------------------------------------------------------
# Radii handling
# ---------------------------------------------------------------------------

def test_per_corner_radii_reach_their_arcs(wide_rect):
    radii = CornerRadii(top_left=5, top_right=10, bottom_right=15, bottom_left=30)
    path = squircle_path(wide_rect, radii, 0.6)
    arcs = [c for c in path if isinstance(c, ArcTo)]
    assert [a.rx for a in arcs] == [10, 15, 30, 5]
    assert path.start_point[0] == pytest.approx(5 * 1.6)


@pytest.mark.parametrize("radius", [0, 10, 49.9, 50, 80, 1e6])
def test_working_radius_never_exceeds_half_shorter_side(wide_rect, radius):
    clamped, _ = solve_corners(wide_rect, CornerRadii.uniform(radius), 0.6, False)
    assert max(clamped.as_tuple()) <= wide_rect.shorter_side / 2
    path = squircle_path(wide_rect, radius, 0.6)
    assert all(a.rx <= 50.0 for a in path if isinstance(a, ArcTo))


def test_caller_radii_not_mutated(wide_rect):
    radii = CornerRadii.uniform(500)
    squircle_path(wide_rect, radii, 0.6)
    assert radii.as_tuple() == (500, 500, 500, 500)


def test_zero_radius_gives_sharp_rectangle(wide_rect):
    path = squircle_path(wide_rect, 0, 0.6)
    assert path.start_point == (0.0, 0.0)
    assert path.is_finite()
    assert path_area(path) == pytest.approx(200.0 * 100.0)


@pytest.mark.parametrize("preserve", [False, True])
def test_maximum_radius_is_finite(preserve):
    path = squircle_path(Rect(0, 0, 100, 100), 50, 1.0, preserve)
    assert path.is_finite()
    assert len(path) == 18


# ---------------------------------------------------------------------------
# Degenerate rectangles
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("width,height", [(0, 100), (100, 0), (-10, 50), (50, -10), (0, 0)])
def test_degenerate_rect_gives_empty_path(width, height):
    path = squircle_path(Rect(0, 0, width, height), 20, 0.6)
    assert path.is_empty
    assert len(path) == 0
    assert path.start_point is None
    assert path.to_svg() == ""
    assert path.is_finite()


def test_build_path_short_circuits_on_empty_rect():
    params = {c: solve_corner(10, 0.6, False, 10) for c in CORNER_ORDER}
    assert build_path(Rect(0, 0, 0, 20), CornerRadii.uniform(10), params).is_empty


# ---------------------------------------------------------------------------
# Purity and argument checks
# ---------------------------------------------------------------------------

def test_repeated_calls_equal(wide_rect):
    assert squircle_path(wide_rect, "10 20", 0.6) == squircle_path(wide_rect, "10 20", 0.6)


def test_path_is_immutable(reference_path):
    with pytest.raises(AttributeError):
        reference_path.commands = ()
    assert isinstance(reference_path.commands, tuple)


def test_rejects_non_rect():
    with pytest.raises(TypeError):
        squircle_path((0, 0, 10, 10), 5)


def test_path_equality_is_by_value():
    assert SquirclePath((MoveTo(0, 0), ClosePath())) == SquirclePath((MoveTo(0, 0), ClosePath()))


@pytest.mark.parametrize("commands", [
    (ClosePath(),),
    (LineTo(1, 2), ClosePath()),
])
def test_start_point_requires_leading_move(commands):
    assert SquirclePath(commands).start_point is None
