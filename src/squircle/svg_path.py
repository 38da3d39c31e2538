"""
svg_path.py
-----------

Serialization of SquirclePath to and from the SVG path mini-language.

Output uses absolute commands only:

    M x y | L x y | C x1 y1 x2 y2 x y | A rx ry rotation large-arc sweep x y | Z

Numbers are rendered with Python format specs, which always use "." as the
decimal separator whatever the process locale is. A fixed `precision` rounds
coordinates, so reading such a string back gives only an approximately equal
path; `precision=None` writes the shortest round-trip representation instead.

Parsing is delegated to `svgpathtools.parse_path`, so any path data it reads
is accepted (absolute and relative M/L/H/V/C/S/Q/T/A/Z, implicit command
repetition). Its segments are mapped back onto SquirclePath commands:

    Line -> LineTo, CubicBezier -> CubicTo, QuadraticBezier -> CubicTo
    (degree-elevated), Arc -> ArcTo

A subpath that returns to its start gets a ClosePath; a final straight
segment back to the start is folded into it.
"""

from __future__ import annotations

__all__ = ["format_number", "to_svg_path", "parse_svg_path"]

import re
from typing import Optional

from svgpathtools import Arc, CubicBezier, Line, QuadraticBezier, parse_path

from .config import DEFAULTS
from .path_builder import (
    MoveTo, LineTo, CubicTo, ArcTo, ClosePath, PathCommand, SquirclePath,
)

_ALLOWED = re.compile(r"[\sMmZzLlHhVvCcSsQqTtAa0-9eE.,+\-]*")

# One elliptical-arc argument group. Flags are single characters and may be
# written without separators ("A 20 20 0 0110 10").
_NUMBER = r"[\s,]*([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)"
_FLAG = r"[\s,]*([01])"
_ARC_GROUP = re.compile(_NUMBER * 3 + _FLAG * 2 + _NUMBER * 2)
_ARC_RUN = re.compile(r"([Aa])([^MmZzLlHhVvCcSsQqTtAa]*)")


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------
def format_number(value: float, precision: Optional[int] = DEFAULTS.precision) -> str:
    """Format a coordinate with at most `precision` decimals.

    Trailing zeros and a dangling decimal point are stripped; negative zero is
    written as "0". With `precision=None` the shortest string that parses back
    to the same float is used.
    """
    if precision is None:
        text = repr(float(value))
        if text.endswith(".0"):
            text = text[:-2]
    else:
        text = f"{float(value):.{precision}f}"
        if "." in text:
            text = text.rstrip("0").rstrip(".")
    if text in ("-0", ""):
        text = "0"
    return text


def _format_command(cmd: PathCommand, precision: Optional[int]) -> str:
    f = lambda v: format_number(v, precision)
    if isinstance(cmd, MoveTo):
        return f"M {f(cmd.x)} {f(cmd.y)}"
    if isinstance(cmd, LineTo):
        return f"L {f(cmd.x)} {f(cmd.y)}"
    if isinstance(cmd, CubicTo):
        return (
            f"C {f(cmd.x1)} {f(cmd.y1)} {f(cmd.x2)} {f(cmd.y2)} "
            f"{f(cmd.x)} {f(cmd.y)}"
        )
    if isinstance(cmd, ArcTo):
        return (
            f"A {f(cmd.rx)} {f(cmd.ry)} {f(cmd.rotation)} "
            f"{int(cmd.large_arc)} {int(cmd.sweep)} {f(cmd.x)} {f(cmd.y)}"
        )
    if isinstance(cmd, ClosePath):
        return "Z"
    raise TypeError(f"Unsupported path command: {type(cmd).__name__}")


def to_svg_path(path: SquirclePath, precision: Optional[int] = DEFAULTS.precision) -> str:
    """Serialize a path; an empty path gives an empty string.

    `precision=None` makes `parse_svg_path(to_svg_path(p, None)) == p` hold
    for paths whose arcs have non-zero radii.
    """
    if not isinstance(path, SquirclePath):
        raise TypeError(f"Expected a SquirclePath, got {type(path).__name__}.")
    return " ".join(_format_command(cmd, precision) for cmd in path)


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------
def _rewrite_arc_run(m: re.Match) -> str:
    """Separate compact arc flags and turn zero-radius arcs into line-tos."""
    letter, args = m.group(1), m.group(2)
    parts, pos = [], 0
    while True:
        g = _ARC_GROUP.match(args, pos)
        if g is None:
            break
        rx, ry, rotation, large_arc, sweep, x, y = g.groups()
        if float(rx) == 0 or float(ry) == 0:
            parts.append(f"{'L' if letter == 'A' else 'l'} {x} {y}")
        else:
            parts.append(f"{letter} {rx} {ry} {rotation} {large_arc} {sweep} {x} {y}")
        pos = g.end()

    rest = args[pos:]
    if not parts or rest.strip(" \t\r\n,"):
        return m.group(0)  # malformed, left for parse_path to reject
    return " ".join(parts) + rest


def _point(z: complex) -> tuple[float, float]:
    return (float(z.real), float(z.imag))


def _segment_command(seg) -> PathCommand:
    if isinstance(seg, Line):
        return LineTo(*_point(seg.end))
    if isinstance(seg, CubicBezier):
        return CubicTo(*_point(seg.control1), *_point(seg.control2), *_point(seg.end))
    if isinstance(seg, QuadraticBezier):
        c1 = seg.start + 2.0 / 3.0 * (seg.control - seg.start)
        c2 = seg.end + 2.0 / 3.0 * (seg.control - seg.end)
        return CubicTo(*_point(c1), *_point(c2), *_point(seg.end))
    if isinstance(seg, Arc):
        return ArcTo(
            float(seg.radius.real), float(seg.radius.imag), float(seg.rotation),
            bool(seg.large_arc), bool(seg.sweep), *_point(seg.end),
        )
    raise TypeError(f"Unsupported segment type: {type(seg).__name__}")


def parse_svg_path(d: str) -> SquirclePath:
    """Parse path data into a SquirclePath of absolute commands.

    Raises:
        TypeError: If `d` is not a string.
        ValueError: On unknown characters, numbers before the first command,
            a command with missing arguments, or a degenerate arc.
    """
    if not isinstance(d, str):
        raise TypeError(f"Expected str path data, got {type(d).__name__}.")
    if _ALLOWED.fullmatch(d) is None:
        raise ValueError(f"Unexpected characters in path data: {d!r}")

    try:
        segments = parse_path(_ARC_RUN.sub(_rewrite_arc_run, d))
    except (IndexError, ValueError, AssertionError) as e:
        # svgpathtools runs out of tokens (IndexError) or asserts on
        # arcs with coincident endpoints.
        raise ValueError(f"Malformed path data {d!r}: {e}") from e

    if len(segments) == 0:
        return SquirclePath()

    cmds: list[PathCommand] = []
    for sub in segments.continuous_subpaths():
        cmds.append(MoveTo(*_point(sub.start)))
        body = [_segment_command(seg) for seg in sub]
        if sub.isclosed():
            if isinstance(sub[-1], Line) and len(body) > 1:
                body.pop()
            body.append(ClosePath())
        cmds.extend(body)

    return SquirclePath(tuple(cmds))
