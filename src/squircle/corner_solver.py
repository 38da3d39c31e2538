"""
corner_solver.py
----------------

Solves the control distances of a single smoothed corner.

A smoothed corner replaces part of the 90deg circular arc of a plain rounded
corner with two cubic Bezier transitions. Along each of the two edges meeting
at the corner the shape deviates from the straight edge over a distance `p`:

    edge ... |<------------------- p ------------------->| corner
             |<--- a --->|<- b ->|<- c ->|
             P1          P2      P3      P4 (arc start, offset d from the edge)

    - P1..P4 are the first Bezier's start, two handles and end point,
    - the circular arc of radius r then sweeps `arc_sweep` degrees,
    - a mirrored Bezier returns to the other edge.

With no smoothing `p == r`, the Bezier legs vanish (c == d == 0) and the corner
is an ordinary quarter circle. The construction follows Figma's published
corner-smoothing derivation ("Desperately seeking squircles").
"""

from __future__ import annotations

__all__ = ["CornerParams", "ZERO_CORNER", "arc_sweep", "solve_corner"]

import math
import logging
from dataclasses import dataclass

from .logging_utils import LOGGER_NAME


@dataclass(frozen=True)
class CornerParams:
    """Immutable control distances of one corner (see module docstring)."""
    a: float
    b: float
    c: float
    d: float
    p: float

    @property
    def ab(self) -> float:
        return self.a + self.b

    @property
    def bc(self) -> float:
        return self.b + self.c

    @property
    def abc(self) -> float:
        return self.a + self.b + self.c

    @property
    def p_minus_abc(self) -> float:
        return self.p - self.a - self.b - self.c

    def is_finite(self) -> bool:
        return all(math.isfinite(v) for v in (self.a, self.b, self.c, self.d, self.p))


ZERO_CORNER = CornerParams(0.0, 0.0, 0.0, 0.0, 0.0)


def arc_sweep(smoothing: float) -> float:
    """Angular extent (degrees) of the circular part of a corner."""
    return 90.0 * (1.0 - smoothing)


def solve_corner(
        radius                     : float,
        smoothing                  : float,
        preserve_smoothing         : bool,
        max_rounding_and_smoothing : float,
    ) -> CornerParams:
    """Compute the control distances of a single corner.

    Args:
        radius: Corner radius, already clamped to the shape's budget.
        smoothing: Requested corner smoothing, nominally in [0, 1].
        preserve_smoothing: When False, smoothing and `p` are reduced so that
            the corner never consumes more than `max_rounding_and_smoothing`
            along an edge. When True the requested smoothing is kept and
            neighbouring corners may overlap.
        max_rounding_and_smoothing: Half of the shorter side of the shape.

    Returns:
        CornerParams. A zero radius yields an all-zero (sharp) corner.

    Out-of-range inputs are not rejected; they produce finite but visually odd
    geometry.
    """
    if radius == 0:
        return ZERO_CORNER

    p = (1 + smoothing) * radius

    if not preserve_smoothing:
        max_smoothing = max_rounding_and_smoothing / radius - 1
        smoothing = min(smoothing, max_smoothing)
        p = min(p, max_rounding_and_smoothing)

    sweep = arc_sweep(smoothing)
    arc_section_length = math.sin(math.radians(sweep / 2)) * radius * math.sqrt(2)

    # Distance between P3 and P4
    angle_alpha = (90 - sweep) / 2
    p3_to_p4_distance = radius * math.tan(math.radians(angle_alpha / 2))

    angle_beta = math.radians(45 * smoothing)
    c = p3_to_p4_distance * math.cos(angle_beta)
    d = c * math.tan(angle_beta)

    b = (p - arc_section_length - c - d) / 3
    a = 2 * b

    params = CornerParams(a, b, c, d, p)
    logging.getLogger(LOGGER_NAME).debug(
        f"solve_corner(r={radius}, s={smoothing}, preserve={preserve_smoothing}, "
        f"max={max_rounding_and_smoothing}) -> {params}"
    )
    return params
