"""
geometry.py
-----------

Value types describing the target rectangle and its per-corner radii.

Coordinates follow the screen convention used by UI toolkits: x grows to the
right, y grows downward, so `top` is the smaller y and `bottom` the larger one.
"""

from __future__ import annotations

__all__ = ["Rect", "CornerRadii", "Corner", "CORNER_ORDER"]

import re
from dataclasses import dataclass, replace
from enum import Enum
from typing import TypeAlias, Union, Sequence

numeric: TypeAlias = Union[int, float]

_RADII_SPLIT = re.compile(r"[\s,]+")


class Corner(str, Enum):
    TOP_LEFT = "top_left"
    TOP_RIGHT = "top_right"
    BOTTOM_RIGHT = "bottom_right"
    BOTTOM_LEFT = "bottom_left"


# Clockwise walk used by the path builder, starting from the top edge.
CORNER_ORDER: tuple[Corner, ...] = (
    Corner.TOP_RIGHT, Corner.BOTTOM_RIGHT, Corner.BOTTOM_LEFT, Corner.TOP_LEFT,
)


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle given by its top-left corner and extent."""
    left: float
    top: float
    width: float
    height: float

    @classmethod
    def from_ltrb(cls, left: numeric, top: numeric, right: numeric, bottom: numeric) -> Rect:
        return cls(float(left), float(top), float(right - left), float(bottom - top))

    @classmethod
    def from_size(cls, width: numeric, height: numeric) -> Rect:
        return cls(0.0, 0.0, float(width), float(height))

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height

    @property
    def center(self) -> tuple[float, float]:
        return (self.left + self.width / 2, self.top + self.height / 2)

    @property
    def shorter_side(self) -> float:
        return min(self.width, self.height)

    @property
    def is_empty(self) -> bool:
        """True when the rectangle has no positive area and yields no shape."""
        return not (self.width > 0 and self.height > 0)

    def contains(self, x: numeric, y: numeric) -> bool:
        """Basic containment test, edges inclusive on the top/left side."""
        return self.left <= x < self.right and self.top <= y < self.bottom


@dataclass(frozen=True)
class CornerRadii:
    """Four independent corner radii.

    Radii are expected to be non-negative but are not validated; the path
    generator follows the numbers it is given.
    """
    top_left: float = 0.0
    top_right: float = 0.0
    bottom_right: float = 0.0
    bottom_left: float = 0.0

    @classmethod
    def uniform(cls, radius: numeric) -> CornerRadii:
        r = float(radius)
        return cls(r, r, r, r)

    @classmethod
    def coerce(cls, value: Union[CornerRadii, numeric, str, Sequence[numeric]]) -> CornerRadii:
        """Build radii from a number, a string, a 4-sequence, or return as is."""
        if isinstance(value, CornerRadii):
            return value
        if isinstance(value, bool):
            raise TypeError(f"Unsupported corner radius type: {type(value).__name__}")
        if isinstance(value, (int, float)):
            return cls.uniform(value)
        if isinstance(value, str):
            return cls.parse(value)
        if isinstance(value, (tuple, list)):
            if len(value) != 4:
                raise ValueError(f"Expected 4 corner radii, got {len(value)}.")
            return cls(*(float(v) for v in value))
        raise TypeError(f"Unsupported corner radius type: {type(value).__name__}")

    @classmethod
    def parse(cls, text: str) -> CornerRadii:
        """Parse a radius string.

        Accepted forms (comma and/or whitespace separated):
            "r"                 - all four corners
            "top, bottom"       - top pair (TL, TR) and bottom pair (BR, BL)
            "tl, tr, br, bl"    - each corner individually

        Raises:
            ValueError: On an empty string, a non-numeric token, or any other
                number of values.
        """
        if not isinstance(text, str):
            raise TypeError(f"Expected str, got {type(text).__name__}.")
        tokens = [t for t in _RADII_SPLIT.split(text.strip()) if t]
        try:
            values = [float(t) for t in tokens]
        except ValueError:
            raise ValueError(f"Invalid corner radius string: {text!r}") from None

        if len(values) == 1:
            return cls.uniform(values[0])
        if len(values) == 2:
            top, bottom = values
            return cls(top, top, bottom, bottom)
        if len(values) == 4:
            return cls(*values)
        raise ValueError(
            f"Invalid corner radius string: {text!r}; expected 1, 2 or 4 values."
        )

    def __getitem__(self, corner: Union[Corner, str]) -> float:
        return getattr(self, Corner(corner).value)

    def as_tuple(self) -> tuple[float, float, float, float]:
        return (self.top_left, self.top_right, self.bottom_right, self.bottom_left)

    def clamped(self, limit: numeric) -> CornerRadii:
        """Return a copy with every radius capped at `limit`."""
        return replace(
            self,
            top_left=min(limit, self.top_left),
            top_right=min(limit, self.top_right),
            bottom_right=min(limit, self.bottom_right),
            bottom_left=min(limit, self.bottom_left),
        )
