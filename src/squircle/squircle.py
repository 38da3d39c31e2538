"""
squircle.py
-----------

Implements the Squircle class - a smoothed rounded rectangle shape.

Responsibilities:
  - Hold the shape inputs (bounds, radii, smoothing, border and fill style)
  - Recompute the outline on demand: every geometry setter marks the cached
    path dirty, the next read rebuilds it
  - Draw the shape onto Matplotlib axes (fill, inner border) and clip other
    artists to it
"""

from __future__ import annotations

import logging
import weakref
from typing import Any, Optional, Sequence, Union

from matplotlib.colors import is_color_like
from matplotlib.artist import Artist
from matplotlib.axes import Axes
from matplotlib.patches import PathPatch
from matplotlib.path import Path as mplPath

from .base import Shape
from .config import DEFAULTS
from .geometry import CornerRadii, Rect
from .logging_utils import LOGGER_NAME
from .mpl_path_utils import to_mpl_path
from .path_builder import SquirclePath, squircle_path

ColorSpec = Any  # anything accepted by matplotlib.colors.to_rgba


class Squircle(Shape):
    """
    Smoothed rounded rectangle.

    Extends:
        Shape

    Geometry inputs (`bounds`, `corner_radius`, `corner_smoothing`,
    `preserve_smoothing`) invalidate the memoized outline when assigned; the
    style inputs (`border_thickness`, `border_color`, `background`) only affect
    drawing.
    """

    def __init__(
        self,
        bounds: Union[Rect, Sequence[float], None] = None,
        corner_radius: Union[CornerRadii, float, str, Sequence[float]] = DEFAULTS.corner_radius,
        corner_smoothing: float = DEFAULTS.corner_smoothing,
        preserve_smoothing: bool = DEFAULTS.preserve_smoothing,
        border_thickness: float = DEFAULTS.border_thickness,
        border_color: Optional[ColorSpec] = None,
        background: Optional[ColorSpec] = None,
        ax: Optional[Axes] = None,
    ) -> None:
        super().__init__(ax)
        self._path: Optional[SquirclePath] = None
        self._mpl_path: Optional[mplPath] = None
        self._dirty = True
        self._hidden_artists: weakref.WeakSet[Artist] = weakref.WeakSet()

        self.bounds = bounds if bounds is not None else Rect(0.0, 0.0, 0.0, 0.0)
        self.corner_radius = corner_radius
        self.corner_smoothing = corner_smoothing
        self.preserve_smoothing = preserve_smoothing
        self.border_thickness = border_thickness
        self.border_color = border_color
        self.background = background

    # -------------------------------------------------------------------------
    # Geometry inputs
    # -------------------------------------------------------------------------
    @property
    def bounds(self) -> Rect:
        return self._bounds

    @bounds.setter
    def bounds(self, value: Union[Rect, Sequence[float]]) -> None:
        if isinstance(value, Rect):
            rect = value
        elif isinstance(value, (tuple, list)) and len(value) == 4:
            rect = Rect(*(float(v) for v in value))
        else:
            raise TypeError(f"Unsupported bounds type: {type(value).__name__}")
        self._bounds = rect
        self.invalidate()

    @property
    def corner_radius(self) -> CornerRadii:
        return self._corner_radius

    @corner_radius.setter
    def corner_radius(self, value: Union[CornerRadii, float, str, Sequence[float]]) -> None:
        self._corner_radius = CornerRadii.coerce(value)
        self.invalidate()

    @property
    def corner_smoothing(self) -> float:
        return self._corner_smoothing

    @corner_smoothing.setter
    def corner_smoothing(self, value: float) -> None:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise TypeError(f"Unsupported corner_smoothing type: {type(value).__name__}")
        self._corner_smoothing = float(value)
        self.invalidate()

    @property
    def preserve_smoothing(self) -> bool:
        return self._preserve_smoothing

    @preserve_smoothing.setter
    def preserve_smoothing(self, value: bool) -> None:
        if not isinstance(value, bool):
            raise TypeError(f"Unsupported preserve_smoothing type: {type(value).__name__}")
        self._preserve_smoothing = value
        self.invalidate()

    # -------------------------------------------------------------------------
    # Style inputs
    # -------------------------------------------------------------------------
    @property
    def border_thickness(self) -> float:
        return self._border_thickness

    @border_thickness.setter
    def border_thickness(self, value: float) -> None:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise TypeError(f"Unsupported border_thickness type: {type(value).__name__}")
        self._border_thickness = float(value)

    @property
    def border_color(self) -> Optional[ColorSpec]:
        return self._border_color

    @border_color.setter
    def border_color(self, value: Optional[ColorSpec]) -> None:
        self._border_color = self._check_color(value)

    @property
    def background(self) -> Optional[ColorSpec]:
        return self._background

    @background.setter
    def background(self, value: Optional[ColorSpec]) -> None:
        self._background = self._check_color(value)

    @staticmethod
    def _check_color(value: Optional[ColorSpec]) -> Optional[ColorSpec]:
        if value is not None and not is_color_like(value):
            raise ValueError(f"Invalid color: {value!r}")
        return value

    # -------------------------------------------------------------------------
    # Outline
    # -------------------------------------------------------------------------
    @property
    def is_dirty(self) -> bool:
        return self._dirty

    def invalidate(self) -> None:
        """Drop the cached outline; the next access rebuilds it."""
        self._dirty = True
        self._path = None
        self._mpl_path = None

    @property
    def path(self) -> SquirclePath:
        if self._dirty or self._path is None:
            logging.getLogger(LOGGER_NAME).debug(f"Rebuilding outline for bounds {self._bounds}.")
            self._path = squircle_path(
                self._bounds,
                self._corner_radius,
                self._corner_smoothing,
                self._preserve_smoothing,
            )
            self._mpl_path = None
            self._dirty = False
        return self._path

    @property
    def mpl_path(self) -> mplPath:
        path = self.path
        if self._mpl_path is None:
            self._mpl_path = to_mpl_path(path)
        return self._mpl_path

    @property
    def svg(self) -> str:
        return self.path.to_svg(DEFAULTS.precision)

    def hit_test(self, x: float, y: float) -> bool:
        """Bounds containment; the rounded corners are not excluded."""
        return self._bounds.contains(x, y)

    # -------------------------------------------------------------------------
    # Metadata
    # -------------------------------------------------------------------------
    def make_geometry(self) -> Squircle:
        """Refresh the metadata snapshot of the current inputs and outline."""
        b = self._bounds
        self._meta = {
            "bounds": [b.left, b.top, b.width, b.height],
            "corner_radius": list(self._corner_radius.as_tuple()),
            "corner_smoothing": self._corner_smoothing,
            "preserve_smoothing": self._preserve_smoothing,
            "border_thickness": self._border_thickness,
            "border_color": self._border_color,
            "background": self._background,
            "empty": self.path.is_empty,
            "svg": self.svg,
        }
        return self

    # -------------------------------------------------------------------------
    # Drawing
    # -------------------------------------------------------------------------
    def draw(self, ax: Optional[Axes] = None) -> None:
        """
        Render the squircle onto a Matplotlib axis.

        The fill is drawn first. A border of `border_thickness` data units is
        stroked at twice that width and clipped to the outline, so the visible
        border lies fully inside the shape. Nothing is added for an empty
        outline.
        """
        ax = self._resolve_ax(ax)
        logger = logging.getLogger(LOGGER_NAME)

        if self.path.is_empty:
            logger.debug(f"draw(): empty outline for bounds {self._bounds}, nothing drawn.")
            return

        self.make_geometry()
        fill = PathPatch(
            self.mpl_path,
            facecolor=self._background if self._background is not None else "none",
            edgecolor="none",
            linewidth=0,
        )
        ax.add_patch(fill)
        self.patches[id(fill)] = fill

        if self._border_thickness > 0 and self._border_color is not None:
            border = PathPatch(
                self.mpl_path,
                facecolor="none",
                edgecolor=self._border_color,
                linewidth=self._data_to_points(ax, 2 * self._border_thickness),
                joinstyle="round",
            )
            ax.add_patch(border)
            border.set_clip_path(fill)
            self.patches[id(border)] = border

        logger.debug(f"draw(): added {len(self.patches)} patch(es).")

    def clip(self, artist: Artist, ax: Optional[Axes] = None) -> Artist:
        """Clip `artist` to the squircle outline and return it.

        Artists clipped to an empty outline are hidden until a later call
        clips them to a non-empty one.
        """
        if not isinstance(artist, Artist):
            raise TypeError(f"Expected a Matplotlib Artist, got {type(artist).__name__}.")
        ax = self._resolve_ax(ax if ax is not None else artist.axes)

        if self.path.is_empty:
            if artist.get_visible():
                self._hidden_artists.add(artist)
            artist.set_visible(False)
            return artist

        if artist in self._hidden_artists:
            self._hidden_artists.discard(artist)
            artist.set_visible(True)

        clip_patch = PathPatch(self.mpl_path, transform=ax.transData)
        artist.set_clip_path(clip_patch)
        return artist

    @staticmethod
    def _data_to_points(ax: Axes, length: float) -> float:
        """Convert a data-space length to points using the current view limits."""
        (x0, y0), (x1, y1) = ax.transData.transform([(0.0, 0.0), (1.0, 1.0)])
        pixels_per_unit = min(abs(x1 - x0), abs(y1 - y0))
        return length * pixels_per_unit * 72.0 / ax.figure.dpi
