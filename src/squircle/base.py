"""
base.py
-------

Defines the abstract base class for drawable shapes.
"""

from __future__ import annotations

import copy
import json
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from matplotlib.axes import Axes
from matplotlib.patches import PathPatch

from .logging_utils import LOGGER_NAME


class Shape(ABC):
    """
    Abstract base class for drawable shapes bound to an optional Matplotlib axis.
    """

    def __init__(self, ax: Optional[Axes] = None) -> None:
        """
        Args:
            ax (matplotlib.axes.Axes, optional): Default target axis for `draw()`.
        """
        self._ax: Optional[Axes] = None
        if ax is not None:
            self.ax = ax
        self.patches: dict[int, PathPatch] = {}
        self._meta: Dict[str, Any] = {}

    def reset(self) -> None:
        """Forget patches and metadata produced by earlier draws."""
        logging.getLogger(LOGGER_NAME).debug(f"Running {self.__class__.__name__}.reset().")
        self.patches = {}
        self._meta = {}

    # ---------------------------------------------------------------------------
    # Accessors
    # ---------------------------------------------------------------------------
    def iter_patches(self):
        yield from self.patches.values()

    @property
    def ax(self) -> Optional[Axes]:
        return self._ax

    @ax.setter
    def ax(self, ax: Axes) -> None:
        if not isinstance(ax, Axes):
            raise TypeError(f"ax must be a Matplotlib Axes, not {type(ax).__name__}")
        self._ax = ax

    @property
    def meta(self) -> Dict[str, Any]:
        """Deep copy of the shape's current metadata (safe to mutate)."""
        return copy.deepcopy(self._meta)

    @property
    def json(self) -> str:
        """JSON-encoded metadata string (sorted, compact)."""
        return json.dumps(self._meta, sort_keys=True, separators=(",", ":"), default=str)

    @property
    def jsonpp(self) -> str:
        """Return pretty-printed JSON (good for debugging / logs)."""
        return json.dumps(self._meta, sort_keys=True, indent=4, default=str)

    # -------------------------------------------------------------------------
    # Abstract interface
    # -------------------------------------------------------------------------
    @abstractmethod
    def make_geometry(self) -> Shape:
        """Refresh metadata describing the shape's geometry."""
        raise NotImplementedError

    @abstractmethod
    def draw(self, ax: Optional[Axes] = None) -> None:
        """Render the shape onto a Matplotlib axis."""
        raise NotImplementedError

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------
    def _resolve_ax(self, ax: Optional[Axes]) -> Axes:
        if ax is not None:
            self.ax = ax
        if not isinstance(self._ax, Axes):
            raise TypeError("ax is not set.")
        return self._ax

    # ---------------------------------------------------------------------------
    # Representation
    # ---------------------------------------------------------------------------
    def __repr__(self) -> str:
        """Readable summary showing available metadata keys."""
        return f"<{self.__class__.__name__} keys={list(self._meta.keys())}>"

    def __str__(self) -> str:
        """
        Return a detailed, human-readable string representation.

        Example output:
            Squircle(id=0x1f2c4fa2):
            {
                "bounds": [0.0, 0.0, 200.0, 100.0],
                "corner_smoothing": 0.6,
                ...
            }
        """
        cls_name: str = self.__class__.__name__
        obj_id: str = hex(id(self))
        return f"{cls_name}(id={obj_id}):\n{self.jsonpp}"
