"""
raster.py
---------

Rasterized use of the squircle outline as a clip region.

The outline is flattened to a polygon and filled with OpenCV at sub-pixel
precision, producing a mask that can be applied to any image as its alpha
channel.
"""

from __future__ import annotations

__all__ = ["ImageBGR", "ImageBGRA", "Mask", "squircle_mask", "clip_image"]

import logging
from typing import TypeAlias, Union

import cv2
import numpy as np
from numpy.typing import NDArray

from .config import DEFAULTS
from .geometry import CornerRadii, Rect
from .logging_utils import LOGGER_NAME
from .mpl_path_utils import flatten_path, to_mpl_path
from .path_builder import squircle_path

ImageBGR:  TypeAlias = NDArray[np.uint8]  # (H, W, 3) BGR order
ImageBGRA: TypeAlias = NDArray[np.uint8]  # (H, W, 4) BGRA order
Mask:      TypeAlias = NDArray[np.uint8]  # (H, W) 0 outside, 255 inside

SUBPIXEL_BITS = 4


def squircle_mask(
        width              : int,
        height             : int,
        radii              : Union[CornerRadii, float, str, tuple] = DEFAULTS.corner_radius,
        corner_smoothing   : float = DEFAULTS.corner_smoothing,
        preserve_smoothing : bool  = DEFAULTS.preserve_smoothing,
        samples_per_curve  : int   = 16,
        antialias          : bool  = True,
    ) -> Mask:
    """Render a squircle filling a `width` x `height` canvas into a mask.

    Returns:
        uint8 mask of shape (height, width). All zeros when the size is
        degenerate (negative sizes are treated as zero).
    """
    w, h = max(0, int(width)), max(0, int(height))
    mask = np.zeros((h, w), dtype=np.uint8)

    path = squircle_path(Rect.from_size(w, h), radii, corner_smoothing, preserve_smoothing)
    if path.is_empty:
        logging.getLogger(LOGGER_NAME).debug(f"squircle_mask(): degenerate size {w}x{h}.")
        return mask

    scale = 1 << SUBPIXEL_BITS
    polygons = [
        np.round((poly - 0.5) * scale).astype(np.int32)  # OpenCV samples at pixel centers
        for poly in flatten_path(to_mpl_path(path), samples_per_curve)
    ]
    cv2.fillPoly(
        mask, polygons, 255,
        lineType=cv2.LINE_AA if antialias else cv2.LINE_8,
        shift=SUBPIXEL_BITS,
    )
    return mask


def clip_image(image: ImageBGR, mask: Mask) -> ImageBGRA:
    """Attach `mask` as the alpha channel of `image`.

    Accepts BGR or BGRA input; an existing alpha channel is multiplied by the
    mask so previously transparent pixels stay transparent.

    Raises:
        TypeError: If inputs are not NumPy arrays.
        ValueError: On mismatched sizes or an unsupported channel count.
    """
    if not isinstance(image, np.ndarray) or not isinstance(mask, np.ndarray):
        raise TypeError(
            f"image: {type(image).__name__}, mask: {type(mask).__name__}; "
            "both must be numpy arrays."
        )
    if image.shape[:2] != mask.shape[:2]:
        raise ValueError(f"Image size {image.shape[:2]} does not match mask size {mask.shape[:2]}.")

    if image.ndim == 3 and image.shape[2] == 3:
        bgra = cv2.cvtColor(image, cv2.COLOR_BGR2BGRA)
        bgra[..., 3] = mask
    elif image.ndim == 3 and image.shape[2] == 4:
        bgra = image.copy()
        bgra[..., 3] = (image[..., 3].astype(np.uint16) * mask // 255).astype(np.uint8)
    else:
        raise ValueError(f"Expected a BGR or BGRA image, got shape {image.shape}.")
    return bgra
