"""
-------
conftest.py
-------
Shared pytest fixtures for squircle tests.
"""

import pytest
import matplotlib
matplotlib.use("Agg")  # ensure headless backend for CI
import matplotlib.pyplot as plt

from squircle.geometry import CornerRadii, Rect
from squircle.path_builder import squircle_path


# -----------------------------------------------------------------------------
# Core Matplotlib fixtures
# -----------------------------------------------------------------------------
@pytest.fixture(scope="function")
def fig_ax():
    """
    Create and yield an isolated Matplotlib Figure/Axes pair.

    The figure is automatically closed after the test to avoid memory leaks.
    """
    fig, ax = plt.subplots(figsize=(4, 3))
    yield fig, ax
    plt.close(fig)


# -----------------------------------------------------------------------------
# Geometry fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def wide_rect() -> Rect:
    """The 200 x 100 reference rectangle."""
    return Rect(0.0, 0.0, 200.0, 100.0)


@pytest.fixture
def reference_path(wide_rect):
    """Reference outline: radius 20 on all corners, smoothing 0.6."""
    return squircle_path(wide_rect, CornerRadii.uniform(20), 0.6, False)
