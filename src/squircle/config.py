"""
config.py - Configuration dataclasses for squircle generation and the demo.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Tuple


@dataclass(frozen=True)
class SquircleConfig:
    """Default shape parameters used when a caller does not override them."""
    corner_radius: float = 20.0
    corner_smoothing: float = 0.6  # ios-like
    preserve_smoothing: bool = False
    border_thickness: float = 0.0
    precision: int = 4  # decimals in serialized path strings


@dataclass(frozen=True)
class DemoConfig:
    """Immutable configuration for the rendering demo."""
    logger_level: int = logging.INFO
    img_size: Tuple[int, int] = (400, 300)
    dpi: int = 100
    output_dir: Path = Path("./out")

    def __post_init__(self):
        object.__setattr__(self, "output_dir", Path(self.output_dir))
        self.output_dir.mkdir(parents=True, exist_ok=True)


DEFAULTS = SquircleConfig()
