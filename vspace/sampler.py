# vspace/sampler.py

"""
================================================================================
FIELD SAMPLER
================================================================================
Evaluates fractal noise over a rectangular pixel grid.

Data Contract:
---------------
- Inputs:
    - width, height: Output size in pixels.
    - scale: Pixels per lattice cell (zoom). Values below config.MIN_SCALE,
      including zero and negatives, are treated as MIN_SCALE.
    - offset: (x, y) scroll offset in pixels.
    - params: OctaveParameters.
- Outputs:
    - A float64 NumPy array of shape (height, width) with values in [0, 1].
      Row-major: field[py, px].
- Side Effects: sample_field has none. FieldSampler owns the scroll offset
  and moves it in advance().
- Invariants: Pixel (px, py) samples the plane at
  ((px - offset_x) / scale, (py - offset_y) / scale). Each pixel depends only
  on its own coordinates.
================================================================================
"""

import logging
import numpy as np
from numba import njit

from . import config as DEFAULTS
from .config import ConfigurationError
from .noise import OctaveParameters, fractal_noise_at

logger = logging.getLogger(__name__)


@njit
def _sample_grid(width, height, scale, offset_x, offset_y,
                 octaves, persistence, lacunarity, interpolation):
    field = np.empty((height, width), dtype=np.float64)
    for py in range(height):
        y = (py - offset_y) / scale
        for px in range(width):
            x = (px - offset_x) / scale
            field[py, px] = fractal_noise_at(x, y, octaves, persistence, lacunarity, interpolation)
    return field


def effective_scale(scale: float) -> float:
    """Returns the scale actually used for division."""
    if scale < DEFAULTS.MIN_SCALE:
        return DEFAULTS.MIN_SCALE
    return float(scale)


def sample_field(width: int, height: int, scale: float, offset: tuple, params: OctaveParameters) -> np.ndarray:
    """
    Generates a dense noise field for one frame.

    Args:
        width (int): Number of pixel columns.
        height (int): Number of pixel rows.
        scale (float): Zoom factor in pixels per lattice cell.
        offset (tuple): (x, y) scroll offset in pixels.
        params (OctaveParameters): Fractal settings.

    Returns:
        np.ndarray: Array of shape (height, width), values in [0, 1].
    """
    for size in (width, height):
        if isinstance(size, bool) or not isinstance(size, (int, np.integer)):
            raise ConfigurationError(f"Field dimensions must be integers, got {width!r}x{height!r}.")
    if width < 0 or height < 0:
        raise ConfigurationError(f"Field dimensions must be non-negative, got {width}x{height}.")

    used_scale = effective_scale(scale)
    if used_scale != scale:
        logger.warning(f"Scale {scale!r} is below the minimum; using {used_scale}.")

    offset_x, offset_y = offset
    return _sample_grid(
        int(width), int(height), used_scale, float(offset_x), float(offset_y),
        params.count, params.persistence, params.lacunarity, params.interpolation_code,
    )


class FieldSampler:
    """
    Owns the scroll offset and samples the field at it.

    The offset moves diagonally: both axes advance by elapsed * speed.
    """

    def __init__(self, params: OctaveParameters, offset: tuple = (0.0, 0.0)):
        self.params = params
        self.offset_x = float(offset[0])
        self.offset_y = float(offset[1])

    @property
    def offset(self) -> tuple:
        return self.offset_x, self.offset_y

    def advance(self, elapsed: float, speed: float):
        """
        Moves the offset by the distance covered in `elapsed` seconds.

        Args:
            elapsed (float): Seconds since the previous frame.
            speed (float): Pixels per second. Negative scrolls backwards,
                zero holds the field still.
        """
        step = elapsed * speed
        self.offset_x += step
        self.offset_y += step

    def reset(self):
        self.offset_x = 0.0
        self.offset_y = 0.0

    def sample(self, width: int, height: int, scale: float) -> np.ndarray:
        return sample_field(width, height, scale, self.offset, self.params)
