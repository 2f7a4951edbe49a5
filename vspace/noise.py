# vspace/noise.py

"""
================================================================================
NOISE GENERATION UTILITIES
================================================================================
This module provides 2D gradient (Perlin-style) noise and its fractal
combination. It is designed to be a pure, stateless utility.

Data Contract:
---------------
- Inputs:
    - ix, iy: Integer lattice coordinates (any magnitude; only the low 32
      bits take part in hashing).
    - x, y: Real sample coordinates.
    - OctaveParameters: count, persistence, lacunarity, interpolation.
- Outputs:
    - gradient(): A unit 2D vector.
    - lattice_noise(): A float, approximately in [-1, 1]. Exactly 0 on
      integer lattice points.
    - fractal_noise(): A float in [0, 1].
- Side Effects: None. No random-number-generator state is involved, so the
  field is identical across runs, call orders and threads.
================================================================================
"""

import math
import numpy as np
from numba import njit

from .config import (
    ConfigurationError,
    DEFAULT_INTERPOLATION,
    DEFAULT_LACUNARITY,
    DEFAULT_OCTAVES,
    DEFAULT_PERSISTENCE,
    INTERPOLATION_MODES,
)

# --- Hash Constants ---
_WORD_MASK = 0xFFFFFFFF
_WORD_SIZE = 4294967296.0
_HALF_WORD_BITS = 16
_HASH_MUL_A = 3284157443
_HASH_MUL_B = 1911520717
_HASH_MUL_C = 2048419325
# Maps a signed 32-bit word linearly onto [-pi, pi).
_RADIANS_PER_UNIT = math.pi / 2147483648.0

# Interpolation codes, indexed like config.INTERPOLATION_MODES.
INTERP_LINEAR = 0
INTERP_SMOOTHSTEP = 1
INTERP_QUINTIC = 2


@njit
def _rotate_half_word(v):
    return ((v << _HALF_WORD_BITS) | (v >> _HALF_WORD_BITS)) & _WORD_MASK


@njit
def _hash_word(ix, iy):
    a = ix & _WORD_MASK
    b = iy & _WORD_MASK
    a = (a * _HASH_MUL_A) & _WORD_MASK
    b ^= _rotate_half_word(a)
    b = (b * _HASH_MUL_B) & _WORD_MASK
    a ^= _rotate_half_word(b)
    a = (a * _HASH_MUL_C) & _WORD_MASK
    return a


@njit
def _gradient_vector(ix, iy):
    word = _hash_word(ix, iy)
    if word >= 0x80000000:
        word -= 0x100000000
    angle = word * _RADIANS_PER_UNIT
    return math.cos(angle), math.sin(angle)


def hash_lattice(ix: int, iy: int) -> int:
    """
    Scrambles a lattice coordinate into an unsigned 32-bit word.

    Multiply, rotate by half a word, XOR, twice over, so that a one-bit
    change in either input flips roughly half of the output bits.
    """
    # The compiled kernel takes int64; the low word is all the hash reads.
    return int(_hash_word(int(ix) & _WORD_MASK, int(iy) & _WORD_MASK))


def gradient(ix: int, iy: int) -> tuple:
    """Returns the unit gradient vector pinned to lattice vertex (ix, iy)."""
    return _gradient_vector(int(ix) & _WORD_MASK, int(iy) & _WORD_MASK)


@njit
def _lerp(a, b, w):
    "Linear interpolation, clamped to the end points."
    if w < 0.0:
        return a
    if w > 1.0:
        return b
    return a + (b - a) * w


@njit
def _weight(t, interpolation):
    if interpolation == INTERP_SMOOTHSTEP:
        return t * t * (3.0 - 2.0 * t)
    if interpolation == INTERP_QUINTIC:
        # 6t^5 - 15t^4 + 10t^3
        return t * t * t * (t * (t * 6.0 - 15.0) + 10.0)
    return t


@njit
def lattice_noise(x, y, interpolation=INTERP_LINEAR):
    """
    Evaluates gradient noise at a real-valued point.

    The four corners of the enclosing lattice cell each contribute the dot
    product of their gradient with the displacement from the corner to the
    point. Those are blended along x on both rows, then along y.
    """
    fx0 = np.floor(x)
    fy0 = np.floor(y)
    sx = x - fx0
    sy = y - fy0

    # fmod is exact, so the low 32 bits of the lattice index survive even
    # when the coordinate is too large for a machine integer.
    ix0 = int(np.fmod(fx0, _WORD_SIZE))
    iy0 = int(np.fmod(fy0, _WORD_SIZE))
    ix1 = ix0 + 1
    iy1 = iy0 + 1

    gx, gy = _gradient_vector(ix0, iy0)
    n00 = gx * sx + gy * sy
    gx, gy = _gradient_vector(ix1, iy0)
    n10 = gx * (sx - 1.0) + gy * sy
    gx, gy = _gradient_vector(ix0, iy1)
    n01 = gx * sx + gy * (sy - 1.0)
    gx, gy = _gradient_vector(ix1, iy1)
    n11 = gx * (sx - 1.0) + gy * (sy - 1.0)

    wx = _weight(sx, interpolation)
    wy = _weight(sy, interpolation)
    top = _lerp(n00, n10, wx)
    bottom = _lerp(n01, n11, wx)
    return _lerp(top, bottom, wy)


@njit
def fractal_noise_at(x, y, octaves, persistence, lacunarity, interpolation):
    """
    Sums octaves of lattice noise into a single value in [0, 1].

    Each octave is mapped into [0, 1] on its own before it is weighted; the
    weighted sum is then divided by the total weight.
    """
    total = 0.0
    weight_sum = 0.0
    weight = 1.0
    frequency = 1.0

    for _ in range(octaves):
        octave_noise = lattice_noise(x * frequency, y * frequency, interpolation)
        total += weight * (octave_noise * 0.5 + 0.5)
        weight_sum += weight
        weight *= persistence
        frequency *= lacunarity

    value = total / weight_sum
    return min(max(value, 0.0), 1.0)


class OctaveParameters:
    """Validated fractal settings, constant for the duration of a frame."""

    def __init__(self, count=DEFAULT_OCTAVES, persistence=DEFAULT_PERSISTENCE,
                 lacunarity=DEFAULT_LACUNARITY, interpolation=DEFAULT_INTERPOLATION):
        if isinstance(count, bool) or not isinstance(count, (int, np.integer)):
            raise ConfigurationError(f"Octave count must be an integer, got {count!r}.")
        if count < 1:
            raise ConfigurationError(f"Octave count must be at least 1, got {count}.")
        for name, value in (('Persistence', persistence), ('Lacunarity', lacunarity)):
            if isinstance(value, bool) or not isinstance(value, (int, float, np.floating)):
                raise ConfigurationError(f"{name} must be a number, got {value!r}.")
        if not 0.0 < persistence < 1.0:
            raise ConfigurationError(f"Persistence must be in (0, 1), got {persistence!r}.")
        if not lacunarity > 1.0:
            raise ConfigurationError(f"Lacunarity must be greater than 1, got {lacunarity!r}.")
        if interpolation not in INTERPOLATION_MODES:
            raise ConfigurationError(
                f"Unknown interpolation '{interpolation}'. Expected one of {INTERPOLATION_MODES}."
            )

        self.count = int(count)
        self.persistence = float(persistence)
        self.lacunarity = float(lacunarity)
        self.interpolation = interpolation
        self.interpolation_code = INTERPOLATION_MODES.index(interpolation)

    @classmethod
    def from_settings(cls, settings: dict) -> 'OctaveParameters':
        return cls(
            settings['octaves'],
            settings['persistence'],
            settings['lacunarity'],
            settings['interpolation'],
        )

    def __eq__(self, other):
        if not isinstance(other, OctaveParameters):
            return NotImplemented
        return (self.count, self.persistence, self.lacunarity, self.interpolation) == \
               (other.count, other.persistence, other.lacunarity, other.interpolation)

    def __repr__(self):
        return (f"OctaveParameters(count={self.count}, persistence={self.persistence}, "
                f"lacunarity={self.lacunarity}, interpolation='{self.interpolation}')")


def fractal_noise(x: float, y: float, params: OctaveParameters) -> float:
    """Fractal noise at a single point, in [0, 1]."""
    return fractal_noise_at(
        float(x), float(y),
        params.count, params.persistence, params.lacunarity,
        params.interpolation_code,
    )
