# vspace/color_maps.py

"""
================================================================================
COLOR CLASSIFICATION UTILITIES
================================================================================
This module converts normalized noise values [0, 1] into RGBA colors under one
of two policies:

- 'grayscale': r = g = b = round(255 * value).
- 'banded':    an ordered table of (upper_bound, name, RGB) entries; the first
               band whose upper bound is greater than the value applies.

Alpha is always 255. Like the rest of the engine it has no dependency on
Pygame, so the viewer and the offline frame exporter share it.
================================================================================
"""
import numpy as np

from . import config as DEFAULTS
from .config import ConfigurationError


def validate_bands(bands: list):
    """
    Checks that a band table covers every value in [0, 1] exactly once.

    Raises:
        ConfigurationError: If the table is empty, its bounds are not strictly
            ascending, its last bound does not exceed 1.0, or a color is not
            three channels in [0, 255].
    """
    if not bands:
        raise ConfigurationError("Band table must contain at least one band.")

    previous = None
    for bound, name, color in bands:
        if previous is not None and not bound > previous:
            raise ConfigurationError(
                f"Band '{name}' has upper bound {bound}, which does not exceed the previous bound {previous}."
            )
        if len(color) != 3 or not all(
            isinstance(channel, (int, np.integer)) and not isinstance(channel, bool) and 0 <= channel <= 255
            for channel in color
        ):
            raise ConfigurationError(f"Band '{name}' has an invalid RGB color {color!r}.")
        previous = bound

    if not previous > 1.0:
        raise ConfigurationError(
            f"The last band's upper bound must exceed 1.0 so every value is covered, got {previous}."
        )


def create_band_lut(bands: list) -> tuple:
    """
    Splits a band table into a bounds array and an RGBA color LUT.

    Returns:
        tuple: (bounds, colors) where bounds is float64 of shape (n,) and
        colors is uint8 of shape (n, 4). colors[i] belongs to bounds[i].
    """
    validate_bands(bands)
    bounds = np.array([bound for bound, _, _ in bands], dtype=np.float64)
    colors = np.array(
        [tuple(color) + (DEFAULTS.ALPHA_OPAQUE,) for _, _, color in bands],
        dtype=np.uint8,
    )
    return bounds, colors


def band_index(value: float, bands: list = None) -> int:
    """Returns the index of the band a value falls into."""
    if bands is None:
        bands = DEFAULTS.TERRAIN_BANDS
    else:
        validate_bands(bands)
    value = min(max(value, 0.0), 1.0)
    for i, (bound, _, _) in enumerate(bands):
        if bound > value:
            return i
    raise ConfigurationError(f"No band covers value {value}.")


def classify(value: float, mode: str, bands: list = None) -> tuple:
    """
    Converts one normalized value into an (r, g, b, a) tuple.

    Values outside [0, 1] are clamped first.
    """
    value = min(max(value, 0.0), 1.0)
    if mode == DEFAULTS.MODE_GRAYSCALE:
        gray = int(round(255 * value))
        return gray, gray, gray, DEFAULTS.ALPHA_OPAQUE
    if mode == DEFAULTS.MODE_BANDED:
        index = band_index(value, bands)
        r, g, b = (DEFAULTS.TERRAIN_BANDS if bands is None else bands)[index][2]
        return r, g, b, DEFAULTS.ALPHA_OPAQUE
    raise ConfigurationError(f"Unknown color mode '{mode}'. Expected one of {DEFAULTS.COLOR_MODES}.")


def get_grayscale_color_array(field: np.ndarray) -> np.ndarray:
    """Converts a normalized field into a grayscale RGBA array of shape (h, w, 4)."""
    gray_values = np.rint(np.clip(field, 0.0, 1.0) * 255).astype(np.uint8)
    alpha = np.full(gray_values.shape, DEFAULTS.ALPHA_OPAQUE, dtype=np.uint8)
    return np.stack([gray_values, gray_values, gray_values, alpha], axis=-1)


def get_banded_color_array(field: np.ndarray, band_lut: tuple) -> np.ndarray:
    """
    Converts a normalized field into banded RGBA colors using a pre-computed
    (bounds, colors) LUT from create_band_lut().
    """
    bounds, colors = band_lut
    # side='right' yields the first bound strictly greater than the value.
    indices = np.searchsorted(bounds, np.clip(field, 0.0, 1.0), side='right')
    return colors[indices]


def get_color_array(field: np.ndarray, mode: str, band_lut: tuple = None) -> np.ndarray:
    """
    Converts a whole noise field into a uint8 RGBA array of shape (h, w, 4).

    Agrees with classify() pixel for pixel.
    """
    if mode == DEFAULTS.MODE_GRAYSCALE:
        return get_grayscale_color_array(field)
    if mode == DEFAULTS.MODE_BANDED:
        if band_lut is None:
            band_lut = create_band_lut(DEFAULTS.TERRAIN_BANDS)
        return get_banded_color_array(field, band_lut)
    raise ConfigurationError(f"Unknown color mode '{mode}'. Expected one of {DEFAULTS.COLOR_MODES}.")
