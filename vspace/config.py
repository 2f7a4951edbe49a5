# vspace/config.py

"""
================================================================================
INTERNAL DEFAULT CONFIGURATION
================================================================================
This module contains the default, fallback internal constants for the noise
engine and the viewer. These values are used if they are not explicitly
provided by the user's configuration.

DO NOT MODIFY THIS FILE FOR A SPECIFIC RUN.
Instead, pass a configuration dictionary (usually loaded from config.json)
to build_settings().
================================================================================
"""


class ConfigurationError(ValueError):
    """Raised when a parameter cannot produce a well-defined noise field."""


# --- Fractal Noise ---
DEFAULT_OCTAVES = 4
DEFAULT_PERSISTENCE = 0.5
DEFAULT_LACUNARITY = 2.0

# Weight curve used between lattice corners. 'linear' is the reference look
# (faceted, visible creases along cell edges). 'smoothstep' and 'quintic'
# ease the weight and change the picture.
INTERPOLATION_MODES = ("linear", "smoothstep", "quintic")
DEFAULT_INTERPOLATION = "linear"

# --- Zoom (pixels per lattice cell) ---
DEFAULT_SCALE = 64.0
# Anything below this is treated as this value before dividing.
MIN_SCALE = 1e-3
MAX_SCALE = 4096.0
ZOOM_STEP = 0.1

# --- Scroll (pixels per second, applied to both axes) ---
DEFAULT_SPEED = 20.0
SPEED_STEP = 10.0
MAX_SPEED = 1000.0

# --- Color Modes ---
MODE_GRAYSCALE = "grayscale"
MODE_BANDED = "banded"
COLOR_MODES = (MODE_GRAYSCALE, MODE_BANDED)
DEFAULT_MODE = MODE_BANDED

# Every pixel is fully opaque.
ALPHA_OPAQUE = 255

# --- Terrain Bands ---
# (upper_bound, name, RGB). The first band whose bound is greater than the
# value wins, so the table must be strictly ascending and the last bound must
# be above 1.0.
TERRAIN_BANDS = [
    (0.49, "deep", (18, 52, 120)),
    (0.52, "shallow", (64, 134, 200)),
    (0.56, "lowland", (84, 156, 62)),
    (0.58, "highland", (142, 160, 78)),
    (0.65, "mountain", (120, 110, 100)),
    (float("inf"), "snow", (245, 245, 250)),
]

# --- Display ---
DEFAULT_SCREEN_WIDTH = 640
DEFAULT_SCREEN_HEIGHT = 480
DEFAULT_WINDOW_TITLE = "vspace"
DEFAULT_TICK_RATE = 60


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def build_settings(user_config: dict) -> dict:
    """
    Merges user overrides over the defaults and validates the result.

    Args:
        user_config (dict): Parameters that override the internal defaults.
            Unknown keys are ignored.

    Returns:
        dict: A complete, validated settings dictionary.

    Raises:
        ConfigurationError: If any merged value is out of range.
    """
    settings = {
        'octaves': user_config.get('octaves', DEFAULT_OCTAVES),
        'persistence': user_config.get('persistence', DEFAULT_PERSISTENCE),
        'lacunarity': user_config.get('lacunarity', DEFAULT_LACUNARITY),
        'interpolation': user_config.get('interpolation', DEFAULT_INTERPOLATION),
        'scale': user_config.get('scale', DEFAULT_SCALE),
        'speed': user_config.get('speed', DEFAULT_SPEED),
        'mode': user_config.get('mode', DEFAULT_MODE),
        'bands': user_config.get('bands', TERRAIN_BANDS),
    }

    if not isinstance(settings['bands'], (list, tuple)):
        raise ConfigurationError(f"Bands must be a list of band entries, got {settings['bands']!r}.")
    for entry in settings['bands']:
        if not isinstance(entry, (list, tuple)) or len(entry) != 3 \
                or not isinstance(entry[2], (list, tuple)) or len(entry[2]) != 3:
            raise ConfigurationError(
                f"Band entries must be [upper_bound, name, [r, g, b]], got {entry!r}."
            )
        if entry[0] is not None and not _is_number(entry[0]):
            raise ConfigurationError(f"Band bound must be a number or null, got {entry[0]!r}.")

    # JSON has no infinity literal; a band bound of null means "everything above".
    settings['bands'] = [
        (float("inf") if bound is None else float(bound), name, tuple(color))
        for bound, name, color in settings['bands']
    ]

    if settings['mode'] not in COLOR_MODES:
        raise ConfigurationError(
            f"Unknown color mode '{settings['mode']}'. Expected one of {COLOR_MODES}."
        )
    if not _is_number(settings['scale']) or settings['scale'] <= 0:
        raise ConfigurationError(f"Scale must be a positive number, got {settings['scale']!r}.")
    if not _is_number(settings['speed']):
        raise ConfigurationError(f"Speed must be a number, got {settings['speed']!r}.")
    if abs(settings['speed']) > MAX_SPEED:
        raise ConfigurationError(f"Speed must be within +/-{MAX_SPEED}, got {settings['speed']!r}.")

    # Both modules import this one, so they are imported here.
    from .noise import OctaveParameters
    from .color_maps import validate_bands

    OctaveParameters(
        settings['octaves'],
        settings['persistence'],
        settings['lacunarity'],
        settings['interpolation'],
    )
    validate_bands(settings['bands'])
    return settings
