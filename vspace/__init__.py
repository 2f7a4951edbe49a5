# vspace/__init__.py

# This file makes the 'vspace' directory a Python package.
# It also defines the public API of the noise engine.

from .config import ConfigurationError, build_settings
from .noise import OctaveParameters, gradient, lattice_noise, fractal_noise
from .sampler import FieldSampler, sample_field
from .color_maps import classify, get_color_array
from .state import RenderState
from .renderer import FrameRenderer, to_rgba_bytes

__all__ = [
    "ConfigurationError", "build_settings",
    "OctaveParameters", "gradient", "lattice_noise", "fractal_noise",
    "FieldSampler", "sample_field",
    "classify", "get_color_array",
    "RenderState",
    "FrameRenderer", "to_rgba_bytes",
]
