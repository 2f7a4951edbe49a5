# vspace/renderer.py

"""
================================================================================
FRAME RENDERER
================================================================================
Turns one frame's inputs into a pixel buffer ready for texture upload.

Data Contract:
---------------
- Inputs (on initialization):
    - settings (dict): Output of config.build_settings().
    - logger: A configured Python logging object for runtime messages.
- Inputs (per frame):
    - width, height: Output size in pixels.
    - frame_state: A RenderState snapshot taken at the start of the frame.
    - elapsed: Seconds since the previous frame.
- Outputs:
    - render(): uint8 array of shape (height, width, 4), RGBA, row-major.
    - to_rgba_bytes(): The same pixels as width * height * 4 bytes.
- Side Effects: Advances the sampler's scroll offset; logs frame timings at
  DEBUG level.
- Invariants: The noise field is built fresh every frame and dropped once its
  colors are derived.
================================================================================
"""

import logging
import time
import numpy as np

from . import color_maps
from .noise import OctaveParameters
from .sampler import FieldSampler
from .state import FrameState


class FrameRenderer:
    """Advances the scroll, samples the field and colors it, once per frame."""

    def __init__(self, settings: dict, logger: logging.Logger):
        self.logger = logger
        self.params = OctaveParameters.from_settings(settings)
        self.sampler = FieldSampler(self.params)
        # Pre-compute the band LUT once rather than every frame.
        self.band_lut = color_maps.create_band_lut(settings['bands'])
        self.logger.info(f"FrameRenderer initialized with {self.params}")

    def render(self, width: int, height: int, frame_state: FrameState, elapsed: float) -> np.ndarray:
        """
        Produces the RGBA pixels for one frame.

        Args:
            width (int): Frame width in pixels.
            height (int): Frame height in pixels.
            frame_state (FrameState): Mode, speed and scale for this frame.
            elapsed (float): Seconds since the previous frame.

        Returns:
            np.ndarray: uint8 array of shape (height, width, 4).
        """
        start_time = time.perf_counter()

        self.sampler.advance(elapsed, frame_state.speed)
        field = self.sampler.sample(width, height, frame_state.scale)
        colors = color_maps.get_color_array(field, frame_state.mode, self.band_lut)

        self.logger.debug(
            f"Rendered {width}x{height} frame in {(time.perf_counter() - start_time) * 1000:.1f} ms "
            f"at offset ({self.sampler.offset_x:.1f}, {self.sampler.offset_y:.1f})"
        )
        return colors

    def reset_scroll(self):
        self.sampler.reset()
        self.logger.info("Scroll offset reset to origin.")


def to_rgba_bytes(colors: np.ndarray) -> bytes:
    """Flattens an (h, w, 4) RGBA array into row-major bytes."""
    return np.ascontiguousarray(colors, dtype=np.uint8).tobytes()
