# vspace/state.py

"""
================================================================================
RENDER STATE
================================================================================
The viewer-owned, mutable settings that user input changes between frames:
color mode, scroll speed and zoom scale.

Data Contract:
---------------
- Public Methods:
    - cycle_mode(), speed_up(), slow_down(), reverse(), toggle_pause(),
      zoom_in(), zoom_out(): Input handlers. Each is a plain scalar write.
    - snapshot(): An immutable copy to be read once at the start of a frame.
- Invariants: mode is always one of config.COLOR_MODES, scale always lies in
  [MIN_SCALE, MAX_SCALE] and |speed| never exceeds MAX_SPEED.
================================================================================
"""

from collections import namedtuple

from . import config as DEFAULTS
from .config import ConfigurationError

FrameState = namedtuple("FrameState", ["mode", "speed", "scale"])


class RenderState:
    """Mode, speed and zoom, as last set by the user."""

    def __init__(self, mode: str = DEFAULTS.DEFAULT_MODE, speed: float = DEFAULTS.DEFAULT_SPEED,
                 scale: float = DEFAULTS.DEFAULT_SCALE, speed_step: float = DEFAULTS.SPEED_STEP,
                 zoom_step: float = DEFAULTS.ZOOM_STEP):
        if mode not in DEFAULTS.COLOR_MODES:
            raise ConfigurationError(f"Unknown color mode '{mode}'. Expected one of {DEFAULTS.COLOR_MODES}.")
        self.mode = mode
        self.speed = self._clamp_speed(speed)
        self.scale = self._clamp_scale(scale)
        self.speed_step = speed_step
        self.zoom_step = zoom_step
        # Speed to restore when un-pausing.
        self._paused_speed = None

    @classmethod
    def from_settings(cls, settings: dict) -> 'RenderState':
        return cls(mode=settings['mode'], speed=settings['speed'], scale=settings['scale'])

    @staticmethod
    def _clamp_speed(speed):
        return max(-DEFAULTS.MAX_SPEED, min(DEFAULTS.MAX_SPEED, float(speed)))

    @staticmethod
    def _clamp_scale(scale):
        return max(DEFAULTS.MIN_SCALE, min(DEFAULTS.MAX_SCALE, float(scale)))

    @property
    def is_paused(self) -> bool:
        return self._paused_speed is not None

    def cycle_mode(self):
        modes = DEFAULTS.COLOR_MODES
        self.mode = modes[(modes.index(self.mode) + 1) % len(modes)]

    def speed_up(self):
        self._paused_speed = None
        self.speed = self._clamp_speed(self.speed + self.speed_step)

    def slow_down(self):
        self._paused_speed = None
        self.speed = self._clamp_speed(self.speed - self.speed_step)

    def reverse(self):
        self.speed = -self.speed
        if self._paused_speed is not None:
            self._paused_speed = -self._paused_speed

    def toggle_pause(self):
        if self._paused_speed is None:
            self._paused_speed = self.speed
            self.speed = 0.0
        else:
            self.speed = self._paused_speed
            self._paused_speed = None

    def zoom_in(self):
        self.scale = self._clamp_scale(self.scale * (1 + self.zoom_step))

    def zoom_out(self):
        self.scale = self._clamp_scale(self.scale * (1 - self.zoom_step))

    def snapshot(self) -> FrameState:
        return FrameState(self.mode, self.speed, self.scale)

    def describe(self) -> str:
        paused = " (paused)" if self.is_paused else ""
        return f"Mode: {self.mode} | Speed: {self.speed:.1f} px/s{paused} | Scale: {self.scale:.2f}"
