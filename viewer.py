# FOLDER: /

# viewer.py

"""
================================================================================
LIVE NOISE VIEWER
================================================================================
Opens a window and redraws a scrolling fractal-noise field every frame.

Controls:
    ESC          Quit
    M            Cycle color mode (grayscale / banded)
    UP / DOWN    Increase / decrease scroll speed
    R            Reverse scroll direction
    SPACE        Pause / resume scrolling
    + / -, wheel Zoom in / out
    HOME         Reset scroll offset to the origin
    F12          Save a PNG screenshot

Usage:
    python viewer.py [--config path/to/config.json]
================================================================================
"""

import os
import sys
import json
import logging
import logging.config
import argparse
from datetime import datetime
import pygame
import pygame_gui
from PIL import Image

from vspace import config as DEFAULTS
from vspace.config import ConfigurationError, build_settings
from vspace.renderer import FrameRenderer, to_rgba_bytes
from vspace.state import RenderState

# --- Application Constants (Rule 1) ---
BASE_DIR = os.path.abspath(os.path.dirname(__file__))
DEFAULT_CONFIG_PATH = os.path.join(BASE_DIR, 'config.json')
LOGGING_CONFIG_PATH = os.path.join(BASE_DIR, 'logging_config.json')
LOG_DIR = os.path.join(BASE_DIR, 'logs')

HUD_WIDTH = 460
HUD_HEIGHT = 25
HUD_PADDING = 5
# The HUD text is refreshed at most this often, in frames, to keep the FPS readable.
HUD_REFRESH_FRAMES = 15


class Application:
    """The main application class for the live noise viewer."""

    def __init__(self, config_path: str = DEFAULT_CONFIG_PATH):
        self._setup_logging()
        self.logger.info("Application starting.")

        self.config = self._load_config(config_path)
        try:
            self.settings = build_settings(self.config.get('noise_parameters', {}))
        except ConfigurationError as e:
            self.logger.critical(f"Invalid noise parameters in {config_path}: {e}")
            sys.exit(1)

        self._setup_pygame()

        # --- State ---
        self.render_state = RenderState.from_settings(self.settings)
        self.frame_renderer = FrameRenderer(self.settings, logger=self.logger)
        self.last_colors = None
        self.frame_count = 0
        self._hud_text = ""

        self._setup_ui()
        self._warm_up()

        self.is_running = True

    def _setup_logging(self):
        """Initializes the logging system from a config file."""
        if not os.path.exists(LOG_DIR):
            os.makedirs(LOG_DIR)

        with open(LOGGING_CONFIG_PATH, 'rt') as f:
            log_config = json.load(f)

        # Anchor the log file next to this script rather than the working directory.
        log_config['handlers']['file']['filename'] = os.path.join(LOG_DIR, 'viewer.log')

        logging.config.dictConfig(log_config)
        self.logger = logging.getLogger(__name__)

    def _load_config(self, config_path: str) -> dict:
        """Loads viewer and noise parameters from the config file."""
        self.logger.info(f"Loading configuration from {config_path}")
        try:
            with open(config_path, 'r') as f:
                return json.load(f)
        except FileNotFoundError:
            self.logger.critical(f"Configuration file not found at {config_path}. Exiting.")
            sys.exit(1)
        except json.JSONDecodeError:
            self.logger.critical(f"Error decoding JSON from {config_path}. Exiting.")
            sys.exit(1)

    def _setup_pygame(self):
        """Initializes Pygame and the display window."""
        pygame.init()
        display_config = self.config.get('display', {})
        self.screen_width = display_config.get('screen_width', DEFAULTS.DEFAULT_SCREEN_WIDTH)
        self.screen_height = display_config.get('screen_height', DEFAULTS.DEFAULT_SCREEN_HEIGHT)
        self.tick_rate = display_config.get('clock_tick_rate', DEFAULTS.DEFAULT_TICK_RATE)
        self.show_hud = display_config.get('show_hud', True)

        self.logger.info(f"Initializing display in Windowed mode ({self.screen_width}x{self.screen_height}).")
        self.screen = pygame.display.set_mode((self.screen_width, self.screen_height), pygame.RESIZABLE)
        pygame.display.set_caption(display_config.get('window_title', DEFAULTS.DEFAULT_WINDOW_TITLE))
        self.clock = pygame.time.Clock()

        self.logger.info("Pygame initialized successfully.")

    def _setup_ui(self):
        """Initializes the pygame_gui manager and the status label."""
        self.ui_manager = pygame_gui.UIManager((self.screen_width, self.screen_height))
        self.hud_label = pygame_gui.elements.UILabel(
            relative_rect=pygame.Rect(HUD_PADDING, HUD_PADDING, HUD_WIDTH, HUD_HEIGHT),
            text=self.render_state.describe(),
            manager=self.ui_manager
        )
        if not self.show_hud:
            self.hud_label.hide()
        self.logger.info("UI Manager initialized.")

    def _warm_up(self):
        """Renders a single pixel so the JIT compile happens before the first visible frame."""
        self.logger.info("Compiling noise kernels...")
        self.frame_renderer.render(1, 1, self.render_state.snapshot(), 0.0)
        self.logger.info("Noise kernels ready.")

    def run(self):
        """The main application loop."""
        self.logger.info("Entering main loop.")
        try:
            while self.is_running:
                elapsed = self.clock.tick(self.tick_rate) / 1000.0

                self._handle_events()
                self._draw(elapsed)

                self.ui_manager.update(elapsed)
                self.ui_manager.draw_ui(self.screen)

                pygame.display.flip()
                self.frame_count += 1

        except Exception:
            self.logger.critical("An unhandled exception occurred!", exc_info=True)
        finally:
            self.logger.info(f"Exiting application after {self.frame_count} frames.")
            pygame.quit()

    def _handle_events(self):
        """Processes user input and other events."""
        for event in pygame.event.get():
            self.ui_manager.process_events(event)

            if event.type == pygame.QUIT:
                self.is_running = False
            elif event.type == pygame.VIDEORESIZE:
                self._resize(event.w, event.h)
            elif event.type == pygame.MOUSEWHEEL:
                if event.y > 0:
                    self.render_state.zoom_in()
                elif event.y < 0:
                    self.render_state.zoom_out()
            elif event.type == pygame.KEYDOWN:
                self._handle_key(event.key)

    def _handle_key(self, key):
        state = self.render_state
        if key == pygame.K_ESCAPE:
            self.logger.info("Event: ESC key pressed. Exiting.")
            self.is_running = False
        elif key == pygame.K_m:
            state.cycle_mode()
            self.logger.info(f"Event: Color mode switched to '{state.mode}'")
        elif key == pygame.K_UP:
            state.speed_up()
            self.logger.info(f"Event: Speed set to {state.speed:.1f} px/s")
        elif key == pygame.K_DOWN:
            state.slow_down()
            self.logger.info(f"Event: Speed set to {state.speed:.1f} px/s")
        elif key == pygame.K_r:
            state.reverse()
            self.logger.info(f"Event: Scroll reversed, speed {state.speed:.1f} px/s")
        elif key == pygame.K_SPACE:
            state.toggle_pause()
            self.logger.info("Event: Scrolling paused." if state.is_paused else "Event: Scrolling resumed.")
        elif key in (pygame.K_EQUALS, pygame.K_PLUS, pygame.K_KP_PLUS):
            state.zoom_in()
            self.logger.info(f"Event: Zoomed in, scale {state.scale:.2f}")
        elif key in (pygame.K_MINUS, pygame.K_KP_MINUS):
            state.zoom_out()
            self.logger.info(f"Event: Zoomed out, scale {state.scale:.2f}")
        elif key == pygame.K_HOME:
            self.frame_renderer.reset_scroll()
        elif key == pygame.K_F12:
            self._save_screenshot()

    def _resize(self, width: int, height: int):
        """Follows the window size; the field is always sampled at window resolution."""
        self.screen_width, self.screen_height = max(1, width), max(1, height)
        self.screen = pygame.display.set_mode((self.screen_width, self.screen_height), pygame.RESIZABLE)
        self.ui_manager.set_window_resolution((self.screen_width, self.screen_height))
        self.logger.info(f"Event: Window resized to {self.screen_width}x{self.screen_height}")

    def _draw(self, elapsed: float):
        """Renders one frame of noise and uploads it to the screen."""
        # Read the state once so the whole frame sees the same mode, speed and scale.
        frame_state = self.render_state.snapshot()
        colors = self.frame_renderer.render(self.screen_width, self.screen_height, frame_state, elapsed)
        self.last_colors = colors

        surface = pygame.image.frombuffer(
            to_rgba_bytes(colors), (self.screen_width, self.screen_height), "RGBA"
        )
        self.screen.blit(surface, (0, 0))

        if self.frame_count % HUD_REFRESH_FRAMES == 0:
            hud_text = f"{self.render_state.describe()} | FPS: {self.clock.get_fps():.0f}"
            if hud_text != self._hud_text:
                self.hud_label.set_text(hud_text)
                self._hud_text = hud_text

    def _save_screenshot(self):
        """Saves the last rendered frame as a PNG with Pillow."""
        if self.last_colors is None:
            self.logger.warning("No frame has been rendered yet; screenshot skipped.")
            return

        output_dir = self.config.get('screenshots', {}).get('output_dir', 'screenshots')
        if not os.path.exists(output_dir):
            os.makedirs(output_dir)

        filename = f"vspace_{datetime.now().strftime('%Y-%m-%d_%H-%M-%S')}_{self.render_state.mode}.png"
        filepath = os.path.join(output_dir, filename)
        try:
            Image.fromarray(self.last_colors).save(filepath, 'PNG')
            self.logger.info(f"Screenshot saved to {filepath}")
        except OSError as e:
            self.logger.error(f"Failed to save screenshot to '{filepath}': {e}")


def main():
    parser = argparse.ArgumentParser(description="Live fractal noise viewer.")
    parser.add_argument(
        "--config",
        type=str,
        default=DEFAULT_CONFIG_PATH,
        help="Path to the JSON configuration file."
    )
    args = parser.parse_args()

    app = Application(config_path=args.config)
    app.run()


if __name__ == '__main__':
    main()
