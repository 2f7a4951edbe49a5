# bake_frames.py

"""
================================================================================
OFFLINE FRAME EXPORTER
================================================================================
This script is a command-line tool for rendering the scrolling noise field to
a numbered sequence of PNG images without opening a window. Frames advance by
a fixed timestep of 1/fps seconds, so the output is identical on every run.

Usage:
    python bake_frames.py --config config.json --frames 120 --fps 30 --output frames/
================================================================================
"""
import os
import sys
import json
import logging
import argparse
import time
from PIL import Image
from tqdm import tqdm

from vspace import config as DEFAULTS
from vspace.config import ConfigurationError, build_settings
from vspace.renderer import FrameRenderer
from vspace.state import RenderState


def save_frame(colors, directory: str, index: int) -> str:
    """Saves one (h, w, 4) RGBA frame as frame_NNNNN.png and returns its path."""
    file_path = os.path.join(directory, f"frame_{index:05d}.png")
    Image.fromarray(colors).save(file_path, 'PNG')
    return file_path


def bake_frames(config_path: str, frame_count: int, fps: float, output_dir: str,
                width: int = None, height: int = None, mode: str = None) -> int:
    """
    Loads a configuration and writes `frame_count` frames to `output_dir`.

    Returns:
        int: Process exit code (0 on success).
    """
    # 1. --- Setup Logging (Rule 2) ---
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
        stream=sys.stdout
    )
    logger = logging.getLogger("FrameBaker")

    # 2. --- Load Configuration (Rule 1) ---
    logger.info(f"Loading configuration from: {config_path}")
    try:
        with open(config_path, 'r') as f:
            config = json.load(f)
    except (FileNotFoundError, json.JSONDecodeError) as e:
        logger.critical(f"Failed to load or parse config file: {e}")
        return 1

    noise_params = dict(config.get('noise_parameters', {}))
    if mode is not None:
        noise_params['mode'] = mode
    try:
        settings = build_settings(noise_params)
    except ConfigurationError as e:
        logger.critical(f"Invalid noise parameters: {e}")
        return 1

    if frame_count < 1 or fps <= 0:
        logger.critical(f"Frame count and fps must be positive, got {frame_count} frames at {fps} fps.")
        return 1

    display_config = config.get('display', {})
    width = width or display_config.get('screen_width', DEFAULTS.DEFAULT_SCREEN_WIDTH)
    height = height or display_config.get('screen_height', DEFAULTS.DEFAULT_SCREEN_HEIGHT)

    # 3. --- Render Loop ---
    os.makedirs(output_dir, exist_ok=True)
    renderer = FrameRenderer(settings, logger=logger)
    frame_state = RenderState.from_settings(settings).snapshot()
    timestep = 1.0 / fps

    logger.info(f"Rendering {frame_count} frames of {width}x{height} in '{frame_state.mode}' mode to {output_dir}...")
    start_time = time.perf_counter()

    # The first frame is taken at the starting offset.
    elapsed = 0.0
    for index in tqdm(range(frame_count), desc="Baking Frames"):
        colors = renderer.render(width, height, frame_state, elapsed)
        save_frame(colors, output_dir, index)
        elapsed = timestep

    end_time = time.perf_counter()
    logger.info(f"Baking complete! Total time: {end_time - start_time:.2f} seconds.")
    return 0


# --- Command-Line Interface ---
def main():
    parser = argparse.ArgumentParser(description="Offline frame exporter for the noise viewer.")
    parser.add_argument("--config", type=str, default="config.json",
                        help="Path to the JSON configuration file.")
    parser.add_argument("--frames", type=int, default=60, help="Number of frames to render.")
    parser.add_argument("--fps", type=float, default=30.0, help="Playback rate the frames are timed for.")
    parser.add_argument("--output", type=str, default="frames", help="Output directory for PNG files.")
    parser.add_argument("--width", type=int, default=None, help="Frame width (defaults to the display width).")
    parser.add_argument("--height", type=int, default=None, help="Frame height (defaults to the display height).")
    parser.add_argument("--mode", choices=DEFAULTS.COLOR_MODES, default=None,
                        help="Color mode override.")
    args = parser.parse_args()

    sys.exit(bake_frames(args.config, args.frames, args.fps, args.output,
                         width=args.width, height=args.height, mode=args.mode))


if __name__ == "__main__":
    main()
