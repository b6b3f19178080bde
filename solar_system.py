#!/usr/bin/env python3
"""
Solar System simulator application entry point.

What this module does
- Parses command line options and configures logging.
- Opens the Pygame viewport and, unless disabled, the Dear PyGui control panel.
- Runs the frame loop: poll input -> physics step -> draw, strictly in that
  order on a single thread.

Controls
    Space        restart the current scene
    Left/Right   previous/next scene
    F            toggle the force-vector overlay
    Esc          exit

Running
1) Install dependencies: `pip install -e .`
2) Run this module: `python solar_system.py` (or the `solar-system` script)
"""

import argparse
import logging

from solarsim.constants import TARGET_FPS, VIEW_HEIGHT, VIEW_WIDTH
from solarsim.controller import SimulationController
from solarsim.scenes import DEFAULT_SCENE_INDEX, SCENE_ORDER

# Note: rendering and ui are imported lazily in run() to avoid loading
# graphics libraries when only --help is requested

logger = logging.getLogger("solar_system")


def parse_args(argv=None):
    """Parse command line arguments."""
    scene_help = ", ".join(f"{i}={kind.label}" for i, kind in enumerate(SCENE_ORDER))
    parser = argparse.ArgumentParser(
        description='Solar System - interactive 2D gravitational N-body simulator',
    )
    parser.add_argument(
        '--width',
        type=int,
        default=VIEW_WIDTH,
        metavar='PX',
        help=f'Window width in pixels (default: {VIEW_WIDTH})',
    )
    parser.add_argument(
        '--height',
        type=int,
        default=VIEW_HEIGHT,
        metavar='PX',
        help=f'Window height in pixels (default: {VIEW_HEIGHT})',
    )
    parser.add_argument(
        '--scene',
        '-s',
        type=int,
        choices=range(len(SCENE_ORDER)),
        default=DEFAULT_SCENE_INDEX,
        metavar='INDEX',
        help=f'Starting scene ({scene_help}; default: {DEFAULT_SCENE_INDEX})',
    )
    parser.add_argument(
        '--fps',
        type=int,
        default=TARGET_FPS,
        help=f'Frame rate cap (default: {TARGET_FPS})',
    )
    parser.add_argument(
        '--show-forces',
        '-f',
        action='store_true',
        help='Start with the force-vector overlay enabled',
    )
    parser.add_argument(
        '--no-panel',
        action='store_true',
        help='Do not open the Dear PyGui control panel',
    )
    parser.add_argument(
        '--log-level',
        default='INFO',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        help='Logging verbosity (default: INFO)',
    )
    args = parser.parse_args(argv)
    if args.width <= 0 or args.height <= 0:
        parser.error('window size must be positive')
    if args.fps <= 0:
        parser.error('--fps must be positive')
    return args


def run(args) -> None:
    from solarsim.rendering import PygameRenderer

    renderer = PygameRenderer(args.width, args.height, args.fps)
    renderer.open()
    panel = None
    try:
        sim = SimulationController(
            args.width,
            args.height,
            texture_factory=renderer.create_texture,
            texture_release=renderer.release_texture,
            scene_index=args.scene,
        )
        sim.show_forces = args.show_forces

        if not args.no_panel:
            from solarsim.ui import ControlPanel
            panel = ControlPanel(sim)

        renderer.tick()
        while sim.running:
            dt = renderer.tick()
            signals = renderer.poll_input(sim)
            if panel is not None:
                signals = signals.merged(panel.poll_input())
            sim.handle_input(signals)
            if not sim.running:
                break
            sim.step(dt)
            renderer.draw(sim)
        logger.info(f"Stopped after {sim.frame_count} frames")
    finally:
        if panel is not None:
            panel.close()
        renderer.close()


def main(argv=None):
    """Main entry point."""
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )
    logger.info(f"Starting on scene {args.scene} ({SCENE_ORDER[args.scene].label})")
    try:
        run(args)
    except KeyboardInterrupt:
        logger.info("Interrupted by user.")


if __name__ == '__main__':
    main()
