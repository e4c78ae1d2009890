#!/usr/bin/env python3
"""
Entry point for the DFS maze animation.

Purpose: Parse CLI arguments, load configuration and the maze, run the
    search and replay it in a pygame window or in the terminal.

Inputs:
    --maze: Maze name from config/mazes.yaml
    --maze-file: Text file with maze rows (overrides --maze)
    --config: Config preset (baseline, fast, slow)
    --interval: Playback interval in ms (overrides the preset)
    --headless: Print annotations to the terminal instead of opening a window

Outputs:
    Animated solve, solve statistics logged to CSV.

Params:
    maze: str - Maze name
    config: str - Configuration preset (default: baseline)
    interval: int - Milliseconds between frames
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from nav.grid import GridError
from sim.config import ConfigError, load_config, load_maze, load_maze_file
from sim.engine import MazeAnimationEngine, MazeSession, TerminalPlayback


def positive_int(value):
    """argparse type for the playback interval."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"{value!r} is not an integer")
    if number <= 0:
        raise argparse.ArgumentTypeError(f"{value!r} must be positive")
    return number


def build_parser():
    parser = argparse.ArgumentParser(
        description="DFS Maze Walker - step-by-step search animation"
    )
    parser.add_argument(
        "--maze",
        type=str,
        default=None,
        help="Maze name from config/mazes.yaml (default: preset's maze)",
    )
    parser.add_argument(
        "--maze-file",
        type=str,
        default=None,
        help="Text file with one maze row per line",
    )
    parser.add_argument(
        "--config",
        type=str,
        default="baseline",
        choices=["baseline", "fast", "slow"],
        help="Configuration preset (default: baseline)",
    )
    parser.add_argument(
        "--interval",
        type=positive_int,
        default=None,
        help="Playback interval in milliseconds (overrides preset)",
    )
    parser.add_argument(
        "--headless",
        action="store_true",
        help="Replay in the terminal instead of a pygame window",
    )
    parser.add_argument(
        "--show-grid",
        action="store_true",
        help="Headless only: print the symbolic grid with each frame",
    )
    parser.add_argument(
        "--no-log",
        action="store_true",
        help="Do not write solve statistics to CSV",
    )
    return parser


def main(argv=None):
    """Main entry point for the maze animation."""
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args.config)
        if args.no_log:
            config['logging']['enabled'] = False

        if args.maze_file:
            rows = load_maze_file(args.maze_file)
            name = Path(args.maze_file).stem
        else:
            name = args.maze or config['maze']['name']
            rows = load_maze(name)

        interval_ms = args.interval or config['playback']['interval_ms']

        session = MazeSession(rows, name, config, preset=args.config)
    except (ConfigError, GridError) as e:
        print(f"Error: {e}")
        return 2

    try:
        if args.headless:
            TerminalPlayback(session, interval_ms, show_grid=args.show_grid).run()
            return 0
        MazeAnimationEngine(session, interval_ms=interval_ms).run()
    except KeyboardInterrupt:
        print("\nPlayback interrupted by user.")
        return 0
    except Exception as e:
        print(f"Error running animation: {e}")
        import traceback
        traceback.print_exc()
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
